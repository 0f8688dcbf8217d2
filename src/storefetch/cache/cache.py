"""In-memory TTL cache for parsed JSON responses.

Entries live in a plain ``dict`` keyed by a caller-chosen string.  Each
entry remembers when it was stored and its own TTL; an entry is fresh while
``now - stored_at < ttl`` and is deleted lazily by the read that finds it
stale.  There is no background sweep.

All operations are synchronous and never yield, so when the cache is shared
by several coroutines on one event loop no operation can interleave with
another and no locking is needed.  The cache is not thread-safe.

See Also:
    :class:`~storefetch.models.CacheConfig` -- the Pydantic model that
    controls ``default_ttl_ms`` and ``max_entries``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from storefetch.models import DEFAULT_TTL_MS, CacheConfig

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class CacheEntry:
    """A single cached value.

    Attributes:
        key: Caller-supplied identifier of the cached resource.
        value: The JSON payload returned by the wrapped fetch.
        stored_at: Clock reading (milliseconds) at insertion.
        ttl: Lifetime in milliseconds.
    """

    key: str
    value: Any
    stored_at: float
    ttl: int

    def is_fresh(self, now: float) -> bool:
        return now - self.stored_at < self.ttl


class TTLCache:
    """Process-local key/value store with per-entry expiry.

    Construct one instance and hand the same reference to every consumer
    that should share entries.  Tests construct their own isolated
    instance.

    Args:
        default_ttl: TTL in milliseconds used when :meth:`set` is called
            without one.
        max_entries: Optional bound on stored entries.  When the cache is
            full, inserting a new key evicts the oldest stored entry.
            ``None`` leaves the cache unbounded.
        now: Clock returning milliseconds.  Defaults to a monotonic clock.

    Example::

        cache = TTLCache(default_ttl=120_000)
        cache.set("admin-products-", {"products": []})
        cache.get("admin-products-")      # {'products': []}
        cache.invalidate("admin-product")  # 1
    """

    def __init__(
        self,
        default_ttl: int = DEFAULT_TTL_MS,
        max_entries: Optional[int] = None,
        now: Optional[Callable[[], float]] = None,
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._default_ttl = default_ttl
        self._max_entries = max_entries
        self._now = now or _monotonic_ms
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_config(
        cls, config: CacheConfig, now: Optional[Callable[[], float]] = None
    ) -> TTLCache:
        """Build a cache from the ``cache`` section of the global config."""
        return cls(
            default_ttl=config.default_ttl_ms,
            max_entries=config.max_entries,
            now=now,
        )

    @property
    def default_ttl(self) -> int:
        """TTL in milliseconds applied when :meth:`set` receives none."""
        return self._default_ttl

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Insert or replace the entry for *key*.

        Args:
            key: Cache key.
            value: Payload to store.
            ttl: Lifetime in milliseconds; the default TTL when ``None``.
        """
        if key in self._entries:
            # Re-inserting moves the key to the end of the eviction order.
            del self._entries[key]
        elif self._max_entries is not None and len(self._entries) >= self._max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Cache full, evicted %s", oldest)

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            stored_at=self._now(),
            ttl=ttl if ttl is not None else self._default_ttl,
        )
        logger.debug("Cached %s", key)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the fresh value for *key*, or *default*.

        A missing key and an expired key both yield *default*; an expired
        entry is removed as part of this call.
        """
        entry = self._fresh_entry(key)
        if entry is None:
            self._misses += 1
            return default
        self._hits += 1
        return entry.value

    def delete(self, key: str) -> bool:
        """Remove the entry for exactly *key*.

        Returns:
            ``True`` if an entry was removed.
        """
        return self._entries.pop(key, None) is not None

    def invalidate(self, pattern: str) -> int:
        """Remove every entry whose key contains *pattern* as a substring.

        Returns:
            The number of entries removed.
        """
        stale_keys = [key for key in self._entries if pattern in key]
        for key in stale_keys:
            del self._entries[key]
        if stale_keys:
            logger.debug("Invalidated %d entries matching %r", len(stale_keys), pattern)
        return len(stale_keys)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        ``size`` counts stored entries, including stale ones that no read
        has discovered yet.
        """
        return {
            "size": len(self._entries),
            "default_ttl_ms": self._default_ttl,
            "max_entries": self._max_entries,
            "hits": self._hits,
            "misses": self._misses,
        }

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fresh_entry(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def _fresh_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._now()):
            del self._entries[key]
            logger.debug("Expired %s", key)
            return None
        return entry
