"""Cached fetch -- a GET whose parsed result is memoized in a shared TTL cache.

:class:`CachedFetch` holds the state of one logical resource (``data``,
``loading``, ``error``) and drives its lifecycle:

1. When the fetch is disabled or has no URL, nothing happens.
2. Unless the cache is bypassed, a fresh entry under ``cache_key`` is
   served without touching the network.
3. Otherwise ``loading`` becomes ``True``, ``error`` is cleared and a single
   GET is issued.
4. On success the JSON body is cached under ``cache_key`` and becomes
   ``data``.
5. On failure (transport error or non-2xx status) ``error`` receives a
   message, the previous ``data`` is kept and nothing is cached.
6. ``loading`` ends ``False`` in every case.

Errors never propagate out of :meth:`CachedFetch.load`; callers decide
whether to :meth:`~CachedFetch.refetch`.

The GET is the only suspension point.  Overlapping loads are not
de-duplicated, cancelled or ordered: whichever response arrives last wins
``data``, and each load writes only under the cache key it started with.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from storefetch.cache import TTLCache
from storefetch.exceptions import StorefetchError
from storefetch.models import FetchOptions

if TYPE_CHECKING:
    from storefetch.client import AsyncClient

logger = logging.getLogger(__name__)

_MISSING = object()
_UNSET: Any = object()


@dataclass(frozen=True)
class FetchState:
    """Immutable snapshot of a :class:`CachedFetch`.

    Attributes:
        data: Last successfully retrieved value, ``None`` before the first.
        loading: ``True`` while a GET is in flight.
        error: Message of the last failure, ``None`` after a success.
    """

    data: Any = None
    loading: bool = False
    error: Optional[str] = None


Listener = Callable[[FetchState], None]


class CachedFetch:
    """State holder for one cached GET resource.

    Args:
        client: An entered :class:`~storefetch.client.AsyncClient`.
        cache: The shared :class:`~storefetch.cache.TTLCache`.
        url: Resource to fetch.  ``None`` makes the fetch inert.
        options: Cache key, TTL override and ``enabled`` gate.

    Example::

        products = CachedFetch(
            client, cache, "/api/admin/products",
            FetchOptions(cache_key="admin-products-", cache_expiry=120_000),
        )
        await products.load()
        if products.error:
            ...
    """

    def __init__(
        self,
        client: AsyncClient,
        cache: TTLCache,
        url: Optional[str],
        options: FetchOptions,
    ) -> None:
        self._client = client
        self._cache = cache
        self._url = url
        self._options = options
        self._state = FetchState()
        self._last_exception: Optional[StorefetchError] = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------ #
    # State
    # ------------------------------------------------------------------ #

    @property
    def url(self) -> Optional[str]:
        return self._url

    @property
    def options(self) -> FetchOptions:
        return self._options

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def data(self) -> Any:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def last_exception(self) -> Optional[StorefetchError]:
        """The exception behind the current ``error``, if any."""
        return self._last_exception

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new :class:`FetchState`.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    async def load(self, bypass_cache: bool = False) -> Any:
        """Serve the resource from the cache or fetch it.

        Args:
            bypass_cache: Skip the cache lookup and always issue the GET.

        Returns:
            The value obtained, or ``None`` when the fetch is inert or the
            GET failed.
        """
        url = self._url
        options = self._options
        if not url or not options.enabled:
            return None

        key = options.cache_key
        if not bypass_cache:
            cached = self._cache.get(key, _MISSING)
            if cached is not _MISSING:
                logger.debug("Cache hit for %s", key)
                self._set_state(data=cached, loading=False)
                return cached

        self._set_state(loading=True, error=None)
        try:
            result = await self._client.get_json(url)
        except StorefetchError as exc:
            logger.debug("Fetch of %s failed: %s", url, exc)
            self._last_exception = exc
            self._set_state(error=str(exc), loading=False)
            return None
        else:
            self._last_exception = None
            self._cache.set(key, result, options.cache_expiry)
            self._set_state(data=result, error=None, loading=False)
            return result
        finally:
            if self._state.loading:
                self._set_state(loading=False)

    async def refetch(self) -> Any:
        """Fetch from the network even if a fresh entry exists.

        A successful response overwrites the cached entry.
        """
        return await self.load(bypass_cache=True)

    async def update(
        self,
        url: Optional[str] = _UNSET,
        *,
        cache_key: str = _UNSET,
        cache_expiry: Optional[int] = _UNSET,
        enabled: bool = _UNSET,
    ) -> Any:
        """Change the inputs of this fetch and load again if any changed.

        Only the arguments passed are changed.  Disabling keeps the current
        ``data``.

        Returns:
            The result of :meth:`load`, or ``None`` when nothing changed.
        """
        changes: dict[str, Any] = {}
        if cache_key is not _UNSET and cache_key != self._options.cache_key:
            changes["cache_key"] = cache_key
        if cache_expiry is not _UNSET and cache_expiry != self._options.cache_expiry:
            changes["cache_expiry"] = cache_expiry
        if enabled is not _UNSET and enabled != self._options.enabled:
            changes["enabled"] = enabled
        url_changed = url is not _UNSET and url != self._url

        if not changes and not url_changed:
            return None
        if changes:
            self._options = FetchOptions(**{**self._options.model_dump(), **changes})
        if url_changed:
            self._url = url
        return await self.load()

    def invalidate_cache(self) -> None:
        """Drop the cached entry for this fetch's key without refetching."""
        if self._cache.delete(self._options.cache_key):
            logger.debug("Invalidated %s", self._options.cache_key)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _set_state(self, **changes: Any) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
