"""In-memory response caching for storefetch.

This package provides :class:`TTLCache`, a process-local store for parsed
JSON responses with per-entry expiry and substring invalidation.  One
instance is constructed per process (or per test) and shared by reference
with every :class:`~storefetch.fetch.CachedFetch` that should see the same
entries.
"""

from storefetch.cache.cache import CacheEntry, TTLCache

__all__ = ["CacheEntry", "TTLCache"]
