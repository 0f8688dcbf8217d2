"""Cached fetching of JSON resources.

:class:`CachedFetch` wraps one GET resource with a shared
:class:`~storefetch.cache.TTLCache`; the :mod:`~storefetch.fetch.admin`
factories pre-configure it for the admin back-office endpoints.
"""

from storefetch.fetch.admin import (
    admin_dashboard,
    admin_orders,
    admin_product,
    admin_products,
    invalidate_admin_orders,
    invalidate_admin_products,
)
from storefetch.fetch.cached_fetch import CachedFetch, FetchState

__all__ = [
    "CachedFetch",
    "FetchState",
    "admin_dashboard",
    "admin_orders",
    "admin_product",
    "admin_products",
    "invalidate_admin_orders",
    "invalidate_admin_products",
]
