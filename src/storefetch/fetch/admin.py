"""Pre-configured cached fetches for the admin back-office endpoints.

Each factory fixes the URL, the cache-key derivation and the TTL for one
admin resource and returns a ready :class:`~storefetch.fetch.CachedFetch`:

============================  ==============================  ==========
Factory                       Cache key                       TTL
============================  ==============================  ==========
:func:`admin_products`        ``admin-products-<query>``      2 minutes
:func:`admin_product`         ``admin-product-<id>``          5 minutes
:func:`admin_orders`          ``admin-orders-<query>``        2 minutes
:func:`admin_dashboard`       ``admin-dashboard``             5 minutes
============================  ==============================  ==========

After a mutation elsewhere, :func:`invalidate_admin_products` and
:func:`invalidate_admin_orders` drop every related variant in one call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from storefetch.cache import TTLCache
from storefetch.fetch.cached_fetch import CachedFetch
from storefetch.models import FetchOptions, OrderFilters, ProductFilters

if TYPE_CHECKING:
    from storefetch.client import AsyncClient

ADMIN_LIST_TTL_MS = 2 * 60 * 1000
ADMIN_DETAIL_TTL_MS = 5 * 60 * 1000

PRODUCTS_PATH = "/api/admin/products"
ORDERS_PATH = "/api/admin/orders"
DASHBOARD_PATH = "/api/admin/dashboard"


def _with_query(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def admin_products(
    client: AsyncClient,
    cache: TTLCache,
    filters: Optional[ProductFilters] = None,
) -> CachedFetch:
    """Cached fetch of the filtered admin product list.

    The cache key embeds the rendered query string, so each filter
    combination is cached separately.
    """
    query = (filters or ProductFilters()).to_query()
    return CachedFetch(
        client,
        cache,
        _with_query(PRODUCTS_PATH, query),
        FetchOptions(cache_key=f"admin-products-{query}", cache_expiry=ADMIN_LIST_TTL_MS),
    )


def admin_product(
    client: AsyncClient,
    cache: TTLCache,
    product_id: Optional[str],
) -> CachedFetch:
    """Cached fetch of a single admin product.

    Inert while *product_id* is ``None`` or empty.
    """
    url = f"{PRODUCTS_PATH}/{product_id}" if product_id else None
    return CachedFetch(
        client,
        cache,
        url,
        FetchOptions(
            cache_key=f"admin-product-{product_id}",
            cache_expiry=ADMIN_DETAIL_TTL_MS,
            enabled=bool(product_id),
        ),
    )


def admin_orders(
    client: AsyncClient,
    cache: TTLCache,
    filters: Optional[OrderFilters] = None,
) -> CachedFetch:
    """Cached fetch of the admin order list, optionally filtered by status."""
    query = (filters or OrderFilters()).to_query()
    return CachedFetch(
        client,
        cache,
        _with_query(ORDERS_PATH, query),
        FetchOptions(cache_key=f"admin-orders-{query}", cache_expiry=ADMIN_LIST_TTL_MS),
    )


def admin_dashboard(client: AsyncClient, cache: TTLCache) -> CachedFetch:
    """Cached fetch of the dashboard metrics (orders, revenue, products, users)."""
    return CachedFetch(
        client,
        cache,
        DASHBOARD_PATH,
        FetchOptions(cache_key="admin-dashboard", cache_expiry=ADMIN_DETAIL_TTL_MS),
    )


def invalidate_admin_products(cache: TTLCache) -> int:
    """Drop every cached product list variant and single product."""
    return cache.invalidate("admin-product")


def invalidate_admin_orders(cache: TTLCache) -> int:
    """Drop every cached order list variant."""
    return cache.invalidate("admin-orders")
