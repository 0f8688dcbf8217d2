"""HTTP client module for storefetch.

Provides :class:`AsyncClient`, a non-blocking JSON GET client backed by
:class:`httpx.AsyncClient`, plus helpers for turning responses into cached
payloads and rendering fetch results.

Example::

    from storefetch.client import AsyncClient

    async with AsyncClient("https://shop.example.com") as client:
        payload = await client.get_json("/api/admin/products")
"""

from storefetch.client.async_client import AsyncClient
from storefetch.client.response import extract_response_data, format_fetch_state

__all__ = ["AsyncClient", "extract_response_data", "format_fetch_state"]
