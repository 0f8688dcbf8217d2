"""storefetch -- TTL-cached JSON fetching for storefront and admin APIs.

This package reads the JSON GET endpoints of an e-commerce storefront and
its admin back-office and memoizes the parsed responses in a process-local
TTL cache, so that navigating between views does not repeat identical
network round-trips.

Typical library usage::

    from storefetch.cache import TTLCache
    from storefetch.client import AsyncClient
    from storefetch.fetch import admin_products

    cache = TTLCache()
    async with AsyncClient("https://shop.example.com") as client:
        products = admin_products(client, cache)
        await products.load()
        print(products.data)

Modules:
    app: Typer application and CLI entry point.
    cache: The in-memory TTL cache.
    client: Async HTTP GET client built on httpx.
    fetch: The cached-fetch state holder and its admin specializations.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration management.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
