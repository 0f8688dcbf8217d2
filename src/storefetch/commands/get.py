"""The ``storefetch get`` command -- cached fetch of arbitrary GET endpoints.

Each path becomes one :class:`~storefetch.fetch.CachedFetch` sharing the
invocation's cache, so a path repeated on the command line is fetched once.
"""

from __future__ import annotations

from typing import Optional

import typer

from storefetch.cache import TTLCache
from storefetch.client import AsyncClient
from storefetch.commands.common import context_config, require_base_url, run_fetches
from storefetch.exit_codes import EXIT_INVALID_USAGE
from storefetch.fetch import CachedFetch
from storefetch.models import FetchOptions
from storefetch.output import error


def get_command(
    ctx: typer.Context,
    paths: list[str] = typer.Argument(
        ..., help="URL paths (relative to the base URL) or absolute URLs."
    ),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="Cache key. Defaults to the path. Only with a single path."
    ),
    ttl: Optional[int] = typer.Option(
        None, "--ttl", min=1, help="Freshness window in milliseconds."
    ),
    refetch: bool = typer.Option(
        False, "--refetch", help="Bypass the cache and always hit the network."
    ),
) -> None:
    """Fetch JSON from one or more GET endpoints through the cache.

    Example::

        storefetch get /api/products
        storefetch get /api/admin/products?category=hoodies --key admin-products-hoodies
        storefetch get /api/products /api/products --ttl 1000
    """
    if key is not None and len(paths) > 1:
        error("--key can only be used with a single path.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    require_base_url(context_config(ctx), paths)

    def build(client: AsyncClient, cache: TTLCache) -> list[CachedFetch]:
        return [
            CachedFetch(
                client,
                cache,
                path,
                FetchOptions(cache_key=key or path, cache_expiry=ttl),
            )
            for path in paths
        ]

    run_fetches(ctx, build, refetch=refetch)
