"""Helpers shared by the fetching sub-commands.

Every fetching command runs the same way: read the resolved
:class:`~storefetch.models.GlobalConfig` and the per-invocation
:class:`~storefetch.cache.TTLCache` from the Typer context, open one
:class:`~storefetch.client.AsyncClient`, load a sequence of
:class:`~storefetch.fetch.CachedFetch` objects against the shared cache,
render each result and exit with the code of the last failure.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Sequence

import typer

from storefetch.cache import TTLCache
from storefetch.client import AsyncClient, format_fetch_state
from storefetch.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INVALID_USAGE, EXIT_SUCCESS
from storefetch.fetch import CachedFetch
from storefetch.models import GlobalConfig
from storefetch.output import debug, error, suggest

Renderer = Callable[[CachedFetch], None]
FetchFactory = Callable[[AsyncClient, TTLCache], list[CachedFetch]]


def context_config(ctx: typer.Context) -> GlobalConfig:
    """Return the config resolved by the root callback."""
    obj = ctx.obj or {}
    config = obj.get("config")
    return config if config is not None else GlobalConfig()


def context_cache(ctx: typer.Context) -> TTLCache:
    """Return the cache shared by every fetch of this invocation."""
    ctx.ensure_object(dict)
    cache = ctx.obj.get("cache")
    if cache is None:
        cache = TTLCache.from_config(context_config(ctx).cache)
        ctx.obj["cache"] = cache
    return cache


def require_base_url(config: GlobalConfig, paths: Sequence[str] = ()) -> None:
    """Exit with a usage error unless every path can be resolved to a URL.

    With no *paths* a base URL is always required.
    """
    if config.base_url:
        return
    if paths and all(p.startswith(("http://", "https://")) for p in paths):
        return
    error("No base URL configured.")
    suggest("Pass --base-url, set STOREFETCH_BASE_URL, or run: storefetch config set base_url <url>")
    raise typer.Exit(code=EXIT_INVALID_USAGE)


def default_renderer(fetch: CachedFetch) -> None:
    format_fetch_state(fetch.state, fetch.options.cache_key)


def run_fetches(
    ctx: typer.Context,
    build: FetchFactory,
    render: Renderer = default_renderer,
    refetch: bool = False,
) -> None:
    """Load the fetches built by *build* one after another and render them.

    Raises:
        typer.Exit: With the exit code of the last failed fetch, if any.
    """
    config = context_config(ctx)
    cache = context_cache(ctx)
    exit_code = asyncio.run(_load_all(config, cache, build, render, refetch))
    if exit_code != EXIT_SUCCESS:
        raise typer.Exit(code=exit_code)


async def _load_all(
    config: GlobalConfig,
    cache: TTLCache,
    build: FetchFactory,
    render: Renderer,
    refetch: bool,
) -> int:
    exit_code = EXIT_SUCCESS
    async with AsyncClient(config.base_url, config.request) as client:
        for fetch in build(client, cache):
            key = fetch.options.cache_key
            load: Callable[[], Awaitable[object]] = fetch.refetch if refetch else fetch.load
            if not refetch and key in cache:
                debug(f"Serving {key} from cache")
            await load()
            render(fetch)
            if fetch.error:
                exc = fetch.last_exception
                exit_code = exc.exit_code if exc is not None else EXIT_GENERIC_FAILURE
    return exit_code


def cell(value: Optional[object]) -> str:
    """Render a table cell, showing ``-`` for missing values."""
    return "-" if value is None else str(value)
