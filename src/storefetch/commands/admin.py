"""Admin commands -- read the back-office endpoints through the cache.

Provides the ``storefetch admin`` sub-command group.  Product and order
lists render as tables (or raw JSON with ``--json``); single products and
dashboard metrics render as JSON documents.
"""

from __future__ import annotations

from typing import Any, Optional

import typer
from pydantic import ValidationError

from storefetch.cache import TTLCache
from storefetch.client import AsyncClient
from storefetch.commands.common import (
    cell,
    context_config,
    default_renderer,
    require_base_url,
    run_fetches,
)
from storefetch.exit_codes import EXIT_INVALID_USAGE
from storefetch.fetch import (
    CachedFetch,
    admin_dashboard,
    admin_orders,
    admin_product,
    admin_products,
)
from storefetch.models import OrderFilters, OrderStatus, ProductFilters
from storefetch.output import OutputFormat, error, get_output, print_table


admin_app = typer.Typer(no_args_is_help=True)


def _validation_exit(exc: ValidationError) -> typer.Exit:
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"])
        error(f"Invalid {field}: {err['msg']}")
    return typer.Exit(code=EXIT_INVALID_USAGE)


def _list_renderer(collection: str, columns: list[tuple[str, str]]):  # noqa: ANN202
    """Build a renderer that tables ``data[collection]`` outside JSON mode."""

    def render(fetch: CachedFetch) -> None:
        data: Any = fetch.data
        rows = data.get(collection) if isinstance(data, dict) else None
        if fetch.error or get_output().format == OutputFormat.JSON or not isinstance(rows, list):
            default_renderer(fetch)
            return
        print_table(
            [header for header, _ in columns],
            [[cell(row.get(field) if isinstance(row, dict) else None) for _, field in columns] for row in rows],
            title=collection.capitalize(),
        )

    return render


@admin_app.command("products")
def products_command(
    ctx: typer.Context,
    active: Optional[bool] = typer.Option(
        None, "--active/--inactive", help="Only active or only inactive products."
    ),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category filter."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Page size (1-100)."),
    offset: Optional[int] = typer.Option(None, "--offset", help="Items to skip."),
) -> None:
    """List admin products, cached for two minutes per filter combination.

    Example::

        storefetch admin products --active --category hoodies
    """
    try:
        filters = ProductFilters(is_active=active, category=category, limit=limit, offset=offset)
    except ValidationError as exc:
        raise _validation_exit(exc) from None

    require_base_url(context_config(ctx))
    run_fetches(
        ctx,
        lambda client, cache: [admin_products(client, cache, filters)],
        render=_list_renderer(
            "products",
            [("ID", "id"), ("Name", "name"), ("Price", "price"), ("Stock", "stock"), ("Active", "isActive")],
        ),
    )


@admin_app.command("product")
def product_command(
    ctx: typer.Context,
    product_ids: list[str] = typer.Argument(..., help="One or more product IDs."),
) -> None:
    """Show admin products by ID, cached for five minutes.

    Repeating an ID within one invocation is served from the cache.

    Example::

        storefetch admin product p_1 p_2 p_1
    """
    require_base_url(context_config(ctx))

    def build(client: AsyncClient, cache: TTLCache) -> list[CachedFetch]:
        return [admin_product(client, cache, product_id) for product_id in product_ids]

    run_fetches(ctx, build)


@admin_app.command("orders")
def orders_command(
    ctx: typer.Context,
    status: Optional[OrderStatus] = typer.Option(
        None, "--status", "-s", case_sensitive=False, help="Fulfilment status filter."
    ),
    limit: Optional[int] = typer.Option(None, "--limit", help="Page size (1-100)."),
    offset: Optional[int] = typer.Option(None, "--offset", help="Items to skip."),
) -> None:
    """List admin orders, cached for two minutes per filter combination.

    Example::

        storefetch admin orders --status SHIPPED --limit 20
    """
    try:
        filters = OrderFilters(status=status, limit=limit, offset=offset)
    except ValidationError as exc:
        raise _validation_exit(exc) from None

    require_base_url(context_config(ctx))
    run_fetches(
        ctx,
        lambda client, cache: [admin_orders(client, cache, filters)],
        render=_list_renderer(
            "orders",
            [
                ("Order", "orderNumber"),
                ("Customer", "customerEmail"),
                ("Total", "total"),
                ("Status", "status"),
                ("Payment", "paymentStatus"),
            ],
        ),
    )


@admin_app.command("dashboard")
def dashboard_command(ctx: typer.Context) -> None:
    """Show dashboard metrics, cached for five minutes."""
    require_base_url(context_config(ctx))
    run_fetches(ctx, lambda client, cache: [admin_dashboard(client, cache)])
