"""Canonical Pydantic models shared across all storefetch modules.

The models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`CacheConfig`, :class:`RequestConfig`, :class:`OutputConfig` and
    :class:`GlobalConfig`.

**Fetch options** -- :class:`FetchOptions`, the per-resource settings handed
to :class:`~storefetch.fetch.CachedFetch`.

**Query-parameter structs** -- :class:`ProductFilters` and
:class:`OrderFilters`, explicit typed replacements for free-form filter
dicts, plus the :class:`OrderStatus` and :class:`PaymentStatus` enums used
by the back-office.
"""

from __future__ import annotations

import enum
from typing import Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TTL_MS = 5 * 60 * 1000
"""Default freshness window for cached entries (5 minutes)."""


# --- Configuration ---


class CacheConfig(BaseModel):
    """In-memory response cache settings stored in :class:`GlobalConfig`."""

    default_ttl_ms: int = Field(
        default=DEFAULT_TTL_MS, gt=0, description="Default entry TTL in milliseconds"
    )
    max_entries: Optional[int] = Field(
        default=None,
        gt=0,
        description="Upper bound on stored entries; oldest is evicted first. None = unbounded",
    )


class RequestConfig(BaseModel):
    """Default HTTP request settings applied to every GET."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/storefetch/config.json``.

    Loaded and saved by :func:`~storefetch.config.load_global_config` and
    :func:`~storefetch.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by environment variables or CLI
    flags. See :func:`~storefetch.config.resolve_config`.
    """

    base_url: Optional[str] = Field(
        default=None, description="Storefront base URL, e.g. https://shop.example.com"
    )
    cache: CacheConfig = Field(default_factory=CacheConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Fetch options ---


class FetchOptions(BaseModel):
    """Per-resource options for a :class:`~storefetch.fetch.CachedFetch`.

    Attributes:
        cache_key: Partition of the shared cache holding this resource.
            Independent of the request URL so callers can derive a stable
            key from query parameters.
        cache_expiry: TTL override in milliseconds. ``None`` uses the
            cache's default.
        enabled: When ``False`` the fetch is inert, as if the URL were
            ``None``.
    """

    model_config = ConfigDict(frozen=True)

    cache_key: str
    cache_expiry: Optional[int] = Field(default=None, gt=0)
    enabled: bool = True


# --- Status enums ---


class OrderStatus(str, enum.Enum):
    """Fulfilment status of an order."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, enum.Enum):
    """Payment status of an order."""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


# --- Query-parameter structs ---


class _PageFilters(BaseModel):
    """Pagination fields shared by the admin list endpoints."""

    model_config = ConfigDict(frozen=True)

    limit: Optional[int] = Field(default=None, ge=1, le=100)
    offset: Optional[int] = Field(default=None, ge=0)

    def _page_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.limit is not None:
            params.append(("limit", str(self.limit)))
        if self.offset is not None:
            params.append(("offset", str(self.offset)))
        return params


class ProductFilters(_PageFilters):
    """Query parameters accepted by ``GET /api/admin/products``.

    Example::

        ProductFilters(is_active=True, category="hoodies").to_query()
        # 'isActive=true&category=hoodies'
    """

    is_active: Optional[bool] = None
    category: Optional[str] = Field(default=None, min_length=1)

    def to_query(self) -> str:
        """Render the filters as a deterministic query string (no leading ``?``).

        Unset fields are omitted.  The server treats ``category=all`` as no
        category filter, so ``"all"`` is omitted too and shares the
        unfiltered cache key.
        """
        params: list[tuple[str, str]] = []
        if self.is_active is not None:
            params.append(("isActive", "true" if self.is_active else "false"))
        if self.category and self.category != "all":
            params.append(("category", self.category))
        params.extend(self._page_params())
        return urlencode(params)


class OrderFilters(_PageFilters):
    """Query parameters accepted by ``GET /api/admin/orders``."""

    status: Optional[OrderStatus] = None

    def to_query(self) -> str:
        """Render the filters as a deterministic query string (no leading ``?``)."""
        params: list[tuple[str, str]] = []
        if self.status is not None:
            params.append(("status", self.status.value))
        params.extend(self._page_params())
        return urlencode(params)
