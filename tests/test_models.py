"""Tests for the Pydantic models and query-parameter structs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from storefetch.models import (
    DEFAULT_TTL_MS,
    CacheConfig,
    FetchOptions,
    GlobalConfig,
    OrderFilters,
    OrderStatus,
    PaymentStatus,
    ProductFilters,
)


class TestProductFilters:
    def test_empty(self):
        assert ProductFilters().to_query() == ""

    def test_field_order_is_fixed(self):
        filters = ProductFilters(offset=20, limit=10, category="mugs", is_active=False)
        assert filters.to_query() == "isActive=false&category=mugs&limit=10&offset=20"

    def test_all_category_is_omitted(self):
        assert ProductFilters(category="all").to_query() == ""

    def test_values_are_url_encoded(self):
        assert ProductFilters(category="t shirts & tops").to_query() == (
            "category=t+shirts+%26+tops"
        )

    def test_zero_offset_is_kept(self):
        assert ProductFilters(offset=0).to_query() == "offset=0"

    @pytest.mark.parametrize(
        "kwargs",
        [{"limit": 0}, {"limit": 101}, {"offset": -1}, {"category": ""}],
    )
    def test_rejects_out_of_range(self, kwargs):
        with pytest.raises(ValidationError):
            ProductFilters(**kwargs)

    def test_frozen(self):
        filters = ProductFilters(limit=5)
        with pytest.raises(ValidationError):
            filters.limit = 6


class TestOrderFilters:
    def test_status(self):
        assert OrderFilters(status=OrderStatus.PENDING).to_query() == "status=PENDING"

    def test_status_from_string(self):
        assert OrderFilters(status="DELIVERED").status is OrderStatus.DELIVERED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            OrderFilters(status="LOST")

    def test_pagination(self):
        assert OrderFilters(limit=50, offset=100).to_query() == "limit=50&offset=100"


class TestEnums:
    def test_payment_status_values(self):
        assert {s.value for s in PaymentStatus} == {"PENDING", "PAID", "FAILED", "REFUNDED"}

    def test_order_status_is_str(self):
        assert OrderStatus.SHIPPED == "SHIPPED"


class TestFetchOptions:
    def test_defaults(self):
        options = FetchOptions(cache_key="k")
        assert options.cache_expiry is None
        assert options.enabled is True

    def test_expiry_must_be_positive(self):
        with pytest.raises(ValidationError):
            FetchOptions(cache_key="k", cache_expiry=0)

    def test_cache_key_required(self):
        with pytest.raises(ValidationError):
            FetchOptions()


class TestGlobalConfig:
    def test_defaults(self):
        config = GlobalConfig()
        assert config.base_url is None
        assert config.cache.default_ttl_ms == DEFAULT_TTL_MS
        assert config.cache.max_entries is None
        assert config.request.timeout == 30
        assert config.output.format == "auto"

    @pytest.mark.parametrize("kwargs", [{"default_ttl_ms": 0}, {"max_entries": 0}])
    def test_cache_config_rejects_non_positive(self, kwargs):
        with pytest.raises(ValidationError):
            CacheConfig(**kwargs)
