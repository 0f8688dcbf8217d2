"""Tests for the asynchronous JSON GET client."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from storefetch.client import AsyncClient
from storefetch.exceptions import (
    AuthError,
    ConnectionError_,
    HTTPStatusError,
    NotFoundError,
    ServerError,
    StorefetchError,
)
from storefetch.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)
from storefetch.models import RequestConfig
from storefetch.output import OutputManager, set_output


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_json(handler, url: str = "/api/items", base_url: str = "https://shop.test") -> Any:
    async def scenario():
        async with AsyncClient(base_url, transport=httpx.MockTransport(handler)) as client:
            return await client.get_json(url)

    return asyncio.run(scenario())


@pytest.fixture(autouse=True)
def _clean_output(quiet_output):
    """Silence the client's debug output."""
    yield


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


class TestGetJson:
    def test_returns_parsed_body(self):
        result = _get_json(lambda request: httpx.Response(200, json={"products": []}))
        assert result == {"products": []}

    def test_empty_body_is_none(self):
        assert _get_json(lambda request: httpx.Response(204)) is None

    def test_relative_url_joined_to_base(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        _get_json(handler, "/api/admin/orders?status=PENDING")
        assert str(seen[0].url) == "https://shop.test/api/admin/orders?status=PENDING"

    def test_absolute_url_without_base(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=1)

        _get_json(handler, "https://other.test/x", base_url=None)
        assert seen[0].url.host == "other.test"

    def test_sends_accept_json(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        _get_json(handler)
        assert seen[0].headers["accept"] == "application/json"
        assert seen[0].method == "GET"

    def test_invalid_json_raises(self):
        with pytest.raises(StorefetchError, match="Invalid JSON"):
            _get_json(lambda request: httpx.Response(200, content=b"<html>"))

    def test_params_are_sent(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        async def scenario():
            async with AsyncClient("https://shop.test", transport=httpx.MockTransport(handler)) as client:
                await client.get_json("/api/items", params={"limit": 5})

        asyncio.run(scenario())
        assert seen[0].url.params["limit"] == "5"

    def test_debug_line_when_verbose(self, capsys):
        set_output(OutputManager(no_color=True, verbose=True))
        _get_json(lambda request: httpx.Response(200, json={}))
        assert "[debug] GET /api/items" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


class TestErrorMapping:
    @pytest.mark.parametrize(
        "status, exc_type, exit_code",
        [
            (401, AuthError, EXIT_AUTH_FAILURE),
            (403, AuthError, EXIT_AUTH_FAILURE),
            (404, NotFoundError, EXIT_NOT_FOUND),
            (500, ServerError, EXIT_SERVER_ERROR),
            (503, ServerError, EXIT_SERVER_ERROR),
            (418, HTTPStatusError, EXIT_GENERIC_FAILURE),
        ],
    )
    def test_status_maps_to_exception(self, status, exc_type, exit_code):
        with pytest.raises(exc_type) as exc_info:
            _get_json(lambda request: httpx.Response(status, json={"message": "ignored"}))
        assert exc_info.value.status_code == status
        assert exc_info.value.exit_code == exit_code
        assert str(exc_info.value) == f"HTTP error! status: {status}"

    def test_body_of_error_response_is_ignored(self):
        with pytest.raises(ServerError) as exc_info:
            _get_json(lambda request: httpx.Response(500, content=b"not json"))
        assert "not json" not in str(exc_info.value)

    def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        with pytest.raises(ConnectionError_) as exc_info:
            _get_json(handler)
        assert exc_info.value.exit_code == EXIT_CONNECTION_ERROR
        assert "name resolution failed" in str(exc_info.value)

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ConnectionError_):
            _get_json(handler)

    def test_redirect_loop(self):
        def handler(request):
            return httpx.Response(302, headers={"Location": "/loop"})

        with pytest.raises(ConnectionError_, match="/loop"):
            _get_json(handler, "/loop")

    def test_undecodable_body(self):
        def handler(request):
            return httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"not gzip"
            )

        with pytest.raises(ConnectionError_) as exc_info:
            _get_json(handler)
        assert exc_info.value.exit_code == EXIT_CONNECTION_ERROR

    def test_single_attempt_on_failure(self):
        calls: list[int] = []

        def handler(request):
            calls.append(1)
            return httpx.Response(502)

        with pytest.raises(ServerError):
            _get_json(handler)
        assert len(calls) == 1


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_get_outside_context_manager_fails(self):
        client = AsyncClient("https://shop.test")
        with pytest.raises(AssertionError, match="async context manager"):
            asyncio.run(client.get("/x"))

    def test_request_config_applied(self):
        async def scenario():
            client = AsyncClient(
                "https://shop.test",
                RequestConfig(timeout=7, verify_ssl=False),
                transport=httpx.MockTransport(lambda request: httpx.Response(200)),
            )
            async with client:
                return client._client.timeout

        timeout = asyncio.run(scenario())
        assert timeout.read == 7
