"""Shared test fixtures for storefetch.

Provides isolated config environments, a controllable clock for the TTL
cache, an in-process fake storefront API built on
:class:`httpx.MockTransport`, and a Typer CLI runner.  Fixtures are
discovered automatically by pytest.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from storefetch.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_global_state() -> None:
    """Reset the global OutputManager and the package logger after every test.

    The OutputManager caches the stdout/stderr streams it was created with,
    which go stale once a CliRunner invocation ends.  The root CLI callback
    also installs a handler on the ``storefetch`` logger and stops
    propagation, which would hide records from ``caplog``.
    """
    yield
    reset_output()
    logger = logging.getLogger("storefetch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Fake storefront API
# ---------------------------------------------------------------------------


class FakeAPI:
    """Routes GET paths to canned responses and records every request.

    ``routes`` maps a path (without query string) to either an
    :class:`httpx.Response` or a callable taking the request.  Unknown
    paths answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def json(self, path: str, body: Any, status_code: int = 200) -> None:
        self.routes[path] = httpx.Response(status_code, json=body)

    def status(self, path: str, status_code: int) -> None:
        self.routes[path] = httpx.Response(status_code)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(route):
            return route(request)
        return route

    @property
    def paths(self) -> list[str]:
        return [str(r.url.raw_path, "ascii") for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def patch_cli_client(api: FakeAPI, monkeypatch: pytest.MonkeyPatch) -> FakeAPI:
    """Make the CLI's AsyncClient talk to the fake API."""
    from storefetch.client import AsyncClient

    def factory(base_url: Any, request_config: Any) -> AsyncClient:
        return AsyncClient(base_url, request_config, transport=api.transport())

    monkeypatch.setattr("storefetch.commands.common.AsyncClient", factory)
    return api


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME into tmp_path, forces the XDG
    code path, and clears STOREFETCH_* environment variables.
    """
    monkeypatch.setattr("storefetch.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["STOREFETCH_BASE_URL", "STOREFETCH_CACHE_TTL_MS"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN OutputManager for tests that ignore output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoke(cli_runner, isolated_config: Path) -> Callable[..., Any]:
    """Invoke the storefetch app with isolated config."""
    from storefetch.app import app

    def _invoke(*args: str, **kwargs: Any):
        return cli_runner.invoke(app, list(args), **kwargs)

    return _invoke
