"""Asynchronous JSON GET client built on :class:`httpx.AsyncClient`.

The client issues exactly one request per call -- there is no retry and
no backoff -- and maps the outcome onto the storefetch error taxonomy:

- non-2xx statuses raise the typed
  :class:`~storefetch.exceptions.HTTPStatusError` subclass for the status
  (the response body is never inspected);
- request failures (DNS, refused connection, timeout, redirect loops,
  undecodable bodies) raise
  :class:`~storefetch.exceptions.ConnectionError_`.

See Also:
    :class:`~storefetch.fetch.CachedFetch` -- the consumer that converts
    these exceptions into error state.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from storefetch.client.response import extract_response_data
from storefetch.exceptions import (
    ConnectionError_,
    InvalidUsageError,
    StorefetchError,
    error_for_status,
)
from storefetch.models import RequestConfig
from storefetch.output import get_output


class AsyncClient:
    """Async HTTP client for the storefront's JSON GET endpoints.

    Must be used as an async context manager so that the underlying
    connection pool is opened and closed.

    Args:
        base_url: Prepended to relative request URLs.  ``None`` requires
            absolute URLs.
        request_config: Timeout and SSL settings.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        async with AsyncClient("https://shop.example.com") as client:
            payload = await client.get_json("/api/admin/products")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        request_config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url or ""
        self._request_config = request_config or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        config = self._request_config
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def get(self, url: str, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        """Send a single GET request and map errors.

        Args:
            url: Absolute URL, or a path relative to ``base_url``.
            params: Extra query parameters.

        Returns:
            The 2xx :class:`httpx.Response`.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            ServerError: On 5xx.
            HTTPStatusError: On any other non-2xx status.
            ConnectionError_: On network, timeout, redirect-loop or body-decoding errors.
            InvalidUsageError: If *url* cannot be parsed.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        output = get_output()
        output.debug(f"GET {url}")
        try:
            response = await self._client.get(url, params=params)
        except httpx.RequestError as exc:
            raise ConnectionError_(f"Request to {url} failed: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise InvalidUsageError(f"Invalid URL {url!r}: {exc}") from exc

        self._map_response_error(response)
        return response

    async def get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET *url* and return the parsed JSON body.

        Returns:
            The decoded JSON value, or ``None`` for an empty body.

        Raises:
            StorefetchError: If a 2xx body is not valid JSON.
            The same exceptions as :meth:`get`.
        """
        response = await self.get(url, params=params)
        try:
            return extract_response_data(response)
        except ValueError as exc:
            raise StorefetchError(f"Invalid JSON in response from {url}: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for any non-2xx status code."""
        status = response.status_code
        if 200 <= status < 300:
            return
        get_output().debug(f"HTTP {status} from {response.request.url}")
        raise error_for_status(status)
