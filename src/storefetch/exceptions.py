"""Exception hierarchy for storefetch.

All exceptions inherit from :class:`StorefetchError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`storefetch.exit_codes`.
The HTTP client raises these; :class:`~storefetch.fetch.CachedFetch`
converts them into its ``error`` state, and the top-level handler in
:func:`storefetch.app.main` exits with the matching code.

Subclass hierarchy::

    StorefetchError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- HTTPStatusError     (exit 1)
    |   +-- AuthError       (exit 3)
    |   +-- NotFoundError   (exit 4)
    |   +-- ServerError     (exit 5)
    +-- ConnectionError_    (exit 6)
    +-- ConfigError         (exit 1)
"""

from __future__ import annotations

from storefetch.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class StorefetchError(Exception):
    """Base exception for all storefetch errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`storefetch.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(StorefetchError):
    """Raised for invalid CLI arguments or query parameters."""

    exit_code = EXIT_INVALID_USAGE


class HTTPStatusError(StorefetchError):
    """Raised when a GET does not return a 2xx status.

    The response body is not inspected; only ``status_code`` matters.
    """

    def __init__(self, status_code: int, message: str | None = None):
        super().__init__(message or f"HTTP error! status: {status_code}")
        self.status_code = status_code


class AuthError(HTTPStatusError):
    """Raised when the API answers 401 or 403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(HTTPStatusError):
    """Raised when the API returns HTTP 404 (resource not found)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(HTTPStatusError):
    """Raised when the API returns an HTTP 5xx server error."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(StorefetchError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(StorefetchError):
    """Raised for configuration problems (unreadable or invalid config file)."""

    exit_code = EXIT_GENERIC_FAILURE


def error_for_status(status_code: int) -> HTTPStatusError:
    """Return the typed exception matching a non-2xx *status_code*."""
    if status_code in (401, 403):
        return AuthError(status_code)
    if status_code == 404:
        return NotFoundError(status_code)
    if status_code >= 500:
        return ServerError(status_code)
    return HTTPStatusError(status_code)
