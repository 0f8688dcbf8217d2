"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~storefetch.exceptions.StorefetchError` subclass.
Shell wrappers can inspect the exit code to tell a rejected credential from
a server outage without parsing stderr.

Example::

    $ storefetch admin product p_123
    $ echo $?
    4   # EXIT_NOT_FOUND -- the product does not exist
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""The API rejected the request as unauthenticated or forbidden (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
