"""Response helpers -- body extraction and rendering of fetch results.

:func:`extract_response_data` turns an :class:`httpx.Response` into the
JSON value stored in the cache.  :func:`format_fetch_state` routes a
finished :class:`~storefetch.fetch.FetchState` through the output system:
data to stdout, errors to stderr.

See Also:
    :mod:`storefetch.output` -- the output manager that renders data.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx

from storefetch.output import get_output

if TYPE_CHECKING:
    from storefetch.fetch import FetchState


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the JSON body from an HTTP response.

    Args:
        response: The :class:`httpx.Response` to extract data from.

    Returns:
        A JSON-decoded object (``dict``, ``list``, etc.), or ``None`` if the
        body is empty.

    Raises:
        json.JSONDecodeError: If the body is not valid JSON.
    """
    if not response.content:
        return None
    return json.loads(response.content)


def format_fetch_state(state: FetchState, source: str = "") -> None:
    """Render a finished fetch to the global output.

    The error, when present, goes to stderr; the data, when present, is
    written to stdout even if an error occurred (stale-on-error).

    Args:
        state: The snapshot to render.
        source: Optional label such as the cache key, shown in the status
            line.
    """
    output = get_output()
    if state.error:
        output.error(f"{source}: {state.error}" if source else state.error)
    elif source:
        output.info(source)

    if state.data is not None:
        output.format_response(state.data)
