"""Tests for response extraction and fetch-state rendering."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from storefetch.client import extract_response_data, format_fetch_state
from storefetch.fetch import FetchState
from storefetch.output import OutputFormat, OutputManager, set_output


def _make_response(content: bytes = b"", status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        content=content,
        request=httpx.Request("GET", "https://shop.test/api/items"),
    )


class TestExtractResponseData:
    def test_json_object(self):
        assert extract_response_data(_make_response(b'{"a": 1}')) == {"a": 1}

    def test_json_scalar(self):
        assert extract_response_data(_make_response(b"42")) == 42

    def test_empty_body(self):
        assert extract_response_data(_make_response(b"")) is None

    def test_invalid_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            extract_response_data(_make_response(b"oops"))


class TestFormatFetchState:
    def test_data_goes_to_format_response(self):
        mock_output = MagicMock(spec=OutputManager)
        set_output(mock_output)

        format_fetch_state(FetchState(data={"id": 1}), "admin-product-1")

        mock_output.info.assert_called_once_with("admin-product-1")
        mock_output.format_response.assert_called_once_with({"id": 1})
        mock_output.error.assert_not_called()

    def test_error_without_data(self):
        mock_output = MagicMock(spec=OutputManager)
        set_output(mock_output)

        format_fetch_state(FetchState(error="HTTP error! status: 404"), "admin-product-x")

        mock_output.error.assert_called_once_with("admin-product-x: HTTP error! status: 404")
        mock_output.format_response.assert_not_called()

    def test_stale_data_still_rendered_on_error(self):
        mock_output = MagicMock(spec=OutputManager)
        set_output(mock_output)

        format_fetch_state(FetchState(data=[1], error="boom"))

        mock_output.error.assert_called_once_with("boom")
        mock_output.format_response.assert_called_once_with([1])

    def test_json_mode_writes_to_stdout(self, capsys):
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True, quiet=True))

        format_fetch_state(FetchState(data={"ok": True}), "k")

        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"ok": True}
        assert captured.err == ""
