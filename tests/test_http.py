"""Tests for the timeout-bounded HTTP client."""
from unittest.mock import patch

import pytest
import requests
from pydantic import ValidationError

from fetias_nodes.node_sdk.http import (
    DEFAULT_TIMEOUT,
    HttpApiError,
    HttpClient,
    NodeTimeoutError,
    RequestDescriptor,
)


class TestRequestDescriptor:
    """RequestDescriptor validation and defaults."""

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(method="GET", url="https://api.test", bogus=True)

    def test_defaults(self):
        descriptor = RequestDescriptor(method="GET", url="https://api.test")

        assert descriptor.body is None
        assert descriptor.form is None
        assert descriptor.qs == {}
        assert descriptor.headers == {}


class TestHttpClient:
    """HttpClient request/response handling."""

    @patch("requests.request")
    def test_send_passes_descriptor_fields(self, mock_request, make_response):
        mock_request.return_value = make_response(200, {"ok": True})
        descriptor = RequestDescriptor(
            method="POST",
            url="https://api.test/things",
            headers={"Authorization": "fsk abc"},
            body={"name": "Alice"},
            qs={"page": 1},
        )

        result = HttpClient().send(descriptor)

        assert result == {"ok": True}
        mock_request.assert_called_once_with(
            method="POST",
            url="https://api.test/things",
            params={"page": 1},
            json={"name": "Alice"},
            data=None,
            headers={"Authorization": "fsk abc"},
            timeout=DEFAULT_TIMEOUT,
        )

    @patch("requests.request")
    def test_empty_query_is_not_sent(self, mock_request, make_response):
        mock_request.return_value = make_response(200, {})

        HttpClient().send(RequestDescriptor(method="GET", url="https://api.test"))

        assert mock_request.call_args.kwargs["params"] is None

    @patch("requests.request")
    def test_descriptor_timeout_overrides_client_timeout(self, mock_request, make_response):
        mock_request.return_value = make_response(200, {})

        HttpClient(timeout=30).send(
            RequestDescriptor(method="GET", url="https://api.test", timeout=5)
        )

        assert mock_request.call_args.kwargs["timeout"] == 5

    @patch("requests.request")
    def test_empty_body_returns_none(self, mock_request, make_response):
        mock_request.return_value = make_response(204, None)

        assert HttpClient().send(RequestDescriptor(method="DELETE", url="https://api.test")) is None

    @patch("requests.request")
    def test_non_json_body_returns_text(self, mock_request, make_response):
        mock_request.return_value = make_response(200, "plain text")

        assert HttpClient().send(RequestDescriptor(method="GET", url="https://api.test")) == "plain text"

    @patch("requests.request")
    def test_timeout_is_mapped(self, mock_request):
        mock_request.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(NodeTimeoutError) as exc_info:
            HttpClient(timeout=2).send(RequestDescriptor(method="GET", url="https://api.test"))

        assert exc_info.value.timeout == 2
        assert exc_info.value.url == "https://api.test"

    @patch("requests.request")
    def test_connection_error_is_mapped(self, mock_request):
        mock_request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(HttpApiError) as exc_info:
            HttpClient().send(RequestDescriptor(method="GET", url="https://api.test"))

        assert exc_info.value.status_code is None
        assert exc_info.value.method == "GET"

    @patch("requests.request")
    def test_error_status_uses_message_from_body(self, mock_request, make_response):
        mock_request.return_value = make_response(404, {"message": "Not found"}, reason="Not Found")

        with pytest.raises(HttpApiError) as exc_info:
            HttpClient().send(RequestDescriptor(method="GET", url="https://api.test"))

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "404 - Not found"
        assert "Not found" in exc_info.value.response_body

    @patch("requests.request")
    def test_error_status_falls_back_to_reason(self, mock_request, make_response):
        mock_request.return_value = make_response(500, None, reason="Internal Server Error")

        with pytest.raises(HttpApiError) as exc_info:
            HttpClient().send(RequestDescriptor(method="GET", url="https://api.test"))

        assert str(exc_info.value) == "500 - Internal Server Error"
