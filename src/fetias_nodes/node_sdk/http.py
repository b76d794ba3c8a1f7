"""
HTTP Client - Timeout-bounded HTTP requests for nodes.

Nodes build a RequestDescriptor (method, url, headers, body, query)
and hand it to HttpClient.send(). Every request carries a timeout.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, Field
from requests.exceptions import Timeout, RequestException


logger = logging.getLogger(__name__)

# Default timeout in seconds
DEFAULT_TIMEOUT = 30


class NodeTimeoutError(Exception):
    """Raised when an HTTP request times out."""

    def __init__(self, message: str, timeout: float, url: str):
        self.timeout = timeout
        self.url = url
        super().__init__(message)


class HttpApiError(Exception):
    """Error from HTTP request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        self.url = url
        self.method = method
        super().__init__(message)


class RequestDescriptor(BaseModel):
    """
    Everything needed to perform one HTTP call.

    ``body`` is None when the request has no body at all; an empty
    mapping is never sent.
    """
    model_config = ConfigDict(extra="forbid")

    method: str = Field(..., description="HTTP method")
    url: str = Field(..., description="Absolute target URL")
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Union[Dict[str, Any], List[Any]]] = Field(
        None, description="JSON body"
    )
    form: Optional[Dict[str, Any]] = Field(
        None, description="Form-encoded body"
    )
    qs: Dict[str, Any] = Field(default_factory=dict, description="Query parameters")
    timeout: Optional[float] = Field(None, description="Per-request timeout override")


class HttpResponse:
    """
    Wrapper for HTTP response with convenient accessors.
    """

    def __init__(self, response: requests.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def text(self) -> str:
        return self._response.text

    @property
    def ok(self) -> bool:
        """True if status code is 2xx."""
        return self._response.ok

    def json(self) -> Any:
        """
        Parse response body.

        Returns None for an empty body and the raw text when the body
        is not JSON.
        """
        if not self._response.content:
            return None
        try:
            return self._response.json()
        except ValueError:
            return self._response.text

    def error_message(self) -> str:
        """Build a readable message from an error response."""
        detail = self._response.reason or ""
        try:
            payload = self._response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            for key in ("message", "error_description", "error", "detail"):
                value = payload.get(key)
                if isinstance(value, str) and value:
                    detail = value
                    break
                if isinstance(value, dict) and value.get("message"):
                    detail = value["message"]
                    break
        return f"{self.status_code} - {detail}" if detail else str(self.status_code)

    def raise_for_status(self) -> None:
        """Raise HttpApiError if status code indicates error."""
        if not self.ok:
            raise HttpApiError(
                message=self.error_message(),
                status_code=self.status_code,
                response_body=self.text[:1000] if self.text else None,
                url=str(self._response.url),
                method=self._response.request.method if self._response.request else None,
            )


class HttpClient:
    """
    HTTP client with timeout enforcement.

    Usage:
        client = HttpClient(timeout=10)
        data = client.send(RequestDescriptor(method="GET", url="https://..."))
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize HTTP client.

        Args:
            timeout: Default timeout in seconds
        """
        self.timeout = timeout

    def request(self, descriptor: RequestDescriptor) -> HttpResponse:
        """
        Perform the request described by ``descriptor``.

        Raises:
            NodeTimeoutError: If request times out
            HttpApiError: If the request could not be sent
        """
        request_timeout = descriptor.timeout or self.timeout

        logger.debug(f"{descriptor.method} {descriptor.url}")

        try:
            response = requests.request(
                method=descriptor.method,
                url=descriptor.url,
                params=descriptor.qs or None,
                json=descriptor.body,
                data=descriptor.form,
                headers=descriptor.headers,
                timeout=request_timeout,
            )
            return HttpResponse(response)

        except Timeout as e:
            raise NodeTimeoutError(
                message=f"Request timed out after {request_timeout}s",
                timeout=request_timeout,
                url=descriptor.url,
            ) from e

        except RequestException as e:
            raise HttpApiError(
                message=f"Request failed: {e}",
                url=descriptor.url,
                method=descriptor.method,
            ) from e

    def send(self, descriptor: RequestDescriptor) -> Any:
        """
        Perform the request and return the parsed body.

        Raises:
            NodeTimeoutError: If request times out
            HttpApiError: On transport failure or non-2xx status
        """
        response = self.request(descriptor)
        response.raise_for_status()
        return response.json()


__all__ = [
    "DEFAULT_TIMEOUT",
    "HttpApiError",
    "HttpClient",
    "HttpResponse",
    "NodeTimeoutError",
    "RequestDescriptor",
]
