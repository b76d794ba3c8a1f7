"""
FETIAS API request helpers.

build_request() turns an endpoint, the fetiasApi credential and caller
options into a RequestDescriptor; api_request() sends it on behalf of a
node and wraps failures in NodeApiError; api_request_all_items() walks
the page-numbered list endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from fetias_nodes.config import Settings, get_settings
from fetias_nodes.node_sdk.basenode import (
    BaseNode,
    NodeApiError,
    NodeCredentialError,
    NodeOperationError,
)
from fetias_nodes.node_sdk.http import HttpApiError, NodeTimeoutError, RequestDescriptor


logger = logging.getLogger(__name__)

CREDENTIAL_TYPE = "fetiasApi"


@dataclass(frozen=True)
class FetiasApiConfig:
    """Fixed connection settings for the FETIAS API."""
    base_url: str = "https://app01.fetias.com/api"
    auth_prefix: str = "fsk"
    page_size: int = 200
    max_pages: Optional[int] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FetiasApiConfig":
        settings = settings or get_settings()
        return cls(
            base_url=settings.fetias_base_url.rstrip("/"),
            auth_prefix=settings.fetias_auth_prefix,
            page_size=settings.fetias_page_size,
            max_pages=settings.fetias_max_pages,
        )

    def authorization(self, api_key: str) -> str:
        return f"{self.auth_prefix} {api_key}"


def build_request(
    config: FetiasApiConfig,
    credentials: Optional[Dict[str, Any]],
    method: str,
    endpoint: str,
    body: Optional[Dict[str, Any]] = None,
    query: Optional[Dict[str, Any]] = None,
    uri: Optional[str] = None,
    option: Optional[Dict[str, Any]] = None,
) -> RequestDescriptor:
    """
    Build the request for one FETIAS API call.

    ``uri`` replaces the default ``{base_url}/{endpoint}`` target.
    ``option`` is merged over the defaults key by key, caller wins.
    An empty body is left out of the request entirely.

    Raises:
        NodeCredentialError: No API key in ``credentials``
        NodeOperationError: ``option`` holds keys a request cannot carry
    """
    api_key = (credentials or {}).get("apiKey")
    if not api_key:
        raise NodeCredentialError("No credentials got returned!")

    options: Dict[str, Any] = {
        "headers": {"Authorization": config.authorization(api_key)},
        "method": method,
        "body": body,
        "qs": query or {},
        "url": uri or f"{config.base_url}/{endpoint}",
    }
    if option:
        options.update(option)

    if not options.get("body"):
        options.pop("body")

    try:
        return RequestDescriptor(**options)
    except ValidationError as e:
        raise NodeOperationError(f"Invalid request options: {e}") from e


def api_request(
    node: BaseNode,
    method: str,
    endpoint: str,
    body: Optional[Dict[str, Any]] = None,
    query: Optional[Dict[str, Any]] = None,
    uri: Optional[str] = None,
    option: Optional[Dict[str, Any]] = None,
    config: Optional[FetiasApiConfig] = None,
) -> Any:
    """
    Make an API request to FETIAS and return the parsed JSON response.

    Raises:
        NodeCredentialError: No fetiasApi credentials configured
        NodeApiError: Transport failure or non-2xx response
    """
    config = config or FetiasApiConfig.from_settings()

    try:
        credentials = node.get_credentials(CREDENTIAL_TYPE)
    except NodeCredentialError as e:
        raise NodeCredentialError("No credentials got returned!", node=node) from e

    descriptor = build_request(config, credentials, method, endpoint, body, query, uri, option)

    try:
        return node.helpers_request(descriptor)
    except HttpApiError as e:
        raise NodeApiError(
            str(e),
            node=node,
            status_code=e.status_code,
            response_body=e.response_body,
        ) from e
    except NodeTimeoutError as e:
        raise NodeApiError(str(e), node=node) from e


def api_request_all_items(
    node: BaseNode,
    method: str,
    endpoint: str,
    body: Optional[Dict[str, Any]] = None,
    query: Optional[Dict[str, Any]] = None,
    config: Optional[FetiasApiConfig] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Request every page of a list endpoint and return all results.

    Pages are numbered from 1. The loop ends when a response carries no
    ``page_count`` or the current page reaches it, or when the configured
    ``max_pages`` cap is hit.

    Returns:
        {"items": [...]} with the items of every page in order
    """
    config = config or FetiasApiConfig.from_settings()

    query = dict(query or {})
    query["page_size"] = config.page_size
    query["page"] = 0

    return_data: Dict[str, List[Dict[str, Any]]] = {"items": []}

    while True:
        query["page"] += 1

        response = api_request(node, method, endpoint, body, dict(query), config=config)
        if not isinstance(response, dict):
            break

        return_data["items"].extend(response.get("items") or [])

        page_count = response.get("page_count")
        if page_count is None or query["page"] >= page_count:
            break

        if config.max_pages is not None and query["page"] >= config.max_pages:
            logger.warning(
                f"Stopping pagination of {endpoint} at page {query['page']} "
                f"of {page_count} (max_pages={config.max_pages})"
            )
            break

    return return_data


__all__ = [
    "CREDENTIAL_TYPE",
    "FetiasApiConfig",
    "api_request",
    "api_request_all_items",
    "build_request",
]
