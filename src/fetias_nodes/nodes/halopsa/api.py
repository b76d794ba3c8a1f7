"""
HaloPSA API request helpers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from fetias_nodes.credentials.haloPSAApi import HaloPSAApiCredential
from fetias_nodes.node_sdk.basenode import BaseNode, NodeApiError
from fetias_nodes.node_sdk.http import HttpApiError, NodeTimeoutError, RequestDescriptor


logger = logging.getLogger(__name__)


def _send(node: BaseNode, descriptor: RequestDescriptor) -> Any:
    try:
        return node.helpers_request(descriptor)
    except HttpApiError as e:
        raise NodeApiError(
            str(e), node=node, status_code=e.status_code, response_body=e.response_body
        ) from e
    except NodeTimeoutError as e:
        raise NodeApiError(str(e), node=node) from e


def get_access_token(node: BaseNode, credential: HaloPSAApiCredential) -> str:
    """
    Exchange the client id/secret for a bearer token.

    Raises:
        NodeApiError: Token endpoint failed or returned no token
    """
    tokens = _send(node, credential.get_token_request())
    if not isinstance(tokens, dict) or not tokens.get("access_token"):
        raise NodeApiError("HaloPSA token response did not contain an access token", node=node)
    return tokens["access_token"]


def build_request(
    api_url: str,
    resource: str,
    method: str,
    access_token: str,
    item_id: Union[str, int] = "",
    body: Optional[Union[Dict[str, Any], List[Any]]] = None,
    qs: Optional[Dict[str, Any]] = None,
) -> RequestDescriptor:
    """
    Build a HaloPSA resource request; empty body and query are left out.
    """
    url = f"{api_url.rstrip('/')}/{resource}"
    if item_id not in ("", None):
        url = f"{url}/{item_id}"

    return RequestDescriptor(
        method=method,
        url=url,
        headers={
            "Authorization": f"Bearer {access_token}",
            "Accept": "*/*",
            "Content-Type": "application/json",
        },
        body=body or None,
        qs=qs or {},
    )


def halo_psa_api_request(
    node: BaseNode,
    api_url: str,
    resource: str,
    method: str,
    access_token: str,
    item_id: Union[str, int] = "",
    body: Optional[Union[Dict[str, Any], List[Any]]] = None,
    qs: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Make an API request to HaloPSA and return the parsed JSON response.

    Raises:
        NodeApiError: Transport failure or non-2xx response
    """
    descriptor = build_request(api_url, resource, method, access_token, item_id, body, qs)
    return _send(node, descriptor)


__all__ = [
    "build_request",
    "get_access_token",
    "halo_psa_api_request",
]
