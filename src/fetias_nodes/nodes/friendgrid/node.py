"""
FriendGrid node - create and read contacts on the FETIAS profile API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fetias_nodes.config import Settings, get_settings
from fetias_nodes.credentials.friendGridApi import FriendGridApiCredential
from fetias_nodes.node_sdk.basenode import (
    BaseNode,
    NodeApiError,
    NodeCredentialError,
    NodeExecutionData,
    NodeOperationError,
)
from fetias_nodes.node_sdk.http import HttpApiError, NodeTimeoutError, RequestDescriptor
from fetias_nodes.node_sdk.policy import ItemResult, process_items, results_to_items


class FriendGridNode(BaseNode):
    """
    FriendGrid node.

    Each input item creates one contact built from workspace, module
    and the optional additional fields.
    """

    type = "friendGrid"
    version = 1

    description = {
        "displayName": "FriendGrid",
        "name": "friendGrid",
        "icon": "file:friendGrid.png",
        "group": ["transform"],
        "version": 1,
        "description": "Consume FriendGrid API",
        "defaults": {"name": "FriendGrid", "color": "#1A82e2"},
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [{"name": FriendGridApiCredential.name, "required": True}],
    }

    properties = {
        "parameters": [
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "options": [
                    {"name": "Create Entry", "value": "create", "description": "Create an Entry"},
                    {"name": "Read Entry", "value": "read", "description": "Read an Entry"},
                ],
                "default": "create",
                "description": "The operation to perform.",
            },
            {
                "displayName": "Workspace",
                "name": "workspace",
                "type": "string",
                "required": True,
                "displayOptions": {"show": {"operation": ["create"]}},
                "default": "",
                "description": "Workspace to access",
            },
            {
                "displayName": "Module",
                "name": "module",
                "type": "string",
                "required": True,
                "displayOptions": {"show": {"operation": ["create"]}},
                "default": "",
                "description": "Module to access",
            },
            {
                "displayName": "Additional Fields",
                "name": "additionalFields",
                "type": "collection",
                "placeholder": "Add Field",
                "default": {},
                "displayOptions": {"show": {"operation": ["create"]}},
                "options": [
                    {"displayName": "First Name", "name": "firstName", "type": "string", "default": ""},
                    {"displayName": "Last Name", "name": "lastName", "type": "string", "default": ""},
                ],
            },
        ],
        "credentials": [{"name": FriendGridApiCredential.name, "required": True}],
    }

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.base_url = (settings or get_settings()).friendgrid_base_url.rstrip("/")
        self._headers: Dict[str, str] = {}

    def execute(self) -> List[List[NodeExecutionData]]:
        items = self.get_input_data()
        operation = self.get_node_parameter("operation", 0, "create")

        if operation not in ("create", "read"):
            raise NodeOperationError(f"Unsupported operation: {operation}", node=self)

        try:
            credential = FriendGridApiCredential(self.get_credentials(FriendGridApiCredential.name))
            self._headers = credential.get_auth_headers()
        except (NodeCredentialError, ValueError) as e:
            error = NodeCredentialError(f"FriendGrid credentials not usable: {e}", node=self)
            if not self.continue_on_fail:
                raise error from e
            return [results_to_items([ItemResult(index=i, error=error) for i in range(len(items))])]

        handler = self._create_contact if operation == "create" else self._read_contacts
        results = process_items(items, handler, self.continue_on_fail)
        return [results_to_items(results)]

    def _create_contact(self, index: int, item: Dict[str, Any]) -> Any:
        data: Dict[str, Any] = {
            "workspace": self.get_required_parameter("workspace", index),
            "module": self.get_required_parameter("module", index),
        }
        data.update(self.get_node_parameter("additionalFields", index, {}) or {})

        return self._request(
            RequestDescriptor(
                method="POST",
                url=f"{self.base_url}/",
                headers=self._headers,
                body={"contacts": [data]},
            )
        )

    def _read_contacts(self, index: int, item: Dict[str, Any]) -> Any:
        return self._request(
            RequestDescriptor(method="GET", url=f"{self.base_url}/", headers=self._headers)
        )

    def _request(self, descriptor: RequestDescriptor) -> Any:
        try:
            return self.helpers_request(descriptor)
        except HttpApiError as e:
            raise NodeApiError(
                str(e), node=self, status_code=e.status_code, response_body=e.response_body
            ) from e
        except NodeTimeoutError as e:
            raise NodeApiError(str(e), node=self) from e


__all__ = ["FriendGridNode"]
