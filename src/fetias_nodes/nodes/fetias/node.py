"""
FETIAS node - create activity form entries and read the account profile.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fetias_nodes.node_sdk.basenode import BaseNode, NodeExecutionData, NodeOperationError
from fetias_nodes.node_sdk.policy import process_items, results_to_items
from fetias_nodes.observability import with_node_context

from .api import CREDENTIAL_TYPE, FetiasApiConfig, api_request, api_request_all_items


class FetiasNode(BaseNode):
    """
    FETIAS node.

    Operations:
    - create: one Activity/Form entry per input item, built from the item's fields
    - read: the profile of the API key owner
    - getAll: list entries of a workspace module, optionally every page
    """

    type = "FETIAS"
    version = 1

    description = {
        "displayName": "FETIAS",
        "name": "FETIAS",
        "icon": "file:fetias.png",
        "group": ["transform"],
        "version": 1,
        "description": "Consume FETIAS API",
        "defaults": {"name": "FETIAS", "color": "#1A82e2"},
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [{"name": CREDENTIAL_TYPE, "required": True}],
    }

    properties = {
        "parameters": [
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "options": [
                    {"name": "Create Entry", "value": "create", "description": "Create an Entry"},
                    {"name": "Read Username", "value": "read", "description": "Read username"},
                    {"name": "Get All Entries", "value": "getAll", "description": "List entries of a module"},
                ],
                "default": "create",
                "description": "The operation to perform.",
            },
            {
                "displayName": "Workspace",
                "name": "workspace",
                "type": "string",
                "required": True,
                "displayOptions": {"show": {"operation": ["create", "getAll"]}},
                "default": "",
                "description": "Workspace to access",
            },
            {
                "displayName": "Module",
                "name": "module",
                "type": "string",
                "required": True,
                "displayOptions": {"show": {"operation": ["create", "getAll"]}},
                "default": "",
                "description": "Module to access",
            },
            {
                "displayName": "Return All",
                "name": "returnAll",
                "type": "boolean",
                "displayOptions": {"show": {"operation": ["getAll"]}},
                "default": False,
                "description": "Whether to return all results or only up to a given limit",
            },
            {
                "displayName": "Limit",
                "name": "limit",
                "type": "number",
                "displayOptions": {"show": {"operation": ["getAll"], "returnAll": [False]}},
                "typeOptions": {"minValue": 1, "maxValue": 200},
                "default": 50,
                "description": "Max number of results to return",
            },
        ],
        "credentials": [{"name": CREDENTIAL_TYPE, "required": True}],
    }

    def __init__(self, api_config: Optional[FetiasApiConfig] = None) -> None:
        super().__init__()
        self.api_config = api_config or FetiasApiConfig.from_settings()

    def execute(self) -> List[List[NodeExecutionData]]:
        items = self.get_input_data()
        operation = self.get_node_parameter("operation", 0, "create")

        if operation == "create":
            results = process_items(items, self._create_entry, self.continue_on_fail)
        elif operation == "read":
            results = process_items(items[:1] or [{"json": {}}], self._read_profile, self.continue_on_fail)
        elif operation == "getAll":
            results = process_items(items[:1] or [{"json": {}}], self._get_all, self.continue_on_fail)
        else:
            raise NodeOperationError(f"Unsupported operation: {operation}", node=self)

        return [results_to_items(results)]

    def _create_entry(self, index: int, item: Dict[str, Any]) -> List[Dict[str, Any]]:
        workspace = self.get_required_parameter("workspace", index)
        module = self.get_required_parameter("module", index)

        fields = {k: v for k, v in item.get("json", {}).items() if k != "id"}
        body = {"records": [{"fields": fields}]}

        self.logger.debug(
            f"Creating entry in {workspace}/{module}",
            extra=with_node_context(self.type, item_index=index, operation="create"),
        )
        response = api_request(self, "POST", "Activity/Form", body, {}, config=self.api_config)

        if isinstance(response, dict):
            return response.get("records") or []
        return []

    def _read_profile(self, index: int, item: Dict[str, Any]) -> Any:
        return api_request(self, "GET", "profile", {}, {}, config=self.api_config)

    def _get_all(self, index: int, item: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = {
            "workspace": self.get_required_parameter("workspace", index),
            "module": self.get_required_parameter("module", index),
        }

        if self.get_node_parameter("returnAll", index, False):
            return api_request_all_items(
                self, "GET", "Activity/Form", {}, query, config=self.api_config
            )["items"]

        limit = int(self.get_node_parameter("limit", index, 50))
        query.update({"page": 1, "page_size": limit})
        response = api_request(self, "GET", "Activity/Form", {}, query, config=self.api_config)
        if not isinstance(response, dict):
            return []
        return (response.get("items") or [])[:limit]


__all__ = ["FetiasNode"]
