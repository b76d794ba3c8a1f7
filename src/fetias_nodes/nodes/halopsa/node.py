"""
HaloPSA node - manage clients, invoices, sites, tickets and users.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from pydantic import ValidationError

from fetias_nodes.credentials.haloPSAApi import HaloPSAApiCredential
from fetias_nodes.node_sdk.basenode import BaseNode, NodeExecutionData, NodeOperationError
from fetias_nodes.node_sdk.policy import ItemResult, process_items, results_to_items
from fetias_nodes.observability import with_node_context

from .api import get_access_token, halo_psa_api_request
from .descriptions import (
    client_description,
    invoice_description,
    site_description,
    ticket_description,
    user_description,
)
from .fields import RESOURCE_FIELDS, HaloPSAResource, process_fields


class HaloPSANode(BaseNode):
    """
    HaloPSA node.

    One access token is fetched per run; every input item then issues
    one request for the selected resource and operation.
    """

    type = "haloPSA"
    version = 1

    description = {
        "displayName": "HaloPSA",
        "name": "haloPSA",
        "icon": "file:halopsa.svg",
        "group": ["input"],
        "version": 1,
        "description": "Consume HaloPSA API",
        "subtitle": '={{$parameter["operation"] + ": " + $parameter["resource"]}}',
        "defaults": {"name": "HaloPSA", "color": "#fd314e"},
        "inputs": ["main"],
        "outputs": ["main"],
        "credentials": [
            {
                "name": HaloPSAApiCredential.name,
                "required": True,
                "testedBy": "haloPSAApiCredentialTest",
            }
        ],
    }

    properties = {
        "parameters": [
            {
                "displayName": "Resource",
                "name": "resource",
                "type": "options",
                "noDataExpression": True,
                "options": [
                    {"name": "Client", "value": "client"},
                    {"name": "Invoice", "value": "invoice"},
                    {"name": "Site", "value": "site"},
                    {"name": "Ticket", "value": "tickets"},
                    {"name": "Users", "value": "users"},
                ],
                "default": "tickets",
                "required": True,
                "description": "Resource to consume",
            },
            {
                "displayName": "Operation",
                "name": "operation",
                "type": "options",
                "noDataExpression": True,
                "options": [
                    {"name": "Create", "value": "create"},
                    {"name": "Delete", "value": "delete"},
                    {"name": "Get", "value": "get"},
                    {"name": "Get All", "value": "getAll"},
                    {"name": "Update", "value": "update"},
                ],
                "default": "getAll",
            },
            {
                "displayName": "Item ID",
                "name": "item_id",
                "type": "number",
                "typeOptions": {"minValue": 0, "numberStepSize": 1},
                "default": 0,
                "description": "Specify item ID",
                "displayOptions": {"show": {"operation": ["get", "update", "delete"]}},
            },
            *ticket_description,
            *invoice_description,
            *user_description,
            *client_description,
            *site_description,
            {
                "displayName": "Website",
                "name": "sitesList",
                "type": "options",
                "default": "",
                "noDataExpression": True,
                "typeOptions": {"loadOptionsMethod": "getHaloPSASites"},
                "displayOptions": {"show": {"operation": ["create"], "resource": ["client", "users"]}},
            },
            {
                "displayName": "Client",
                "name": "clientsList",
                "type": "options",
                "default": "",
                "noDataExpression": True,
                "typeOptions": {"loadOptionsMethod": "getHaloPSAClients"},
                "displayOptions": {"show": {"operation": ["create"], "resource": ["site", "invoice"]}},
            },
            {
                "displayName": "Add Field",
                "name": "fieldsToCreateOrUpdate",
                "type": "fixedCollection",
                "typeOptions": {"multipleValues": True, "multipleValueButtonText": "Add Field"},
                "default": {},
                "description": "Add field and value",
                "displayOptions": {"show": {"operation": ["update", "create"]}},
                "options": [
                    {
                        "displayName": "Field:",
                        "name": "fields",
                        "values": [
                            {
                                "displayName": "Field Name",
                                "name": "fieldName",
                                "type": "string",
                                "default": "",
                                "required": True,
                            },
                            {
                                "displayName": "New Value",
                                "name": "fieldValue",
                                "type": "string",
                                "default": "",
                                "required": True,
                            },
                        ],
                    }
                ],
            },
            {
                "displayName": "The Reason For Deleting Item",
                "name": "reasonForDeletion",
                "type": "string",
                "default": "",
                "displayOptions": {"show": {"operation": ["delete"]}},
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
                "default": 50,
                "description": "Max number of results to return",
                "displayOptions": {"show": {"returnAll": [False], "operation": ["getAll"]}},
                "typeOptions": {"minValue": 1, "maxValue": 1000},
            },
        ],
        "credentials": [{"name": HaloPSAApiCredential.name, "required": True}],
    }

    # Host-facing method names for dropdown options and credential tests
    methods = {
        "loadOptions": {
            "getHaloPSASites": "get_sites",
            "getHaloPSAClients": "get_clients",
        },
        "credentialTest": {
            "haloPSAApiCredentialTest": "test_credentials",
        },
    }

    def __init__(self) -> None:
        super().__init__()
        self._resource = HaloPSAResource.TICKETS
        self._api_url = ""
        self._access_token = ""

    def execute(self) -> List[List[NodeExecutionData]]:
        items = self.get_input_data()
        resource = self.get_node_parameter("resource", 0, "tickets")
        operation = self.get_node_parameter("operation", 0, "getAll")

        try:
            self._resource = HaloPSAResource(resource)
        except ValueError as e:
            raise NodeOperationError(f"Unsupported resource: {resource}", node=self) from e

        handlers: Dict[str, Callable[[int, Dict[str, Any]], Any]] = {
            "create": self._create,
            "delete": self._delete,
            "get": self._get,
            "getAll": self._get_all,
            "update": self._update,
        }
        handler = handlers.get(operation)
        if handler is None:
            raise NodeOperationError(f"Unsupported operation: {operation}", node=self)

        try:
            self._connect()
        except NodeOperationError as e:
            if not self.continue_on_fail:
                raise
            self.logger.warning(f"HaloPSA connection failed, marking every item: {e}")
            return [results_to_items([ItemResult(index=i, error=e) for i in range(len(items))])]

        self.logger.debug(
            f"Running {operation} on {self._resource.value} for {len(items)} items",
            extra=with_node_context(self.type, operation=operation, resource=self._resource.value),
        )
        results = process_items(items, handler, self.continue_on_fail)
        return [results_to_items(results)]

    # ==== Connection ====

    def _credential(self) -> HaloPSAApiCredential:
        return HaloPSAApiCredential(self.get_credentials(HaloPSAApiCredential.name))

    def _connect(self) -> None:
        credential = self._credential()
        self._api_url = credential.resource_api_url
        self._access_token = get_access_token(self, credential)

    def _request(self, method: str, item_id: Any = "", body: Any = None, qs: Any = None) -> Any:
        return halo_psa_api_request(
            self,
            self._api_url,
            self._resource.value,
            method,
            self._access_token,
            item_id,
            body,
            qs,
        )

    # ==== Operations ====

    def _item_id(self, index: int) -> Any:
        item_id = self.get_node_parameter("item_id", index)
        if item_id is None or item_id == "":
            raise NodeOperationError("Parameter 'item_id' is required", node=self, item_index=index)
        return item_id

    def _create(self, index: int, item: Dict[str, Any]) -> Any:
        payload = process_fields(self.get_node_parameter("fieldsToCreateOrUpdate", index, {}))

        def get(name: str, default: Any) -> Any:
            return self.get_node_parameter(name, index, default)

        try:
            payload.update(RESOURCE_FIELDS[self._resource](get))
        except ValidationError as e:
            raise NodeOperationError(
                f"Invalid {self._resource.value} fields: {e}", node=self, item_index=index
            ) from e

        return self._request("POST", body=[payload])

    def _delete(self, index: int, item: Dict[str, Any]) -> Any:
        reason = self.get_node_parameter("reasonForDeletion", index, "")
        return self._request("DELETE", self._item_id(index), qs={"reason": reason})

    def _get(self, index: int, item: Dict[str, Any]) -> Any:
        return self._request("GET", self._item_id(index))

    def _get_all(self, index: int, item: Dict[str, Any]) -> Any:
        if self.get_node_parameter("returnAll", index, False):
            qs: Dict[str, Any] = {}
        else:
            qs = {"count": self.get_node_parameter("limit", index, 50)}
        return self._request("GET", qs=qs)

    def _update(self, index: int, item: Dict[str, Any]) -> Any:
        item_id = int(self._item_id(index))
        fields = process_fields(self.get_node_parameter("fieldsToCreateOrUpdate", index, {}))
        return self._request("POST", body=[{"id": item_id, **fields}])

    # ==== Load options ====

    def _load_options(self, resource: str, list_key: str, name_key: str) -> List[Dict[str, Any]]:
        credential = self._credential()
        token = get_access_token(self, credential)
        response = halo_psa_api_request(self, credential.resource_api_url, resource, "GET", token)

        records = response if isinstance(response, list) else (response or {}).get(list_key, [])
        options = [{"name": record.get(name_key, ""), "value": record.get("id")} for record in records]
        return sorted(options, key=lambda option: str(option["name"]).lower())

    def get_sites(self) -> List[Dict[str, Any]]:
        """Options for the Website dropdown."""
        return self._load_options("site", "sites", "clientsite_name")

    def get_clients(self) -> List[Dict[str, Any]]:
        """Options for the Client dropdown."""
        return self._load_options("client", "clients", "name")

    # ==== Credential test ====

    @staticmethod
    def test_credentials(credential_data: Dict[str, Any]) -> Dict[str, str]:
        result = HaloPSAApiCredential(credential_data).test()
        if result["success"]:
            return {"status": "OK", "message": "Connection successful!"}
        return {"status": "Error", "message": result["message"]}


__all__ = ["HaloPSANode"]
