"""
BaseNode - Abstract base class for integration node implementations.

Every adapter in this package inherits from BaseNode, declares its
description/properties schema and implements execute().

SYNC-WORKER SAFE: execute() is synchronous and every HTTP call is
timeout-bounded.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

from .http import HttpClient, RequestDescriptor


logger = logging.getLogger(__name__)


# ==============================================================================
# NodeParameterType
# ==============================================================================

NodeParameterType = Literal[
    "string", "number", "boolean", "options", "multiOptions",
    "json", "collection", "fixedCollection", "dateTime", "notice",
]


# ==============================================================================
# NodeParameter - Pydantic model for defining parameters
# ==============================================================================

class NodeParameter(BaseModel):
    """
    A single parameter in the node's properties.

    Node classes declare their parameters as plain dicts; this model
    validates them when a definition is built for the registry.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Parameter key (internal name)")
    display_name: str = Field(..., alias="displayName", description="Human-readable label")
    type: NodeParameterType = Field(..., description="Parameter type")
    default: Any = Field(None, description="Default value")
    required: bool = Field(False, description="Is parameter required?")
    description: Optional[str] = Field(None, description="Help text")
    placeholder: Optional[str] = Field(None, description="Input placeholder")
    options: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Options for options/multiOptions/collection types"
    )
    type_options: Optional[Dict[str, Any]] = Field(None, alias="typeOptions")
    display_options: Optional[Dict[str, Any]] = Field(
        None,
        alias="displayOptions",
        description="Conditional visibility"
    )


class NodeCredential(BaseModel):
    """Credential requirement definition."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Credential type name")
    required: bool = Field(True, description="Is credential required?")
    display_name: Optional[str] = Field(None, alias="displayName")


# ==============================================================================
# NodeExecutionData - Output data format
# ==============================================================================

class NodeExecutionData(TypedDict, total=False):
    """
    Single item of execution output data.

    Format: {"json": {...}, "pairedItem": {"item": 0}}
    """
    json: Dict[str, Any]
    pairedItem: Optional[Dict[str, int]]


# ==============================================================================
# Errors
# ==============================================================================

class NodeOperationError(Exception):
    """Error during node operation."""

    def __init__(
        self,
        message: str,
        node: Optional[BaseNode] = None,
        item_index: Optional[int] = None,
    ) -> None:
        self.message = message
        self.node = node
        self.item_index = item_index
        super().__init__(message)


class NodeCredentialError(NodeOperationError):
    """Credentials missing or unusable for the requested credential type."""


class NodeApiError(NodeOperationError):
    """Error from external API call."""

    def __init__(
        self,
        message: str,
        node: Optional[BaseNode] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        item_index: Optional[int] = None,
    ) -> None:
        super().__init__(message, node, item_index)
        self.status_code = status_code
        self.response_body = response_body


# ==============================================================================
# BaseNode - Abstract base class
# ==============================================================================

class BaseNode(ABC):
    """
    Abstract base class for all integration nodes.

    Nodes define:
    - type: Unique identifier (e.g., "haloPSA")
    - version: Node version number
    - description: Node metadata dict
    - properties: Parameters and credentials

    And implement execute() which processes input items and returns
    a list of output branches, each a list of items.
    """

    type: str = "base"
    version: int = 1

    description: Dict[str, Any] = {
        "displayName": "Base Node",
        "name": "base",
        "description": "",
        "group": [],
        "version": 1,
        "inputs": ["main"],
        "outputs": ["main"],
    }

    properties: Dict[str, Any] = {
        "parameters": [],
        "credentials": [],
    }

    def __init__(self) -> None:
        """Initialize node instance."""
        self.logger = logging.getLogger(f"node.{self.type}")
        self._context: Optional[NodeExecutionContext] = None

    @abstractmethod
    def execute(self) -> List[List[NodeExecutionData]]:
        """
        Execute node operation.

        Returns:
            List[List[NodeExecutionData]]: Outer list is output branches,
            inner list is items in that branch.

        Raises:
            NodeOperationError: On operation failure
            NodeApiError: On API call failure
        """
        raise NotImplementedError

    # ==== Context Management ====

    def set_context(self, context: "NodeExecutionContext") -> None:
        """Set the execution context."""
        self._context = context

    @property
    def context(self) -> "NodeExecutionContext":
        if self._context is None:
            raise NodeOperationError("No context set", node=self)
        return self._context

    @property
    def continue_on_fail(self) -> bool:
        """Whether the host asked to record per-item errors instead of aborting."""
        return self._context.continue_on_fail if self._context else False

    # ==== Helper methods for subclasses ====

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = None,
    ) -> Any:
        """
        Get parameter value.

        Args:
            name: Parameter name (supports dot notation like 'additionalFields.firstName')
            item_index: Index of item (for per-item parameters)
            default: Default if not set
        """
        if self._context is None:
            return default
        return self._context.get_node_parameter(name, item_index, default)

    def get_required_parameter(self, name: str, item_index: int = 0) -> Any:
        """Get a parameter that must be set to a non-empty value."""
        value = self.get_node_parameter(name, item_index)
        if value is None or value == "":
            raise NodeOperationError(
                f"Parameter '{name}' is required",
                node=self,
                item_index=item_index,
            )
        return value

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """
        Get credentials by type name.

        Raises:
            NodeCredentialError: If no credentials of that type are configured
        """
        return self.context.get_credentials(name)

    def get_input_data(self) -> List[Dict[str, Any]]:
        """
        Get input items from previous node.

        Returns:
            List of input items, each with 'json' key.
        """
        if self._context is None:
            return []
        return self._context.get_input_data()

    def helpers_request(self, descriptor: RequestDescriptor) -> Any:
        """
        Send a prepared request through the context's HTTP client.

        Returns:
            Parsed JSON response
        """
        return self.context.helpers_request(descriptor)


# ==============================================================================
# NodeExecutionContext - Runtime context for node execution
# ==============================================================================

class NodeExecutionContext:
    """
    Runtime context provided to nodes during execution.

    This is the narrow interface to the host: parameters, resolved
    credentials, input items, the continue-on-fail policy and the
    HTTP helper.
    """

    def __init__(
        self,
        parameters: Dict[str, Any],
        credentials: Dict[str, Dict[str, Any]],
        input_data: List[Dict[str, Any]],
        continue_on_fail: bool = False,
        node_name: Optional[str] = None,
        http_client: Optional[HttpClient] = None,
        parameter_resolver: Optional[Callable[[str, int, Any], Any]] = None,
    ) -> None:
        self._parameters = parameters
        self._credentials = credentials
        self._input_data = input_data
        self.continue_on_fail = continue_on_fail
        self.node_name = node_name
        self._http_client = http_client or HttpClient()
        self._parameter_resolver = parameter_resolver

    def get_node_parameter(
        self,
        name: str,
        item_index: int = 0,
        default: Any = None,
    ) -> Any:
        """Get parameter value, delegating to the host resolver when one is set."""
        if self._parameter_resolver is not None:
            return self._parameter_resolver(name, item_index, default)
        return self._get_nested_parameter(name, default)

    def _get_nested_parameter(self, name: str, default: Any = None) -> Any:
        """
        Get parameter value supporting dot notation with array indexing.
        Examples: 'additionalFields.firstName', 'fieldsToCreateOrUpdate.fields.0'
        """
        current: Any = self._parameters
        for key in name.split("."):
            if key.isdigit():
                index = int(key)
                if isinstance(current, list) and 0 <= index < len(current):
                    current = current[index]
                else:
                    return default
            elif isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    def get_credentials(self, name: str) -> Dict[str, Any]:
        """Get credentials by type name."""
        credentials = self._credentials.get(name)
        if not credentials:
            raise NodeCredentialError(f"Credentials '{name}' not found")
        return credentials

    def get_input_data(self) -> List[Dict[str, Any]]:
        """Get input items."""
        return self._input_data

    def helpers_request(self, descriptor: RequestDescriptor) -> Any:
        """Send the request; HTTP errors propagate as HttpApiError."""
        return self._http_client.send(descriptor)


__all__ = [
    "BaseNode",
    "NodeExecutionContext",
    "NodeExecutionData",
    "NodeParameter",
    "NodeCredential",
    "NodeParameterType",
    "NodeOperationError",
    "NodeCredentialError",
    "NodeApiError",
]
