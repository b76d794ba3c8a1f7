"""
Node SDK - Python node execution semantics.

This package provides the runtime for executing integration nodes:
- NodeItem: Data item flowing through workflows
- NodeExecutionContext: Runtime context for a node
- BaseNode: Abstract base class for node implementations
- HttpClient / RequestDescriptor: Timeout-bounded HTTP calls
- process_items: Per-item processing under the continue-on-fail policy
- NodeRunner: Host-facing entry point for running one node

All nodes execute synchronously.
"""

from .items import NodeItem, PairedItem
from .http import (
    HttpApiError,
    HttpClient,
    HttpResponse,
    NodeTimeoutError,
    RequestDescriptor,
)
from .basenode import (
    BaseNode,
    NodeExecutionContext,
    NodeExecutionData,
    NodeParameter,
    NodeCredential,
    NodeParameterType,
    NodeOperationError,
    NodeCredentialError,
    NodeApiError,
)
from .policy import ItemResult, process_items, results_to_items
from .runner import NodeRunner

__all__ = [
    # Items
    "NodeItem",
    "PairedItem",
    "NodeExecutionData",
    # Context
    "NodeExecutionContext",
    # Base class
    "BaseNode",
    "NodeParameter",
    "NodeCredential",
    "NodeParameterType",
    # Errors
    "NodeOperationError",
    "NodeCredentialError",
    "NodeApiError",
    # HTTP
    "HttpApiError",
    "HttpClient",
    "HttpResponse",
    "NodeTimeoutError",
    "RequestDescriptor",
    # Item policy
    "ItemResult",
    "process_items",
    "results_to_items",
    # Runner
    "NodeRunner",
]
