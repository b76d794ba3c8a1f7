"""
Node Runner - Host-facing entry point for running a single node.

Looks a node type up in the registry, resolves credential references,
builds the execution context and runs the node. There is no graph or
scheduling here; the host owns workflow execution.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from fetias_nodes.config import Settings, get_settings
from fetias_nodes.observability import with_node_context

from .basenode import BaseNode, NodeExecutionContext, NodeExecutionData, NodeOperationError
from .http import HttpClient
from .items import NodeItem

if TYPE_CHECKING:
    from fetias_nodes.node_registry import NodeRegistry


logger = logging.getLogger(__name__)


class NodeRunner:
    """
    Runs nodes by type name.

    Usage:
        runner = NodeRunner(credential_store={"my-fetias": {"apiKey": "..."}})
        output = runner.run(
            "FETIAS",
            parameters={"operation": "read"},
            credentials={"fetiasApi": "my-fetias"},
            input_data=[{"json": {}}],
        )
    """

    def __init__(
        self,
        registry: Optional["NodeRegistry"] = None,
        credential_store: Optional[Dict[str, Dict[str, Any]]] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize runner.

        Args:
            registry: Node registry; defaults to one holding this package's nodes
            credential_store: Map of credential reference -> credential dict
            settings: Settings used for HTTP timeouts
        """
        if registry is None:
            from fetias_nodes.node_registry import NodeRegistry
            from fetias_nodes.manifest import register_nodes

            registry = NodeRegistry()
            registry.register_pack(*register_nodes())

        self._registry = registry
        self._credentials = credential_store or {}
        self._settings = settings or get_settings()

    def set_credentials(self, name: str, credentials: Dict[str, Any]) -> None:
        """Store credentials under a reference name."""
        self._credentials[name] = credentials

    def resolve_credentials(self, credentials: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
        """
        Resolve credential references.

        Values may be a reference name into the credential store or an
        inline credential dict.
        """
        resolved: Dict[str, Dict[str, Any]] = {}
        for cred_type, cred_ref in credentials.items():
            if isinstance(cred_ref, str) and cred_ref in self._credentials:
                resolved[cred_type] = self._credentials[cred_ref]
            elif isinstance(cred_ref, dict):
                resolved[cred_type] = cred_ref
            else:
                logger.warning(f"Unresolved credential reference for '{cred_type}'")
        return resolved

    def create_node(self, node_type: str) -> BaseNode:
        try:
            return self._registry.create_node(node_type)
        except KeyError as e:
            raise NodeOperationError(f"Unknown node type: {node_type}") from e

    def build_context(
        self,
        parameters: Dict[str, Any],
        credentials: Dict[str, Any],
        input_data: List[Dict[str, Any]],
        continue_on_fail: bool = False,
        node_name: Optional[str] = None,
    ) -> NodeExecutionContext:
        items = [item.to_execution_data() for item in NodeItem.from_list(input_data)]
        return NodeExecutionContext(
            parameters=parameters,
            credentials=self.resolve_credentials(credentials),
            input_data=items,
            continue_on_fail=continue_on_fail,
            node_name=node_name,
            http_client=HttpClient(timeout=self._settings.http_timeout_s),
        )

    def run(
        self,
        node_type: str,
        parameters: Dict[str, Any],
        credentials: Optional[Dict[str, Any]] = None,
        input_data: Optional[List[Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
        node_name: Optional[str] = None,
    ) -> List[List[NodeExecutionData]]:
        """
        Execute one node over its input items.

        Returns:
            Output data: List[List[NodeExecutionData]] - branches of items

        Raises:
            NodeOperationError: Unknown node type, or any node failure when
                continue_on_fail is off
        """
        node = self.create_node(node_type)
        context = self.build_context(
            parameters,
            credentials or {},
            input_data if input_data is not None else [{"json": {}}],
            continue_on_fail=continue_on_fail,
            node_name=node_name,
        )
        node.set_context(context)

        logger.debug(
            f"Running node {node_name or node_type}",
            extra=with_node_context(node_type, node_name),
        )
        return node.execute()


__all__ = ["NodeRunner"]
