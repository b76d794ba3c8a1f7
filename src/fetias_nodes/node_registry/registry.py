"""
Node pack registry.

Holds the node classes of one or more packs so the runner can build a
node from its type name. Packs are registered directly or discovered
through the ``fetias_nodes.nodepacks`` entry-point group.
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points
from typing import Dict, List, Type, TYPE_CHECKING

from pydantic import ValidationError

from fetias_nodes.node_sdk.basenode import NodeCredential, NodeParameter

from .models import NodePackManifest


if TYPE_CHECKING:
    from fetias_nodes.node_sdk.basenode import BaseNode


logger = logging.getLogger(__name__)

NODE_PACK_ENTRY_POINT = "fetias_nodes.nodepacks"


class NodeRegistry:
    """
    Node classes by type name.

    Usage:
        registry = NodeRegistry()
        registry.register_pack(*register_nodes())
        node = registry.create_node("haloPSA")
    """

    def __init__(self):
        self._node_classes: Dict[str, Type["BaseNode"]] = {}
        self._packs: Dict[str, NodePackManifest] = {}

    @property
    def node_types(self) -> List[str]:
        return sorted(self._node_classes)

    def register_pack(
        self,
        manifest: NodePackManifest,
        node_classes: Dict[str, Type["BaseNode"]],
    ) -> None:
        """
        Register every node of a pack after checking its schema.

        Raises:
            ValueError: A node's parameter or credential schema is malformed,
                or the manifest lists a node the pack does not provide
        """
        missing = set(manifest.nodes) - set(node_classes)
        if missing:
            raise ValueError(f"Pack '{manifest.name}' lists unknown nodes: {sorted(missing)}")

        for node_type, node_class in node_classes.items():
            _check_schema(node_type, node_class)

        self._node_classes.update(node_classes)
        self._packs[manifest.name] = manifest
        logger.info(f"Registered pack '{manifest.name}' with {len(node_classes)} nodes")

    def discover_entry_points(self) -> int:
        """
        Register every pack exposed under the node pack entry-point group.

        An entry point is a callable returning ``(manifest, node_classes)``.
        Packs that fail to load are logged and skipped.

        Returns:
            Number of packs registered
        """
        count = 0
        for ep in entry_points(group=NODE_PACK_ENTRY_POINT):
            try:
                manifest, node_classes = ep.load()()
                self.register_pack(manifest, node_classes)
            except Exception as e:
                logger.error(f"Skipping node pack '{ep.name}': {e}")
                continue
            count += 1
        return count

    def create_node(self, node_type: str) -> "BaseNode":
        """
        Instantiate the node registered under ``node_type``.

        Raises:
            KeyError: No pack provides that node type
        """
        try:
            node_class = self._node_classes[node_type]
        except KeyError:
            raise KeyError(f"Unknown node type: {node_type}") from None
        return node_class()


def _check_schema(node_type: str, node_class: Type["BaseNode"]) -> None:
    try:
        for parameter in node_class.properties.get("parameters", []):
            NodeParameter(**parameter)
        for credential in node_class.description.get("credentials", []):
            NodeCredential(**credential)
    except ValidationError as e:
        raise ValueError(f"Node '{node_type}' has an invalid schema: {e}") from e


__all__ = [
    "NODE_PACK_ENTRY_POINT",
    "NodeRegistry",
]
