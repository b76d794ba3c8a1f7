"""
Node pack manifest for the FETIAS, FriendGrid and HaloPSA nodes.

register_nodes() is the ``fetias_nodes.nodepacks`` entry point.
"""

from fetias_nodes.credentials import CREDENTIAL_TYPES
from fetias_nodes.node_registry.models import NodePackManifest
from fetias_nodes.nodes import FetiasNode, FriendGridNode, HaloPSANode


# Node classes by type
NODE_CLASSES = {
    FetiasNode.type: FetiasNode,
    FriendGridNode.type: FriendGridNode,
    HaloPSANode.type: HaloPSANode,
}

MANIFEST = NodePackManifest(
    name="fetias-nodes",
    version="0.1.0",
    description="FETIAS, FriendGrid and HaloPSA integration nodes",
    nodes=list(NODE_CLASSES),
    credentials=list(CREDENTIAL_TYPES),
)


def register_nodes():
    """Return (manifest, node_classes) for registry discovery."""
    return MANIFEST, NODE_CLASSES


__all__ = [
    "MANIFEST",
    "NODE_CLASSES",
    "register_nodes",
]
