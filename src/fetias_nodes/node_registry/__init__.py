"""
Node Registry - Node pack registration and discovery.

- NodePackManifest: metadata for a node pack
- NodeRegistry: node classes by type name, filled from packs or entry points
"""

from .models import NodePackManifest
from .registry import NODE_PACK_ENTRY_POINT, NodeRegistry

__all__ = [
    "NodePackManifest",
    "NodeRegistry",
    "NODE_PACK_ENTRY_POINT",
]
