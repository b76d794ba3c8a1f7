"""
fetias-nodes - Integration nodes for the FETIAS, FriendGrid and HaloPSA APIs.

Subpackages:
- node_sdk: BaseNode, execution context, HTTP client, item policy, runner
- node_registry: node discovery and registration
- credentials: credential type definitions
- nodes: the integration nodes
"""

__version__ = "0.1.0"
