from .fields import HaloPSAResource, RESOURCE_FIELDS, process_fields
from .node import HaloPSANode

__all__ = [
    "HaloPSANode",
    "HaloPSAResource",
    "RESOURCE_FIELDS",
    "process_fields",
]
