from .api import FetiasApiConfig, api_request, api_request_all_items, build_request
from .node import FetiasNode

__all__ = [
    "FetiasApiConfig",
    "FetiasNode",
    "api_request",
    "api_request_all_items",
    "build_request",
]
