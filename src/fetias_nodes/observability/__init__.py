"""Observability module for logging."""
from .logging import setup_logging, with_node_context

__all__ = ["setup_logging", "with_node_context"]
