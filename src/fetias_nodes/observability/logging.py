"""Structured JSON logging with node context."""
import logging
import sys
from typing import Any, Optional

from pythonjsonlogger import jsonlogger

from fetias_nodes.config import get_settings

_CONTEXT_FIELDS = ("node_type", "node_name", "item_index", "operation", "resource")


class NodeContextFilter(logging.Filter):
    """Add node context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add default node context fields if not present."""
        for field_name in _CONTEXT_FIELDS:
            if not hasattr(record, field_name):
                setattr(record, field_name, None)
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with standardized field names."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        for field_name in _CONTEXT_FIELDS:
            value = getattr(record, field_name, None)
            if value is not None:
                log_record[field_name] = value


def setup_logging() -> None:
    """Configure structured JSON logging for the application."""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(NodeContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def with_node_context(
    node_type: Optional[str] = None,
    node_name: Optional[str] = None,
    item_index: Optional[int] = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Create an extra dict with node context for logging.

    Args:
        node_type: Node type identifier
        node_name: Node instance name in the workflow
        item_index: Index of the input item being processed
        **kwargs: Additional context fields (operation, resource, ...)

    Returns:
        Dict to pass as extra parameter to logger methods
    """
    extra = {k: v for k, v in kwargs.items() if v is not None}
    if node_type:
        extra["node_type"] = node_type
    if node_name:
        extra["node_name"] = node_name
    if item_index is not None:
        extra["item_index"] = item_index
    return extra
