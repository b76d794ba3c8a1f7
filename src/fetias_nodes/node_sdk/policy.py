"""
Per-item processing under the host's continue-on-fail policy.

Nodes hand a per-item function to process_items(); it returns one
ItemResult per input item instead of making control-flow decisions
inside the node.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from fetias_nodes.observability import with_node_context

from .basenode import NodeExecutionData, NodeOperationError


logger = logging.getLogger(__name__)


@dataclass
class ItemResult:
    """Outcome of processing one input item."""
    index: int
    data: Any = None
    error: Optional[Exception] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        if isinstance(self.error, NodeOperationError):
            return self.error.message
        return str(self.error)


def process_items(
    items: Sequence[Dict[str, Any]],
    fn: Callable[[int, Dict[str, Any]], Any],
    continue_on_fail: bool,
) -> List[ItemResult]:
    """
    Run ``fn(index, item)`` for every item, in order.

    With ``continue_on_fail`` off the first exception propagates and
    no further items run. With it on, the failure is recorded in that
    item's result and processing moves to the next item.
    """
    results: List[ItemResult] = []
    for index, item in enumerate(items):
        try:
            results.append(ItemResult(index=index, data=fn(index, item)))
        except Exception as e:
            if not continue_on_fail:
                raise
            logger.warning(
                f"Item {index} failed, continuing: {e}",
                extra=with_node_context(item_index=index),
            )
            results.append(ItemResult(index=index, error=e))
    return results


def results_to_items(results: Sequence[ItemResult]) -> List[NodeExecutionData]:
    """
    Flatten item results into output items.

    A list response contributes one item per entry, a single object one
    item, an empty response nothing. Failed items become {"error": message}.
    Values that are not JSON objects (plain text, numbers) become {"data": value}.
    """
    output: List[NodeExecutionData] = []
    for result in results:
        paired = {"item": result.index}
        if result.is_error:
            output.append({"json": {"error": result.error_message}, "pairedItem": paired})
        elif isinstance(result.data, list):
            output.extend({"json": _as_object(record), "pairedItem": paired} for record in result.data)
        elif result.data is not None:
            output.append({"json": _as_object(result.data), "pairedItem": paired})
    return output


def _as_object(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {"data": value}


__all__ = ["ItemResult", "process_items", "results_to_items"]
