"""
Node Items - Data structures flowing through workflows.

NodeItem is the fundamental data unit handed to and returned by nodes.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Keys a host may put on a wrapped item; anything else marks a bare JSON object
WRAPPED_ITEM_KEYS = frozenset({"json", "pairedItem", "binary"})


class PairedItem(BaseModel):
    """
    Reference to the source item that produced this item.
    """
    model_config = ConfigDict(extra="forbid")

    item: int = Field(..., description="Index of source item", ge=0)
    input: int = Field(0, description="Input branch index", ge=0)


class NodeItem(BaseModel):
    """
    A single data item flowing through a workflow.

    Example:
        item = NodeItem.from_any({"json": {"name": "Alice"}})
        item = NodeItem.from_any({"name": "Alice"})
    """
    model_config = ConfigDict(extra="forbid")

    json_data: Dict[str, Any] = Field(default_factory=dict, description="JSON data")
    paired_item: Optional[PairedItem] = Field(
        None,
        description="Reference to source item"
    )

    @classmethod
    def from_any(cls, data: Dict[str, Any]) -> "NodeItem":
        """
        Accept either a wrapped item ({"json": {...}, "pairedItem": {...}})
        or a bare JSON object.

        Only objects whose keys all belong to the wrapped form are unwrapped;
        a bare object that merely has a "json" field is kept whole.
        """
        if isinstance(data.get("json"), dict) and set(data) <= WRAPPED_ITEM_KEYS:
            paired = data.get("pairedItem")
            return cls(
                json_data=data["json"],
                paired_item=PairedItem(**paired) if isinstance(paired, dict) else None,
            )
        return cls(json_data=data)

    @classmethod
    def from_list(cls, items: List[Dict[str, Any]]) -> List["NodeItem"]:
        """Create list of NodeItems from list of dicts."""
        return [cls.from_any(item) for item in items]

    def to_execution_data(self) -> Dict[str, Any]:
        """Wrapped form consumed by nodes."""
        data: Dict[str, Any] = {"json": self.json_data}
        if self.paired_item is not None:
            data["pairedItem"] = self.paired_item.model_dump()
        return data
