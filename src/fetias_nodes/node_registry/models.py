"""
Node pack manifest model.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NodePackManifest(BaseModel):
    """
    Metadata for a node pack (a set of nodes shipped together).
    """
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Pack name")
    version: str = Field("0.1.0", description="Pack version")
    description: str = Field("", description="Pack description")

    nodes: List[str] = Field(
        default_factory=list,
        description="Node types provided by this pack"
    )
    credentials: List[str] = Field(
        default_factory=list,
        description="Credential types the nodes of this pack use"
    )


__all__ = ["NodePackManifest"]
