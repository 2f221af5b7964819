"""
Pydantic request models for the graph editor API.
"""
from typing import Optional

from pydantic import BaseModel, Field

from graph_core.codec import GraphFormat
from graph_core.layout import LayoutStrategy
from graph_core.models import Weight


class GraphTextRequest(BaseModel):
    """Raw text from the editor's input box."""
    text: str = ""
    format: GraphFormat = GraphFormat.EDGE_LIST
    directed: bool = False


class UpdateGraphRequest(BaseModel):
    """Request to update graph-level settings."""
    directed: Optional[bool] = None


class CreateNodeRequest(BaseModel):
    """Request to create a new node. Omit `id` to take the next free id."""
    id: Optional[int] = Field(default=None, ge=0)
    x: float = 0.0
    y: float = 0.0


class CreateEdgeRequest(BaseModel):
    """Request to create a new edge."""
    source: int
    target: int
    weight: Optional[Weight] = None


class LayoutRequest(BaseModel):
    strategy: LayoutStrategy = "circle"
