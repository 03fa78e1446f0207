"""Graph data models."""

from typing import List
from pydantic import BaseModel, Field

class GraphNode(BaseModel):
    """Represents a single note (or dangling link target) in the graph."""
    id: str = Field(..., description="Unique identifier (note name)")
    label: str = Field(..., description="Display label of the note")
    path: str = Field(..., description="Vault-relative path, synthetic '<name>.md' when unresolved")
    backlink_count: int = Field(default=0, ge=0, description="Number of edges pointing at this node")

class GraphEdge(BaseModel):
    """Represents a directed connection between two notes."""
    source: str = Field(..., description="ID of the source note")
    target: str = Field(..., description="ID of the target note")

class GraphData(BaseModel):
    """The top-level payload returned by the API."""
    nodes: List[GraphNode]
    edges: List[GraphEdge]
