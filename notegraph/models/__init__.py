"""Pydantic models for data validation and serialization."""

from .graph import GraphData, GraphEdge, GraphNode
from .note import NotePathRequest, ParsedNote, ResolvedLink
from .search import SearchResult
from .vault import IndexStats, OpenVaultRequest, VaultConfig

__all__ = [
    "ParsedNote",
    "NotePathRequest",
    "ResolvedLink",
    "GraphNode",
    "GraphEdge",
    "GraphData",
    "SearchResult",
    "VaultConfig",
    "OpenVaultRequest",
    "IndexStats",
]
