"""API route modules."""

from . import graph, index, notes, search, vault

__all__ = ["graph", "index", "notes", "search", "vault"]
