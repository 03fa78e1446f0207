"""Search request/response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

SNIPPET_LENGTH = 200


class SearchResult(BaseModel):
    """Full-text search result payload."""

    path: str
    title: str
    snippet: str = Field(..., description="Leading body excerpt, '...' suffixed when truncated")
    score: float = Field(..., description="Relevance score (higher is better)")


def make_snippet(body: str, length: int = SNIPPET_LENGTH) -> str:
    """Return the first ``length`` characters of ``body``, marking truncation."""
    if len(body) > length:
        return f"{body[:length]}..."
    return body


__all__ = ["SearchResult", "make_snippet", "SNIPPET_LENGTH"]
