"""HTTP API routes for search operations."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from ...models.search import SearchResult
from ...services.workspace import VaultContext
from ..dependencies import get_vault_context

router = APIRouter()


@router.get("/api/search", response_model=list[SearchResult])
def search_notes(
    context: Annotated[VaultContext, Depends(get_vault_context)],
    q: str = Query(..., min_length=1, max_length=256),
    limit: Optional[int] = Query(None, ge=1, le=100),
) -> list[SearchResult]:
    """Full-text search across all notes."""
    return context.search_notes(q, limit)


__all__ = ["router"]
