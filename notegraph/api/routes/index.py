"""HTTP API routes for index operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...models.note import NotePathRequest
from ...models.vault import IndexStats
from ...services.workspace import VaultContext
from ..dependencies import get_vault_context

router = APIRouter()


class IndexUpdateResponse(BaseModel):
    """Response from a single-note index update."""

    status: str
    path: str


@router.post("/api/index/reindex", response_model=IndexUpdateResponse)
def reindex_note(
    payload: NotePathRequest,
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> IndexUpdateResponse:
    """Re-index a single note after it changed on disk."""
    context.reindex_file(payload.path)
    return IndexUpdateResponse(status="indexed", path=payload.path)


@router.post("/api/index/remove", response_model=IndexUpdateResponse)
def remove_note(
    payload: NotePathRequest,
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> IndexUpdateResponse:
    """Drop a deleted note from the link graph and search index."""
    context.remove_file(payload.path)
    return IndexUpdateResponse(status="removed", path=payload.path)


@router.post("/api/index/rebuild", response_model=IndexStats)
def rebuild_index(
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> IndexStats:
    """Rebuild the entire index from scratch."""
    return context.rebuild()


__all__ = ["router", "IndexUpdateResponse"]
