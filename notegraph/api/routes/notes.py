"""HTTP API routes for note link queries."""

from __future__ import annotations

from typing import Annotated
from urllib.parse import unquote

from fastapi import APIRouter, Depends, Query

from ...models.note import ParsedNote, ResolvedLink
from ...services.workspace import VaultContext
from ..dependencies import get_vault_context

router = APIRouter()


@router.get("/api/backlinks/{path:path}", response_model=list[str])
def get_backlinks(
    path: str,
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> list[str]:
    """Get all notes that link to this note."""
    return context.get_backlinks(unquote(path))


@router.get("/api/notes/names", response_model=list[str])
def get_note_names(
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> list[str]:
    """List every registered note name (for wikilink autocompletion)."""
    return context.get_note_names()


@router.get("/api/notes/resolve", response_model=ResolvedLink)
def resolve_wikilink(
    context: Annotated[VaultContext, Depends(get_vault_context)],
    name: str = Query(..., min_length=1, max_length=256),
) -> ResolvedLink:
    """Resolve a wikilink name to a note path; path is null for dangling links."""
    return ResolvedLink(name=name, path=context.resolve_wikilink(name))


@router.get("/api/notes/parsed/{path:path}", response_model=ParsedNote)
def get_parsed_note(
    path: str,
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> ParsedNote:
    """Return the links, tags, and front-matter of a note on disk."""
    return context.parse_file(unquote(path))


__all__ = ["router"]
