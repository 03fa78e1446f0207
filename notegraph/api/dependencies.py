"""Request dependencies shared by the API routes."""

from __future__ import annotations

from fastapi import Request

from ..services.workspace import VaultContext


def get_vault_context(request: Request) -> VaultContext:
    """Return the process-wide vault context created at startup."""
    return request.app.state.vault_context


__all__ = ["get_vault_context"]
