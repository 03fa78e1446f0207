"""HTTP API routes for the vault lifecycle."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...models.vault import OpenVaultRequest, VaultConfig
from ...services.workspace import VaultContext
from ..dependencies import get_vault_context

router = APIRouter()


class StatusResponse(BaseModel):
    """Generic acknowledgement."""

    status: str


@router.post("/api/vault/open", response_model=VaultConfig)
def open_vault(
    payload: OpenVaultRequest,
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> VaultConfig:
    """Open a vault directory and index all of its notes."""
    return context.open(payload.path)


@router.post("/api/vault/close", response_model=StatusResponse)
def close_vault(
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> StatusResponse:
    """Close the current vault and discard its index."""
    context.close()
    return StatusResponse(status="closed")


__all__ = ["router", "StatusResponse"]
