"""Vault lifecycle models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VaultConfig(BaseModel):
    """Description of an opened vault."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "path": "/home/alice/notes",
                "name": "notes",
                "is_git_repo": True,
            }
        }
    )

    path: str = Field(..., description="Absolute vault root")
    name: str = Field(..., description="Vault directory name")
    is_git_repo: bool = Field(False, description="True when the root holds a .git entry")


class OpenVaultRequest(BaseModel):
    """Request payload to open a vault."""

    path: str = Field(..., min_length=1)


class IndexStats(BaseModel):
    """Summary of a full vault index run."""

    notes_indexed: int = Field(0, ge=0)
    notes_skipped: int = Field(0, ge=0)
    duration_ms: float = Field(0.0, ge=0)


__all__ = ["VaultConfig", "OpenVaultRequest", "IndexStats"]
