"""Note-related Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ParsedNote(BaseModel):
    """Structured facts extracted from one note's raw text."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "links": ["World", "Another Note", "World"],
                "tags": ["rust", "tauri", "draft"],
                "frontmatter": {"title": "My Note", "status": "draft"},
            }
        },
    )

    links: list[str] = Field(
        default_factory=list,
        description="Raw wikilink targets in document order (duplicates kept)",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Front-matter and inline tags, deduplicated in first-seen order",
    )
    frontmatter: dict[str, str] = Field(
        default_factory=dict, description="Flat front-matter key/value pairs"
    )

    @property
    def title(self) -> str | None:
        return self.frontmatter.get("title")


class NotePathRequest(BaseModel):
    """Request payload naming a single note."""

    path: str = Field(..., min_length=1, max_length=256, description="Vault-relative note path")


class ResolvedLink(BaseModel):
    """Result of resolving a wikilink name."""

    name: str
    path: str | None = Field(None, description="Null when the link is dangling")


__all__ = ["ParsedNote", "NotePathRequest", "ResolvedLink"]
