"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    vault_path: Optional[Path] = Field(
        default=None,
        description="Vault directory to open at startup (optional)",
    )
    index_db_path: Optional[Path] = Field(
        default=None,
        description="SQLite file backing the search index (in memory when unset)",
    )
    search_limit: int = Field(
        default=20, ge=1, le=100, description="Default number of search results"
    )
    local_graph_depth: int = Field(
        default=2, ge=0, le=10, description="Default hop count for local graphs"
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("vault_path", mode="before")
    @classmethod
    def _normalize_vault_path(cls, value: str | Path | None) -> Optional[Path]:
        if value is None or value == "":
            return None
        return Path(value).expanduser().resolve()

    @field_validator("index_db_path", mode="before")
    @classmethod
    def _normalize_index_path(cls, value: str | Path | None) -> Optional[Path]:
        if value is None or value == "":
            return None
        return Path(value).expanduser().resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Optional[str]) -> str:
        level = (value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration."""
    return AppConfig(
        vault_path=_read_env("NOTEGRAPH_VAULT_PATH"),
        index_db_path=_read_env("NOTEGRAPH_INDEX_DB"),
        search_limit=_read_env("NOTEGRAPH_SEARCH_LIMIT", "20"),
        local_graph_depth=_read_env("NOTEGRAPH_LOCAL_GRAPH_DEPTH", "2"),
        log_level=_read_env("NOTEGRAPH_LOG_LEVEL", "INFO"),
    )


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


__all__ = ["AppConfig", "get_config", "reload_config"]
