"""Service layer: parsing, link graph, search, and indexing."""

from .config import AppConfig, get_config, reload_config
from .database import DatabaseService
from .indexer import IndexerService, resolve_title
from .linker import LinkGraph, note_name
from .parser import parse_note
from .search_index import InvalidQueryError, SearchIndex, SearchIndexError
from .vault import (
    VaultError,
    VaultNotOpenError,
    describe_vault,
    iter_note_paths,
    read_text,
    sanitize_path,
    validate_note_path,
)
from .workspace import VaultContext

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "DatabaseService",
    "IndexerService",
    "resolve_title",
    "LinkGraph",
    "note_name",
    "parse_note",
    "SearchIndex",
    "SearchIndexError",
    "InvalidQueryError",
    "VaultError",
    "VaultNotOpenError",
    "describe_vault",
    "iter_note_paths",
    "read_text",
    "sanitize_path",
    "validate_note_path",
    "VaultContext",
]
