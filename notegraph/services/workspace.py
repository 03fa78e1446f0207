"""Vault context: the explicitly owned state shared by every request handler."""

from __future__ import annotations

import logging
from pathlib import Path
import threading
from typing import List, Optional

from ..models.graph import GraphData
from ..models.note import ParsedNote
from ..models.search import SearchResult
from ..models.vault import IndexStats, VaultConfig
from .config import AppConfig, get_config
from .database import DatabaseService
from .indexer import IndexerService
from .linker import LinkGraph
from .parser import parse_note
from .search_index import SearchIndex
from .vault import VaultNotOpenError, describe_vault, read_text

logger = logging.getLogger(__name__)


class VaultContext:
    """
    Own the link graph and search index for one open vault at a time.

    Construct one per process (or per test) and pass it to handlers; ``open``
    rebuilds everything from disk and ``close`` discards it.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        search_index: SearchIndex | None = None,
        link_graph: LinkGraph | None = None,
    ) -> None:
        self.config = config or get_config()
        self.link_graph = link_graph or LinkGraph()
        self.search_index = search_index or SearchIndex(
            DatabaseService(self.config.index_db_path)
        )
        self.indexer = IndexerService(self.link_graph, self.search_index)
        self._vault_path: Optional[Path] = None
        self._state_lock = threading.Lock()

    @property
    def vault_path(self) -> Optional[Path]:
        return self._vault_path

    @property
    def is_open(self) -> bool:
        return self._vault_path is not None

    def _require_vault(self) -> Path:
        vault_path = self._vault_path
        if vault_path is None:
            raise VaultNotOpenError()
        return vault_path

    def open(self, path: str | Path) -> VaultConfig:
        """Open a vault directory and index all of its notes."""
        vault = describe_vault(path)
        with self._state_lock:
            self.search_index.clear()
            self.link_graph.clear()
            self._vault_path = Path(vault.path)
            stats = self.indexer.index_vault(self._vault_path)
        logger.info(
            "Vault opened",
            extra={
                "vault_root": vault.path,
                "is_git_repo": vault.is_git_repo,
                "notes_indexed": stats.notes_indexed,
            },
        )
        return vault

    def close(self) -> None:
        with self._state_lock:
            if self._vault_path is None:
                return
            logger.info("Vault closed", extra={"vault_root": str(self._vault_path)})
            self.search_index.clear()
            self.link_graph.clear()
            self._vault_path = None

    def rebuild(self) -> IndexStats:
        """Discard and rebuild the graph and search index from disk."""
        with self._state_lock:
            vault_path = self._require_vault()
            self.search_index.clear()
            self.link_graph.clear()
            return self.indexer.index_vault(vault_path)

    def get_backlinks(self, path: str) -> List[str]:
        return self.link_graph.get_backlinks(path)

    def get_note_names(self) -> List[str]:
        return sorted(self.link_graph.get_all_note_names())

    def resolve_wikilink(self, name: str) -> Optional[str]:
        return self.link_graph.resolve_link(name)

    def get_graph_data(self) -> GraphData:
        return self.link_graph.get_graph_data()

    def get_local_graph(self, path: str, depth: int | None = None) -> GraphData:
        if depth is None:
            depth = self.config.local_graph_depth
        return self.link_graph.get_local_graph(path, depth)

    def reindex_file(self, path: str) -> ParsedNote:
        return self.indexer.reindex_file(self._require_vault(), path)

    def remove_file(self, path: str) -> None:
        self._require_vault()
        self.indexer.remove_file(path)

    def parse_file(self, path: str) -> ParsedNote:
        """Read and parse a note without touching the index."""
        return parse_note(read_text(self._require_vault(), path))

    def search_notes(self, query: str, limit: int | None = None) -> List[SearchResult]:
        return self.search_index.query(query, limit or self.config.search_limit)


__all__ = ["VaultContext"]
