"""Indexing orchestration: parse notes and fan results out to graph and search."""

from __future__ import annotations

import logging
from pathlib import Path
import time

from ..models.note import ParsedNote
from ..models.vault import IndexStats
from .linker import LinkGraph, note_name
from .parser import parse_note
from .search_index import SearchIndex, SearchIndexError
from .vault import iter_note_paths, read_listed_text, read_text

logger = logging.getLogger(__name__)


def resolve_title(note_path: str, parsed: ParsedNote) -> str:
    """Prefer the front-matter title, falling back to the file stem."""
    title = parsed.frontmatter.get("title")
    if title:
        return title
    return note_name(note_path)


class IndexerService:
    """Apply parsed notes to the link graph and the search index."""

    def __init__(self, link_graph: LinkGraph, search_index: SearchIndex) -> None:
        self.link_graph = link_graph
        self.search_index = search_index

    def index_vault(self, vault_root: Path) -> IndexStats:
        """
        Index every note under ``vault_root``.

        Unreadable files are skipped and search failures are logged; neither
        stops the scan.
        """
        start_time = time.time()
        indexed = 0
        skipped = 0

        for note_path in iter_note_paths(vault_root):
            try:
                content = read_listed_text(vault_root, note_path)
            except (OSError, UnicodeDecodeError) as exc:
                skipped += 1
                logger.warning(
                    "Skipping unreadable note",
                    extra={"note_path": note_path, "error": str(exc)},
                )
                continue

            try:
                self.apply(note_path, content)
            except SearchIndexError as exc:
                logger.warning(
                    "Search index update failed during full scan",
                    extra={"note_path": note_path, "error": str(exc)},
                )
            indexed += 1

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Vault indexed",
            extra={
                "vault_root": str(vault_root),
                "notes_indexed": indexed,
                "notes_skipped": skipped,
                "duration_ms": f"{duration_ms:.2f}",
            },
        )
        return IndexStats(notes_indexed=indexed, notes_skipped=skipped, duration_ms=duration_ms)

    def reindex_file(self, vault_root: Path, note_path: str) -> ParsedNote:
        """Re-read and re-apply a single note. Read and search errors propagate."""
        content = read_text(vault_root, note_path)
        parsed = self.apply(note_path, content)
        logger.info(
            "Note reindexed",
            extra={
                "note_path": note_path,
                "tags_count": len(parsed.tags),
                "wikilinks_count": len(parsed.links),
            },
        )
        return parsed

    def remove_file(self, note_path: str) -> None:
        """Drop a deleted note from the graph, then from the search index."""
        self.link_graph.remove_note(note_path)
        self.search_index.remove(note_path)
        logger.info("Note removed from index", extra={"note_path": note_path})

    def apply(self, note_path: str, content: str) -> ParsedNote:
        """
        Parse ``content`` and apply it for ``note_path``.

        The link graph is updated before the search upsert is attempted, so a
        search failure never leaves the graph stale.
        """
        parsed = parse_note(content)

        self.link_graph.register_note(note_path)
        self.link_graph.update_links(note_path, parsed.links)

        self.search_index.upsert(
            note_path, resolve_title(note_path, parsed), content, parsed.tags
        )
        return parsed


__all__ = ["IndexerService", "resolve_title"]
