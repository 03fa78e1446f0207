"""Full-text search index over vault notes, backed by SQLite FTS5."""

from __future__ import annotations

import logging
import re
import sqlite3
import threading
import time
from typing import Iterable, List, Sequence

from ..models.search import SearchResult, make_snippet
from .database import DatabaseService

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\w+\*?")


class SearchIndexError(Exception):
    """Raised when the search index cannot be written or queried."""


class InvalidQueryError(SearchIndexError, ValueError):
    """Raised when query text has nothing searchable in it."""


def _prepare_match_query(query: str) -> str:
    """
    Sanitize user-supplied query text for FTS5 MATCH usage.

    - Extracts Unicode word tokens (letters, digits, underscore in any script).
    - Preserves a single trailing '*' to allow prefix searches.
    - Wraps each token in double quotes to neutralize MATCH operators.
    """
    sanitized_terms: List[str] = []

    for match in TOKEN_PATTERN.finditer(query or ""):
        token = match.group()
        has_prefix_star = token.endswith("*")
        core = token[:-1] if has_prefix_star else token
        if not core:
            continue
        sanitized_terms.append(f'"{core}"{"*" if has_prefix_star else ""}')

    if not sanitized_terms:
        raise InvalidQueryError("Search query must contain letters or digits")

    return " ".join(sanitized_terms)


class SearchIndex:
    """
    Document store with replace-by-path upserts and ranked text queries.

    Writes are serialised by a mutex; queries see the most recent committed
    write. Without a database path the index is private to this instance.
    """

    def __init__(self, db_service: DatabaseService | None = None) -> None:
        self.db_service = db_service or DatabaseService()
        self._writer_lock = threading.Lock()
        try:
            self.db_service.initialize()
        except sqlite3.Error as exc:
            raise SearchIndexError(f"Failed to initialize search index: {exc}") from exc

    def upsert(self, path: str, title: str, body: str, tags: Sequence[str]) -> None:
        """Insert or fully replace the document stored for ``path``."""
        self._write(
            (
                ("DELETE FROM note_fts WHERE path = ?", (path,)),
                (
                    "INSERT INTO note_fts (path, title, body, tags) VALUES (?, ?, ?, ?)",
                    (path, title, body, " ".join(tags)),
                ),
            ),
            action="upsert",
            path=path,
        )

    def remove(self, path: str) -> None:
        """Remove the document stored for ``path`` (no-op when absent)."""
        self._write(
            (("DELETE FROM note_fts WHERE path = ?", (path,)),),
            action="remove",
            path=path,
        )

    def clear(self) -> None:
        self._write((("DELETE FROM note_fts", ()),), action="clear", path=None)

    def document_count(self) -> int:
        try:
            with self.db_service.connection() as conn:
                row = conn.execute("SELECT COUNT(*) AS count FROM note_fts").fetchone()
        except sqlite3.Error as exc:
            raise SearchIndexError(f"Failed to count documents: {exc}") from exc
        return int(row["count"])

    def query(self, text: str, limit: int = 20) -> List[SearchResult]:
        """Return up to ``limit`` documents matching ``text``, best first."""
        if not text or not text.strip():
            raise InvalidQueryError("Search query cannot be empty")
        if limit < 1:
            raise InvalidQueryError("Search limit must be positive")

        sanitized_query = _prepare_match_query(text)

        try:
            with self.db_service.connection() as conn:
                rows = conn.execute(
                    """
                    SELECT
                        path,
                        title,
                        body,
                        bm25(note_fts, 0.0, 3.0, 1.0, 2.0) AS rank
                    FROM note_fts
                    WHERE note_fts MATCH ?
                    ORDER BY rank ASC
                    LIMIT ?
                    """,
                    (sanitized_query, limit),
                ).fetchall()
        except sqlite3.Error as exc:
            raise SearchIndexError(f"Search failed: {exc}") from exc

        # bm25() is lower-is-better; flip it so callers can sort descending.
        return [
            SearchResult(
                path=row["path"],
                title=row["title"],
                snippet=make_snippet(row["body"] or ""),
                score=-float(row["rank"]),
            )
            for row in rows
        ]

    def _write(
        self,
        statements: Iterable[tuple[str, tuple]],
        *,
        action: str,
        path: str | None,
    ) -> None:
        start_time = time.time()
        with self._writer_lock:
            try:
                with self.db_service.connection() as conn, conn:
                    for sql, params in statements:
                        conn.execute(sql, params)
            except sqlite3.Error as exc:
                raise SearchIndexError(f"Search index {action} failed for {path}: {exc}") from exc

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "Search index updated",
            extra={
                "action": action,
                "note_path": path,
                "duration_ms": f"{duration_ms:.2f}",
            },
        )


__all__ = ["SearchIndex", "SearchIndexError", "InvalidQueryError"]
