"""SQLite database helpers for the full-text search schema."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
import sqlite3
import threading
from typing import Iterable, Iterator, Optional

DDL_STATEMENTS: tuple[str, ...] = (
    "PRAGMA journal_mode=WAL",
    """
    CREATE VIRTUAL TABLE IF NOT EXISTS note_fts USING fts5(
        path UNINDEXED,
        title,
        body,
        tags,
        tokenize='porter unicode61',
        prefix='2 3'
    )
    """,
)


class DatabaseService:
    """
    Manage SQLite connections and schema initialization.

    With a ``db_path`` every caller gets its own connection to that file.
    Without one the index lives in a private in-memory database: a single
    connection shared across threads, used by one caller at a time.
    """

    def __init__(self, db_path: str | Path | None = None):
        self.db_path: Optional[Path] = Path(db_path) if db_path else None
        self._memory_conn: Optional[sqlite3.Connection] = None
        self._memory_lock = threading.Lock()
        if self.db_path is None:
            self._memory_conn = sqlite3.connect(":memory:", check_same_thread=False)
            self._memory_conn.row_factory = sqlite3.Row

    @property
    def in_memory(self) -> bool:
        return self.db_path is None

    def _ensure_directory(self) -> None:
        if self.db_path is not None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> sqlite3.Connection:
        """Return a new sqlite3 connection to the on-disk database."""
        if self.db_path is None:
            raise RuntimeError("In-memory databases are only reachable through connection()")
        self._ensure_directory()
        conn = sqlite3.connect(self.db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for one unit of work and release it afterwards."""
        if self._memory_conn is not None:
            with self._memory_lock:
                yield self._memory_conn
            return

        conn = self.connect()
        try:
            yield conn
        finally:
            conn.close()

    def initialize(self, statements: Iterable[str] | None = None) -> Optional[Path]:
        """Create all schema artifacts required for indexing."""
        with self.connection() as conn:
            with conn:
                for statement in statements or DDL_STATEMENTS:
                    conn.execute(statement)
        return self.db_path

    def close(self) -> None:
        """Release the in-memory database, if any."""
        if self._memory_conn is not None:
            with self._memory_lock:
                self._memory_conn.close()
                self._memory_conn = None


__all__ = ["DatabaseService"]
