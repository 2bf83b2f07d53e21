"""SQLite connection handling for the document store."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from fitplan.db.schema import get_schema_sql

# Seconds a writer waits on a locked database before failing
BUSY_TIMEOUT_SECONDS = 5.0


class DatabaseConnection:
    """Opens short-lived connections to one SQLite file.

    Each ``get_connection`` block is a single transaction, which is what
    the store relies on for its atomic create-if-absent.
    """

    def __init__(self, db_path: Path, timeout: float = BUSY_TIMEOUT_SECONDS):
        self.db_path = Path(db_path)
        self.timeout = timeout
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection that commits on exit and rolls back on error."""
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create the documents table and index (idempotent)."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())

    def collection_counts(self) -> dict[str, int]:
        """Number of stored documents per collection."""
        with self.get_connection() as conn:
            rows = conn.execute(
                "SELECT collection, COUNT(*) AS n FROM documents "
                "GROUP BY collection ORDER BY collection"
            ).fetchall()
        return {row["collection"]: row["n"] for row in rows}


_db: Optional[DatabaseConnection] = None


def get_db() -> DatabaseConnection:
    """Return the process-wide connection, created from settings on first use."""
    global _db
    if _db is None:
        from fitplan.config import get_settings

        _db = DatabaseConnection(get_settings().database.path)
    return _db


def set_db(db: Optional[DatabaseConnection]) -> None:
    """Replace the process-wide connection (tests point this at a temp file)."""
    global _db
    _db = db
