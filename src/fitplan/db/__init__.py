"""Persistence layer: SQLite connection and document store."""

from __future__ import annotations

from typing import Optional

from fitplan.db.connection import DatabaseConnection, get_db, set_db
from fitplan.db.store import DocumentStore, SQLiteDocumentStore, day_key


def get_store(db: Optional[DatabaseConnection] = None) -> SQLiteDocumentStore:
    """Return a document store over the given (or global) database."""
    return SQLiteDocumentStore(db or get_db())


__all__ = [
    "DatabaseConnection",
    "DocumentStore",
    "SQLiteDocumentStore",
    "day_key",
    "get_db",
    "get_store",
    "set_db",
]
