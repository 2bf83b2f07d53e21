"""Document store used by the engine.

The engine only needs get/set/update/query plus atomic create and
read-modify-write, so the store is modelled as a small abstract interface.
SQLiteDocumentStore keeps every collection in a single ``documents`` table
with JSON bodies.

Filters are ``(field, op, value)`` tuples. Fields may be dotted paths into
nested documents (e.g. ``"pattern.name"``).
"""

from __future__ import annotations

import json
import logging
import uuid
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Callable, Optional

from fitplan.db.connection import DatabaseConnection
from fitplan.errors import NotFoundError

logger = logging.getLogger(__name__)

Filter = tuple[str, str, Any]
OrderBy = tuple[str, str]

_MISSING = object()


def day_key(user_id: str, day_iso: str) -> str:
    """Build the ``{userId}_{YYYY-MM-DD}`` key used by per-day collections."""
    return f"{user_id}_{day_iso}"


def get_field(document: dict, path: str) -> Any:
    """Resolve a dotted field path, returning _MISSING if absent."""
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _set_field(document: dict, path: str, value: Any) -> None:
    parts = path.split(".")
    target = document
    for part in parts[:-1]:
        nested = target.get(part)
        if not isinstance(nested, dict):
            nested = {}
            target[part] = nested
        target = nested
    target[parts[-1]] = value


def _matches(document: dict, flt: Filter) -> bool:
    """Evaluate one filter against a document."""
    path, op, expected = flt
    actual = get_field(document, path)

    if op == "==":
        return actual is not _MISSING and actual == expected
    if op == "!=":
        return actual is _MISSING or actual != expected
    if op == "in":
        return actual is not _MISSING and actual in expected
    if op == "array-contains":
        return isinstance(actual, list) and expected in actual

    if actual is _MISSING or actual is None:
        return False
    if op == "<":
        return actual < expected
    if op == "<=":
        return actual <= expected
    if op == ">":
        return actual > expected
    if op == ">=":
        return actual >= expected

    raise ValueError(f"Unknown filter operator: {op}")


def apply_query(
    documents: list[dict],
    filters: Optional[list[Filter]] = None,
    order_by: Optional[OrderBy] = None,
    limit: Optional[int] = None,
) -> list[dict]:
    """Filter, order and limit a list of documents in memory."""
    results = [d for d in documents if all(_matches(d, f) for f in filters or [])]

    if order_by is not None:
        field_path, direction = order_by
        if direction not in ("asc", "desc"):
            raise ValueError(f"order direction must be 'asc' or 'desc', got '{direction}'")
        # Documents without the field sort last, like a missing index entry
        present = [d for d in results if get_field(d, field_path) not in (_MISSING, None)]
        absent = [d for d in results if get_field(d, field_path) in (_MISSING, None)]
        present.sort(
            key=lambda d: get_field(d, field_path),
            reverse=direction == "desc",
        )
        results = present + absent

    if limit is not None:
        results = results[:limit]

    return results


class DocumentStore(ABC):
    """Abstract key/value + query document store."""

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[dict]:
        """Return the document stored under key, or None."""

    @abstractmethod
    def set(self, collection: str, key: str, document: dict) -> None:
        """Upsert a document, replacing any previous body."""

    @abstractmethod
    def update(self, collection: str, key: str, partial: dict) -> dict:
        """Merge fields into an existing document and return the result.

        Keys of ``partial`` may be dotted paths to update nested fields.

        Raises:
            NotFoundError: If the document does not exist
        """

    @abstractmethod
    def transform(
        self, collection: str, key: str, fn: Callable[[dict], dict]
    ) -> dict:
        """Replace a document with ``fn(current)`` as one atomic step.

        No other writer can change the document between the read and the
        write. An exception raised by ``fn`` leaves the document unchanged.

        Returns:
            The document as written

        Raises:
            NotFoundError: If the document does not exist
        """

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: Optional[list[Filter]] = None,
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Return documents matching every filter."""

    @abstractmethod
    def create_if_absent(self, collection: str, key: str, document: dict) -> bool:
        """Atomically insert a document unless the key is taken.

        Returns:
            True if this call created the document
        """

    @abstractmethod
    def delete(self, collection: str, key: str) -> None:
        """Remove a document; a missing key is not an error."""

    def add(self, collection: str, document: dict) -> str:
        """Insert a document under a generated id and return the id."""
        key = uuid.uuid4().hex
        self.set(collection, key, document)
        return key


class SQLiteDocumentStore(DocumentStore):
    """DocumentStore backed by the ``documents`` table."""

    def __init__(self, db: DatabaseConnection):
        self.db = db

    def get(self, collection: str, key: str) -> Optional[dict]:
        with self.db.get_connection() as conn:
            row = conn.execute(
                "SELECT body FROM documents WHERE collection = ? AND doc_key = ?",
                (collection, key),
            ).fetchone()
        if row is None:
            return None
        return json.loads(row["body"])

    def set(self, collection: str, key: str, document: dict) -> None:
        with self.db.get_connection() as conn:
            conn.execute(
                """
                INSERT INTO documents (collection, doc_key, body)
                VALUES (?, ?, ?)
                ON CONFLICT (collection, doc_key) DO UPDATE
                SET body = excluded.body, updated_at = CURRENT_TIMESTAMP
                """,
                (collection, key, json.dumps(document)),
            )
        logger.debug("set %s/%s", collection, key)

    def update(self, collection: str, key: str, partial: dict) -> dict:
        def merge(document: dict) -> dict:
            for path, value in partial.items():
                _set_field(document, path, deepcopy(value))
            return document

        merged = self.transform(collection, key, merge)
        logger.debug("updated %s/%s fields=%s", collection, key, sorted(partial))
        return merged

    def transform(
        self, collection: str, key: str, fn: Callable[[dict], dict]
    ) -> dict:
        with self.db.get_connection() as conn:
            # Take the write lock before reading so the read cannot go stale
            conn.execute("BEGIN IMMEDIATE")
            row = conn.execute(
                "SELECT body FROM documents WHERE collection = ? AND doc_key = ?",
                (collection, key),
            ).fetchone()
            if row is None:
                raise NotFoundError(f"{collection}/{key} does not exist")

            document = fn(json.loads(row["body"]))
            conn.execute(
                """
                UPDATE documents SET body = ?, updated_at = CURRENT_TIMESTAMP
                WHERE collection = ? AND doc_key = ?
                """,
                (json.dumps(document), collection, key),
            )
        logger.debug("transformed %s/%s", collection, key)
        return document

    def query(
        self,
        collection: str,
        filters: Optional[list[Filter]] = None,
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        with self.db.get_connection() as conn:
            rows = conn.execute(
                "SELECT doc_key, body FROM documents WHERE collection = ? ORDER BY rowid",
                (collection,),
            ).fetchall()

        documents = []
        for row in rows:
            document = json.loads(row["body"])
            document.setdefault("id", row["doc_key"])
            documents.append(document)

        return apply_query(documents, filters, order_by, limit)

    def create_if_absent(self, collection: str, key: str, document: dict) -> bool:
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                """
                INSERT OR IGNORE INTO documents (collection, doc_key, body)
                VALUES (?, ?, ?)
                """,
                (collection, key, json.dumps(document)),
            )
            created = cursor.rowcount == 1
        logger.debug("create_if_absent %s/%s created=%s", collection, key, created)
        return created

    def delete(self, collection: str, key: str) -> None:
        with self.db.get_connection() as conn:
            conn.execute(
                "DELETE FROM documents WHERE collection = ? AND doc_key = ?",
                (collection, key),
            )
