"""Bounded wait for a document to become visible in the store."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from fitplan.config.settings import RetryConfig
from fitplan.db.store import DocumentStore
from fitplan.errors import NotYetVisibleError

logger = logging.getLogger(__name__)


def wait_for_document(
    store: DocumentStore,
    collection: str,
    key: str,
    config: Optional[RetryConfig] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> dict:
    """Read a document, retrying while it is absent.

    Makes ``config.attempts`` reads. Between reads it sleeps
    ``initial_delay_seconds * backoff ** n`` seconds.

    Args:
        store: Document store to read from
        collection: Collection name
        key: Document key
        config: Retry settings (defaults: 3 attempts, 1 second, no growth)
        sleep: Sleep function, injectable for tests

    Returns:
        The document

    Raises:
        NotYetVisibleError: If the document is still absent after the last attempt
    """
    config = config or RetryConfig()
    attempts = max(1, config.attempts)
    delay = config.initial_delay_seconds

    for attempt in range(1, attempts + 1):
        document = store.get(collection, key)
        if document is not None:
            return document
        if attempt < attempts:
            logger.warning(
                "%s/%s not found (attempt %d/%d); retrying in %.2fs",
                collection,
                key,
                attempt,
                attempts,
                delay,
            )
            sleep(delay)
            delay *= config.backoff

    raise NotYetVisibleError(collection, key, attempts)
