"""Key/value JSON document storage.

Inventory and preferences are persisted as two independent JSON documents,
mirroring how a browser keeps them in local storage. A missing document means
the application is running for the first time.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .models import DocumentORM
from .repository import session_scope

logger = logging.getLogger(__name__)

INVENTORY_KEY = "inventory"
PREFERENCES_KEY = "preferences"


def load_document(key: str) -> Optional[Any]:
    """Return the decoded document stored under ``key`` or None when absent."""

    with session_scope() as session:
        row = session.get(DocumentORM, key)
        if row is None:
            return None
        raw = row.value

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding unreadable %s document", key)
        return None


def save_document(key: str, payload: Any) -> None:
    """Serialize ``payload`` as JSON and store it under ``key``."""

    encoded = json.dumps(payload, ensure_ascii=False)
    with session_scope() as session:
        session.merge(DocumentORM(key=key, value=encoded))
    logger.debug("Persisted %s document (%d bytes)", key, len(encoded))


def delete_document(key: str) -> None:
    with session_scope() as session:
        row = session.get(DocumentORM, key)
        if row is not None:
            session.delete(row)


__all__ = [
    "INVENTORY_KEY",
    "PREFERENCES_KEY",
    "load_document",
    "save_document",
    "delete_document",
]
