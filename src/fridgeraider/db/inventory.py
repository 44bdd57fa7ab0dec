"""Inventory document persistence."""

from __future__ import annotations

import logging
from typing import Iterable, List

from pydantic import ValidationError

from fridgeraider.models.inventory import InventoryItem

from .documents import INVENTORY_KEY, load_document, save_document

logger = logging.getLogger(__name__)


def load_inventory() -> List[InventoryItem]:
    """Return the persisted inventory; an empty list on first run."""

    payload = load_document(INVENTORY_KEY)
    if payload is None:
        return []
    if not isinstance(payload, list):
        logger.warning("Inventory document is not a list; starting empty")
        return []

    items: List[InventoryItem] = []
    for record in payload:
        try:
            items.append(InventoryItem.model_validate(record))
        except ValidationError as exc:
            logger.warning("Skipping unreadable inventory record=%s errors=%s", record, exc.errors())
    return items


def save_inventory(items: Iterable[InventoryItem]) -> None:
    save_document(INVENTORY_KEY, [item.model_dump(mode="json") for item in items])


__all__ = ["load_inventory", "save_inventory"]
