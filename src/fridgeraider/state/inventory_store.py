"""Authoritative in-memory inventory with persistence and change notification."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date
from typing import Callable, Iterable, List, Optional, Sequence

from fridgeraider.errors import ItemNotFoundError
from fridgeraider.kitchen.cooking import consume_recipe
from fridgeraider.models.inventory import InventoryItem
from fridgeraider.models.recipe import Recipe

logger = logging.getLogger(__name__)

InventoryListener = Callable[[Sequence[InventoryItem]], None]
InventoryPersister = Callable[[Sequence[InventoryItem]], None]


def fingerprint_items(items: Iterable[InventoryItem]) -> str:
    """Serialized form used to tell whether two inventories are equal by value."""

    return json.dumps([item.model_dump(mode="json") for item in items], sort_keys=True)


class InventoryStore:
    """Own the inventory list; every mutation replaces it in one step.

    Listeners run synchronously after each committed mutation, so they always
    observe a consistent list.
    """

    def __init__(
        self,
        items: Optional[Iterable[InventoryItem]] = None,
        *,
        persister: Optional[InventoryPersister] = None,
    ) -> None:
        self._items: List[InventoryItem] = list(items or [])
        self._persister = persister
        self._listeners: List[InventoryListener] = []

    @property
    def items(self) -> List[InventoryItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def fingerprint(self) -> str:
        return fingerprint_items(self._items)

    def get(self, item_id: str) -> InventoryItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise ItemNotFoundError(f"Inventory item {item_id} not found")

    def subscribe(self, listener: InventoryListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def add(
        self,
        *,
        name: str,
        quantity: float,
        unit: str,
        expiry_date: date,
        category: str = "Other",
    ) -> InventoryItem:
        item = InventoryItem(
            name=name.strip(),
            quantity=quantity,
            unit=unit,
            expiry_date=expiry_date,
            category=category,
        )
        self._commit([*self._items, item])
        logger.info("Added inventory item id=%s name=%s", item.id, item.name)
        return item

    def delete(self, item_id: str) -> None:
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            raise ItemNotFoundError(f"Inventory item {item_id} not found")
        self._commit(remaining)
        logger.info("Deleted inventory item id=%s", item_id)

    def replace(self, items: Iterable[InventoryItem]) -> None:
        self._commit(list(items))

    def apply_recipe(self, recipe: Recipe) -> List[InventoryItem]:
        """Deduct every ingredient of ``recipe`` at once."""

        before = len(self._items)
        updated = consume_recipe(self._items, recipe)
        self._commit(updated)
        logger.info(
            "Cooked recipe id=%s name=%s items_before=%s items_after=%s",
            recipe.id,
            recipe.name,
            before,
            len(updated),
        )
        return list(updated)

    async def cook(self, recipe: Recipe, *, delay: float = 0.0) -> List[InventoryItem]:
        """Wait ``delay`` seconds, then apply the recipe.

        Cancelling during the delay leaves the inventory untouched.
        """

        if delay > 0:
            await asyncio.sleep(delay)
        return self.apply_recipe(recipe)

    def _commit(self, items: List[InventoryItem]) -> None:
        self._items = items
        if self._persister is not None:
            self._persister(self.items)
        for listener in list(self._listeners):
            listener(self.items)


__all__ = ["InventoryStore", "fingerprint_items"]
