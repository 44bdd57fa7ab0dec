"""Inventory consumption when a recipe is cooked."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from fridgeraider.kitchen.units import convert_amount, round_quantity
from fridgeraider.models.inventory import InventoryItem
from fridgeraider.models.recipe import Recipe

logger = logging.getLogger(__name__)


def find_item_index(items: Sequence[InventoryItem], name: str) -> Optional[int]:
    """Return the index of the first item whose name matches case-insensitively."""

    wanted = name.strip().lower()
    for index, item in enumerate(items):
        if item.name.strip().lower() == wanted:
            return index
    return None


def consume_recipe(items: Sequence[InventoryItem], recipe: Recipe) -> list[InventoryItem]:
    """Return a new inventory with the recipe's ingredients deducted.

    The input sequence is not modified. Ingredients without a matching item are
    skipped; items that reach zero or below are dropped.
    """

    remaining = list(items)
    for needed in recipe.ingredients:
        index = find_item_index(remaining, needed.name)
        if index is None:
            logger.debug("Recipe %s: no inventory match for %s", recipe.id, needed.name)
            continue

        current = remaining[index]
        amount = convert_amount(needed.amount, needed.unit, current.unit)
        left = round_quantity(current.quantity - amount)
        if left <= 0:
            logger.debug("Recipe %s used up %s", recipe.id, current.name)
            del remaining[index]
        else:
            remaining[index] = current.model_copy(update={"quantity": left})
    return remaining


__all__ = ["find_item_index", "consume_recipe"]
