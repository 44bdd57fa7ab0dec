"""Pure kitchen domain helpers (unit conversion, cooking, expiry)."""

from fridgeraider.kitchen.cooking import consume_recipe, find_item_index
from fridgeraider.kitchen.expiry import ExpiryStatus, expiry_status
from fridgeraider.kitchen.units import convert_amount, round_quantity

__all__ = [
    "consume_recipe",
    "find_item_index",
    "ExpiryStatus",
    "expiry_status",
    "convert_amount",
    "round_quantity",
]
