"""Local persistence for the inventory and preference documents."""

from fridgeraider.db.inventory import load_inventory, save_inventory
from fridgeraider.db.preferences import load_preferences, save_preferences

__all__ = ["load_inventory", "save_inventory", "load_preferences", "save_preferences"]
