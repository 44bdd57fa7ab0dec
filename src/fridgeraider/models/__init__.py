"""Pydantic models defining shared data contracts."""

from fridgeraider.models.chat import (
    ChatChunk,
    ChatComplete,
    ChatEvent,
    ChatMessage,
    ChatReply,
    Citation,
)
from fridgeraider.models.context import KitchenContext
from fridgeraider.models.inventory import KNOWN_UNITS, FoodValidation, InventoryItem
from fridgeraider.models.preferences import UserPreferences
from fridgeraider.models.recipe import Ingredient, MealPlanDay, Recipe

__all__ = [
    "ChatChunk",
    "ChatComplete",
    "ChatEvent",
    "ChatMessage",
    "ChatReply",
    "Citation",
    "KitchenContext",
    "KNOWN_UNITS",
    "FoodValidation",
    "InventoryItem",
    "UserPreferences",
    "Ingredient",
    "MealPlanDay",
    "Recipe",
]
