"""Prompt text and response schemas for each model-backed operation.

Schemas use the OpenAPI subset accepted by Gemini's ``responseSchema``
(upper-case type names, ``propertyOrdering`` for stable key order).
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from fridgeraider.models.inventory import InventoryItem
from fridgeraider.models.preferences import UserPreferences

FOOD_CATEGORIES = ("Dairy", "Vegetable", "Meat", "Pantry", "Fruit", "Other")
RECIPE_COUNT = 3

ASSISTANT_NAME = "FRIDGERAIDER"

FOOD_VALIDATION_PROMPT = (
    'Is "{name}" a valid food item or edible ingredient? Answer in JSON format with '
    '"isValid" (boolean) and "category" (string, e.g., {categories}). '
    "If not food, isValid is false."
)

PREFERENCE_PROMPT = (
    'Extract dietary preferences and restrictions from this text: "{text}". '
    "Return a JSON array of strings (tags). "
    'Example: ["Vegan", "No Nuts", "Gluten-Free"].'
)

RECIPE_PROMPT = (
    "You are an expert chef. Based on these ingredients: [{inventory}] and dietary "
    "restrictions: [{tags}], generate {count} creative recipes.\n"
    "Strictly use only what is available in the inventory.\n"
    "Units must be in universal metric (g, ml, pcs).\n"
    'Provide JSON format: Array of objects with "id", "name", "ingredients" '
    '(Array of {{name, amount, unit}}), "steps" (Array of 4-5 strings), '
    '"rating" (number 1-5).'
)

MEAL_PLAN_PROMPT = (
    "Create a {days}-day meal plan (Breakfast, Lunch, Dinner) using ONLY these "
    "ingredients: [{inventory}]. Dietary tags: [{tags}].\n"
    "Equalize units (1kg = 1000g, etc.) and only use available quantities.\n"
    'JSON output: Array of {days} objects with "day" (1-{days}), "breakfast", "lunch", '
    '"dinner". Each meal should have "name", "ingredients" (Array of {{name, amount, '
    'unit}}), and "steps" (Array of 4-5 strings).'
)

CHAT_PROMPT = (
    'User message: "{message}". Context: User\'s fridge contains [{inventory}].{prefs} '
    "You are an AI assistant for {assistant}. If searching for recipes or current news, "
    "use the google search tool."
)


def describe_inventory(items: Iterable[InventoryItem]) -> str:
    """Render inventory as ``"500g Tomato, 1l Milk"``."""

    return ", ".join(f"{_format_amount(item.quantity)}{item.unit} {item.name}" for item in items)


def describe_tags(prefs: Optional[UserPreferences]) -> str:
    return ", ".join(prefs.tags) if prefs else ""


def _format_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def food_validation_prompt(name: str) -> str:
    return FOOD_VALIDATION_PROMPT.format(name=name, categories=", ".join(FOOD_CATEGORIES))


def preference_prompt(text: str) -> str:
    return PREFERENCE_PROMPT.format(text=text)


def recipe_prompt(items: Sequence[InventoryItem], prefs: Optional[UserPreferences]) -> str:
    return RECIPE_PROMPT.format(
        inventory=describe_inventory(items),
        tags=describe_tags(prefs),
        count=RECIPE_COUNT,
    )


def meal_plan_prompt(
    items: Sequence[InventoryItem],
    prefs: Optional[UserPreferences],
    days: int,
) -> str:
    return MEAL_PLAN_PROMPT.format(
        days=days,
        inventory=describe_inventory(items),
        tags=describe_tags(prefs),
    )


def chat_prompt(
    message: str,
    items: Sequence[InventoryItem],
    prefs: Optional[UserPreferences] = None,
) -> str:
    prefs_text = ""
    if prefs and prefs.tags:
        prefs_text = f" Dietary tags: [{describe_tags(prefs)}]."
    return CHAT_PROMPT.format(
        message=message,
        inventory=describe_inventory(items),
        prefs=prefs_text,
        assistant=ASSISTANT_NAME,
    )


def _string() -> dict[str, Any]:
    return {"type": "STRING"}


def _number() -> dict[str, Any]:
    return {"type": "NUMBER"}


def _array(items: dict[str, Any]) -> dict[str, Any]:
    return {"type": "ARRAY", "items": items}


def _object(
    properties: dict[str, dict[str, Any]],
    required: Optional[Sequence[str]] = None,
) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "type": "OBJECT",
        "properties": properties,
        "propertyOrdering": list(properties),
    }
    if required:
        schema["required"] = list(required)
    return schema


def ingredient_schema() -> dict[str, Any]:
    return _object(
        {"name": _string(), "amount": _number(), "unit": _string()},
        required=("name", "amount", "unit"),
    )


def food_validation_schema() -> dict[str, Any]:
    return _object(
        {"isValid": {"type": "BOOLEAN"}, "category": _string()},
        required=("isValid", "category"),
    )


def preference_schema() -> dict[str, Any]:
    return _array(_string())


def recipe_schema() -> dict[str, Any]:
    recipe = _object(
        {
            "id": _string(),
            "name": _string(),
            "ingredients": _array(ingredient_schema()),
            "steps": _array(_string()),
            "rating": _number(),
        },
        required=("id", "name", "ingredients", "steps", "rating"),
    )
    return _array(recipe)


def meal_schema() -> dict[str, Any]:
    return _object(
        {
            "name": _string(),
            "ingredients": _array(ingredient_schema()),
            "steps": _array(_string()),
        },
        required=("name", "ingredients", "steps"),
    )


def meal_plan_schema() -> dict[str, Any]:
    day = _object(
        {
            "day": _number(),
            "breakfast": meal_schema(),
            "lunch": meal_schema(),
            "dinner": meal_schema(),
        },
        required=("day", "breakfast", "lunch", "dinner"),
    )
    return _array(day)


__all__ = [
    "FOOD_CATEGORIES",
    "RECIPE_COUNT",
    "describe_inventory",
    "describe_tags",
    "food_validation_prompt",
    "preference_prompt",
    "recipe_prompt",
    "meal_plan_prompt",
    "chat_prompt",
    "food_validation_schema",
    "preference_schema",
    "recipe_schema",
    "meal_plan_schema",
]
