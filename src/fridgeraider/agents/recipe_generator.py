"""Recipe generator agent."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fridgeraider.agents.base import ModelAgent
from fridgeraider.errors import GenerationError
from fridgeraider.llm import prompts
from fridgeraider.llm.interface import GenerationRequest, ModelTier
from fridgeraider.llm.parsing import decode_json
from fridgeraider.models.context import KitchenContext
from fridgeraider.models.recipe import Ingredient, Recipe, new_recipe_id

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def coerce_ingredient(entry: Any) -> Optional[Ingredient]:
    if not isinstance(entry, dict):
        return None
    name = str(entry.get("name") or "").strip()
    if not name:
        return None
    amount = _to_float(entry.get("amount")) or 0.0
    return Ingredient(
        name=name,
        amount=max(0.0, amount),
        unit=str(entry.get("unit") or "").strip(),
    )


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [value]
    return []


def coerce_recipe(entry: Any) -> Optional[Recipe]:
    """Build a Recipe from loosely-shaped model output, or None if unusable."""

    if not isinstance(entry, dict):
        return None
    name = str(entry.get("name") or "").strip()
    if not name:
        return None

    ingredients = [
        ingredient
        for ingredient in (coerce_ingredient(raw) for raw in _as_list(entry.get("ingredients")))
        if ingredient is not None
    ]
    steps = [str(step).strip() for step in _as_list(entry.get("steps")) if str(step).strip()]
    rating = _to_float(entry.get("rating"))
    if rating is not None:
        rating = min(5.0, max(1.0, rating))

    return Recipe(
        id=str(entry.get("id") or "").strip() or new_recipe_id(),
        name=name,
        ingredients=ingredients,
        steps=steps,
        rating=rating,
    )


class RecipeGenerator(ModelAgent[KitchenContext, list[Recipe]]):
    """Suggest recipes restricted to the ingredients on hand."""

    operation = "generate_recipes"

    async def run(self, payload: KitchenContext) -> list[Recipe]:
        if not payload.inventory:
            return []

        request = GenerationRequest(
            operation=self.operation,
            prompt=prompts.recipe_prompt(payload.inventory, payload.preferences),
            tier=ModelTier.CAPABLE,
            response_schema=prompts.recipe_schema(),
        )
        try:
            result = await self._call(request)
            decoded = decode_json(result.text, self.operation)
            if not isinstance(decoded, list):
                raise GenerationError(f"{self.operation}: expected a list of recipes")
        except GenerationError as exc:
            self._recovered(exc)
            return []

        recipes: list[Recipe] = []
        seen_ids: set[str] = set()
        for entry in decoded:
            recipe = coerce_recipe(entry)
            if recipe is None:
                logger.debug("Dropping malformed recipe entry=%s", entry)
                continue
            if recipe.id in seen_ids:
                recipe = recipe.model_copy(update={"id": new_recipe_id()})
            seen_ids.add(recipe.id)
            recipes.append(recipe)
        return recipes
