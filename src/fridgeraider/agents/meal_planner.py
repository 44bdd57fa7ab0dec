"""Meal planner agent."""

from __future__ import annotations

from typing import Any

from fridgeraider.agents.base import ModelAgent
from fridgeraider.agents.recipe_generator import coerce_recipe
from fridgeraider.errors import GenerationError
from fridgeraider.llm import prompts
from fridgeraider.llm.interface import GenerationRequest, ModelTier
from fridgeraider.llm.parsing import decode_json
from fridgeraider.models.context import KitchenContext
from fridgeraider.models.recipe import MealPlanDay

MEALS = ("breakfast", "lunch", "dinner")


def _day_sort_key(indexed: tuple[int, Any]) -> tuple[float, int]:
    position, entry = indexed
    day = entry.get("day") if isinstance(entry, dict) else None
    try:
        return float(day), position
    except (TypeError, ValueError):
        return float(position + 1), position


class MealPlanner(ModelAgent[KitchenContext, list[MealPlanDay]]):
    """Plan breakfast, lunch and dinner for ``days`` days from on-hand ingredients."""

    operation = "generate_meal_plan"

    async def run(self, payload: KitchenContext) -> list[MealPlanDay]:
        """Return the plan, or an empty list on any failure."""

        try:
            return await self.generate(payload)
        except GenerationError as exc:
            self._recovered(exc)
            return []

    async def generate(self, payload: KitchenContext) -> list[MealPlanDay]:
        """Return the plan, raising GenerationError when the reply is unusable.

        The planner screen calls this directly so it can offer a retry.
        """

        if not payload.inventory:
            return []

        days = payload.days
        request = GenerationRequest(
            operation=self.operation,
            prompt=prompts.meal_plan_prompt(payload.inventory, payload.preferences, days),
            tier=ModelTier.CAPABLE,
            response_schema=prompts.meal_plan_schema(),
        )
        result = await self._call(request)
        decoded = decode_json(result.text, self.operation)
        if not isinstance(decoded, list):
            raise GenerationError(f"{self.operation}: expected a list of days")
        if len(decoded) != days:
            raise GenerationError(
                f"{self.operation}: expected {days} day(s), got {len(decoded)}"
            )

        ordered = [entry for _, entry in sorted(enumerate(decoded), key=_day_sort_key)]
        plan: list[MealPlanDay] = []
        for number, entry in enumerate(ordered, start=1):
            if not isinstance(entry, dict):
                raise GenerationError(f"{self.operation}: day {number} is not an object")
            meals = {meal: coerce_recipe(entry.get(meal)) for meal in MEALS}
            plan.append(MealPlanDay(day=number, **meals))
        return plan
