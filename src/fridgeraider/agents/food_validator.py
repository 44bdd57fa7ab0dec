"""Food validator agent."""

from __future__ import annotations

from pydantic import ValidationError

from fridgeraider.agents.base import ModelAgent
from fridgeraider.errors import GenerationError
from fridgeraider.llm import prompts
from fridgeraider.llm.interface import GenerationRequest, ModelTier
from fridgeraider.llm.parsing import decode_json
from fridgeraider.models.inventory import FoodValidation


class FoodValidator(ModelAgent[str, FoodValidation]):
    """Decide whether a name is food and which category it belongs to."""

    operation = "validate_food"

    async def run(self, payload: str) -> FoodValidation:
        request = GenerationRequest(
            operation=self.operation,
            prompt=prompts.food_validation_prompt(payload),
            tier=ModelTier.FAST,
            response_schema=prompts.food_validation_schema(),
        )
        try:
            result = await self._call(request)
            decoded = decode_json(result.text, self.operation)
            if not isinstance(decoded, dict):
                raise GenerationError(f"{self.operation}: expected an object")
            verdict = FoodValidation.model_validate(decoded)
        except (GenerationError, ValidationError) as exc:
            self._recovered(exc)
            return FoodValidation.rejected()

        category = verdict.category.strip() or "Other"
        return FoodValidation(is_valid=verdict.is_valid, category=category)
