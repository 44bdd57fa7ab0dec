"""Recipe and meal plan models."""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def new_recipe_id() -> str:
    return f"recipe-{uuid4().hex[:8]}"


class Ingredient(BaseModel):
    """Ingredient amount required by a recipe."""

    name: str = Field(min_length=1)
    amount: float = Field(default=0.0, ge=0)
    unit: str = Field(default="g")

    model_config = ConfigDict(frozen=True)


class Recipe(BaseModel):
    """Recipe built from on-hand ingredients."""

    id: str = Field(default_factory=new_recipe_id)
    name: str = Field(min_length=1)
    ingredients: list[Ingredient] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    rating: Optional[float] = Field(default=None, ge=1, le=5)

    model_config = ConfigDict(frozen=True)


class MealPlanDay(BaseModel):
    """Breakfast, lunch and dinner for one day of a plan."""

    day: int = Field(ge=1)
    breakfast: Optional[Recipe] = None
    lunch: Optional[Recipe] = None
    dinner: Optional[Recipe] = None

    model_config = ConfigDict(frozen=True)

    def meals(self) -> dict[str, Optional[Recipe]]:
        return {"breakfast": self.breakfast, "lunch": self.lunch, "dinner": self.dinner}
