"""Inventory data models."""

from __future__ import annotations

from datetime import date
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

KNOWN_UNITS = ("g", "kg", "ml", "l", "pcs")


def new_item_id() -> str:
    return uuid4().hex[:12]


class InventoryItem(BaseModel):
    """Food item currently owned by the household."""

    id: str = Field(default_factory=new_item_id)
    name: str = Field(min_length=1)
    category: str = Field(default="Other")
    quantity: float = Field(ge=0)
    unit: str = Field(default="g")
    expiry_date: date

    model_config = ConfigDict(frozen=True)


class FoodValidation(BaseModel):
    """Verdict returned by the food validator."""

    is_valid: bool = Field(default=False, alias="isValid")
    category: str = Field(default="Other")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def rejected(cls) -> "FoodValidation":
        return cls(is_valid=False, category="Other")
