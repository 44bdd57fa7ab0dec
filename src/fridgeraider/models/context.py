"""Snapshot of kitchen state handed to the model-backed agents."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fridgeraider.models.inventory import InventoryItem
from fridgeraider.models.preferences import UserPreferences


class KitchenContext(BaseModel):
    """Inventory and preferences at the moment a request is issued."""

    inventory: list[InventoryItem] = Field(default_factory=list)
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    days: int = Field(default=3, ge=1)

    model_config = ConfigDict(frozen=True)
