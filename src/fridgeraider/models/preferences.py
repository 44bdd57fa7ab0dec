"""User dietary preference models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserPreferences(BaseModel):
    """Dietary tags plus the free text they were extracted from."""

    tags: list[str] = Field(default_factory=list)
    raw_text: str = Field(default="")

    model_config = ConfigDict(frozen=True)

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        return value

    @field_validator("raw_text", mode="before")
    @classmethod
    def coerce_raw_text(cls, value: Any) -> Any:
        return "" if value is None else value
