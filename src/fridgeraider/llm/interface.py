"""Generative model abstraction layer."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, AsyncIterator, Optional, Protocol

from fridgeraider.models.chat import Citation


class ModelTier(str, Enum):
    """Model class requested by a call; affects latency and quality only."""

    FAST = "fast"
    CAPABLE = "capable"


@dataclass(frozen=True)
class GenerationRequest:
    """Single request to the generative model."""

    operation: str
    prompt: str
    tier: ModelTier = ModelTier.FAST
    response_schema: Optional[dict[str, Any]] = None
    search: bool = False


@dataclass(frozen=True)
class GenerationResult:
    """Model output; ``citations`` is None when no grounding metadata was attached."""

    text: str
    citations: Optional[list[Citation]] = None


class GenerativeModel(Protocol):
    """Protocol for generative model backends."""

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Return the whole reply for ``request``."""

    def stream(self, request: GenerationRequest) -> AsyncIterator[GenerationResult]:
        """Yield reply fragments (text deltas) for ``request``."""


class OfflineModel:
    """Stand-in used when no API key is configured.

    Structured requests receive an empty JSON value of the schema's top-level
    type so every caller falls back to its empty result.
    """

    NOTICE = "The AI assistant is offline. Configure FRIDGERAIDER_GEMINI_API_KEY to enable it."

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        return GenerationResult(text=self._reply(request))

    async def stream(self, request: GenerationRequest) -> AsyncIterator[GenerationResult]:
        yield GenerationResult(text=self._reply(request))

    @classmethod
    def _reply(cls, request: GenerationRequest) -> str:
        if request.response_schema is None:
            return cls.NOTICE
        if request.response_schema.get("type") == "ARRAY":
            return "[]"
        return json.dumps({})


__all__ = [
    "ModelTier",
    "GenerationRequest",
    "GenerationResult",
    "GenerativeModel",
    "OfflineModel",
]
