"""Generative model clients, prompts and reply parsing."""

from fridgeraider.llm.gemini import GeminiClient, build_model
from fridgeraider.llm.interface import (
    GenerationRequest,
    GenerationResult,
    GenerativeModel,
    ModelTier,
    OfflineModel,
)

__all__ = [
    "GeminiClient",
    "build_model",
    "GenerationRequest",
    "GenerationResult",
    "GenerativeModel",
    "ModelTier",
    "OfflineModel",
]
