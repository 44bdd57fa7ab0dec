"""Preference extractor agent."""

from __future__ import annotations

from fridgeraider.agents.base import ModelAgent
from fridgeraider.errors import GenerationError
from fridgeraider.llm import prompts
from fridgeraider.llm.interface import GenerationRequest, ModelTier
from fridgeraider.llm.parsing import decode_json


def normalize_tags(values: list[object]) -> list[str]:
    """Strip tags, dropping blanks and case-insensitive duplicates (first wins)."""

    seen: set[str] = set()
    tags: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        tag = value.strip()
        if not tag or tag.lower() in seen:
            continue
        seen.add(tag.lower())
        tags.append(tag)
    return tags


class PreferenceExtractor(ModelAgent[str, list[str]]):
    """Turn a free-text diet description into short dietary tags."""

    operation = "extract_preferences"

    async def run(self, payload: str) -> list[str]:
        request = GenerationRequest(
            operation=self.operation,
            prompt=prompts.preference_prompt(payload),
            tier=ModelTier.FAST,
            response_schema=prompts.preference_schema(),
        )
        try:
            result = await self._call(request)
            decoded = decode_json(result.text, self.operation)
        except GenerationError as exc:
            self._recovered(exc)
            return []

        if not isinstance(decoded, list):
            self._recovered(GenerationError(f"{self.operation}: expected a list"))
            return []
        return normalize_tags(decoded)
