"""httpx client for the Gemini REST API."""
# mypy: ignore-errors

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Optional

import httpx

from fridgeraider.config import Settings, get_settings
from fridgeraider.errors import GenerationError
from fridgeraider.llm.interface import (
    GenerationRequest,
    GenerationResult,
    GenerativeModel,
    ModelTier,
    OfflineModel,
)
from fridgeraider.models.chat import Citation

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data:"


class GeminiClient:
    """Call ``generateContent`` / ``streamGenerateContent`` on the Gemini API."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        fast_model: str,
        capable_model: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._models = {ModelTier.FAST: fast_model, ModelTier.CAPABLE: capable_model}
        self._timeout = timeout
        self._transport = transport

    def model_for(self, tier: ModelTier) -> str:
        return self._models[tier]

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        url = f"{self._base_url}/models/{self.model_for(request.tier)}:generateContent"
        try:
            async with self._client() as client:
                response = await client.post(url, json=build_payload(request))
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as exc:
            raise GenerationError(f"{request.operation}: request failed: {exc}") from exc
        except ValueError as exc:
            raise GenerationError(f"{request.operation}: response was not JSON") from exc

        result = parse_response(body)
        if result is None:
            raise GenerationError(f"{request.operation}: response carried no candidates")
        return result

    async def stream(self, request: GenerationRequest) -> AsyncIterator[GenerationResult]:
        url = f"{self._base_url}/models/{self.model_for(request.tier)}:streamGenerateContent"
        try:
            async with self._client() as client:
                async with client.stream(
                    "POST",
                    url,
                    params={"alt": "sse"},
                    json=build_payload(request),
                ) as response:
                    response.raise_for_status()
                    async for line in response.aiter_lines():
                        if not line.startswith(SSE_DATA_PREFIX):
                            continue
                        data = line[len(SSE_DATA_PREFIX):].strip()
                        if not data:
                            continue
                        try:
                            body = json.loads(data)
                        except json.JSONDecodeError as exc:
                            raise GenerationError(
                                f"{request.operation}: unreadable stream event"
                            ) from exc
                        result = parse_response(body)
                        if result is not None:
                            yield result
        except httpx.HTTPError as exc:
            raise GenerationError(f"{request.operation}: stream failed: {exc}") from exc

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers={"x-goog-api-key": self._api_key},
            transport=self._transport,
        )


def build_payload(request: GenerationRequest) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": request.prompt}]}],
    }
    if request.response_schema is not None:
        payload["generationConfig"] = {
            "responseMimeType": "application/json",
            "responseSchema": request.response_schema,
        }
    if request.search:
        payload["tools"] = [{"google_search": {}}]
    return payload


def parse_response(body: dict[str, Any]) -> Optional[GenerationResult]:
    """Pull text and grounding citations out of a (possibly partial) response body."""

    candidates = body.get("candidates") or []
    if not candidates:
        return None
    candidate = candidates[0] or {}
    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(part.get("text") or "" for part in parts if not part.get("thought"))
    return GenerationResult(text=text, citations=_citations(candidate.get("groundingMetadata")))


def _citations(metadata: Optional[dict[str, Any]]) -> Optional[list[Citation]]:
    if not metadata:
        return None
    chunks = metadata.get("groundingChunks")
    if chunks is None:
        return None
    citations: list[Citation] = []
    for chunk in chunks:
        web = (chunk or {}).get("web") or {}
        uri = web.get("uri")
        if not uri:
            continue
        citations.append(Citation(title=web.get("title") or "", uri=uri))
    return citations


def build_model(settings: Optional[Settings] = None) -> GenerativeModel:
    """Return the configured model backend, falling back to the offline stand-in."""

    settings = settings or get_settings()
    if not settings.gemini_api_key:
        logger.warning("No Gemini API key configured; AI features run in offline mode")
        return OfflineModel()
    return GeminiClient(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        fast_model=settings.fast_model,
        capable_model=settings.capable_model,
        timeout=settings.llm_timeout,
    )


__all__ = ["GeminiClient", "build_payload", "parse_response", "build_model"]
