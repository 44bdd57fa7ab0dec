"""Tests for the Gemini REST client using httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from fridgeraider.config import Settings
from fridgeraider.errors import GenerationError
from fridgeraider.llm.gemini import GeminiClient, build_model, build_payload, parse_response
from fridgeraider.llm.interface import GenerationRequest, ModelTier, OfflineModel
from fridgeraider.models.chat import Citation


def _client(handler) -> GeminiClient:
    return GeminiClient(
        api_key="test-key",
        base_url="https://gemini.test/v1beta/",
        fast_model="fast-model",
        capable_model="capable-model",
        transport=httpx.MockTransport(handler),
    )


def _body(text: str, grounding: dict | None = None) -> dict:
    candidate: dict = {"content": {"role": "model", "parts": [{"text": text}]}}
    if grounding is not None:
        candidate["groundingMetadata"] = grounding
    return {"candidates": [candidate]}


@pytest.mark.asyncio
async def test_generate_posts_schema_and_reads_text():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_body('{"isValid": true, "category": "Fruit"}'))

    request = GenerationRequest(
        operation="validate_food",
        prompt="Is apple food?",
        tier=ModelTier.FAST,
        response_schema={"type": "OBJECT"},
    )
    result = await _client(handler).generate(request)

    assert result.text == '{"isValid": true, "category": "Fruit"}'
    assert result.citations is None
    assert seen["url"] == "https://gemini.test/v1beta/models/fast-model:generateContent"
    assert seen["key"] == "test-key"
    assert seen["body"]["generationConfig"] == {
        "responseMimeType": "application/json",
        "responseSchema": {"type": "OBJECT"},
    }
    assert "tools" not in seen["body"]


@pytest.mark.asyncio
async def test_capable_tier_uses_capable_model():
    urls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(request.url.path)
        return httpx.Response(200, json=_body("[]"))

    await _client(handler).generate(
        GenerationRequest(operation="generate_recipes", prompt="p", tier=ModelTier.CAPABLE)
    )

    assert urls == ["/v1beta/models/capable-model:generateContent"]


@pytest.mark.asyncio
async def test_http_error_raises_generation_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": {"message": "overloaded"}})

    with pytest.raises(GenerationError):
        await _client(handler).generate(GenerationRequest(operation="chat", prompt="hi"))


@pytest.mark.asyncio
async def test_response_without_candidates_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(GenerationError):
        await _client(handler).generate(GenerationRequest(operation="chat", prompt="hi"))


@pytest.mark.asyncio
async def test_stream_yields_fragments_and_grounding():
    grounding = {
        "groundingChunks": [
            {"web": {"uri": "https://a.test", "title": "A"}},
            {"web": {"uri": "https://b.test"}},
            {"retrievedContext": {}},
        ]
    }
    events = [
        _body("Hello"),
        _body(" world", grounding),
        {"usageMetadata": {}},
    ]
    sse = "".join(f"data: {json.dumps(event)}\r\n\r\n" for event in events)
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            content=sse.encode(),
            headers={"Content-Type": "text/event-stream"},
        )

    request = GenerationRequest(operation="chat", prompt="hi", search=True)
    fragments = [fragment async for fragment in _client(handler).stream(request)]

    assert [fragment.text for fragment in fragments] == ["Hello", " world"]
    assert fragments[0].citations is None
    assert fragments[1].citations == [
        Citation(title="A", uri="https://a.test"),
        Citation(title="", uri="https://b.test"),
    ]
    assert seen["params"] == {"alt": "sse"}
    assert seen["body"]["tools"] == [{"google_search": {}}]


@pytest.mark.asyncio
async def test_stream_http_error_raises_generation_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(GenerationError):
        async for _ in _client(handler).stream(GenerationRequest(operation="chat", prompt="hi")):
            pass


def test_parse_response_skips_thought_parts():
    body = {
        "candidates": [
            {"content": {"parts": [{"text": "thinking...", "thought": True}, {"text": "answer"}]}}
        ]
    }

    result = parse_response(body)

    assert result is not None
    assert result.text == "answer"


def test_payload_omits_generation_config_without_schema():
    payload = build_payload(GenerationRequest(operation="chat", prompt="hello"))

    assert payload == {"contents": [{"role": "user", "parts": [{"text": "hello"}]}]}


def test_build_model_falls_back_to_offline_without_key():
    assert isinstance(build_model(Settings()), OfflineModel)
    assert isinstance(build_model(Settings(gemini_api_key="k")), GeminiClient)


@pytest.mark.asyncio
async def test_offline_model_returns_empty_values():
    model = OfflineModel()

    listing = await model.generate(
        GenerationRequest(operation="x", prompt="p", response_schema={"type": "ARRAY"})
    )
    obj = await model.generate(
        GenerationRequest(operation="x", prompt="p", response_schema={"type": "OBJECT"})
    )
    chat = await model.generate(GenerationRequest(operation="chat", prompt="p"))

    assert listing.text == "[]"
    assert obj.text == "{}"
    assert chat.text == OfflineModel.NOTICE
