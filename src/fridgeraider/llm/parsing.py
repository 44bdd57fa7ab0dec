"""Helpers for decoding structured model replies."""

from __future__ import annotations

import json
import re
from typing import Any

from fridgeraider.errors import GenerationError

_JSON_BLOCK_RE = re.compile(r"```(?:json)?\s*([\[{].*?[\]}])\s*```", re.DOTALL)


def extract_json_blob(text: str) -> str:
    match = _JSON_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()

    stripped = text.strip()
    if stripped[:1] in {"[", "{"}:
        return stripped

    starts = [index for index in (text.find("["), text.find("{")) if index != -1]
    if not starts:
        return stripped
    start = min(starts)
    closing = "]" if text[start] == "[" else "}"
    end = text.rfind(closing)
    if end > start:
        return text[start : end + 1].strip()
    return stripped


def decode_json(text: str, operation: str) -> Any:
    """Decode a JSON reply, raising GenerationError when it is not JSON."""

    blob = extract_json_blob(text or "")
    if not blob:
        raise GenerationError(f"{operation}: empty reply")
    try:
        return json.loads(blob)
    except json.JSONDecodeError as exc:
        snippet = blob.replace("\n", " ")[:200]
        raise GenerationError(f"{operation}: reply was not JSON: {exc}: payload={snippet}") from exc


__all__ = ["extract_json_blob", "decode_json"]
