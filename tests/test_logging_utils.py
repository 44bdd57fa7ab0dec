"""Tests for logging utilities and sensitive data redaction."""

from __future__ import annotations

import json
import logging

import pytest

from fridgeraider.logging_utils import configure_logging


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="fridgeraider.test.redaction",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def _emit(record: logging.LogRecord) -> str:
    handler = logging.getLogger().handlers[0]
    for filter_ in handler.filters:
        filter_.filter(record)
    return handler.format(record)


@pytest.mark.parametrize("fmt", ["plain", "json"])
def test_sensitive_data_filter_redacts_tokens(fmt):
    secret = "top-secret-token"
    configure_logging("INFO", fmt, [secret])

    formatted = _emit(_record("Authorization header Bearer %s", secret))

    assert secret not in formatted
    assert "[redacted]" in formatted


def test_gemini_key_patterns_are_masked():
    configure_logging("INFO", "plain", [])

    formatted = _emit(
        _record("POST https://example.test/models/m:generateContent?key=AIzaSECRET x-goog-api-key: AIzaOTHER")
    )

    assert "AIzaSECRET" not in formatted
    assert "AIzaOTHER" not in formatted


def test_json_formatter_includes_request_id_and_operation():
    configure_logging("INFO", "json", [])

    formatted = _emit(_record("done", request_id="req-1", operation="generate_recipes"))
    payload = json.loads(formatted)

    assert payload["message"] == "done"
    assert payload["request_id"] == "req-1"
    assert payload["operation"] == "generate_recipes"
    assert payload["level"] == "INFO"


def test_httpx_logger_kept_at_warning():
    configure_logging("DEBUG", "plain", [])

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("uvicorn.access").propagate is True
