"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/fridgeraider.db"),
        description="SQLite file holding the persisted inventory and preference documents.",
    )
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="API key for the Gemini REST API. The offline model is used when unset.",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API base URL.",
    )
    fast_model: str = Field(
        default="gemini-3-flash-preview",
        description="Model used for validation, tag extraction and chat.",
    )
    capable_model: str = Field(
        default="gemini-3-pro-preview",
        description="Model used for recipe and meal-plan generation.",
    )
    llm_timeout: float = Field(
        default=60.0,
        description="Seconds to wait for a model response.",
    )
    default_plan_days: int = Field(
        default=3,
        ge=1,
        description="Number of days requested by the planner until the user picks another.",
    )
    cook_delay_seconds: float = Field(
        default=1.5,
        ge=0,
        description="Simulated cooking delay before ingredients are deducted.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for mutating endpoints.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (db_path := _env("FRIDGERAIDER_DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (api_key := _env("FRIDGERAIDER_GEMINI_API_KEY") or _env("GEMINI_API_KEY")):
        payload["gemini_api_key"] = api_key
    if (base_url := _env("FRIDGERAIDER_GEMINI_BASE_URL")):
        payload["gemini_base_url"] = base_url
    if (fast_model := _env("FRIDGERAIDER_FAST_MODEL")):
        payload["fast_model"] = fast_model
    if (capable_model := _env("FRIDGERAIDER_CAPABLE_MODEL")):
        payload["capable_model"] = capable_model
    if (llm_timeout := _env("FRIDGERAIDER_LLM_TIMEOUT")):
        try:
            payload["llm_timeout"] = float(llm_timeout)
        except ValueError:
            pass
    if (plan_days := _env("FRIDGERAIDER_DEFAULT_PLAN_DAYS")):
        try:
            payload["default_plan_days"] = int(plan_days)
        except ValueError:
            pass
    if (cook_delay := _env("FRIDGERAIDER_COOK_DELAY_SECONDS")):
        try:
            payload["cook_delay_seconds"] = float(cook_delay)
        except ValueError:
            pass
    if (api_token := _env("FRIDGERAIDER_API_TOKEN")):
        payload["api_token"] = api_token
    if (log_level := _env("FRIDGERAIDER_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("FRIDGERAIDER_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("FRIDGERAIDER_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
