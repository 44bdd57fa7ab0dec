"""Preference document persistence."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from fridgeraider.models.preferences import UserPreferences

from .documents import PREFERENCES_KEY, load_document, save_document

logger = logging.getLogger(__name__)


def load_preferences() -> Optional[UserPreferences]:
    """Load stored preferences, or None when onboarding never ran."""

    payload = load_document(PREFERENCES_KEY)
    if payload is None:
        return None
    try:
        prefs = UserPreferences.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Ignoring unreadable preferences document errors=%s", exc.errors())
        return None
    logger.debug("Loaded preferences payload=%s", prefs.model_dump())
    return prefs


def save_preferences(prefs: UserPreferences) -> UserPreferences:
    """Persist the provided preferences payload."""

    payload = prefs.model_dump(mode="json")
    logger.debug("Persisting preferences payload=%s", payload)
    save_document(PREFERENCES_KEY, payload)
    return prefs


__all__ = ["load_preferences", "save_preferences"]
