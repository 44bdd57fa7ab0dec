"""Holder for the user's dietary preferences."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fridgeraider.models.preferences import UserPreferences

logger = logging.getLogger(__name__)

PreferencePersister = Callable[[UserPreferences], object]


class PreferenceStore:
    """Keep the current preferences; ``None`` until onboarding has run once."""

    def __init__(
        self,
        preferences: Optional[UserPreferences] = None,
        *,
        persister: Optional[PreferencePersister] = None,
    ) -> None:
        self._stored = preferences
        self._persister = persister

    @property
    def preferences(self) -> UserPreferences:
        return self._stored or UserPreferences()

    @property
    def is_first_run(self) -> bool:
        return self._stored is None

    @property
    def has_tags(self) -> bool:
        return bool(self.preferences.tags)

    def set(self, preferences: UserPreferences) -> UserPreferences:
        self._stored = preferences
        if self._persister is not None:
            self._persister(preferences)
        logger.info("Preferences updated tags=%s", preferences.tags)
        return preferences


__all__ = ["PreferenceStore"]
