"""Exception hierarchy shared across FridgeRaider."""

from __future__ import annotations


class FridgeRaiderError(Exception):
    """Base class for application errors."""


class GenerationError(FridgeRaiderError):
    """The generative model failed, or replied with something we cannot use."""


class FoodRejectedError(FridgeRaiderError):
    """The food validator decided the submitted name is not food."""

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' is not a recognised food item")
        self.name = name


class ItemNotFoundError(FridgeRaiderError, LookupError):
    """An inventory item or recipe id does not exist."""


class ConversationBusyError(FridgeRaiderError):
    """A chat answer is still pending; one question at a time."""


__all__ = [
    "FridgeRaiderError",
    "GenerationError",
    "FoodRejectedError",
    "ItemNotFoundError",
    "ConversationBusyError",
]
