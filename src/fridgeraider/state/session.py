"""Root application state tying stores, agents and views together."""

from __future__ import annotations

import logging
from datetime import date
from typing import AsyncGenerator, Callable, List, Optional

from fridgeraider.agents.chat_assistant import ChatAssistant
from fridgeraider.agents.food_validator import FoodValidator
from fridgeraider.agents.meal_planner import MealPlanner
from fridgeraider.agents.preference_extractor import PreferenceExtractor
from fridgeraider.agents.recipe_generator import RecipeGenerator
from fridgeraider.config import Settings, get_settings
from fridgeraider.db import load_inventory, load_preferences, save_inventory, save_preferences
from fridgeraider.errors import ConversationBusyError, FoodRejectedError
from fridgeraider.llm.interface import GenerativeModel
from fridgeraider.models.chat import ChatComplete, ChatEvent, ChatMessage
from fridgeraider.models.context import KitchenContext
from fridgeraider.models.inventory import InventoryItem
from fridgeraider.models.preferences import UserPreferences
from fridgeraider.models.recipe import MealPlanDay, Recipe
from fridgeraider.state.inventory_store import InventoryStore
from fridgeraider.state.preference_store import PreferenceStore
from fridgeraider.state.prefetch import PrefetchCoordinator
from fridgeraider.state.views import (
    ChatConversation,
    PlannerView,
    RecipesView,
    View,
    ViewController,
)

logger = logging.getLogger(__name__)


class AnswerStream:
    """One streamed answer; releases the conversation exactly once however it ends."""

    def __init__(
        self,
        events: AsyncGenerator[ChatEvent, None],
        *,
        release: Callable[[], None],
    ) -> None:
        self._events = events
        self._release = release
        self._released = False

    def __aiter__(self) -> AnswerStream:
        return self

    async def __anext__(self) -> ChatEvent:
        try:
            return await self._events.__anext__()
        except BaseException:
            self.release()
            raise

    async def aclose(self) -> None:
        try:
            await self._events.aclose()
        finally:
            self.release()

    def release(self) -> None:
        if not self._released:
            self._released = True
            self._release()

    def __del__(self) -> None:
        self.release()


class KitchenSession:
    """Everything one user sees: inventory, preferences and the derived screens."""

    def __init__(
        self,
        model: GenerativeModel,
        *,
        inventory: Optional[InventoryStore] = None,
        preferences: Optional[PreferenceStore] = None,
        default_plan_days: int = 3,
        cook_delay: float = 0.0,
    ) -> None:
        self.model = model
        self.inventory = inventory or InventoryStore()
        self.preferences = preferences or PreferenceStore()
        self.cook_delay = cook_delay

        self.food_validator = FoodValidator(model)
        self.preference_extractor = PreferenceExtractor(model)
        self.recipe_generator = RecipeGenerator(model)
        self.meal_planner = MealPlanner(model)
        self.chat_assistant = ChatAssistant(model)

        self.views = ViewController(onboarded=self.preferences.has_tags)
        self.recipes = RecipesView(self.recipe_generator)
        self.planner = PlannerView(self.meal_planner, days=default_plan_days)
        self.chat = ChatConversation()
        self.prefetch = PrefetchCoordinator(
            inventory=self.inventory,
            preferences=self.preferences,
            recipes_view=self.recipes,
            planner_view=self.planner,
            recipe_generator=self.recipe_generator,
            meal_planner=self.meal_planner,
        )

    @classmethod
    def load(cls, model: GenerativeModel, settings: Optional[Settings] = None) -> "KitchenSession":
        """Build a session from the persisted inventory and preference documents."""

        settings = settings or get_settings()
        inventory = InventoryStore(load_inventory(), persister=save_inventory)
        preferences = PreferenceStore(load_preferences(), persister=save_preferences)
        logger.info(
            "Session loaded items=%s onboarded=%s",
            len(inventory),
            preferences.has_tags,
        )
        return cls(
            model,
            inventory=inventory,
            preferences=preferences,
            default_plan_days=settings.default_plan_days,
            cook_delay=settings.cook_delay_seconds,
        )

    def context(self, days: Optional[int] = None) -> KitchenContext:
        return KitchenContext(
            inventory=self.inventory.items,
            preferences=self.preferences.preferences,
            days=days or self.planner.days,
        )

    # Onboarding -----------------------------------------------------------------

    async def complete_onboarding(self, text: str) -> UserPreferences:
        """Extract tags from the diet description and move on to the inventory.

        The raw text is stored even when no tags could be extracted.
        """

        raw_text = text.strip()
        if not raw_text:
            raise ValueError("Preference description must not be blank")
        tags = await self.preference_extractor.run(raw_text)
        preferences = self.preferences.set(UserPreferences(tags=tags, raw_text=raw_text))
        self.views.navigate(View.INVENTORY)
        return preferences

    # Inventory ------------------------------------------------------------------

    async def add_item(
        self,
        *,
        name: str,
        quantity: float,
        unit: str,
        expiry_date: date,
    ) -> InventoryItem:
        """Validate ``name`` as food, then add it with the category the validator chose."""

        verdict = await self.food_validator.run(name.strip())
        if not verdict.is_valid:
            logger.info("Rejected non-food item name=%s", name)
            raise FoodRejectedError(name.strip())
        return self.inventory.add(
            name=name,
            quantity=quantity,
            unit=unit,
            expiry_date=expiry_date,
            category=verdict.category,
        )

    def delete_item(self, item_id: str) -> None:
        self.inventory.delete(item_id)

    async def cook(self, recipe_id: str) -> List[InventoryItem]:
        recipe: Recipe = self.recipes.find(recipe_id)
        self.recipes.cooking = recipe.id
        try:
            return await self.inventory.cook(recipe, delay=self.cook_delay)
        finally:
            self.recipes.cooking = None

    # Recipes and planner --------------------------------------------------------

    async def refresh_recipes(self) -> List[Recipe]:
        return await self.recipes.refresh(self.context())

    async def set_plan_days(self, days: int) -> List[MealPlanDay]:
        self.planner.days = days
        return await self.planner.fetch(self.context(days))

    async def refresh_plan(self) -> List[MealPlanDay]:
        return await self.planner.fetch(self.context())

    # Chat -----------------------------------------------------------------------

    def _begin_question(self, message: str) -> None:
        if self.chat.busy:
            raise ConversationBusyError("Wait for the current answer before asking again")
        self.chat.pending += 1
        self.chat.add_user(message)

    async def ask(self, message: str) -> ChatMessage:
        """Ask the assistant and record the whole answer in the transcript."""

        self._begin_question(message)
        try:
            reply = await self.chat_assistant.reply(
                message, self.inventory.items, self.preferences.preferences
            )
            return self.chat.finish(self.chat.add_assistant(reply.text), reply.links)
        finally:
            self.chat.pending -= 1

    def ask_stream(self, message: str) -> AnswerStream:
        """Ask the assistant and return its streamed events.

        The busy check happens immediately; the answer is only produced as the
        returned stream is consumed. Closing or dropping the stream, even before
        it starts, frees the conversation for the next question.
        """

        self._begin_question(message)
        answer = self.chat.add_assistant(streaming=True)

        def _release() -> None:
            answer.is_streaming = False
            self.chat.pending -= 1

        return AnswerStream(self._stream_answer(message, answer), release=_release)

    async def _stream_answer(
        self, message: str, answer: ChatMessage
    ) -> AsyncGenerator[ChatEvent, None]:
        try:
            async for event in self.chat_assistant.stream(
                message, self.inventory.items, self.preferences.preferences
            ):
                if isinstance(event, ChatComplete):
                    self.chat.finish(answer, event.links)
                else:
                    answer.content = event.text
                yield event
        finally:
            answer.is_streaming = False

    async def close(self) -> None:
        await self.prefetch.close()


__all__ = ["AnswerStream", "KitchenSession"]
