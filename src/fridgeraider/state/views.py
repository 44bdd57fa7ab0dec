"""Screen selection and the derived, model-backed state each screen shows."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from fridgeraider.agents.meal_planner import MealPlanner
from fridgeraider.agents.recipe_generator import RecipeGenerator
from fridgeraider.errors import GenerationError, ItemNotFoundError
from fridgeraider.models.chat import ChatMessage, Citation
from fridgeraider.models.context import KitchenContext
from fridgeraider.models.recipe import MealPlanDay, Recipe

logger = logging.getLogger(__name__)

PLAN_DAY_CHOICES = (1, 3, 5, 7)
GREETING = (
    "Hi! I'm your FRIDGERAIDER assistant. Ask me anything about your inventory, "
    "recipes, or search for food trends!"
)


class View(str, Enum):
    ONBOARDING = "onboarding"
    INVENTORY = "inventory"
    RECIPES = "recipes"
    PLANNER = "planner"
    CHAT = "chat"


class ViewController:
    """Track which screen is active."""

    def __init__(self, *, onboarded: bool) -> None:
        self.active = View.INVENTORY if onboarded else View.ONBOARDING

    def navigate(self, view: View) -> View:
        logger.debug("View change %s -> %s", self.active.value, view.value)
        self.active = view
        return self.active


class RecipesStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"


class PlannerStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


class RecipesSnapshot(BaseModel):
    status: RecipesStatus
    recipes: List[Recipe] = Field(default_factory=list)
    cooking: Optional[str] = None


class PlannerSnapshot(BaseModel):
    status: PlannerStatus
    days: int
    plan: List[MealPlanDay] = Field(default_factory=list)


class RecipesView:
    """Recipe suggestions for the recipes screen."""

    def __init__(self, generator: RecipeGenerator) -> None:
        self._generator = generator
        self.recipes: List[Recipe] = []
        self.loading = False
        self.cooking: Optional[str] = None

    def status(self, *, inventory_empty: bool) -> RecipesStatus:
        if inventory_empty:
            return RecipesStatus.EMPTY
        if self.loading or not self.recipes:
            return RecipesStatus.LOADING
        return RecipesStatus.READY

    def snapshot(self, *, inventory_empty: bool) -> RecipesSnapshot:
        return RecipesSnapshot(
            status=self.status(inventory_empty=inventory_empty),
            recipes=list(self.recipes),
            cooking=self.cooking,
        )

    def find(self, recipe_id: str) -> Recipe:
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        raise ItemNotFoundError(f"Recipe {recipe_id} not found")

    def accept_prefetched(self, recipes: List[Recipe]) -> bool:
        """Replace recipes only with a non-empty result."""

        if not recipes:
            return False
        self.recipes = list(recipes)
        return True

    async def refresh(self, context: KitchenContext) -> List[Recipe]:
        """Explicit refresh: whatever comes back replaces the current list."""

        if not context.inventory:
            return list(self.recipes)
        self.loading = True
        try:
            self.recipes = await self._generator.run(context)
        finally:
            self.loading = False
        return list(self.recipes)


class PlannerView:
    """Meal plan for the planner screen, with its own retryable error state."""

    def __init__(self, planner: MealPlanner, *, days: int = 3) -> None:
        self._planner = planner
        self.days = days
        self.plan: List[MealPlanDay] = []
        self.loading = False
        self.error = False

    def status(self, *, inventory_empty: bool) -> PlannerStatus:
        if inventory_empty:
            return PlannerStatus.EMPTY
        if self.loading:
            return PlannerStatus.LOADING
        if self.error:
            return PlannerStatus.ERROR
        if not self.plan:
            return PlannerStatus.LOADING
        return PlannerStatus.READY

    def snapshot(self, *, inventory_empty: bool) -> PlannerSnapshot:
        return PlannerSnapshot(
            status=self.status(inventory_empty=inventory_empty),
            days=self.days,
            plan=list(self.plan),
        )

    def accept_prefetched(self, plan: List[MealPlanDay]) -> bool:
        if not plan:
            return False
        self.plan = list(plan)
        self.error = False
        return True

    async def fetch(self, context: KitchenContext) -> List[MealPlanDay]:
        """Request a plan for ``context.days``; failures switch to the error state."""

        self.days = context.days
        if not context.inventory:
            return list(self.plan)
        self.loading = True
        self.error = False
        try:
            self.plan = await self._planner.generate(context)
        except GenerationError as exc:
            logger.warning("Meal plan generation failed days=%s: %s", context.days, exc)
            self.error = True
        finally:
            self.loading = False
        return list(self.plan)


class ChatConversation:
    """Chat transcript shown on the chat screen."""

    def __init__(self) -> None:
        self.messages: List[ChatMessage] = [ChatMessage(role="assistant", content=GREETING)]
        self.pending = 0

    @property
    def busy(self) -> bool:
        return self.pending > 0

    def add_user(self, content: str) -> ChatMessage:
        message = ChatMessage(role="user", content=content)
        self.messages.append(message)
        return message

    def add_assistant(self, content: str = "", *, streaming: bool = False) -> ChatMessage:
        message = ChatMessage(role="assistant", content=content, is_streaming=streaming)
        self.messages.append(message)
        return message

    @staticmethod
    def finish(message: ChatMessage, links: List[Citation]) -> ChatMessage:
        message.links = list(links)
        message.is_streaming = False
        return message


__all__ = [
    "View",
    "ViewController",
    "RecipesStatus",
    "PlannerStatus",
    "RecipesSnapshot",
    "PlannerSnapshot",
    "RecipesView",
    "PlannerView",
    "ChatConversation",
    "PLAN_DAY_CHOICES",
    "GREETING",
]
