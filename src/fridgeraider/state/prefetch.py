"""Warm the recipes and planner screens whenever the inventory changes.

The coordinator is a two-state machine (idle/syncing). It records the
inventory fingerprint when a sync *starts*, so an edit made while a sync is in
flight still looks dirty once that sync settles and triggers a follow-up.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Sequence

from fridgeraider import metrics
from fridgeraider.agents.meal_planner import MealPlanner
from fridgeraider.agents.recipe_generator import RecipeGenerator
from fridgeraider.models.context import KitchenContext
from fridgeraider.models.inventory import InventoryItem
from fridgeraider.state.inventory_store import InventoryStore
from fridgeraider.state.preference_store import PreferenceStore
from fridgeraider.state.views import PlannerView, RecipesView

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    IDLE = "idle"
    SYNCING = "syncing"


class PrefetchCoordinator:
    """Run the recipe generator and meal planner together on inventory change."""

    def __init__(
        self,
        *,
        inventory: InventoryStore,
        preferences: PreferenceStore,
        recipes_view: RecipesView,
        planner_view: PlannerView,
        recipe_generator: RecipeGenerator,
        meal_planner: MealPlanner,
    ) -> None:
        self._inventory = inventory
        self._preferences = preferences
        self._recipes_view = recipes_view
        self._planner_view = planner_view
        self._recipe_generator = recipe_generator
        self._meal_planner = meal_planner
        self._state = SyncState.IDLE
        self._fingerprint = ""
        self._task: Optional[asyncio.Task[None]] = None
        self._unsubscribe: Callable[[], None] = inventory.subscribe(self._on_inventory_changed)

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_syncing(self) -> bool:
        return self._state is SyncState.SYNCING

    @property
    def last_fingerprint(self) -> str:
        return self._fingerprint

    def is_dirty(self) -> bool:
        return not self._inventory.is_empty() and self._inventory.fingerprint() != self._fingerprint

    def _on_inventory_changed(self, items: Sequence[InventoryItem]) -> None:
        self.evaluate()

    def evaluate(self) -> Optional[asyncio.Task[None]]:
        """Start a sync if idle and dirty; returns the sync task when one starts."""

        if self._state is SyncState.SYNCING:
            return None
        if not self.is_dirty():
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; prefetch deferred")
            return None

        self._fingerprint = self._inventory.fingerprint()
        self._state = SyncState.SYNCING
        context = KitchenContext(
            inventory=self._inventory.items,
            preferences=self._preferences.preferences,
            days=self._planner_view.days,
        )
        logger.info("Prefetch started items=%s days=%s", len(context.inventory), context.days)
        self._task = loop.create_task(self._sync(context))
        return self._task

    async def _sync(self, context: KitchenContext) -> None:
        try:
            recipes, plan = await asyncio.gather(
                self._recipe_generator.run(context),
                self._meal_planner.run(context),
                return_exceptions=True,
            )
            applied = 0
            if isinstance(recipes, BaseException):
                logger.error("Prefetch recipe generation raised", exc_info=recipes)
            elif self._recipes_view.accept_prefetched(recipes):
                applied += 1
            if isinstance(plan, BaseException):
                logger.error("Prefetch meal planning raised", exc_info=plan)
            elif self._planner_view.accept_prefetched(plan):
                applied += 1
            outcome = {2: "complete", 1: "partial", 0: "empty"}[applied]
            metrics.PREFETCH_SYNCS.labels(outcome=outcome).inc()
            logger.info("Prefetch finished outcome=%s", outcome)
        finally:
            self._state = SyncState.IDLE
        self.evaluate()

    async def wait_idle(self) -> None:
        """Wait until no sync (including follow-ups) is in flight."""

        while self._task is not None and not self._task.done():
            await self._task

    async def close(self) -> None:
        self._unsubscribe()
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._state = SyncState.IDLE


__all__ = ["PrefetchCoordinator", "SyncState"]
