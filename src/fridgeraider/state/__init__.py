"""In-memory application state: stores, prefetch coordinator and screens."""

from fridgeraider.state.inventory_store import InventoryStore, fingerprint_items
from fridgeraider.state.preference_store import PreferenceStore
from fridgeraider.state.prefetch import PrefetchCoordinator, SyncState
from fridgeraider.state.session import KitchenSession
from fridgeraider.state.views import (
    ChatConversation,
    PlannerStatus,
    PlannerView,
    RecipesStatus,
    RecipesView,
    View,
    ViewController,
)

__all__ = [
    "InventoryStore",
    "fingerprint_items",
    "PreferenceStore",
    "PrefetchCoordinator",
    "SyncState",
    "KitchenSession",
    "ChatConversation",
    "PlannerStatus",
    "PlannerView",
    "RecipesStatus",
    "RecipesView",
    "View",
    "ViewController",
]
