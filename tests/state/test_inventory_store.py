"""Tests for the in-memory inventory store."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from fridgeraider.errors import ItemNotFoundError
from fridgeraider.models.recipe import Ingredient, Recipe
from fridgeraider.state.inventory_store import InventoryStore, fingerprint_items

SOUP = Recipe(id="soup", name="Soup", ingredients=[Ingredient(name="Tomato", amount=500, unit="g")])


def test_add_persists_and_notifies():
    saved: list[list] = []
    seen: list[int] = []
    store = InventoryStore(persister=saved.append)
    store.subscribe(lambda items: seen.append(len(items)))

    item = store.add(name="  Carrot ", quantity=3, unit="pcs", expiry_date=date(2030, 1, 1), category="Vegetable")

    assert item.name == "Carrot"
    assert store.items == [item]
    assert saved == [[item]]
    assert seen == [1]


def test_delete_unknown_item_raises(tomato):
    store = InventoryStore([tomato])

    with pytest.raises(ItemNotFoundError):
        store.delete("missing")
    store.delete(tomato.id)
    assert store.is_empty()


def test_unsubscribe_stops_notifications(tomato):
    seen: list[int] = []
    store = InventoryStore()
    unsubscribe = store.subscribe(lambda items: seen.append(len(items)))

    unsubscribe()
    store.replace([tomato])

    assert seen == []


def test_items_returns_a_copy(tomato):
    store = InventoryStore([tomato])

    store.items.clear()

    assert len(store) == 1


def test_fingerprint_equal_for_equal_values(tomato, milk):
    assert fingerprint_items([tomato, milk]) == fingerprint_items([tomato.model_copy(), milk])
    assert fingerprint_items([tomato]) != fingerprint_items(
        [tomato.model_copy(update={"quantity": 2})]
    )


def test_apply_recipe_commits_once(tomato):
    commits: list[list] = []
    store = InventoryStore([tomato], persister=commits.append)

    store.apply_recipe(SOUP)

    assert len(commits) == 1
    assert store.get("tomato").quantity == 0.5


@pytest.mark.asyncio
async def test_cook_cancelled_during_delay_changes_nothing(tomato):
    store = InventoryStore([tomato])

    task = asyncio.create_task(store.cook(SOUP, delay=10))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert store.get("tomato").quantity == 1


@pytest.mark.asyncio
async def test_cook_applies_after_delay(tomato):
    store = InventoryStore([tomato])

    items = await store.cook(SOUP, delay=0.01)

    assert items[0].quantity == 0.5
