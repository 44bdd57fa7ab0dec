"""Tests for the kitchen session flows: onboarding, add item, cook, planner and chat."""

from __future__ import annotations

import asyncio
import gc
from datetime import date

import pytest

from fridgeraider.db import load_inventory, load_preferences
from fridgeraider.errors import ConversationBusyError, FoodRejectedError, ItemNotFoundError
from fridgeraider.llm.interface import GenerationResult
from fridgeraider.models.chat import ChatComplete
from fridgeraider.state.session import KitchenSession
from fridgeraider.state.views import GREETING, PlannerStatus, RecipesStatus, View
from tests.fakes import ScriptedModel, meal_plan_payload, recipe_payload

EXPIRY = date(2030, 1, 1)


def _model() -> ScriptedModel:
    model = ScriptedModel()
    model.reply_json("validate_food", {"isValid": True, "category": "Vegetable"})
    model.reply_json("extract_preferences", ["Vegan"])
    model.reply_json("generate_recipes", [recipe_payload()])
    model.reply_json("generate_meal_plan", meal_plan_payload(3))
    return model


@pytest.mark.asyncio
async def test_first_run_starts_on_onboarding_and_moves_to_inventory():
    session = KitchenSession.load(_model())
    assert session.views.active is View.ONBOARDING
    assert session.preferences.is_first_run

    prefs = await session.complete_onboarding("  I am vegan  ")

    assert prefs.tags == ["Vegan"]
    assert prefs.raw_text == "I am vegan"
    assert session.views.active is View.INVENTORY
    assert load_preferences() == prefs
    assert KitchenSession.load(_model()).views.active is View.INVENTORY


@pytest.mark.asyncio
async def test_onboarding_keeps_raw_text_when_extraction_fails():
    model = _model()
    model.replies["extract_preferences"] = RuntimeError("down")
    session = KitchenSession.load(model)

    prefs = await session.complete_onboarding("no mushrooms please")

    assert prefs.tags == []
    assert prefs.raw_text == "no mushrooms please"
    assert session.views.active is View.INVENTORY
    assert KitchenSession.load(_model()).views.active is View.ONBOARDING


@pytest.mark.asyncio
async def test_blank_onboarding_text_rejected():
    model = _model()
    session = KitchenSession.load(model)

    with pytest.raises(ValueError):
        await session.complete_onboarding("   ")
    assert model.calls == []


@pytest.mark.asyncio
async def test_add_item_uses_validator_category_and_persists():
    session = KitchenSession.load(_model())

    item = await session.add_item(name="Carrot", quantity=3, unit="pcs", expiry_date=EXPIRY)
    await session.prefetch.wait_idle()

    assert item.category == "Vegetable"
    assert load_inventory() == [item]


@pytest.mark.asyncio
async def test_rejected_item_never_enters_inventory():
    model = _model()
    model.reply_json("validate_food", {"isValid": False, "category": "Other"})
    session = KitchenSession.load(model)

    with pytest.raises(FoodRejectedError) as excinfo:
        await session.add_item(name="Stapler", quantity=1, unit="pcs", expiry_date=EXPIRY)

    assert "Stapler" in str(excinfo.value)
    assert session.inventory.is_empty()
    assert load_inventory() == []
    assert "generate_recipes" not in model.operations()


@pytest.mark.asyncio
async def test_cook_deducts_ingredients():
    session = KitchenSession.load(_model())
    await session.add_item(name="Tomato", quantity=1, unit="kg", expiry_date=EXPIRY)
    await session.prefetch.wait_idle()

    items = await session.cook("recipe-soup")

    assert items[0].quantity == 0.5
    assert load_inventory()[0].quantity == 0.5
    assert session.recipes.cooking is None


@pytest.mark.asyncio
async def test_cook_unknown_recipe_raises():
    session = KitchenSession.load(_model())

    with pytest.raises(ItemNotFoundError):
        await session.cook("nope")


@pytest.mark.asyncio
async def test_cancelled_cook_leaves_inventory_untouched():
    session = KitchenSession.load(_model())
    await session.add_item(name="Tomato", quantity=1, unit="kg", expiry_date=EXPIRY)
    await session.prefetch.wait_idle()
    session.cook_delay = 10

    task = asyncio.create_task(session.cook("recipe-soup"))
    await asyncio.sleep(0)
    assert session.recipes.cooking == "recipe-soup"
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert session.inventory.items[0].quantity == 1
    assert session.recipes.cooking is None


@pytest.mark.asyncio
async def test_recipe_and_planner_statuses():
    model = _model()
    session = KitchenSession.load(model)
    assert session.recipes.status(inventory_empty=True) is RecipesStatus.EMPTY
    assert session.planner.status(inventory_empty=True) is PlannerStatus.EMPTY

    await session.add_item(name="Tomato", quantity=1, unit="kg", expiry_date=EXPIRY)
    assert session.recipes.status(inventory_empty=False) is RecipesStatus.LOADING
    await session.prefetch.wait_idle()

    assert session.recipes.status(inventory_empty=False) is RecipesStatus.READY
    assert session.planner.status(inventory_empty=False) is PlannerStatus.READY


@pytest.mark.asyncio
async def test_explicit_recipe_refresh_replaces_even_with_empty_result():
    model = _model()
    session = KitchenSession.load(model)
    await session.add_item(name="Tomato", quantity=1, unit="kg", expiry_date=EXPIRY)
    await session.prefetch.wait_idle()

    model.replies["generate_recipes"] = "[]"
    recipes = await session.refresh_recipes()

    assert recipes == []
    assert session.recipes.recipes == []


@pytest.mark.asyncio
async def test_planner_error_state_and_retry():
    model = _model()
    session = KitchenSession.load(model)
    await session.add_item(name="Tomato", quantity=1, unit="kg", expiry_date=EXPIRY)
    await session.prefetch.wait_idle()

    model.replies["generate_meal_plan"] = "garbage"
    await session.set_plan_days(5)
    assert session.planner.days == 5
    assert session.planner.status(inventory_empty=False) is PlannerStatus.ERROR

    model.reply_json("generate_meal_plan", meal_plan_payload(5))
    plan = await session.refresh_plan()

    assert len(plan) == 5
    assert session.planner.status(inventory_empty=False) is PlannerStatus.READY
    assert "Create a 5-day meal plan" in model.calls[-1].prompt


@pytest.mark.asyncio
async def test_chat_transcript_starts_with_greeting_and_records_answer():
    model = _model()
    model.replies["chat"] = "Try a salad."
    session = KitchenSession.load(model)
    assert [message.content for message in session.chat.messages] == [GREETING]

    answer = await session.ask("Ideas?")

    assert answer.content == "Try a salad."
    assert [message.role for message in session.chat.messages] == ["assistant", "user", "assistant"]
    assert not session.chat.busy


@pytest.mark.asyncio
async def test_streamed_answer_updates_transcript():
    model = _model()
    model.streams["chat"] = [GenerationResult(text="Hello"), GenerationResult(text=" there")]
    session = KitchenSession.load(model)

    events = [event async for event in session.ask_stream("hi")]

    assert isinstance(events[-1], ChatComplete)
    last = session.chat.messages[-1]
    assert last.content == "Hello there"
    assert last.is_streaming is False
    assert not session.chat.busy


@pytest.mark.asyncio
async def test_second_question_while_streaming_is_rejected():
    model = _model()
    model.streams["chat"] = [GenerationResult(text="Hello")]
    session = KitchenSession.load(model)

    events = session.ask_stream("first")
    with pytest.raises(ConversationBusyError):
        session.ask_stream("second")
    async for _ in events:
        pass

    assert not session.chat.busy


@pytest.mark.asyncio
async def test_planner_malformed_meal_fields_do_not_raise():
    model = _model()
    session = KitchenSession.load(model)
    await session.add_item(name="Tomato", quantity=1, unit="kg", expiry_date=EXPIRY)
    await session.prefetch.wait_idle()

    payload = meal_plan_payload(3)
    payload[1]["lunch"] = dict(payload[1]["lunch"], steps=7)
    model.reply_json("generate_meal_plan", payload)
    plan = await session.refresh_plan()

    assert len(plan) == 3
    assert session.planner.error is False
    assert session.planner.status(inventory_empty=False) is PlannerStatus.READY


@pytest.mark.asyncio
async def test_closing_unstarted_stream_frees_conversation():
    model = _model()
    model.replies["chat"] = "Sure."
    session = KitchenSession.load(model)

    events = session.ask_stream("first")
    assert session.chat.busy
    await events.aclose()

    assert not session.chat.busy
    assert session.chat.messages[-1].is_streaming is False
    assert (await session.ask("second")).content == "Sure."


@pytest.mark.asyncio
async def test_dropped_unstarted_stream_frees_conversation():
    session = KitchenSession.load(_model())

    events = session.ask_stream("first")
    del events
    gc.collect()

    assert not session.chat.busy
