"""Shared pytest fixtures for the FridgeRaider test suite."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fridgeraider.config import get_settings
from fridgeraider.db.repository import reset_repository_state
from fridgeraider.models.inventory import InventoryItem
from fridgeraider.server.app import create_app
from tests.fakes import ScriptedModel

ISOLATED_ENV = (
    "FRIDGERAIDER_API_TOKEN",
    "FRIDGERAIDER_GEMINI_API_KEY",
    "GEMINI_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database and no real credentials."""

    db_path = tmp_path / "test_fridgeraider.db"
    monkeypatch.setenv("FRIDGERAIDER_DATABASE_PATH", str(db_path))
    monkeypatch.setenv("FRIDGERAIDER_COOK_DELAY_SECONDS", "0")
    for name in ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("FRIDGERAIDER_DATABASE_PATH", raising=False)
    get_settings.cache_clear()


@pytest.fixture()
def model() -> ScriptedModel:
    return ScriptedModel()


@pytest.fixture()
def app(model) -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance backed by the scripted model."""

    application = create_app(model=model)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    """Return a test client with startup and shutdown hooks run."""

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def tomato() -> InventoryItem:
    return InventoryItem(
        id="tomato",
        name="Tomato",
        category="Vegetable",
        quantity=1,
        unit="kg",
        expiry_date=date.today() + timedelta(days=5),
    )


@pytest.fixture()
def milk() -> InventoryItem:
    return InventoryItem(
        id="milk",
        name="Milk",
        category="Dairy",
        quantity=1,
        unit="l",
        expiry_date=date.today() + timedelta(days=2),
    )
