"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from mealbook.config import Settings
from mealbook.main import create_app
from mealbook.store import Store

# =============================================================================
# Settings / Store Fixtures
# =============================================================================


def make_settings(**overrides) -> Settings:
    """In-memory settings that ignore any local .env file."""
    values = {"database_url": "sqlite+aiosqlite://", "seed_sample_data": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def store(settings):
    """An empty, started store."""
    store = Store.from_settings(settings)
    await store.start()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def seeded_store():
    """A started store holding the sample recipes and meal plans."""
    store = Store.from_settings(make_settings(seed_sample_data=True))
    await store.start()
    yield store
    await store.close()


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest.fixture
def client(settings):
    """Client for an app whose store starts empty."""
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def seeded_client():
    """Client for an app whose store holds the sample data."""
    with TestClient(create_app(make_settings(seed_sample_data=True))) as client:
        yield client


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def recipe_payload():
    return {
        "name": "X",
        "category": "lunch",
        "instructions": "Y",
        "ingredients": "Z",
        "prep_time": 5,
    }


@pytest.fixture
def meal_plan_payload():
    return {
        "name": "P",
        "date": "2023-10-01",
        "recipe_ids": "[1,2]",
        "notes": "n",
    }
