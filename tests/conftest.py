# tests/conftest.py
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from food_inventory.core.config import Settings
from food_inventory.domain.models import Product
from food_inventory.main import create_app


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        api_keys={
            "test-key-alice": "alice@example.com",
            "test-key-bob": "bob@example.com",
        },
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    # Eigene App pro Test: frische In-Memory-SQLite-Datenbank über den lifespan
    with TestClient(create_app(test_settings)) as c:
        yield c


@pytest.fixture
def alice_headers() -> dict:
    return {"X-API-Key": "test-key-alice"}


@pytest.fixture
def bob_headers() -> dict:
    return {"X-API-Key": "test-key-bob"}


@pytest.fixture
def pasta() -> Product:
    return Product(barcode="1234567890123", name="Pasta", categories=["vegano"])
