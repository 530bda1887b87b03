from __future__ import annotations

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from app import main
from app.menu import MenuService, MenuStore, seed_items


@pytest.fixture()
def store() -> MenuStore:
    return MenuStore(seed_items())


@pytest.fixture()
def service(store: MenuStore) -> MenuService:
    return MenuService(store)


@pytest.fixture()
def client(service: MenuService, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr(main, "service", service)
    return TestClient(main.app)


@pytest.fixture()
def taco_payload() -> dict[str, object]:
    return {
        "name": "Taco",
        "description": "A tasty taco with beef and cheese",
        "price": 5.5,
        "category": "entree",
        "ingredients": ["beef", "cheese"],
    }
