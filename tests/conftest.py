# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from helpers.fake_store import FakeContextStore
from ngsi2.core.contract import RequestContract
from ngsi2.main import create_app


@pytest.fixture
def store() -> FakeContextStore:
    return FakeContextStore()


@pytest.fixture
def contract(store: FakeContextStore) -> RequestContract:
    return RequestContract(store)


@pytest.fixture
def client(store: FakeContextStore) -> TestClient:
    return TestClient(create_app(store))
