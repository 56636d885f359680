"""Shared fixtures."""
from datetime import date

import pytest
from fastapi.testclient import TestClient

from fintrack.auth.tokens import Identity
from fintrack.config import Settings
from fintrack.main import create_app
from fintrack.services.ledger import LedgerService
from fintrack.storage.memory import InMemoryStore


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, seed_demo_data=False, jwt_secret="test-secret")


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def register_user(client):
    """Register a user over HTTP; returns (user_id, auth headers)."""

    def register(email="alice@example.com"):
        response = client.post("/api/auth/register", json={"email": email, "password": "secret123"})
        assert response.status_code == 201
        data = response.json()["data"]
        return data["user"]["id"], {"Authorization": f"Bearer {data['token']}"}

    return register


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def ledger(store):
    return LedgerService(store)


@pytest.fixture
def alice(store):
    user = store.users.create(email="alice@example.com", password_hash="x")
    return Identity(user_id=user.id, email=user.email)


@pytest.fixture
def bob(store):
    user = store.users.create(email="bob@example.com", password_hash="x")
    return Identity(user_id=user.id, email=user.email)


@pytest.fixture
def checking(store, alice):
    return store.accounts.create(user_id=alice.user_id, name="Checking", type="checking", balance="0")


@pytest.fixture
def salary(store, alice):
    return store.categories.create(user_id=alice.user_id, name="Salary", type="income")


@pytest.fixture
def groceries(store, alice):
    return store.categories.create(user_id=alice.user_id, name="Groceries", type="expense")


@pytest.fixture
def jan_first():
    return date(2025, 1, 1)
