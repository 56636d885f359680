"""Tests for the in-memory entity store."""
from decimal import Decimal

import pytest

from fintrack.storage.base import StorageError
from fintrack.storage.memory import InMemoryStore
from fintrack.storage.seed import DEMO_EMAIL, seed_demo_data


def test_ids_are_sequential_per_entity_type(store):
    """Test id sequences."""
    user = store.users.create(email="a@example.com", password_hash="x")
    first = store.accounts.create(user_id=user.id, name="A", type="cash")
    second = store.accounts.create(user_id=user.id, name="B", type="cash")
    category = store.categories.create(user_id=user.id, name="Food", type="expense")
    assert (user.id, first.id, second.id, category.id) == (1, 1, 2, 1)


def test_create_stamps_timestamps(store):
    """Test created_at and updated_at stamping."""
    account = store.accounts.create(user_id=1, name="A", type="cash")
    assert account.created_at == account.updated_at
    contribution = store.goal_contributions.create(goal_id=1, amount="5")
    assert contribution.created_at is not None
    assert not hasattr(contribution, "updated_at")


def test_update_merges_and_bumps_updated_at(store):
    """Test partial update."""
    account = store.accounts.create(user_id=1, name="A", type="cash", balance="1.005")
    assert account.balance == Decimal("1.01")

    updated = store.accounts.update(account.id, name="Renamed")
    assert updated.name == "Renamed"
    assert updated.balance == Decimal("1.01")
    assert updated.updated_at >= account.updated_at
    assert updated.created_at == account.created_at


def test_update_missing_returns_none(store):
    """Test updating a missing row."""
    assert store.accounts.update(99, name="x") is None


def test_update_cannot_change_id(store):
    """Test that ids are immutable."""
    account = store.accounts.create(user_id=1, name="A", type="cash")
    with pytest.raises(StorageError):
        store.accounts.update(account.id, id=5)


def test_returned_entities_are_copies(store):
    """Test that callers cannot mutate stored rows."""
    account = store.accounts.create(user_id=1, name="A", type="cash")
    account.name = "Mutated"
    assert store.accounts.get(account.id).name == "A"


def test_delete(store):
    """Test delete."""
    account = store.accounts.create(user_id=1, name="A", type="cash")
    assert store.accounts.delete(account.id) is True
    assert store.accounts.delete(account.id) is False
    assert store.accounts.get(account.id) is None


def test_list_filters_and_find_owned(store):
    """Test list filters and owner lookup."""
    store.accounts.create(user_id=1, name="A", type="cash")
    other = store.accounts.create(user_id=2, name="B", type="cash")
    store.accounts.create(user_id=1, name="C", type="savings")

    assert [a.name for a in store.accounts.list(user_id=1)] == ["A", "C"]
    assert [a.name for a in store.accounts.list(user_id=1, type="savings")] == ["C"]
    assert store.accounts.find_owned(other.id, 1) is None
    assert store.accounts.find_owned(other.id, 2).name == "B"


def test_user_password_hash_never_serialized(store):
    """Test that password hashes stay in the store."""
    user = store.users.create(email="a@example.com", password_hash="secret")
    assert "password_hash" not in user.model_dump()
    updated = store.users.update(user.id, first_name="Ann")
    assert updated.password_hash == "secret"


def test_atomic_is_reentrant(store):
    """Test nested atomic blocks."""
    with store.atomic():
        with store.atomic():
            store.accounts.create(user_id=1, name="A", type="cash")
    assert len(store.accounts.list()) == 1


def test_seed_demo_data():
    """Test demo data seeding."""
    store = InMemoryStore()
    user_id = seed_demo_data(store)

    assert store.users.get(user_id).email == DEMO_EMAIL
    assert len(store.accounts.list(user_id=user_id)) == 3
    assert len(store.categories.list(user_id=user_id)) == 5
    assert len(store.transactions.list(user_id=user_id)) == 5
    goals = store.savings_goals.list(user_id=user_id)
    assert [g.name for g in goals] == ["Emergency Fund", "Vacation"]
    assert store.accounts.get(1).balance == Decimal("2500.00")
