"""In-process storage: one id-indexed dict per entity type."""
import itertools
import threading
from contextlib import AbstractContextManager
from typing import Any, Dict, Generic, List, Optional, Type

from fintrack.models.entities import (
    Account,
    Category,
    GoalContribution,
    SavingsGoal,
    Transaction,
    User,
)
from fintrack.storage.base import EntityStore, ModelT, Repository, StorageError
from fintrack.utils.timestamp import utc_now


class InMemoryRepository(Repository[ModelT], Generic[ModelT]):
    """Repository holding validated model instances in process memory."""

    def __init__(self, model: Type[ModelT], lock: threading.RLock):
        self.model = model
        self._lock = lock
        self._rows: Dict[int, ModelT] = {}
        self._ids = itertools.count(1)
        self._has_updated_at = "updated_at" in model.model_fields

    def create(self, **fields: Any) -> ModelT:
        with self._lock:
            now = utc_now()
            fields.setdefault("created_at", now)
            if self._has_updated_at:
                fields.setdefault("updated_at", now)
            entity = self.model(id=next(self._ids), **fields)
            self._rows[entity.id] = entity
            return entity.model_copy()

    def get(self, entity_id: int) -> Optional[ModelT]:
        with self._lock:
            entity = self._rows.get(entity_id)
            return entity.model_copy() if entity is not None else None

    def update(self, entity_id: int, **changes: Any) -> Optional[ModelT]:
        if "id" in changes:
            raise StorageError("Entity id cannot be changed")
        with self._lock:
            current = self._rows.get(entity_id)
            if current is None:
                return None
            data = dict(current)
            data.update(changes)
            if self._has_updated_at:
                data["updated_at"] = utc_now()
            entity = self.model.model_validate(data)
            self._rows[entity_id] = entity
            return entity.model_copy()

    def delete(self, entity_id: int) -> bool:
        with self._lock:
            return self._rows.pop(entity_id, None) is not None

    def list(self, **filters: Any) -> List[ModelT]:
        with self._lock:
            return [
                entity.model_copy()
                for entity in self._rows.values()
                if all(getattr(entity, key) == value for key, value in filters.items())
            ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)


class InMemoryStore(EntityStore):
    """
    Ephemeral store for a single process.

    Every repository shares one re-entrant lock, so ``atomic()`` held by the
    ledger excludes all other writers while still allowing nested
    repository calls from the same thread.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self.users = InMemoryRepository(User, self._lock)
        self.accounts = InMemoryRepository(Account, self._lock)
        self.categories = InMemoryRepository(Category, self._lock)
        self.transactions = InMemoryRepository(Transaction, self._lock)
        self.savings_goals = InMemoryRepository(SavingsGoal, self._lock)
        self.goal_contributions = InMemoryRepository(GoalContribution, self._lock)

    def atomic(self) -> AbstractContextManager:
        return self._lock
