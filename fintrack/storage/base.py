"""
Abstract storage interface.

Route handlers and the ledger only talk to these interfaces, so the
in-memory store can be replaced by a database-backed one without touching
business logic. Implementations own their synchronization and expose it via
``EntityStore.atomic`` for multi-step read-modify-write sequences.
"""
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from fintrack.models.entities import (
    Account,
    Category,
    GoalContribution,
    SavingsGoal,
    Transaction,
    User,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(ABC, Generic[ModelT]):
    """CRUD over one entity type, keyed by integer id."""

    @abstractmethod
    def create(self, **fields: Any) -> ModelT:
        """
        Persist a new entity.

        The repository assigns ``id`` and stamps ``created_at`` (and
        ``updated_at`` where the model has one).
        """

    @abstractmethod
    def get(self, entity_id: int) -> Optional[ModelT]:
        """Return the entity, or None if it does not exist."""

    @abstractmethod
    def update(self, entity_id: int, **changes: Any) -> Optional[ModelT]:
        """
        Merge ``changes`` into the stored entity and bump ``updated_at``.

        Returns:
            The updated entity, or None if it does not exist
        """

    @abstractmethod
    def delete(self, entity_id: int) -> bool:
        """Remove the entity. Returns False if it did not exist."""

    @abstractmethod
    def list(self, **filters: Any) -> List[ModelT]:
        """Entities whose attributes equal every given filter, in insertion order."""

    def find_owned(self, entity_id: int, user_id: int) -> Optional[ModelT]:
        """Return the entity only if it exists and belongs to ``user_id``."""
        entity = self.get(entity_id)
        if entity is None or getattr(entity, "user_id", None) != user_id:
            return None
        return entity


class EntityStore(ABC):
    """Aggregate of the repositories backing the API."""

    users: Repository[User]
    accounts: Repository[Account]
    categories: Repository[Category]
    transactions: Repository[Transaction]
    savings_goals: Repository[SavingsGoal]
    goal_contributions: Repository[GoalContribution]

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Context manager making a sequence of repository calls a single writer section."""


class StorageError(Exception):
    """Base exception for storage operations."""
