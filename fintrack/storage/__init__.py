from .base import EntityStore, Repository, StorageError
from .memory import InMemoryRepository, InMemoryStore
from .seed import seed_demo_data

__all__ = [
    "EntityStore",
    "Repository",
    "StorageError",
    "InMemoryRepository",
    "InMemoryStore",
    "seed_demo_data",
]
