"""
Storage Services Package

Provides the abstract persistence interface and concrete implementations.
JSON files on disk are the default backend; an in-memory backend is
available for tests.
"""

from budget_tracker.services.storage.interface import (
    BudgetStorageInterface,
    KeyValueStorage,
    PersistenceFailure,
    StorageError,
)
from budget_tracker.services.storage.json_file import JsonFileStorage
from budget_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "BudgetStorageInterface",
    "KeyValueStorage",
    # Exceptions
    "PersistenceFailure",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
