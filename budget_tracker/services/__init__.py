"""Services package."""

from budget_tracker.services.storage import (
    BudgetStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
    PersistenceFailure,
    StorageError,
)

__all__ = [
    "BudgetStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "PersistenceFailure",
    "StorageError",
]
