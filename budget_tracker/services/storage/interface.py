"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for persistence.
This allows us to:
1. Keep JSON files on disk for day-to-day use
2. Use in-memory storage for testing
3. Swap in another medium later without touching the ledger or session code

The layout is a flat key-value store:

    budget-app-data-<year>   {monthId: MonthData}   (12 entries)
    budget-app-session       {name, email}          (absent when signed out)
    budget-app-users         {email: {name, password}}

Every value is validated against its pydantic schema on load.
A schema mismatch is a PersistenceFailure, never a silent crash.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import ValidationError

from budget_tracker.errors import BudgetTrackerError
from budget_tracker.ledger.month_store import year_slice
from budget_tracker.models.ledger import MonthStore, month_store_adapter
from budget_tracker.models.session import (
    CredentialRegistry,
    User,
    registry_adapter,
)


DEFAULT_KEY_PREFIX = "budget-app"


class BudgetStorageInterface(ABC):
    """
    Abstract interface for budget persistence.

    Month stores are keyed by year; session and credential registry
    are global. Saves replace the whole value (last writer wins).
    """

    @abstractmethod
    def load_month_store(self, year: int) -> Optional[MonthStore]:
        """
        Load the months saved for a year.

        Returns:
            The year's months, or None if nothing was saved yet

        Raises:
            PersistenceFailure: If the stored value cannot be read or parsed
        """
        pass

    @abstractmethod
    def save_month_store(self, year: int, store: MonthStore) -> bool:
        """
        Save the months of `year` found in `store`.

        Months of other years in the snapshot are ignored.

        Raises:
            PersistenceFailure: If the write fails
        """
        pass

    @abstractmethod
    def load_session(self) -> Optional[User]:
        """Load the signed-in identity, or None when signed out."""
        pass

    @abstractmethod
    def save_session(self, user: User) -> bool:
        pass

    @abstractmethod
    def clear_session(self) -> bool:
        pass

    @abstractmethod
    def load_credential_registry(self) -> CredentialRegistry:
        """Load the credential registry. Empty when nothing was saved."""
        pass

    @abstractmethod
    def save_credential_registry(self, registry: CredentialRegistry) -> bool:
        pass


class KeyValueStorage(BudgetStorageInterface):
    """
    Shared JSON codec for key-value backends.

    Subclasses only move raw text in and out of the medium.
    """

    def __init__(self, key_prefix: str = DEFAULT_KEY_PREFIX):
        self._key_prefix = key_prefix

    # ------------------------------------------------------------------
    # Raw medium access
    # ------------------------------------------------------------------

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Raw text stored under `key`, or None if absent."""
        pass

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def _delete(self, key: str) -> None:
        """Remove `key`. Removing a missing key is not an error."""
        pass

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def month_store_key(self, year: int) -> str:
        return f"{self._key_prefix}-data-{year}"

    @property
    def session_key(self) -> str:
        return f"{self._key_prefix}-session"

    @property
    def users_key(self) -> str:
        return f"{self._key_prefix}-users"

    # ------------------------------------------------------------------
    # Codec
    # ------------------------------------------------------------------

    def _load_json(self, key: str) -> Optional[Any]:
        try:
            raw = self._read(key)
        except PersistenceFailure:
            raise
        except Exception as e:
            raise PersistenceFailure("load", key, str(e)) from e

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceFailure("load", key, f"Invalid JSON: {e}") from e

    def _save_json(self, key: str, value: Any) -> bool:
        text = json.dumps(value, ensure_ascii=False, indent=2, sort_keys=True)
        try:
            self._write(key, text)
        except PersistenceFailure:
            raise
        except Exception as e:
            raise PersistenceFailure("save", key, str(e)) from e
        return True

    # ------------------------------------------------------------------
    # Interface
    # ------------------------------------------------------------------

    def load_month_store(self, year: int) -> Optional[MonthStore]:
        key = self.month_store_key(year)
        data = self._load_json(key)
        if data is None:
            return None

        try:
            store = month_store_adapter.validate_python(data)
        except ValidationError as e:
            raise PersistenceFailure("load", key, f"Schema mismatch: {e}") from e

        if len(store) != 12:
            raise PersistenceFailure(
                "load", key, f"Expected 12 months, found {len(store)}"
            )
        for month_identifier, month in store.items():
            if month_identifier != month.id or month.year != year:
                raise PersistenceFailure(
                    "load",
                    key,
                    f"Record {month_identifier} does not belong to {year}",
                )
        return store

    def save_month_store(self, year: int, store: MonthStore) -> bool:
        months = year_slice(store, year)
        payload = month_store_adapter.dump_python(months, mode="json")
        return self._save_json(self.month_store_key(year), payload)

    def load_session(self) -> Optional[User]:
        data = self._load_json(self.session_key)
        if data is None:
            return None
        try:
            return User.model_validate(data)
        except ValidationError as e:
            raise PersistenceFailure(
                "load", self.session_key, f"Schema mismatch: {e}"
            ) from e

    def save_session(self, user: User) -> bool:
        return self._save_json(self.session_key, user.model_dump(mode="json"))

    def clear_session(self) -> bool:
        try:
            self._delete(self.session_key)
        except Exception as e:
            raise PersistenceFailure("clear", self.session_key, str(e)) from e
        return True

    def load_credential_registry(self) -> CredentialRegistry:
        data = self._load_json(self.users_key)
        if data is None:
            return {}
        try:
            return registry_adapter.validate_python(data)
        except ValidationError as e:
            raise PersistenceFailure(
                "load", self.users_key, f"Schema mismatch: {e}"
            ) from e

    def save_credential_registry(self, registry: CredentialRegistry) -> bool:
        payload = registry_adapter.dump_python(registry, mode="json")
        return self._save_json(self.users_key, payload)


class StorageError(BudgetTrackerError):
    """Base exception for storage operations."""
    pass


class PersistenceFailure(StorageError):
    """
    A durable read or write failed, or stored data did not match its schema.

    Non-fatal: the in-memory state stays authoritative.
    """

    def __init__(self, operation: str, key: str, reason: str):
        super().__init__(f"Failed to {operation} {key}: {reason}")
        self.operation = operation
        self.key = key
        self.reason = reason
