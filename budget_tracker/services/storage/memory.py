"""
In-Memory Storage Implementation

Holds serialized JSON text in a dict, so values go through exactly the
same codec and schema checks as the file backend. Used in tests and
when no data directory should be touched.
"""

from typing import Optional

from budget_tracker.services.storage.interface import (
    DEFAULT_KEY_PREFIX,
    KeyValueStorage,
)


class InMemoryStorage(KeyValueStorage):
    """Dict-backed key-value storage. Lost when the process exits."""

    def __init__(
        self,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        initial: Optional[dict[str, str]] = None,
    ):
        super().__init__(key_prefix)
        self._values: dict[str, str] = dict(initial or {})

    @property
    def raw(self) -> dict[str, str]:
        """Snapshot of stored text, keyed by storage key."""
        return dict(self._values)

    def _read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def _write(self, key: str, value: str) -> None:
        self._values[key] = value

    def _delete(self, key: str) -> None:
        self._values.pop(key, None)
