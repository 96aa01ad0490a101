"""
JSON File Storage Implementation

DESIGN DECISION: Each storage key is one JSON file in a data directory:

    <data_dir>/budget-app-data-2026.json
    <data_dir>/budget-app-session.json
    <data_dir>/budget-app-users.json

TRADEOFFS:
- Human-readable, easy to back up or inspect
- One writer only (we are a single-user app)
- Writes replace the whole file atomically: a crash mid-write leaves
  the previous version in place, never a half-written file
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from budget_tracker.config import get_settings
from budget_tracker.services.storage.interface import KeyValueStorage


logger = structlog.get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    File-backed key-value storage.

    Transient OS errors (locked file, full disk that frees up) are
    retried a few times before the failure is reported.
    """

    def __init__(
        self,
        data_dir: Optional[str] = None,
        key_prefix: Optional[str] = None,
        retry_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        super().__init__(key_prefix or settings.key_prefix)
        self._data_dir = Path(data_dir or settings.data_dir)
        attempts = retry_attempts or settings.retry_attempts

        retry_policy = retry(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        self._read_file = retry_policy(self._read_file_once)
        self._write_file = retry_policy(self._write_file_once)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def _read_file_once(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write_file_once(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.stem}-", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read(self, key: str) -> Optional[str]:
        return self._read_file(self.path_for(key))

    def _write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        self._write_file(path, value)
        logger.debug("storage_written", key=key, path=str(path), size=len(value))

    def _delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)
