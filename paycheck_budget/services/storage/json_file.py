"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is the default backend because:
1. The user can open and back up their budget with any editor
2. No database setup required
3. The persisted layout matches the aggregate one-to-one

Writes go to a temporary file in the same directory which is then
moved over the target with os.replace. A reader sees either the old
file or the new one, never a half-written file.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from paycheck_budget.services.storage.interface import (
    BudgetStorageInterface,
    CorruptSnapshotError,
    StorageUnavailableError,
)


logger = structlog.get_logger(__name__)


class JsonFileStorage(BudgetStorageInterface):
    """
    Stores the budget snapshot as a UTF-8 JSON file.

    The file and its parent directories are created on first save.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_snapshot(self) -> Optional[dict]:
        """Read the snapshot; None if the file does not exist yet."""
        if not self._path.exists():
            return None

        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as e:
            raise CorruptSnapshotError(
                f"Budget file is not valid JSON: {self._path} ({e})"
            )
        except OSError as e:
            raise StorageUnavailableError(
                f"Failed to read budget file {self._path}: {e}"
            )

        if not isinstance(data, dict):
            raise CorruptSnapshotError(
                f"Budget file does not hold a JSON object: {self._path}"
            )

        return data

    def save_snapshot(self, snapshot: dict) -> None:
        """Atomically replace the file with ``snapshot``."""
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(snapshot, handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise StorageUnavailableError(
                f"Failed to write budget file {self._path}: {e}"
            )
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("temp_file_cleanup_failed", path=tmp_name)

        logger.debug("budget_file_written", path=str(self._path))
