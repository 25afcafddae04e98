"""
In-memory storage backend.

Keeps a deep copy of the last saved snapshot so callers cannot mutate
what was "persisted" through a shared reference. Used for tests and for
the 'memory' backend setting (nothing survives a restart).
"""

import copy
from typing import Optional

from paycheck_budget.services.storage.interface import (
    BudgetStorageInterface,
    StorageUnavailableError,
)


class InMemoryStorage(BudgetStorageInterface):
    """Budget storage held in process memory."""

    def __init__(self, snapshot: Optional[dict] = None):
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count = 0
        self.fail_on_save = False

    def load_snapshot(self) -> Optional[dict]:
        return copy.deepcopy(self._snapshot)

    def save_snapshot(self, snapshot: dict) -> None:
        if self.fail_on_save:
            raise StorageUnavailableError("In-memory storage is set to fail")
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count += 1
