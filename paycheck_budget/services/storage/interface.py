"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON file for another backend later
2. Use in-memory storage for testing
3. Keep the Ledger Store decoupled from how bytes reach the disk

The contract is deliberately narrow: load the whole snapshot,
save the whole snapshot. There is no partial update.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BudgetStorageInterface(ABC):
    """
    Abstract interface for budget persistence.

    A backend holds exactly one snapshot per storage location.
    """

    @abstractmethod
    def load_snapshot(self) -> Optional[dict]:
        """
        Read the persisted snapshot.

        Returns:
            The decoded snapshot, or None if nothing was ever saved

        Raises:
            StorageUnavailableError: If the backend cannot be read
            CorruptSnapshotError: If the stored bytes are not a snapshot
        """
        pass

    @abstractmethod
    def save_snapshot(self, snapshot: dict) -> None:
        """
        Replace the persisted snapshot.

        A later load_snapshot() sees either the previous snapshot or this
        one, never a mix of both.

        Raises:
            StorageUnavailableError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The backend could not be read or written (missing, permissions, disk full)."""
    pass


class CorruptSnapshotError(StorageError):
    """The persisted bytes could not be decoded as a budget."""
    pass
