"""Services package."""

from paycheck_budget.services.storage import (
    BudgetStorageInterface,
    CorruptSnapshotError,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    "BudgetStorageInterface",
    "CorruptSnapshotError",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageError",
    "StorageUnavailableError",
]
