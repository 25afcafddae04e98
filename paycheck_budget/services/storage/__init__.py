"""
Storage Services Package

Provides the abstract interface and concrete backends for persisting
the budget. The JSON file backend is the default; the in-memory one
backs the tests.
"""

from paycheck_budget.services.storage.interface import (
    BudgetStorageInterface,
    CorruptSnapshotError,
    StorageError,
    StorageUnavailableError,
)
from paycheck_budget.services.storage.json_file import JsonFileStorage
from paycheck_budget.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "BudgetStorageInterface",
    # Exceptions
    "CorruptSnapshotError",
    "StorageError",
    "StorageUnavailableError",
    # Backends
    "InMemoryStorage",
    "JsonFileStorage",
]
