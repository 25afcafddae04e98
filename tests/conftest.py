"""Shared fixtures for Paycheck Budget tests."""

from datetime import datetime, timezone

import pytest

from paycheck_budget.ledger import LedgerStore
from paycheck_budget.orchestrator import BudgetCommands
from paycheck_budget.services.storage import InMemoryStorage, JsonFileStorage


class FixedClock:
    """A clock the test can move by assigning ``now``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FixedClock:
    """Clock set to Oct 3, 2026 (inside the '1st' period)."""
    return FixedClock(datetime(2026, 10, 3, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(memory_storage: InMemoryStorage, clock: FixedClock) -> LedgerStore:
    """A loaded store backed by in-memory storage."""
    store = LedgerStore(memory_storage, clock=clock)
    store.load()
    return store


@pytest.fixture
def json_storage(tmp_path) -> JsonFileStorage:
    return JsonFileStorage(tmp_path / "data" / "budget.json")


@pytest.fixture
def commands(store: LedgerStore) -> BudgetCommands:
    return BudgetCommands(store)
