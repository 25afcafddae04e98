"""Tests for the Ledger Store and the period transition detector."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from paycheck_budget.ledger import LedgerStore, PeriodTransitionDetector
from paycheck_budget.models.budget import BudgetState, EntryKind, PaycheckTarget, PayPeriod
from paycheck_budget.services.storage import (
    CorruptSnapshotError,
    InMemoryStorage,
    JsonFileStorage,
    StorageUnavailableError,
)


class TestLoadSave:
    """Tests for load() and save()."""

    def test_load_without_snapshot_gives_defaults(self, store):
        """Test a store with nothing persisted starts from defaults."""
        assert store.state == BudgetState()

    def test_load_legacy_snapshot_defaults_notes(self, clock):
        """Test a snapshot without notes loads with an empty notes list."""
        storage = InMemoryStorage({
            "paychecks": {"1st": 1000, "15th": 500},
            "recurringPayments": [],
            "oneTimePayments": [],
            "lastPayPeriod": None,
        })
        state = LedgerStore(storage, clock=clock).load()
        assert state.notes == []
        assert state.paychecks.fifteenth == Decimal("500")

    def test_load_original_app_snapshot(self, tmp_path, clock):
        """Test a file written by the browser app loads: no IDs, float amounts, JS dates."""
        path = tmp_path / "budget.json"
        path.write_text(
            """{
              "paychecks": {"1st": 2100.5, "15th": 1800},
              "recurringPayments": [{"name": "Netflix", "amount": 19.99, "paycheck": "both"}],
              "oneTimePayments": [{"name": "Vet", "amount": 120.25, "paycheck": "1st", "period": "1st"}],
              "notes": [{"text": "Ask about the raise", "date": "2026-10-03T09:30:00.000Z"}],
              "lastPayPeriod": "1st"
            }""",
            encoding="utf-8",
        )
        storage = JsonFileStorage(path)
        store = LedgerStore(storage, clock=clock)
        state = store.load()

        assert state.paychecks.first == Decimal("2100.5")
        assert state.recurring_payments[0].amount == Decimal("19.99")
        assert state.one_time_payments[0].amount == Decimal("120.25")
        assert state.notes[0].date == datetime(2026, 10, 3, 9, 30, tzinfo=timezone.utc)
        assert state.last_pay_period is PayPeriod.FIRST

        ids = [
            state.recurring_payments[0].id,
            state.one_time_payments[0].id,
            state.notes[0].id,
        ]
        assert all(isinstance(entry_id, UUID) for entry_id in ids)
        assert len(set(ids)) == 3

        store.save()
        reloaded = LedgerStore(storage, clock=clock).load()
        assert [
            reloaded.recurring_payments[0].id,
            reloaded.one_time_payments[0].id,
            reloaded.notes[0].id,
        ] == ids
        assert reloaded == state

    def test_round_trip_through_json_file(self, json_storage, clock):
        """Test load(save(state)) == state through a real file."""
        store = LedgerStore(json_storage, clock=clock)
        store.load()
        store.set_paycheck_amount("1st", "2100.50")
        store.add_recurring_payment("Rent", "950", "1st")
        store.add_one_time_payment("Concert", "85.25", "15th")
        store.add_note("Ask about the raise")

        reloaded = LedgerStore(json_storage, clock=clock).load()
        assert reloaded == store.state
        assert reloaded.notes[0].text == "Ask about the raise"

    def test_save_replaces_state(self, store, memory_storage):
        """Test save(state) adopts and persists the given state."""
        state = BudgetState()
        state.paychecks.set_amount(PayPeriod.FIRST, Decimal("10"))
        store.save(state)
        assert store.state is state
        assert memory_storage.load_snapshot()["paychecks"]["1st"] == "10"

    def test_invalid_snapshot_raises(self, clock):
        """Test a snapshot with invalid values is reported as corrupt."""
        storage = InMemoryStorage({"recurringPayments": [{"name": "", "amount": -1, "paycheck": "x"}]})
        with pytest.raises(CorruptSnapshotError):
            LedgerStore(storage, clock=clock).load()

    def test_state_loads_lazily(self, memory_storage, clock):
        """Test accessing state before load() loads it."""
        memory_storage.save_snapshot({"paychecks": {"1st": 7, "15th": 0}})
        store = LedgerStore(memory_storage, clock=clock)
        assert store.state.paychecks.first == Decimal("7")


class TestPaycheckAmount:
    """Tests for set_paycheck_amount()."""

    def test_sets_amount_and_saves(self, store, memory_storage):
        """Test a positive amount is stored and persisted."""
        result = store.set_paycheck_amount(PayPeriod.FIFTEENTH, Decimal("1800"))
        assert result.applied
        assert store.state.paychecks.fifteenth == Decimal("1800")
        assert memory_storage.save_count == 1

    @pytest.mark.parametrize("amount", [-5, 0, "0", "", "abc", None, float("nan"), "inf"])
    def test_rejects_non_positive_or_invalid(self, store, memory_storage, amount):
        """Test bad amounts are rejected and the prior amount is kept."""
        store.set_paycheck_amount("1st", 1000)
        result = store.set_paycheck_amount("1st", amount)
        assert not result.applied
        assert result.issues
        assert store.state.paychecks.first == Decimal("1000")
        assert memory_storage.save_count == 1

    def test_rejects_amount_too_large_to_display(self, store, memory_storage):
        """Test an absurdly large amount is rejected before it is persisted."""
        result = store.set_paycheck_amount("1st", "1e30")
        assert not result.applied
        assert result.issues[0].issue_type == "too_large"
        assert store.state.paychecks.first == 0
        assert memory_storage.save_count == 0

    def test_accepts_amount_just_below_limit(self, store):
        """Test the largest realistic amount is still accepted."""
        assert store.set_paycheck_amount("1st", "999,999,999.99").applied

    def test_rejects_unknown_period(self, store):
        """Test the period must be '1st' or '15th'."""
        result = store.set_paycheck_amount("both", 100)
        assert not result.applied
        assert result.issues[0].field == "paycheck"


class TestAddEntries:
    """Tests for adding payments and notes."""

    def test_add_recurring_payment(self, store):
        """Test a recurring payment is appended with a trimmed name."""
        result = store.add_recurring_payment("  Netflix ", "15.99", "both")
        assert result.applied
        payment = store.state.recurring_payments[0]
        assert payment.id == result.entry_id
        assert payment.name == "Netflix"
        assert payment.amount == Decimal("15.99")
        assert payment.paycheck is PaycheckTarget.BOTH

    @pytest.mark.parametrize("name,amount", [("   ", "10"), ("", "10"), ("Gym", "0"), ("Gym", "-3")])
    def test_add_recurring_payment_rejected(self, store, memory_storage, name, amount):
        """Test empty names and non-positive amounts are dropped."""
        result = store.add_recurring_payment(name, amount, "1st")
        assert not result.applied
        assert store.state.recurring_payments == []
        assert memory_storage.save_count == 0

    def test_add_one_time_payment_stamps_current_period(self, store, clock):
        """Test the one-time payment carries the period the clock is in."""
        store.add_one_time_payment("Vet", "120", "1st")
        clock.now = datetime(2026, 10, 20, 12, 0, tzinfo=timezone.utc)
        store.add_one_time_payment("Books", "30", "1st")

        first, second = store.state.one_time_payments
        assert first.period is PayPeriod.FIRST
        assert second.period is PayPeriod.FIFTEENTH

    def test_add_one_time_payment_rejects_both(self, store):
        """Test a one-time payment can't target both paychecks."""
        result = store.add_one_time_payment("Vet", "120", "both")
        assert not result.applied

    def test_add_note_stamps_time(self, store, clock):
        """Test a note is dated with the clock's time."""
        result = store.add_note("  Check the electric bill  ")
        assert result.applied
        note = store.state.notes[0]
        assert note.text == "Check the electric bill"
        assert note.date == clock.now

    def test_add_note_rejects_blank(self, store):
        """Test a blank note is dropped."""
        assert not store.add_note("   ").applied
        assert store.state.notes == []


class TestDelete:
    """Tests for positional and ID-based deletion."""

    def test_delete_first_of_three_keeps_order(self, store):
        """Test deleting index 0 shifts the rest down in order."""
        for name in ("A", "B", "C"):
            store.add_recurring_payment(name, "10", "1st")

        result = store.delete_recurring_payment(0)
        assert result.applied
        assert [p.name for p in store.state.recurring_payments] == ["B", "C"]

    @pytest.mark.parametrize("index", [3, -1, 99])
    def test_delete_out_of_range_is_noop(self, store, memory_storage, index):
        """Test an out-of-range index changes nothing."""
        for name in ("A", "B", "C"):
            store.add_recurring_payment(name, "10", "1st")
        saves = memory_storage.save_count

        result = store.delete_recurring_payment(index)
        assert not result.applied
        assert len(store.state.recurring_payments) == 3
        assert memory_storage.save_count == saves

    def test_delete_one_time_uses_full_list_index(self, store, clock):
        """Test the index refers to the full list, not the current-period view."""
        store.add_one_time_payment("Old", "10", "1st")
        clock.now = datetime(2026, 10, 16, tzinfo=timezone.utc)
        store.add_one_time_payment("New", "20", "15th")

        store.delete_one_time_payment(1)
        assert [p.name for p in store.state.one_time_payments] == ["Old"]

    def test_delete_note(self, store):
        """Test deleting a note by index."""
        store.add_note("one")
        store.add_note("two")
        store.delete_note(0)
        assert [n.text for n in store.state.notes] == ["two"]

    def test_delete_entry_by_id(self, store):
        """Test deletion by ID removes exactly that entry, even with identical twins."""
        store.add_one_time_payment("Lunch", "12", "1st")
        twin = store.add_one_time_payment("Lunch", "12", "1st")

        result = store.delete_entry(EntryKind.ONE_TIME_PAYMENT, twin.entry_id)
        assert result.applied
        assert len(store.state.one_time_payments) == 1
        assert store.state.one_time_payments[0].id != twin.entry_id

    def test_delete_entry_unknown_id(self, store):
        """Test an unknown ID is reported as not found."""
        result = store.delete_entry(EntryKind.NOTE, uuid4())
        assert not result.applied
        assert result.issues[0].issue_type == "not_found"


class TestSaveFailure:
    """Tests for behaviour when storage can't be written."""

    def test_failed_save_rolls_back_and_raises(self, store, memory_storage):
        """Test the mutation is undone in memory and the error propagates."""
        store.add_recurring_payment("Rent", "900", "1st")
        memory_storage.fail_on_save = True

        with pytest.raises(StorageUnavailableError):
            store.add_recurring_payment("Gym", "40", "1st")

        assert [p.name for p in store.state.recurring_payments] == ["Rent"]

    def test_failed_paycheck_save_keeps_old_amount(self, store, memory_storage):
        """Test a paycheck change that can't be saved is rolled back."""
        store.set_paycheck_amount("15th", 500)
        memory_storage.fail_on_save = True

        with pytest.raises(StorageUnavailableError):
            store.set_paycheck_amount("15th", 800)

        assert store.state.paychecks.fifteenth == Decimal("500")

    def test_failed_change_rolls_back(self, store, memory_storage):
        """Test an error while applying a change also restores the state."""
        store.add_note("kept")
        saves = memory_storage.save_count

        with pytest.raises(RuntimeError):
            with store._mutation("clear_notes") as state:
                state.notes.clear()
                raise RuntimeError("interrupted")

        assert [n.text for n in store.state.notes] == ["kept"]
        assert memory_storage.save_count == saves


class TestPeriodTransitionDetector:
    """Tests for check_transition()."""

    def test_first_run_sets_marker(self, store, memory_storage):
        """Test an unset marker is set and persisted on first run."""
        detector = PeriodTransitionDetector(store)
        transition = detector.check_transition(PayPeriod.FIRST)

        assert transition.changed
        assert transition.previous is None
        assert store.state.last_pay_period is PayPeriod.FIRST
        assert memory_storage.load_snapshot()["lastPayPeriod"] == "1st"

    def test_same_period_does_not_save(self, store, memory_storage):
        """Test no save happens when the period is unchanged."""
        detector = PeriodTransitionDetector(store)
        detector.check_transition(PayPeriod.FIRST)
        saves = memory_storage.save_count

        transition = detector.check_transition(PayPeriod.FIRST)
        assert not transition.changed
        assert memory_storage.save_count == saves

    def test_listeners_called_on_change(self, store):
        """Test listeners receive each transition."""
        seen = []
        detector = PeriodTransitionDetector(store)
        detector.add_listener(seen.append)

        detector.check_transition(PayPeriod.FIRST)
        detector.check_transition(PayPeriod.FIRST)
        detector.check_transition(PayPeriod.FIFTEENTH)

        assert [(t.previous, t.current) for t in seen] == [
            (None, PayPeriod.FIRST),
            (PayPeriod.FIRST, PayPeriod.FIFTEENTH),
        ]

    def test_recurring_payments_untouched(self, store):
        """Test a transition doesn't snapshot or alter recurring payments."""
        store.add_recurring_payment("Rent", "900", "both")
        before = list(store.state.recurring_payments)

        PeriodTransitionDetector(store).check_transition(PayPeriod.FIFTEENTH)
        assert store.state.recurring_payments == before
