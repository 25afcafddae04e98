"""Tests for the storage backends."""

import json
import os

import pytest

from paycheck_budget.services.storage import (
    CorruptSnapshotError,
    InMemoryStorage,
    JsonFileStorage,
    StorageUnavailableError,
)


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_missing_file_loads_none(self, json_storage):
        """Test nothing persisted yet reads as None."""
        assert json_storage.load_snapshot() is None

    def test_save_creates_parent_directories(self, json_storage):
        """Test the first save creates the data directory."""
        json_storage.save_snapshot({"notes": []})
        assert json_storage.path.exists()
        assert json_storage.load_snapshot() == {"notes": []}

    def test_save_replaces_whole_file(self, json_storage):
        """Test each save replaces the previous snapshot entirely."""
        json_storage.save_snapshot({"paychecks": {"1st": "1", "15th": "0"}, "notes": []})
        json_storage.save_snapshot({"notes": [{"text": "x"}]})
        assert json_storage.load_snapshot() == {"notes": [{"text": "x"}]}

    def test_no_temp_files_left_behind(self, json_storage):
        """Test the temporary file is moved into place, not left over."""
        json_storage.save_snapshot({"notes": []})
        json_storage.save_snapshot({"notes": []})
        assert os.listdir(json_storage.path.parent) == [json_storage.path.name]

    def test_failed_write_keeps_previous_file(self, json_storage):
        """Test a snapshot that can't be encoded doesn't clobber the file."""
        json_storage.save_snapshot({"notes": []})
        with pytest.raises(StorageUnavailableError):
            json_storage.save_snapshot({"notes": object()})
        assert json_storage.load_snapshot() == {"notes": []}
        assert os.listdir(json_storage.path.parent) == [json_storage.path.name]

    def test_invalid_json_is_corrupt(self, tmp_path):
        """Test garbage in the file is reported, not silently reset."""
        path = tmp_path / "budget.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptSnapshotError):
            JsonFileStorage(path).load_snapshot()

    def test_non_object_json_is_corrupt(self, tmp_path):
        """Test a JSON list is not accepted as a snapshot."""
        path = tmp_path / "budget.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(CorruptSnapshotError):
            JsonFileStorage(path).load_snapshot()

    def test_unwritable_location(self, tmp_path):
        """Test a path whose parent is a file can't be written."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileStorage(blocker / "budget.json")
        with pytest.raises(StorageUnavailableError):
            storage.save_snapshot({"notes": []})


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    def test_snapshot_is_copied(self):
        """Test callers can't mutate the stored snapshot through a reference."""
        storage = InMemoryStorage()
        snapshot = {"notes": []}
        storage.save_snapshot(snapshot)
        snapshot["notes"].append("sneaky")
        assert storage.load_snapshot() == {"notes": []}

    def test_fail_on_save(self):
        """Test the failure switch raises StorageUnavailableError."""
        storage = InMemoryStorage()
        storage.fail_on_save = True
        with pytest.raises(StorageUnavailableError):
            storage.save_snapshot({})
        assert storage.load_snapshot() is None
