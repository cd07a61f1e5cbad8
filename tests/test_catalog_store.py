from __future__ import annotations

import json
from datetime import timedelta

import pytest

from adapters.persistence import CatalogPersistence
from adapters.storage_backends import MemoryStorage
from core.domain.errors import CatalogError, DuplicateNameError, InvalidFileNameError
from core.domain.models import FileStatus
from core.services.catalog_store import CatalogStore, generate_entry_id


class FailingSink:
    def __init__(self) -> None:
        self.calls = 0

    def save(self, entries) -> bool:
        self.calls += 1
        return False


def _stored(storage: MemoryStorage) -> list[dict]:
    return json.loads(storage.get_item("rocksmith-file-manager-data") or "[]")


def test_add_creates_untested_entry_and_autosaves(store, storage) -> None:
    entry = store.add("song1.psarc")

    assert entry.id == "id-1"
    assert entry.status is FileStatus.UNTESTED
    assert entry.date_added == entry.last_modified
    assert [e["fileName"] for e in _stored(storage)] == ["song1.psarc"]


def test_add_duplicate_raises_and_changes_nothing(store, storage) -> None:
    store.add("song1.psarc")
    before = storage.get_item("rocksmith-file-manager-data")

    with pytest.raises(DuplicateNameError) as excinfo:
        store.add("song1.psarc")

    assert excinfo.value.file_name == "song1.psarc"
    assert str(excinfo.value) == "File 'song1.psarc' already exists"
    assert len(store.list()) == 1
    assert storage.get_item("rocksmith-file-manager-data") == before


def test_duplicate_check_is_case_sensitive(store) -> None:
    store.add("Song.psarc")
    store.add("song.psarc")
    assert [e.file_name for e in store.list()] == ["Song.psarc", "song.psarc"]


def test_list_returns_independent_copies(store) -> None:
    store.add("song1.psarc")

    listed = store.list()
    listed[0].status = FileStatus.BAD
    listed.clear()

    again = store.list()
    assert len(again) == 1
    assert again[0].status is FileStatus.UNTESTED


def test_get_by_id(store) -> None:
    entry = store.add("song1.psarc")
    assert store.get_by_id(entry.id) == entry
    assert store.get_by_id("missing") is None


def test_update_status_sets_status_and_last_modified(store, storage, clock) -> None:
    entry = store.add("song1.psarc")

    assert store.update_status(entry.id, FileStatus.GOOD) is True

    updated = store.get_by_id(entry.id)
    assert updated.status is FileStatus.GOOD
    assert updated.last_modified == entry.date_added + timedelta(seconds=1)
    assert updated.date_added == entry.date_added
    stored = _stored(storage)[0]
    assert stored["status"] == "good"
    assert stored["lastModified"] == "2024-05-01T10:00:01.123Z"


def test_update_status_accepts_wire_value(store) -> None:
    entry = store.add("song1.psarc")
    assert store.update_status(entry.id, "wrongFormat") is True
    assert store.get_by_id(entry.id).status is FileStatus.WRONG_FORMAT


def test_update_status_unknown_id(store) -> None:
    assert store.update_status("missing", FileStatus.GOOD) is False


def test_delete_removes_exactly_one_entry(store, storage) -> None:
    first = store.add("file1.psarc")
    second = store.add("file2.psarc")
    store.add("file3.psarc")

    assert store.delete(second.id) is True
    assert [e.file_name for e in store.list()] == ["file1.psarc", "file3.psarc"]
    assert [e["id"] for e in _stored(storage)] == [first.id, "id-3"]

    assert store.delete(second.id) is False
    assert len(store.list()) == 2


def test_ids_are_not_reused_after_delete(store) -> None:
    entry = store.add("a.psarc")
    store.delete(entry.id)
    again = store.add("a.psarc")
    assert again.id != entry.id


def test_clear_persists_empty_list(store, storage) -> None:
    store.add("a.psarc")
    store.add("b.psarc")

    store.clear()

    assert store.list() == []
    assert _stored(storage) == []


def test_replace_all_skips_duplicate_checks_and_autosave(storage, clock) -> None:
    source = CatalogStore(clock=clock)
    entry = source.add("a.psarc")

    store = CatalogStore(CatalogPersistence(storage), clock=clock)
    entries = [entry, entry.model_copy()]
    store.replace_all(entries)
    entries.clear()

    assert len(store.list()) == 2
    assert storage.get_item("rocksmith-file-manager-data") is None


def test_failed_autosave_keeps_in_memory_change(clock, caplog) -> None:
    sink = FailingSink()
    store = CatalogStore(sink, clock=clock)

    with caplog.at_level("WARNING"):
        entry = store.add("a.psarc")
        store.update_status(entry.id, FileStatus.BAD)

    assert sink.calls == 2
    assert store.get_by_id(entry.id).status is FileStatus.BAD
    assert "Autosave failed" in caplog.text


def test_generated_ids_have_time_and_suffix() -> None:
    value = generate_entry_id()
    millis, suffix = value.split("-")
    assert millis.isdigit()
    assert len(suffix) == 9
    assert suffix.isalnum() and suffix == suffix.lower()
    assert generate_entry_id() != value


@pytest.mark.parametrize("name", ["", "   "])
def test_add_blank_name_is_rejected(store, storage, name: str) -> None:
    with pytest.raises(InvalidFileNameError) as excinfo:
        store.add(name)
    assert isinstance(excinfo.value, CatalogError)
    assert store.list() == []
    assert storage.get_item("rocksmith-file-manager-data") is None
