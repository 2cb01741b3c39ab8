"""Tests for reactive documents: echo suppression, write results, edit sessions."""

import pytest

from curricula.core.doc import Doc, to_store_value
from curricula.core.exceptions import StoreWriteError
from curricula.core.paths import DELETE_FIELD
from curricula.entities import CritType


class Note(Doc):
    def declare(self):
        self.title = self.new_prop("title", "")
        self.count = self.new_prop("count", 0, parse=int)
        self.tags = self.new_prop("tags", [])


@pytest.fixture
def note_ref(store):
    return store.collection("notes").add({"title": "First", "count": 2}, doc_id="n1")


def test_read_does_not_echo_to_store(store, note_ref):
    note = Note(note_ref, note_ref.get())
    note.read({"title": "Changed", "count": 5})

    assert note.title.value == "Changed"
    assert note.count.value == 5
    assert store.updates == [], "Values read from the store must not be written back"


def test_local_change_writes_single_field(store, note_ref):
    note = Note(note_ref, note_ref.get())

    note.title.value = "Second"

    assert store.updates == [("notes/n1", {"title": "Second"})]
    assert note.data["title"] == "Second"


def test_unset_and_empty_list_delete_field(store, note_ref):
    note = Note(note_ref, note_ref.get())
    note.tags.value = ["a"]
    note.tags.value = []
    note.title.value = None

    assert store.updates[-2:] == [("notes/n1", {"tags": DELETE_FIELD}),
                                  ("notes/n1", {"title": DELETE_FIELD})]
    assert note_ref.get() == {"count": 2}


def test_to_store_value():
    assert to_store_value(CritType.AGE) == "age"
    assert to_store_value([CritType.AGE, "x"]) == ["age", "x"]
    assert to_store_value(()) is DELETE_FIELD
    assert to_store_value(0) == 0


def test_failed_prop_read_is_skipped(store, note_ref, caplog):
    note = Note(note_ref, {"title": "ok", "count": "many"})

    assert note.title.value == "ok", "Other fields still refresh"
    assert note.count.value == 0
    assert "Failed to read prop" in caplog.text


def test_write_failure_is_returned(failing_store):
    ref = failing_store.collection("notes").add({"title": "a"}, doc_id="n")
    note = Note(ref, ref.get())
    failing_store.failing = True

    result = note.write({"title": "b"})

    assert not result.ok
    assert isinstance(result.error, StoreWriteError)
    assert note.write_error.value is result.error
    assert note.data["title"] == "a", "Local mirror only reflects confirmed writes"
    with pytest.raises(StoreWriteError):
        result.raise_for_error()

    failing_store.failing = False
    retried = result.retry()
    assert retried.ok
    assert note.write_error.value is None
    assert ref.get()["title"] == "b"


def test_removed_prop_does_not_echo(store, note_ref):
    note = Note(note_ref, note_ref.get())
    note.remove_prop(note.title)

    note.title.value = "Ignored"

    assert store.updates == []
    assert note.title not in note.props


def test_duplicate_prop_rejected(note_ref):
    note = Note(note_ref, note_ref.get())
    with pytest.raises(ValueError):
        note.new_prop("title")


def test_edit_session_commits_only_changed_fields(store, note_ref):
    note = Note(note_ref, note_ref.get())
    note.start_edit()
    note.title.edit_value.set("Edited")

    results = note.commit_edit()

    assert [r.changes for r in results] == [{"title": "Edited"}]
    assert store.updates == [("notes/n1", {"title": "Edited"})]


def test_edit_session_without_changes_writes_nothing(store, note_ref):
    note = Note(note_ref, note_ref.get())
    note.start_edit()
    assert note.commit_edit() == []
    assert store.updates == []


def test_live_doc_follows_store(store, note_ref):
    with Note(note_ref, live=True) as note:
        assert note.live
        assert note.title.value == "First"

        note_ref.update({"title": "Remote"})

        assert note.title.value == "Remote"
        assert store.updates == [("notes/n1", {"title": "Remote"})], "No echo of pushed values"

    assert not note.live
    note_ref.update({"title": "After close"})
    assert note.title.value == "Remote"
    assert store.open_subscriptions == 0


def test_remote_push_overwrites_edit_in_progress(note_ref):
    with Note(note_ref, live=True) as note:
        note.start_edit()
        note.title.edit_value.set("Mine")
        note_ref.update({"title": "Theirs"})

        assert note.title.value == "Theirs"
        assert note.title.edit_value.value == "Mine"
