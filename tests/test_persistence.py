"""Tests for the memory store and subscription lifecycle."""

import pytest

from curricula.core.exceptions import DocumentNotFoundError
from curricula.entities import Unit
from curricula.persistence import DELETE_FIELD, MemoryStore


def test_records_are_copied_at_the_boundary():
    store = MemoryStore()
    data = {"crits": {"1": {"min": 6}}}
    ref = store.collection("units").add(data, doc_id="1")

    data["crits"]["1"]["min"] = 99
    fetched = ref.get()
    fetched["crits"]["1"]["min"] = 42

    assert ref.get() == {"crits": {"1": {"min": 6}}}


def test_update_missing_document_raises():
    store = MemoryStore()
    with pytest.raises(DocumentNotFoundError):
        store.document("units/404").update({"goal": "x"})


def test_update_applies_dotted_paths_and_deletes():
    store = MemoryStore()
    ref = store.collection("units").add({"goal": "x", "crits": {"1": {"min": 6}}}, doc_id="1")
    ref.update({"crits.1.max": 12, "goal": DELETE_FIELD})
    assert ref.get() == {"crits": {"1": {"min": 6, "max": 12}}}


def test_subcollections_and_stream():
    store = MemoryStore()
    activities = store.collection("units").document("1").collection("activities")
    activities.add({"type": "read"}, doc_id="1")
    generated = activities.add({"type": "draw"})

    assert activities.path == "units/1/activities"
    assert store.document(f"units/1/activities/{generated.id}").get() == {"type": "draw"}
    assert [doc_id for doc_id, _ in activities.stream()] == ["1", generated.id]


def test_document_path_validation():
    store = MemoryStore()
    with pytest.raises(ValueError):
        store.document("units")


def test_snapshot_delivers_current_record_and_changes():
    store = MemoryStore()
    ref = store.collection("units").add({"goal": "a"}, doc_id="1")
    seen = []

    with ref.on_snapshot(seen.append) as subscription:
        ref.update({"goal": "b"})
        ref.delete()
        assert subscription.active

    ref.set({"goal": "c"})
    assert seen == [{"goal": "a"}, {"goal": "b"}, None]
    assert not subscription.active


def test_close_releases_leaked_subscriptions(caplog):
    store = MemoryStore()
    ref = store.collection("units").add({"goal": "a"}, doc_id="1")
    unit = Unit(ref, live=True)
    assert store.open_subscriptions == 1

    store.close()

    assert store.open_subscriptions == 0
    assert not unit.live
    assert "leaked" in caplog.text
    with pytest.raises(RuntimeError):
        Unit(ref, live=True)


def test_closing_subscription_twice_is_safe():
    store = MemoryStore()
    ref = store.collection("units").add({}, doc_id="1")
    subscription = ref.on_snapshot(lambda record: None)
    subscription.close()
    subscription.close()
    assert store.open_subscriptions == 0


def test_closed_subscriptions_leave_no_listeners():
    store = MemoryStore()
    for doc_id in ("1", "2"):
        ref = store.collection("units").add({}, doc_id=doc_id)
        ref.on_snapshot(lambda record: None).close()
    assert store._listeners == {}
