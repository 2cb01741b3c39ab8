"""Tests for the Firestore backend against a mocked client."""

from unittest.mock import MagicMock

import pytest

firestore = pytest.importorskip("google.cloud.firestore")

from google.api_core import exceptions as google_exceptions  # noqa: E402

from curricula.core.exceptions import DocumentNotFoundError, StoreWriteError  # noqa: E402
from curricula.entities import Unit  # noqa: E402
from curricula.persistence import DELETE_FIELD  # noqa: E402
from curricula.persistence.firestore import FirestoreStore  # noqa: E402


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def doc(client):
    return client.collection.return_value.document.return_value


def _snapshot(data, exists=True):
    snapshot = MagicMock()
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


def test_update_maps_delete_sentinel(client, doc):
    store = FirestoreStore(client)

    store.document("units/1").update({"goal": DELETE_FIELD, "crits.2.min": 6})

    client.collection.assert_called_with("units")
    client.collection.return_value.document.assert_called_with("1")
    doc.update.assert_called_once_with({"goal": firestore.DELETE_FIELD, "crits.2.min": 6})


def test_update_errors_are_translated(client, doc):
    store = FirestoreStore(client)

    doc.update.side_effect = google_exceptions.NotFound("gone")
    with pytest.raises(DocumentNotFoundError):
        store.document("units/1").update({"goal": "x"})

    doc.update.side_effect = google_exceptions.PermissionDenied("nope")
    with pytest.raises(StoreWriteError):
        store.document("units/1").update({"goal": "x"})


def test_get_missing_document(client, doc):
    doc.get.return_value = _snapshot(None, exists=False)
    assert FirestoreStore(client).document("units/1").get() is None


def test_live_unit_over_firestore(client, doc):
    watch = MagicMock()
    doc.on_snapshot.return_value = watch
    store = FirestoreStore(client)

    unit = Unit(store.document("units/1"), live=True)
    listener = doc.on_snapshot.call_args[0][0]
    listener([_snapshot({"goal": "Learn about the Titanic", "crits": {"1": {"min": 6}}})], [], None)

    assert unit.goal.value == "Learn about the Titanic"
    assert unit.criteria[0].min.value == 6

    unit.close()
    watch.unsubscribe.assert_called_once_with()
    assert store.open_subscriptions == 0


def test_dispatch_moves_callbacks(client, doc):
    dispatched = []
    store = FirestoreStore(client, dispatch=lambda fn, *args: dispatched.append((fn, args)))
    seen = []

    store.document("units/1").on_snapshot(seen.append)
    listener = doc.on_snapshot.call_args[0][0]
    listener([_snapshot({"goal": "x"})], [], None)

    assert seen == []
    fn, args = dispatched[0]
    fn(*args)
    assert seen == [{"goal": "x"}]
