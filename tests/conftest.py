"""Shared fixtures for the curricula test suite."""

from typing import Any, Dict, List, Tuple

import pytest

from curricula.core.exceptions import StoreWriteError
from curricula.persistence.memory import MemoryStore


class RecordingStore(MemoryStore):
    """Memory store that remembers every partial update it receives."""

    def __init__(self):
        super().__init__()
        self.updates: List[Tuple[str, Dict[str, Any]]] = []

    def update_document(self, collection, doc_id, changes):
        self.updates.append((f"{collection}/{doc_id}", dict(changes)))
        super().update_document(collection, doc_id, changes)


class FailingStore(RecordingStore):
    """Store whose updates are rejected while ``failing`` is set."""

    def __init__(self):
        super().__init__()
        self.failing = False

    def update_document(self, collection, doc_id, changes):
        if self.failing:
            raise StoreWriteError("permission denied")
        super().update_document(collection, doc_id, changes)


TITANIC_RECORD = {
    "goal": "Learn about the Titanic",
    "crits": {
        "1": {"type": "age", "min": 6, "max": 12},
    },
    "critOrder": ["1"],
}


@pytest.fixture
def store():
    store = RecordingStore()
    yield store
    store.close()


@pytest.fixture
def failing_store():
    store = FailingStore()
    yield store
    store.close()


@pytest.fixture
def unit_ref(store):
    return store.collection("units").add(TITANIC_RECORD, doc_id="1")
