"""
Curricula Persistence Layer - Memory Backend

In-memory document store for development and testing. Data is lost when the
process exits. Listeners are called synchronously on the writing thread.
"""

import copy
import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

from ..core.exceptions import DocumentNotFoundError
from ..core.paths import apply_changes
from .base import DocumentStore, Record, SnapshotCallback

logger = logging.getLogger(__name__)


class MemoryStore(DocumentStore):
    """
    In-memory document store.

    One instance is created per application (or per test) and passed to the
    objects that need it.
    """

    def __init__(self):
        super().__init__()
        self._data: Dict[str, Dict[str, Record]] = defaultdict(dict)
        self._listeners: Dict[Tuple[str, str], List[SnapshotCallback]] = defaultdict(list)

    def get_document(self, collection: str, doc_id: str) -> Optional[Record]:
        record = self._data[collection].get(doc_id)
        return copy.deepcopy(record) if record is not None else None

    def set_document(self, collection: str, doc_id: str, data: Record) -> None:
        self._data[collection][doc_id] = copy.deepcopy(data)
        self._push(collection, doc_id)

    def update_document(self, collection: str, doc_id: str, changes: Record) -> None:
        record = self._data[collection].get(doc_id)
        if record is None:
            raise DocumentNotFoundError(f"No document to update: {collection}/{doc_id}")
        apply_changes(record, copy.deepcopy(changes))
        logger.debug(f"Updated {collection}/{doc_id} with {list(changes)}")
        self._push(collection, doc_id)

    def delete_document(self, collection: str, doc_id: str) -> None:
        existed = self._data[collection].pop(doc_id, None) is not None
        if existed:
            self._push(collection, doc_id)

    def list_documents(self, collection: str) -> List[Tuple[str, Record]]:
        return [(doc_id, copy.deepcopy(record))
                for doc_id, record in self._data[collection].items()]

    def _listen(self, collection: str, doc_id: str,
                callback: SnapshotCallback) -> Callable[[], None]:
        key = (collection, doc_id)
        self._listeners[key].append(callback)
        callback(self.get_document(collection, doc_id))

        def cancel() -> None:
            listeners = self._listeners.get(key, [])
            if callback in listeners:
                listeners.remove(callback)
            if not listeners:
                self._listeners.pop(key, None)
        return cancel

    def _push(self, collection: str, doc_id: str) -> None:
        for callback in list(self._listeners.get((collection, doc_id), [])):
            callback(self.get_document(collection, doc_id))

    def clear(self) -> None:
        """Drop all stored documents (listeners stay registered)."""
        self._data.clear()
