"""
Curricula Persistence Layer - Base Classes

Abstract document store interface plus the collection/document reference
objects the document model talks to. Backends implement a handful of
primitives; references, subscription bookkeeping and lifecycle live here.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from ..core.paths import DELETE_FIELD

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
SnapshotCallback = Callable[[Optional[Record]], None]

__all__ = [
    "DELETE_FIELD",
    "Record",
    "SnapshotCallback",
    "Subscription",
    "DocumentRef",
    "CollectionRef",
    "DocumentStore",
]


class Subscription:
    """
    Owned handle on a live document subscription.

    The holder must release it, either explicitly with ``close()`` or by
    using the handle as a context manager. Handles still open when their
    store is closed are released there and reported as leaked.
    """

    def __init__(self, store: 'DocumentStore', path: str, cancel: Callable[[], None]):
        self.store = store
        self.path = path
        self._cancel: Optional[Callable[[], None]] = cancel

    @property
    def active(self) -> bool:
        return self._cancel is not None

    def close(self) -> None:
        """Cancel the subscription. Safe to call more than once."""
        cancel, self._cancel = self._cancel, None
        if cancel is None:
            return
        try:
            cancel()
        finally:
            self.store._release(self)
            logger.debug(f"Unsubscribed from {self.path}")

    def __enter__(self) -> 'Subscription':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "active" if self.active else "closed"
        return f"Subscription({self.path}, {state})"


class DocumentRef:
    """Reference to one document in a store collection."""

    def __init__(self, store: 'DocumentStore', collection: str, doc_id: str):
        self.store = store
        self.collection_path = collection
        self.id = doc_id

    @property
    def path(self) -> str:
        return f"{self.collection_path}/{self.id}"

    def get(self) -> Optional[Record]:
        """Current record, or None if the document does not exist."""
        return self.store.get_document(self.collection_path, self.id)

    def set(self, data: Mapping[str, Any]) -> None:
        self.store.set_document(self.collection_path, self.id, dict(data))

    def update(self, changes: Mapping[str, Any]) -> None:
        """
        Apply a partial update.

        Args:
            changes: Dotted field paths mapped to new values; DELETE_FIELD
                removes the field

        Raises:
            DocumentNotFoundError: If the document does not exist
            StoreWriteError: If the backend rejects the write
        """
        self.store.update_document(self.collection_path, self.id, dict(changes))

    def delete(self) -> None:
        self.store.delete_document(self.collection_path, self.id)

    def on_snapshot(self, callback: SnapshotCallback) -> Subscription:
        """Push the full record to ``callback`` now and on every change."""
        return self.store.subscribe(self.collection_path, self.id, callback)

    def collection(self, name: str) -> 'CollectionRef':
        return CollectionRef(self.store, f"{self.path}/{name}")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DocumentRef):
            return self.store is other.store and self.path == other.path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"DocumentRef({self.path})"


class CollectionRef:
    """Reference to a (possibly nested) collection of documents."""

    def __init__(self, store: 'DocumentStore', path: str):
        self.store = store
        self.path = path

    def document(self, doc_id: Optional[str] = None) -> DocumentRef:
        """Reference a document; without an id a fresh unique id is assigned."""
        return DocumentRef(self.store, self.path, doc_id or uuid.uuid4().hex[:20])

    def add(self, data: Mapping[str, Any], doc_id: Optional[str] = None) -> DocumentRef:
        ref = self.document(doc_id)
        ref.set(data)
        return ref

    def stream(self) -> List[Tuple[str, Record]]:
        """All documents of the collection as (id, record) pairs."""
        return self.store.list_documents(self.path)

    def __repr__(self) -> str:
        return f"CollectionRef({self.path})"


class DocumentStore(ABC):
    """
    Abstract base class for document storage backends.

    Implementations provide get/set/update/delete/list of single documents and
    a push listener primitive. Records crossing this boundary are never shared
    with the caller.
    """

    def __init__(self):
        self._subscriptions: Set[Subscription] = set()
        self._closed = False

    def collection(self, path: str) -> CollectionRef:
        return CollectionRef(self, path)

    def document(self, path: str) -> DocumentRef:
        """Reference a document by its full ``collection/.../id`` path."""
        collection, _, doc_id = path.rpartition("/")
        if not collection or not doc_id:
            raise ValueError(f"Invalid document path: {path!r}")
        return DocumentRef(self, collection, doc_id)

    @abstractmethod
    def get_document(self, collection: str, doc_id: str) -> Optional[Record]:
        pass

    @abstractmethod
    def set_document(self, collection: str, doc_id: str, data: Record) -> None:
        pass

    @abstractmethod
    def update_document(self, collection: str, doc_id: str, changes: Record) -> None:
        pass

    @abstractmethod
    def delete_document(self, collection: str, doc_id: str) -> None:
        pass

    @abstractmethod
    def list_documents(self, collection: str) -> List[Tuple[str, Record]]:
        pass

    @abstractmethod
    def _listen(self, collection: str, doc_id: str,
                callback: SnapshotCallback) -> Callable[[], None]:
        """Start delivering snapshots; return a function that stops delivery."""
        pass

    def subscribe(self, collection: str, doc_id: str,
                  callback: SnapshotCallback) -> Subscription:
        if self._closed:
            raise RuntimeError(f"{self.__class__.__name__} is closed")
        path = f"{collection}/{doc_id}"
        logger.debug(f"Subscribing to doc: {path}")
        cancel = self._listen(collection, doc_id, callback)
        subscription = Subscription(self, path, cancel)
        self._subscriptions.add(subscription)
        return subscription

    def _release(self, subscription: Subscription) -> None:
        self._subscriptions.discard(subscription)

    @property
    def open_subscriptions(self) -> int:
        return len(self._subscriptions)

    def close(self) -> None:
        """Release every subscription still open and stop accepting new ones."""
        leaked = list(self._subscriptions)
        if leaked:
            logger.warning(f"{self.__class__.__name__}: closing {len(leaked)} leaked subscriptions")
        for subscription in leaked:
            subscription.close()
        self._closed = True
        logger.info(f"{self.__class__.__name__} closed")
