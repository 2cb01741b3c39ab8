"""
Curricula Persistence Layer - Firestore Backend

Document store backed by Google Cloud Firestore. Requires the ``firestore``
extra (``google-cloud-firestore``).
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from ..core.exceptions import DocumentNotFoundError, StoreError, StoreWriteError
from ..core.paths import DELETE_FIELD
from .base import DocumentStore, Record, SnapshotCallback

logger = logging.getLogger(__name__)

Dispatch = Callable[..., Any]


def _direct(fn: Callable[..., Any], *args: Any) -> Any:
    return fn(*args)


class FirestoreStore(DocumentStore):
    """
    Firestore-backed document store.

    Firestore delivers snapshot callbacks on its own watch thread. Pass a
    ``dispatch`` callable (for example ``loop.call_soon_threadsafe``) to move
    them onto the thread that owns the documents.
    """

    def __init__(self, client: firestore.Client, dispatch: Optional[Dispatch] = None):
        super().__init__()
        self.client = client
        self._dispatch: Dispatch = dispatch or _direct

    @classmethod
    def from_settings(cls, project: Optional[str] = None, database: Optional[str] = None,
                      dispatch: Optional[Dispatch] = None) -> 'FirestoreStore':
        kwargs = {}
        if database:
            kwargs["database"] = database
        return cls(firestore.Client(project=project, **kwargs), dispatch)

    def _doc(self, collection: str, doc_id: str):
        return self.client.collection(collection).document(doc_id)

    def get_document(self, collection: str, doc_id: str) -> Optional[Record]:
        try:
            snapshot = self._doc(collection, doc_id).get()
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError(f"Failed to load {collection}/{doc_id}: {e}") from e
        return snapshot.to_dict() if snapshot.exists else None

    def set_document(self, collection: str, doc_id: str, data: Record) -> None:
        try:
            self._doc(collection, doc_id).set(data)
        except google_exceptions.GoogleAPICallError as e:
            raise StoreWriteError(f"Failed to set {collection}/{doc_id}: {e}") from e

    def update_document(self, collection: str, doc_id: str, changes: Record) -> None:
        payload = {key: firestore.DELETE_FIELD if value is DELETE_FIELD else value
                   for key, value in changes.items()}
        try:
            self._doc(collection, doc_id).update(payload)
        except google_exceptions.NotFound as e:
            raise DocumentNotFoundError(f"No document to update: {collection}/{doc_id}") from e
        except google_exceptions.GoogleAPICallError as e:
            raise StoreWriteError(f"Failed to update {collection}/{doc_id}: {e}") from e

    def delete_document(self, collection: str, doc_id: str) -> None:
        try:
            self._doc(collection, doc_id).delete()
        except google_exceptions.GoogleAPICallError as e:
            raise StoreWriteError(f"Failed to delete {collection}/{doc_id}: {e}") from e

    def list_documents(self, collection: str) -> List[Tuple[str, Record]]:
        try:
            return [(snapshot.id, snapshot.to_dict() or {})
                    for snapshot in self.client.collection(collection).stream()]
        except google_exceptions.GoogleAPICallError as e:
            raise StoreError(f"Failed to list {collection}: {e}") from e

    def _listen(self, collection: str, doc_id: str,
                callback: SnapshotCallback) -> Callable[[], None]:
        def on_snapshot(snapshots, changes, read_time) -> None:
            snapshot = snapshots[0] if snapshots else None
            record = snapshot.to_dict() if snapshot is not None and snapshot.exists else None
            self._dispatch(callback, record)

        watch = self._doc(collection, doc_id).on_snapshot(on_snapshot)
        return watch.unsubscribe
