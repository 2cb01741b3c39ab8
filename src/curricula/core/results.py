"""
Write Results

Storage writes never raise out of a mutation call. Each write hands back a
result the caller can inspect to show a failure state, retry, or undo.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .exceptions import StoreError


@dataclass
class WriteResult:
    """Outcome of one partial update issued against a document."""
    doc_id: str
    changes: Dict[str, Any]
    error: Optional[StoreError] = None
    key: Optional[str] = None
    _retry: Optional[Callable[[], "WriteResult"]] = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def retry(self) -> "WriteResult":
        """Issue the same update again."""
        if self._retry is None:
            raise RuntimeError(f"Write to {self.doc_id} cannot be retried")
        result = self._retry()
        result.key = self.key
        return result

    def raise_for_error(self) -> "WriteResult":
        if self.error is not None:
            raise self.error
        return self


@dataclass
class DeleteResult(WriteResult):
    """Write result of an element deletion, carrying a one-shot undo."""
    undo_changes: Dict[str, Any] = field(default_factory=dict)
    _undo: Optional[Callable[[], WriteResult]] = field(default=None, repr=False, compare=False)

    def undo(self) -> WriteResult:
        """
        Write the deleted element and the prior order back to the store.

        Calling undo more than once, or after further edits, has no defined
        effect.
        """
        if self._undo is None:
            raise RuntimeError(f"Delete on {self.doc_id} has nothing to undo")
        return self._undo()
