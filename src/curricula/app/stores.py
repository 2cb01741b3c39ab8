"""
View-Model Stores

Observable state behind the unit list and unit pages, plus the queue of
feedback messages (with optional undo) shown after user actions.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..core.exceptions import StoreError
from ..core.results import WriteResult
from ..core.signals import Signal
from ..core.utils import make_filter
from ..entities import Unit, UnitSummary
from .db import DB

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Feedback:
    message: str
    undo: Optional[Callable[[], object]] = None


class FeedbackStore:
    """
    Queue of feedback messages shown one at a time.

    A message arriving while another is showing hides the current one;
    the view calls ``show_next()`` once it has transitioned off screen.
    """

    def __init__(self):
        self.showing = Signal(False, name="feedback.showing")
        self.current = Signal(Feedback(""), name="feedback.current")
        self.queue: List[Feedback] = []

    def show_feedback(self, message: str, undo: Optional[Callable[[], object]] = None) -> None:
        self.queue.append(Feedback(message, undo))
        if self.showing.value:
            self.showing.value = False
        else:
            self.show_next()

    def show_next(self) -> None:
        if not self.queue:
            return
        self.current.value = self.queue.pop(0)
        self.showing.value = True


class UnitListStore:
    """Summaries of every unit, loaded on construction."""

    def __init__(self, db: DB):
        self.db = db
        self.loading = Signal(True, name="units.loading")
        self.units = Signal([], name="units")
        self.error = Signal(None, name="units.error")
        self.refresh()

    def refresh(self) -> None:
        logger.debug("Fetching units")
        self.loading.value = True
        try:
            self.units.value = self.db.units()
            self.error.value = None
        except StoreError as e:
            logger.warning(f"Failed to fetch units: {e}")
            self.error.value = e
        finally:
            self.loading.value = False

    def filtered(self, seek: str) -> List[UnitSummary]:
        matches = make_filter(seek)
        return [unit for unit in self.units.value if matches(unit.goal)]

    def create_unit(self) -> Unit:
        unit = self.db.create_unit()
        self.refresh()
        return unit


class Mode(str, Enum):
    VIEW = "view"
    EDIT_DETAILS = "edit_details"
    EDIT_CRITERIA = "edit_criteria"
    EDIT_ACTIVITY = "edit_activity"
    ADD_ACTIVITY = "add_activity"


class UnitStore:
    """
    Page state for one unit: the live document and the current edit mode.

    The store owns the unit's subscription; call ``close()`` when the page
    goes away.
    """

    def __init__(self, db: DB, unit_id: str, feedback: Optional[FeedbackStore] = None,
                 live: bool = True):
        self.id = unit_id
        self.feedback = feedback or FeedbackStore()
        self.mode = Signal(Mode.VIEW, name=f"{unit_id}.mode")
        self.error = Signal(None, name=f"{unit_id}.error")
        self.unit: Optional[Unit] = None
        try:
            self.unit = db.unit(unit_id, live=live)
        except StoreError as e:
            logger.warning(f"Failed to load unit {unit_id}: {e}")
            self.error.value = e

    def _require_unit(self) -> Unit:
        if self.unit is None:
            raise RuntimeError(f"Unit {self.id} is not loaded")
        return self.unit

    def set_mode(self, mode: Mode) -> None:
        self.mode.value = Mode(mode)

    def edit_details(self) -> None:
        self._require_unit().start_edit()
        self.set_mode(Mode.EDIT_DETAILS)

    def save_details(self) -> List[WriteResult]:
        results = self._require_unit().commit_edit()
        failed = [result for result in results if not result.ok]
        if failed:
            self.feedback.show_feedback(f"Failed to save {len(failed)} change(s).")
        self.set_mode(Mode.VIEW)
        return results

    def cancel_edit(self) -> None:
        self.set_mode(Mode.VIEW)

    def delete_criterion(self, key: str) -> WriteResult:
        result = self._require_unit().delete_criterion(key)
        if result.ok:
            self.feedback.show_feedback("Criterion deleted.", result.undo)
        else:
            self.feedback.show_feedback("Failed to delete criterion.", result.retry)
        return result

    def close(self) -> None:
        if self.unit is not None:
            self.unit.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
