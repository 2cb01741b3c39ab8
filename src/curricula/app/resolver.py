"""
Unit Resolver

Query and mutation operations behind the HTTP API. Reads and writes go
straight to the document store in the same record layout the live documents
use, so an open ``Unit`` or ``Activity`` sees resolver edits as they land.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..core.exceptions import ActivityNotFoundError, UnitNotFoundError
from ..persistence.base import CollectionRef, DocumentRef, DocumentStore
from .db import ACTIVITIES, UNITS
from .schemas import (
    Activity, ActivityInput, Criterion, Details, Unit, criteria_record, details_record,
)

logger = logging.getLogger(__name__)


def next_id(ids: Iterable[str]) -> str:
    """One more than the largest numeric id; non-numeric ids are ignored."""
    return str(max((int(i) for i in ids if i.isdecimal()), default=0) + 1)


def _id_order(item: Tuple[str, dict]) -> Tuple[int, int, str]:
    doc_id = item[0]
    return (0, int(doc_id), "") if doc_id.isdecimal() else (1, 0, doc_id)


class UnitResolver:
    """
    Unit queries and mutations over an injected store.

    Unknown ids raise ``UnitNotFoundError`` or ``ActivityNotFoundError``.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    @property
    def _units(self) -> CollectionRef:
        return self.store.collection(UNITS)

    def _unit_ref(self, unit_id: str) -> DocumentRef:
        ref = self._units.document(unit_id)
        if ref.get() is None:
            raise UnitNotFoundError(unit_id)
        return ref

    def _activities(self, unit_ref: DocumentRef) -> List[Activity]:
        docs = sorted(unit_ref.collection(ACTIVITIES).stream(), key=_id_order)
        return [Activity.from_record(doc_id, record) for doc_id, record in docs]

    # -- queries ----------------------------------------------------------

    def units(self) -> List[Unit]:
        return [Unit.from_record(doc_id, record, self._activities(self._units.document(doc_id)))
                for doc_id, record in sorted(self._units.stream(), key=_id_order)]

    def unit(self, unit_id: str) -> Optional[Unit]:
        """The unit with this id, or None."""
        ref = self._units.document(unit_id)
        record = ref.get()
        if record is None:
            return None
        return Unit.from_record(unit_id, record, self._activities(ref))

    # -- mutations --------------------------------------------------------

    def create_unit(self, goal: str) -> Unit:
        unit_id = next_id(doc_id for doc_id, _ in self._units.stream())
        self._units.add({"goal": goal}, doc_id=unit_id)
        logger.info(f"Created unit {unit_id}")
        return Unit(id=unit_id, details=Details(goal=goal))

    def update_details(self, unit_id: str, details: Details) -> None:
        self._unit_ref(unit_id).update(details_record(details))

    def update_criteria(self, unit_id: str, criteria: List[Criterion]) -> None:
        """Replace a unit's criteria; they are re-keyed in the given order."""
        self._unit_ref(unit_id).update(criteria_record(criteria))

    def add_activity(self, unit_id: str, activity: ActivityInput) -> Activity:
        activities = self._unit_ref(unit_id).collection(ACTIVITIES)
        activity_id = next_id(doc_id for doc_id, _ in activities.stream())
        activities.add(activity.to_record(), doc_id=activity_id)
        logger.info(f"Added activity {activity_id} to unit {unit_id}")
        return Activity(id=activity_id, **dict(activity))

    def update_activity(self, unit_id: str, activity_id: str,
                        activity: ActivityInput) -> Activity:
        """Replace every field of an existing activity."""
        ref = self._unit_ref(unit_id).collection(ACTIVITIES).document(activity_id)
        current = ref.get()
        if current is None:
            raise ActivityNotFoundError(activity_id)
        record = activity.to_record()
        if "created" in current:
            record["created"] = current["created"]
        ref.set(record)
        return Activity(id=activity_id, **dict(activity))
