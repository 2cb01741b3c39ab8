"""
Curriculum Database

Entry point the view-model stores use to list, create and open units and
their activities against an injected document store.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..core.exceptions import DocumentNotFoundError
from ..entities import Activity, ActivityType, Unit, UnitSummary
from ..persistence.base import CollectionRef, DocumentStore

logger = logging.getLogger(__name__)

UNITS = "units"
ACTIVITIES = "activities"
USERS = "users"
ANONYMOUS = "none"


class DB:
    """
    Unit and activity access for one signed-in user.

    Example:
        db = DB(MemoryStore())
        db.set_user_id("u1")
        unit = db.create_unit()
        unit.goal.value = "Learn about the Titanic"
    """

    def __init__(self, store: DocumentStore):
        self.store = store
        self.uid: str = ANONYMOUS

    def set_user_id(self, uid: Optional[str]) -> None:
        self.uid = uid or ANONYMOUS
        logger.info(f"User set to {self.uid}")

    def user_collection(self, name: str) -> CollectionRef:
        """Per-user collection ``users/<uid>/<name>``."""
        return self.store.collection(USERS).document(self.uid).collection(name)

    def units(self) -> List[UnitSummary]:
        return [UnitSummary(id=doc_id, goal=record.get("goal"))
                for doc_id, record in self.store.collection(UNITS).stream()]

    def create_unit(self) -> Unit:
        data = {"created": datetime.now(timezone.utc), "creator": self.uid}
        ref = self.store.collection(UNITS).add(data)
        logger.info(f"Created unit {ref.path}")
        return Unit(ref, data)

    def unit(self, unit_id: str, live: bool = False) -> Unit:
        """
        Open a unit.

        With ``live=True`` the returned unit follows store changes until it is
        closed.

        Raises:
            DocumentNotFoundError: If no unit has this id
        """
        logger.debug(f"Loading unit {unit_id}")
        ref = self.store.collection(UNITS).document(unit_id)
        data = ref.get()
        if data is None:
            raise DocumentNotFoundError(f"Requested unknown unit: {unit_id}")
        if live:
            return Unit(ref, live=True)
        return Unit(ref, data)

    def activities(self, unit_id: str) -> List[Activity]:
        collection = self.store.collection(UNITS).document(unit_id).collection(ACTIVITIES)
        return [Activity(collection.document(doc_id), record)
                for doc_id, record in collection.stream()]

    def create_activity(self, unit_id: str, type: ActivityType = ActivityType.READ) -> Activity:
        collection = self.store.collection(UNITS).document(unit_id).collection(ACTIVITIES)
        data = {"type": ActivityType(type).value,
                "created": datetime.now(timezone.utc)}
        ref = collection.add(data)
        logger.info(f"Created activity {ref.path}")
        return Activity(ref, data)
