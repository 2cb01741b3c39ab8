"""
Unit Document

A learning unit: its goal, benefits and justification, plus the ordered
audience criteria (age range, interests) used to filter units.
"""

from typing import Any, Optional

from pydantic import BaseModel

from ..core.collection import OrderedCollection, RecordElement
from ..core.doc import Doc
from ..core.results import DeleteResult, WriteResult
from .types import CritType


def whole_number(raw: Any) -> int:
    """Stored age bound as an int; fractional or non-numeric values are rejected."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"Expected a whole number, got {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"Expected a whole number, got {raw!r}")
    return int(raw)


class UnitSummary(BaseModel):
    """Id and goal of a unit, as shown in unit lists."""
    id: str
    goal: Optional[str] = None


class Criterion(RecordElement):
    """One audience criterion stored under ``crits.<key>``."""

    collection_key = "crits"

    def __init__(self, owner: 'Unit', key: str):
        super().__init__(owner, key)
        self.type = self.new_prop("type", CritType.CUSTOM, parse=CritType)
        self.min = self.new_prop("min", None, parse=whole_number)
        self.max = self.new_prop("max", None, parse=whole_number)
        self.text = self.new_prop("text", None)


class Unit(Doc):
    """
    Unit document.

    Example:
        unit = Unit(store.collection("units").document("1"), live=True)
        with unit:
            unit.goal.value
            unit.add_criterion(CritType.AGE, min=6, max=12)
    """

    def declare(self) -> None:
        self.created = self.data.get("created")
        self.creator = self.data.get("creator")
        self.goal = self.new_prop("goal")
        self.benefits = self.new_prop("benefits")
        self.justification = self.new_prop("justification")
        self.criteria: OrderedCollection[Criterion] = OrderedCollection(
            self, "crits", "critOrder", Criterion)

    def read(self, record) -> None:
        super().read(record)
        self.created = self.data.get("created", self.created)
        self.creator = self.data.get("creator", self.creator)

    def summary(self) -> UnitSummary:
        return UnitSummary(id=self.id, goal=self.goal.value)

    def add_criterion(self, type: CritType, **fields: Any) -> WriteResult:
        """Append a criterion; the new key is in the result's ``key``."""
        return self.criteria.add(type=CritType(type), **fields)

    def delete_criterion(self, key: str) -> DeleteResult:
        return self.criteria.delete(key)

    def move_criterion(self, key: str, delta: int) -> Optional[WriteResult]:
        return self.criteria.move(key, delta)
