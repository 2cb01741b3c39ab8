"""
API Schemas

Pydantic models exchanged with API clients, and their conversion to and from
the store record layout the documents use (element maps plus order arrays,
activities in a per-unit sub-collection).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from ..core.collection import ordered_keys
from ..core.doc import to_store_value
from ..entities.types import ActivityType, CritType, ResourceType

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _ordered(record: Mapping[str, Any], elems_key: str, order_key: str) -> List[Dict[str, Any]]:
    elements = record.get(elems_key)
    if not isinstance(elements, Mapping):
        return []
    stored = record.get(order_key)
    if not isinstance(stored, (list, tuple)):
        stored = []
    return [elements[key] for key in ordered_keys(elements, stored)]


def _valid(model: Type[M], items: List[Any], where: str) -> List[M]:
    """Validate stored elements, skipping (and logging) the ones that do not fit."""
    valid = []
    for item in items:
        try:
            valid.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {model.__name__} in {where}: {e.error_count()} errors")
    return valid


def _numbered(items: List[Dict[str, Any]], elems_key: str, order_key: str) -> Dict[str, Any]:
    keys = [str(i) for i in range(1, len(items) + 1)]
    return {elems_key: dict(zip(keys, items)), order_key: keys}


def _compact(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None and value != ""}


class Details(BaseModel):
    """Goal, benefits and justification of a unit"""
    goal: str
    benefits: Optional[str] = None
    justification: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Details':
        return cls(goal=record.get("goal") or "",
                   benefits=record.get("benefits"),
                   justification=record.get("justification"))


class Criterion(BaseModel):
    """Audience criterion: an age range or a free-text interest"""
    type: CritType = CritType.CUSTOM
    min: Optional[int] = None
    max: Optional[int] = None
    text: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return _compact(self.model_dump(mode="json"))


class Resource(BaseModel):
    model_config = {"populate_by_name": True}

    type: ResourceType = ResourceType.PAGE
    url: Optional[str] = None
    preview_url: Optional[str] = Field(default=None, alias="previewUrl")
    title: Optional[str] = None
    description: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return _compact(self.model_dump(mode="json", by_alias=True))


class Location(BaseModel):
    name: str = ""
    lat: Optional[str] = None
    lon: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return _compact(self.model_dump())


class ActivityInput(BaseModel):
    """Activity fields supplied by a client; the server assigns the id"""
    type: ActivityType
    title: Optional[str] = None
    intro: Optional[str] = None
    resources: List[Resource] = Field(default_factory=list)
    location: Optional[Location] = None

    def to_record(self) -> Dict[str, Any]:
        record = _compact({"type": self.type.value, "title": self.title, "intro": self.intro})
        record.update(_numbered([r.to_record() for r in self.resources], "rsrcs", "rsrcOrder"))
        if self.location is not None:
            record["loc"] = self.location.to_record()
        return record


class Activity(ActivityInput):
    id: str

    @classmethod
    def from_record(cls, activity_id: str, record: Mapping[str, Any]) -> 'Activity':
        loc = record.get("loc")
        return cls(
            id=activity_id,
            type=record.get("type", ActivityType.READ),
            title=record.get("title"),
            intro=record.get("intro"),
            resources=_valid(Resource, _ordered(record, "rsrcs", "rsrcOrder"),
                             f"activity {activity_id}"),
            location=Location.model_validate(loc) if isinstance(loc, Mapping) else None,
        )


class Unit(BaseModel):
    id: str
    details: Details
    criteria: List[Criterion] = Field(default_factory=list)
    activities: List[Activity] = Field(default_factory=list)

    @classmethod
    def from_record(cls, unit_id: str, record: Mapping[str, Any],
                    activities: List[Activity]) -> 'Unit':
        return cls(
            id=unit_id,
            details=Details.from_record(record),
            criteria=_valid(Criterion, _ordered(record, "crits", "critOrder"),
                            f"unit {unit_id}"),
            activities=activities,
        )


def details_record(details: Details) -> Dict[str, Any]:
    """Field changes replacing a unit's details; unset fields are deleted."""
    return {key: to_store_value(value) for key, value in details.model_dump().items()}


def criteria_record(criteria: List[Criterion]) -> Dict[str, Any]:
    """Element map and order replacing a unit's criteria, keyed "1".."n"."""
    return _numbered([c.to_record() for c in criteria], "crits", "critOrder")


class CreateUnitInput(BaseModel):
    goal: str


__all__ = [
    "Details", "Criterion", "Resource", "Location", "ActivityInput", "Activity",
    "Unit", "CreateUnitInput", "details_record", "criteria_record",
]
