"""
Activity Document

One task within a unit (watch, read, draw, ...) with its ordered resources
and an optional location.
"""

from typing import Any, Optional

from ..core.collection import OrderedCollection, RecordElement
from ..core.doc import Doc
from ..core.results import DeleteResult, WriteResult
from .types import ActivityType, ResourceType


class Resource(RecordElement):
    """One resource (link, video, book) stored under ``rsrcs.<key>``."""

    collection_key = "rsrcs"

    def __init__(self, owner: 'Activity', key: str):
        super().__init__(owner, key)
        self.type = self.new_prop("type", ResourceType.PAGE, parse=ResourceType)
        self.url = self.new_prop("url")
        self.preview_url = self.new_prop("previewUrl")
        self.title = self.new_prop("title")
        self.description = self.new_prop("description")


class Location:
    """Where an activity takes place, stored under ``loc``."""

    def __init__(self, owner: Doc):
        self.owner = owner
        self.name = owner.new_prop("loc.name", "")
        self.lat = owner.new_prop("loc.lat")
        self.lon = owner.new_prop("loc.lon")


class Activity(Doc):
    """Activity document."""

    def declare(self) -> None:
        self.created = self.data.get("created")
        self.type = self.new_prop("type", ActivityType.READ, parse=ActivityType)
        self.title = self.new_prop("title")
        self.intro = self.new_prop("intro")
        self.location = Location(self)
        self.resources: OrderedCollection[Resource] = OrderedCollection(
            self, "rsrcs", "rsrcOrder", Resource)

    def read(self, record) -> None:
        super().read(record)
        self.created = self.data.get("created", self.created)

    def add_resource(self, type: ResourceType, **fields: Any) -> WriteResult:
        """Append a resource; the new key is in the result's ``key``."""
        return self.resources.add(type=ResourceType(type), **fields)

    def delete_resource(self, key: str) -> DeleteResult:
        return self.resources.delete(key)

    def move_resource(self, key: str, delta: int) -> Optional[WriteResult]:
        return self.resources.move(key, delta)
