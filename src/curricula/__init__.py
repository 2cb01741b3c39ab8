"""
Curricula - reactive curriculum documents

Units and activities stored as documents and exposed as observable
properties that sync field by field with the store.

Example:
    from curricula import DB, MemoryStore

    db = DB(MemoryStore())
    with db.create_unit() as unit:
        unit.goal.value = "Learn about the Titanic"
"""

from .core import (
    DELETE_FIELD, CurriculaError, DeleteResult, Doc, DocumentNotFoundError, FieldPath,
    NotFoundError, OrderedCollection, Prop, Signal, SimpleProp, StoreError, WriteResult,
    make_filter,
)
from .entities import Activity, ActivityType, Criterion, CritType, Resource, ResourceType, Unit
from .persistence import DocumentStore, MemoryStore
from .app import DB, ApplicationConfig, UnitResolver, configure_app

__version__ = "0.1.0"

__all__ = [
    "Doc", "Prop", "SimpleProp", "Signal", "FieldPath", "DELETE_FIELD",
    "OrderedCollection", "WriteResult", "DeleteResult", "make_filter",
    "CurriculaError", "StoreError", "DocumentNotFoundError", "NotFoundError",
    "Unit", "Criterion", "CritType", "Activity", "Resource", "ResourceType", "ActivityType",
    "DocumentStore", "MemoryStore",
    "DB", "UnitResolver", "ApplicationConfig", "configure_app",
]
