"""
Curricula Core Module

Document model layer: reactive signals and properties, documents mirroring a
store record, and ordered element collections.
"""

from .collection import ListElement, OrderedCollection, RecordElement, ordered_keys, reconcile
from .doc import Doc, to_store_value
from .exceptions import (
    ActivityNotFoundError,
    CurriculaError,
    DocumentNotFoundError,
    NotFoundError,
    StoreError,
    StoreWriteError,
    UnitNotFoundError,
    UnknownElementError,
)
from .paths import DELETE_FIELD, MISSING, FieldPath, apply_changes
from .prop import Prop, SimpleProp
from .results import DeleteResult, WriteResult
from .signals import Signal, SignalChange
from .utils import make_filter

__all__ = [
    "Doc",
    "to_store_value",
    "ListElement",
    "OrderedCollection",
    "RecordElement",
    "reconcile",
    "ordered_keys",
    "Prop",
    "SimpleProp",
    "Signal",
    "SignalChange",
    "FieldPath",
    "MISSING",
    "DELETE_FIELD",
    "apply_changes",
    "WriteResult",
    "DeleteResult",
    "make_filter",
    "CurriculaError",
    "StoreError",
    "DocumentNotFoundError",
    "StoreWriteError",
    "UnknownElementError",
    "NotFoundError",
    "UnitNotFoundError",
    "ActivityNotFoundError",
]
