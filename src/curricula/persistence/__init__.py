"""
Curricula Persistence Module

Storage backends for the document model. The Firestore backend lives in
``curricula.persistence.firestore`` and is imported only when configured.
"""

from .base import (
    DELETE_FIELD,
    CollectionRef,
    DocumentRef,
    DocumentStore,
    Record,
    Subscription,
)
from .memory import MemoryStore

__all__ = [
    "DELETE_FIELD",
    "CollectionRef",
    "DocumentRef",
    "DocumentStore",
    "Record",
    "Subscription",
    "MemoryStore",
]
