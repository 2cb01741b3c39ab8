"""
Curricula Exceptions

Error hierarchy shared by the document model, the storage backends and the
application services.
"""


class CurriculaError(Exception):
    """Base exception for all curricula errors"""
    pass


class StoreError(CurriculaError):
    """Raised when a storage backend operation fails"""
    pass


class DocumentNotFoundError(StoreError):
    """Raised when a document does not exist in the store"""
    pass


class StoreWriteError(StoreError):
    """Raised when a storage backend rejects a write"""
    pass


class UnknownElementError(CurriculaError, KeyError):
    """Raised when a collection element is looked up by a key it does not hold"""

    def __str__(self) -> str:
        return Exception.__str__(self)


class NotFoundError(CurriculaError):
    """Raised by the resolver when a requested record does not exist"""
    pass


class UnitNotFoundError(NotFoundError):
    """Raised when a unit id is unknown"""

    def __init__(self, unit_id: str):
        super().__init__(f"No unit with id '{unit_id}'")
        self.unit_id = unit_id


class ActivityNotFoundError(NotFoundError):
    """Raised when an activity id is unknown within a unit"""

    def __init__(self, activity_id: str):
        super().__init__(f"No activity with id '{activity_id}'")
        self.activity_id = activity_id
