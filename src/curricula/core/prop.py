"""
Reactive Properties

A property is one field of a document record that can be individually
observed, edited and synced back to the backing store.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from .paths import MISSING, FieldPath
from .signals import Signal

T = TypeVar('T')


class Prop(ABC, Generic[T]):
    """
    Reactive property bound to one path of a document record.

    ``sync_value`` mirrors the value in the backing store: changing it writes
    the change to the store (via the owning document), and changes made by
    other clients are reported through it. ``edit_value`` is a scratch copy
    used while the user edits the field.
    """

    @property
    def value(self) -> T:
        """The current value of the property."""
        return self.sync_value.get()

    @value.setter
    def value(self, value: T) -> None:
        self.sync_value.set(value)

    @property
    @abstractmethod
    def sync_value(self) -> Signal:
        pass

    @property
    @abstractmethod
    def edit_value(self) -> Signal:
        pass

    @property
    @abstractmethod
    def path(self) -> FieldPath:
        pass

    @property
    def name(self) -> str:
        """Dotted key of this property in the store record."""
        return self.path.key

    @abstractmethod
    def read(self, record: Mapping[str, Any]) -> None:
        """Reads the current value of this property from a store record."""
        pass

    @abstractmethod
    def start_edit(self) -> None:
        """Copies the current sync value into the edit value."""
        pass

    @abstractmethod
    def commit_edit(self) -> None:
        """
        Copies the edit value back into the sync value.

        To cancel an edit simply never call commit; no other action is needed.
        """
        pass

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name}={self.value!r})"


class SimpleProp(Prop[T]):
    """Property whose edit value is an untransformed copy of the sync value."""

    def __init__(self, path: "FieldPath | str", default: T = None,
                 parse: Optional[Callable[[Any], T]] = None):
        self._path = FieldPath.of(path)
        self.default = default
        self.parse = parse
        self._sync_value: Signal = Signal(default, name=self._path.key)
        self._edit_value: Signal = Signal(default, name=self._path.key)

    @property
    def path(self) -> FieldPath:
        return self._path

    @property
    def sync_value(self) -> Signal:
        return self._sync_value

    @property
    def edit_value(self) -> Signal:
        return self._edit_value

    def read(self, record: Mapping[str, Any]) -> None:
        raw = self._path.get(record)
        if raw is MISSING:
            value = self.default
        elif raw is None or self.parse is None:
            value = raw
        else:
            value = self.parse(raw)
        self._sync_value.set(value)

    def start_edit(self) -> None:
        self._edit_value.set(self.value)

    def commit_edit(self) -> None:
        self._sync_value.set(self._edit_value.get())
