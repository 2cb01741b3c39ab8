"""
Reactive Signals

Observable value cells used for every synchronized field of a document.
Views observe a signal to re-render; documents observe it to write local
changes back to storage.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass(frozen=True)
class SignalChange:
    """A single value change delivered to signal observers"""
    name: Optional[str]
    old: Any
    new: Any


Observer = Callable[[SignalChange], None]


def _same(a: Any, b: Any) -> bool:
    if a is b:
        return True
    return type(a) is type(b) and a == b


class Signal(Generic[T]):
    """
    Observable value cell.

    Setting a value equal to the current one (and of the same type) does not
    notify observers.
    """

    def __init__(self, value: T = None, name: Optional[str] = None):
        self.name = name
        self._value = value
        self._observers: List[Observer] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self.set(value)

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        old = self._value
        if _same(old, value):
            return
        self._value = value
        self._notify(SignalChange(self.name, old, value))

    def observe(self, callback: Observer) -> Callable[[], None]:
        """
        Register an observer for value changes.

        Args:
            callback: Called with a SignalChange after every change

        Returns:
            A function that removes the observer again
        """
        self._observers.append(callback)
        return lambda: self.unobserve(callback)

    def unobserve(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def clear_observers(self) -> None:
        self._observers.clear()

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _notify(self, change: SignalChange) -> None:
        for callback in list(self._observers):
            try:
                callback(change)
            except Exception:
                logger.exception(f"Signal observer failed for {self.name}")

    def __repr__(self) -> str:
        return f"Signal({self.name}={self._value!r})"
