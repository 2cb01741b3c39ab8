"""
Ordered Collections

Nested lists of records stored as an element map plus an explicit order
array, e.g. ``crits: {"1": {...}, "2": {...}}`` and ``critOrder: ["2", "1"]``.

The store is the source of truth for which elements exist. The order array
is advisory: reconciliation drops stale keys and appends missing ones, so a
bad order can only cause a temporary display anomaly, never data loss.
"""

import logging
from abc import ABC, abstractmethod
from typing import (
    Any, Callable, Dict, Generic, Iterable, Iterator, List, Mapping, Optional, TypeVar,
)

from .doc import Doc, to_store_value
from .exceptions import UnknownElementError
from .paths import DELETE_FIELD, FieldPath
from .prop import Prop, SimpleProp
from .results import DeleteResult, WriteResult
from .signals import Signal

logger = logging.getLogger(__name__)


class ListElement(ABC):
    """Capability required of every element kept in an OrderedCollection."""

    key: str

    @property
    @abstractmethod
    def props(self) -> List[Prop]:
        """Properties the element registered with its owner."""
        pass

    @abstractmethod
    def deleted(self) -> None:
        """Called once when the element leaves its collection."""
        pass

    @abstractmethod
    def to_data(self) -> Dict[str, Any]:
        """Serialized field map of the element (unset fields omitted)."""
        pass


class RecordElement(ListElement):
    """
    Element whose fields are properties of the owning document, stored under
    ``<collection>.<key>.<field>``.
    """

    collection_key: str = ""

    def __init__(self, owner: Doc, key: str):
        self.owner = owner
        self.key = key
        self.path = FieldPath(self.collection_key, key)
        self._props: List[Prop] = []

    def new_prop(self, field: str, default: Any = None,
                 parse: Optional[Callable[[Any], Any]] = None) -> SimpleProp:
        prop = self.owner.new_prop(self.path.child(field), default, parse)
        self._props.append(prop)
        return prop

    @property
    def props(self) -> List[Prop]:
        return list(self._props)

    def deleted(self) -> None:
        for prop in self._props:
            self.owner.remove_prop(prop)

    def to_data(self) -> Dict[str, Any]:
        data = {}
        for prop in self._props:
            value = prop.value
            if value is None:
                continue
            data[prop.path.leaf] = to_store_value(value)
        return data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.key}: {self.to_data()})"


E = TypeVar('E', bound=ListElement)
ElementFactory = Callable[[Doc, str, Mapping[str, Any]], E]


def reconcile(record: Mapping[str, Any], elems_key: str, order_key: str,
              elements: Dict[str, E], owner: Doc, make_elem: ElementFactory) -> List[str]:
    """
    Bring a live element map in line with a store record.

    Creates elements for new keys, calls ``deleted()`` on and removes elements
    whose keys are gone, and returns the repaired order: the stored order
    restricted to live keys (first occurrence wins), followed by any live keys
    it did not mention, in map order.
    """
    raw = record.get(elems_key)
    if raw is None:
        raw = {}
    elif not isinstance(raw, Mapping):
        logger.warning(f"Ignoring malformed {elems_key} of {owner.id}: {raw!r}")
        raw = {}

    for key, data in raw.items():
        key = str(key)
        if key not in elements:
            elements[key] = make_elem(owner, key, data if isinstance(data, Mapping) else {})

    present = {str(key) for key in raw}
    for key in list(elements):
        if key not in present:
            elements.pop(key).deleted()

    stored = record.get(order_key) or []
    if not isinstance(stored, (list, tuple)):
        logger.warning(f"Ignoring malformed {order_key} of {owner.id}: {stored!r}")
        stored = []
    return ordered_keys(elements, stored)


def ordered_keys(keys: Iterable[str], stored: Iterable[Any]) -> List[str]:
    """
    Repair a stored order against the keys that actually exist: stale and
    repeated entries are dropped, unmentioned keys are appended in ``keys``
    order.
    """
    keys = [str(key) for key in keys]
    present = set(keys)
    order: List[str] = []
    seen = set()
    for key in stored:
        key = str(key)
        if key in present and key not in seen:
            order.append(key)
            seen.add(key)
    for key in keys:
        if key not in seen:
            order.append(key)
            seen.add(key)
    return order


class OrderedCollection(Generic[E]):
    """
    Observable ordered list of elements nested in a document.

    ``order`` is the observable key list views iterate; indexing and iteration
    yield elements in that order. Local mutations update the live state first
    and then write to the store.
    """

    def __init__(self, owner: Doc, elems_key: str, order_key: str,
                 factory: Callable[[Doc, str], E]):
        self.owner = owner
        self.elems_key = elems_key
        self.order_key = order_key
        self.factory = factory
        self.elements: Dict[str, E] = {}
        self.order: Signal = Signal([], name=f"{owner.id}.{order_key}")
        owner.add_collection(self)

    @property
    def keys(self) -> List[str]:
        return list(self.order.get())

    def get(self, key: str) -> E:
        try:
            return self.elements[key]
        except KeyError:
            raise UnknownElementError(
                f"No element '{key}' in {self.elems_key} of {self.owner.id}") from None

    def items(self) -> List[E]:
        return [self.get(key) for key in self.order.get()]

    def __len__(self) -> int:
        return len(self.order.get())

    def __getitem__(self, index: int) -> E:
        return self.get(self.order.get()[index])

    def __iter__(self) -> Iterator[E]:
        return iter(self.items())

    def __contains__(self, key: object) -> bool:
        return key in self.elements

    def reconcile(self, record: Mapping[str, Any]) -> List[str]:
        return reconcile(record, self.elems_key, self.order_key, self.elements,
                         self.owner, lambda owner, key, data: self.factory(owner, key))

    def next_key(self) -> str:
        """One more than the largest numeric key seen locally."""
        numeric = [int(key) for key in set(self.elements) | set(self.order.get())
                   if key.isdecimal()]
        return str(max(numeric, default=0) + 1)

    def _element_key(self, key: str) -> str:
        return f"{self.elems_key}.{key}"

    def add(self, **fields: Any) -> WriteResult:
        """
        Append a new element with the given field values.

        Two clients adding at the same moment compute the same key and end up
        editing the same element; each sees the other's edits as they arrive.
        """
        key = self.next_key()
        elem = self.factory(self.owner, key)
        self.elements[key] = elem

        with self.owner.suppress_echo():
            self.owner.read_props({self.elems_key: {key: fields}}, elem.props)
        data = elem.to_data()

        order = self.keys + [key]
        self.order.set(order)
        result = self.owner.write({self._element_key(key): data, self.order_key: list(order)})
        result.key = key
        return result

    def delete(self, key: str) -> DeleteResult:
        """
        Remove an element locally and from the store.

        The returned result's ``undo()`` writes the element's fields and the
        previous order back.
        """
        changes: Dict[str, Any] = {}
        undo: Dict[str, Any] = {}
        elem = self.elements.pop(key, None)
        if elem is not None:
            changes[self._element_key(key)] = DELETE_FIELD
            undo[self._element_key(key)] = elem.to_data()
            elem.deleted()

        order = self.keys
        if key in order:
            undo[self.order_key] = list(order)
            order.remove(key)
            self.order.set(order)
            changes[self.order_key] = list(order)

        doc_id = self.owner.id
        if not changes:
            return DeleteResult(doc_id, changes, _undo=lambda: WriteResult(doc_id, {}))

        result = self.owner.write(changes)
        logger.debug(f"Deleted {self._element_key(key)} of {doc_id}, undo: {undo}")
        return DeleteResult(doc_id, result.changes, error=result.error, key=key,
                            undo_changes=undo, _retry=lambda: self.owner.write(changes),
                            _undo=lambda: self._undo(undo))

    def _undo(self, undo: Dict[str, Any]) -> WriteResult:
        result = self.owner.write(undo)
        if result.ok and not self.owner.live:
            self.owner.read(self.owner.data)
        return result

    def move(self, key: str, delta: int) -> Optional[WriteResult]:
        """
        Move an element ``delta`` places, clamped to the ends of the list.

        Returns None when the key is unknown or the position does not change.
        """
        order = self.keys
        if key not in order:
            return None
        old_pos = order.index(key)
        new_pos = min(max(old_pos + delta, 0), len(order) - 1)
        if new_pos == old_pos:
            return None
        order.pop(old_pos)
        order.insert(new_pos, key)
        self.order.set(order)
        return self.owner.write({self.order_key: list(order)})
