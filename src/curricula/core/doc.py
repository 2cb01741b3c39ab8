"""
Reactive Documents

Exposes a store document as a collection of reactive properties. Changes to
property values are synced back to the document field by field, and changes
pushed by the store are propagated to the properties.
"""

import copy
import logging
from contextlib import contextmanager
from enum import Enum
from typing import (
    TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Mapping, Optional, TypeVar,
)

from .exceptions import StoreError
from .paths import DELETE_FIELD, FieldPath, apply_changes
from .prop import Prop, SimpleProp
from .results import WriteResult
from .signals import Signal, SignalChange

if TYPE_CHECKING:
    from ..persistence.base import DocumentRef, Subscription
    from .collection import OrderedCollection

logger = logging.getLogger(__name__)

P = TypeVar('P', bound=Prop)


def to_store_value(value: Any) -> Any:
    """Convert a property value to what gets written to the store."""
    if value is None or value is DELETE_FIELD:
        return DELETE_FIELD
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        if not value:
            return DELETE_FIELD
        return [to_store_value(item) for item in value]
    return value


class Doc:
    """
    Base class for documents exposed as reactive properties.

    Subclasses declare their properties and collections in ``declare()``.
    A document is either a one-shot snapshot of ``data`` or, with
    ``live=True``, kept up to date by a store subscription that must be
    released with ``close()`` (or by using the document as a context manager).
    """

    def __init__(self, ref: 'DocumentRef', data: Optional[Mapping[str, Any]] = None,
                 live: bool = False):
        self.ref = ref
        self.id: str = ref.id
        self.data: Dict[str, Any] = copy.deepcopy(dict(data or {}))
        self.write_error: Signal = Signal(None, name=f"{self.id}.write_error")
        self._props: Dict[FieldPath, Prop] = {}
        self._unobserve: Dict[FieldPath, Callable[[], None]] = {}
        self._collections: List['OrderedCollection'] = []
        self._echo_suppressed = 0
        self._collected: Optional[List[WriteResult]] = None
        self._subscription: Optional['Subscription'] = None

        self.declare()

        if live:
            self.subscribe()
        else:
            self.read(self.data)

    def declare(self) -> None:
        """Declare properties and collections. Called once from ``__init__``."""
        pass

    # -- reading ----------------------------------------------------------

    def read(self, record: Optional[Mapping[str, Any]]) -> None:
        """
        Refresh every property and collection from a store record.

        Collections are reconciled first so that elements referenced by the
        new order exist when their properties are read; the reconciled orders
        are assigned last. Nothing read here is written back to the store.
        """
        record = record or {}
        with self.suppress_echo():
            self.data = copy.deepcopy(dict(record))
            orders = [(collection, collection.reconcile(record))
                      for collection in self._collections]
            self.read_props(record, self.props)
            for collection, order in orders:
                collection.order.set(order)

    def read_props(self, record: Mapping[str, Any], props: List[Prop]) -> None:
        for prop in props:
            try:
                prop.read(record)
            except Exception as e:
                logger.warning(f"Failed to read prop: {prop} of {self.id}: {e}")

    @contextmanager
    def suppress_echo(self) -> Iterator[None]:
        """Property changes made inside this block are not written to the store."""
        self._echo_suppressed += 1
        try:
            yield
        finally:
            self._echo_suppressed -= 1

    @property
    def syncing(self) -> bool:
        """True when local property changes are written to the store."""
        return self._echo_suppressed == 0

    # -- properties -------------------------------------------------------

    @property
    def props(self) -> List[Prop]:
        return list(self._props.values())

    def prop(self, path: 'FieldPath | str') -> Prop:
        return self._props[FieldPath.of(path)]

    def new_prop(self, path: 'FieldPath | str', default: Any = None,
                 parse: Optional[Callable[[Any], Any]] = None) -> SimpleProp:
        return self.add_prop(SimpleProp(path, default, parse))

    def add_prop(self, prop: P) -> P:
        """Register a property and sync its future changes to the store."""
        if prop.path in self._props:
            raise ValueError(f"Duplicate property {prop.name} on {self.id}")

        def sync(change: SignalChange) -> None:
            if not self.syncing:
                return
            value = to_store_value(change.new)
            logger.debug(f"Syncing {prop.name} = {value!r}")
            self.write({prop.name: value})

        self._unobserve[prop.path] = prop.sync_value.observe(sync)
        self._props[prop.path] = prop
        return prop

    def remove_prop(self, prop: Prop) -> None:
        """Unregister a property; its later changes no longer reach the store."""
        if self._props.get(prop.path) is not prop:
            return
        del self._props[prop.path]
        unobserve = self._unobserve.pop(prop.path, None)
        if unobserve is not None:
            unobserve()

    def add_collection(self, collection: 'OrderedCollection') -> None:
        self._collections.append(collection)

    # -- edit sessions ----------------------------------------------------

    def start_edit(self) -> None:
        for prop in self.props:
            prop.start_edit()

    def commit_edit(self) -> List[WriteResult]:
        """
        Commit every property's edit value.

        Returns:
            One WriteResult per field that changed
        """
        self._collected = []
        try:
            for prop in self.props:
                prop.commit_edit()
            return self._collected
        finally:
            self._collected = None

    # -- writing ----------------------------------------------------------

    def write(self, changes: Mapping[str, Any]) -> WriteResult:
        """
        Issue a partial update of this document.

        Store failures are logged and reported in the returned result (and in
        ``write_error``) rather than raised.
        """
        changes = dict(changes)
        error: Optional[StoreError] = None
        try:
            self.ref.update(changes)
        except StoreError as e:
            logger.warning(f"Failed to update {self.id}: {e}")
            error = e
        else:
            logger.debug(f"Updated {self.id} with {list(changes)}")
            apply_changes(self.data, copy.deepcopy(changes))
        result = WriteResult(self.id, changes, error=error,
                             _retry=lambda: self.write(changes))
        self.write_error.set(error)
        if self._collected is not None:
            self._collected.append(result)
        return result

    # -- live subscription ------------------------------------------------

    @property
    def live(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def subscribe(self) -> 'Subscription':
        """Keep this document up to date with the store until ``close()``."""
        if not self.live:
            self._subscription = self.ref.on_snapshot(self.read)
        return self._subscription

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.id})"
