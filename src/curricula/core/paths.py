"""
Field Paths

Typed paths into nested document records. A path is parsed once when a
property is declared and then used to read from records, to apply local
writes and to build the dotted keys of partial store updates.
"""

from typing import Any, Mapping, MutableMapping, Tuple


class _Sentinel:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False

    # Sentinels are compared by identity, so copies must be the same object.
    def __copy__(self) -> "_Sentinel":
        return self

    def __deepcopy__(self, memo: dict) -> "_Sentinel":
        return self


#: Returned by FieldPath.get when the record holds nothing at the path.
MISSING: Any = _Sentinel("MISSING")

#: Update value meaning "remove this field from the record".
DELETE_FIELD: Any = _Sentinel("DELETE_FIELD")


class FieldPath:
    """Sequence of field names addressing a value inside a nested record."""

    __slots__ = ("segments",)

    def __init__(self, *segments: str):
        if not segments:
            raise ValueError("A field path needs at least one segment")
        for segment in segments:
            if not isinstance(segment, str) or not segment or "." in segment:
                raise ValueError(f"Invalid field path segment: {segment!r}")
        self.segments: Tuple[str, ...] = tuple(segments)

    @classmethod
    def parse(cls, dotted: str) -> "FieldPath":
        """Build a path from its dotted form, e.g. ``"crits.3.min"``."""
        return cls(*dotted.split("."))

    @classmethod
    def of(cls, path: "FieldPath | str") -> "FieldPath":
        return path if isinstance(path, FieldPath) else cls.parse(path)

    def child(self, *segments: str) -> "FieldPath":
        return FieldPath(*self.segments, *segments)

    @property
    def key(self) -> str:
        """Dotted form used as the key of a partial store update."""
        return ".".join(self.segments)

    @property
    def parent(self) -> Tuple[str, ...]:
        return self.segments[:-1]

    @property
    def leaf(self) -> str:
        return self.segments[-1]

    def get(self, record: Any) -> Any:
        """Value at this path, or MISSING if any segment is absent."""
        current = record
        for segment in self.segments:
            if not isinstance(current, Mapping) or segment not in current:
                return MISSING
            current = current[segment]
        return current

    def set(self, record: MutableMapping[str, Any], value: Any) -> None:
        """Write ``value`` at this path, creating intermediate maps."""
        if value is DELETE_FIELD:
            self.delete(record)
            return
        current = record
        for segment in self.parent:
            nested = current.get(segment)
            if not isinstance(nested, MutableMapping):
                nested = {}
                current[segment] = nested
            current = nested
        current[self.leaf] = value

    def delete(self, record: MutableMapping[str, Any]) -> None:
        current: Any = record
        for segment in self.parent:
            if not isinstance(current, MutableMapping) or segment not in current:
                return
            current = current[segment]
        if isinstance(current, MutableMapping):
            current.pop(self.leaf, None)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldPath):
            return self.segments == other.segments
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.segments)

    def __str__(self) -> str:
        return self.key

    def __repr__(self) -> str:
        return f"FieldPath({self.key!r})"


def apply_changes(record: MutableMapping[str, Any], changes: Mapping[str, Any]) -> None:
    """Apply a partial update (dotted keys, DELETE_FIELD allowed) to a record."""
    for key, value in changes.items():
        FieldPath.parse(key).set(record, value)

