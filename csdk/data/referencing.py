"""
Referencing - Identity-keyed table of objects.

A referencing array maps object identities to stable integer indexes.
During serialization the array holds the live objects; once a pass is
finalized it holds their serialized records; during deserialization a
parallel array holds the shells.

Lookups compare with `is`, never `==`: two equal but distinct objects
get two different ids.

Any list works as a referencing array. Serialization contexts use an
IndexedReferencingArray, which finds entries without scanning the list.
"""

from __future__ import annotations
from typing import Any, NewType


ReferencingArray = list
ReferenceID = NewType("ReferenceID", int)


class UnknownReferenceError(LookupError):
    """Raised when a reference id points outside of its referencing array."""

    def __init__(self, reference_id: int):
        self.reference_id = reference_id
        super().__init__("Unknown reference")


def _scan(obj: Any, entries: list) -> int | None:
    for index, entry in enumerate(entries):
        if entry is obj:
            return index
    return None


class IndexedReferencingArray(list):
    """
    A list with an `id()`-keyed index of its entries.

    Entries added by `append`, `extend`, `insert` or item assignment are
    indexed. Other mutations can leave an index slot stale; a stale slot
    is detected on lookup and resolved by a scan.
    """

    def __init__(self, iterable=()):
        super().__init__(iterable)
        self._index: dict[int, int] = {}
        self._reindex()

    def __reduce__(self):
        return type(self), (list(self),)

    def _reindex(self):
        self._index = {}
        for index, entry in enumerate(self):
            self._index.setdefault(id(entry), index)

    def index_of(self, obj: Any) -> int | None:
        """Index of the first entry that is `obj`, or None."""
        index = self._index.get(id(obj))
        if index is None:
            return None
        if index < len(self) and self[index] is obj:
            return index

        # Stale: the entry moved, or the id belongs to a collected object
        index = _scan(obj, self)
        if index is None:
            del self._index[id(obj)]
        else:
            self._index[id(obj)] = index
        return index

    def _track(self, obj: Any, index: int):
        if self.index_of(obj) is None:
            self._index[id(obj)] = index

    def append(self, obj: Any):
        super().append(obj)
        self._track(obj, len(self) - 1)

    def extend(self, iterable):
        for obj in list(iterable):
            self.append(obj)

    def __iadd__(self, iterable):
        self.extend(iterable)
        return self

    def insert(self, index, obj: Any):
        super().insert(index, obj)
        self._reindex()

    def __setitem__(self, index, value):
        super().__setitem__(index, value)
        if isinstance(index, slice):
            self._reindex()
        else:
            self._track(value, index if index >= 0 else len(self) + index)


def find_reference_id(obj: Any, referencing_array: ReferencingArray) -> ReferenceID | None:
    """Get the id of an object without registering it. Returns None if absent."""
    if isinstance(referencing_array, IndexedReferencingArray):
        index = referencing_array.index_of(obj)
    else:
        index = _scan(obj, referencing_array)
    return None if index is None else ReferenceID(index)


def get_reference_id(obj: Any, referencing_array: ReferencingArray) -> ReferenceID:
    """
    Get the id of an object, appending it to the array if it is not there yet.

    This is the only function growing a referencing array.
    """
    reference_id = find_reference_id(obj, referencing_array)
    if reference_id is not None:
        return reference_id

    referencing_array.append(obj)
    return ReferenceID(len(referencing_array) - 1)


def _check_bounds(reference_id: int, referencing_array: ReferencingArray):
    if reference_id < 0 or reference_id >= len(referencing_array):
        raise UnknownReferenceError(reference_id)


def get_object_from_reference_id(reference_id: int, referencing_array: ReferencingArray) -> Any:
    """Get the object stored at a reference id."""
    _check_bounds(reference_id, referencing_array)
    return referencing_array[reference_id]


def overwrite_object_from_reference_id(
    obj: Any,
    reference_id: int,
    referencing_array: ReferencingArray,
):
    """Replace the object stored at a reference id."""
    _check_bounds(reference_id, referencing_array)
    referencing_array[reference_id] = obj
