"""
Cyclic Serialization - Flatten graphs of mutually-referencing objects.

Creatures hold effects, and effects hold a reference back to their
creature. Such a graph cannot be written as JSON directly. This module
replaces every cyclic reference with a reference id and keeps the
serialized objects in a flat referencing array.

Serialization pass:
1. Create a context
2. Call `cyclic_serialize` for every object others may reference
   - the object gets (or keeps) its reference id
   - the serializer returns a record where references are ids
3. Call `finalize_cyclic_serialization` once; every live object in the
   referencing array is replaced by its record

Deserialization pass:
1. Create a context from the envelope; one empty shell per record
2. Call `cyclic_deserialize` on records; deserializers resolve ids to
   shells, and each record's decoded fields are copied onto its shell

Because the shells exist before any record is decoded, an object can
hold a reference to another one that is not decoded yet.
"""

from __future__ import annotations
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any
import logging

from .referencing import (
    IndexedReferencingArray,
    ReferencingArray,
    find_reference_id,
    get_object_from_reference_id,
    get_reference_id,
    overwrite_object_from_reference_id,
)

logger = logging.getLogger(__name__)

CYCLIC_REFERENCE_ID_KEY = "cyclicReferenceId"


class CyclicSerializationError(Exception):
    """Base class for errors raised by a cyclic (de)serialization pass."""


class UnserializableRootError(CyclicSerializationError, ValueError):
    """Raised when the root of an envelope cannot carry a reference id."""

    def __init__(self):
        super().__init__("serializedObject must not be a boolean, null or undefined")


class AliasedRootError(CyclicSerializationError, ValueError):
    """Raised when the root of an envelope aliases a referencing array entry."""

    def __init__(self):
        super().__init__(
            "serializedObject must not be in referencingArray or contain object "
            "in referencingArray, this would break deserialization"
        )


class ShellMismatchError(CyclicSerializationError, TypeError):
    """Raised when a decoded value cannot be copied onto its shell."""

    def __init__(self, shell: Any, value: Any):
        self.shell_type = type(shell)
        self.value_type = type(value)
        super().__init__(
            f"Cannot populate shell of type {self.shell_type.__name__} "
            f"with {self.value_type.__name__}"
        )


@dataclass
class CyclicSerializationContext:
    """State of one serialization pass. Single use: reset by finalize."""
    objects_with_cyclic_dependencies: list[dict[str, Any]] = field(default_factory=list)
    referencing_array: ReferencingArray = field(default_factory=IndexedReferencingArray)


@dataclass
class CyclicSerializedObject:
    """
    The envelope produced by a serialization pass.

    `serialized_object` is an acyclic tree whose references are ids into
    `referencing_array`.
    """
    serialized_object: Any
    referencing_array: ReferencingArray

    def to_dict(self) -> dict[str, Any]:
        """Storage form, with the camelCase keys."""
        return {
            "serializedObject": self.serialized_object,
            "referencingArray": self.referencing_array,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CyclicSerializedObject:
        return cls(
            serialized_object=data["serializedObject"],
            referencing_array=data["referencingArray"],
        )


@dataclass
class CyclicDeserializationContext:
    """
    State of one deserialization pass.

    `serialized_referencing_array` is the envelope's own list.
    `deserialized_referencing_array` holds one shell per record.
    """
    serialized_referencing_array: ReferencingArray
    deserialized_referencing_array: ReferencingArray


Serializer = Callable[[Any, ReferencingArray], Mapping[str, Any]]
Deserializer = Callable[[Any, CyclicDeserializationContext], Any]
ShellFactory = Callable[[Any], Any]


def create_cyclic_serialization_context() -> CyclicSerializationContext:
    """Create a context for `cyclic_serialize` and `finalize_cyclic_serialization`."""
    return CyclicSerializationContext()


def cyclic_serialize(
    obj: Any,
    serializer: Serializer,
    context: CyclicSerializationContext,
) -> dict[str, Any]:
    """
    Serialize an object that other objects may reference.

    The returned record is tagged with the object's reference id. The same
    dict is kept in the context until finalize.
    """
    reference_id = get_reference_id(obj, context.referencing_array)
    serialized = {
        **serializer(obj, context.referencing_array),
        CYCLIC_REFERENCE_ID_KEY: reference_id,
    }
    context.objects_with_cyclic_dependencies.append(serialized)
    return serialized


def _assert_deserializable(serialized_object: Any):
    if serialized_object is None or isinstance(serialized_object, bool):
        raise UnserializableRootError()


def _is_referenced(value: Any, referencing_array: ReferencingArray) -> bool:
    return find_reference_id(value, referencing_array) is not None


def _assert_not_aliasing(serialized_object: Any, referencing_array: ReferencingArray):
    # Weak test: only the root and its direct children are checked
    if _is_referenced(serialized_object, referencing_array):
        raise AliasedRootError()

    if isinstance(serialized_object, Mapping):
        children = serialized_object.values()
    elif isinstance(serialized_object, (list, tuple, set, frozenset)):
        children = serialized_object
    elif hasattr(serialized_object, "__dict__"):
        children = vars(serialized_object).values()
    else:
        return

    if any(_is_referenced(child, referencing_array) for child in children):
        raise AliasedRootError()


def finalize_cyclic_serialization(
    serialized_object: Any,
    context: CyclicSerializationContext,
) -> CyclicSerializedObject:
    """
    Finish the pass and reset the context.

    Every pending record replaces its live object in the referencing array
    and loses its reference id tag. Raises if `serialized_object` could
    not be deserialized back; the context must then be discarded.
    """
    _assert_deserializable(serialized_object)

    referencing_array = context.referencing_array
    for record in context.objects_with_cyclic_dependencies:
        reference_id = record.pop(CYCLIC_REFERENCE_ID_KEY, None)
        if reference_id is not None:
            overwrite_object_from_reference_id(record, reference_id, referencing_array)

    _assert_not_aliasing(serialized_object, referencing_array)

    logger.debug("Finalized cyclic serialization with %d reference(s)", len(referencing_array))

    context.objects_with_cyclic_dependencies = []
    context.referencing_array = IndexedReferencingArray()

    return CyclicSerializedObject(
        serialized_object=serialized_object,
        referencing_array=referencing_array,
    )


def _empty_shell(record: Any) -> dict[str, Any]:
    return {}


def create_cyclic_deserialization_context(
    envelope: CyclicSerializedObject,
    shell_factory: ShellFactory | None = None,
) -> CyclicDeserializationContext:
    """
    Create a context for `cyclic_deserialize`.

    `shell_factory` receives each serialized record and must return a new,
    empty object. Defaults to empty dicts.
    """
    make_shell = shell_factory or _empty_shell
    shells = [make_shell(record) for record in envelope.referencing_array]

    logger.debug("Created cyclic deserialization context with %d shell(s)", len(shells))

    return CyclicDeserializationContext(
        serialized_referencing_array=envelope.referencing_array,
        deserialized_referencing_array=shells,
    )


def _populate_shell(shell: Any, value: Any):
    if isinstance(shell, MutableMapping) and isinstance(value, Mapping):
        shell.update(value)
    elif isinstance(shell, list) and isinstance(value, list):
        shell[:] = value
    elif type(shell) is type(value) and hasattr(value, "__dict__"):
        vars(shell).update(vars(value))
    else:
        raise ShellMismatchError(shell, value)


def cyclic_deserialize(
    obj: Any,
    deserializer: Deserializer,
    context: CyclicDeserializationContext,
) -> Any:
    """
    Deserialize a value that may be a record of the referencing array.

    If `obj` is itself a record, the decoded value is copied onto the
    record's shell and the shell is returned, so everything that already
    resolved this reference sees the data.
    """
    deserialized = deserializer(obj, context)

    reference_id = find_reference_id(obj, context.serialized_referencing_array)
    if reference_id is None:
        return deserialized

    shell = get_object_from_reference_id(reference_id, context.deserialized_referencing_array)
    _populate_shell(shell, deserialized)
    return shell
