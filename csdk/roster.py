"""
Roster - Save and load a list of creatures.

This is the top-level entry point of the cyclic serialization for game
code. Effects and states may reference any creature (their own included)
through the referencing array: every creature that reaches the table is
serialized, whether it is in the roster or only referenced from it, like
the wild target of a leech. On load, creature shells are allocated
first, so these references resolve to the final creature objects.

Serializers may also intern plain data (dicts, lists, strings, numbers)
with `get_reference_id`. Such entries are stored as they are and come
back as shared values; they must not hold live objects.

The envelope root lists the roster and the slots holding creatures:

    {"roster": [0, 1], "creatures": [0, 1, 2]}

Usage:
    envelope = serialize_creatures(party, registry)
    text = dump_envelope(envelope)
    ...
    party = deserialize_creatures(load_envelope(text), registry)
"""

from __future__ import annotations
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .creature import Creature, blank_creature, deserialize_creature, serialize_creature
from .registry import SerializerRegistry
from .data.referencing import ReferencingArray, get_object_from_reference_id, get_reference_id
from .data.cyclic_serialization import (
    CyclicDeserializationContext,
    CyclicSerializationError,
    CyclicSerializedObject,
    create_cyclic_deserialization_context,
    create_cyclic_serialization_context,
    cyclic_deserialize,
    cyclic_serialize,
    finalize_cyclic_serialization,
)
from .data.storage import EnvelopeFormatError, load_envelope_file, save_envelope

ROSTER_KEY = "roster"
CREATURES_KEY = "creatures"

PLAIN_DATA_TYPES = (Mapping, list, str, int, float, type(None))


class UnserializedReferenceError(CyclicSerializationError, TypeError):
    """Raised when a referencing array slot holds an object no serializer handles."""

    def __init__(self, reference_id: int, value: Any):
        self.reference_id = reference_id
        self.value_type = type(value)
        super().__init__(
            f"Reference {reference_id} holds a {self.value_type.__name__}, "
            f"which is neither a creature nor plain data"
        )


def serialize_creatures(
    creatures: list[Creature],
    registry: SerializerRegistry,
) -> CyclicSerializedObject:
    """
    Serialize a roster.

    Raises:
        UnserializedReferenceError: If a serializer interned an object that
            is neither a creature nor plain data
    """
    context = create_cyclic_serialization_context()
    table = context.referencing_array

    def serializer(creature: Creature, referencing_array: ReferencingArray) -> dict[str, Any]:
        return serialize_creature(creature, referencing_array, registry)

    roster_ids = [get_reference_id(creature, table) for creature in creatures]

    # Serializing a creature can add new slots; visit until none is left
    creature_ids = []
    reference_id = 0
    while reference_id < len(table):
        entry = table[reference_id]
        if isinstance(entry, Creature):
            cyclic_serialize(entry, serializer, context)
            creature_ids.append(reference_id)
        elif not isinstance(entry, PLAIN_DATA_TYPES):
            raise UnserializedReferenceError(reference_id, entry)
        reference_id += 1

    return finalize_cyclic_serialization(
        {ROSTER_KEY: roster_ids, CREATURES_KEY: creature_ids},
        context,
    )


def _read_root(envelope: CyclicSerializedObject) -> tuple[list[int], set[int]]:
    root = envelope.serialized_object
    if not isinstance(root, Mapping) or ROSTER_KEY not in root or CREATURES_KEY not in root:
        raise EnvelopeFormatError(
            "Not a roster envelope",
            [f"serializedObject must hold '{ROSTER_KEY}' and '{CREATURES_KEY}'"],
        )
    return list(root[ROSTER_KEY]), set(root[CREATURES_KEY])


def _copy_record(record: Any, context: CyclicDeserializationContext) -> Any:
    return record


def deserialize_creatures(
    envelope: CyclicSerializedObject,
    registry: SerializerRegistry,
) -> list[Creature]:
    """Rebuild a roster, preserving references between creatures."""
    roster_ids, creature_ids = _read_root(envelope)
    records = envelope.referencing_array
    creature_records = {
        id(get_object_from_reference_id(reference_id, records)) for reference_id in creature_ids
    }

    def make_shell(record: Any) -> Any:
        if id(record) in creature_records:
            return blank_creature(record)
        if isinstance(record, Mapping):
            return {}
        if isinstance(record, list):
            return []
        # Immutable values are their own shell
        return record

    context = create_cyclic_deserialization_context(envelope, shell_factory=make_shell)

    def deserializer(record: dict[str, Any], context: CyclicDeserializationContext) -> Creature:
        return deserialize_creature(record, context, registry)

    for reference_id, record in enumerate(records):
        if reference_id in creature_ids:
            cyclic_deserialize(record, deserializer, context)
        elif isinstance(record, (Mapping, list)):
            cyclic_deserialize(record, _copy_record, context)

    return [
        get_object_from_reference_id(reference_id, context.deserialized_referencing_array)
        for reference_id in roster_ids
    ]


def save_roster(path: str | Path, creatures: list[Creature], registry: SerializerRegistry):
    save_envelope(path, serialize_creatures(creatures, registry))


def load_roster(path: str | Path, registry: SerializerRegistry) -> list[Creature]:
    return deserialize_creatures(load_envelope_file(path), registry)
