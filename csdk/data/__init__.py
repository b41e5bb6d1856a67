"""Data - Referencing, cyclic serialization, storage and data collections."""

from .referencing import (
    ReferencingArray,
    IndexedReferencingArray,
    ReferenceID,
    UnknownReferenceError,
    find_reference_id,
    get_reference_id,
    get_object_from_reference_id,
    overwrite_object_from_reference_id,
)
from .cyclic_serialization import (
    CyclicSerializationContext,
    CyclicSerializedObject,
    CyclicDeserializationContext,
    CyclicSerializationError,
    UnserializableRootError,
    AliasedRootError,
    ShellMismatchError,
    create_cyclic_serialization_context,
    cyclic_serialize,
    finalize_cyclic_serialization,
    create_cyclic_deserialization_context,
    cyclic_deserialize,
)
from .storage import (
    EnvelopeSchema,
    EnvelopeFormatError,
    dump_envelope,
    load_envelope,
    save_envelope,
    load_envelope_file,
)
from .data_collections import (
    UNDEF_DATA_ID,
    DataCollection,
    EmptyCollectionError,
    create_data_collection,
    load_data_collection,
    get_data_from_data_collection,
)

__all__ = [
    "ReferencingArray",
    "IndexedReferencingArray",
    "ReferenceID",
    "UnknownReferenceError",
    "find_reference_id",
    "get_reference_id",
    "get_object_from_reference_id",
    "overwrite_object_from_reference_id",
    "CyclicSerializationContext",
    "CyclicSerializedObject",
    "CyclicDeserializationContext",
    "CyclicSerializationError",
    "UnserializableRootError",
    "AliasedRootError",
    "ShellMismatchError",
    "create_cyclic_serialization_context",
    "cyclic_serialize",
    "finalize_cyclic_serialization",
    "create_cyclic_deserialization_context",
    "cyclic_deserialize",
    "EnvelopeSchema",
    "EnvelopeFormatError",
    "dump_envelope",
    "load_envelope",
    "save_envelope",
    "load_envelope_file",
    "UNDEF_DATA_ID",
    "DataCollection",
    "EmptyCollectionError",
    "create_data_collection",
    "load_data_collection",
    "get_data_from_data_collection",
]
