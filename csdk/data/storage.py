"""
Storage - JSON persistence of cyclic serialization envelopes.

The stored document is the envelope in its camelCase form:

    {
        "serializedObject": <acyclic tree, references are ids>,
        "referencingArray": [<record_0>, ..., <record_N-1>]
    }

EnvelopeSchema validates that shape on the way in and out. Reference ids
are opaque integers to the storage layer; resolving them is the job of
the deserializers.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticSerializationError

from .cyclic_serialization import CyclicSerializedObject


class EnvelopeFormatError(ValueError):
    """Raised when a stored envelope cannot be read or written."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)


class EnvelopeSchema(BaseModel):
    """Stored form of a CyclicSerializedObject."""
    serialized_object: Any = Field(alias="serializedObject")
    referencing_array: list[Any] = Field(alias="referencingArray")

    model_config = {"populate_by_name": True}

    @field_validator("serialized_object")
    @classmethod
    def _check_root(cls, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            raise ValueError("serializedObject must not be a boolean, null or undefined")
        return value

    @classmethod
    def from_envelope(cls, envelope: CyclicSerializedObject) -> EnvelopeSchema:
        return cls(
            serialized_object=envelope.serialized_object,
            referencing_array=envelope.referencing_array,
        )

    def to_envelope(self) -> CyclicSerializedObject:
        return CyclicSerializedObject(
            serialized_object=self.serialized_object,
            referencing_array=self.referencing_array,
        )


def _validation_messages(error: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}"
        for e in error.errors()
    ]


def dump_envelope(envelope: CyclicSerializedObject, indent: int | None = None) -> str:
    """Serialize an envelope to JSON text."""
    try:
        schema = EnvelopeSchema.from_envelope(envelope)
        return schema.model_dump_json(by_alias=True, indent=indent)
    except ValidationError as e:
        raise EnvelopeFormatError("Invalid envelope", _validation_messages(e)) from e
    except (PydanticSerializationError, ValueError) as e:
        # Live objects left in the array, or circular references
        raise EnvelopeFormatError(f"Envelope is not JSON serializable: {e}") from e


def load_envelope(text: str | bytes) -> CyclicSerializedObject:
    """Parse JSON text into an envelope."""
    try:
        schema = EnvelopeSchema.model_validate_json(text)
    except ValidationError as e:
        raise EnvelopeFormatError("Invalid envelope", _validation_messages(e)) from e
    return schema.to_envelope()


def save_envelope(path: str | Path, envelope: CyclicSerializedObject, indent: int | None = None):
    Path(path).write_text(dump_envelope(envelope, indent=indent), encoding="utf-8")


def load_envelope_file(path: str | Path) -> CyclicSerializedObject:
    return load_envelope(Path(path).read_text(encoding="utf-8"))
