"""
Serializer Registry - How entity data is written to and read from storage.

The cyclic serialization core knows nothing about creature, state, skill
or effect data. Game code tells it through a SerializerRegistry, built
once at startup and passed to the serialization entry points.

Every hook defaults to passthrough. Serializers receive the entity and
the active referencing array, so they can turn references to other
objects into ids:

    registry = SerializerRegistry()
    registry.register_serialize_state_data(
        lambda state, referencing_array: get_reference_id(state.data, referencing_array)
    )
    registry.register_deserialize_state_data(
        lambda data, context: get_object_from_reference_id(
            data, context.deserialized_referencing_array
        )
    )

Data interned this way must be plain (dicts, lists, strings, numbers); it
is stored as its own slot and comes back as one value shared by every
state that referenced it.
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .effect import Effect, EffectRegistry
from .data.referencing import ReferencingArray
from .data.cyclic_serialization import CyclicDeserializationContext


DataSerializer = Callable[[Any, ReferencingArray], Any]
DataDeserializer = Callable[[Any, CyclicDeserializationContext], Any]
EffectSerializer = Callable[[Effect, ReferencingArray], dict[str, Any]]
EffectDeserializer = Callable[[dict[str, Any], CyclicDeserializationContext], dict[str, Any]]


def _serialize_data(entity: Any, referencing_array: ReferencingArray) -> Any:
    return entity.data


def _deserialize_data(data: Any, context: CyclicDeserializationContext) -> Any:
    return data


@dataclass
class SerializerRegistry:
    """Serialization hooks for every entity kind."""
    effects: EffectRegistry = field(default_factory=EffectRegistry)

    creature_data_serializer: DataSerializer = _serialize_data
    creature_data_deserializer: DataDeserializer = _deserialize_data
    state_data_serializer: DataSerializer = _serialize_data
    state_data_deserializer: DataDeserializer = _deserialize_data
    skill_data_serializer: DataSerializer = _serialize_data
    skill_data_deserializer: DataDeserializer = _deserialize_data

    # category -> type -> hook
    effect_serializers: dict[str, dict[str, EffectSerializer]] = field(default_factory=dict)
    effect_deserializers: dict[str, dict[str, EffectDeserializer]] = field(default_factory=dict)

    def register_serialize_creature_data(self, serializer: DataSerializer):
        self.creature_data_serializer = serializer

    def register_deserialize_creature_data(self, deserializer: DataDeserializer):
        self.creature_data_deserializer = deserializer

    def register_serialize_state_data(self, serializer: DataSerializer):
        self.state_data_serializer = serializer

    def register_deserialize_state_data(self, deserializer: DataDeserializer):
        self.state_data_deserializer = deserializer

    def register_serialize_skill_data(self, serializer: DataSerializer):
        self.skill_data_serializer = serializer

    def register_deserialize_skill_data(self, deserializer: DataDeserializer):
        self.skill_data_deserializer = deserializer

    def register_serialize_effect(self, category: str, effect_type: str, serializer: EffectSerializer):
        """Register the serializer of an effect category & type."""
        self.effect_serializers.setdefault(category, {})[effect_type] = serializer

    def register_deserialize_effect(self, category: str, effect_type: str, deserializer: EffectDeserializer):
        """Register the deserializer of an effect category & type."""
        self.effect_deserializers.setdefault(category, {})[effect_type] = deserializer

    def get_effect_serializer(self, category: str, effect_type: str) -> EffectSerializer | None:
        return self.effect_serializers.get(category, {}).get(effect_type)

    def get_effect_deserializer(self, category: str, effect_type: str) -> EffectDeserializer | None:
        return self.effect_deserializers.get(category, {}).get(effect_type)
