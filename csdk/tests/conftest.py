"""
Pytest fixtures for CSDK tests.
"""

import pytest

from ..creature import Creature
from ..effect import EffectFunctions, EffectRegistry
from ..registry import SerializerRegistry
from ..data.referencing import get_object_from_reference_id, get_reference_id


NODE_COUNT = 5


@pytest.fixture
def cyclic_nodes() -> list[dict]:
    """
    Five nodes, each holding three links; link `s` of node `p` points to
    nodes (p + s) % 5 and (p + s + 2) % 5.
    """
    nodes = [{"data": []} for _ in range(NODE_COUNT)]
    for p_index, node in enumerate(nodes):
        node["data"] = [
            {
                "refA": nodes[(p_index + s_index) % NODE_COUNT],
                "refB": nodes[(p_index + s_index + 2) % NODE_COUNT],
            }
            for s_index in range(3)
        ]
    return nodes


@pytest.fixture
def cyclic_serialized_dict() -> dict:
    """Envelope (storage form) expected from serializing `cyclic_nodes` in order."""
    return {
        "referencingArray": [
            {"data": [{"refA": 0, "refB": 1}, {"refA": 2, "refB": 3}, {"refA": 1, "refB": 4}]},
            {"data": [{"refA": 1, "refB": 4}, {"refA": 3, "refB": 0}, {"refA": 4, "refB": 2}]},
            {"data": [{"refA": 2, "refB": 3}, {"refA": 1, "refB": 4}, {"refA": 3, "refB": 0}]},
            {"data": [{"refA": 3, "refB": 0}, {"refA": 4, "refB": 2}, {"refA": 0, "refB": 1}]},
            {"data": [{"refA": 4, "refB": 2}, {"refA": 0, "refB": 1}, {"refA": 2, "refB": 3}]},
        ],
        "serializedObject": [0, 2, 1, 3, 4],
    }


def serialize_node(node, referencing_array):
    return {
        "data": [
            {
                "refA": get_reference_id(link["refA"], referencing_array),
                "refB": get_reference_id(link["refB"], referencing_array),
            }
            for link in node["data"]
        ]
    }


def deserialize_node(record, context):
    shells = context.deserialized_referencing_array
    return {
        "data": [
            {
                "refA": get_object_from_reference_id(link["refA"], shells),
                "refB": get_object_from_reference_id(link["refB"], shells),
            }
            for link in record["data"]
        ]
    }


@pytest.fixture
def effects() -> EffectRegistry:
    """Effect registry where poison ends once its creature is fainted."""
    registry = EffectRegistry()
    registry.register_effect("states", "poison", EffectFunctions(
        on_cleanup=lambda effect, is_in_battle: effect.data["creature"].hp <= 0,
    ))
    registry.register_effect("field", "leech", EffectFunctions())
    return registry


@pytest.fixture
def serializer_registry(effects: EffectRegistry) -> SerializerRegistry:
    """
    Registry storing creature references as ids:
    - "states" effects hold {"creature", "state"}
    - "field" effects hold {"source", "target"}
    """
    registry = SerializerRegistry(effects=effects)

    def serialize_state_effect(effect, referencing_array):
        return {
            "type": effect.type,
            "data": {
                "creature": get_reference_id(effect.data["creature"], referencing_array),
                "state": effect.data["state"].type,
            },
        }

    def deserialize_state_effect(data, context):
        return {
            "type": data["type"],
            "data": {
                "creature": get_object_from_reference_id(
                    data["data"]["creature"], context.deserialized_referencing_array
                ),
                "state": data["data"]["state"],
            },
        }

    def serialize_field_effect(effect, referencing_array):
        return {
            "type": effect.type,
            "data": {
                key: get_reference_id(creature, referencing_array)
                for key, creature in effect.data.items()
            },
        }

    def deserialize_field_effect(data, context):
        return {
            "type": data["type"],
            "data": {
                key: get_object_from_reference_id(reference_id, context.deserialized_referencing_array)
                for key, reference_id in data["data"].items()
            },
        }

    registry.register_serialize_effect("states", "poison", serialize_state_effect)
    registry.register_deserialize_effect("states", "poison", deserialize_state_effect)
    registry.register_serialize_effect("field", "leech", serialize_field_effect)
    registry.register_deserialize_effect("field", "leech", deserialize_field_effect)
    return registry


@pytest.fixture
def make_creature():
    """Factory for creatures with sensible defaults."""
    def factory(creature_id: str, **kwargs) -> Creature:
        kwargs.setdefault("form", "base")
        kwargs.setdefault("hp", 20)
        return Creature(id=creature_id, **kwargs)
    return factory
