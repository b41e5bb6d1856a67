"""
Creature - The central entity of the game.

Creatures hold states, skills and effects, and effects usually hold a
reference back to their creature. Creatures therefore compare by
identity, and are written to storage with the cyclic serialization
helpers (see roster.py).
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from .effect import Effect, serialize_effect, deserialize_effect
from .skill import Skill, serialize_skill_data, deserialize_skill_data
from .state import State, serialize_state_data, deserialize_state_data

if TYPE_CHECKING:
    from .registry import SerializerRegistry
    from .data.referencing import ReferencingArray
    from .data.cyclic_serialization import CyclicDeserializationContext


@dataclass(eq=False)
class Creature:
    id: str
    form: str
    hp: int
    states: list[State] = field(default_factory=list)
    skills: list[Skill] = field(default_factory=list)
    level: int = 1
    exp: int = 0
    effects: dict[str, list[Effect]] = field(default_factory=dict)
    data: Any = None


def blank_creature(record: Any = None) -> Creature:
    """
    Allocate a creature with no fields set.

    Used as a deserialization shell; its fields are filled in place once
    its record is decoded.
    """
    return Creature.__new__(Creature)


class StatRegistry:
    """
    Computes creature stats.

    The game registers its stat formula once; until then every stat is 1.
    """

    def __init__(self):
        self._compute_stat: Callable[[Creature, str], float] = lambda creature, stat: 1

    def register_compute_stat_function(self, func: Callable[[Creature, str], float]):
        self._compute_stat = func

    def compute_stat(self, creature: Creature, stat: str) -> float:
        return self._compute_stat(creature, stat)


def serialize_creature(
    creature: Creature,
    referencing_array: ReferencingArray,
    registry: SerializerRegistry,
) -> dict[str, Any]:
    """Serialize a creature and its sub entities to plain data."""
    return {
        "id": creature.id,
        "form": creature.form,
        "hp": creature.hp,
        "states": [
            {"type": state.type, "data": serialize_state_data(state, referencing_array, registry)}
            for state in creature.states
        ],
        "skills": [
            {"id": skill.id, "data": serialize_skill_data(skill, referencing_array, registry)}
            for skill in creature.skills
        ],
        "level": creature.level,
        "exp": creature.exp,
        "effects": {
            category: [
                serialize_effect(category, effect, referencing_array, registry)
                for effect in effects
            ]
            for category, effects in creature.effects.items()
        },
        "data": registry.creature_data_serializer(creature, referencing_array),
    }


def deserialize_creature(
    data: dict[str, Any],
    context: CyclicDeserializationContext,
    registry: SerializerRegistry,
) -> Creature:
    """Rebuild a creature from its serialized form."""
    return Creature(
        id=data["id"],
        form=data["form"],
        hp=data["hp"],
        states=[
            State(type=state["type"], data=deserialize_state_data(state["data"], context, registry))
            for state in data["states"]
        ],
        skills=[
            Skill(id=skill["id"], data=deserialize_skill_data(skill["data"], context, registry))
            for skill in data["skills"]
        ],
        level=data["level"],
        exp=data["exp"],
        effects={
            category: [
                deserialize_effect(category, effect, context, registry)
                for effect in effects
            ]
            for category, effects in data["effects"].items()
        },
        data=registry.creature_data_deserializer(data["data"], context),
    )
