"""Skills known by a creature."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .registry import SerializerRegistry
    from .data.referencing import ReferencingArray
    from .data.cyclic_serialization import CyclicDeserializationContext


@dataclass
class Skill:
    id: str
    data: Any = None


class DataWithSkills(Protocol):
    skills: list[Skill]


def remove_skill(creature: DataWithSkills, skill_id: str):
    """Remove a skill from the creature (modifies the creature)."""
    creature.skills = [skill for skill in creature.skills if skill.id != skill_id]


def has_skill(creature: DataWithSkills, skill_id: str) -> bool:
    return any(skill.id == skill_id for skill in creature.skills)


def add_skill(creature: DataWithSkills, skill: Skill):
    """Add a skill, unless the creature already has one with the same id."""
    if has_skill(creature, skill.id):
        return

    creature.skills = [*creature.skills, skill]


def get_skill(creature: DataWithSkills, skill_id: str) -> Skill | None:
    for skill in creature.skills:
        if skill.id == skill_id:
            return skill
    return None


def serialize_skill_data(
    skill: Skill,
    referencing_array: ReferencingArray,
    registry: SerializerRegistry,
) -> Any:
    return registry.skill_data_serializer(skill, referencing_array)


def deserialize_skill_data(
    data: Any,
    context: CyclicDeserializationContext,
    registry: SerializerRegistry,
) -> Any:
    return registry.skill_data_deserializer(data, context)
