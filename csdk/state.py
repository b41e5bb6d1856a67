"""
States - Lightweight, typed conditions held by a creature.

A state is an anonymous structure (`type` + `data`). Behavior comes from
effects: when an effect is registered in the "states" category for the
state type, adding the state also adds that effect to the creature.

    effects.register_effect("states", "immunity", EffectFunctions(
        on_cleanup=lambda effect, _: not has_state(effect.data["creature"], "immunity"),
    ))
    add_state(creature, State(type="immunity", data={"counter": 3}), effects)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .effect import Effect, EffectRegistry
    from .registry import SerializerRegistry
    from .data.referencing import ReferencingArray
    from .data.cyclic_serialization import CyclicDeserializationContext


STATES_EFFECT_CATEGORY = "states"


@dataclass
class State:
    type: str
    data: Any = None


class DataWithStates(Protocol):
    states: list[State]
    effects: dict[str, list[Effect]]


def remove_state(creature: DataWithStates, state_type: str):
    """Remove a state from the creature (modifies the creature)."""
    creature.states = [state for state in creature.states if state.type != state_type]


def has_state(creature: DataWithStates, state_type: str) -> bool:
    return any(state.type == state_type for state in creature.states)


def add_state(creature: DataWithStates, state: State, effects: EffectRegistry | None = None):
    """
    Add a state to the creature.

    Does nothing if the creature already has a state of the same type.
    If `effects` knows a "states" effect for this type, the effect is added
    too, holding the creature and the state.
    """
    if has_state(creature, state.type):
        return

    creature.states = [*creature.states, state]
    if effects is not None and effects.effect_exists(STATES_EFFECT_CATEGORY, state.type):
        creature.effects.setdefault(STATES_EFFECT_CATEGORY, []).append(
            effects.create_effect(
                STATES_EFFECT_CATEGORY,
                state.type,
                {"creature": creature, "state": state},
            )
        )


def get_state(creature: DataWithStates, state_type: str) -> State | None:
    for state in creature.states:
        if state.type == state_type:
            return state
    return None


def serialize_state_data(
    state: State,
    referencing_array: ReferencingArray,
    registry: SerializerRegistry,
) -> Any:
    return registry.state_data_serializer(state, referencing_array)


def deserialize_state_data(
    data: Any,
    context: CyclicDeserializationContext,
    registry: SerializerRegistry,
) -> Any:
    return registry.state_data_deserializer(data, context)
