"""
Effects - Behavior attached to a creature.

An effect is data (`type`, `data`) plus a table of hook functions. The
hooks are code: they come from the EffectRegistry, keyed by category and
type, and are re-attached after deserialization instead of being stored.

Registering an effect:
    effects = EffectRegistry()
    effects.register_effect("states", "immunity", EffectFunctions(
        on_damage_computation=lambda effect, context: prevent_effect(context),
    ))

    effect = effects.create_effect("states", "immunity", data={"creature": creature})
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .creature import Creature
    from .skill import Skill
    from .registry import SerializerRegistry
    from .data.referencing import ReferencingArray
    from .data.cyclic_serialization import CyclicDeserializationContext


# Possible return of a preventable hook:
# - "passthrough": the effect executes regardless of prevention
# - "prevent": the effect does not execute
# - None: default
PASSTHROUGH = "passthrough"
PREVENT = "prevent"


@dataclass
class EffectContext:
    """Context passed to effect hooks."""
    target: Creature
    data: Any
    user: Creature | None = None
    skill: Skill | None = None
    cancellation_reason: Callable[[Any], dict[str, Any]] | None = None


def prevent_effect(
    context: EffectContext,
    reason: Callable[[Any], dict[str, Any]] | None = None,
) -> str:
    """
    Prevent an effect, optionally with a state mutation explaining why.

    Example:
        def on_damage(effect, context):
            if context.data["hp"] <= context.target.hp - 1:
                return None
            return prevent_effect(context, lambda scene: {"message": "Endured!"})
    """
    context.cancellation_reason = reason
    return PREVENT


def _noop(effect: Effect, context: EffectContext) -> None:
    return None


def _never_cleanup(effect: Effect, is_in_battle: bool) -> bool:
    return False


@dataclass(frozen=True)
class EffectFunctions:
    """Hooks of an effect. Unset hooks do nothing."""
    on_get_stat_modifier: Callable[[Effect, EffectContext], None] = _noop
    on_damage_computation: Callable[[Effect, EffectContext], str | None] = _noop
    on_after_damage_applied: Callable[[Effect, EffectContext], Any] = _noop
    on_can_apply_state: Callable[[Effect, EffectContext], str | None] = _noop
    on_state_applied: Callable[[Effect, EffectContext], Any] = _noop
    on_can_use_skill: Callable[[Effect, EffectContext], str | None] = _noop
    on_get_skill_elements: Callable[[Effect, EffectContext], None] = _noop
    on_get_creature_elements: Callable[[Effect, EffectContext], None] = _noop
    on_item_held: Callable[[Effect, EffectContext], Any] = _noop
    on_item_dropped: Callable[[Effect, EffectContext], Any] = _noop
    on_turn_end: Callable[[Effect, EffectContext], Any] = _noop
    on_cleanup: Callable[[Effect, bool], bool] = _never_cleanup


VOID_EFFECT = EffectFunctions()


@dataclass
class Effect:
    """An effect instance held by a creature."""
    type: str
    data: Any
    effect_functions: EffectFunctions = field(default=VOID_EFFECT, compare=False)


class EffectRegistry:
    """Effect hooks by category and type."""

    def __init__(self):
        self._effects: dict[str, dict[str, EffectFunctions]] = {}

    def register_effect(self, category: str, effect_type: str, effect_functions: EffectFunctions):
        self._effects.setdefault(category, {})[effect_type] = effect_functions

    def effect_exists(self, category: str, effect_type: str) -> bool:
        return effect_type in self._effects.get(category, {})

    def get_effect_functions(self, category: str, effect_type: str) -> EffectFunctions:
        """Get the hooks of an effect, or the void hooks if none are registered."""
        return self._effects.get(category, {}).get(effect_type, VOID_EFFECT)

    def create_effect(self, category: str, effect_type: str, data: Any = None) -> Effect:
        """Create an effect with the hooks registered for its category and type."""
        return Effect(
            type=effect_type,
            data=data,
            effect_functions=self.get_effect_functions(category, effect_type),
        )


def cleanup_effects(creature: Creature, is_in_battle: bool):
    """Remove every effect whose `on_cleanup` hook says it is finished."""
    creature.effects = {
        category: [
            effect for effect in effects
            if not effect.effect_functions.on_cleanup(effect, is_in_battle)
        ]
        for category, effects in creature.effects.items()
    }


def serialize_effect(
    category: str,
    effect: Effect,
    referencing_array: ReferencingArray,
    registry: SerializerRegistry,
) -> dict[str, Any]:
    """Serialize an effect with the serializer registered for its category and type."""
    serializer = registry.get_effect_serializer(category, effect.type)
    if serializer is None:
        return {"type": effect.type, "data": effect.data}
    return serializer(effect, referencing_array)


def deserialize_effect(
    category: str,
    data: dict[str, Any],
    context: CyclicDeserializationContext,
    registry: SerializerRegistry,
) -> Effect:
    """Deserialize an effect and re-attach its hooks."""
    deserializer = registry.get_effect_deserializer(category, data["type"])
    decoded = deserializer(data, context) if deserializer else data
    return registry.effects.create_effect(category, decoded["type"], decoded.get("data"))
