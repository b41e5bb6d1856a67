"""
Tests for effects.

Tests:
- Prevention helper
- Effect registry
- Cleanup
- Effect (de)serialization through the serializer registry
"""

from unittest.mock import Mock

from ..creature import Creature
from ..effect import (
    VOID_EFFECT,
    Effect,
    EffectContext,
    EffectFunctions,
    EffectRegistry,
    cleanup_effects,
    deserialize_effect,
    prevent_effect,
    serialize_effect,
)
from ..registry import SerializerRegistry
from ..data.cyclic_serialization import CyclicDeserializationContext


def empty_context() -> CyclicDeserializationContext:
    return CyclicDeserializationContext(serialized_referencing_array=[], deserialized_referencing_array=[])


class TestPreventEffect:
    """Tests for prevent_effect."""

    def test_returns_prevent_and_links_reason(self):
        context = EffectContext(target=Creature(id="creature", form="form", hp=0), data=None)
        reason = Mock()

        assert prevent_effect(context, reason) == "prevent"
        assert context.cancellation_reason is reason


class TestEffectRegistry:
    """Tests for EffectRegistry."""

    def test_unknown_category_gives_void_functions(self):
        effect = EffectRegistry().create_effect("category", "test", 25)

        assert effect.effect_functions is VOID_EFFECT
        assert effect.type == "test"
        assert effect.data == 25

    def test_unknown_type_gives_void_functions(self):
        registry = EffectRegistry()
        registry.register_effect("category", "test2", EffectFunctions())

        effect = registry.create_effect("category", "test", 25)

        assert effect.effect_functions is VOID_EFFECT

    def test_registered_functions_are_attached(self):
        registry = EffectRegistry()
        on_cleanup = Mock()
        registry.register_effect("category", "test", EffectFunctions(on_cleanup=on_cleanup))

        effect = registry.create_effect("category", "test", 25)

        assert effect.effect_functions is not VOID_EFFECT
        assert effect.effect_functions.on_cleanup is on_cleanup

    def test_effect_exists(self):
        registry = EffectRegistry()
        registry.register_effect("category", "test", EffectFunctions())

        assert registry.effect_exists("category", "test")
        assert not registry.effect_exists("category", "test3")
        assert not registry.effect_exists("undefined_category", "test")

    def test_void_functions_do_nothing(self):
        effect = Effect(type="test", data=None)
        context = EffectContext(target=Creature(id="c", form="f", hp=1), data=None)

        assert effect.effect_functions.on_damage_computation(effect, context) is None
        assert effect.effect_functions.on_turn_end(effect, context) is None
        assert effect.effect_functions.on_cleanup(effect, True) is False


class TestCleanupEffects:
    """Tests for cleanup_effects."""

    def test_removes_finished_effects(self):
        registry = EffectRegistry()
        on_cleanup = Mock(side_effect=lambda effect, is_in_battle: effect.data == "done")
        registry.register_effect("cat", "test", EffectFunctions(on_cleanup=on_cleanup))
        done = registry.create_effect("cat", "test", "done")
        running = registry.create_effect("cat", "test", "running")
        creature = Creature(id="c", form="f", hp=1, effects={"cat": [done, running], "empty": []})

        cleanup_effects(creature, True)

        assert creature.effects == {"cat": [running], "empty": []}
        on_cleanup.assert_any_call(done, True)
        assert on_cleanup.call_count == 2


class TestEffectSerialization:
    """Tests for serialize_effect / deserialize_effect."""

    def test_serialize_passthrough_without_serializer(self):
        effect = Effect(type="test", data={"value": 3})

        assert serialize_effect("cat", effect, [], SerializerRegistry()) == {"type": "test", "data": {"value": 3}}

    def test_serialize_calls_registered_serializer(self):
        registry = SerializerRegistry()
        serializer = Mock(return_value={"type": "test", "data": "serialized"})
        registry.register_serialize_effect("cat", "test", serializer)
        effect = Effect(type="test", data=5)
        referencing_array = ["ref"]

        assert serialize_effect("cat", effect, referencing_array, registry) == {"type": "test", "data": "serialized"}
        serializer.assert_called_once_with(effect, referencing_array)

    def test_serializer_is_scoped_by_category(self):
        registry = SerializerRegistry()
        registry.register_serialize_effect("cat", "test", Mock(return_value={"type": "test", "data": 0}))

        assert serialize_effect("cot", Effect(type="test", data=5), [], registry) == {"type": "test", "data": 5}

    def test_deserialize_reattaches_functions(self):
        registry = SerializerRegistry()
        on_turn_end = Mock()
        registry.effects.register_effect("cat", "test", EffectFunctions(on_turn_end=on_turn_end))

        effect = deserialize_effect("cat", {"type": "test", "data": 7}, empty_context(), registry)

        assert effect == Effect(type="test", data=7)
        assert effect.effect_functions.on_turn_end is on_turn_end

    def test_deserialize_calls_registered_deserializer(self):
        registry = SerializerRegistry()
        deserializer = Mock(return_value={"type": "test", "data": "decoded"})
        registry.register_deserialize_effect("cat", "test", deserializer)
        context = empty_context()

        effect = deserialize_effect("cat", {"type": "test", "data": 1}, context, registry)

        assert effect.data == "decoded"
        assert effect.effect_functions is VOID_EFFECT
        deserializer.assert_called_once_with({"type": "test", "data": 1}, context)
