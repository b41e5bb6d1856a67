"""
Tests for the scene runner and the state mutation queue.
"""

from unittest.mock import Mock

import pytest

from ..scene import Scene, SceneAlreadyRunningError, SceneProcessor
from ..state_mutation_queue import (
    execute_state_mutation,
    has_state_mutation_queued,
    queue_state_mutation,
    queue_state_mutations,
)


def mock_scene(states, running: list[bool], next_scene=None, key="value") -> Scene:
    return Scene(
        process_states=Mock(side_effect=lambda delta, s: {key: s[key] + delta}),
        draw_frame=Mock(),
        is_running=Mock(side_effect=running),
        states=states,
        get_next_scene=Mock(return_value=next_scene),
    )


class TestSceneProcessor:
    """Tests for SceneProcessor."""

    def test_processes_until_scene_is_done(self):
        """Frames are computed and drawn while the scene runs."""
        scene = mock_scene({"value": 0}, [True, True, False])
        cleanup = Mock()
        frame_time = Mock(return_value=1)
        processor = SceneProcessor()

        processor.start(scene, cleanup, frame_time)
        processor.run()

        assert scene.states == {"value": 0}
        assert [c.args[0] for c in scene.is_running.call_args_list] == [{"value": 0}, {"value": 1}, {"value": 2}]
        assert scene.draw_frame.call_count == 2
        assert [c.args for c in scene.process_states.call_args_list] == [(1, {"value": 0}), (1, {"value": 1})]
        scene.get_next_scene.assert_called_once_with({"value": 2})
        cleanup.assert_called_once_with()
        assert frame_time.call_count == 2
        assert not processor.is_active

    def test_one_frame_per_tick(self):
        scene = mock_scene({"value": 0}, [True, True, False])
        processor = SceneProcessor()
        processor.start(scene, Mock(), Mock(return_value=1))

        assert processor.tick()
        assert processor.current_scene.states == {"value": 1}
        assert processor.tick()
        assert not processor.tick()
        assert not processor.tick()

    def test_no_next_scene_function(self):
        """A scene without get_next_scene ends the run."""
        scene = mock_scene({"value": 0}, [False])
        scene.get_next_scene = None
        cleanup = Mock()
        frame_time = Mock()
        processor = SceneProcessor()

        processor.start(scene, cleanup, frame_time)
        processor.run()

        scene.is_running.assert_called_once_with({"value": 0})
        scene.draw_frame.assert_not_called()
        scene.process_states.assert_not_called()
        cleanup.assert_called_once_with()
        frame_time.assert_not_called()

    def test_runs_next_scene(self):
        """The next scene starts when the current one is done."""
        scene2 = mock_scene({"number": 55}, [True, False], key="number")
        scene = mock_scene({"value": 0}, [True, False], next_scene=scene2)
        cleanup = Mock()
        frame_time = Mock(return_value=1)
        processor = SceneProcessor()

        processor.start(scene, cleanup, frame_time)
        processor.run()

        assert scene.draw_frame.call_count == 1
        scene.process_states.assert_called_once_with(1, {"value": 0})
        scene.get_next_scene.assert_called_once_with({"value": 1})
        assert [c.args[0] for c in scene2.is_running.call_args_list] == [{"number": 55}, {"number": 56}]
        scene2.process_states.assert_called_once_with(1, {"number": 55})
        assert scene2.draw_frame.call_count == 1
        scene2.get_next_scene.assert_called_once_with({"number": 56})
        cleanup.assert_called_once_with()
        assert frame_time.call_count == 2

    def test_refuses_parallel_runs(self):
        """A second run cannot start until the first one ends."""
        scene = mock_scene({"value": 0}, [False])
        cleanup = Mock()
        processor = SceneProcessor()

        processor.start(scene, cleanup, Mock())
        with pytest.raises(SceneAlreadyRunningError, match="Cannot run several scene in parallel"):
            processor.start(scene, cleanup, Mock())

        processor.run()
        cleanup.assert_called_once_with()

        second = mock_scene({"value": 99}, [False])
        processor.start(second, cleanup, Mock())
        processor.run()

        second.is_running.assert_called_once_with({"value": 99})
        assert cleanup.call_count == 2


class TestStateMutationQueue:
    """Tests for the state mutation queue."""

    def test_has_state_mutation_queued(self):
        assert not has_state_mutation_queued({"m_queue": []})
        assert has_state_mutation_queued({"m_queue": [lambda s: {}]})

    def test_executes_in_queue_order(self):
        state = {"m_queue": [], "log": ""}
        queue_state_mutation(state, lambda s: {"log": s["log"] + "a"})
        queue_state_mutations(state, [lambda s: {"log": s["log"] + "b"}, lambda s: {"log": s["log"] + "c"}])
        queue_state_mutation(state, lambda s: {"log": s["log"] + "d"})

        while has_state_mutation_queued(state):
            state = execute_state_mutation(state)

        assert state["log"] == "abcd"

    def test_queue_state_mutations_keeps_input(self):
        mutations = [lambda s: {}, lambda s: {"x": 1}]
        original = list(mutations)

        queue_state_mutations({"m_queue": []}, mutations)

        assert mutations == original

    def test_execute_without_mutation_returns_state(self):
        state = {"m_queue": [], "value": 3}

        assert execute_state_mutation(state) is state
