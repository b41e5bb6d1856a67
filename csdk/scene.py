"""
Scene - The game loop.

A scene computes its new states from the elapsed time, draws them, and
says when it is done. When a scene is done, its `get_next_scene` (if any)
gives the scene to run next; when there is none, the run ends and the
cleanup function is called.

Usage:
    processor = SceneProcessor()
    processor.start(title_scene, cleanup=close_window, frame_time=get_frame_time)
    processor.run()

Only one run can be active at a time.
"""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any
import logging

logger = logging.getLogger(__name__)

DEFAULT_FRAME_TIME = 0.016666


class SceneAlreadyRunningError(RuntimeError):
    """Raised when a run is started while another one is active."""

    def __init__(self):
        super().__init__("Cannot run several scene in parallel")


@dataclass
class Scene:
    """
    A scene of the game loop.

    `is_running` is called before computing the next states and before
    drawing, so a finished scene is never drawn again.
    """
    # (delta, states) -> new states
    process_states: Callable[[float, Any], Any]
    draw_frame: Callable[[Any], None]
    is_running: Callable[[Any], bool]
    states: Any
    get_next_scene: Callable[[Any], Scene | None] | None = None


class SceneProcessor:
    """Runs scenes one frame at a time."""

    def __init__(self):
        self._current: Scene | None = None
        self._cleanup: Callable[[], None] | None = None
        self._frame_time: Callable[[], float] = lambda: DEFAULT_FRAME_TIME

    @property
    def is_active(self) -> bool:
        return self._cleanup is not None

    @property
    def current_scene(self) -> Scene | None:
        return self._current

    def start(
        self,
        scene: Scene,
        cleanup: Callable[[], None],
        frame_time: Callable[[], float],
    ):
        """
        Start a run with the given scene. Frames are processed by `tick`.

        Args:
            cleanup: Called once, when no next scene will be executed
            frame_time: Gives the elapsed time between two frames
        """
        if self.is_active:
            raise SceneAlreadyRunningError()

        logger.debug("Starting scene processing")
        self._cleanup = cleanup
        self._frame_time = frame_time
        self._current = scene

    def tick(self) -> bool:
        """Process one frame. Returns whether the run is still active."""
        if self._current is None:
            return False

        self._current = self._process_scene(self._current)
        return self.is_active

    def run(self):
        """Process frames until the run ends."""
        while self.tick():
            pass

    def _process_scene(self, scene: Scene) -> Scene | None:
        if not scene.is_running(scene.states):
            return self._handle_scene_done(scene)

        updated = replace(scene, states=scene.process_states(self._frame_time(), scene.states))
        updated.draw_frame(updated.states)
        return updated

    def _handle_scene_done(self, scene: Scene) -> Scene | None:
        if scene.get_next_scene is not None:
            next_scene = scene.get_next_scene(scene.states)
            if next_scene is not None:
                return self._process_scene(next_scene)

        logger.debug("Scene processing done")
        cleanup = self._cleanup
        self._cleanup = None
        if cleanup is not None:
            cleanup()
        return None
