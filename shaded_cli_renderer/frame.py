#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/frame.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

"""
Per-frame driving of the renderer.

The front end collects input into one FrameInput snapshot per frame and
hands it to Viewer.advance(); FrameScheduler re-arms the frame step on a
single thread at a fixed nominal rate.
"""

import logging
import sched
import time
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .camera import Camera
from .compositor import Compositor, FrameStats
from .config import RenderConfig
from .errors import MissingAssetError
from .mesh import load_mesh, save_obj
from .scene import Scene

logger = logging.getLogger(__name__)

MOVEMENT_KEYS = frozenset('wasdqe')


@dataclass(frozen=True)
class FrameInput:
    """Snapshot of the user's input for one frame."""
    keys: FrozenSet[str] = frozenset()
    drag_dx: float = 0.0
    drag_dy: float = 0.0
    wheel: int = 0
    draw_wireframe: Optional[bool] = None
    draw_normals: Optional[bool] = None
    draw_bounds: Optional[bool] = None
    enable_specular: Optional[bool] = None
    selection: Optional[int] = None


class HeldKeys:
    """
    Approximates held keys from a terminal that only reports presses.

    A key counts as held for ``hold`` seconds after its last press, which
    spans the terminal's key-repeat delay.
    """

    def __init__(self, hold: float = 0.5, timefunc=time.monotonic):
        self.hold = hold
        self.timefunc = timefunc
        self._last = {}

    def press(self, key: str):
        self._last[key] = self.timefunc()

    def release_all(self):
        self._last.clear()

    def snapshot(self) -> FrozenSet[str]:
        now = self.timefunc()
        self._last = {k: t for k, t in self._last.items() if now - t <= self.hold}
        return frozenset(self._last)


class Viewer:
    """
    Render state of one viewer: scene, camera, config and compositor.

    All scene and camera writes go through this object on the thread that
    drives the frames.
    """

    def __init__(self, scene: Scene, camera: Camera = None, config: RenderConfig = None):
        self.scene = scene
        self.camera = camera or Camera()
        self.config = config or RenderConfig()
        self.compositor = Compositor(self.config)
        self.last_stats = FrameStats()

    def advance(self, frame_input: FrameInput, dt: float):
        """Apply one frame of input."""
        config = self.config
        keys = frame_input.keys
        if keys & MOVEMENT_KEYS:
            self.camera.move(keys, dt)
        if frame_input.drag_dx or frame_input.drag_dy:
            self.camera.look(frame_input.drag_dx, frame_input.drag_dy)
        if frame_input.wheel:
            self.camera.dolly(frame_input.wheel)

        for name in ('draw_wireframe', 'draw_normals', 'draw_bounds', 'enable_specular'):
            value = getattr(frame_input, name)
            if value is not None:
                setattr(config, name, bool(value))

        if frame_input.selection is not None:
            self.scene.select(frame_input.selection)

    def render(self, surface) -> FrameStats:
        self.last_stats = self.compositor.render(surface, self.scene, self.camera)
        return self.last_stats

    def reset_view(self):
        self.camera.reset()
        self.scene.reset_to_default_layout()

    def load_file(self, path, name=None):
        """
        Load a mesh file and place it in the scene. Returns the new object,
        or None when the file can't be read.
        """
        try:
            mesh = load_mesh(path)
        except MissingAssetError as e:
            logger.warning("%s", e)
            return None
        obj = self.scene.load_and_place(mesh, name or _display_name(path))
        self.reset_view()
        return obj

    def export_selected(self, path) -> bool:
        obj = self.scene.selected_object
        if obj is None or obj.mesh is None:
            logger.warning("Nothing to export")
            return False
        try:
            save_obj(obj.mesh, path)
        except OSError as e:
            logger.warning("Export to '%s' failed: %s", path, e)
            return False
        logger.info("Exported '%s' to %s", obj.name, path)
        return True


def _display_name(path) -> str:
    name = str(path).replace('\\', '/').rsplit('/', 1)[-1]
    return name or str(path)


class FrameScheduler:
    """
    Fixed-rate, single-threaded frame loop.

    ``step(dt)`` is scheduled, and re-armed after each completion, on a
    sched.scheduler. Returning False from step or calling stop() ends the
    loop once the current step finishes.
    """

    def __init__(self, step, fps: int = 60, timefunc=time.monotonic, delayfunc=time.sleep):
        self.step = step
        self.interval = 1.0 / fps
        self.timefunc = timefunc
        self.scheduler = sched.scheduler(timefunc, delayfunc)
        self.running = False
        self.frames = 0
        self._last = None
        self._next = None

    def _run_step(self):
        now = self.timefunc()
        dt = self.interval if self._last is None else now - self._last
        self._last = now

        keep_going = self.step(dt)
        self.frames += 1
        if keep_going is False:
            self.running = False
        if not self.running:
            return

        # Next deadline on the fixed grid; skip missed slots instead of bursting
        self._next += self.interval
        now = self.timefunc()
        if self._next < now:
            self._next = now
        self.scheduler.enterabs(self._next, 0, self._run_step)

    def run(self):
        """Block until the loop is stopped."""
        self.running = True
        self._last = None
        self._next = self.timefunc() + self.interval
        self.scheduler.enterabs(self._next, 0, self._run_step)
        self.scheduler.run()

    def stop(self):
        self.running = False
