#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math

from .math_utils import Vec3
from .transform import apply_view

DEFAULT_POSITION = Vec3(0.0, 0.5, -6.0)

# Keeps the view direction from flipping over at the poles
PITCH_LIMIT = math.pi / 2 - 0.01

LOOK_SENSITIVITY = 0.004   # radians per dragged pixel
MOVE_SPEED = 4.0           # units per second
FAST_MOVE_SPEED = 8.0
DOLLY_STEP = 0.4


def clamp_pitch(pitch: float) -> float:
    return max(-PITCH_LIMIT, min(PITCH_LIMIT, pitch))


class Camera:
    """
    Free-look camera: world position plus yaw (about Y) and pitch (about X).

    At yaw = pitch = 0 the camera looks down +Z. Pitch is clamped to
    +/-PITCH_LIMIT on every update.
    """
    __slots__ = ('position', '_yaw', '_pitch')

    def __init__(self, position=DEFAULT_POSITION, yaw: float = 0.0, pitch: float = 0.0):
        self.position = Vec3.of(position)
        self._yaw = float(yaw)
        self._pitch = clamp_pitch(float(pitch))

    def __repr__(self):
        return f"Camera(position={self.position!r}, yaw={self._yaw:.3f}, pitch={self._pitch:.3f})"

    @property
    def yaw(self) -> float:
        return self._yaw

    @yaw.setter
    def yaw(self, value: float):
        self._yaw = float(value)

    @property
    def pitch(self) -> float:
        return self._pitch

    @pitch.setter
    def pitch(self, value: float):
        self._pitch = clamp_pitch(float(value))

    def forward(self) -> Vec3:
        """Horizontal (yaw-only) direction that maps to view-space +Z."""
        return Vec3(-math.sin(self._yaw), 0.0, math.cos(self._yaw))

    def right(self) -> Vec3:
        """Horizontal direction that maps to view-space +X."""
        return Vec3(math.cos(self._yaw), 0.0, math.sin(self._yaw))

    def look(self, dx: float, dy: float, sensitivity: float = LOOK_SENSITIVITY):
        """Apply a drag delta in pixels."""
        self.yaw = self._yaw + dx * sensitivity
        self.pitch = self._pitch + dy * sensitivity

    def move(self, keys, dt: float):
        """
        Move from a snapshot of held movement keys.

        keys: collection of 'w', 'a', 's', 'd', 'q', 'e' and optionally
        'shift' for double speed.
        """
        speed = FAST_MOVE_SPEED if 'shift' in keys else MOVE_SPEED
        step = speed * dt
        forward = self.forward()
        right = self.right()

        pos = self.position
        if 'w' in keys: pos = pos + forward * step
        if 's' in keys: pos = pos - forward * step
        if 'd' in keys: pos = pos + right * step
        if 'a' in keys: pos = pos - right * step
        if 'e' in keys: pos = pos + Vec3(0.0, step, 0.0)
        if 'q' in keys: pos = pos - Vec3(0.0, step, 0.0)
        self.position = pos

    def dolly(self, direction: int, step: float = DOLLY_STEP):
        """Move along the horizontal forward vector. Positive = forward."""
        if not direction:
            return
        sign = 1.0 if direction > 0 else -1.0
        self.position = self.position + self.forward() * (sign * step)

    def reset(self):
        self.position = DEFAULT_POSITION
        self._yaw = 0.0
        self._pitch = 0.0

    def to_view(self, p: Vec3) -> Vec3:
        return apply_view(p, self)
