#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/transform.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

"""
Model -> view -> projection chain.

View space has the camera at the origin looking down +Z. Projection is a
plain perspective divide (x/z, y/z) corrected for the viewport aspect.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ViewportError
from .math_utils import Vec3, rotate_x, rotate_y, rotate_z

# Per-vertex projection guard; primitives are rejected earlier at CULL_NEAR
NEAR_PLANE = 0.15


def apply_model(p: Vec3, obj) -> Vec3:
    """Scale -> rotate X -> rotate Y -> rotate Z -> translate."""
    s = obj.scale
    q = Vec3(p.x * s.x, p.y * s.y, p.z * s.z)

    r = obj.rotation
    q = rotate_x(q, r.x)
    q = rotate_y(q, r.y)
    q = rotate_z(q, r.z)

    return q + obj.position


def apply_view(p: Vec3, camera) -> Vec3:
    """World -> view: the inverse of the camera's translate/yaw/pitch."""
    q = p - camera.position
    q = rotate_y(q, -camera.yaw)
    q = rotate_x(q, -camera.pitch)
    return q


def project(p: Vec3, aspect: float, near_plane: float = NEAR_PLANE) -> Optional[Tuple[float, float]]:
    """Perspective divide to NDC, or None when p is at or behind the near plane."""
    if p.z <= near_plane:
        return None
    # Divide by aspect so wide viewports don't stretch content horizontally
    return (p.x / p.z / aspect, p.y / p.z)


def to_screen(ndc, width: float, height: float) -> Tuple[float, float]:
    """NDC [-1, 1] -> pixels; y is flipped so +y is up on screen."""
    x, y = ndc
    return ((x + 1.0) / 2.0 * width,
            (1.0 - (y + 1.0) / 2.0) * height)


@dataclass(frozen=True)
class Viewport:
    """Device-pixel size of the raster surface for one frame."""
    width: int
    height: int
    near_plane: float = NEAR_PLANE

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ViewportError(
                f"viewport must have a positive size, got {self.width}x{self.height}")

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def project(self, p: Vec3):
        return project(p, self.aspect, self.near_plane)

    def to_screen(self, ndc):
        return to_screen(ndc, self.width, self.height)

    def project_to_screen(self, p: Vec3):
        """View-space point -> pixel coordinate, or None if unprojectable."""
        ndc = self.project(p)
        if ndc is None:
            return None
        return self.to_screen(ndc)
