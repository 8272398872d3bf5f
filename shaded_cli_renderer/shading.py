#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/shading.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

"""
Per-triangle visibility and lighting.

Every triangle of every object is moved into view space, rejected if any
vertex is at or behind CULL_NEAR, backface-culled against the eye at the
origin, and shaded with an ambient + diffuse + specular (Phong) model.
The survivors form one flat list for the compositor.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .math_utils import Vec3, centroid
from .transform import apply_model, apply_view

# Whole-triangle rejection threshold in view space (see NEAR_PLANE for the
# per-vertex projection guard)
CULL_NEAR = 1e-6


@dataclass(frozen=True)
class ShadedTriangle:
    a: Vec3
    b: Vec3
    c: Vec3
    avg_z: float
    diffuse: float
    spec: float
    normal: Vec3
    color: Tuple[int, int, int]
    object_index: int

    @property
    def centroid(self) -> Vec3:
        return centroid(self.a, self.b, self.c)


class Lighting:
    """Directional light in view space plus the material constants."""
    __slots__ = ('light_dir', 'to_light', 'ambient', 'shininess')

    def __init__(self, light_dir=Vec3(-1.0, 1.0, -1.0), ambient: float = 0.15,
                 shininess: float = 64.0):
        self.light_dir = Vec3.of(light_dir).normalize()
        # Vector used for the reflection term
        self.to_light = (-self.light_dir).normalize()
        self.ambient = ambient
        self.shininess = shininess

    @classmethod
    def from_config(cls, config) -> 'Lighting':
        return cls(config.light_dir, config.ambient, config.shininess)

    def diffuse(self, normal: Vec3) -> float:
        raw = max(0.0, normal.dot(self.light_dir))
        return self.ambient + (1.0 - self.ambient) * raw

    def specular(self, normal: Vec3, center: Vec3) -> float:
        L = self.to_light
        R = (normal * (2.0 * normal.dot(L)) - L).normalize()
        V = (-center).normalize()   # surface -> eye
        rv = R.dot(V)
        if rv <= 0.0:
            return 0.0
        return rv ** self.shininess


def shade_triangle(a: Vec3, b: Vec3, c: Vec3, color, object_index: int,
                   lighting: Lighting, unlit: bool = False, specular: bool = True,
                   cull_near: float = CULL_NEAR) -> Optional[ShadedTriangle]:
    """
    Cull and shade one view-space triangle. Returns None when the triangle
    crosses the near threshold or faces away from the eye.
    """
    if a.z <= cull_near or b.z <= cull_near or c.z <= cull_near:
        return None

    n = (b - a).cross(c - a)
    # Eye is at the origin, so vertex a doubles as the view vector
    if n.dot(a) >= 0:
        return None
    nn = n.normalize()

    diffuse = 1.0
    spec = 0.0
    if not unlit:
        diffuse = lighting.diffuse(nn)
        if specular and diffuse > lighting.ambient:
            spec = lighting.specular(nn, centroid(a, b, c))

    return ShadedTriangle(a, b, c, (a.z + b.z + c.z) / 3.0,
                          diffuse, spec, nn, tuple(color), object_index)


def view_vertices(obj, camera) -> List[Vec3]:
    """Transform every vertex of an object's mesh model -> world -> view."""
    return [apply_view(apply_model(v, obj), camera) for v in obj.mesh.vertices]


def shade_scene(objects, camera, lighting: Lighting, specular: bool = True,
                cull_near: float = CULL_NEAR) -> List[ShadedTriangle]:
    """Build the flat, unsorted list of visible shaded triangles of all objects."""
    tris = []
    for obj_index, obj in enumerate(objects):
        mesh = obj.mesh
        if mesh is None or not mesh.vertices:
            continue
        vs = view_vertices(obj, camera)
        n_vs = len(vs)

        for f in mesh.triangles:
            if len(f) != 3:
                continue
            i0, i1, i2 = f
            if not (0 <= i0 < n_vs and 0 <= i1 < n_vs and 0 <= i2 < n_vs):
                continue
            t = shade_triangle(vs[i0], vs[i1], vs[i2], obj.color, obj_index,
                               lighting, unlit=obj.unlit, specular=specular,
                               cull_near=cull_near)
            if t is not None:
                tris.append(t)
    return tris
