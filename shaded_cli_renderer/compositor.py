#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/compositor.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .config import RenderConfig
from .mesh import BOX_EDGES
from .shading import Lighting, ShadedTriangle, shade_scene
from .transform import Viewport, apply_model, apply_view


class RasterSurface(Protocol):
    """What the compositor draws on: a device-pixel sized 2D surface."""
    width: int
    height: int

    def clear(self, color): ...

    def fill_polygon(self, points, color): ...

    def stroke_line(self, p1, p2, color): ...


@dataclass
class FrameStats:
    objects: int = 0
    triangles_in: int = 0
    triangles_visible: int = 0
    triangles_drawn: int = 0


def _channel(base: float, diffuse: float, spec: float) -> int:
    # Halves round up
    return max(0, min(255, math.floor(base * diffuse + 255.0 * spec + 0.5)))


def shade_color(color, diffuse: float, spec: float):
    """Final fill color: base * diffuse + white specular, clamped to 0..255."""
    r, g, b = color
    return (_channel(r, diffuse, spec),
            _channel(g, diffuse, spec),
            _channel(b, diffuse, spec))


def depth_sorted(triangles: Sequence[ShadedTriangle]) -> List[ShadedTriangle]:
    """Painter's order over all objects: farthest average depth first."""
    return sorted(triangles, key=lambda t: t.avg_z, reverse=True)


class Compositor:
    """
    Stateless painter's-algorithm compositor.

    render(surface, scene, camera, viewport) draws one frame: the shaded
    triangles of every object are merged into one list, sorted back to front
    and filled, then the optional overlays are stroked on top.
    """

    def __init__(self, config: RenderConfig = None):
        self.config = config or RenderConfig()

    def render(self, surface: RasterSurface, scene, camera, viewport: Viewport = None) -> FrameStats:
        config = self.config
        if viewport is None:
            viewport = Viewport(surface.width, surface.height, config.near_plane)

        surface.clear(config.background)

        objects = scene.objects
        lighting = Lighting.from_config(config)
        tris = shade_scene(objects, camera, lighting,
                           specular=config.enable_specular,
                           cull_near=config.cull_near)

        stats = FrameStats(objects=len(objects),
                           triangles_in=sum(len(o.mesh.triangles) for o in objects if o.mesh),
                           triangles_visible=len(tris))
        stats.triangles_drawn = self.draw(surface, tris, viewport, scene.selected)

        if config.draw_bounds:
            self.draw_bounds(surface, objects, camera, viewport)
        return stats

    def draw(self, surface: RasterSurface, triangles, viewport: Viewport, selected_index: int = -1) -> int:
        """Sort and draw shaded triangles. Returns the number drawn."""
        config = self.config
        drawn = 0

        for t in depth_sorted(triangles):
            A = viewport.project_to_screen(t.a)
            B = viewport.project_to_screen(t.b)
            C = viewport.project_to_screen(t.c)
            if A is None or B is None or C is None:
                continue

            pts = (A, B, C)
            surface.fill_polygon(pts, shade_color(t.color, t.diffuse, t.spec))
            drawn += 1

            if config.draw_wireframe:
                stroke = (config.selected_wire_color if t.object_index == selected_index
                          else config.wire_color)
                for i in range(3):
                    surface.stroke_line(pts[i], pts[(i + 1) % 3], stroke)

            if config.draw_normals:
                center = t.centroid
                tip = center + t.normal * config.normal_length
                c0 = viewport.project_to_screen(center)
                c1 = viewport.project_to_screen(tip)
                if c0 is not None and c1 is not None:
                    surface.stroke_line(c0, c1, config.normal_color)
        return drawn

    def draw_bounds(self, surface: RasterSurface, objects, camera, viewport: Viewport) -> int:
        """
        Stroke each object's bounding box. Edges with an endpoint that fails
        to project are left out. Returns the number of edges drawn.
        """
        color = self.config.bounds_color
        drawn = 0
        for obj in objects:
            mesh = obj.mesh
            if mesh is None or mesh.bounds is None:
                continue
            corners = [viewport.project_to_screen(apply_view(apply_model(p, obj), camera))
                       for p in mesh.bounds.corners()]
            for i, j in BOX_EDGES:
                a, b = corners[i], corners[j]
                if a is None or b is None:
                    continue
                surface.stroke_line(a, b, color)
                drawn += 1
        return drawn
