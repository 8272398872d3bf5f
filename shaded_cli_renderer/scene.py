#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/scene.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .math_utils import Vec3, ZERO, ONE
from .mesh import Mesh

logger = logging.getLogger(__name__)

DEFAULT_COLOR = (0, 255, 0)

AXES = ('x', 'y', 'z')


@dataclass(frozen=True)
class Pose:
    position: Vec3 = ZERO
    rotation: Vec3 = ZERO
    scale: Vec3 = ONE

    @classmethod
    def uniform(cls, position, scale: float = 1.0, rotation=(0.0, 0.0, 0.0)) -> 'Pose':
        return cls(Vec3.of(position), Vec3.of(rotation), Vec3(scale, scale, scale))


@dataclass
class SceneObject:
    """
    One placed instance of a mesh.

    ``mesh`` may be shared with other objects and is never modified; only
    the transform fields change. ``default_pose`` is the layout the object
    returns to on reset, or None for objects without one.
    """
    name: str
    mesh: Optional[Mesh]
    position: Vec3 = ZERO
    rotation: Vec3 = ZERO     # radians, applied X -> Y -> Z
    scale: Vec3 = ONE
    color: Tuple[int, int, int] = DEFAULT_COLOR
    unlit: bool = False
    default_pose: Optional[Pose] = None

    def apply_pose(self, pose: Pose):
        self.position = pose.position
        self.rotation = pose.rotation
        self.scale = pose.scale

    def set_uniform_scale(self, s: float):
        self.scale = Vec3(s, s, s)


@dataclass(frozen=True)
class DefaultAsset:
    """An entry of the default scene: a mesh with its canonical layout."""
    name: str
    mesh: Mesh
    pose: Pose = field(default_factory=Pose)
    color: Tuple[int, int, int] = DEFAULT_COLOR


def build_default_scene(defaults: Sequence[DefaultAsset]) -> List[SceneObject]:
    """Return a fresh list of objects for the given default assets."""
    objects = []
    for asset in defaults:
        obj = SceneObject(name=asset.name, mesh=asset.mesh,
                          color=asset.color, default_pose=asset.pose)
        obj.apply_pose(asset.pose)
        objects.append(obj)
    return objects


def _with_axis(v: Vec3, axis: str, value: float) -> Vec3:
    if axis not in AXES:
        raise ValueError(f"axis must be one of {AXES}, got {axis!r}")
    x, y, z = v
    if axis == 'x': x = value
    elif axis == 'y': y = value
    else: z = value
    return Vec3(x, y, z)


class Scene:
    """
    Ordered list of placed objects plus the current selection.

    The selection index is clamped into range whenever the object list
    changes, and is 0 when the scene is empty.
    """

    def __init__(self, defaults: Sequence[DefaultAsset] = ()):
        self.defaults = tuple(defaults)
        self.objects: List[SceneObject] = build_default_scene(self.defaults)
        self._selected = 0

    def __len__(self):
        return len(self.objects)

    @property
    def selected(self) -> int:
        return self._selected

    @selected.setter
    def selected(self, index: int):
        self.select(index)

    def _clamp_selection(self):
        if not self.objects:
            self._selected = 0
        else:
            self._selected = max(0, min(len(self.objects) - 1, self._selected))

    @property
    def selected_object(self) -> Optional[SceneObject]:
        if not self.objects:
            return None
        self._clamp_selection()
        return self.objects[self._selected]

    def select(self, index: int):
        self._selected = int(index)
        self._clamp_selection()

    def select_next(self):
        if self.objects:
            self._selected = (self._selected + 1) % len(self.objects)

    def select_previous(self):
        if self.objects:
            self._selected = (self._selected - 1) % len(self.objects)

    def add(self, obj: SceneObject) -> SceneObject:
        self.objects.append(obj)
        return obj

    def load_and_place(self, mesh: Mesh, name: Optional[str] = None) -> SceneObject:
        """Place a loaded mesh at the origin and select it."""
        obj = SceneObject(name=name or f"Object {len(self.objects) + 1}", mesh=mesh)
        self.add(obj)
        self._selected = len(self.objects) - 1
        logger.info("Placed '%s' (%d triangles)", obj.name, mesh.triangle_count)
        return obj

    def remove_selected(self) -> Optional[SceneObject]:
        """
        Delete the selected object. Deleting the last remaining object
        restores the default scene.
        """
        if not self.objects:
            return None
        self._clamp_selection()
        removed = self.objects.pop(self._selected)
        if not self.objects:
            self.objects = build_default_scene(self.defaults)
            self._selected = 0
        else:
            self._clamp_selection()
        return removed

    def clear(self):
        """Replace everything with the default scene."""
        self.objects = build_default_scene(self.defaults)
        self._selected = 0

    def reset_to_default_layout(self):
        """Re-apply the default pose of every object that has one."""
        for obj in self.objects:
            if obj.default_pose is not None:
                obj.apply_pose(obj.default_pose)

    # Transform edits on the selected object. Later edits overwrite earlier ones.

    def set_position(self, axis: str, value: float):
        obj = self.selected_object
        if obj is not None:
            obj.position = _with_axis(obj.position, axis, value)

    def set_rotation(self, axis: str, value: float):
        obj = self.selected_object
        if obj is not None:
            obj.rotation = _with_axis(obj.rotation, axis, value)

    def set_uniform_scale(self, value: float):
        obj = self.selected_object
        if obj is not None:
            obj.set_uniform_scale(value)

    def nudge_position(self, axis: str, delta: float):
        obj = self.selected_object
        if obj is not None:
            self.set_position(axis, getattr(obj.position, axis) + delta)

    def nudge_rotation(self, axis: str, delta: float):
        obj = self.selected_object
        if obj is not None:
            self.set_rotation(axis, getattr(obj.rotation, axis) + delta)

    def nudge_scale(self, factor: float):
        obj = self.selected_object
        if obj is not None:
            obj.set_uniform_scale(obj.scale.x * factor)

    def toggle_unlit(self):
        obj = self.selected_object
        if obj is not None:
            obj.unlit = not obj.unlit

    def stats(self) -> Optional[Tuple[int, int]]:
        """(vertices, triangles) of the selected object's mesh."""
        obj = self.selected_object
        if obj is None or obj.mesh is None:
            return None
        return obj.mesh.vertex_count, obj.mesh.triangle_count
