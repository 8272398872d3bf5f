#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/mesh.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .errors import MissingAssetError
from .math_utils import Vec3

logger = logging.getLogger(__name__)

# Largest bounding-box dimension after normalization
NORMALIZED_SIZE = 0.9

EXPORT_HEADER = "# Exported from shaded-cli-renderer"

# Corner index pairs of a box built by Bounds.corners()
BOX_EDGES = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


@dataclass(frozen=True)
class Bounds:
    min: Vec3
    max: Vec3

    def size(self) -> Vec3:
        return self.max - self.min

    def center(self) -> Vec3:
        return (self.min + self.max) * 0.5

    def corners(self):
        lo, hi = self.min, self.max
        return (
            Vec3(lo.x, lo.y, lo.z),
            Vec3(hi.x, lo.y, lo.z),
            Vec3(hi.x, hi.y, lo.z),
            Vec3(lo.x, hi.y, lo.z),
            Vec3(lo.x, lo.y, hi.z),
            Vec3(hi.x, lo.y, hi.z),
            Vec3(hi.x, hi.y, hi.z),
            Vec3(lo.x, hi.y, hi.z),
        )


@dataclass(frozen=True)
class Mesh:
    """
    Triangle mesh: vertex positions plus index triples into them.

    Meshes are shared between scene objects and never mutated; the
    pipeline functions below always return a new Mesh.
    """
    vertices: Tuple[Vec3, ...] = ()
    triangles: Tuple[Tuple[int, int, int], ...] = ()
    bounds: Optional[Bounds] = None

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    @property
    def is_empty(self) -> bool:
        return not self.vertices

    @classmethod
    def cube(cls) -> 'Mesh':
        """Factory method for the built-in normalized cube."""
        return cube_mesh()

    @classmethod
    def from_obj(cls, filename) -> 'Mesh':
        """Factory method to load and normalize a mesh from an OBJ file."""
        return load_mesh(filename)


def _fan(indices):
    """Fan-triangulate a polygon around its first vertex."""
    return [(indices[0], indices[i], indices[i + 1])
            for i in range(1, len(indices) - 1)]


def _parse_vertex(parts):
    if len(parts) < 4:
        return None
    try:
        x, y, z = (float(p) for p in parts[1:4])
    except ValueError:
        return None
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        return None
    return Vec3(x, y, z)


def _parse_face(parts, vertex_count):
    if len(parts) < 4:
        return None
    idx = []
    for token in parts[1:]:
        # v, v/vt, v//vn or v/vt/vn: only the vertex reference is used
        v_str = token.split('/')[0]
        try:
            vi = int(v_str)
        except ValueError:
            continue
        # 1-based; negative counts back from the vertices read so far
        vi = vertex_count + vi if vi < 0 else vi - 1
        if vi < 0 or vi >= vertex_count:
            continue
        idx.append(vi)
    if len(idx) < 3:
        return None
    return _fan(idx)


def parse_obj(text: str) -> Mesh:
    """
    Parse Wavefront OBJ text into a Mesh.

    Only ``v`` and ``f`` records are consumed. Polygons are fan-triangulated.
    Records that fail to parse are skipped, so malformed input yields a
    smaller mesh instead of an error.
    """
    vertices = []
    triangles = []
    skipped = 0

    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        parts = line.split()
        if parts[0] == 'v':
            v = _parse_vertex(parts)
            if v is None:
                skipped += 1
                logger.debug("line %d: skipping malformed vertex %r", lineno, line)
                continue
            vertices.append(v)
        elif parts[0] == 'f':
            tris = _parse_face(parts, len(vertices))
            if tris is None:
                skipped += 1
                logger.debug("line %d: skipping malformed face %r", lineno, line)
                continue
            triangles.extend(tris)

    if skipped:
        logger.warning("Skipped %d malformed OBJ record(s)", skipped)

    return Mesh(tuple(vertices), tuple(triangles))


def normalize(mesh: Mesh) -> Mesh:
    """
    Center the mesh's bounding box at the origin and scale it uniformly so
    its largest dimension is NORMALIZED_SIZE. Returns a new Mesh with
    ``bounds`` set; an empty mesh is returned unchanged.
    """
    vs = mesh.vertices
    if not vs:
        return mesh

    min_x = min(v.x for v in vs)
    min_y = min(v.y for v in vs)
    min_z = min(v.z for v in vs)
    max_x = max(v.x for v in vs)
    max_y = max(v.y for v in vs)
    max_z = max(v.z for v in vs)

    center = Vec3((min_x + max_x) / 2, (min_y + max_y) / 2, (min_z + max_z) / 2)
    max_dim = max(max_x - min_x, max_y - min_y, max_z - min_z) or 1.0
    k = NORMALIZED_SIZE / max_dim

    new_vs = tuple((v - center) * k for v in vs)
    bounds = Bounds(
        (Vec3(min_x, min_y, min_z) - center) * k,
        (Vec3(max_x, max_y, max_z) - center) * k,
    )
    return replace(mesh, vertices=new_vs, bounds=bounds)


def export_obj(mesh: Mesh, header: str = EXPORT_HEADER) -> str:
    """Serialize a mesh as OBJ text: header, ``v`` lines, then ``f`` lines."""
    lines = [header if header.startswith('#') else '# ' + header]
    for v in mesh.vertices:
        lines.append(f"v {v.x!r} {v.y!r} {v.z!r}")
    for tri in mesh.triangles:
        if len(tri) < 3:
            continue
        lines.append(f"f {tri[0] + 1} {tri[1] + 1} {tri[2] + 1}")
    return "\n".join(lines) + "\n"


def load_mesh(path) -> Mesh:
    """Read, parse and normalize an OBJ file. Raises MissingAssetError."""
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            text = f.read()
    except OSError as e:
        raise MissingAssetError(path, e.strerror or str(e)) from e

    mesh = normalize(parse_obj(text))
    logger.info("Loaded '%s': %d vertices, %d triangles",
                path, mesh.vertex_count, mesh.triangle_count)
    return mesh


def save_obj(mesh: Mesh, path, header: str = EXPORT_HEADER):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(export_obj(mesh, header))


def cube_mesh() -> Mesh:
    """Unit cube with outward-wound triangles, normalized."""
    vertices = [
        Vec3(-1, -1, -1), Vec3( 1, -1, -1), Vec3( 1,  1, -1), Vec3(-1,  1, -1),
        Vec3(-1, -1,  1), Vec3( 1, -1,  1), Vec3( 1,  1,  1), Vec3(-1,  1,  1),
    ]
    quads = [
        [3, 2, 1, 0],  # front (-z)
        [6, 7, 4, 5],  # back (+z)
        [7, 3, 0, 4],  # left (-x)
        [2, 6, 5, 1],  # right (+x)
        [7, 6, 2, 3],  # top (+y)
        [0, 1, 5, 4],  # bottom (-y)
    ]
    triangles = []
    for q in quads:
        triangles.extend(_fan(q))
    return normalize(Mesh(tuple(vertices), tuple(triangles)))
