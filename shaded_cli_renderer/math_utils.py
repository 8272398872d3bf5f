#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math


class Vec3:
    """Immutable 3-component vector."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float, y: float, z: float):
        object.__setattr__(self, 'x', float(x))
        object.__setattr__(self, 'y', float(y))
        object.__setattr__(self, 'z', float(z))

    def __setattr__(self, name, value):
        raise AttributeError("Vec3 is immutable")

    def __repr__(self):
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __eq__(self, other):
        if isinstance(other, Vec3):
            return self.x == other.x and self.y == other.y and self.z == other.z
        return NotImplemented

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> 'Vec3':
        m = self.length()
        # Degenerate input yields a zero vector (zero lighting contribution)
        if m <= 1e-12:
            return ZERO
        return self * (1.0 / m)

    @classmethod
    def of(cls, value) -> 'Vec3':
        """Coerce a Vec3 or any 3-sequence to a Vec3."""
        if isinstance(value, Vec3):
            return value
        x, y, z = value
        return cls(x, y, z)


ZERO = Vec3(0.0, 0.0, 0.0)
ONE = Vec3(1.0, 1.0, 1.0)


# Functional spellings used by the pipeline modules.

def add(a: Vec3, b: Vec3) -> Vec3:
    return a + b


def sub(a: Vec3, b: Vec3) -> Vec3:
    return a - b


def scale(a: Vec3, s: float) -> Vec3:
    return a * s


def dot(a: Vec3, b: Vec3) -> float:
    return a.dot(b)


def cross(a: Vec3, b: Vec3) -> Vec3:
    return a.cross(b)


def length(a: Vec3) -> float:
    return a.length()


def normalize(a: Vec3) -> Vec3:
    return a.normalize()


def centroid(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    return Vec3((a.x + b.x + c.x) / 3.0,
                (a.y + b.y + c.y) / 3.0,
                (a.z + b.z + c.z) / 3.0)


def rotate_x(p: Vec3, angle: float) -> Vec3:
    """Rotate about the X axis (in the y/z plane)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return Vec3(p.x, p.y * c - p.z * s, p.y * s + p.z * c)


def rotate_y(p: Vec3, angle: float) -> Vec3:
    """Rotate about the Y axis (in the x/z plane)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return Vec3(p.x * c - p.z * s, p.y, p.x * s + p.z * c)


def rotate_z(p: Vec3, angle: float) -> Vec3:
    """Rotate about the Z axis (in the x/y plane)."""
    c = math.cos(angle)
    s = math.sin(angle)
    return Vec3(p.x * c - p.y * s, p.x * s + p.y * c, p.z)
