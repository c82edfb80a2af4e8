"""
2D point algebra and line helpers.

Vectors are immutable values: every operation returns a new Vector, so a
point can be shared between cells, edges and descriptors without cloning.
"""

import math
from dataclasses import dataclass
from typing import Optional, Protocol

EPSILON = 1e-9


class PointLike(Protocol):
    x: float
    y: float


@dataclass(frozen=True)
class Vector:
    """A 2D point or direction."""

    x: float
    y: float

    @classmethod
    def from_coords(cls, x: float, y: float) -> "Vector":
        return cls(float(x), float(y))

    @classmethod
    def from_point(cls, p: PointLike) -> "Vector":
        return cls(float(p.x), float(p.y))

    @classmethod
    def zero(cls) -> "Vector":
        return cls(0.0, 0.0)

    @classmethod
    def random(cls, prng) -> "Vector":
        """Random vector in the unit square."""
        return cls(prng.random(), prng.random())

    def __add__(self, other: PointLike) -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: PointLike) -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vector":
        return Vector(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def add(self, other: PointLike) -> "Vector":
        return self + other

    def subtract(self, other: PointLike) -> "Vector":
        return self - other

    def multiply(self, k: float) -> "Vector":
        return self * k

    def clone(self) -> "Vector":
        return Vector(self.x, self.y)

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def angle_to(self, other: PointLike) -> float:
        """Signed angle from this vector to ``other``, wrapped to [-pi, pi]."""
        angle = math.atan2(other.y, other.x) - math.atan2(self.y, self.x)
        if angle > math.pi:
            angle -= 2 * math.pi
        if angle < -math.pi:
            angle += 2 * math.pi
        return angle

    def distance_squared_to(self, other: PointLike) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: PointLike) -> float:
        return math.sqrt(self.distance_squared_to(other))

    def dot(self, other: PointLike) -> float:
        return self.x * other.x + self.y * other.y

    def is_close(self, other: PointLike, eps: float = EPSILON) -> bool:
        """True when both coordinates differ by less than ``eps``."""
        return abs(self.x - other.x) < eps and abs(self.y - other.y) < eps

    def is_equal(self, other: PointLike) -> bool:
        return self.x == other.x and self.y == other.y

    def is_parallel(self, other: "Vector", eps: float = EPSILON) -> bool:
        return self.modulus() * other.modulus() - abs(self.dot(other)) < eps

    def is_perpendicular(self, other: PointLike, eps: float = EPSILON) -> bool:
        return abs(self.dot(other)) < eps

    def modulus(self) -> float:
        return math.hypot(self.x, self.y)

    def modulus_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> "Vector":
        """Unit vector in the same direction; the zero vector stays zero."""
        mod = self.modulus()
        if mod == 0:
            return Vector.zero()
        return Vector(self.x / mod, self.y / mod)

    def project_onto(self, other: "Vector") -> "Vector":
        u = other.normalize()
        return u * self.dot(u)

    def rotate(self, angle: float) -> "Vector":
        cos = math.cos(angle)
        sin = math.sin(angle)
        return Vector(self.x * cos - self.y * sin, self.x * sin + self.y * cos)


@dataclass(frozen=True)
class Line:
    """A line through, or segment between, two points."""

    p1: Vector
    p2: Vector

    @classmethod
    def from_point_and_angle(cls, p: PointLike, angle: float) -> "Line":
        return cls(Vector.from_point(p), Vector(p.x + math.cos(angle), p.y + math.sin(angle)))

    @classmethod
    def from_points(cls, p1: PointLike, p2: PointLike) -> "Line":
        return cls(Vector.from_point(p1), Vector.from_point(p2))

    @classmethod
    def from_vector(cls, v: Vector) -> "Line":
        return cls(Vector.zero(), v)

    @classmethod
    def from_vectors(cls, v1: Vector, v2: Vector) -> "Line":
        return cls(v1, v2)

    def distance_to(self, p: PointLike) -> float:
        """Distance from ``p`` to the infinite line."""
        dx = self.p2.x - self.p1.x
        dy = self.p2.y - self.p1.y
        length = math.hypot(dx, dy)
        if length == 0:
            return self.p1.distance_to(p)
        return abs(dx * (self.p1.y - p.y) - dy * (self.p1.x - p.x)) / length

    def distance_to_segment(self, p: PointLike) -> float:
        """Distance from ``p`` to the closest point of the segment."""
        v = Vector.from_point(p)
        l2 = self.p1.distance_squared_to(self.p2)
        if l2 == 0:
            return v.distance_to(self.p1)
        delta = self.parallel_vector()
        t = max(0.0, min(1.0, (v - self.p1).dot(delta) / l2))
        return v.distance_to(self.p1 + delta * t)

    def length(self) -> float:
        return self.p1.distance_to(self.p2)

    def intersection(self, other: "Line") -> Optional[Vector]:
        """Intersection of the two infinite lines, None when parallel."""
        x1, y1 = self.p1
        x2, y2 = self.p2
        x3, y3 = other.p1
        x4, y4 = other.p2

        dx12 = x1 - x2
        dy12 = y1 - y2
        dx34 = x3 - x4
        dy34 = y3 - y4

        denom = dx12 * dy34 - dy12 * dx34
        if denom == 0:
            return None

        c12 = x1 * y2 - y1 * x2
        c34 = x3 * y4 - y3 * x4
        return Vector((c12 * dx34 - dx12 * c34) / denom, (c12 * dy34 - dy12 * c34) / denom)

    def midpoint(self) -> Vector:
        return Vector(0.5 * (self.p1.x + self.p2.x), 0.5 * (self.p1.y + self.p2.y))

    def normal_left(self) -> Vector:
        return Vector(self.p1.y - self.p2.y, self.p2.x - self.p1.x)

    def normal_right(self) -> Vector:
        return Vector(self.p2.y - self.p1.y, self.p1.x - self.p2.x)

    def parallel_vector(self) -> Vector:
        return self.p2 - self.p1

    def segment_intersection(self, other: "Line") -> Optional[Vector]:
        """Line intersection restricted to the x-span of this segment."""
        point = self.intersection(other)
        if point is None:
            return None
        x_min, x_max = sorted((self.p1.x, self.p2.x))
        return point if x_min <= point.x <= x_max else None

    def translate(self, offset: PointLike) -> "Line":
        return Line(self.p1 + offset, self.p2 + offset)
