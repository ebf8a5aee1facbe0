"""
Plane algebra for brush faces.

Primary representation: unit normal + distance from origin, describing the
half-space ``{p : dot(normal, p) <= distance}``.  A brush volume is the
intersection of all of its face half-spaces.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .brush import Face

Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]

# Shared tolerance for determinant, containment, plane membership,
# vertex dedup and coplanarity tests.
EPSILON = 1e-4


def cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def scale(v: Vec3, s: float) -> Vec3:
    return (v[0] * s, v[1] * s, v[2] * s)


def length(v: Vec3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: Vec3) -> Vec3:
    """Unit vector along ``v``, or the zero vector when ``v`` has no length."""
    ln = length(v)
    if ln < 1e-12:
        return (0.0, 0.0, 0.0)
    return (v[0] / ln, v[1] / ln, v[2] / ln)


def distance(a: Vec3, b: Vec3) -> float:
    return length(sub(a, b))


def centroid(points: Iterable[Vec3]) -> Vec3:
    pts = list(points)
    if not pts:
        return (0.0, 0.0, 0.0)
    n = len(pts)
    return (
        sum(p[0] for p in pts) / n,
        sum(p[1] for p in pts) / n,
        sum(p[2] for p in pts) / n,
    )


def rotate(rotation: Sequence[Sequence[float]], v: Vec3) -> Vec3:
    """Apply a row-major 3x3 rotation matrix to ``v``."""
    return (
        rotation[0][0] * v[0] + rotation[0][1] * v[1] + rotation[0][2] * v[2],
        rotation[1][0] * v[0] + rotation[1][1] * v[1] + rotation[1][2] * v[2],
        rotation[2][0] * v[0] + rotation[2][1] * v[1] + rotation[2][2] * v[2],
    )


@dataclass(frozen=True)
class Plane:
    """A bounding half-space ``dot(normal, p) <= distance``.

    ``normal`` must be unit length for distance comparisons to mean anything;
    use :meth:`from_normal_distance` or :meth:`from_three_points` when the
    input is not already normalized.
    """

    normal: Vec3 = (0.0, 1.0, 0.0)
    distance: float = 0.0

    # ---------------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------------

    @classmethod
    def from_three_points(cls, p1: Vec3, p2: Vec3, p3: Vec3) -> "Plane":
        """Plane through three points; the normal follows CCW winding."""
        normal = normalize(cross(sub(p2, p1), sub(p3, p1)))
        return cls(normal=normal, distance=dot(normal, p1))

    @classmethod
    def from_normal_distance(cls, normal: Vec3, dist: float) -> "Plane":
        """Build a plane from a possibly non-unit normal.

        The distance is rescaled together with the normal so the described
        half-space is unchanged.
        """
        ln = length(normal)
        if ln < 1e-12:
            return cls(normal=(0.0, 0.0, 0.0), distance=dist)
        return cls(normal=scale(normal, 1.0 / ln), distance=dist / ln)

    # ---------------------------------------------------------------
    # Derived planes
    # ---------------------------------------------------------------

    def flipped(self) -> "Plane":
        """The complementary half-space (shares the boundary plane)."""
        return Plane(normal=scale(self.normal, -1.0), distance=-self.distance)

    def translated(self, offset: Vec3) -> "Plane":
        return Plane(normal=self.normal, distance=self.distance + dot(self.normal, offset))

    def transformed(self, rotation: Sequence[Sequence[float]], translation: Vec3) -> "Plane":
        """Rotate then translate the plane (local space -> parent space)."""
        world_normal = normalize(rotate(rotation, self.normal))
        return Plane(normal=world_normal, distance=self.distance + dot(world_normal, translation))

    def signed_distance(self, point: Vec3) -> float:
        return dot(self.normal, point) - self.distance

    def contains(self, point: Vec3) -> bool:
        """True if ``point`` lies on the plane within EPSILON."""
        return abs(self.signed_distance(point)) < EPSILON

    def to_normal_distance(self) -> Tuple[Vec3, float]:
        return (self.normal, self.distance)


# ---------------------------------------------------------------------------
# Plane algebra
# ---------------------------------------------------------------------------

def intersect_three(p1: Plane, p2: Plane, p3: Plane) -> Optional[Vec3]:
    """Point shared by three planes, or None if they have no unique point."""
    n1, n2, n3 = p1.normal, p2.normal, p3.normal
    c23 = cross(n2, n3)
    det = dot(n1, c23)
    if abs(det) < EPSILON:
        return None
    c31 = cross(n3, n1)
    c12 = cross(n1, n2)
    d1, d2, d3 = p1.distance, p2.distance, p3.distance
    return (
        (c23[0] * d1 + c31[0] * d2 + c12[0] * d3) / det,
        (c23[1] * d1 + c31[1] * d2 + c12[1] * d3) / det,
        (c23[2] * d1 + c31[2] * d2 + c12[2] * d3) / det,
    )


def inside_all(point: Vec3, faces: Iterable["Face"]) -> bool:
    """True if ``point`` is inside or on the boundary of every face half-space.

    The +EPSILON slack keeps points that sit exactly on a plane (every hull
    vertex does) from being rejected by rounding noise.
    """
    for face in faces:
        plane = face.plane
        if dot(plane.normal, point) > plane.distance + EPSILON:
            return False
    return True
