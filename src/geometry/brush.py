"""
Brush data model.

A brush is a convex solid stored only as its ordered list of bounding faces.
Vertices, polygons and edges are derived from the planes on demand (see
``polyhedron.compute_geometry``) and never stored here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from .plane_math import Plane, Vec2, Vec3, cross, dot, normalize, scale, sub

# Minimum face count for a closed solid (tetrahedron).
MIN_FACES = 4


@dataclass(frozen=True)
class Face:
    """One bounding plane of a brush plus its surface parameters.

    UV fields are per-face paraxial projection parameters; ``texture_path``
    overrides ``material_index`` when set.
    """
    plane: Plane
    material_index: int = 0
    texture_path: Optional[str] = None
    uv_offset: Vec2 = (0.0, 0.0)
    uv_scale: Vec2 = (1.0, 1.0)
    uv_rotation: float = 0.0

    def with_plane(self, plane: Plane) -> "Face":
        """Same surface parameters on a different plane."""
        return replace(self, plane=plane)

    def with_metadata_from(self, other: "Face") -> "Face":
        """Keep this plane, take material/texture/UV from ``other``."""
        return replace(other, plane=self.plane)


@dataclass
class Brush:
    """
    Convex solid defined by the intersection of its face half-spaces.

    Face normals point outward from the solid.  A valid brush has at least
    four faces bounding a non-degenerate volume.
    """
    faces: List[Face] = field(default_factory=list)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    @property
    def planes(self) -> List[Plane]:
        return [f.plane for f in self.faces]

    def copy(self) -> "Brush":
        """Snapshot for undo/redo.  Faces are immutable so a new list suffices."""
        return Brush(faces=list(self.faces))

    def translated(self, offset: Vec3) -> "Brush":
        return Brush(faces=[f.with_plane(f.plane.translated(offset)) for f in self.faces])

    def transformed(self, rotation: Sequence[Sequence[float]], translation: Vec3) -> "Brush":
        return Brush(faces=[f.with_plane(f.plane.transformed(rotation, translation))
                            for f in self.faces])

    # ---------------------------------------------------------------
    # Constructors
    # ---------------------------------------------------------------

    @classmethod
    def cuboid(cls, half_x: float, half_y: float, half_z: float) -> "Brush":
        """Axis-aligned box centred on the origin: faces +X, -X, +Y, -Y, +Z, -Z."""
        if half_x <= 0 or half_y <= 0 or half_z <= 0:
            raise ValueError(
                f"Cuboid half extents must be positive, got ({half_x}, {half_y}, {half_z})")
        return cls(faces=[
            Face(Plane((1.0, 0.0, 0.0), half_x)),
            Face(Plane((-1.0, 0.0, 0.0), half_x)),
            Face(Plane((0.0, 1.0, 0.0), half_y)),
            Face(Plane((0.0, -1.0, 0.0), half_y)),
            Face(Plane((0.0, 0.0, 1.0), half_z)),
            Face(Plane((0.0, 0.0, -1.0), half_z)),
        ])

    @classmethod
    def from_box(cls, min_point: Vec3, max_point: Vec3) -> "Brush":
        """Axis-aligned box between two corners, in the same face order as :meth:`cuboid`."""
        x1, y1, z1 = (min(a, b) for a, b in zip(min_point, max_point))
        x2, y2, z2 = (max(a, b) for a, b in zip(min_point, max_point))
        # Guard against zero-volume boxes which produce coincident planes
        if x2 - x1 <= 0 or y2 - y1 <= 0 or z2 - z1 <= 0:
            raise ValueError(f"Degenerate box: {min_point} -> {max_point}")
        return cls(faces=[
            Face(Plane((1.0, 0.0, 0.0), x2)),
            Face(Plane((-1.0, 0.0, 0.0), -x1)),
            Face(Plane((0.0, 1.0, 0.0), y2)),
            Face(Plane((0.0, -1.0, 0.0), -y1)),
            Face(Plane((0.0, 0.0, 1.0), z2)),
            Face(Plane((0.0, 0.0, -1.0), -z1)),
        ])

    @classmethod
    def sphere(cls, radius: float) -> "Brush":
        """Icosahedron approximation of a sphere: 20 triangular faces."""
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        verts = [scale(normalize(v), radius) for v in _ICOSAHEDRON_VERTICES]
        faces = []
        for a, b, c in _ICOSAHEDRON_TRIANGLES:
            normal = normalize(cross(sub(verts[b], verts[a]), sub(verts[c], verts[a])))
            dist = dot(normal, verts[a])
            # Ensure outward-facing
            if dist < 0.0:
                normal = scale(normal, -1.0)
                dist = -dist
            faces.append(Face(Plane(normal, dist)))
        return cls(faces=faces)


_PHI = (1.0 + math.sqrt(5.0)) / 2.0

_ICOSAHEDRON_VERTICES: Tuple[Vec3, ...] = (
    (-1.0, _PHI, 0.0),
    (1.0, _PHI, 0.0),
    (-1.0, -_PHI, 0.0),
    (1.0, -_PHI, 0.0),
    (0.0, -1.0, _PHI),
    (0.0, 1.0, _PHI),
    (0.0, -1.0, -_PHI),
    (0.0, 1.0, -_PHI),
    (_PHI, 0.0, -1.0),
    (_PHI, 0.0, 1.0),
    (-_PHI, 0.0, -1.0),
    (-_PHI, 0.0, 1.0),
)

_ICOSAHEDRON_TRIANGLES: Tuple[Tuple[int, int, int], ...] = (
    (0, 11, 5), (0, 5, 1), (0, 1, 7), (0, 7, 10), (0, 10, 11),
    (1, 5, 9), (5, 11, 4), (11, 10, 2), (10, 7, 6), (7, 1, 8),
    (3, 9, 4), (3, 4, 2), (3, 2, 6), (3, 6, 8), (3, 8, 9),
    (4, 9, 5), (2, 4, 11), (6, 2, 10), (8, 6, 7), (9, 8, 1),
)
