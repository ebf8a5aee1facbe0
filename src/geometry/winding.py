"""
Face winding and tangent basis.

Both winding and UV projection need the same 2D parameterisation of a face,
so the basis is derived only from the face normal.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .plane_math import Vec3, centroid, cross, dot, normalize, sub

_Y_AXIS: Vec3 = (0.0, 1.0, 0.0)
_Z_AXIS: Vec3 = (0.0, 0.0, 1.0)


def tangent_axes(normal: Vec3) -> Tuple[Vec3, Vec3]:
    """Stable (u, v) basis on the plane with ``normal``.

    World up is +Y.  A mostly-vertical normal would be near-parallel to Y, so
    Z is used as the reference instead.  ``cross(u, v) == normal``.
    """
    ax, ay, az = abs(normal[0]), abs(normal[1]), abs(normal[2])
    up = _Z_AXIS if (ay >= ax and ay >= az) else _Y_AXIS
    u = normalize(cross(normal, up))
    v = normalize(cross(normal, u))
    return u, v


def sort_by_winding(vertices: Sequence[Vec3], indices: Sequence[int], normal: Vec3) -> List[int]:
    """Order vertex indices counter-clockwise around ``normal``.

    Angles are measured about the centroid of the candidate vertices in the
    face's tangent basis.  Fewer than three indices are returned as given.
    """
    if len(indices) < 3:
        return list(indices)

    center = centroid(vertices[i] for i in indices)
    u_axis, v_axis = tangent_axes(normal)

    def angle(i: int) -> float:
        d = sub(vertices[i], center)
        return math.atan2(dot(d, v_axis), dot(d, u_axis))

    return sorted(indices, key=angle)


def triangulate_fan(indices: Sequence[int]) -> List[Tuple[int, int, int]]:
    """Fan triangulation from the first index.  Valid for convex polygons."""
    if len(indices) < 3:
        return []
    return [(indices[0], indices[i], indices[i + 1]) for i in range(1, len(indices) - 1)]
