"""
Paraxial UV projection for brush faces.

Projects face vertices onto the face tangent basis, then applies the face's
rotation, scale and offset.  Planar only: brush faces are always flat.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from .plane_math import Vec2, Vec3, dot
from .winding import tangent_axes

# Scale values below this are clamped to avoid blowing up the division.
MIN_UV_SCALE = 0.001


def face_uvs(
    vertices: Sequence[Vec3],
    indices: Sequence[int],
    normal: Vec3,
    offset: Vec2 = (0.0, 0.0),
    scale: Vec2 = (1.0, 1.0),
    rotation: float = 0.0,
) -> List[Vec2]:
    """Compute per-vertex UVs for one face.

    Args:
        vertices: Brush vertex positions
        indices: The face polygon (indices into ``vertices``)
        normal: Face plane normal
        offset: UV offset added after scaling
        scale: UV scale (world units per texture unit), clamped to MIN_UV_SCALE
        rotation: Rotation in radians applied before scaling

    Returns:
        One (u, v) per entry of ``indices``, in the same order.
    """
    u_axis, v_axis = tangent_axes(normal)
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)
    scale_u = max(scale[0], MIN_UV_SCALE)
    scale_v = max(scale[1], MIN_UV_SCALE)

    uvs: List[Vec2] = []
    for vi in indices:
        pos = vertices[vi]
        u = dot(pos, u_axis)
        v = dot(pos, v_axis)
        ru = u * cos_r - v * sin_r
        rv = u * sin_r + v * cos_r
        uvs.append((ru / scale_u + offset[0], rv / scale_v + offset[1]))
    return uvs
