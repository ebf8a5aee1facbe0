"""
Rebuild a brush plane set from an arbitrary point cloud.

Used whenever an edit displaces vertices freely (vertex/edge drag, vertex/edge
deletion).  The convex hull is triangulated by qhull, coplanar triangles are
merged back into polygonal faces, and each new face inherits the surface
parameters of the best-matching old face.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from .brush import Brush, Face, MIN_FACES
from .plane_math import EPSILON, Plane, Vec3, cross, dot, length, normalize, sub
from .winding import sort_by_winding

logger = logging.getLogger(__name__)

# Weight of normal similarity relative to one shared vertex when matching faces.
NORMAL_MATCH_WEIGHT = 0.1


@dataclass
class HullFace:
    """A merged hull face: outward plane + winding-ordered vertex indices."""
    normal: Vec3
    distance: float
    vertex_indices: List[int] = field(default_factory=list)

    @property
    def plane(self) -> Plane:
        return Plane(self.normal, self.distance)


def merge_hull_triangles(vertices: Sequence[Vec3],
                         triangles: Sequence[Tuple[int, int, int]]) -> List[HullFace]:
    """Group outward-wound hull triangles into coplanar polygon faces.

    Triangles whose normal has (near) zero length are skipped.  Two triangles
    share a face when their normals agree to within EPSILON and their plane
    distances differ by less than EPSILON.
    """
    groups: List[Tuple[Vec3, float, List[int]]] = []

    for tri in triangles:
        a, b, c = vertices[tri[0]], vertices[tri[1]], vertices[tri[2]]
        normal = normalize(cross(sub(b, a), sub(c, a)))
        if length(normal) < 0.5:
            continue  # degenerate triangle
        dist = dot(normal, a)

        for gn, gd, gverts in groups:
            if dot(gn, normal) > 1.0 - EPSILON and abs(dist - gd) < EPSILON:
                for vi in tri:
                    if vi not in gverts:
                        gverts.append(vi)
                break
        else:
            groups.append((normal, dist, list(dict.fromkeys(tri))))

    return [
        HullFace(normal=n, distance=d, vertex_indices=sort_by_winding(vertices, verts, n))
        for n, d, verts in groups
    ]


def _convex_hull(points: Sequence[Vec3]) -> Optional[Tuple[List[Vec3], List[Tuple[int, int, int]]]]:
    """Hull vertex positions + outward-wound triangles, or None if qhull rejects the input."""
    arr = np.asarray(points, dtype=float)
    try:
        hull = ConvexHull(arr)
    except (QhullError, ValueError) as e:
        logger.debug("Convex hull rejected: %s", e)
        return None

    # Compact to hull vertices only; simplices index into the input array
    vertex_map = {int(old): new for new, old in enumerate(hull.vertices)}
    positions = [tuple(float(c) for c in arr[i]) for i in hull.vertices]

    triangles: List[Tuple[int, int, int]] = []
    for simplex, equation in zip(hull.simplices, hull.equations):
        a, b, c = (vertex_map[int(i)] for i in simplex)
        # qhull does not orient simplices; its facet equations are outward
        tri_normal = cross(sub(positions[b], positions[a]), sub(positions[c], positions[a]))
        if dot(tri_normal, (float(equation[0]), float(equation[1]), float(equation[2]))) < 0.0:
            b, c = c, b
        triangles.append((a, b, c))
    return positions, triangles


def _nearest_input(point: Vec3, inputs: Sequence[Vec3]) -> int:
    best_i = 0
    best_d = float("inf")
    for i, p in enumerate(inputs):
        d = sub(p, point)
        d2 = dot(d, d)
        if d2 < best_d:
            best_d = d2
            best_i = i
    return best_i


def _best_old_face(normal: Vec3, input_verts: Set[int], old_brush: Brush,
                   old_polygons: Sequence[Sequence[int]]) -> Optional[Face]:
    """Old face with the greatest overlap + normal similarity score.

    Strictly-greater comparison: on a tie the earliest old face wins.  Some
    face is always returned when the old brush has any, even with zero overlap.
    """
    best: Optional[Face] = None
    best_score = -1.0
    for old_face, old_polygon in zip(old_brush.faces, old_polygons):
        overlap = len(input_verts.intersection(old_polygon))
        score = overlap + NORMAL_MATCH_WEIGHT * dot(normal, old_face.plane.normal)
        if score > best_score:
            best_score = score
            best = old_face
    return best


def rebuild_from_points(old_brush: Brush,
                        old_polygons: Sequence[Sequence[int]],
                        new_points: Sequence[Vec3]) -> Optional[Brush]:
    """Rebuild a brush as the convex hull of ``new_points``.

    ``old_polygons`` are the old brush's face polygons, indexing the same
    point numbering as ``new_points`` (the editor passes the old vertex list
    with some entries moved).  Returns None when the points cannot form a
    solid; the caller must then leave the old brush untouched.
    """
    if len(new_points) < 4:
        logger.debug("Rebuild rejected: %d points", len(new_points))
        return None

    result = _convex_hull(new_points)
    if result is None:
        return None
    hull_positions, hull_triangles = result
    if len(hull_positions) < 4 or not hull_triangles:
        logger.debug("Rebuild rejected: hull has %d vertices", len(hull_positions))
        return None

    hull_faces = merge_hull_triangles(hull_positions, hull_triangles)
    if len(hull_faces) < MIN_FACES:
        logger.debug("Rebuild rejected: %d merged faces", len(hull_faces))
        return None

    # Hull numbering is unrelated to the input numbering; match by position
    hull_to_input = [_nearest_input(hp, new_points) for hp in hull_positions]

    faces: List[Face] = []
    for hull_face in hull_faces:
        input_verts = {hull_to_input[hi] for hi in hull_face.vertex_indices}
        old_face = _best_old_face(hull_face.normal, input_verts, old_brush, old_polygons)
        new_face = Face(hull_face.plane)
        if old_face is not None:
            new_face = new_face.with_metadata_from(old_face)
        faces.append(new_face)

    return Brush(faces=faces)
