"""
Brush half-space representation -> explicit polyhedron.

Vertices come from plane-plane-plane intersection, filtered against the full
face set; each face polygon is the set of vertices lying on its plane, sorted
by winding.  Nothing here is cached: callers recompute whenever the brush
changes.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from .brush import Face, MIN_FACES
from .plane_math import EPSILON, Vec3, centroid, distance, dot, inside_all, intersect_three
from .winding import sort_by_winding

logger = logging.getLogger(__name__)

# Minimum vertex count for a closed volume (tetrahedron).
MIN_VERTICES = 4

Polygon = List[int]
Edge = Tuple[int, int]


def compute_geometry(faces: Sequence[Face]) -> Tuple[List[Vec3], List[Polygon]]:
    """Derive vertices and per-face polygons from a face list.

    Returns:
        ``(vertices, face_polygons)`` where ``face_polygons[i]`` lists the
        vertex indices of face ``i`` in counter-clockwise order about its
        normal.  A polygon with fewer than three indices means that face
        bounds nothing; it is left unsorted.
    """
    vertices: List[Vec3] = []

    for a, b, c in combinations(faces, 3):
        point = intersect_three(a.plane, b.plane, c.plane)
        if point is None:
            continue
        # Must satisfy every face, not just the three that produced it
        if not inside_all(point, faces):
            continue
        if any(distance(v, point) < EPSILON for v in vertices):
            continue
        vertices.append(point)

    face_polygons: List[Polygon] = []
    for face in faces:
        n, d = face.plane.normal, face.plane.distance
        on_face = [vi for vi, v in enumerate(vertices) if abs(dot(n, v) - d) < EPSILON]
        if len(on_face) >= 3:
            on_face = sort_by_winding(vertices, on_face, n)
        face_polygons.append(on_face)

    return vertices, face_polygons


def is_solid(vertices: Sequence[Vec3]) -> bool:
    """True if a derived vertex set can enclose a volume."""
    return len(vertices) >= MIN_VERTICES


def bounds_volume(faces: Sequence[Face]) -> bool:
    """True if the faces still bound a closed volume."""
    vertices, _ = compute_geometry(faces)
    return is_solid(vertices)


def face_edges(face_polygons: Sequence[Sequence[int]]) -> List[Edge]:
    """Unique undirected edges, as (min, max) vertex index pairs, in first-seen order."""
    seen: Dict[Edge, None] = {}
    for polygon in face_polygons:
        if len(polygon) < 3:
            continue
        for i in range(len(polygon)):
            a, b = polygon[i], polygon[(i + 1) % len(polygon)]
            seen.setdefault((min(a, b), max(a, b)), None)
    return list(seen)


def face_centroid(vertices: Sequence[Vec3], polygon: Sequence[int]) -> Vec3:
    return centroid(vertices[i] for i in polygon)


def clean_degenerate(faces: Sequence[Face]) -> List[Face]:
    """Drop faces that contribute no polygon to the derived solid."""
    _, polygons = compute_geometry(faces)
    kept = [face for face, poly in zip(faces, polygons) if len(poly) >= 3]
    if len(kept) != len(faces):
        logger.debug("Dropped %d degenerate face(s)", len(faces) - len(kept))
    return kept


def remove_duplicate_planes(faces: Sequence[Face]) -> List[Face]:
    """Drop faces whose plane repeats an earlier face's plane; the first one is kept."""
    kept: List[Face] = []
    for face in faces:
        n, d = face.plane.normal, face.plane.distance
        if any(dot(k.plane.normal, n) > 1.0 - EPSILON and abs(k.plane.distance - d) < EPSILON
               for k in kept):
            continue
        kept.append(face)
    if len(kept) != len(faces):
        logger.debug("Dropped %d duplicate plane(s)", len(faces) - len(kept))
    return kept


def is_valid_solid(faces: Sequence[Face]) -> bool:
    """Closed volume with at least MIN_FACES faces that each produce a polygon."""
    vertices, polygons = compute_geometry(faces)
    if not is_solid(vertices):
        return False
    return sum(1 for p in polygons if len(p) >= 3) >= MIN_FACES
