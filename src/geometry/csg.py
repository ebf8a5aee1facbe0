"""
Constructive subtraction between convex plane sets.

Subtraction splits the target by each cutter face in turn: the part outside
that face is a finished fragment, the part inside carries on to the next
cutter face, and whatever is still inside after the last face is consumed by
the cutter.  Every fragment is convex because it is the target plus extra
half-spaces.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .brush import Brush, Face, MIN_FACES
from .plane_math import Vec3, centroid, scale
from .polyhedron import (
    clean_degenerate, compute_geometry, is_solid, is_valid_solid, remove_duplicate_planes,
)

logger = logging.getLogger(__name__)

FaceSet = List[Face]


def faces_to_world(faces: Sequence[Face], rotation: Sequence[Sequence[float]],
                   translation: Vec3) -> FaceSet:
    """Transform face planes from brush-local space into world space."""
    return [f.with_plane(f.plane.transformed(rotation, translation)) for f in faces]


def intersects(a_faces: Sequence[Face], b_faces: Sequence[Face]) -> bool:
    """True if two convex volumes share interior volume.

    Volumes that only touch along a face, edge or vertex do not intersect:
    their combined planes bound a flat or empty region.
    """
    return is_valid_solid(list(a_faces) + list(b_faces))


def subtract(target_faces: Sequence[Face], cutter_faces: Sequence[Face]) -> List[FaceSet]:
    """Return the fragments of ``target - cutter``.

    Both face sets must be in the same space.  No overlap gives back the
    target unchanged as the only fragment; a target fully inside the cutter
    gives no fragments.  Appended cutter planes carry default surface
    parameters.
    """
    if not intersects(target_faces, cutter_faces):
        return [list(target_faces)]

    fragments: List[FaceSet] = []
    remaining: List[FaceSet] = [list(target_faces)]

    for cutter_face in cutter_faces:
        plane = cutter_face.plane
        next_remaining: List[FaceSet] = []

        for fragment in remaining:
            # Outside half: the part beyond this cutter face
            outside = fragment + [Face(plane.flipped())]
            # A cutter face coplanar with a target face leaves a zero-thickness slab
            if is_valid_solid(outside):
                fragments.append(outside)

            # Inside half: still within this cutter face, keep cutting
            inside = fragment + [Face(plane)]
            if is_valid_solid(inside):
                next_remaining.append(inside)

        remaining = next_remaining

    logger.debug("Subtract produced %d fragment(s), discarded %d inside piece(s)",
                 len(fragments), len(remaining))
    return fragments


def recenter(faces: Sequence[Face]) -> Optional[Tuple[FaceSet, Vec3]]:
    """Move a fragment so the centroid of its vertices becomes the local origin.

    Returns:
        ``(local_faces, centroid)`` with degenerate and repeated faces
        removed, or None if the fragment does not survive as a solid with at
        least MIN_FACES faces.
    """
    vertices, _ = compute_geometry(faces)
    if not is_solid(vertices):
        return None
    center = centroid(vertices)
    offset = scale(center, -1.0)
    local = [f.with_plane(f.plane.translated(offset)) for f in faces]
    clean = clean_degenerate(remove_duplicate_planes(local))
    if len(clean) < MIN_FACES:
        return None
    return clean, center


def cutter_faces_from_box(min_point: Vec3, max_point: Vec3) -> FaceSet:
    """Six world-space cutter faces for a drawn cuboid."""
    return list(Brush.from_box(min_point, max_point).faces)
