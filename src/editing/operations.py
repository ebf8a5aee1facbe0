"""
Brush edit operations used by the interactive tools.

Each operation takes a brush value and returns a new one, or None when the
edit would leave an invalid solid.  None means "no effect": the caller keeps
its current brush and records nothing in the undo history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from brush_editor.geometry.brush import Brush, Face, MIN_FACES
from brush_editor.geometry.csg import intersects, recenter, subtract
from brush_editor.geometry.hull import rebuild_from_points
from brush_editor.geometry.plane_math import (
    EPSILON, Plane, Vec3, add, cross, dot, length, normalize, scale, sub,
)
from brush_editor.geometry.polyhedron import (
    bounds_volume, clean_degenerate, compute_geometry, face_centroid, face_edges,
    is_valid_solid, remove_duplicate_planes,
)

from .commands import AddBrushCommand, SubtractBrushesCommand
from .document import BrushDocument, PlacedBrush

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


# ---------------------------------------------------------------------------
# Face edits
# ---------------------------------------------------------------------------

def move_faces(brush: Brush, face_indices: Iterable[int], amount: float) -> Optional[Brush]:
    """Slide the selected faces along their normals by ``amount``."""
    selected = {i for i in face_indices if 0 <= i < len(brush.faces)}
    if not selected:
        return None
    faces = [
        f.with_plane(Plane(f.plane.normal, f.plane.distance + amount)) if i in selected else f
        for i, f in enumerate(brush.faces)
    ]
    if not bounds_volume(faces):
        logger.debug("Face move by %.4f collapses the brush", amount)
        return None
    return Brush(faces=faces)


def remove_faces(brush: Brush, face_indices: Iterable[int]) -> Optional[Brush]:
    """Delete faces outright.  Rejected below MIN_FACES or if the solid opens up."""
    remove = set(face_indices)
    faces = [f for i, f in enumerate(brush.faces) if i not in remove]
    if len(faces) == len(brush.faces) or len(faces) < MIN_FACES:
        return None
    if not is_valid_solid(faces):
        logger.debug("Removing faces %s leaves an open brush", sorted(remove))
        return None
    return Brush(faces=faces)


# ---------------------------------------------------------------------------
# Vertex / edge edits (convex hull rebuild)
# ---------------------------------------------------------------------------

def move_vertices(brush: Brush, vertex_indices: Iterable[int], delta: Vec3) -> Optional[Brush]:
    """Displace derived vertices by ``delta`` and rebuild the plane set."""
    vertices, polygons = compute_geometry(brush.faces)
    selected = {i for i in vertex_indices if 0 <= i < len(vertices)}
    if not selected:
        return None
    moved = [add(v, delta) if i in selected else v for i, v in enumerate(vertices)]
    return rebuild_from_points(brush, polygons, moved)


def move_edges(brush: Brush, edges: Iterable[Edge], delta: Vec3) -> Optional[Brush]:
    """Displace both endpoints of each selected edge."""
    return move_vertices(brush, _edge_vertices(edges), delta)


def _reindex_polygons(polygons: Sequence[Sequence[int]], keep: Sequence[int]) -> List[List[int]]:
    """Rewrite polygons into the numbering of the kept vertices, dropping removed ones."""
    remap: Dict[int, int] = {old: new for new, old in enumerate(keep)}
    return [[remap[i] for i in poly if i in remap] for poly in polygons]


def remove_vertices(brush: Brush, vertex_indices: Iterable[int]) -> Optional[Brush]:
    """Drop vertices and rebuild the hull of what remains."""
    vertices, polygons = compute_geometry(brush.faces)
    remove = set(vertex_indices)
    keep = [i for i in range(len(vertices)) if i not in remove]
    if len(keep) == len(vertices):
        return None
    if len(keep) < 4:
        logger.debug("Vertex removal leaves %d vertices", len(keep))
        return None
    remaining = [vertices[i] for i in keep]
    return rebuild_from_points(brush, _reindex_polygons(polygons, keep), remaining)


def remove_edges(brush: Brush, edges: Iterable[Edge]) -> Optional[Brush]:
    """Drop both endpoints of each selected edge."""
    return remove_vertices(brush, _edge_vertices(edges))


def _edge_vertices(edges: Iterable[Edge]) -> Set[int]:
    result: Set[int] = set()
    for a, b in edges:
        result.add(a)
        result.add(b)
    return result


def brush_edges(brush: Brush) -> List[Edge]:
    """Derived edges of a brush as (min, max) vertex index pairs."""
    _, polygons = compute_geometry(brush.faces)
    return face_edges(polygons)


def split_points(brush: Brush) -> Tuple[List[Vec3], List[Vec3]]:
    """Candidate positions for a vertex split.

    Returns:
        ``(edge_midpoints, face_centres)``.  The picker tries edge midpoints
        first and falls back to face centres.
    """
    vertices, polygons = compute_geometry(brush.faces)
    midpoints = [scale(add(vertices[a], vertices[b]), 0.5) for a, b in face_edges(polygons)]
    centres = [face_centroid(vertices, p) for p in polygons if len(p) >= 3]
    return midpoints, centres


def split_vertex(brush: Brush, position: Vec3, delta: Vec3) -> Optional[Brush]:
    """Insert a new vertex at ``position + delta`` and rebuild the hull.

    ``position`` is normally an edge midpoint or face centre from
    :func:`split_points`.  With a zero ``delta`` the new point lies on the
    surface and the brush keeps its shape.
    """
    vertices, polygons = compute_geometry(brush.faces)
    points = vertices + [add(position, delta)]
    return rebuild_from_points(brush, polygons, points)


# ---------------------------------------------------------------------------
# Clip
# ---------------------------------------------------------------------------

def clip_plane_from_points(points: Sequence[Vec3],
                           view_forward: Optional[Vec3] = None) -> Optional[Plane]:
    """Build a clip plane from picked points.

    Three points give the plane through them (CCW winding sets the normal).
    Two points give the plane containing the segment and the view direction.
    Returns None for anything degenerate.
    """
    if len(points) == 3:
        a, b, c = points
        normal = normalize(cross(sub(b, a), sub(c, a)))
    elif len(points) == 2 and view_forward is not None:
        a = points[0]
        normal = normalize(cross(sub(points[1], a), view_forward))
    else:
        return None
    if length(normal) < 0.5:
        return None
    return Plane(normal, dot(normal, a))


def clip_brush(brush: Brush, plane: Plane) -> Optional[Brush]:
    """Cut the brush with ``plane``, keeping the part behind it."""
    faces = list(brush.faces) + [Face(plane)]
    if not is_valid_solid(faces):
        logger.debug("Clip plane removes the whole brush")
        return None
    # A plane that misses the brush, grazes it or repeats a face adds a dead face
    faces = clean_degenerate(remove_duplicate_planes(faces))
    if faces == list(brush.faces):
        logger.debug("Clip plane does not cut the brush")
        return None
    if len(faces) < MIN_FACES:
        return None
    return Brush(faces=faces)


# ---------------------------------------------------------------------------
# Draw tool
# ---------------------------------------------------------------------------

def draw_brush(min_point: Vec3, max_point: Vec3) -> Optional[PlacedBrush]:
    """A new cuboid brush spanning two corners, centred on its own origin."""
    half = tuple(abs(b - a) / 2.0 for a, b in zip(min_point, max_point))
    if min(half) < EPSILON:
        return None
    center = scale(add(min_point, max_point), 0.5)
    return PlacedBrush.create(Brush.cuboid(*half), origin=center)


@dataclass
class CutResult:
    """Outcome of cutting a set of brushes with one cutter volume."""
    originals: List[PlacedBrush] = field(default_factory=list)
    fragments: List[PlacedBrush] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.originals


def cut_brushes(brushes: Iterable[PlacedBrush], cutter_faces: Sequence[Face]) -> CutResult:
    """Subtract a world-space cutter from every brush it touches.

    Fragments are re-centred so their vertex centroid becomes their local
    origin.  Brushes the cutter misses are left out of the result.
    """
    result = CutResult()
    for placed in brushes:
        world_faces = placed.world_brush().faces
        if not intersects(world_faces, cutter_faces):
            continue

        fragments: List[PlacedBrush] = []
        for fragment_faces in subtract(world_faces, cutter_faces):
            local = recenter(fragment_faces)
            if local is None:
                continue
            local_faces, center = local
            fragments.append(PlacedBrush.create(Brush(faces=local_faces), origin=center,
                                                name=placed.name))

        result.originals.append(placed.snapshot())
        result.fragments.extend(fragments)
        logger.debug("Cut brush %s into %d fragment(s)", placed.id, len(fragments))

    if result.originals:
        logger.info("Cut %d brush(es) into %d fragment(s)",
                    len(result.originals), len(result.fragments))
    return result


def cut_document(document: BrushDocument,
                 cutter_faces: Sequence[Face]) -> Optional[SubtractBrushesCommand]:
    """Command that cuts every intersecting brush in ``document``, or None if none intersect."""
    result = cut_brushes(document, cutter_faces)
    if result.is_empty:
        return None
    return SubtractBrushesCommand(originals=result.originals, fragments=result.fragments)


def add_drawn_brush(min_point: Vec3, max_point: Vec3) -> Optional[AddBrushCommand]:
    placed = draw_brush(min_point, max_point)
    if placed is None:
        return None
    return AddBrushCommand(placed=placed)
