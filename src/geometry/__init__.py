"""
Brush geometry kernel.

Pure functions over plane sets: polyhedron derivation, winding and tangent
basis, paraxial UVs, convex hull reconstruction and convex subtraction.

Usage:
    from brush_editor.geometry import Brush, compute_geometry

    vertices, face_polygons = compute_geometry(Brush.cuboid(1, 1, 1).faces)
"""

from .plane_math import EPSILON, Plane, Vec2, Vec3, inside_all, intersect_three
from .brush import Brush, Face, MIN_FACES
from .winding import sort_by_winding, tangent_axes, triangulate_fan
from .uv import face_uvs
from .polyhedron import (
    MIN_VERTICES,
    bounds_volume,
    clean_degenerate,
    compute_geometry,
    face_centroid,
    face_edges,
    is_solid,
    is_valid_solid,
    remove_duplicate_planes,
)
from .hull import HullFace, merge_hull_triangles, rebuild_from_points
from .csg import cutter_faces_from_box, faces_to_world, intersects, recenter, subtract

__all__ = [
    'EPSILON',
    'Plane',
    'Vec2',
    'Vec3',
    'inside_all',
    'intersect_three',
    'Brush',
    'Face',
    'MIN_FACES',
    'MIN_VERTICES',
    'sort_by_winding',
    'tangent_axes',
    'triangulate_fan',
    'face_uvs',
    'bounds_volume',
    'clean_degenerate',
    'compute_geometry',
    'face_centroid',
    'face_edges',
    'is_solid',
    'is_valid_solid',
    'remove_duplicate_planes',
    'HullFace',
    'merge_hull_triangles',
    'rebuild_from_points',
    'cutter_faces_from_box',
    'faces_to_world',
    'intersects',
    'recenter',
    'subtract',
]
