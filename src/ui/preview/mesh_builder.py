"""
Mesh builder for converting brushes to renderable geometry.

Runs the geometry kernel (compute_geometry + face_uvs) and converts the
output to numpy vertex/index buffers.  Uploading the buffers and picking
materials is left to the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from brush_editor.geometry.brush import Brush, Face
from brush_editor.geometry.plane_math import Vec3
from brush_editor.geometry.polyhedron import compute_geometry, face_edges
from brush_editor.geometry.uv import face_uvs
from brush_editor.geometry.winding import triangulate_fan

# position (3) + normal (3) + uv (2)
FLOATS_PER_VERTEX = 8


@dataclass
class FaceMesh:
    """Drawable geometry for a single brush face."""
    positions: np.ndarray  # Shape: (N, 3), dtype=float32
    normals: np.ndarray    # Shape: (N, 3), dtype=float32
    uvs: np.ndarray        # Shape: (N, 2), dtype=float32
    indices: np.ndarray    # Shape: (M, 3), dtype=uint32, local to this face
    material_index: int = 0
    texture_path: Optional[str] = None

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)


@dataclass
class RenderMesh:
    """Interleaved mesh data for a batch of brushes."""
    # Vertex data: position (3) + normal (3) + uv (2) = 8 floats per vertex
    vertices: np.ndarray  # Shape: (N, 8), dtype=float32
    # Triangle indices
    indices: np.ndarray   # Shape: (M, 3), dtype=uint32
    # Bounding box
    bounds_min: Tuple[float, float, float]
    bounds_max: Tuple[float, float, float]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    @property
    def is_empty(self) -> bool:
        return len(self.vertices) == 0


def _face_mesh(face: Face, vertices: List[Vec3], polygon: List[int]) -> FaceMesh:
    normal = face.plane.normal
    positions = [vertices[vi] for vi in polygon]
    uvs = face_uvs(vertices, polygon, normal, face.uv_offset, face.uv_scale, face.uv_rotation)
    local_tris = triangulate_fan(list(range(len(polygon))))
    return FaceMesh(
        positions=np.array(positions, dtype=np.float32),
        normals=np.array([normal] * len(polygon), dtype=np.float32),
        uvs=np.array(uvs, dtype=np.float32),
        indices=np.array(local_tris, dtype=np.uint32).reshape(-1, 3),
        material_index=face.material_index,
        texture_path=face.texture_path,
    )


def build_face_meshes(brush: Brush) -> List[Optional[FaceMesh]]:
    """Per-face meshes aligned with ``brush.faces``.

    Degenerate faces (polygon with fewer than 3 vertices) keep their slot
    as None so face indices stay valid for picking.
    """
    vertices, face_polygons = compute_geometry(brush.faces)
    meshes: List[Optional[FaceMesh]] = []
    for face, polygon in zip(brush.faces, face_polygons):
        if len(polygon) < 3:
            meshes.append(None)
            continue
        meshes.append(_face_mesh(face, vertices, polygon))
    return meshes


class MeshBuilder:
    """Converts brushes to one interleaved renderable mesh."""

    def __init__(self):
        self._vertices: List[List[float]] = []
        self._indices: List[List[int]] = []
        self._bounds_min: Optional[List[float]] = None
        self._bounds_max: Optional[List[float]] = None

    def clear(self):
        """Clear all mesh data."""
        self._vertices.clear()
        self._indices.clear()
        self._bounds_min = None
        self._bounds_max = None

    def add_brushes(self, brushes: List[Brush], offsets: Optional[List[Vec3]] = None):
        """Convert brushes to mesh data and accumulate.

        Args:
            brushes: Brushes in local space
            offsets: Optional per-brush world translation
        """
        for i, brush in enumerate(brushes):
            offset = offsets[i] if offsets is not None else (0.0, 0.0, 0.0)
            self.add_brush(brush, offset)

    def add_brush(self, brush: Brush, offset: Vec3 = (0.0, 0.0, 0.0)):
        """Convert a single brush to triangulated mesh data."""
        for face_mesh in build_face_meshes(brush):
            if face_mesh is None:
                continue

            first_idx = len(self._vertices)
            for pos, normal, uv in zip(face_mesh.positions, face_mesh.normals, face_mesh.uvs):
                world = (float(pos[0]) + offset[0], float(pos[1]) + offset[1],
                         float(pos[2]) + offset[2])
                self._update_bounds(world)
                self._vertices.append([
                    world[0], world[1], world[2],                         # Position (3)
                    float(normal[0]), float(normal[1]), float(normal[2]),  # Normal (3)
                    float(uv[0]), float(uv[1]),                            # UV (2)
                ])

            for tri in face_mesh.indices:
                self._indices.append([first_idx + int(tri[0]),
                                      first_idx + int(tri[1]),
                                      first_idx + int(tri[2])])

    def _update_bounds(self, v: Vec3):
        """Update bounding box with new vertex."""
        if self._bounds_min is None:
            self._bounds_min = [v[0], v[1], v[2]]
            self._bounds_max = [v[0], v[1], v[2]]
        else:
            for axis in range(3):
                self._bounds_min[axis] = min(self._bounds_min[axis], v[axis])
                self._bounds_max[axis] = max(self._bounds_max[axis], v[axis])

    def build(self) -> RenderMesh:
        """Build the final renderable mesh."""
        if not self._vertices:
            return RenderMesh(
                vertices=np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32),
                indices=np.zeros((0, 3), dtype=np.uint32),
                bounds_min=(0.0, 0.0, 0.0),
                bounds_max=(0.0, 0.0, 0.0)
            )

        return RenderMesh(
            vertices=np.array(self._vertices, dtype=np.float32),
            indices=np.array(self._indices, dtype=np.uint32),
            bounds_min=tuple(self._bounds_min),
            bounds_max=tuple(self._bounds_max)
        )


def build_mesh_from_brushes(brushes: List[Brush]) -> RenderMesh:
    """Convenience function to build mesh from brushes in one call."""
    builder = MeshBuilder()
    builder.add_brushes(brushes)
    return builder.build()


def build_wireframe_mesh(brushes: List[Brush]) -> Tuple[np.ndarray, np.ndarray]:
    """Build wireframe mesh (edges only) from brushes.

    Returns:
        Tuple of (vertices, indices) for line rendering.
        vertices: Shape (N, 3), dtype=float32
        indices: Shape (M, 2), dtype=uint32 (line segments)
    """
    vertices: List[Vec3] = []
    indices: List[Tuple[int, int]] = []

    for brush in brushes:
        brush_vertices, face_polygons = compute_geometry(brush.faces)
        base = len(vertices)
        vertices.extend(brush_vertices)
        indices.extend((base + a, base + b) for a, b in face_edges(face_polygons))

    if not vertices:
        return np.zeros((0, 3), dtype=np.float32), np.zeros((0, 2), dtype=np.uint32)

    return (
        np.array(vertices, dtype=np.float32),
        np.array(indices, dtype=np.uint32).reshape(-1, 2)
    )
