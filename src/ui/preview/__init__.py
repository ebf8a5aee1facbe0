"""
Preview module: brush-to-mesh conversion for real-time display.
"""

from .mesh_builder import (
    FLOATS_PER_VERTEX,
    FaceMesh,
    MeshBuilder,
    RenderMesh,
    build_face_meshes,
    build_mesh_from_brushes,
    build_wireframe_mesh,
)

__all__ = [
    'FLOATS_PER_VERTEX',
    'FaceMesh',
    'MeshBuilder',
    'RenderMesh',
    'build_face_meshes',
    'build_mesh_from_brushes',
    'build_wireframe_mesh',
]
