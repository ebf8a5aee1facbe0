import numpy as np

from brush_editor.geometry.brush import Brush, Face
from brush_editor.geometry.plane_math import Plane
from brush_editor.ui.preview.mesh_builder import (
    FLOATS_PER_VERTEX,
    MeshBuilder,
    build_face_meshes,
    build_mesh_from_brushes,
    build_wireframe_mesh,
)


def test_cube_mesh_layout(cube):
    mesh = build_mesh_from_brushes([cube])

    assert mesh.vertices.shape == (24, FLOATS_PER_VERTEX)
    assert mesh.indices.shape == (12, 3)
    assert mesh.vertices.dtype == np.float32
    assert mesh.indices.dtype == np.uint32
    assert mesh.bounds_min == (-1.0, -1.0, -1.0)
    assert mesh.bounds_max == (1.0, 1.0, 1.0)
    assert int(mesh.indices.max()) == 23


def test_empty_mesh():
    mesh = build_mesh_from_brushes([])
    assert mesh.is_empty
    assert mesh.vertices.shape == (0, FLOATS_PER_VERTEX)
    assert mesh.indices.shape == (0, 3)


def test_offsets_translate_positions(cube):
    builder = MeshBuilder()
    builder.add_brushes([cube, cube], offsets=[(0.0, 0.0, 0.0), (10.0, 0.0, 0.0)])
    mesh = builder.build()

    assert mesh.vertex_count == 48
    assert mesh.bounds_max[0] == 11.0
    # Normals are not affected by translation
    assert np.allclose(np.linalg.norm(mesh.vertices[:, 3:6], axis=1), 1.0)

    builder.clear()
    assert builder.build().is_empty


def test_face_meshes_keep_face_slots(cube):
    faces = list(cube.faces) + [Face(Plane((1.0, 0.0, 0.0), 5.0))]
    faces[0] = Face(faces[0].plane, material_index=2, texture_path="textures/metal.png")

    meshes = build_face_meshes(Brush(faces=faces))

    assert len(meshes) == 7
    assert meshes[6] is None
    assert meshes[0].material_index == 2
    assert meshes[0].texture_path == "textures/metal.png"
    assert meshes[0].vertex_count == 4
    assert meshes[0].triangle_count == 2
    assert np.allclose(meshes[0].normals, [[1.0, 0.0, 0.0]] * 4)


def test_wireframe_edges(cube, tetrahedron):
    vertices, indices = build_wireframe_mesh([cube, tetrahedron])
    assert vertices.shape == (12, 3)
    assert indices.shape == (18, 2)
    assert int(indices.min()) >= 0
    assert int(indices.max()) == 11


def test_wireframe_empty():
    vertices, indices = build_wireframe_mesh([])
    assert vertices.shape == (0, 3)
    assert indices.shape == (0, 2)
