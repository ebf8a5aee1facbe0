from dataclasses import replace

from brush_editor.geometry.brush import Brush
from brush_editor.geometry.hull import merge_hull_triangles, rebuild_from_points
from brush_editor.geometry.polyhedron import compute_geometry

from conftest import vec_close


def _plane_key(brush):
    return sorted(
        (tuple(round(c, 6) for c in f.plane.normal), round(f.plane.distance, 6))
        for f in brush.faces
    )


def test_rebuild_is_idempotent(cube):
    vertices, polygons = compute_geometry(cube.faces)
    rebuilt = rebuild_from_points(cube, polygons, vertices)

    assert rebuilt is not None
    assert rebuilt.face_count == 6
    assert _plane_key(rebuilt) == _plane_key(cube)
    new_vertices, new_polygons = compute_geometry(rebuilt.faces)
    assert len(new_vertices) == 8
    assert all(len(p) == 4 for p in new_polygons)


def test_rebuild_keeps_face_metadata(cube):
    faces = list(cube.faces)
    faces[0] = replace(faces[0], material_index=7, texture_path="textures/brick.png")
    brush = Brush(faces=faces)
    vertices, polygons = compute_geometry(brush.faces)

    rebuilt = rebuild_from_points(brush, polygons, vertices)

    plus_x = [f for f in rebuilt.faces if vec_close(f.plane.normal, (1.0, 0.0, 0.0))]
    assert len(plus_x) == 1
    assert plus_x[0].material_index == 7
    assert plus_x[0].texture_path == "textures/brick.png"
    others = [f for f in rebuilt.faces if f is not plus_x[0]]
    assert all(f.material_index == 0 for f in others)


def test_rebuild_follows_moved_vertex(cube):
    vertices, polygons = compute_geometry(cube.faces)
    corner = next(i for i, v in enumerate(vertices) if vec_close(v, (1.0, 1.0, 1.0)))
    moved = list(vertices)
    moved[corner] = (2.0, 2.0, 2.0)

    rebuilt = rebuild_from_points(cube, polygons, moved)

    assert rebuilt is not None
    new_vertices, _ = compute_geometry(rebuilt.faces)
    assert len(new_vertices) == 8
    assert any(vec_close(v, (2.0, 2.0, 2.0), tol=1e-4) for v in new_vertices)


def test_rebuild_rejects_too_few_points(cube):
    points = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
    assert rebuild_from_points(cube, [], points) is None


def test_rebuild_rejects_coplanar_points(cube):
    points = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0),
              (1.0, 1.0, 0.0), (0.5, 2.0, 0.0)]
    assert rebuild_from_points(cube, [], points) is None


def test_rebuild_with_no_old_faces_uses_defaults():
    points = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]
    rebuilt = rebuild_from_points(Brush(), [], points)
    assert rebuilt is not None
    assert rebuilt.face_count == 4
    assert all(f.material_index == 0 for f in rebuilt.faces)


def test_merge_coplanar_triangles():
    vertices = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0),
                (5.0, 5.0, 5.0)]
    triangles = [(0, 1, 2), (0, 2, 3), (0, 0, 1)]

    faces = merge_hull_triangles(vertices, triangles)

    assert len(faces) == 1
    assert vec_close(faces[0].normal, (0.0, 0.0, 1.0))
    assert sorted(faces[0].vertex_indices) == [0, 1, 2, 3]
