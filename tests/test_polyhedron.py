import math

import pytest

from brush_editor.geometry.brush import Brush, Face
from brush_editor.geometry.plane_math import EPSILON, Plane, dot
from brush_editor.geometry.polyhedron import (
    bounds_volume,
    clean_degenerate,
    compute_geometry,
    face_centroid,
    face_edges,
    is_solid,
    is_valid_solid,
    remove_duplicate_planes,
)

from conftest import vec_close


def test_cuboid_round_trip(cube):
    vertices, polygons = compute_geometry(cube.faces)

    assert len(vertices) == 8
    assert len(polygons) == 6
    assert all(len(p) == 4 for p in polygons)
    for v in vertices:
        assert all(math.isclose(abs(c), 1.0, abs_tol=1e-9) for c in v)


@pytest.mark.parametrize("brush", [
    Brush.cuboid(1.0, 2.0, 3.0),
    Brush.from_box((-4.0, 0.0, 2.0), (5.0, 1.0, 3.5)),
    Brush.sphere(10.0),
])
def test_every_vertex_satisfies_every_face(brush):
    vertices, _ = compute_geometry(brush.faces)
    for v in vertices:
        for face in brush.faces:
            assert dot(face.plane.normal, v) <= face.plane.distance + EPSILON


def test_polygon_vertices_lie_on_their_face(truncated_cube):
    vertices, polygons = compute_geometry(truncated_cube.faces)
    for face, polygon in zip(truncated_cube.faces, polygons):
        for vi in polygon:
            assert face.plane.contains(vertices[vi])


def test_truncated_corner():
    k = 1.0 / math.sqrt(3.0)
    brush = Brush(faces=list(Brush.cuboid(1, 1, 1).faces) + [Face(Plane((k, k, k), 2.5 * k))])
    vertices, polygons = compute_geometry(brush.faces)

    assert len(vertices) == 10
    assert len(polygons[-1]) == 3
    # +X, +Y and +Z each lose a corner and gain an edge
    assert [len(p) for p in polygons[:6]] == [5, 4, 5, 4, 5, 4]


def test_sphere_is_icosahedron():
    sphere = Brush.sphere(10.0)
    vertices, polygons = compute_geometry(sphere.faces)

    assert sphere.face_count == 20
    assert len(vertices) == 12
    assert all(len(p) == 3 for p in polygons)
    for v in vertices:
        assert math.isclose(math.sqrt(dot(v, v)), 10.0, rel_tol=1e-9)


def test_minimum_solid(tetrahedron):
    vertices, polygons = compute_geometry(tetrahedron.faces)
    assert len(vertices) == 4
    assert all(len(p) == 3 for p in polygons)
    assert is_valid_solid(tetrahedron.faces)


def test_three_faces_are_not_a_solid(cube):
    faces = [cube.faces[0], cube.faces[2], cube.faces[4]]
    vertices, _ = compute_geometry(faces)
    assert len(vertices) == 1
    assert not is_solid(vertices)
    assert not bounds_volume(faces)
    assert not is_valid_solid(faces)


def test_open_box_is_not_a_valid_solid(cube):
    faces = cube.faces[1:]
    # The four corners of the -X face are found, but nothing closes the +X side
    assert bounds_volume(faces)
    assert not is_valid_solid(faces)


def test_contradictory_faces_give_no_vertices():
    faces = list(Brush.cuboid(1, 1, 1).faces)
    faces[0] = Face(Plane((1.0, 0.0, 0.0), -2.0))
    vertices, polygons = compute_geometry(faces)
    assert vertices == []
    assert all(p == [] for p in polygons)


def test_face_edges_of_cube(cube):
    _, polygons = compute_geometry(cube.faces)
    edges = face_edges(polygons)
    assert len(edges) == 12
    assert all(a < b for a, b in edges)


def test_face_centroid(cube):
    vertices, polygons = compute_geometry(cube.faces)
    assert vec_close(face_centroid(vertices, polygons[0]), (1.0, 0.0, 0.0))


def test_clean_degenerate_drops_redundant_face(cube):
    faces = list(cube.faces) + [Face(Plane((1.0, 0.0, 0.0), 5.0))]
    assert clean_degenerate(faces) == list(cube.faces)


def test_constructors_reject_empty_volumes():
    with pytest.raises(ValueError):
        Brush.cuboid(1.0, 0.0, 1.0)
    with pytest.raises(ValueError):
        Brush.from_box((0.0, 0.0, 0.0), (1.0, 1.0, 0.0))
    with pytest.raises(ValueError):
        Brush.sphere(-1.0)


def test_remove_duplicate_planes_keeps_first(cube):
    repeat = Face(Plane((1.0, 0.0, 0.0), 1.0 + EPSILON / 10), material_index=5)
    opposite = Face(Plane((-1.0, 0.0, 0.0), -1.0))
    faces = list(cube.faces) + [repeat, opposite]

    kept = remove_duplicate_planes(faces)

    assert kept == list(cube.faces) + [opposite]
