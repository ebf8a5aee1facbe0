import math

import pytest

from brush_editor.geometry import Brush, Face, Plane


@pytest.fixture
def cube():
    """2x2x2 cube centred on the origin."""
    return Brush.cuboid(1.0, 1.0, 1.0)


@pytest.fixture
def tetrahedron():
    """Corner tetrahedron: x, y, z >= 0 and x + y + z <= 1."""
    k = 1.0 / math.sqrt(3.0)
    return Brush(faces=[
        Face(Plane((-1.0, 0.0, 0.0), 0.0)),
        Face(Plane((0.0, -1.0, 0.0), 0.0)),
        Face(Plane((0.0, 0.0, -1.0), 0.0)),
        Face(Plane((k, k, k), k)),
    ])


@pytest.fixture
def truncated_cube(cube):
    """Cube with its (1, 1, 1) corner cut off at x + y + z = 2.5."""
    k = 1.0 / math.sqrt(3.0)
    return Brush(faces=list(cube.faces) + [Face(Plane((k, k, k), 2.5 * k))])


def vec_close(a, b, tol=1e-6):
    return all(math.isclose(x, y, abs_tol=tol) for x, y in zip(a, b))
