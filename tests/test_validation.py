import pytest

from brush_editor.geometry.brush import Brush, Face
from brush_editor.geometry.plane_math import Plane
from brush_editor.validation import Severity, ValidationError, validate_brush


def test_valid_brushes_pass(cube, tetrahedron):
    for brush in (cube, tetrahedron, Brush.sphere(3.0)):
        result = validate_brush(brush)
        assert result.passed
        assert result.issues == []


def test_too_few_faces(cube):
    result = validate_brush(Brush(faces=cube.faces[:3]))
    assert not result.passed
    assert result.codes == ["BRUSH-001", "BRUSH-003"]


def test_empty_brush():
    result = validate_brush(Brush())
    assert result.codes == ["BRUSH-001"]


def test_non_unit_normal(cube):
    faces = list(cube.faces)
    faces[2] = Face(Plane((0.0, 2.0, 0.0), 2.0))
    result = validate_brush(Brush(faces=faces))

    assert result.failed
    assert [i.code for i in result.errors] == ["BRUSH-002"]
    assert result.errors[0].face_index == 2


def test_degenerate_face_is_a_warning(cube):
    faces = list(cube.faces) + [Face(Plane((1.0, 0.0, 0.0), 4.0))]
    result = validate_brush(Brush(faces=faces))

    assert result.passed
    assert len(result.warnings) == 1
    assert result.warnings[0].severity == Severity.WARN
    assert result.warnings[0].face_index == 6


def test_open_brush(cube):
    result = validate_brush(Brush(faces=cube.faces[1:]))

    assert result.failed
    assert result.codes.count("BRUSH-004") == 4
    assert "BRUSH-005" in result.codes


def test_raise_if_failed(cube):
    result = validate_brush(Brush(faces=cube.faces[:2]))
    with pytest.raises(ValidationError) as excinfo:
        result.raise_if_failed()
    assert excinfo.value.result is result
    assert "BRUSH-001" in str(excinfo.value)

    validate_brush(cube).raise_if_failed()


def test_report(cube):
    assert validate_brush(cube).report() == "Validation passed: No issues found"
    report = validate_brush(Brush(faces=cube.faces[:3])).report()
    assert report.startswith("Validation FAILED: 2 issue(s)")
    assert "[FAIL] BRUSH-003 face=-" in report
