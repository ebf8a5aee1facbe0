"""
Brush solidity checks.

Validates a brush before it is committed to the document:
- Minimum face count (BRUSH-001)
- Unit-length face normals (BRUSH-002)
- Closed volume (BRUSH-003)
- Degenerate faces (BRUSH-004)
- Polygon-producing face count (BRUSH-005)
"""

from typing import List, Sequence

from brush_editor.geometry.brush import Brush, Face, MIN_FACES
from brush_editor.geometry.plane_math import length
from brush_editor.geometry.polyhedron import MIN_VERTICES, compute_geometry

from .core import ValidationIssue, ValidationResult
from .rules import BRUSH_001, BRUSH_002, BRUSH_003, BRUSH_004, BRUSH_005, ValidationRule

# Allowed drift of |n| from 1.0
NORMAL_TOLERANCE = 1e-6


def _issue(rule: ValidationRule, face_index=None, **kwargs) -> ValidationIssue:
    return ValidationIssue(
        severity=rule.severity,
        code=rule.code,
        message=rule.format_message(**kwargs),
        remediation=rule.format_remediation(**kwargs),
        face_index=face_index,
    )


def check_face_count(faces: Sequence[Face]) -> List[ValidationIssue]:
    if len(faces) < MIN_FACES:
        return [_issue(BRUSH_001, count=len(faces), minimum=MIN_FACES)]
    return []


def check_normals(faces: Sequence[Face]) -> List[ValidationIssue]:
    issues = []
    for i, face in enumerate(faces):
        n = length(face.plane.normal)
        if abs(n - 1.0) > NORMAL_TOLERANCE:
            issues.append(_issue(BRUSH_002, face_index=i, length=n))
    return issues


def check_polygons(faces: Sequence[Face]) -> List[ValidationIssue]:
    """Closed-volume, degenerate-face and polygon-count checks.

    These share one polyhedron derivation.
    """
    vertices, polygons = compute_geometry(faces)
    if len(vertices) < MIN_VERTICES:
        # Nothing further is meaningful on an open brush
        return [_issue(BRUSH_003, count=len(vertices))]

    issues = []
    for i, polygon in enumerate(polygons):
        if len(polygon) < 3:
            issues.append(_issue(BRUSH_004, face_index=i, count=len(polygon)))

    producing = sum(1 for p in polygons if len(p) >= 3)
    if producing < MIN_FACES:
        issues.append(_issue(BRUSH_005, count=producing, minimum=MIN_FACES))
    return issues


def validate_brush(brush: Brush) -> ValidationResult:
    """Run every brush check and collect the findings.

    Args:
        brush: Brush to validate

    Returns:
        ValidationResult; ``passed`` is False if any FAIL issue was found
    """
    result = ValidationResult()
    faces = brush.faces

    for issue in check_face_count(faces):
        result.add_issue(issue)
    for issue in check_normals(faces):
        result.add_issue(issue)
    if faces:
        for issue in check_polygons(faces):
            result.add_issue(issue)

    return result
