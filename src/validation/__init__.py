"""
Brush validation package.

Public API:
    - ValidationResult, ValidationIssue, Severity: Core result types
    - ValidationError: Exception raised by ValidationResult.raise_if_failed()
    - ValidationRule and the BRUSH_00x rule definitions
    - validate_brush(): Run all brush checks
"""

from .core import (
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationError,
)
from .rules import (
    ValidationRule,
    BRUSH_001,
    BRUSH_002,
    BRUSH_003,
    BRUSH_004,
    BRUSH_005,
)
from .brush_checks import (
    check_face_count,
    check_normals,
    check_polygons,
    validate_brush,
)

__all__ = [
    # Core types
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'ValidationError',
    # Rules
    'ValidationRule',
    'BRUSH_001',
    'BRUSH_002',
    'BRUSH_003',
    'BRUSH_004',
    'BRUSH_005',
    # Checks
    'check_face_count',
    'check_normals',
    'check_polygons',
    'validate_brush',
]
