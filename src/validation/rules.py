"""
Brush validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "BRUSH-001")
- Severity: FAIL, WARN, or INFO
- Message template: Human-readable description
- Remediation: Suggested fix
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "BRUSH-001")
        severity: Default severity for this rule
        message_template: Template for error message (use {placeholders})
        remediation_template: Template for suggested fix
    """
    code: str
    severity: Severity
    message_template: str
    remediation_template: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        """Format the message template with provided values."""
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        """Format the remediation template with provided values."""
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None


BRUSH_001 = ValidationRule(
    code="BRUSH-001",
    severity=Severity.FAIL,
    message_template="Brush has {count} faces, a closed solid needs at least {minimum}",
    remediation_template="Add bounding faces or discard the edit",
)

BRUSH_002 = ValidationRule(
    code="BRUSH-002",
    severity=Severity.FAIL,
    message_template="Face normal is not unit length (|n|={length:.6f})",
    remediation_template="Normalize the normal and rescale the distance",
)

BRUSH_003 = ValidationRule(
    code="BRUSH-003",
    severity=Severity.FAIL,
    message_template="Faces do not bound a closed volume ({count} vertices)",
    remediation_template="Reject the edit and keep the previous brush",
)

BRUSH_004 = ValidationRule(
    code="BRUSH-004",
    severity=Severity.WARN,
    message_template="Face contributes no polygon ({count} vertices on its plane)",
    remediation_template="Remove the face with clean_degenerate()",
)

BRUSH_005 = ValidationRule(
    code="BRUSH-005",
    severity=Severity.FAIL,
    message_template="Only {count} faces produce polygons, need at least {minimum}",
    remediation_template="Reject the edit and keep the previous brush",
)
