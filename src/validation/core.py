"""
Core data structures for brush validation.

Defines the fundamental types used throughout the validation package:
- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Exception raised when a caller demands a passing result
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, doesn't affect pass/fail
    - WARN: Brush is usable but carries dead data (e.g. degenerate faces)
    - FAIL: Brush must not be committed
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class ValidationIssue:
    """Represents a single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "BRUSH-001")
        message: Human-readable description
        remediation: Optional suggested fix
        face_index: Optional index of the offending face
    """
    severity: Severity
    code: str
    message: str
    remediation: Optional[str] = None
    face_index: Optional[int] = None

    def format(self) -> str:
        """Format issue for display.

        Returns:
            ``[SEVERITY] CODE face=F :: message :: fix=FIX``
        """
        face = '-' if self.face_index is None else str(self.face_index)
        fix = self.remediation or 'N/A'
        return f"[{self.severity}] {self.code} face={face} :: {self.message} :: fix={fix}"

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Collection of validation issues with pass/fail determination."""
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """Check if validation passed (no FAIL issues)."""
        return not any(i.severity == Severity.FAIL for i in self.issues)

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARN]

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.FAIL]

    @property
    def codes(self) -> List[str]:
        return [i.code for i in self.issues]

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add an issue to the result."""
        self.issues.append(issue)

    def report(self) -> str:
        """Generate a formatted report of all issues.

        Returns:
            Multi-line string with all issues formatted
        """
        if not self.issues:
            return "Validation passed: No issues found"

        status = "PASSED" if self.passed else "FAILED"
        lines = [f"Validation {status}: {len(self.issues)} issue(s)", "-" * 60]

        # Group by severity
        for severity in [Severity.FAIL, Severity.WARN, Severity.INFO]:
            severity_issues = [i for i in self.issues if i.severity == severity]
            if severity_issues:
                lines.append(f"\n{severity.name} ({len(severity_issues)}):")
                for issue in severity_issues:
                    lines.append(issue.format())

        return "\n".join(lines)

    def raise_if_failed(self) -> None:
        if self.failed:
            raise ValidationError(self)


class ValidationError(Exception):
    """Exception raised when validation fails with FAIL severity issues.

    Attributes:
        result: The ValidationResult that caused the failure
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
