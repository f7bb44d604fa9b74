from dataclasses import dataclass, field
from typing import Dict, List
from .errors import ValidationSeverity, Violation


@dataclass
class ValidationResult:
    is_valid: bool
    violations: List[Violation] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def success(cls):
        return cls(is_valid=True, violations=[])

    @classmethod
    def failure(cls, violations: List[Violation]):
        return cls(is_valid=False, violations=list(violations))

    @classmethod
    def from_violations(cls, violations: List[Violation], strict: bool = False, stats=None):
        has_errors = any(v.severity == ValidationSeverity.ERROR for v in violations)
        has_warnings = any(v.severity == ValidationSeverity.WARNING for v in violations)

        is_valid = not has_errors
        if strict:
            is_valid = not has_errors and not has_warnings

        return cls(is_valid=is_valid, violations=list(violations), stats=dict(stats or {}))

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == ValidationSeverity.WARNING]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def kinds(self) -> List[str]:
        return [v.kind.value for v in self.violations]

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "violations": [v.to_dict() for v in self.violations],
            "stats": self.stats,
        }

    def get_summary(self) -> str:
        status = "Valid" if self.is_valid else "Invalid"
        return f"{status} | Errors: {self.error_count}, Warnings: {self.warning_count}"
