from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ValidationSeverity(Enum):
    ERROR = "error"      # Document must not be treated as valid
    WARNING = "warning"  # Legal but usually unintended
    INFO = "info"        # Reported for the caller, never blocks


class ViolationKind(str, Enum):
    # Structural
    MISSING_FIELD = "missing-field"
    DUPLICATE_ID = "duplicate-id"
    INVALID_ENUM_VALUE = "invalid-enum-value"
    NESTED_SECTION = "nested-section"
    INVALID_TIMESTAMP = "invalid-timestamp"

    # Graph
    DANGLING_REFERENCE = "dangling-reference"
    DUPLICATE_NODE_ID = "duplicate-node-id"
    SELF_REFERENCE = "self-reference"

    # Resolution
    UNRESOLVED_VARIABLE = "unresolved-variable"


@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"

    def to_dict(self) -> dict:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class Violation:
    """A single named problem found by one of the validators."""
    kind: ViolationKind
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    object_id: Optional[str] = None
    location: Optional[SourceLocation] = None
    related_location: Optional[SourceLocation] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
            "objectId": self.object_id,
            "location": self.location.to_dict() if self.location else None,
            "relatedLocation": (
                self.related_location.to_dict() if self.related_location else None
            ),
        }


# ============================================================
# ERROR TAXONOMY
# ============================================================

class ContextDocError(Exception):
    error_type = "context-document"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.error_type, "message": str(self)}


class StructuralParseError(ContextDocError):
    """Document text could not be turned into a document tree. Fatal."""
    error_type = "structural-parse"

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{message}{where}")

    @property
    def location(self) -> Optional[SourceLocation]:
        if self.line is None:
            return None
        return SourceLocation(self.line, self.column)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.error_type,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }


class _ViolationsError(ContextDocError):
    label = "Validation"

    def __init__(self, violations: List[Violation]):
        self.violations = list(violations)
        lines = [f"[{v.kind.value}] {v.message}" for v in self.violations]
        super().__init__(
            f"{self.label} failed with {len(self.violations)} violation(s):\n"
            + "\n".join(lines)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.error_type,
            "message": str(self).splitlines()[0],
            "violations": [v.to_dict() for v in self.violations],
        }


class ValidationError(_ViolationsError):
    """Structural validation found one or more violations."""
    error_type = "validation"
    label = "Document validation"


class DiagramParseError(ContextDocError):
    """Flowchart text could not be parsed. Fatal for the diagram only."""
    error_type = "diagram-parse"

    def __init__(self, message: str, line: int, text: str = ""):
        self.message = message
        self.line = line
        self.text = text
        super().__init__(f"{message} at diagram line {line}: {text!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.error_type,
            "message": self.message,
            "line": self.line,
            "text": self.text,
        }


class GraphValidationError(_ViolationsError):
    """Graph validation found blocking violations."""
    error_type = "graph-validation"
    label = "Graph validation"
