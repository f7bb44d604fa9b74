from contextdoc.ir.document import AppInfo, Document, Metadata, Variable, parse_timestamp
from contextdoc.ir.errors import (
    ContextDocError,
    DiagramParseError,
    GraphValidationError,
    SourceLocation,
    StructuralParseError,
    ValidationError,
    ValidationSeverity,
    Violation,
    ViolationKind,
)
from contextdoc.ir.flow_graph import Diagram, Edge, Graph, Node, NodeReference, ShapeKind
from contextdoc.ir.section import Section, SectionType
from contextdoc.ir.validation import ValidationResult

__all__ = [
    "AppInfo",
    "ContextDocError",
    "Diagram",
    "DiagramParseError",
    "Document",
    "Edge",
    "Graph",
    "GraphValidationError",
    "Metadata",
    "Node",
    "NodeReference",
    "Section",
    "SectionType",
    "ShapeKind",
    "SourceLocation",
    "StructuralParseError",
    "ValidationError",
    "ValidationResult",
    "ValidationSeverity",
    "Variable",
    "Violation",
    "ViolationKind",
    "parse_timestamp",
]
