import logging

from contextdoc.ir import (
    ContextDocError,
    DiagramParseError,
    Document,
    GraphValidationError,
    StructuralParseError,
    ValidationError,
)
from contextdoc.service import (
    load_document,
    load_flow_graph,
    load_metadata,
    load_sections,
    render_document,
    to_wire,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ContextDocError",
    "DiagramParseError",
    "Document",
    "GraphValidationError",
    "StructuralParseError",
    "ValidationError",
    "load_document",
    "load_flow_graph",
    "load_metadata",
    "load_sections",
    "render_document",
    "to_wire",
]
