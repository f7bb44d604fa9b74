"""
Entry points used by the host application.

Every call is a pure function of its text input: parse, validate, resolve and
(for the slow path) build the flow graph. Errors surface as ContextDocError
subclasses; see contextdoc.ir.errors.
"""
from typing import Optional, Tuple

from contextdoc.compiler.render_xml import render_document
from contextdoc.ir.document import Document, Metadata
from contextdoc.ir.flow_graph import Diagram
from contextdoc.ir.section import Section
from contextdoc.pipeline.controller import DocumentAssembler
from contextdoc.serializers import to_wire


def load_document(text: str, strict: Optional[bool] = None, allow_partial: Optional[bool] = None) -> Document:
    return DocumentAssembler(strict=strict, allow_partial=allow_partial).assemble(text)


def load_sections(text: str) -> Tuple[Section, ...]:
    """Fast path: resolved sections only, the diagram grammar is never parsed."""
    return DocumentAssembler().assemble_sections(text).sections


def load_flow_graph(text: str, strict: Optional[bool] = None) -> Optional[Diagram]:
    """Slow path: the diagram with its graph, or None when the document has no flow."""
    document = DocumentAssembler(strict=strict, allow_partial=False).assemble(text)
    return document.diagram


def load_metadata(text: str) -> Metadata:
    return DocumentAssembler().assemble_sections(text).metadata


__all__ = [
    "load_document",
    "load_flow_graph",
    "load_metadata",
    "load_sections",
    "render_document",
    "to_wire",
]
