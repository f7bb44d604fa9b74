from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from contextdoc.ir.document import Document
from contextdoc.ir.errors import DiagramParseError, Violation
from contextdoc.ir.flow_graph import Graph
from contextdoc.ir.section import Section


@dataclass
class AssemblyContext:
    # Raw input (authoritative)
    source_text: str

    # Options
    strict: bool = True
    allow_partial: bool = False

    # Structure
    document: Optional[Document] = None          # as authored, placeholders intact
    sections: Tuple[Section, ...] = ()           # resolved

    # Diagram
    graph: Optional[Graph] = None
    diagram_error: Optional[DiagramParseError] = None

    # Non-blocking findings
    warnings: List[Violation] = field(default_factory=list)

    def assembled(self) -> Document:
        """Freeze everything collected so far into the final Document."""
        diagram = self.document.diagram
        if diagram is not None and self.graph is not None:
            diagram = diagram.model_copy(update={"graph": self.graph})

        return self.document.model_copy(update={
            "sections": self.sections,
            "diagram": diagram,
            "warnings": tuple(self.warnings),
            "diagram_error": str(self.diagram_error) if self.diagram_error else None,
        })
