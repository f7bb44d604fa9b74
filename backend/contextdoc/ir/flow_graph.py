from enum import Enum
from typing import Optional, Tuple

from pydantic import Field

from .base import BaseIR


class ShapeKind(str, Enum):
    RECTANGLE = "rectangle"          # A[label]
    ROUNDED = "rounded"              # A(label)
    STADIUM = "stadium"              # A([label])
    SUBROUTINE = "subroutine"        # A[[label]]
    CYLINDER = "cylinder"            # A[(label)]
    CIRCLE = "circle"                # A((label))
    ASYMMETRIC = "asymmetric"        # A>label]
    RHOMBUS = "rhombus"              # A{label}
    HEXAGON = "hexagon"              # A{{label}}
    PARALLELOGRAM = "parallelogram"  # A[/label/]
    TRAPEZOID = "trapezoid"          # A[/label\]


class Node(BaseIR):
    id: str
    label: str = ""
    shape: ShapeKind = ShapeKind.RECTANGLE
    ref_section_id: Optional[str] = None


class Edge(BaseIR):
    source: str = Field(alias="from")
    target: str = Field(alias="to")
    label: Optional[str] = None

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


class NodeReference(BaseIR):
    node_id: str
    section_id: str
    click_action: str
    tooltip: Optional[str] = None


class Graph(BaseIR):
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()
    node_refs: Tuple[NodeReference, ...] = ()

    def node(self, node_id: str) -> Optional[Node]:
        return next((n for n in self.nodes if n.id == node_id), None)


class Diagram(BaseIR):
    id: Optional[str] = None
    version: Optional[str] = None
    title: Optional[str] = None
    source: str = ""                # raw flowchart text, verbatim
    graph: Optional[Graph] = None   # derived by the diagram grammar parser
