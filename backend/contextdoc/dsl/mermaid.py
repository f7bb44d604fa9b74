"""
Flowchart grammar parser.

Recognises a small, line-oriented subset of Mermaid flowcharts:

    flowchart TD                      direction (ignored)
    A[Intent]                         node definition (11 shapes, see SHAPE_DELIMITERS)
    A[Intent] --> B(Eval)             edge, inline definitions allowed
    B -->|retry| A                    labelled edge
    A --> B --> C                     chained edges
    click A "#intent-1" "Go"          node reference to a section

Anything else (blank lines, comments, style/class lines, subgraphs, other
arrow kinds) is skipped. Only a line that starts a recognised construct and
then breaks it (unclosed shape, arrow without target, unclosed label,
unbalanced click quotes) raises DiagramParseError.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from contextdoc.ir.errors import DiagramParseError
from contextdoc.ir.flow_graph import Edge, Graph, Node, NodeReference, ShapeKind

logger = logging.getLogger(__name__)

MERMAID_DIRECTIVE_RE = re.compile(
    r"^(?:flowchart|graph)(?:\s+(?:TD|TB|BT|LR|RL))?\s*;?$", re.IGNORECASE
)
MERMAID_FENCE_RE = re.compile(r"```mermaid[ \t]*\r?\n([\s\S]*?)\r?\n?```", re.IGNORECASE)
IGNORED_LINE_RE = re.compile(
    r"^(?:%%|(?:style|classDef|class|linkStyle|subgraph|direction)(?:\s|$)|end\s*;?$)"
)
CLICK_PREFIX_RE = re.compile(r"^click\s")
CLICK_RE = re.compile(
    r'^click\s+(?P<node>\w+)\s+(?:href\s+)?"(?P<action>[^"]*)"'
    r'(?:\s+"(?P<tooltip>[^"]*)")?(?:\s+_\w+)?\s*;?$'
)
NODE_ID_RE = re.compile(r"\w+")
ARROW = "-->"

# Longest openers first; an opener may close in more than one way.
SHAPE_DELIMITERS: List[Tuple[str, List[Tuple[str, ShapeKind]]]] = [
    ("([", [("])", ShapeKind.STADIUM)]),
    ("[[", [("]]", ShapeKind.SUBROUTINE)]),
    ("[(", [(")]", ShapeKind.CYLINDER)]),
    ("((", [("))", ShapeKind.CIRCLE)]),
    ("{{", [("}}", ShapeKind.HEXAGON)]),
    ("[/", [("/]", ShapeKind.PARALLELOGRAM), ("\\]", ShapeKind.TRAPEZOID)]),
    ("[\\", [("\\]", ShapeKind.PARALLELOGRAM), ("/]", ShapeKind.TRAPEZOID)]),
    ("[", [("]", ShapeKind.RECTANGLE)]),
    ("(", [(")", ShapeKind.ROUNDED)]),
    (">", [("]", ShapeKind.ASYMMETRIC)]),
    ("{", [("}", ShapeKind.RHOMBUS)]),
]


@dataclass
class _NodeToken:
    node_id: str
    label: Optional[str] = None
    shape: Optional[ShapeKind] = None  # None for a bare reference


@dataclass
class _NodeDraft:
    id: str
    label: str = ""
    shape: ShapeKind = ShapeKind.RECTANGLE
    declared: bool = False
    ref_section_id: Optional[str] = None


@dataclass
class _GraphBuilder:
    nodes: Dict[str, _NodeDraft] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    refs: List[NodeReference] = field(default_factory=list)

    def add_node(self, token: _NodeToken) -> None:
        draft = self.nodes.get(token.node_id)

        if draft is None:
            draft = _NodeDraft(id=token.node_id)
            self.nodes[token.node_id] = draft

        if token.shape is None:
            return

        if not draft.declared:
            draft.label = token.label or ""
            draft.shape = token.shape
            draft.declared = True
        elif (draft.label, draft.shape) != (token.label, token.shape):
            # first declaration wins
            logger.debug(
                "Ignoring redeclaration of node '%s' as %s[%s]",
                token.node_id,
                token.shape.value,
                token.label,
            )

    def build(self) -> Graph:
        for ref in self.refs:
            draft = self.nodes.get(ref.node_id)
            if draft is not None:
                draft.ref_section_id = ref.section_id

        return Graph(
            nodes=[
                Node(id=d.id, label=d.label, shape=d.shape, ref_section_id=d.ref_section_id)
                for d in self.nodes.values()
            ],
            edges=self.edges,
            node_refs=self.refs,
        )


# ============================================================
# PRE-PROCESSING
# ============================================================

def strip_fences(code: str) -> Tuple[str, int]:
    """
    Remove a ```mermaid fence around the flowchart, if any.

    Returns the inner text and how many source lines precede it, so that
    error line numbers keep pointing into the diagram text as authored.
    """
    match = MERMAID_FENCE_RE.search(code)
    if not match:
        return code, 0
    return match.group(1), code.count("\n", 0, match.start(1))


# ============================================================
# STATEMENT SCANNING
# ============================================================

def _skip_spaces(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in " \t":
        pos += 1
    return pos


def _read_label(line: str, pos: int, closers, line_no: int) -> Tuple[str, ShapeKind, int]:
    if pos < len(line) and line[pos] == '"':
        end_quote = line.find('"', pos + 1)
        if end_quote == -1:
            raise DiagramParseError("Unterminated quoted node label", line_no, line)
        label = line[pos + 1:end_quote]
        after = _skip_spaces(line, end_quote + 1)
        for closer, shape in closers:
            if line.startswith(closer, after):
                return label, shape, after + len(closer)
        raise DiagramParseError("Unterminated node shape", line_no, line)

    best = None
    for closer, shape in closers:
        index = line.find(closer, pos)
        if index != -1 and (best is None or index < best[0]):
            best = (index, closer, shape)

    if best is None:
        raise DiagramParseError("Unterminated node shape", line_no, line)

    index, closer, shape = best
    return line[pos:index].strip(), shape, index + len(closer)


def _read_node(line: str, pos: int, line_no: int) -> Optional[Tuple[_NodeToken, int]]:
    match = NODE_ID_RE.match(line, pos)
    if not match:
        return None

    token = _NodeToken(node_id=match.group(0))
    pos = match.end()

    for opener, closers in SHAPE_DELIMITERS:
        if line.startswith(opener, pos):
            label, shape, pos = _read_label(line, pos + len(opener), closers, line_no)
            token.label = label
            token.shape = shape
            break

    return token, pos


def _parse_statement(line: str, line_no: int) -> Optional[Tuple[List[_NodeToken], List[Edge]]]:
    """
    Parse `node (--> [|label|] node)*`.

    Returns None when the line is not a statement this grammar knows, so the
    caller can skip it.
    """
    first = _read_node(line, 0, line_no)
    if first is None:
        return None

    token, pos = first
    tokens = [token]
    edges: List[Edge] = []

    while True:
        pos = _skip_spaces(line, pos)
        if pos >= len(line) or line[pos:] == ";":
            return tokens, edges

        if not line.startswith(ARROW, pos):
            return None

        pos = _skip_spaces(line, pos + len(ARROW))

        label = None
        if pos < len(line) and line[pos] == "|":
            close = line.find("|", pos + 1)
            if close == -1:
                raise DiagramParseError("Unterminated edge label", line_no, line)
            label = line[pos + 1:close].strip() or None
            pos = _skip_spaces(line, close + 1)

        target = _read_node(line, pos, line_no)
        if target is None:
            raise DiagramParseError("Edge arrow has no target node", line_no, line)

        next_token, pos = target
        edges.append(Edge(source=tokens[-1].node_id, target=next_token.node_id, label=label))
        tokens.append(next_token)


def _parse_click(line: str, line_no: int) -> Optional[NodeReference]:
    if line.count('"') % 2:
        raise DiagramParseError("Unbalanced quotes in click binding", line_no, line)

    match = CLICK_RE.match(line)
    if not match:
        return None

    action = match.group("action")
    if not action:
        raise DiagramParseError("Click binding has an empty action", line_no, line)

    return NodeReference(
        node_id=match.group("node"),
        section_id=action.lstrip("#"),
        click_action=action,
        tooltip=match.group("tooltip"),
    )


# ============================================================
# ENTRY POINT
# ============================================================

def parse_flowchart(code: str) -> Graph:
    """
    Parse flowchart text into a Graph of nodes, edges and node references.

    Line order does not matter. Edges to undeclared ids create bare nodes
    (empty label). Raises DiagramParseError with the 1-based line number of
    the offending line.
    """
    body, offset = strip_fences(code or "")
    builder = _GraphBuilder()
    skipped = 0

    for index, raw_line in enumerate(body.splitlines()):
        line_no = offset + index + 1
        line = raw_line.strip()

        if not line or MERMAID_DIRECTIVE_RE.match(line) or IGNORED_LINE_RE.match(line):
            continue

        if CLICK_PREFIX_RE.match(line):
            ref = _parse_click(line, line_no)
            if ref is None:
                logger.debug("Skipping unsupported click binding at line %d: %r", line_no, line)
                skipped += 1
            else:
                builder.refs.append(ref)
            continue

        statement = _parse_statement(line, line_no)
        if statement is None:
            logger.debug("Skipping unrecognized diagram line %d: %r", line_no, line)
            skipped += 1
            continue

        tokens, edges = statement
        for token in tokens:
            builder.add_node(token)
        builder.edges.extend(edges)

    graph = builder.build()
    logger.debug(
        "Parsed flowchart: %d nodes, %d edges, %d node refs, %d lines skipped",
        len(graph.nodes),
        len(graph.edges),
        len(graph.node_refs),
        skipped,
    )
    return graph


def validate_mermaid(code: str) -> bool:
    """Cheap check that the text parses under this grammar."""
    try:
        parse_flowchart(code)
    except DiagramParseError:
        return False
    return True
