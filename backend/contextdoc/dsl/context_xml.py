"""
Structural parser for context documents.

Turns raw document text into a typed Document:

    <context version="1.0">
      <meta>...</meta>
      <variables><var name="goal">Ship v1</var></variables>
      <sections><section id="intent-1" type="intent"><content>..</content></section></sections>
      <flow id="flow-1" version="1.0"><title>..</title><diagram>..</diagram></flow>
    </context>

Built directly on expat so that every element keeps the line/column it was
declared at. Parsing is fail-fast: the first structural break raises
StructuralParseError. Field-level problems (missing attributes, bad enum
values, duplicate ids) are left in the tree for the structural validator,
which reports all of them at once.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from xml.parsers import expat

from contextdoc.ir.document import AppInfo, Document, Metadata, Variable
from contextdoc.ir.errors import StructuralParseError
from contextdoc.ir.flow_graph import Diagram
from contextdoc.ir.section import Section

logger = logging.getLogger(__name__)

ROOT_TAG = "context"
REQUIRED_CONTAINERS = ("meta", "variables", "sections")
OPTIONAL_CONTAINERS = ("flow",)
META_TEXT_FIELDS = ("title", "author", "created", "description")


@dataclass
class _Element:
    tag: str
    attrs: Dict[str, str]
    line: int
    column: int
    children: List["_Element"] = field(default_factory=list)
    text_parts: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.text_parts)

    def find_all(self, tag: str) -> List["_Element"]:
        return [c for c in self.children if c.tag == tag]

    def find_one(self, tag: str) -> Optional["_Element"]:
        """Return the single child named `tag`; a repeated child is a structural error."""
        found = self.find_all(tag)
        if len(found) > 1:
            dup = found[1]
            raise StructuralParseError(
                f"Element <{self.tag}> contains more than one <{tag}> element",
                dup.line,
                dup.column,
            )
        return found[0] if found else None


# ============================================================
# TREE BUILDING (EXPAT)
# ============================================================

def _build_tree(text: str) -> _Element:
    parser = expat.ParserCreate()
    parser.buffer_text = True

    stack: List[_Element] = []
    roots: List[_Element] = []

    def position():
        return parser.CurrentLineNumber, parser.CurrentColumnNumber + 1

    def start_element(tag, attrs):
        line, column = position()
        element = _Element(tag=tag, attrs=dict(attrs), line=line, column=column)

        if tag == "section":
            outer = next((e for e in reversed(stack) if e.tag == "section"), None)
            if outer is not None:
                outer_id = outer.attrs.get("id", "?")
                inner_id = element.attrs.get("id", "?")
                raise StructuralParseError(
                    f"Section '{outer_id}' contains nested section '{inner_id}'. "
                    "Section nesting is not allowed - all sections must be direct "
                    "children of <sections>",
                    line,
                    column,
                )

        if stack:
            stack[-1].children.append(element)
        else:
            roots.append(element)
        stack.append(element)

    def end_element(tag):
        stack.pop()

    def character_data(data):
        if stack:
            stack[-1].text_parts.append(data)

    def reject_dtd(*args):
        line, column = position()
        raise StructuralParseError(
            "DOCTYPE and entity declarations are not allowed", line, column
        )

    parser.StartElementHandler = start_element
    parser.EndElementHandler = end_element
    parser.CharacterDataHandler = character_data
    parser.StartDoctypeDeclHandler = reject_dtd
    parser.EntityDeclHandler = reject_dtd

    try:
        parser.Parse(text, True)
    except expat.ExpatError as exc:
        raise StructuralParseError(
            f"Malformed document: {expat.ErrorString(exc.code)}",
            exc.lineno,
            exc.offset + 1,
        ) from exc

    if not roots:
        raise StructuralParseError("Document has no root element", 1, 1)
    return roots[0]


# ============================================================
# TYPED ENTITIES
# ============================================================

def _trimmed_text(element: Optional[_Element]) -> Optional[str]:
    if element is None:
        return None
    return element.text.strip()


def _parse_meta(meta: _Element) -> Metadata:
    values = {name: _trimmed_text(meta.find_one(name)) for name in META_TEXT_FIELDS}

    app = None
    app_el = meta.find_one("app")
    if app_el is not None:
        app = AppInfo(name=app_el.attrs.get("name"), version=app_el.attrs.get("version"))

    tags = None
    tags_text = _trimmed_text(meta.find_one("tags"))
    if tags_text is not None:
        tags = tuple(t.strip() for t in tags_text.split(",") if t.strip())

    return Metadata(app=app, tags=tags, **values)


def _parse_variables(container: _Element) -> List[Variable]:
    return [
        Variable(name=var.attrs.get("name"), value=var.text.strip())
        for var in container.find_all("var")
    ]


def _parse_section(element: _Element) -> Section:
    content_el = element.find_one("content")

    return Section(
        id=element.attrs.get("id"),
        section_type=element.attrs.get("type"),
        # verbatim: no trimming, no re-indentation
        content=content_el.text if content_el is not None else None,
        ref_target=element.attrs.get("refTarget"),
        line=element.line,
        column=element.column,
    )


def _parse_flow(element: _Element) -> Diagram:
    diagram_el = element.find_one("diagram")

    return Diagram(
        id=element.attrs.get("id"),
        version=element.attrs.get("version"),
        title=_trimmed_text(element.find_one("title")),
        source=diagram_el.text if diagram_el is not None else "",
    )


def parse_document(text: str) -> Document:
    """
    Parse raw document text into a Document.

    Raises StructuralParseError (with line/column) when the text is not a
    well-formed context document: malformed markup, wrong root, missing
    version, missing or repeated containers, nested sections.
    """
    if not isinstance(text, str):
        raise StructuralParseError(f"Document text must be str, got {type(text).__name__}")

    root = _build_tree(text)

    if root.tag != ROOT_TAG:
        raise StructuralParseError(
            f"Root element must be '{ROOT_TAG}', found '{root.tag}'", root.line, root.column
        )

    version = root.attrs.get("version")
    if version is None or not version.strip():
        raise StructuralParseError(
            f"Root element '{ROOT_TAG}' must have a 'version' attribute",
            root.line,
            root.column,
        )

    containers = {}
    for name in REQUIRED_CONTAINERS + OPTIONAL_CONTAINERS:
        containers[name] = root.find_one(name)

    for name in REQUIRED_CONTAINERS:
        if containers[name] is None:
            raise StructuralParseError(
                f"Required element '{name}' is missing", root.line, root.column
            )

    known = set(REQUIRED_CONTAINERS + OPTIONAL_CONTAINERS)
    for child in root.children:
        if child.tag not in known:
            logger.debug("Ignoring unknown element <%s> at line %d", child.tag, child.line)

    sections = [_parse_section(s) for s in containers["sections"].find_all("section")]
    flow = containers["flow"]

    document = Document(
        version=version.strip(),
        metadata=_parse_meta(containers["meta"]),
        variables=_parse_variables(containers["variables"]),
        sections=sections,
        diagram=_parse_flow(flow) if flow is not None else None,
    )

    logger.debug(
        "Parsed document: %d variables, %d sections, diagram=%s",
        len(document.variables),
        len(document.sections),
        document.diagram is not None,
    )
    return document
