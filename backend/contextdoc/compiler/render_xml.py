# backend/contextdoc/compiler/render_xml.py

from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

from contextdoc.ir.document import Document, Metadata
from contextdoc.ir.flow_graph import Diagram
from contextdoc.ir.section import Section

INDENT = "  "


def _cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA block; split it across two blocks
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _attrs(**values: Optional[str]) -> str:
    rendered = "".join(
        f" {key}={quoteattr(value)}" for key, value in values.items() if value is not None
    )
    return rendered


def _text_element(tag: str, value: Optional[str], depth: int) -> List[str]:
    if value is None:
        return []
    return [f"{INDENT * depth}<{tag}>{escape(value)}</{tag}>"]


def render_metadata(meta: Metadata, depth: int = 1) -> List[str]:
    pad = INDENT * depth
    lines = [f"{pad}<meta>"]
    lines += _text_element("title", meta.title, depth + 1)
    lines += _text_element("author", meta.author, depth + 1)
    lines += _text_element("created", meta.created, depth + 1)

    if meta.app is not None:
        lines.append(f"{pad}{INDENT}<app{_attrs(name=meta.app.name, version=meta.app.version)}/>")

    if meta.tags is not None:
        lines += _text_element("tags", ", ".join(meta.tags), depth + 1)

    lines += _text_element("description", meta.description, depth + 1)
    lines.append(f"{pad}</meta>")
    return lines


def render_section(section: Section, depth: int = 2) -> List[str]:
    pad = INDENT * depth
    attrs = _attrs(id=section.id, type=section.section_type, refTarget=section.ref_target)

    lines = [f"{pad}<section{attrs}>"]
    if section.content is not None:
        lines.append(f"{pad}{INDENT}<content>{_cdata(section.content)}</content>")
    lines.append(f"{pad}</section>")
    return lines


def render_flow(diagram: Diagram, depth: int = 1) -> List[str]:
    pad = INDENT * depth
    lines = [f"{pad}<flow{_attrs(id=diagram.id, version=diagram.version)}>"]
    lines += _text_element("title", diagram.title, depth + 1)
    lines.append(f"{pad}{INDENT}<diagram>{_cdata(diagram.source)}</diagram>")
    lines.append(f"{pad}</flow>")
    return lines


def render_document(document: Document) -> str:
    """
    Render a Document back into context document markup.

    Content and diagram text go into CDATA verbatim. Sections are written
    flat. Render the parsed (unresolved) document to keep ${...} placeholders;
    an assembled document carries resolved content.
    """
    lines = ['<?xml version="1.0" encoding="UTF-8"?>']
    lines.append(f"<context{_attrs(version=document.version or '1.0')}>")

    lines += render_metadata(document.metadata)

    lines.append(f"{INDENT}<variables>")
    for var in document.variables:
        lines.append(f"{INDENT * 2}<var{_attrs(name=var.name)}>{escape(var.value)}</var>")
    lines.append(f"{INDENT}</variables>")

    lines.append(f"{INDENT}<sections>")
    for section in document.sections:
        lines += render_section(section)
    lines.append(f"{INDENT}</sections>")

    if document.diagram is not None:
        lines += render_flow(document.diagram)

    lines.append("</context>")
    return "\n".join(lines) + "\n"
