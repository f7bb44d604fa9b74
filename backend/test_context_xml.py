import pytest

from conftest import FULL_META, build_document, section_xml
from contextdoc.dsl.context_xml import parse_document
from contextdoc.ir import StructuralParseError


def test_parses_metadata_variables_and_sections(sections_only_text):
    document = parse_document(sections_only_text)

    assert document.version == "1.0"
    assert document.metadata.title == "Release plan"
    assert document.metadata.author == "Test Author"
    assert document.metadata.app.name == "CEC"
    assert document.metadata.app.version == "0.1.0"
    assert document.metadata.tags == ("planning", "release", "v1")
    assert document.metadata.created_at.year == 2025

    assert [(v.name, v.value) for v in document.variables] == [("goal", "Ship v1")]
    assert document.section_ids == ("intent-1", "eval-1")

    intent = document.section("intent-1")
    assert intent.section_type == "intent"
    assert intent.ref_target == "eval-1"
    # placeholders stay as authored
    assert intent.content == "Goal: ${goal}"
    assert document.diagram is None


def test_content_is_kept_verbatim():
    content = "  line one\n\n    indented <b>markup</b> & more\n"
    document = parse_document(build_document(sections=[section_xml("p-1", "process", content)]))

    assert document.sections[0].content == content


def test_section_records_source_position():
    document = parse_document(build_document(sections=[section_xml("p-1", "process", "x")]))

    section = document.sections[0]
    assert section.line is not None and section.line > 1
    assert section.column is not None


def test_missing_fields_are_left_for_the_validator():
    text = build_document(sections=[section_xml(None, None, None)], meta="<meta/>")
    document = parse_document(text)

    section = document.sections[0]
    assert section.id is None
    assert section.section_type is None
    assert section.content is None
    assert document.metadata.title is None
    assert document.metadata.tags is None


def test_empty_tags_are_dropped():
    meta = FULL_META.replace("planning, release, v1", " a, , b ,")
    document = parse_document(build_document(meta=meta))

    assert document.metadata.tags == ("a", "b")


def test_flow_element_becomes_diagram():
    document = parse_document(build_document(diagram="flowchart TD\nA --> B"))

    assert document.diagram.id == "flow-1"
    assert document.diagram.version == "1.0"
    assert document.diagram.title == "Document Flow"
    assert document.diagram.source == "flowchart TD\nA --> B"
    assert document.diagram.graph is None


def test_nested_section_is_fatal():
    nested = (
        '<section id="outer" type="intent"><content>a</content>'
        '<section id="inner" type="process"><content>b</content></section>'
        "</section>"
    )
    with pytest.raises(StructuralParseError) as exc_info:
        parse_document(build_document(sections=[nested]))

    assert "nested section 'inner'" in str(exc_info.value)
    assert exc_info.value.line is not None


def test_malformed_markup_reports_position():
    text = '<context version="1.0">\n  <meta>\n</context>'

    with pytest.raises(StructuralParseError) as exc_info:
        parse_document(text)

    assert exc_info.value.line == 3
    assert exc_info.value.column is not None


@pytest.mark.parametrize("text, fragment", [
    ('<document version="1.0"><meta/><variables/><sections/></document>', "Root element must be"),
    ("<context><meta/><variables/><sections/></context>", "'version' attribute"),
    ('<context version="1.0"><meta/><sections/></context>', "'variables' is missing"),
    ('<context version="1.0"><meta/><meta/><variables/><sections/></context>', "more than one <meta>"),
    ("", "Malformed document"),
])
def test_structural_errors(text, fragment):
    with pytest.raises(StructuralParseError) as exc_info:
        parse_document(text)

    assert fragment in str(exc_info.value)


def test_doctype_is_rejected():
    text = (
        '<?xml version="1.0"?>\n'
        '<!DOCTYPE context [<!ENTITY x "boom">]>\n'
        '<context version="1.0"><meta/><variables/><sections/></context>'
    )
    with pytest.raises(StructuralParseError, match="DOCTYPE"):
        parse_document(text)


def test_non_text_input_is_rejected():
    with pytest.raises(StructuralParseError):
        parse_document(b"<context/>")


def test_unknown_elements_are_ignored():
    text = build_document(sections=[section_xml("p-1", "process", "x")]).replace(
        "<variables>", "<extra>ignored</extra>\n  <variables>"
    )
    document = parse_document(text)

    assert document.section_ids == ("p-1",)
