import pytest
from pydantic import ValidationError as ModelValidationError

from conftest import SCENARIO_DIAGRAM, build_document, section_xml
from contextdoc import (
    DiagramParseError,
    GraphValidationError,
    StructuralParseError,
    ValidationError,
    load_document,
    load_flow_graph,
    load_metadata,
    load_sections,
)
from contextdoc.ir import ShapeKind, ValidationSeverity
from contextdoc.pipeline import DocumentAssembler, assemble_document


def test_end_to_end_scenario(scenario_text):
    document = load_document(scenario_text)

    assert document.sections[0].content == "Goal: Ship v1"
    assert document.section_ids == ("intent-1", "eval-1")

    graph = document.diagram.graph
    assert [(n.id, n.shape) for n in graph.nodes] == [
        ("A", ShapeKind.RECTANGLE),
        ("B", ShapeKind.RECTANGLE),
    ]
    assert [(e.source, e.target, e.label) for e in graph.edges] == [("A", "B", None)]
    assert [(r.node_id, r.section_id) for r in graph.node_refs] == [("A", "intent-1")]

    assert document.warnings == ()
    assert document.diagram_error is None


def test_unresolved_placeholder_becomes_info_warning():
    text = build_document(sections=[section_xml("p-1", "process", "Hello ${missing}")])

    document = load_document(text)

    assert document.sections[0].content == "Hello ${missing}"
    assert [w.kind.value for w in document.warnings] == ["unresolved-variable"]
    assert document.warnings[0].severity == ValidationSeverity.INFO


def test_nested_section_never_yields_a_document():
    nested = (
        '<section id="a" type="intent"><content>x</content>'
        '<section id="b" type="intent"><content>y</content></section></section>'
    )
    with pytest.raises(StructuralParseError):
        load_document(build_document(sections=[nested]))


def test_duplicate_section_ids_abort_assembly():
    text = build_document(sections=[
        section_xml("intent-1", "intent", "a"),
        section_xml("intent-1", "evaluation", "b"),
    ])

    with pytest.raises(ValidationError) as exc_info:
        load_document(text)

    assert [v.kind.value for v in exc_info.value.violations] == ["duplicate-id"]


def test_validation_runs_before_resolution():
    text = build_document(
        sections=[section_xml("s1", "bogus", "${goal}")],
        variables=[("goal", "Ship v1")],
    )

    with pytest.raises(ValidationError) as exc_info:
        load_document(text)

    error = exc_info.value.to_dict()
    assert error["type"] == "validation"
    assert error["violations"][0]["kind"] == "invalid-enum-value"


def _dangling_text():
    return build_document(
        sections=[section_xml("intent-1", "intent", "x")],
        diagram='flowchart TD\nA-->B\nclick A "#eval-9"',
    )


def test_dangling_reference_blocks_in_strict_mode():
    with pytest.raises(GraphValidationError) as exc_info:
        load_document(_dangling_text(), strict=True)

    assert [v.kind.value for v in exc_info.value.violations] == ["dangling-reference"]


def test_dangling_reference_is_a_warning_when_not_strict():
    document = load_document(_dangling_text(), strict=False)

    assert [w.kind.value for w in document.warnings] == ["dangling-reference"]
    assert document.diagram.graph is not None


def test_self_loop_never_blocks():
    text = build_document(
        sections=[section_xml("intent-1", "intent", "x")],
        diagram="flowchart TD\nA --> A",
    )

    document = load_document(text, strict=True)

    assert [w.kind.value for w in document.warnings] == ["self-reference"]


def test_undeclared_edge_endpoint_still_assembles():
    text = build_document(
        sections=[section_xml("intent-1", "intent", "x")],
        diagram="flowchart TD\nA[Start] --> Ghost",
    )

    graph = load_document(text).diagram.graph

    assert graph.node("Ghost").label == ""


def _broken_diagram_text():
    return build_document(
        sections=[section_xml("intent-1", "intent", "Goal: ${goal}")],
        variables=[("goal", "Ship v1")],
        diagram="flowchart TD\nA[Unclosed",
    )


def test_diagram_error_propagates_by_default():
    with pytest.raises(DiagramParseError) as exc_info:
        load_document(_broken_diagram_text(), allow_partial=False)

    assert exc_info.value.line == 2


def test_partial_mode_keeps_sections():
    document = load_document(_broken_diagram_text(), allow_partial=True)

    assert document.sections[0].content == "Goal: Ship v1"
    assert document.diagram.graph is None
    assert "Unterminated node shape" in document.diagram_error


def test_fast_path_skips_diagram_grammar():
    sections = load_sections(_broken_diagram_text())

    assert [s.content for s in sections] == ["Goal: Ship v1"]


def test_fast_path_document_keeps_raw_diagram(scenario_text):
    document = DocumentAssembler().assemble_sections(scenario_text)

    assert document.diagram.source == SCENARIO_DIAGRAM
    assert document.diagram.graph is None


def test_load_flow_graph(scenario_text, sections_only_text):
    diagram = load_flow_graph(scenario_text)

    assert diagram.id == "flow-1"
    assert len(diagram.graph.nodes) == 2
    assert load_flow_graph(sections_only_text) is None


def test_load_metadata(sections_only_text):
    metadata = load_metadata(sections_only_text)

    assert metadata.title == "Release plan"
    assert metadata.app.version == "0.1.0"


def test_config_defaults_apply(monkeypatch, scenario_text):
    from contextdoc import config

    monkeypatch.setattr(config, "STRICT_GRAPH", False)
    monkeypatch.setattr(config, "ALLOW_PARTIAL", True)

    assembler = DocumentAssembler()
    assert assembler.strict is False
    assert assembler.allow_partial is True

    assert assemble_document(scenario_text).sections[0].content == "Goal: Ship v1"


def test_documents_are_immutable(scenario_text):
    document = load_document(scenario_text)

    with pytest.raises(ModelValidationError):
        document.sections[0].content = "changed"
