"""Shared document fixtures for the test modules in this directory."""

import pytest

FULL_META = """<meta>
    <title>Release plan</title>
    <author>Test Author</author>
    <created>2025-10-09T20:20:32+00:00</created>
    <app name="CEC" version="0.1.0"/>
    <tags>planning, release, v1</tags>
    <description>Plan for the first release</description>
  </meta>"""


def section_xml(section_id, section_type, content, ref_target=None):
    attrs = []
    if section_id is not None:
        attrs.append(f'id="{section_id}"')
    if section_type is not None:
        attrs.append(f'type="{section_type}"')
    if ref_target is not None:
        attrs.append(f'refTarget="{ref_target}"')

    body = "" if content is None else f"<content><![CDATA[{content}]]></content>"
    return f"<section {' '.join(attrs)}>{body}</section>"


def build_document(sections=(), variables=(), diagram=None, meta=FULL_META, version="1.0"):
    """
    Build document text.

    sections: section_xml() strings; variables: (name, value) pairs;
    diagram: flowchart text placed in a <flow> element when given.
    """
    var_lines = "\n    ".join(f'<var name="{name}">{value}</var>' for name, value in variables)
    section_lines = "\n    ".join(sections)

    flow = ""
    if diagram is not None:
        flow = (
            '\n  <flow id="flow-1" version="1.0">\n'
            "    <title>Document Flow</title>\n"
            f"    <diagram><![CDATA[{diagram}]]></diagram>\n"
            "  </flow>"
        )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<context version="{version}">\n'
        f"  {meta}\n"
        f"  <variables>\n    {var_lines}\n  </variables>\n"
        f"  <sections>\n    {section_lines}\n  </sections>{flow}\n"
        "</context>\n"
    )


SCENARIO_DIAGRAM = 'flowchart TD\nA[Intent]-->B[Eval]\nclick A "#intent-1" "go"'


@pytest.fixture
def scenario_text():
    return build_document(
        sections=[
            section_xml("intent-1", "intent", "Goal: ${goal}"),
            section_xml("eval-1", "evaluation", "Check the plan"),
        ],
        variables=[("goal", "Ship v1")],
        diagram=SCENARIO_DIAGRAM,
    )


@pytest.fixture
def sections_only_text():
    return build_document(
        sections=[
            section_xml("intent-1", "intent", "Goal: ${goal}", ref_target="eval-1"),
            section_xml("eval-1", "evaluation", "Done when ${goal} is out"),
        ],
        variables=[("goal", "Ship v1")],
    )
