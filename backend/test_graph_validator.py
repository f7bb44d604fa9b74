from contextdoc.dsl import parse_flowchart
from contextdoc.ir import Edge, Graph, Node, ValidationSeverity
from contextdoc.validation import (
    get_validation_summary,
    isolated_nodes,
    reachable_from,
    validate_graph,
)


def test_clean_graph_is_valid():
    graph = parse_flowchart('flowchart TD\nA-->B\nclick A "#intent-1"')

    result = validate_graph(graph, ["intent-1", "eval-1"])

    assert result.is_valid
    assert result.violations == []
    assert result.stats == {
        "nodes": 2,
        "edges": 1,
        "node_refs": 1,
        "linked_nodes": 1,
        "isolated_nodes": 0,
    }


def test_dangling_reference_is_reported_once():
    graph = parse_flowchart('flowchart TD\nA-->B\nclick A "#nowhere"')

    result = validate_graph(graph, ["intent-1"])

    assert not result.is_valid
    assert result.kinds() == ["dangling-reference"]
    assert result.violations[0].object_id == "A"
    assert "nowhere" in result.violations[0].message


def test_duplicate_node_ids():
    graph = Graph(nodes=(Node(id="A"), Node(id="A", label="again"), Node(id="B")))

    result = validate_graph(graph, [])

    assert result.kinds() == ["duplicate-node-id"]
    assert "2 times" in result.violations[0].message


def test_self_loop_is_a_warning():
    graph = parse_flowchart("flowchart TD\nA --> A")

    result = validate_graph(graph, [])

    assert result.is_valid
    assert result.kinds() == ["self-reference"]
    assert result.violations[0].severity == ValidationSeverity.WARNING
    assert result.warning_count == 1


def test_strict_validator_rejects_warnings():
    graph = parse_flowchart("flowchart TD\nA --> A")

    assert not validate_graph(graph, [], strict=True).is_valid


def test_isolated_nodes_are_reported_not_enforced():
    graph = parse_flowchart("flowchart TD\nA --> B\nC[Alone]\nD --> E")

    result = validate_graph(graph, [])

    assert result.is_valid
    assert result.stats["isolated_nodes"] == 1
    assert isolated_nodes(graph) == ["C"]


def test_reachable_from():
    graph = Graph(
        nodes=(Node(id="A"), Node(id="B"), Node(id="C"), Node(id="D")),
        edges=(Edge(source="A", target="B"), Edge(source="B", target="C"), Edge(source="D", target="A")),
    )

    assert reachable_from(graph, "A") == {"A", "B", "C"}
    assert reachable_from(graph, "C") == {"C"}
    assert reachable_from(graph, "missing") == set()


def test_summary():
    graph = parse_flowchart('flowchart TD\nA --> A\nclick A "#gone"')

    assert get_validation_summary(graph, []) == "Invalid | Errors: 1, Warnings: 1"
