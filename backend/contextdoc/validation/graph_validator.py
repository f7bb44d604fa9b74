"""
Graph Validator - checks the Graph derived from a document's flowchart and
cross-checks its node references against the document's section ids.

Catches:
- Node references to sections that do not exist (dangling references)
- Duplicate node ids
- Self-loop edges (warning: legal, usually unintended)

Connectivity is reported in the stats, never enforced: disconnected
branches are a legitimate document pattern.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Set

from contextdoc.ir.errors import ValidationSeverity, Violation, ViolationKind
from contextdoc.ir.flow_graph import Graph
from contextdoc.ir.validation import ValidationResult


class GraphValidator:
    """
    Usage:
        validator = GraphValidator()
        result = validator.validate(graph, document.section_ids)

        if not result.is_valid:
            for v in result.violations:
                print(f"[{v.severity.value}] {v.message}")
    """

    def __init__(self, strict_mode: bool = False):
        self.strict_mode = strict_mode

    def validate(self, graph: Graph, section_ids: Iterable[str]) -> ValidationResult:
        known_sections = set(section_ids)
        violations: List[Violation] = []

        violations.extend(self._check_dangling_references(graph, known_sections))
        violations.extend(self._check_duplicate_node_ids(graph))
        violations.extend(self._check_self_loops(graph))

        return ValidationResult.from_violations(
            violations,
            strict=self.strict_mode,
            stats=self._calculate_stats(graph),
        )

    def _check_dangling_references(self, graph: Graph, known_sections: Set[str]) -> List[Violation]:
        violations = []
        for ref in graph.node_refs:
            if ref.section_id not in known_sections:
                violations.append(Violation(
                    kind=ViolationKind.DANGLING_REFERENCE,
                    message=(
                        f"Node '{ref.node_id}' references section '{ref.section_id}' "
                        "which does not exist"
                    ),
                    object_id=ref.node_id,
                ))
        return violations

    def _check_duplicate_node_ids(self, graph: Graph) -> List[Violation]:
        violations = []
        seen_ids: Dict[str, int] = defaultdict(int)
        for node in graph.nodes:
            seen_ids[node.id] += 1
        for node_id, count in seen_ids.items():
            if count > 1:
                violations.append(Violation(
                    kind=ViolationKind.DUPLICATE_NODE_ID,
                    message=f"Duplicate node ID '{node_id}' appears {count} times",
                    object_id=node_id,
                ))
        return violations

    def _check_self_loops(self, graph: Graph) -> List[Violation]:
        violations = []
        for edge in graph.edges:
            if edge.is_self_loop:
                violations.append(Violation(
                    kind=ViolationKind.SELF_REFERENCE,
                    severity=ValidationSeverity.WARNING,
                    message=f"Edge creates self-loop on node '{edge.source}'",
                    object_id=edge.source,
                ))
        return violations

    def _calculate_stats(self, graph: Graph) -> Dict[str, int]:
        node_ids = {node.id for node in graph.nodes}
        connected = set()
        for edge in graph.edges:
            connected.add(edge.source)
            connected.add(edge.target)

        return {
            "nodes": len(graph.nodes),
            "edges": len(graph.edges),
            "node_refs": len(graph.node_refs),
            "linked_nodes": sum(1 for n in graph.nodes if n.ref_section_id),
            "isolated_nodes": len(node_ids - connected),
        }


def reachable_from(graph: Graph, start: str) -> Set[str]:
    """Node ids reachable from `start` along edge direction, `start` included."""
    adjacency: Dict[str, Set[str]] = defaultdict(set)
    for edge in graph.edges:
        adjacency[edge.source].add(edge.target)

    if start not in adjacency and graph.node(start) is None:
        return set()

    visited = {start}
    pending = [start]
    while pending:
        current = pending.pop()
        for neighbor in adjacency.get(current, ()):
            if neighbor not in visited:
                visited.add(neighbor)
                pending.append(neighbor)
    return visited


def isolated_nodes(graph: Graph) -> List[str]:
    connected = {e.source for e in graph.edges} | {e.target for e in graph.edges}
    return [n.id for n in graph.nodes if n.id not in connected]


def validate_graph(graph: Graph, section_ids: Iterable[str], strict: bool = False) -> ValidationResult:
    """Convenience function to validate a graph against a section id set."""
    validator = GraphValidator(strict_mode=strict)
    return validator.validate(graph, section_ids)


def get_validation_summary(graph: Graph, section_ids: Iterable[str]) -> str:
    result = validate_graph(graph, section_ids)
    return result.get_summary()
