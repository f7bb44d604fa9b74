"""
Validation module for document structure and diagram graphs.
"""

from contextdoc.validation.structure_validator import (
    StructureValidator,
    validate_structure,
)

from contextdoc.validation.graph_validator import (
    GraphValidator,
    get_validation_summary,
    isolated_nodes,
    reachable_from,
    validate_graph,
)

__all__ = [
    "GraphValidator",
    "StructureValidator",
    "get_validation_summary",
    "isolated_nodes",
    "reachable_from",
    "validate_graph",
    "validate_structure",
]
