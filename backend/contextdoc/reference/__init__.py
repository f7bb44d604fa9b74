from contextdoc.reference.resolver import (
    PLACEHOLDER_RE,
    build_variable_map,
    find_placeholders,
    resolve,
    resolve_sections,
    unresolved_placeholders,
)

__all__ = [
    "PLACEHOLDER_RE",
    "build_variable_map",
    "find_placeholders",
    "resolve",
    "resolve_sections",
    "unresolved_placeholders",
]
