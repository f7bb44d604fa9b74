import re
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from contextdoc.ir.document import Variable
from contextdoc.ir.section import Section

PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

VariableSource = Union[Mapping[str, str], Iterable[Variable]]


def build_variable_map(variables: VariableSource) -> Dict[str, str]:
    if isinstance(variables, Mapping):
        return dict(variables)

    # later definitions win; duplicates are reported by the structural validator
    return {v.name: v.value for v in variables if v.name is not None}


def resolve(text: str, variables: VariableSource) -> str:
    """
    Substitute ${name} placeholders in a single left-to-right pass.

    Unknown names are left verbatim. Substituted values are never scanned
    again, so a value containing ${...} cannot trigger further substitution.
    """
    lookup = build_variable_map(variables)
    return PLACEHOLDER_RE.sub(lambda m: lookup.get(m.group(1), m.group(0)), text)


def find_placeholders(text: str) -> List[str]:
    return [m.group(1) for m in PLACEHOLDER_RE.finditer(text)]


def unresolved_placeholders(text: str, variables: VariableSource) -> List[str]:
    lookup = build_variable_map(variables)
    missing: List[str] = []
    for name in find_placeholders(text):
        if name not in lookup and name not in missing:
            missing.append(name)
    return missing


def resolve_sections(sections: Iterable[Section], variables: VariableSource) -> Tuple[Section, ...]:
    lookup = build_variable_map(variables)
    return tuple(
        s if s.content is None else s.model_copy(update={"content": resolve(s.content, lookup)})
        for s in sections
    )
