"""
Text grammars: the context document markup and the flowchart mini-language.
"""

from contextdoc.dsl.context_xml import parse_document
from contextdoc.dsl.mermaid import parse_flowchart, strip_fences, validate_mermaid

__all__ = [
    "parse_document",
    "parse_flowchart",
    "strip_fences",
    "validate_mermaid",
]
