from typing import Any, Dict

from contextdoc.ir.document import Document
from contextdoc.ir.errors import ContextDocError


def to_wire(document: Document) -> Dict[str, Any]:
    """
    JSON-compatible view of an assembled Document.

    camelCase keys, edges as from/to, optional fields omitted when unset.
    Deterministic: section, node and edge order follow the source.
    """
    payload = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    payload["warnings"] = [v.to_dict() for v in document.warnings]
    return payload


def error_to_wire(error: ContextDocError) -> Dict[str, Any]:
    return error.to_dict()
