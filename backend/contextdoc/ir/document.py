from datetime import date, datetime
from typing import Optional, Tuple

from pydantic import Field

from .base import BaseIR
from .errors import Violation
from .flow_graph import Diagram
from .section import Section


class AppInfo(BaseIR):
    name: Optional[str] = None
    version: Optional[str] = None


class Metadata(BaseIR):
    # None means the element was absent from the source text
    title: Optional[str] = None
    author: Optional[str] = None
    created: Optional[str] = None
    app: Optional[AppInfo] = None
    tags: Optional[Tuple[str, ...]] = None
    description: Optional[str] = None

    @property
    def created_at(self) -> Optional[datetime]:
        if self.created is None:
            return None
        return parse_timestamp(self.created)


class Variable(BaseIR):
    name: Optional[str] = None
    value: str = ""


class Document(BaseIR):
    version: Optional[str] = None
    metadata: Metadata = Field(default_factory=Metadata)
    variables: Tuple[Variable, ...] = ()
    sections: Tuple[Section, ...] = ()
    diagram: Optional[Diagram] = None

    # Non-blocking violations collected during assembly
    warnings: Tuple[Violation, ...] = Field(default=(), exclude=True)
    # Set only when the diagram failed to parse in partial-success mode
    diagram_error: Optional[str] = None

    @property
    def section_ids(self) -> Tuple[str, ...]:
        return tuple(s.id for s in self.sections if s.id is not None)

    def section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time. Returns None when invalid."""
    candidate = value.strip()
    if not candidate:
        return None
    if candidate[-1] in "Zz":
        candidate = candidate[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass

    try:
        day = date.fromisoformat(candidate)
    except ValueError:
        return None
    return datetime(day.year, day.month, day.day)
