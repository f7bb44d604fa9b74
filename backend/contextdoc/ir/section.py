from enum import Enum
from typing import Optional, Tuple

from pydantic import Field

from .base import BaseIR


class SectionType(str, Enum):
    INTENT = "intent"
    EVALUATION = "evaluation"
    PROCESS = "process"
    ALTERNATIVES = "alternatives"

    @classmethod
    def values(cls) -> Tuple[str, ...]:
        return tuple(member.value for member in cls)


class Section(BaseIR):
    id: Optional[str] = None
    section_type: Optional[str] = Field(default=None, alias="type")  # raw tag, see SectionType
    content: Optional[str] = None
    ref_target: Optional[str] = None

    # Always empty for parsed documents; only hand-built documents can nest
    children: Tuple["Section", ...] = Field(default=(), exclude=True)

    # Position of the <section> element in the source text
    line: Optional[int] = Field(default=None, exclude=True)
    column: Optional[int] = Field(default=None, exclude=True)

    @property
    def kind(self) -> Optional[SectionType]:
        try:
            return SectionType(self.section_type)
        except ValueError:
            return None


Section.model_rebuild()
