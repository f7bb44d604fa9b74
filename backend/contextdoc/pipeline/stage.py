from abc import ABC, abstractmethod
from typing import Type

from contextdoc.ir.errors import ContextDocError, ValidationError
from contextdoc.ir.validation import ValidationResult
from contextdoc.pipeline.context import AssemblyContext


class PipelineStage(ABC):
    name: str

    # Raised by the assembler when run() returns an invalid result
    error_class: Type[ContextDocError] = ValidationError

    @abstractmethod
    def run(self, context: AssemblyContext) -> ValidationResult:
        """
        Must:
        - read from context
        - write to context
        - NEVER call other stages
        """
        pass
