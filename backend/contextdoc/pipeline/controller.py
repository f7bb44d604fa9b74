import logging
from typing import Optional

from contextdoc import config
from contextdoc.ir.document import Document
from contextdoc.pipeline.context import AssemblyContext
from contextdoc.pipeline.diagram_stage import DiagramStage
from contextdoc.pipeline.graph_validation_stage import GraphValidationStage
from contextdoc.pipeline.resolution_stage import ResolutionStage
from contextdoc.pipeline.structure_stage import StructureStage
from contextdoc.pipeline.structure_validation_stage import StructureValidationStage

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """
    Runs parse -> validate -> resolve [-> diagram -> graph validation].

    Validation runs before resolution so that messages point at the text as
    authored. The first failing stage stops the run and raises its error with
    every violation that stage collected.
    """

    def __init__(self, strict: Optional[bool] = None, allow_partial: Optional[bool] = None):
        self.strict = config.STRICT_GRAPH if strict is None else strict
        self.allow_partial = config.ALLOW_PARTIAL if allow_partial is None else allow_partial

        # Core stages (always run)
        self.core_stages = [
            StructureStage(),
            StructureValidationStage(),
            ResolutionStage(),
        ]

        # Slow path, skipped for section-only loading
        self.diagram_stages = [
            DiagramStage(),
            GraphValidationStage(),
        ]

    def run(self, text: str, include_diagram: bool = True) -> AssemblyContext:
        context = AssemblyContext(
            source_text=text,
            strict=self.strict,
            allow_partial=self.allow_partial,
        )

        stages = list(self.core_stages)
        if include_diagram:
            stages.extend(self.diagram_stages)

        for stage in stages:
            logger.debug("Running stage %s", stage.name)
            result = stage.run(context)

            # Hard stop on failure
            if not result.is_valid:
                logger.info(
                    "Stage %s failed with %d violation(s)", stage.name, len(result.violations)
                )
                raise stage.error_class(result.violations)

        return context

    def assemble(self, text: str) -> Document:
        return self.run(text).assembled()

    def assemble_sections(self, text: str) -> Document:
        """Fast path: the diagram keeps its raw text and no graph is built."""
        return self.run(text, include_diagram=False).assembled()


def assemble_document(text: str, strict: Optional[bool] = None, allow_partial: Optional[bool] = None) -> Document:
    return DocumentAssembler(strict=strict, allow_partial=allow_partial).assemble(text)
