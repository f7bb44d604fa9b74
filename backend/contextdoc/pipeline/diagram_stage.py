import logging

from contextdoc.dsl.mermaid import parse_flowchart
from contextdoc.ir.errors import DiagramParseError
from contextdoc.ir.validation import ValidationResult
from contextdoc.pipeline.stage import PipelineStage

logger = logging.getLogger(__name__)


class DiagramStage(PipelineStage):
    name = "diagram"

    def run(self, context):
        diagram = context.document.diagram
        if diagram is None:
            context.graph = None
            return ValidationResult.success()

        try:
            context.graph = parse_flowchart(diagram.source)
        except DiagramParseError as exc:
            if not context.allow_partial:
                raise
            # Partial success: sections stay usable, the diagram has no graph
            logger.info("Diagram '%s' not parsed, keeping sections: %s", diagram.id, exc)
            context.graph = None
            context.diagram_error = exc

        return ValidationResult.success()
