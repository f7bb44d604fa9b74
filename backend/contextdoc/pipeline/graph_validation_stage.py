from contextdoc.ir.errors import GraphValidationError
from contextdoc.ir.validation import ValidationResult
from contextdoc.pipeline.stage import PipelineStage
from contextdoc.validation.graph_validator import validate_graph


class GraphValidationStage(PipelineStage):
    """
    Validates the parsed graph against the final section id set.

    Strict: error-severity violations block assembly.
    Otherwise every graph violation is kept as a document warning.
    """

    name = "graph_validation"
    error_class = GraphValidationError

    def run(self, context):
        if context.graph is None:
            return ValidationResult.success()

        section_ids = [s.id for s in context.sections if s.id is not None]
        result = validate_graph(context.graph, section_ids)

        if context.strict and result.errors:
            return ValidationResult.failure(result.violations)

        context.warnings.extend(result.violations)
        return ValidationResult.success()
