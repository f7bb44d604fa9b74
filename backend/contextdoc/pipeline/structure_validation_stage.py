from contextdoc.ir.errors import ValidationError
from contextdoc.pipeline.stage import PipelineStage
from contextdoc.validation.structure_validator import validate_structure


class StructureValidationStage(PipelineStage):
    """Runs against the document as authored, before any substitution."""

    name = "structure_validation"
    error_class = ValidationError

    def run(self, context):
        return validate_structure(context.document)
