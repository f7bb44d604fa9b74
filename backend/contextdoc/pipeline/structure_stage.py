from contextdoc.dsl.context_xml import parse_document
from contextdoc.ir.validation import ValidationResult
from contextdoc.pipeline.stage import PipelineStage


class StructureStage(PipelineStage):
    name = "structure"

    def run(self, context):
        # StructuralParseError propagates: nothing downstream can run without a tree
        context.document = parse_document(context.source_text)
        context.sections = context.document.sections
        return ValidationResult.success()
