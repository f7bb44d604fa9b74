from contextdoc.ir.errors import ValidationSeverity, Violation, ViolationKind
from contextdoc.ir.validation import ValidationResult
from contextdoc.pipeline.stage import PipelineStage
from contextdoc.reference.resolver import (
    build_variable_map,
    resolve_sections,
    unresolved_placeholders,
)


class ResolutionStage(PipelineStage):
    name = "resolution"

    def run(self, context):
        variables = build_variable_map(context.document.variables)

        # Missing variables never fail the stage; they are surfaced as info
        for section in context.document.sections:
            if section.content is None:
                continue
            for name in unresolved_placeholders(section.content, variables):
                context.warnings.append(Violation(
                    kind=ViolationKind.UNRESOLVED_VARIABLE,
                    severity=ValidationSeverity.INFO,
                    message=f"Section '{section.id}' references undefined variable '{name}'",
                    object_id=section.id,
                ))

        context.sections = resolve_sections(context.document.sections, variables)
        return ValidationResult.success()
