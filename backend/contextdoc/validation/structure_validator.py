"""
Structural Validator - document-level invariants checked before any content
reaches a consumer.

Catches:
- Nested sections (documents built without the parser)
- Section types outside the closed enumeration
- Duplicate section ids (and duplicate variable names)
- Missing required fields (section id/type/content, metadata, app info)
- Creation timestamps that are not ISO-8601

Every rule runs; the result carries every violation found.
"""

from typing import Dict, List, Optional

from contextdoc.ir.document import Document, Metadata, parse_timestamp
from contextdoc.ir.errors import SourceLocation, Violation, ViolationKind
from contextdoc.ir.section import Section, SectionType
from contextdoc.ir.validation import ValidationResult


def _location(section: Section) -> Optional[SourceLocation]:
    if section.line is None:
        return None
    return SourceLocation(section.line, section.column)


def _label(section: Section, index: int) -> str:
    return f"'{section.id}'" if section.id else f"#{index + 1}"


class StructureValidator:
    """
    Usage:
        result = StructureValidator().validate(document)
        if not result.is_valid:
            for v in result.violations:
                print(f"[{v.kind.value}] {v.message}")
    """

    REQUIRED_META_FIELDS = ("title", "author", "created", "app", "tags", "description")

    def validate(self, document: Document) -> ValidationResult:
        violations: List[Violation] = []

        violations.extend(self._check_nesting(document.sections))
        violations.extend(self._check_section_types(document.sections))
        violations.extend(self._check_section_ids(document.sections))
        violations.extend(self._check_section_fields(document.sections))
        violations.extend(self._check_metadata(document.metadata))
        violations.extend(self._check_variables(document))
        violations.extend(self._check_diagram(document))

        return ValidationResult.from_violations(
            violations,
            stats={
                "sections": len(document.sections),
                "variables": len(document.variables),
            },
        )

    def _check_nesting(self, sections) -> List[Violation]:
        violations = []
        for index, section in enumerate(sections):
            if section.children:
                nested = ", ".join(repr(c.id) for c in section.children)
                violations.append(Violation(
                    kind=ViolationKind.NESTED_SECTION,
                    message=(
                        f"Section {_label(section, index)} contains nested sections ({nested}); "
                        "sections must form a flat list"
                    ),
                    object_id=section.id,
                    location=_location(section),
                ))
        return violations

    def _check_section_types(self, sections) -> List[Violation]:
        violations = []
        for index, section in enumerate(sections):
            if section.section_type is None or section.kind is not None:
                continue
            violations.append(Violation(
                kind=ViolationKind.INVALID_ENUM_VALUE,
                message=(
                    f"Section {_label(section, index)} has invalid type "
                    f"'{section.section_type}'. Allowed types: {', '.join(SectionType.values())}"
                ),
                object_id=section.id,
                location=_location(section),
            ))
        return violations

    def _check_section_ids(self, sections) -> List[Violation]:
        violations = []
        first_seen: Dict[str, Section] = {}
        reported = set()

        for section in sections:
            if section.id is None:
                continue
            if section.id not in first_seen:
                first_seen[section.id] = section
                continue
            if section.id in reported:
                continue

            reported.add(section.id)
            first = first_seen[section.id]
            where = ""
            if section.line is not None and first.line is not None:
                where = f" at line {section.line} (first declared at line {first.line})"
            violations.append(Violation(
                kind=ViolationKind.DUPLICATE_ID,
                message=f"Duplicate section ID '{section.id}'{where}. Section IDs must be unique",
                object_id=section.id,
                location=_location(section),
                related_location=_location(first),
            ))
        return violations

    def _check_section_fields(self, sections) -> List[Violation]:
        violations = []
        for index, section in enumerate(sections):
            label = _label(section, index)
            for field_name, present in (
                ("id", section.id is not None),
                ("type", section.section_type is not None),
                ("content", section.content is not None),
            ):
                if present:
                    continue
                violations.append(Violation(
                    kind=ViolationKind.MISSING_FIELD,
                    message=f"Section {label} is missing required field '{field_name}'",
                    object_id=section.id,
                    location=_location(section),
                ))
        return violations

    def _check_metadata(self, meta: Metadata) -> List[Violation]:
        violations = []
        for field_name in self.REQUIRED_META_FIELDS:
            if getattr(meta, field_name) is None:
                violations.append(Violation(
                    kind=ViolationKind.MISSING_FIELD,
                    message=f"Required meta element '{field_name}' is missing",
                    object_id=f"meta.{field_name}",
                ))

        if meta.app is not None:
            for attr in ("name", "version"):
                if getattr(meta.app, attr) is None:
                    violations.append(Violation(
                        kind=ViolationKind.MISSING_FIELD,
                        message=f"App element must have '{attr}' attribute",
                        object_id=f"meta.app.{attr}",
                    ))

        if meta.created is not None and parse_timestamp(meta.created) is None:
            violations.append(Violation(
                kind=ViolationKind.INVALID_TIMESTAMP,
                message=f"Creation timestamp '{meta.created}' is not a valid ISO-8601 date-time",
                object_id="meta.created",
            ))
        return violations

    def _check_variables(self, document: Document) -> List[Violation]:
        violations = []
        seen = set()
        for index, variable in enumerate(document.variables):
            if variable.name is None:
                violations.append(Violation(
                    kind=ViolationKind.MISSING_FIELD,
                    message=f"Variable #{index + 1} is missing required attribute 'name'",
                ))
                continue
            if variable.name in seen:
                violations.append(Violation(
                    kind=ViolationKind.DUPLICATE_ID,
                    message=f"Duplicate variable name '{variable.name}'",
                    object_id=variable.name,
                ))
            seen.add(variable.name)
        return violations

    def _check_diagram(self, document: Document) -> List[Violation]:
        violations = []
        if document.diagram is None:
            return violations
        for attr in ("id", "version"):
            if getattr(document.diagram, attr) is None:
                violations.append(Violation(
                    kind=ViolationKind.MISSING_FIELD,
                    message=f"Flow element must have '{attr}' attribute",
                    object_id=f"flow.{attr}",
                ))
        return violations


def validate_structure(document: Document) -> ValidationResult:
    """Convenience function to validate a parsed document."""
    return StructureValidator().validate(document)
