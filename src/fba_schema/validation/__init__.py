"""Reference-graph validation for metabolic model objects.

This package checks a root object (FBAModel, FBA, Gapfilling,
Gapgeneration or ModelTemplate) and everything nested in it: reference
syntax, id uniqueness, reference resolution, value domains and
cross-object consistency.

Main entry points:
    - validate(): Validate one root object
    - print_validation_report(): Print a report
    - export_validation_report(): Write a report as JSON

Example:
    from fba_schema.validation import StaticResolver, validate, print_validation_report

    report = validate(model, resolver=StaticResolver({"ws/gf.1": gapfilling}))
    print_validation_report(report)
"""

from fba_schema.validation.base import (
    GraphCheck,
    GraphStructureError,
    Phase,
    Rule,
    Severity,
    ValidationFinding,
    ValidationReport,
)
from fba_schema.validation.engine import (
    CHECK_REGISTRY,
    export_validation_report,
    get_checks,
    print_validation_report,
    validate,
)
from fba_schema.validation.references import (
    AbsoluteReference,
    ReferenceFormatError,
    SubPathReference,
    local_reference,
    parse_reference,
)
from fba_schema.validation.resolvers import CallableResolver, ReferenceResolver, StaticResolver
from fba_schema.validation.schemas import (
    ENTITY_SCHEMAS,
    REFERENCE_TYPES,
    EntitySchema,
    FieldSpec,
    FieldType,
    RefKind,
    ReferenceType,
    get_entity_schema,
    list_entities,
    list_reference_fields,
)

__all__ = [
    "CHECK_REGISTRY",
    "ENTITY_SCHEMAS",
    "REFERENCE_TYPES",
    "AbsoluteReference",
    "CallableResolver",
    "EntitySchema",
    "FieldSpec",
    "FieldType",
    "GraphCheck",
    "GraphStructureError",
    "Phase",
    "RefKind",
    "ReferenceFormatError",
    "ReferenceResolver",
    "ReferenceType",
    "Rule",
    "Severity",
    "StaticResolver",
    "SubPathReference",
    "ValidationFinding",
    "ValidationReport",
    "export_validation_report",
    "get_checks",
    "get_entity_schema",
    "list_entities",
    "list_reference_fields",
    "local_reference",
    "parse_reference",
    "print_validation_report",
    "validate",
]
