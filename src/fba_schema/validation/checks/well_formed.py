"""Structural well-formedness of every field.

Checks:
    1. Required fields are present (and ids are non-empty)
    2. Scalar, list and mapping fields hold values of their declared type
    3. Reference strings parse for their declared kind
    4. Sub-path references name the list their typedef points into
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from fba_schema.validation.base import GraphCheck, Phase, Rule, ValidationFinding
from fba_schema.validation.graph import join_path
from fba_schema.validation.references import (
    ReferenceFormatError,
    SubPathReference,
    parse_reference,
)
from fba_schema.validation.schemas import FieldSpec, FieldType, get_reference_type
from fba_schema.validation.values import is_flag, is_integer, is_number

if TYPE_CHECKING:
    from fba_schema.validation.graph import ObjectGraph, RecordNode
    from fba_schema.validation.resolvers import ReferenceResolver


_TYPE_LABELS: dict[FieldType, str] = {
    FieldType.ID: "a string id",
    FieldType.STRING: "a string",
    FieldType.FLOAT: "a number",
    FieldType.INT: "an integer",
    FieldType.BOOL: "a boolean",
    FieldType.REF: "a reference string",
    FieldType.REF_LIST: "a list of reference strings",
    FieldType.REF_MAPPING: "a mapping of reference to number",
    FieldType.FLOAT_LIST: "a list of numbers",
    FieldType.FLOAT_MAPPING: "a mapping of string to number",
    FieldType.STRING_MAPPING: "a mapping of string to string",
}


def check_reference(value: str, spec: FieldSpec, path: str) -> ValidationFinding | None:
    """Check one reference string against its typedef.

    Returns:
        A finding, or None if the reference is well-formed
    """
    ref_type = get_reference_type(spec.ref_type or spec.name)
    try:
        parsed = parse_reference(value, ref_type.kind)
    except ReferenceFormatError as e:
        return ValidationFinding(
            path=path,
            rule=Rule.MALFORMED_REFERENCE,
            message=f"Malformed {ref_type.kind.value} {ref_type.name}: {e}",
            value=value,
        )

    if isinstance(parsed, SubPathReference) and parsed.list_name != ref_type.list_name:
        return ValidationFinding(
            path=path,
            rule=Rule.WRONG_REFERENCE_TARGET,
            message=(
                f"{ref_type.name} must point into {ref_type.target}, "
                f"got list '{parsed.list_name}'"
            ),
            value=value,
        )
    return None


def _invalid_type(path: str, spec: FieldSpec, value: Any, what: str | None = None) -> ValidationFinding:
    expected = what or _TYPE_LABELS[spec.field_type]
    return ValidationFinding(
        path=path,
        rule=Rule.INVALID_TYPE,
        message=f"Expected {expected}, got {type(value).__name__}",
        value=value,
    )


class WellFormednessCheck(GraphCheck):
    """Validate field presence, value types and reference syntax."""

    phase = Phase.WELL_FORMED

    @property
    def name(self) -> str:
        return "well_formed"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        for node in graph.nodes:
            for spec in node.schema.fields:
                findings.extend(self._check_field(node, spec))
        return findings

    def _check_field(self, node: RecordNode, spec: FieldSpec) -> list[ValidationFinding]:
        value = node.record.get(spec.name)
        path = join_path(node.path, spec.name)
        field_type = spec.field_type

        if value is None:
            if spec.required:
                return [
                    ValidationFinding(
                        path=path,
                        rule=Rule.MISSING_VALUE,
                        message=f"{node.schema.name}.{spec.name} is required",
                    )
                ]
            return []

        if field_type == FieldType.RECORDS:
            # shape already enforced while building the graph
            return []

        if field_type == FieldType.ID:
            if not isinstance(value, str):
                return [_invalid_type(path, spec, value)]
            if not value:
                return [
                    ValidationFinding(
                        path=path,
                        rule=Rule.MISSING_VALUE,
                        message=f"{node.schema.name}.{spec.name} must not be empty",
                        value=value,
                    )
                ]
            return []

        if field_type == FieldType.STRING:
            return [] if isinstance(value, str) else [_invalid_type(path, spec, value)]

        if field_type == FieldType.FLOAT:
            return [] if is_number(value) else [_invalid_type(path, spec, value)]

        if field_type == FieldType.INT:
            return [] if is_integer(value) else [_invalid_type(path, spec, value)]

        if field_type == FieldType.BOOL:
            return [] if is_flag(value) else [_invalid_type(path, spec, value)]

        if field_type == FieldType.REF:
            if not isinstance(value, str):
                return [_invalid_type(path, spec, value)]
            finding = check_reference(value, spec, path)
            return [finding] if finding else []

        if field_type in (FieldType.REF_LIST, FieldType.FLOAT_LIST):
            return self._check_list(path, spec, value)

        return self._check_mapping(path, spec, value)

    def _check_list(self, path: str, spec: FieldSpec, value: Any) -> list[ValidationFinding]:
        if not isinstance(value, list):
            return [_invalid_type(path, spec, value)]

        findings: list[ValidationFinding] = []
        for i, item in enumerate(value):
            item_path = join_path(path, f"[{i}]")
            if spec.field_type == FieldType.FLOAT_LIST:
                if not is_number(item):
                    findings.append(_invalid_type(item_path, spec, item, "a number"))
            elif not isinstance(item, str):
                findings.append(_invalid_type(item_path, spec, item, "a reference string"))
            else:
                finding = check_reference(item, spec, item_path)
                if finding:
                    findings.append(finding)
        return findings

    def _check_mapping(self, path: str, spec: FieldSpec, value: Any) -> list[ValidationFinding]:
        if not isinstance(value, Mapping):
            return [_invalid_type(path, spec, value)]

        findings: list[ValidationFinding] = []
        for key, item in value.items():
            item_path = join_path(path, f"[{key}]")
            if not isinstance(key, str):
                findings.append(_invalid_type(item_path, spec, key, "a string key"))
                continue
            if spec.field_type == FieldType.REF_MAPPING:
                finding = check_reference(key, spec, item_path)
                if finding:
                    findings.append(finding)
            if spec.field_type == FieldType.STRING_MAPPING:
                if not isinstance(item, str):
                    findings.append(_invalid_type(item_path, spec, item, "a string value"))
            elif not is_number(item):
                findings.append(_invalid_type(item_path, spec, item, "a numeric value"))
        return findings
