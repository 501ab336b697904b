"""Numeric and value-domain checks.

Checks:
    1. Non-negative fields (costs, weights, time limits) are >= 0
    2. Ranged fields (probability) fall inside their interval
    3. Symbol fields (direction, sign) hold an allowed symbol
    4. lowerBound <= upperBound when both are defined
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from fba_schema.validation.base import GraphCheck, Phase, Rule, ValidationFinding
from fba_schema.validation.graph import join_path
from fba_schema.validation.schemas import FieldSpec, FieldType
from fba_schema.validation.values import is_number

if TYPE_CHECKING:
    from fba_schema.validation.graph import ObjectGraph, RecordNode
    from fba_schema.validation.resolvers import ReferenceResolver


def _negative(path: str, spec: FieldSpec, value: Any) -> ValidationFinding:
    return ValidationFinding(
        path=path,
        rule=Rule.NEGATIVE_VALUE,
        message=f"{spec.name} must be non-negative, got {value}",
        value=value,
    )


class ValueDomainCheck(GraphCheck):
    """Validate values against their declared domains."""

    phase = Phase.DOMAIN

    @property
    def name(self) -> str:
        return "value_domain"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        for node in graph.nodes:
            for spec in node.schema.fields:
                findings.extend(self._check_field(node, spec))
            findings.extend(self._check_bounds(node))
        return findings

    def _check_field(self, node: RecordNode, spec: FieldSpec) -> list[ValidationFinding]:
        value = node.record.get(spec.name)
        if value is None:
            return []
        path = join_path(node.path, spec.name)

        if spec.field_type == FieldType.REF_MAPPING and spec.non_negative and isinstance(value, Mapping):
            return [
                _negative(join_path(path, f"[{key}]"), spec, weight)
                for key, weight in value.items()
                if is_number(weight) and weight < 0
            ]

        if spec.choices is not None and isinstance(value, str) and value not in spec.choices:
            return [
                ValidationFinding(
                    path=path,
                    rule=Rule.INVALID_CHOICE,
                    message=f"{spec.name} must be one of {', '.join(repr(c) for c in spec.choices)}, got {value!r}",
                    value=value,
                )
            ]

        if not is_number(value):
            return []

        if spec.non_negative and value < 0:
            return [_negative(path, spec, value)]

        if spec.value_range is not None:
            low, high = spec.value_range
            if not low <= value <= high:
                return [
                    ValidationFinding(
                        path=path,
                        rule=Rule.OUT_OF_RANGE,
                        message=f"{spec.name} must be within [{low}, {high}], got {value}",
                        value=value,
                    )
                ]
        return []

    def _check_bounds(self, node: RecordNode) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        for lower_name, upper_name in node.schema.bounds:
            lower = node.record.get(lower_name)
            upper = node.record.get(upper_name)
            if is_number(lower) and is_number(upper) and lower > upper:
                findings.append(
                    ValidationFinding(
                        path=join_path(node.path, lower_name),
                        rule=Rule.BOUNDS_ORDER,
                        message=f"{lower_name} {lower} exceeds {upper_name} {upper}",
                        value=(lower, upper),
                    )
                )
        return findings
