"""id uniqueness within each enclosing list."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from fba_schema.validation.base import GraphCheck, Phase, Rule, ValidationFinding
from fba_schema.validation.graph import join_path
from fba_schema.validation.schemas import ENTITY_SCHEMAS

if TYPE_CHECKING:
    from fba_schema.validation.graph import ObjectGraph
    from fba_schema.validation.resolvers import ReferenceResolver


class UniqueIdCheck(GraphCheck):
    """Report every repeat of an id within the same list.

    The first occurrence is taken as the original; each later occurrence
    gets its own finding.
    """

    phase = Phase.UNIQUENESS

    @property
    def name(self) -> str:
        return "unique_ids"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []

        for node in graph.nodes:
            for spec in node.schema.record_fields:
                id_field = ENTITY_SCHEMAS[spec.entity or ""].id_field
                items = node.record.get(spec.name)
                if id_field is None or not isinstance(items, list):
                    continue

                list_path = join_path(node.path, spec.name)
                first_seen: dict[str, int] = {}
                for i, item in enumerate(items):
                    value = item.get(id_field) if isinstance(item, Mapping) else None
                    if not isinstance(value, str):
                        continue
                    if value in first_seen:
                        findings.append(
                            ValidationFinding(
                                path=join_path(list_path, f"[{i}].{id_field}"),
                                rule=Rule.DUPLICATE_ID,
                                message=(
                                    f"Duplicate {id_field} '{value}' in {list_path} "
                                    f"(first at index {first_seen[value]})"
                                ),
                                value=value,
                            )
                        )
                    else:
                        first_seen[value] = i

        return findings
