"""Reference resolution.

Local references (sub-path references into the root object itself) must
point at an element of the named list. External references are checked
only when a resolver is supplied, and only a definite "no" is reported.
References into a target model are left to the consistency phase.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fba_schema.validation.base import GraphCheck, Phase, Rule, ValidationFinding
from fba_schema.validation.graph import Scope
from fba_schema.validation.references import SubPathReference, try_parse_reference

if TYPE_CHECKING:
    from fba_schema.validation.graph import ObjectGraph, ReferenceSite
    from fba_schema.validation.resolvers import ReferenceResolver

logger = logging.getLogger(__name__)


class ReferenceResolutionCheck(GraphCheck):
    """Resolve local references against the graph and external ones via the resolver."""

    phase = Phase.RESOLUTION

    @property
    def name(self) -> str:
        return "reference_resolution"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        if resolver is None:
            logger.debug("No resolver supplied; external references checked for form only")

        for site in graph.references:
            parsed = try_parse_reference(site.value, site.ref_type.kind)
            if parsed is None:
                continue  # reported as malformed

            scope = graph.scope_of(site.ref_type)
            if scope == Scope.LOCAL and isinstance(parsed, SubPathReference):
                finding = self._resolve_local(graph, site, parsed)
                if finding:
                    findings.append(finding)
            elif scope == Scope.EXTERNAL and resolver is not None:
                if resolver.resolves(site.value) is False:
                    findings.append(
                        ValidationFinding(
                            path=site.path,
                            rule=Rule.UNRESOLVED_REFERENCE,
                            message=f"{site.ref_type.name} '{site.value}' does not resolve to a {site.ref_type.target}",
                            value=site.value,
                        )
                    )

        return findings

    def _resolve_local(
        self,
        graph: ObjectGraph,
        site: ReferenceSite,
        parsed: SubPathReference,
    ) -> ValidationFinding | None:
        if parsed.list_name != site.ref_type.list_name:
            return None  # reported as wrong target

        if not parsed.is_local:
            return ValidationFinding(
                path=site.path,
                rule=Rule.UNRESOLVED_REFERENCE,
                message=(
                    f"{site.ref_type.name} '{site.value}' must point into this {graph.root_type} "
                    f"(object reference '~'), not '{parsed.objref}'"
                ),
                value=site.value,
            )

        if parsed.element_id not in graph.element_ids(parsed.list_name):
            return ValidationFinding(
                path=site.path,
                rule=Rule.UNRESOLVED_REFERENCE,
                message=f"No {parsed.list_name} element with id '{parsed.element_id}' in this {graph.root_type}",
                value=site.value,
            )
        return None
