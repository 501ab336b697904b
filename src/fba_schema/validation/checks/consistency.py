"""Cross-entity consistency checks.

These run last and may consult the resolver to look up the objects a root
points at (the gap-filling behind a ModelGapfill, the model an FBA
formulation targets). Any object the resolver cannot supply is skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from fba_schema.validation.base import (
    GraphCheck,
    GraphStructureError,
    Phase,
    Rule,
    ValidationFinding,
)
from fba_schema.validation.graph import Scope, as_mapping, index_element_ids, join_path
from fba_schema.validation.references import SubPathReference, try_parse_reference
from fba_schema.validation.schemas import ENTITY_SCHEMAS
from fba_schema.validation.values import is_integer, is_set_flag

if TYPE_CHECKING:
    from fba_schema.validation.graph import ObjectGraph
    from fba_schema.validation.resolvers import ReferenceResolver

logger = logging.getLogger(__name__)


def _lookup_record(resolver: ReferenceResolver | None, ref: Any) -> Mapping[str, Any] | None:
    """Fetch a referenced object as a wire-named mapping, or None."""
    if resolver is None or not isinstance(ref, str):
        return None
    obj = resolver.lookup(ref)
    if obj is None:
        logger.debug(f"Resolver has no object for {ref}")
        return None
    try:
        return as_mapping(obj, ref)
    except GraphStructureError:
        logger.warning(f"Resolver returned a {type(obj).__name__} for {ref}; skipping")
        return None


class IntegratedSolutionCheck(GraphCheck):
    """integrated_solution of an integrated ModelGapfill/ModelGapgen must index a solution."""

    phase = Phase.CONSISTENCY
    root_types = frozenset({"FBAModel"})

    # model list -> (reference field, solution list of the referenced object)
    LINKS: dict[str, tuple[str, str]] = {
        "gapfillings": ("gapfill_ref", "gapfillingSolutions"),
        "gapgens": ("gapgen_ref", "gapgenSolutions"),
    }

    @property
    def name(self) -> str:
        return "integrated_solution"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        root = graph.root.record

        for list_name, (ref_field, solutions_field) in self.LINKS.items():
            items = root.get(list_name)
            if not isinstance(items, list):
                continue
            for i, item in enumerate(items):
                if not isinstance(item, Mapping) or not is_set_flag(item.get("integrated")):
                    continue
                path = join_path(list_name, f"[{i}].integrated_solution")
                index = item.get("integrated_solution")

                if index is None:
                    findings.append(
                        ValidationFinding(
                            path=path,
                            rule=Rule.INTEGRATED_SOLUTION_INDEX,
                            message="Integrated record has no integrated_solution",
                        )
                    )
                    continue
                if not is_integer(index):
                    continue  # reported as invalid type
                index = int(index)
                if index < 0:
                    findings.append(
                        ValidationFinding(
                            path=path,
                            rule=Rule.INTEGRATED_SOLUTION_INDEX,
                            message=f"integrated_solution must be non-negative, got {index}",
                            value=index,
                        )
                    )
                    continue

                target = _lookup_record(resolver, item.get(ref_field))
                if target is None:
                    continue
                solutions = target.get(solutions_field)
                count = len(solutions) if isinstance(solutions, list) else 0
                if index >= count:
                    findings.append(
                        ValidationFinding(
                            path=path,
                            rule=Rule.INTEGRATED_SOLUTION_INDEX,
                            message=(
                                f"integrated_solution {index} is out of range: "
                                f"{item.get(ref_field)} has {count} solution(s)"
                            ),
                            value=index,
                        )
                    )

        return findings


class SingleIntegratedSolutionCheck(GraphCheck):
    """At most one solution of a gap-filling or gap-generation is marked integrated."""

    phase = Phase.CONSISTENCY
    root_types = frozenset({"Gapfilling", "Gapgeneration"})

    SOLUTION_LISTS: dict[str, str] = {
        "Gapfilling": "gapfillingSolutions",
        "Gapgeneration": "gapgenSolutions",
    }

    @property
    def name(self) -> str:
        return "single_integrated_solution"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        list_name = self.SOLUTION_LISTS[graph.root_type]
        solutions = graph.root.record.get(list_name)
        if not isinstance(solutions, list):
            return []

        findings: list[ValidationFinding] = []
        first: int | None = None
        for i, solution in enumerate(solutions):
            if not isinstance(solution, Mapping) or not is_set_flag(solution.get("integrated")):
                continue
            if first is None:
                first = i
                continue
            findings.append(
                ValidationFinding(
                    path=join_path(list_name, f"[{i}].integrated"),
                    rule=Rule.MULTIPLE_INTEGRATED_SOLUTIONS,
                    message=f"Solution {i} is marked integrated but solution {first} already is",
                )
            )
        return findings


class TargetModelReferenceCheck(GraphCheck):
    """Model-element references in a formulation must exist in its target model."""

    phase = Phase.CONSISTENCY
    root_types = frozenset({"FBA", "Gapfilling", "Gapgeneration"})

    @property
    def name(self) -> str:
        return "target_model_references"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        model_ref = graph.root.record.get("fbamodel_ref")
        model = _lookup_record(resolver, model_ref)
        if model is None:
            return []
        element_ids = index_element_ids(model, ENTITY_SCHEMAS["FBAModel"])

        findings: list[ValidationFinding] = []
        for site in graph.references:
            if graph.scope_of(site.ref_type) != Scope.TARGET_MODEL:
                continue
            parsed = try_parse_reference(site.value, site.ref_type.kind)
            if not isinstance(parsed, SubPathReference) or parsed.list_name != site.ref_type.list_name:
                continue  # reported in the well-formedness phase

            if parsed.element_id not in element_ids.get(parsed.list_name, set()):
                findings.append(
                    ValidationFinding(
                        path=site.path,
                        rule=Rule.FOREIGN_REFERENCE,
                        message=f"{model_ref} has no {parsed.list_name} element with id '{parsed.element_id}'",
                        value=site.value,
                    )
                )
        return findings


class ResultsAfterSolveCheck(GraphCheck):
    """FBA result lists are populated only once an objective value exists."""

    phase = Phase.CONSISTENCY
    root_types = frozenset({"FBA"})

    RESULT_LISTS: tuple[str, ...] = (
        "FBACompoundVariables",
        "FBAReactionVariables",
        "FBABiomassVariables",
        "FBAPromResults",
        "FBADeletionResults",
        "FBAMinimalMediaResults",
        "FBAMetaboliteProductionResults",
    )

    @property
    def name(self) -> str:
        return "results_after_solve"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        root = graph.root.record
        if root.get("objectiveValue") is not None:
            return []
        return [
            ValidationFinding(
                path=list_name,
                rule=Rule.RESULTS_BEFORE_SOLVE,
                message=f"{list_name} is populated but objectiveValue is not set",
            )
            for list_name in self.RESULT_LISTS
            if root.get(list_name)
        ]


class LinkedCompoundCheck(GraphCheck):
    """Each linked compound of a template biomass component has one coefficient."""

    phase = Phase.CONSISTENCY
    root_types = frozenset({"ModelTemplate"})

    @property
    def name(self) -> str:
        return "linked_compounds"

    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        for node in graph.nodes:
            if node.schema.name != "TemplateBiomassComponent":
                continue
            refs = node.record.get("linked_compound_refs") or []
            coefficients = node.record.get("link_coefficients") or []
            if not isinstance(refs, list) or not isinstance(coefficients, list):
                continue
            if len(refs) != len(coefficients):
                findings.append(
                    ValidationFinding(
                        path=join_path(node.path, "link_coefficients"),
                        rule=Rule.LENGTH_MISMATCH,
                        message=(
                            f"{len(coefficients)} link coefficient(s) for "
                            f"{len(refs)} linked compound(s)"
                        ),
                        value=(len(refs), len(coefficients)),
                    )
                )
        return findings
