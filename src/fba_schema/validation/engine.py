"""Validation engine for metabolic model object graphs.

This module provides the main entry points:
- validate(): Validate one root object (FBAModel, FBA, Gapfilling, ...)
- print_validation_report(): Human-readable report
- export_validation_report(): JSON report
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path  # noqa: TC003 - Path is used at runtime
from typing import Any

from fba_schema.validation.base import GraphCheck, Severity, ValidationReport
from fba_schema.validation.checks import (
    IntegratedSolutionCheck,
    LinkedCompoundCheck,
    ReferenceResolutionCheck,
    ResultsAfterSolveCheck,
    SingleIntegratedSolutionCheck,
    TargetModelReferenceCheck,
    UniqueIdCheck,
    ValueDomainCheck,
    WellFormednessCheck,
)
from fba_schema.validation.graph import build_graph
from fba_schema.validation.resolvers import CallableResolver, ReferenceResolver

logger = logging.getLogger(__name__)

# Registry of check names to classes
CHECK_REGISTRY: dict[str, type[GraphCheck]] = {
    "well_formed": WellFormednessCheck,
    "unique_ids": UniqueIdCheck,
    "reference_resolution": ReferenceResolutionCheck,
    "value_domain": ValueDomainCheck,
    "integrated_solution": IntegratedSolutionCheck,
    "single_integrated_solution": SingleIntegratedSolutionCheck,
    "target_model_references": TargetModelReferenceCheck,
    "results_after_solve": ResultsAfterSolveCheck,
    "linked_compounds": LinkedCompoundCheck,
}


def get_checks(root_type: str) -> list[GraphCheck]:
    """Instantiate the checks that apply to a root type, in phase order.

    The sort is stable, so checks of the same phase keep registry order.
    """
    checks = [check_class() for check_class in CHECK_REGISTRY.values()]
    return sorted((c for c in checks if c.applies_to(root_type)), key=lambda c: c.phase)


def validate(
    root: Any,
    resolver: ReferenceResolver | Callable[[str], bool] | None = None,
    root_type: str | None = None,
) -> ValidationReport:
    """Validate a root object and everything nested in it.

    Args:
        root: Pydantic root entity, or a mapping keyed by wire names
        resolver: Optional capability for resolving references that point
            outside the root; without it those are checked for form only
            (a resolver object, or a plain `(ref) -> bool` function)
        root_type: Entity name of the root, required for mappings

    Returns:
        ValidationReport with findings in check order (empty when valid)

    Raises:
        GraphStructureError: If the input cannot be walked as a graph of the
            declared root type
        TypeError: If resolver is neither a resolver nor callable
    """
    if resolver is not None and not isinstance(resolver, ReferenceResolver):
        if not callable(resolver):
            raise TypeError(f"resolver must be a ReferenceResolver or a callable, got {type(resolver).__name__}")
        resolver = CallableResolver(resolver)

    graph = build_graph(root, root_type)
    report = ValidationReport(root_type=graph.root_type, root_id=graph.root_id)

    for check in get_checks(graph.root_type):
        findings = check.run(graph, resolver)
        if findings:
            logger.debug(f"{check.name}: {len(findings)} finding(s)")
        report.extend(findings)

    logger.info(f"Validated {graph.root_type} {graph.root_id or '<no id>'}: {len(report)} finding(s)")
    return report


def print_validation_report(report: ValidationReport, verbose: bool = False) -> None:
    """Print human-readable validation report.

    Args:
        report: ValidationReport to print
        verbose: If True, include the offending value of each finding
    """
    print("\nVALIDATION REPORT")
    print("=" * 60)
    print(f"Object:         {report.root_type} {report.root_id or '<no id>'}")
    print(f"Findings:       {len(report)}")
    print()

    for severity, title in ((Severity.ERROR, "ERRORS"), (Severity.WARNING, "WARNINGS")):
        findings = [f for f in report if f.severity == severity]
        if not findings:
            continue
        print(f"{title} ({len(findings)}):")
        for finding in findings:
            print(f"  {finding}")
            if verbose and finding.value is not None:
                print(f"    value: {finding.value!r}")
        print()

    # Summary by rule
    if report.stats:
        print("Summary by rule:")
        for rule, count in sorted(report.stats.items()):
            print(f"  {rule}: {count}")


def export_validation_report(report: ValidationReport, path: Path) -> None:
    """Export validation report to JSON file.

    Args:
        report: ValidationReport to export
        path: Output file path
    """
    data = {
        "root_type": report.root_type,
        "root_id": report.root_id,
        "valid": report.is_valid,
        "stats": report.stats,
        "findings": [
            {
                "path": f.path,
                "rule": f.rule.value,
                "severity": f.severity.value,
                "message": f.message,
                "value": f.value,
            }
            for f in report
        ],
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)

    logger.info(f"Exported validation report to {path}")
