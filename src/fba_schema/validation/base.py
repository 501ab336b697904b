"""Base classes for the reference-graph validation framework.

This module provides the finding and report data structures and the
abstract base class for graph checks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fba_schema.validation.graph import ObjectGraph
    from fba_schema.validation.resolvers import ReferenceResolver


class GraphStructureError(ValueError):
    """The input cannot be walked as an object graph of the declared type.

    Raised (never reported) for container-shape mismatches such as a list
    where a single record is expected.
    """


class Severity(str, Enum):
    """Severity levels for validation findings."""

    ERROR = "error"  # Invariant violated
    WARNING = "warning"  # Suspicious but not necessarily wrong


class Phase(IntEnum):
    """Check phases, run in this order."""

    WELL_FORMED = 1
    UNIQUENESS = 2
    RESOLUTION = 3
    DOMAIN = 4
    CONSISTENCY = 5


class Rule(str, Enum):
    """Rules a finding can report as violated."""

    # Well-formedness
    MALFORMED_REFERENCE = "malformed_reference"  # Reference string doesn't parse for its kind
    WRONG_REFERENCE_TARGET = "wrong_reference_target"  # Sub-path points at the wrong list
    INVALID_TYPE = "invalid_type"  # Value has the wrong scalar/container type
    MISSING_VALUE = "missing_value"  # Required field is absent

    # Uniqueness
    DUPLICATE_ID = "duplicate_id"  # id repeated within its enclosing list

    # Resolution
    UNRESOLVED_REFERENCE = "unresolved_reference"  # Reference points at nothing

    # Value domain
    OUT_OF_RANGE = "out_of_range"  # Value outside its allowed interval
    NEGATIVE_VALUE = "negative_value"  # Cost, weight or limit below zero
    INVALID_CHOICE = "invalid_choice"  # Value not among the allowed symbols
    BOUNDS_ORDER = "bounds_order"  # lowerBound > upperBound

    # Cross-entity consistency
    INTEGRATED_SOLUTION_INDEX = "integrated_solution_index"  # Index outside the solution list
    MULTIPLE_INTEGRATED_SOLUTIONS = "multiple_integrated_solutions"
    FOREIGN_REFERENCE = "foreign_reference"  # Not present in the target model
    RESULTS_BEFORE_SOLVE = "results_before_solve"  # Results without an objective value
    LENGTH_MISMATCH = "length_mismatch"  # Parallel lists of different lengths


@dataclass(frozen=True)
class ValidationFinding:
    """A single invariant violation found in an object graph.

    Attributes:
        path: Location in the graph (e.g., "modelcompounds[2].modelcompartment_ref")
        rule: The rule that was violated
        message: Human-readable description of the violation
        severity: How serious the violation is
        value: The offending value (if applicable)
    """

    path: str
    rule: Rule
    message: str
    severity: Severity = Severity.ERROR
    value: Any = None

    def __str__(self) -> str:
        """Format finding for display."""
        sev = self.severity.value.upper()
        return f"[{sev}] {self.path or '<root>'} [{self.rule.value}]: {self.message}"

    def as_tuple(self) -> tuple[str, str, str]:
        """Return the (path, rule, message) triple."""
        return (self.path, self.rule.value, self.message)


@dataclass
class ValidationReport:
    """Ordered validation findings for one root object.

    Attributes:
        root_type: Entity type of the validated root (e.g., "FBAModel")
        root_id: id of the validated root, if it had one
        findings: Findings in check order; empty means valid
        stats: Counts by rule
    """

    root_type: str | None = None
    root_id: str | None = None
    findings: list[ValidationFinding] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)

    def add_finding(self, finding: ValidationFinding) -> None:
        """Add a finding and update stats."""
        self.findings.append(finding)
        key = finding.rule.value
        self.stats[key] = self.stats.get(key, 0) + 1

    def extend(self, findings: list[ValidationFinding]) -> None:
        """Add several findings in order."""
        for finding in findings:
            self.add_finding(finding)

    def merge(self, other: ValidationReport) -> None:
        """Append another report's findings to this one."""
        self.extend(other.findings)

    def __iter__(self) -> Iterator[ValidationFinding]:
        return iter(self.findings)

    def __len__(self) -> int:
        return len(self.findings)

    @property
    def is_valid(self) -> bool:
        """True when no findings were recorded."""
        return not self.findings

    @property
    def error_count(self) -> int:
        """Count of ERROR severity findings."""
        return sum(1 for f in self.findings if f.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Count of WARNING severity findings."""
        return sum(1 for f in self.findings if f.severity == Severity.WARNING)

    def get_findings_by_rule(self, rule: Rule) -> list[ValidationFinding]:
        """Get all findings for a specific rule."""
        return [f for f in self.findings if f.rule == rule]

    def get_findings_for_path(self, prefix: str) -> list[ValidationFinding]:
        """Get all findings at or below a graph path."""
        return [f for f in self.findings if f.path == prefix or f.path.startswith((f"{prefix}.", f"{prefix}["))]

    def as_tuples(self) -> list[tuple[str, str, str]]:
        """Return findings as (path, rule, message) triples."""
        return [f.as_tuple() for f in self.findings]


class GraphCheck(ABC):
    """Abstract base class for graph checks.

    Checks inspect an :class:`ObjectGraph` and return the findings they
    produce, in graph traversal order.

    Subclasses must implement:
        - run(): Inspect a graph and return findings
        - name: Property returning the check's name
        - phase: Class attribute placing the check in the run order
    """

    phase: Phase
    root_types: frozenset[str] | None = None  # None: applies to every root type

    def applies_to(self, root_type: str) -> bool:
        """Whether this check runs for graphs of the given root type."""
        return self.root_types is None or root_type in self.root_types

    @abstractmethod
    def run(self, graph: ObjectGraph, resolver: ReferenceResolver | None) -> list[ValidationFinding]:
        """Inspect a graph.

        Args:
            graph: The flattened object graph
            resolver: Optional external reference-resolution capability

        Returns:
            List of ValidationFinding objects (empty if the graph passes)
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return check name for reporting."""
