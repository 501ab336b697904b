"""Graph checks, one module per phase."""

from fba_schema.validation.checks.consistency import (
    IntegratedSolutionCheck,
    LinkedCompoundCheck,
    ResultsAfterSolveCheck,
    SingleIntegratedSolutionCheck,
    TargetModelReferenceCheck,
)
from fba_schema.validation.checks.domain import ValueDomainCheck
from fba_schema.validation.checks.resolution import ReferenceResolutionCheck
from fba_schema.validation.checks.uniqueness import UniqueIdCheck
from fba_schema.validation.checks.well_formed import WellFormednessCheck, check_reference

__all__ = [
    "IntegratedSolutionCheck",
    "LinkedCompoundCheck",
    "ReferenceResolutionCheck",
    "ResultsAfterSolveCheck",
    "SingleIntegratedSolutionCheck",
    "TargetModelReferenceCheck",
    "UniqueIdCheck",
    "ValueDomainCheck",
    "WellFormednessCheck",
    "check_reference",
]
