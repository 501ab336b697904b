"""Argument contract enforcement.

Main entry points:
    - normalize(): Read a mapping or flat key/value sequence into a dict
    - enforce(): Check mandatory names and fill optional defaults
    - usage(): Render a usage string for an operation
    - ArgumentContract: Per-operation declaration with bind()
"""

from fba_schema.contracts.arguments import (
    ArgumentContract,
    enforce,
    is_empty_value,
    normalize,
    usage,
)
from fba_schema.contracts.errors import (
    ArgumentContractViolation,
    MalformedArguments,
    MissingMandatoryArguments,
)

__all__ = [
    "ArgumentContract",
    "ArgumentContractViolation",
    "MalformedArguments",
    "MissingMandatoryArguments",
    "enforce",
    "is_empty_value",
    "normalize",
    "usage",
]
