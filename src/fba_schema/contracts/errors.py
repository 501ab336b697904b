"""Errors raised by the argument contract validator.

Every failure of the contract layer is an :class:`ArgumentContractViolation`,
raised to the caller of the operation and never retried.
"""

from __future__ import annotations

from collections.abc import Sequence


class ArgumentContractViolation(ValueError):
    """An operation was called with arguments that break its contract.

    Attributes:
        context: Name of the operation whose contract was violated
        usage: Rendered usage string for the operation (if available)
        missing: Mandatory argument names that were absent
    """

    def __init__(
        self,
        message: str,
        *,
        context: str | None = None,
        usage: str | None = None,
        missing: Sequence[str] = (),
    ):
        super().__init__(message)
        self.context = context
        self.usage = usage
        self.missing = list(missing)


class MalformedArguments(ArgumentContractViolation):
    """Arguments could not be read as a key/value bundle."""


class MissingMandatoryArguments(ArgumentContractViolation):
    """One or more mandatory arguments were absent or undefined."""
