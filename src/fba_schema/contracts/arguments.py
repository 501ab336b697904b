"""Mandatory/optional argument handling for schema operations.

Every builder and graph operation in this package accepts a named-argument
bundle. This module turns such a bundle into a canonical mapping, checks
that mandatory names are present, fills optional names with their declared
defaults and renders usage text when something is missing.

Example:
    >>> contract = ArgumentContract(
    ...     "build_gapfilling",
    ...     mandatory=("media_ref",),
    ...     optional={"timePerSolution": 3600},
    ... )
    >>> contract.bind(media_ref="ws/Media/1")
    {'media_ref': 'ws/Media/1', 'timePerSolution': 3600}
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from fba_schema.contracts.errors import MalformedArguments, MissingMandatoryArguments

logger = logging.getLogger(__name__)

UNKNOWN_CONTEXT = "<anonymous>"


def normalize(raw_arguments: Any = None, context: str | None = None) -> dict[str, Any]:
    """Read an argument bundle into a plain dict.

    Args:
        raw_arguments: A mapping, a flat alternating key/value sequence, or None
        context: Name of the calling operation, used in error messages

    Returns:
        New dict of argument name to value (the input is never mutated)

    Raises:
        MalformedArguments: If the bundle is neither a mapping nor an
            even-length sequence with string keys
    """
    ctx = context or UNKNOWN_CONTEXT

    if raw_arguments is None:
        return {}

    if isinstance(raw_arguments, Mapping):
        return dict(raw_arguments)

    if isinstance(raw_arguments, (str, bytes)) or not isinstance(raw_arguments, Sequence):
        raise MalformedArguments(
            f"Arguments to {ctx} must be a mapping or a flat key/value sequence, "
            f"got {type(raw_arguments).__name__}",
            context=ctx,
        )

    if len(raw_arguments) % 2 != 0:
        raise MalformedArguments(
            f"Final argument to {ctx} must be a mapping or a sequence of even length",
            context=ctx,
        )

    keys = list(raw_arguments[0::2])
    values = list(raw_arguments[1::2])
    for key in keys:
        if not isinstance(key, str):
            raise MalformedArguments(
                f"Argument names passed to {ctx} must be strings, got {key!r}",
                context=ctx,
            )

    return dict(zip(keys, values, strict=True))


def is_empty_value(value: Any) -> bool:
    """Check whether an optional argument should fall back to its default.

    Treated as empty: None, the empty string, and a one-element list or tuple
    holding None or the empty string. Zero, False and empty containers are
    real values and are kept.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)) and len(value) == 1:
        item = value[0]
        return item is None or (isinstance(item, str) and item == "")
    return False


def usage(
    mandatory: Sequence[str],
    optional_defaults: Mapping[str, Any] | None = None,
    argument_map: Mapping[str, Any] | None = None,
    context: str | None = None,
) -> str:
    """Render a usage string for an operation.

    Format: ``context{mandatory => value/optional(default) => value}``. When
    ``argument_map`` is None only names and defaults are shown. Missing
    mandatory values render as ``?``.
    """
    parts: list[str] = []

    for name in mandatory:
        entry = name
        if argument_map is not None:
            value = argument_map.get(name)
            entry += f" => {'?' if value is None else value}"
        parts.append(entry)

    for name, default in (optional_defaults or {}).items():
        entry = f"{name}({default})"
        if argument_map is not None:
            value = argument_map.get(name)
            entry += f" => {default if value is None else value}"
        parts.append(entry)

    return f"{context or UNKNOWN_CONTEXT}{{{'/'.join(parts)}}}"


def enforce(
    argument_map: Mapping[str, Any],
    mandatory: Sequence[str] = (),
    optional_defaults: Mapping[str, Any] | None = None,
    substitutions: Mapping[str, str] | None = None,
    context: str | None = None,
) -> dict[str, Any]:
    """Apply an argument contract to a keyed bundle.

    Steps, in order:
        1. Substitutions: for each ``canonical: alias`` pair where the alias
           was supplied, its value moves to the canonical name.
        2. Every mandatory name must be present and not None. All missing
           names are collected before failing.
        3. Optional names that are absent or empty (see
           :func:`is_empty_value`) receive a copy of their default.

    Args:
        argument_map: Keyed argument bundle
        mandatory: Names that must be supplied
        optional_defaults: Optional names and their default values
        substitutions: Canonical name -> accepted alias
        context: Name of the calling operation

    Returns:
        New dict with substitutions applied and defaults filled in

    Raises:
        MalformedArguments: If ``argument_map`` is not a mapping
        MissingMandatoryArguments: If any mandatory name is missing
    """
    ctx = context or UNKNOWN_CONTEXT

    if not isinstance(argument_map, Mapping):
        raise MalformedArguments(
            f"Arguments to {ctx} must be a mapping, got {type(argument_map).__name__}",
            context=ctx,
        )

    arguments = dict(argument_map)

    for canonical, alias in (substitutions or {}).items():
        if alias in arguments:
            arguments[canonical] = arguments.pop(alias)

    missing = [name for name in mandatory if arguments.get(name) is None]
    if missing:
        rendered = usage(mandatory, optional_defaults, arguments, ctx)
        raise MissingMandatoryArguments(
            f"Mandatory arguments {'; '.join(missing)} missing. Usage: {rendered}",
            context=ctx,
            usage=rendered,
            missing=missing,
        )

    for name, default in (optional_defaults or {}).items():
        if is_empty_value(arguments.get(name)):
            arguments[name] = copy.deepcopy(default)

    return arguments


@dataclass(frozen=True)
class ArgumentContract:
    """Declared argument contract of one operation.

    Attributes:
        context: Operation name shown in errors and usage text
        mandatory: Names that must be supplied
        optional: Optional names and their defaults
        substitutions: Canonical name -> accepted alias
    """

    context: str
    mandatory: tuple[str, ...] = ()
    optional: Mapping[str, Any] = field(default_factory=dict)
    substitutions: Mapping[str, str] = field(default_factory=dict)

    def bind(self, *args: Any, **kwargs: Any) -> dict[str, Any]:
        """Merge positional and keyword arguments, then enforce the contract.

        Positional arguments may be a single mapping, a single flat
        key/value list, or the flat key/value pairs themselves. Keyword
        arguments override positional ones.
        """
        raw: Any
        if len(args) == 1 and (args[0] is None or isinstance(args[0], (Mapping, list, tuple))):
            raw = args[0]
        else:
            raw = list(args)

        arguments = normalize(raw, self.context)
        arguments.update(kwargs)
        bound = enforce(arguments, self.mandatory, self.optional, self.substitutions, self.context)
        logger.debug(f"Bound arguments for {self.usage(bound)}")
        return bound

    def usage(self, arguments: Mapping[str, Any] | None = None) -> str:
        """Render the usage string for this contract."""
        return usage(self.mandatory, self.optional, arguments, self.context)
