"""Reference-resolution capabilities supplied to the validator.

A resolver answers two questions about references that point outside the
graph being validated:

- ``resolves(ref)``: does the reference point at something? ``True``,
  ``False``, or ``None`` when the resolver cannot tell.
- ``lookup(ref)``: the referenced object itself, or ``None`` if unavailable.

Without a resolver the validator only checks that such references are
well-formed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from fba_schema.validation.graph import to_plain
from fba_schema.validation.references import (
    ID_SEPARATOR,
    ReferenceFormatError,
    parse_subpath_reference,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class ReferenceResolver(Protocol):
    """Capability for resolving references against an object store."""

    def resolves(self, ref: str) -> bool | None:
        """Whether ``ref`` points at an existing object or element (None: unknown)."""
        ...

    def lookup(self, ref: str) -> Any | None:
        """Return the object named by an absolute reference, if available."""
        ...


def _element_ids(obj: Any, list_name: str) -> set[str] | None:
    """ids of the elements of a list inside a stored object."""
    obj = to_plain(obj)
    if not isinstance(obj, Mapping):
        return None
    items = obj.get(list_name)
    if not isinstance(items, list):
        return None
    return {item["id"] for item in items if isinstance(item, Mapping) and isinstance(item.get("id"), str)}


class StaticResolver:
    """In-memory resolver over a fixed set of objects.

    Args:
        objects: Absolute reference -> stored object (pydantic entity or mapping)
        known_refs: Further references known to exist without a stored object
        closed: If True, anything not found resolves to False instead of None
    """

    def __init__(
        self,
        objects: Mapping[str, Any] | None = None,
        known_refs: Iterable[str] = (),
        closed: bool = False,
    ):
        self.objects: dict[str, Any] = dict(objects or {})
        self.known_refs = frozenset(known_refs)
        self.closed = closed

    def _unknown(self) -> bool | None:
        return False if self.closed else None

    def resolves(self, ref: str) -> bool | None:
        if ref in self.known_refs or ref in self.objects:
            return True

        if ID_SEPARATOR in ref:
            try:
                parsed = parse_subpath_reference(ref)
            except ReferenceFormatError:
                return False
            parent = self.objects.get(parsed.objref)
            if parent is not None:
                ids = _element_ids(parent, parsed.list_name)
                if ids is None:
                    logger.debug(f"Stored object {parsed.objref} has no list '{parsed.list_name}'")
                    return False
                return parsed.element_id in ids

        return self._unknown()

    def lookup(self, ref: str) -> Any | None:
        return self.objects.get(ref)


class CallableResolver:
    """Adapt a plain ``(ref) -> bool`` function into a resolver.

    The function answers existence only; ``lookup`` always returns None.
    """

    def __init__(self, exists: Callable[[str], bool]):
        self._exists = exists

    def resolves(self, ref: str) -> bool | None:
        return bool(self._exists(ref))

    def lookup(self, ref: str) -> Any | None:
        return None
