"""Reference string parsing.

Handles:
    - "ws/Media" and "ws/Media/3" (absolute: workspace/object[/version])
    - "489/6/1" (absolute, numeric workspace and object ids)
    - "~/modelcompartments/id/c0" (sub-path into the enclosing object)
    - "kbase/default/compounds/id/cpd00001" (sub-path into another object)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from fba_schema.validation.schemas import RefKind

LOCAL_OBJREF = "~"
ID_SEPARATOR = "/id/"

_SEGMENT = r"[A-Za-z0-9_.|:\-]+"
ABSOLUTE_REF_PATTERN = re.compile(rf"^(?P<workspace>{_SEGMENT})/(?P<name>{_SEGMENT})(?:/(?P<version>[1-9]\d*))?$")
LIST_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ReferenceFormatError(ValueError):
    """A reference string does not parse for its declared kind."""


@dataclass(frozen=True)
class AbsoluteReference:
    """Reference to a whole persisted object."""

    workspace: str
    name: str
    version: int | None = None

    def __str__(self) -> str:
        base = f"{self.workspace}/{self.name}"
        return f"{base}/{self.version}" if self.version is not None else base


@dataclass(frozen=True)
class SubPathReference:
    """Reference to one element of a list inside a persisted object."""

    objref: str
    list_name: str
    element_id: str

    @property
    def is_local(self) -> bool:
        """True when the reference points into the enclosing root object."""
        return self.objref == LOCAL_OBJREF

    def __str__(self) -> str:
        return f"{self.objref}/{self.list_name}{ID_SEPARATOR}{self.element_id}"


def parse_absolute_reference(value: str) -> AbsoluteReference:
    """Parse ``workspace/object[/version]``.

    Raises:
        ReferenceFormatError: If the value is not a well-formed absolute reference
    """
    match = ABSOLUTE_REF_PATTERN.match(value)
    if match is None:
        raise ReferenceFormatError(f"'{value}' is not of the form workspace/object[/version]")
    version = match.group("version")
    return AbsoluteReference(
        workspace=match.group("workspace"),
        name=match.group("name"),
        version=int(version) if version is not None else None,
    )


def parse_subpath_reference(value: str) -> SubPathReference:
    """Parse ``objref/list/id/element``.

    Raises:
        ReferenceFormatError: If the value is not a well-formed sub-path reference
    """
    if ID_SEPARATOR not in value:
        raise ReferenceFormatError(f"'{value}' is not of the form objref/list/id/element")

    head, element_id = value.rsplit(ID_SEPARATOR, 1)
    if not element_id or "/" in element_id:
        raise ReferenceFormatError(f"'{value}' has an empty or nested element id")

    if "/" not in head:
        raise ReferenceFormatError(f"'{value}' has no object reference before the list name")
    objref, list_name = head.rsplit("/", 1)

    if not LIST_NAME_PATTERN.match(list_name):
        raise ReferenceFormatError(f"'{value}' has an invalid list name '{list_name}'")

    if objref != LOCAL_OBJREF:
        try:
            parse_absolute_reference(objref)
        except ReferenceFormatError:
            raise ReferenceFormatError(
                f"'{value}' must start with '~' or an absolute reference, got '{objref}'"
            ) from None

    return SubPathReference(objref=objref, list_name=list_name, element_id=element_id)


def parse_reference(value: str, kind: RefKind) -> AbsoluteReference | SubPathReference:
    """Parse a reference string of the given kind."""
    if kind == RefKind.ABSOLUTE:
        return parse_absolute_reference(value)
    return parse_subpath_reference(value)


def try_parse_reference(value: str, kind: RefKind) -> AbsoluteReference | SubPathReference | None:
    """Parse a reference string, returning None if it is malformed."""
    try:
        return parse_reference(value, kind)
    except ReferenceFormatError:
        return None


def local_reference(list_name: str, element_id: str) -> str:
    """Build a sub-path reference into the enclosing object."""
    return f"{LOCAL_OBJREF}/{list_name}{ID_SEPARATOR}{element_id}"
