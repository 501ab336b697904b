"""Shared pydantic configuration for metabolic model entities."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ConfiguredBaseModel(BaseModel):
    """Base for all entities.

    Entities are frozen once constructed. Python attributes are snake_case;
    serialized output uses the wire names (aliases), and construction accepts
    either form.

    Freezing covers attribute assignment only. List and dict fields stay
    plain containers so dumps match the wire format; derive a changed entity
    with ``model_copy(update=...)`` instead of editing them in place.
    """

    model_config = ConfigDict(
        serialize_by_alias=True,
        validate_by_name=True,
        validate_by_alias=True,
        frozen=True,
        extra="forbid",
        strict=False,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to a plain dict keyed by wire names."""
        return self.model_dump(by_alias=True)
