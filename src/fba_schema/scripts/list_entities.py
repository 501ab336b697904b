#!/usr/bin/env python3
"""List the entities and reference fields the validator knows about.

Usage:
    fba-list-entities
    fba-list-entities --entity FBAModel
    fba-list-entities --references
"""

from __future__ import annotations

import click

from fba_schema.validation.schemas import (
    REFERENCE_TYPES,
    ROOT_ENTITIES,
    get_entity_schema,
    list_entities,
)


@click.command()
@click.option(
    "--entity",
    "-e",
    type=str,
    default=None,
    help="Show the fields of one entity",
)
@click.option(
    "--references",
    is_flag=True,
    help="List reference typedefs and what they point at",
)
def main(entity: str | None, references: bool) -> None:
    """List entities, one entity's fields, or reference typedefs."""
    if references:
        for ref_type in REFERENCE_TYPES.values():
            click.echo(f"{ref_type.name:<28} {ref_type.kind.value:<9} {ref_type.target}")
        return

    if entity is not None:
        try:
            schema = get_entity_schema(entity)
        except KeyError as e:
            raise click.ClickException(str(e.args[0])) from e

        header = f"{schema.name} ({schema.type_string})" if schema.type_string else schema.name
        click.echo(header)
        for spec in schema.fields:
            detail = spec.ref_type or spec.entity or ""
            flags = " required" if spec.required else ""
            click.echo(f"  {spec.name:<40} {spec.field_type.value:<14} {detail}{flags}")
        return

    for name in list_entities():
        marker = "*" if name in ROOT_ENTITIES else " "
        click.echo(f"{marker} {name}")
    click.echo("\n* persisted on its own (valid --type for fba-validate)")


if __name__ == "__main__":
    main()
