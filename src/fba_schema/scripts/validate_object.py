#!/usr/bin/env python3
"""Validate a serialized metabolic model object.

Checks reference syntax, id uniqueness, local and cross-object reference
resolution, value domains and cross-object consistency of one JSON object.
Objects it points at (a gap-filling, the target model of an FBA) can be
supplied with --object so references into them are resolved too.

Usage:
    fba-validate model.json
    fba-validate fba.json --type FBA --object ws/model=model.json
    fba-validate model.json --object ws/gf.1=gapfill.json --closed -o report.json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

from fba_schema.config import Settings
from fba_schema.validation import (
    GraphStructureError,
    StaticResolver,
    export_validation_report,
    print_validation_report,
    validate,
)
from fba_schema.validation.schemas import ROOT_ENTITIES
from fba_schema.verbose import VerboseSink

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def load_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON object from a file.

    Raises:
        click.ClickException: If the file cannot be read, is not valid JSON
            or does not hold an object
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise click.ClickException(f"{path} is not UTF-8 text: {e}") from e
    except OSError as e:
        raise click.ClickException(f"Cannot read {path}: {e.strerror or e}") from e
    if not isinstance(data, dict):
        raise click.ClickException(f"{path} must contain a JSON object, got {type(data).__name__}")
    return data


def parse_object_option(value: str) -> tuple[str, Path]:
    """Split a REF=PATH option value."""
    ref, sep, path = value.partition("=")
    if not sep or not ref or not path:
        raise click.BadParameter(f"expected REF=PATH, got {value!r}", param_hint="--object")
    return ref, Path(path)


@click.command()
@click.argument("object_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--type",
    "-t",
    "root_type",
    type=click.Choice(ROOT_ENTITIES),
    default="FBAModel",
    show_default=True,
    help="Entity type of the object",
)
@click.option(
    "--object",
    "objects",
    multiple=True,
    help="Referenced object as REF=PATH (repeatable)",
)
@click.option(
    "--closed",
    is_flag=True,
    help="Treat references to objects not given with --object as unresolved",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Export report to JSON file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show offending values and progress messages",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def main(
    object_json: Path,
    root_type: str,
    objects: tuple[str, ...],
    closed: bool,
    output: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Validate OBJECT_JSON and exit non-zero if it has errors."""
    load_dotenv()
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    say = VerboseSink.from_setting(verbose or settings.verbose)

    referenced: dict[str, Any] = {}
    for value in objects:
        ref, path = parse_object_option(value)
        if not path.exists():
            raise click.BadParameter(f"file not found: {path}", param_hint="--object")
        referenced[ref] = load_json_object(path)
        say(f"Loaded {ref} from {path}")

    root = load_json_object(object_json)
    resolver = StaticResolver(referenced, closed=closed)

    click.echo(f"Validating {object_json} as {root_type}...")
    try:
        report = validate(root, resolver=resolver, root_type=root_type)
    except GraphStructureError as e:
        raise click.ClickException(f"Cannot validate {object_json}: {e}") from e

    print_validation_report(report, verbose=verbose)

    if output is not None:
        export_validation_report(report, output)
        click.echo(f"\nExported report to {output}")

    if report.error_count:
        sys.exit(1)


if __name__ == "__main__":
    main()
