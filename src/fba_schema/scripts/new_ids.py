#!/usr/bin/env python3
"""Allocate new object ids from the configured ID server.

The endpoint, timeout and namespace come from the FBA_SCHEMA_* environment
variables (a .env file is honoured).

Usage:
    fba-new-ids fbamdl.
    fba-new-ids gf. --count 5
"""

from __future__ import annotations

import logging

import click

from fba_schema.clients import IDServerError
from fba_schema.config import Settings
from fba_schema.ids import new_ids

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


@click.command()
@click.argument("prefix")
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of ids to allocate",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def main(prefix: str, count: int, debug: bool) -> None:
    """Allocate COUNT ids for PREFIX (e.g. fbamdl.) and print one per line."""
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings = Settings.from_env(load_env=True)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    logger.debug(f"Allocating from {settings.idserver_url}")
    ids = settings.id_allocator()
    with ids:
        try:
            allocated = new_ids(prefix, ids, count, namespace=settings.id_namespace)
        except IDServerError as e:
            raise click.ClickException(str(e)) from e

    for new in allocated:
        click.echo(new)


if __name__ == "__main__":
    main()
