# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envlet get`` command."""

from __future__ import annotations

import click

from envlet.cli import _get_definitions, cli
from envlet.env_file import definitions_to_dict


@cli.command()
@click.argument("name")
@click.pass_context
def get(ctx: click.Context, name: str) -> None:
    """Print the value NAME ends up with (the last definition wins)."""
    values = definitions_to_dict(_get_definitions(ctx))
    if name not in values:
        raise click.ClickException(f"Name '{name}' not found.")
    click.echo(values[name])
