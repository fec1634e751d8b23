# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envlet list`` command."""

from __future__ import annotations

import click
from rich.table import Table
from rich.markup import escape
from rich.text import Text

from envlet.cli import _get_definitions, _mask, cli, console


@cli.command("list")
@click.option("--show", is_flag=True, help="Show values unmasked.")
@click.pass_context
def list_definitions(ctx: click.Context, show: bool) -> None:
    """List definitions in document order (shadowed ones included)."""
    definitions = _get_definitions(ctx)
    table = Table(title=f"Definitions ({escape(str(ctx.obj['path']))}, {ctx.obj['mode']})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Value" if show else "Value (masked)", style="white" if show else "dim")
    if not definitions:
        table.add_row("", "(empty)", "(empty)")
    else:
        last_index = {d.name: i for i, d in enumerate(definitions)}
        for i, (name, value) in enumerate(definitions):
            shown = value if show else (_mask(value) if value else "(empty)")
            label = name if last_index[name] == i else f"{name} (shadowed)"
            table.add_row(str(i + 1), Text(label), Text(shown))
    console.print(table)
