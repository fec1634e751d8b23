# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``envlet run`` -- run a command with the env file applied."""

from __future__ import annotations

import logging
import os
import subprocess

import click

from envlet.cli import _get_definitions, cli
from envlet.stores.memory import MemoryEnvironmentStore

logger = logging.getLogger(__name__)


@cli.command(
    "run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.option(
    "--override/--no-override", default=None,
    help="Let the env file win over variables already set (default: from config, else override).",
)
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def run(ctx: click.Context, override: bool | None, command: tuple[str, ...]) -> None:
    """Run COMMAND with the env file overlaid on the current environment.

    The current process environment is not modified; the child gets its own
    copy.  Exits with the child's return code.

        envlet -f .env.test run -- pytest -x
    """
    definitions = _get_definitions(ctx)
    current = dict(os.environ)
    store = MemoryEnvironmentStore(initial=current, snapshot=current)
    resolved_override = ctx.obj["config"].override if override is None else override
    env = store.load(definitions, override=resolved_override)
    logger.debug("Running %s with %d definition(s) applied", command[0], len(definitions))
    try:
        completed = subprocess.run(list(command), env=env, check=False)
    except FileNotFoundError:
        raise click.ClickException(f"Command not found: {command[0]}")
    ctx.exit(completed.returncode)
