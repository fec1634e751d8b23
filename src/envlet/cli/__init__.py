# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envlet CLI -- inspect .env files and run commands with them applied.

The CLI is split into per-command modules under this package.  The ``cli``
click group and shared helpers (``console``, ``_get_definitions``, etc.)
live here so every command module can import them.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from envlet import __version__
from envlet.config import load_config
from envlet.env_file import PARSE_MODES, Definition, parse_env_text, read_env_file

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    """Route ``envlet.*`` log records to stderr through rich when verbose."""
    log = logging.getLogger("envlet")
    if not verbose:
        return
    if not any(isinstance(h, RichHandler) for h in log.handlers):
        log.addHandler(RichHandler(console=console, show_path=False))
    log.setLevel(logging.DEBUG)


def _get_definitions(ctx: click.Context) -> tuple[Definition, ...]:
    """Parse the env file selected for this invocation."""
    path = Path(ctx.obj["path"])
    if not path.is_file():
        raise click.BadParameter(f"File not found: {path}", param_hint="--file")
    try:
        text = read_env_file(path)
    except UnicodeDecodeError as e:
        raise click.BadParameter(f"File is not valid UTF-8: {path} ({e.reason} at byte {e.start})", param_hint="--file")
    return parse_env_text(
        text,
        mode=ctx.obj["mode"],
        strip_quotes=ctx.obj["strip_quotes"],
        max_offset=ctx.obj["max_offset"],
    )


def _mask(value: str) -> str:
    if len(value) <= 6:
        return "****"
    return value[:3] + "****" + value[-3:]


# ---------------------------------------------------------------------------
# Top-level click group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--file", "-f", "path", default=None, help="Path to the .env file (default: ENVLET_ENV_FILE or config, else .env).")
@click.option(
    "--mode", "-m",
    type=click.Choice(PARSE_MODES),
    default=None,
    help="Parser: strict (default), lenient (split on first '='), or scan (whole-file regex).",
)
@click.option(
    "--strip-quotes/--keep-quotes", default=None,
    help="Remove surrounding quotes from values (default: keep, or from config).",
)
@click.option("--max-offset", type=click.IntRange(min=0), default=None, help="Ignore definitions ending past this character offset.")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.version_option(__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    path: str | None,
    mode: str | None,
    strip_quotes: bool | None,
    max_offset: int | None,
    verbose: bool,
) -> None:
    """Parse .env files and apply them to an environment."""
    _setup_logging(verbose)
    try:
        cfg = load_config()
    except ValueError as e:
        raise click.UsageError(f"Invalid configuration: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["path"] = path or os.environ.get("ENVLET_ENV_FILE") or cfg.env_file
    ctx.obj["mode"] = mode or cfg.mode
    ctx.obj["strip_quotes"] = cfg.strip_quotes if strip_quotes is None else strip_quotes
    ctx.obj["max_offset"] = cfg.max_offset if max_offset is None else max_offset
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# Register all command modules (import triggers @cli.command registration)
# ---------------------------------------------------------------------------

from envlet.cli import (  # noqa: E402, F401
    list_cmd,
    get_cmd,
    export_cmd,
    run_cmd,
)
