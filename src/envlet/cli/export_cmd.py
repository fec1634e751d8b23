"""``envlet export`` and ``envlet unexport`` commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.console import Console

from envlet.cli import HAS_YAML, _get_definitions, cli, console
from envlet.env_file import definitions_to_dict, normalize_value

if HAS_YAML:
    import yaml


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------

@cli.command("export")
@click.option(
    "--format", "fmt",
    type=click.Choice(["dotenv", "unix", "win", "json", "yaml"]),
    default="dotenv",
    help="Output format: dotenv (default, NAME=value), unix (export NAME=value), win (PowerShell), json, yaml.",
)
@click.option(
    "--output", "-o",
    type=click.Path(exists=False),
    default=None,
    help="Output file path (default: stdout).",
)
@click.pass_context
def export(ctx: click.Context, fmt: str, output: str | None) -> None:
    """Print the effective name/value pairs of the env file.

    Shadowed definitions are collapsed (the last one wins) and names keep the
    order of their first appearance.  Use --format unix for shell sourcing:
    eval "$(envlet export --format unix)".  Use --format win for PowerShell:
    envlet export --format win | Invoke-Expression (or iex).
    """
    pairs = definitions_to_dict(_get_definitions(ctx))

    if fmt == "yaml" and not HAS_YAML:
        raise click.ClickException("PyYAML is not installed. Install with: pip install pyyaml")

    if output:
        path = Path(output)
        with path.open("w") as f:
            if fmt == "json":
                f.write(json.dumps(pairs, indent=2))
                f.write("\n")
            elif fmt == "yaml":
                yaml.dump(pairs, f, default_flow_style=False, sort_keys=False)
            else:
                for line in _format_export_lines(pairs, fmt):
                    f.write(line + "\n")
        console.print(f"[green]Exported {len(pairs)} variable(s) to {output}[/green]")
    else:
        out = Console(file=sys.stdout, highlight=False, soft_wrap=True, emoji=False)
        if fmt == "json":
            out.print(json.dumps(pairs, indent=2), markup=False)
        elif fmt == "yaml":
            yaml.dump(pairs, sys.stdout, default_flow_style=False, sort_keys=False)
        else:
            for line in _format_export_lines(pairs, fmt):
                out.print(line, markup=False)


def _shell_escape(value: str) -> str:
    """Escape for Unix sh: single-quote wrapped, internal ' -> '\\''."""
    if not value or any(c in value for c in " \t'\"\\$`!#&|;(){}<>*?~"):
        return "'" + value.replace("'", "'\\''") + "'"
    return value


def _dotenv_quote(value: str) -> str:
    """Quote for .env when the bare value would not read back unchanged (inline '#', edge whitespace)."""
    if normalize_value(value) == value:
        return value
    quote = "'" if "'" not in value else '"'
    return quote + value + quote


def _powershell_escape(value: str) -> str:
    """Escape for PowerShell single-quoted string: ' -> ''."""
    return value.replace("'", "''")


def _format_export_lines(pairs: dict[str, str], fmt: str) -> list[str]:
    lines: list[str] = []
    for name, value in pairs.items():
        if fmt == "unix":
            lines.append(f"export {name}={_shell_escape(value)}")
        elif fmt == "win":
            lines.append(f"$env:{name} = '{_powershell_escape(value)}'")
        else:
            lines.append(f"{name}={_dotenv_quote(value)}")
    return lines


# ---------------------------------------------------------------------------
# unexport
# ---------------------------------------------------------------------------

@cli.command("unexport")
@click.option(
    "--format", "fmt",
    type=click.Choice(["unix", "win"]),
    default="unix",
    help="Output format. Default: unix (unset NAME). Use win for PowerShell (Remove-Item Env:NAME).",
)
@click.pass_context
def unexport(ctx: click.Context, fmt: str) -> None:
    """Output shell commands that unset every name export would set.

    Unix: eval "$(envlet export --format unix)" then eval "$(envlet unexport)".
    Win: envlet unexport --format win | Invoke-Expression (or iex).
    """
    names = definitions_to_dict(_get_definitions(ctx))

    out = Console(file=sys.stdout, highlight=False, soft_wrap=True, emoji=False)
    for name in names:
        if fmt == "win":
            out.print(f"Remove-Item Env:{name} -ErrorAction SilentlyContinue", markup=False)
        else:
            out.print(f"unset {name}", markup=False)
