""".envlet.toml configuration loading.

Searches upward from cwd for ``.envlet.toml``.  ``ENVLET_*`` environment
variables override the file; explicit arguments (CLI flags, SDK keyword
arguments) override both.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from envlet.env_file import DEFAULT_MAX_OFFSET, PARSE_MODES

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = ".envlet.toml"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class EnvletConfig:
    """Resolved configuration for the current invocation."""

    env_file: str = ".env"
    mode: str = "strict"
    strip_quotes: bool = False
    max_offset: int = DEFAULT_MAX_OFFSET
    override: bool = True
    config_path: Path | None = None

    def __post_init__(self) -> None:
        if self.mode not in PARSE_MODES:
            raise ValueError(
                f"Invalid mode {self.mode!r} in config. Use one of: {', '.join(PARSE_MODES)}"
            )


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.envlet.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _env_flag(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in _TRUE_VALUES


def load_config(path: Path | None = None) -> EnvletConfig:
    """Load and return config.  Returns defaults (plus env overrides) if no file found."""
    if path is None:
        path = find_config_file()

    section: dict[str, Any] = {}
    if path is not None:
        raw: dict[str, Any] = tomllib.loads(path.read_text())
        section = raw.get("envlet", {})

    max_offset = section.get("max_offset")
    strip_quotes = _env_flag("ENVLET_STRIP_QUOTES")

    return EnvletConfig(
        env_file=os.environ.get("ENVLET_ENV_FILE") or section.get("env_file", ".env"),
        mode=os.environ.get("ENVLET_MODE") or section.get("mode", "strict"),
        strip_quotes=(
            strip_quotes if strip_quotes is not None
            else bool(section.get("strip_quotes", False))
        ),
        max_offset=DEFAULT_MAX_OFFSET if max_offset is None else int(max_offset),
        override=bool(section.get("override", True)),
        config_path=path,
    )
