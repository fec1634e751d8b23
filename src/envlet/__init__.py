# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envlet -- parse .env files and apply them to an environment."""

from envlet.env_file import Definition, normalize_value, parse_env_text, parse_line, scan_document
from envlet.sdk import dotenv_values, load_dotenv, restore_environment

__all__ = [
    "__version__",
    "Definition",
    "dotenv_values",
    "load_dotenv",
    "normalize_value",
    "parse_env_text",
    "parse_line",
    "restore_environment",
    "scan_document",
]
__version__ = "0.1.0"
