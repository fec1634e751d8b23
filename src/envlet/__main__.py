# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Entry point for the envlet CLI (run via ``envlet`` or ``python -m envlet``)."""

from __future__ import annotations

import sys


def main() -> None:
    """Run the CLI."""
    try:
        from envlet.cli import cli
    except ImportError:
        sys.stderr.write("envlet CLI dependencies missing. Install with: pip install envlet\n")
        sys.exit(1)
    cli()


if __name__ == "__main__":
    main()
