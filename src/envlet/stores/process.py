# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ProcessEnvironmentStore -- the current process environment (``os.environ``)."""

from __future__ import annotations

import os

from envlet.store import EnvironmentStore


class ProcessEnvironmentStore(EnvironmentStore):
    """Read/write variables in ``os.environ``.

    Changes are visible to child processes started afterwards.
    """

    service_name: str = "process"
    service_display_name: str = "Process environment (os.environ)"

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value

    def delete(self, name: str) -> None:
        os.environ.pop(name, None)

    def list_keys(self) -> list[str]:
        return sorted(os.environ.keys())
