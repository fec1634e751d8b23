# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""MemoryEnvironmentStore -- an isolated in-memory variable table.

Used by ``envlet run`` to build a child environment and by tests that must
not touch the real process environment.
"""

from __future__ import annotations

from collections.abc import Mapping

from envlet.store import EnvironmentStore


class MemoryEnvironmentStore(EnvironmentStore):
    """Read/write variables in a plain dict."""

    service_name: str = "memory"
    service_display_name: str = "In-memory table"

    def __init__(
        self,
        initial: Mapping[str, str] | None = None,
        snapshot: Mapping[str, str] | None = None,
    ) -> None:
        self._data: dict[str, str] = dict(initial or {})
        super().__init__(snapshot=snapshot)

    def get(self, name: str) -> str | None:
        return self._data.get(name)

    def set(self, name: str, value: str) -> None:
        self._data[name] = value

    def delete(self, name: str) -> None:
        self._data.pop(name, None)

    def list_keys(self) -> list[str]:
        return sorted(self._data.keys())

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the current table."""
        return dict(self._data)
