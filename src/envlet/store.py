# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract base class for environment stores (snapshot + overlay)."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import ClassVar

from envlet.env_file import Definition, is_valid_name

logger = logging.getLogger(__name__)


class EnvironmentStore(ABC):
    """A table of environment variables that .env documents are applied to.

    The store captures a snapshot of its table when created (or takes an
    explicit ``snapshot``).  The snapshot is the restoration baseline: every
    :meth:`load` rebuilds the table as *snapshot overlaid with definitions*,
    so loading document B after document A never leaves A's variables behind.

    Subclasses implement the four primitive operations :meth:`get`,
    :meth:`set`, :meth:`delete` and :meth:`list_keys`.  :meth:`load` and
    :meth:`restore` are serialized per store; only one load runs at a time.

    **Service listing**: each store defines ``service_name`` (short name used
    in log messages) and ``service_display_name``.
    """

    service_name: ClassVar[str] = ""
    service_display_name: ClassVar[str] = ""

    def __init__(self, snapshot: Mapping[str, str] | None = None) -> None:
        self._lock = threading.RLock()
        captured = self.capture() if snapshot is None else dict(snapshot)
        self._snapshot: Mapping[str, str] = MappingProxyType(captured)

    @abstractmethod
    def get(self, name: str) -> str | None:
        """Return the value for *name*, or ``None`` if it is not set."""

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """Create or overwrite *name* with *value*."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove *name* from the table.  No error if it is not set."""

    @abstractmethod
    def list_keys(self) -> list[str]:
        """Return all variable names currently in the table."""

    def capture(self) -> dict[str, str]:
        """Return a copy of the current table."""
        result: dict[str, str] = {}
        for name in self.list_keys():
            value = self.get(name)
            if value is not None:
                result[name] = value
        return result

    @property
    def snapshot(self) -> Mapping[str, str]:
        """Read-only view of the environment as it was before any load."""
        return self._snapshot

    def effective(
        self,
        definitions: Iterable[Definition],
        *,
        override: bool = True,
    ) -> dict[str, str]:
        """Compute snapshot overlaid with *definitions* without touching the table.

        Later definitions win over earlier ones.  With ``override=False``
        names already in the snapshot keep their snapshot value.
        """
        result = dict(self._snapshot)
        for name, value in definitions:
            if not is_valid_name(name):
                logger.debug("Ignoring definition with invalid name %r", name)
                continue
            if "\x00" in value:
                logger.debug("Ignoring definition of %s: value contains NUL", name)
                continue
            if not override and name in self._snapshot:
                continue
            result[name] = value
        return result

    def load(
        self,
        definitions: Iterable[Definition],
        *,
        override: bool = True,
    ) -> dict[str, str]:
        """Rebuild the table from the snapshot and *definitions*.

        Returns the resulting effective environment.
        """
        target = self.effective(definitions, override=override)
        with self._lock:
            self._replace(target)
        return target

    def restore(self) -> dict[str, str]:
        """Rebuild the table from the snapshot alone."""
        target = dict(self._snapshot)
        with self._lock:
            self._replace(target)
        return target

    def _replace(self, target: Mapping[str, str]) -> None:
        # Validate the whole target before the first write.
        for name, value in target.items():
            if not name or "\x00" in name or "\x00" in value:
                raise ValueError(f"Cannot apply variable {name!r}: empty name or NUL character")
        removed = 0
        for name in self.list_keys():
            if name not in target:
                self.delete(name)
                removed += 1
        changed = 0
        for name, value in target.items():
            if self.get(name) != value:
                self.set(name, value)
                changed += 1
        logger.debug(
            "%s: set %d variable(s), removed %d",
            self.service_name or type(self).__name__, changed, removed,
        )
