# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Environment store backends."""

from __future__ import annotations

from envlet.stores.memory import MemoryEnvironmentStore
from envlet.stores.process import ProcessEnvironmentStore

__all__ = ["MemoryEnvironmentStore", "ProcessEnvironmentStore"]
