"""
Internal backends package.

`discover_db` finds and opens an identifier database; `MemorySource` is the
in-memory attribute source used for simulation and tests.
"""

from __future__ import annotations

from .discovery import discover_db
from .memory import MemorySource

__all__ = ["discover_db", "MemorySource"]
