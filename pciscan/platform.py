"""
Selects the attribute source for the running platform.

Exactly one backend is active per process; the choice is made once, at
import, from sys.platform.
"""

from __future__ import annotations
import sys
from typing import Optional

from .errors import UnsupportedPlatformError
from .types import DeviceBackend

if sys.platform.startswith("linux"):
    from .sysfs import SysfsSource

    def default_source(root: Optional[str] = None) -> DeviceBackend:
        return SysfsSource(root)

else:

    def default_source(root: Optional[str] = None) -> DeviceBackend:
        raise UnsupportedPlatformError(
            f"no PCI attribute source for platform {sys.platform!r}; "
            "pass a source explicitly"
        )
