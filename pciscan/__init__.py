"""
pciscan — PCI device enumeration with pci.ids name resolution.

Public API:
    - Enumeration:
        fetch, fetch_by_class, fetch_gpus, Enumerator
    - Records:
        PciDevice, PciAddress, DeviceClass, normalize_address, parse_address
    - Identifier database:
        PciDb, PciDbText, open_db, default_db
    - Attribute sources:
        SysfsSource (Linux), MemorySource (simulated)
    - GPU names:
        refine, refine_device_name, refine_vendor_name
"""

from __future__ import annotations

# Version from installed dist; falls back to dev string when run from source tree.
from importlib.metadata import version, PackageNotFoundError

try:  # pragma: no cover
    __version__ = version("pciscan")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0.dev0"

# Public API re-exports
from .address import PciAddress, normalize_address, parse_address
from .api import (
    PciDb,
    PciDbText,
    default_db,
    fetch,
    fetch_by_class,
    fetch_gpus,
    open_db,
)
from .backends.memory import MemorySource
from .classes import DeviceClass
from .device import PciDevice
from .enumerator import Enumerator
from .errors import (
    InvalidAddressError,
    MissingAttributeError,
    PciScanError,
    UnsupportedPlatformError,
)
from .refine import refine, refine_device_name, refine_vendor_name
from .sysfs import SysfsSource

__all__ = [
    "__version__",
    # Enumeration
    "fetch",
    "fetch_by_class",
    "fetch_gpus",
    "Enumerator",
    # Records
    "PciDevice",
    "PciAddress",
    "DeviceClass",
    "normalize_address",
    "parse_address",
    # DB protocol/factory
    "PciDb",
    "PciDbText",
    "open_db",
    "default_db",
    # Sources
    "SysfsSource",
    "MemorySource",
    # Names
    "refine",
    "refine_device_name",
    "refine_vendor_name",
    # Errors
    "PciScanError",
    "InvalidAddressError",
    "MissingAttributeError",
    "UnsupportedPlatformError",
]
