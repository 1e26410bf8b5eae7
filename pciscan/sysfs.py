# pciscan/sysfs.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional
import os

from .address import PciAddress, parse_address
from .errors import InvalidAddressError

SYSFS_DEVICES_DEFAULT = "/sys/bus/pci/devices"

# Attribute key -> file name under the device directory.
ATTRIBUTE_FILES = {
    "vendor": "vendor",
    "device": "device",
    "class": "class",
    "revision": "revision",
    "subsystem_vendor": "subsystem_vendor",
    "subsystem_device": "subsystem_device",
    "enable": "enable",
    "d3cold_allowed": "d3cold_allowed",
    "numa_node": "numa_node",
}


def _read_text(p: Path) -> Optional[str]:
    try:
        return p.read_text(encoding="ascii", errors="ignore").strip()
    except OSError:
        return None


def default_root() -> str:
    return os.getenv("PCISCAN_SYSFS") or SYSFS_DEVICES_DEFAULT


class SysfsSource:
    """
    Attribute source and device registry backed by Linux sysfs
    (/sys/bus/pci/devices/DDDD:BB:DD.F/*).
    """

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or default_root())

    def __repr__(self) -> str:
        return f"SysfsSource(root={str(self.root)!r})"

    def path_for(self, address: PciAddress) -> str:
        return str(self.root / str(address))

    def read_attributes(self, path: str) -> Dict[str, str]:
        d = Path(path)
        attrs: Dict[str, str] = {}
        for key, fname in ATTRIBUTE_FILES.items():
            value = _read_text(d / fname)
            if value is not None:
                attrs[key] = value

        pdrv = d / "driver"
        if pdrv.exists():
            attrs["driver"] = pdrv.resolve().name
        return attrs

    def list_addresses(self) -> List[str]:
        found: List[PciAddress] = []
        for d in self.root.iterdir():
            try:
                found.append(parse_address(d.name))
            except InvalidAddressError:  # skip non-BDF entries
                continue
        return [str(a) for a in sorted(found)]
