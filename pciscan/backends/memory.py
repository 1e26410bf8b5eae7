from __future__ import annotations
import posixpath
from typing import Dict, List, Mapping, Optional

from ..address import PciAddress, normalize_address
from ..sysfs import SYSFS_DEVICES_DEFAULT
from ..types import RawValue


class MemorySource:
    """
    Attribute source and device registry over a plain dict, keyed by any
    accepted address shape. Registry order is insertion order.

        MemorySource({"00:02.0": {"vendor": "0x8086", "device": "0x3e9b",
                                  "class": "0x030000"}})
    """

    def __init__(
        self,
        devices: Mapping[str, Mapping[str, RawValue]],
        root: str = SYSFS_DEVICES_DEFAULT,
    ):
        self.root = root
        self._devices: Dict[str, Dict[str, RawValue]] = {}
        for addr, attrs in devices.items():
            self._devices[normalize_address(addr)] = dict(attrs)

    def path_for(self, address: PciAddress) -> str:
        return posixpath.join(self.root, str(address))

    def read_attributes(self, path: str) -> Dict[str, RawValue]:
        found: Optional[Dict[str, RawValue]] = None
        if posixpath.dirname(path) == self.root.rstrip("/"):
            found = self._devices.get(posixpath.basename(path))
        return dict(found) if found is not None else {}

    def list_addresses(self) -> List[str]:
        return list(self._devices)
