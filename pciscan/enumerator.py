from __future__ import annotations
import logging
from typing import List, Optional, Set, Union

from .address import PciAddress, parse_address
from .classes import DeviceClass
from .device import PciDevice, init_device
from .errors import PciScanError
from .refine import refine_device
from .types import DeviceBackend, PciDb

log = logging.getLogger(__name__)


class Enumerator:
    """
    Builds device records for everything the registry lists. Each call is
    a fresh pass over the source; nothing is kept between calls.
    """

    def __init__(
        self, source: Optional[DeviceBackend] = None, db: Optional[PciDb] = None
    ):
        if source is None:
            from .platform import default_source

            source = default_source()
        if db is None:
            from .api import default_db

            db = default_db()
        self.source = source
        self.db = db

    def fetch(self) -> List[PciDevice]:
        devices: List[PciDevice] = []
        seen: Set[PciAddress] = set()
        for entry in self.source.list_addresses():
            try:
                address = parse_address(entry)
                if address in seen:
                    log.debug("duplicate registry entry %s ignored", entry)
                    continue
                seen.add(address)
                devices.append(init_device(address, self.source, self.db))
            except PciScanError as e:
                log.warning("skipping PCI device %s: %s", entry, e)
        return devices

    def fetch_by_class(self, cls: Union[DeviceClass, int]) -> List[PciDevice]:
        """Devices whose base class is `cls`; unknown codes raise ValueError."""
        code = DeviceClass(cls)
        return [d for d in self.fetch() if d.base_class == code]

    def fetch_gpus(self) -> List[PciDevice]:
        return [
            refine_device(d)
            for d in self.fetch_by_class(DeviceClass.DISPLAY_CONTROLLER)
        ]

    def find(self, address: Union[str, PciAddress]) -> Optional[PciDevice]:
        """Single device by any accepted address shape, or None."""
        try:
            return init_device(address, self.source, self.db)
        except PciScanError as e:
            log.debug("no PCI device at %s: %s", address, e)
            return None
