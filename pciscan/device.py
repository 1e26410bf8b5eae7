# pciscan/device.py
from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Any, Dict, Mapping, Optional, Union

from .address import PciAddress, parse_address
from .classes import DeviceClass
from .errors import MissingAttributeError, PciScanError
from .types import AttributeSource, PciDb, RawValue

log = logging.getLogger(__name__)

# fmt: off
VENDOR_WIDTH    = 2
DEVICE_WIDTH    = 2
CLASS_WIDTH     = 3
REVISION_WIDTH  = 1
SUBSYS_WIDTH    = 2
# fmt: on

NO_NUMA_NODE = -1
NO_SUBSYSTEM = b"\x00\x00"


def _decode_id(value: Optional[RawValue], width: int) -> Optional[bytes]:
    """
    Turn a raw attribute into exactly `width` bytes, most significant first.

    Text is hex with or without a 0x prefix ("0x10de", "10de"); a bytes value
    of exactly `width` is taken verbatim; an int is range-checked. Anything
    else is None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        if value < 0 or value >= 1 << (8 * width):
            return None
        return value.to_bytes(width, "big")
    if isinstance(value, (bytes, bytearray)):
        if len(value) == width:
            return bytes(value)
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError:
            return None
    s = value.strip().lower()
    if s.startswith("0x"):
        s = s[2:]
    if not s:
        return None
    try:
        n = int(s, 16)
    except ValueError:
        return None
    if n < 0 or n >= 1 << (8 * width):
        return None
    return n.to_bytes(width, "big")


def _decode_flag(value: Optional[RawValue]) -> bool:
    if value is None:
        return False
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, (bytes, bytearray)):
        if len(value) == 1 and value[0] in (0, 1):
            return bool(value[0])
        value = value.decode("ascii", errors="ignore")
    s = value.strip().lower()
    try:
        return int(s, 16 if s.startswith("0x") else 10) != 0
    except ValueError:
        return False


def _decode_numa(value: Optional[RawValue]) -> int:
    if value is None or isinstance(value, bool):
        return NO_NUMA_NODE
    if isinstance(value, int):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii", errors="ignore")
    try:
        return int(value.strip(), 10)
    except ValueError:
        return NO_NUMA_NODE


def _is_absent(ident: bytes) -> bool:
    return all(b == 0x00 for b in ident) or all(b == 0xFF for b in ident)


@dataclass(frozen=True, slots=True)
class PciDevice:
    """
    One PCI function as read at construction time; never refreshed afterwards.

    The dataclass constructor is private. Build records only through
    `PciDevice.new`, `PciDevice.try_new` or `init_device`, which validate the
    identifiers and resolve the names; fields are read-only once built.
    """

    location: PciAddress
    path: str
    vendor_id: bytes
    device_id: bytes
    class_id: bytes
    revision: bytes
    subsystem_vendor_id: bytes
    subsystem_device_id: bytes
    numa_node: int
    enabled: bool
    d3cold_allowed: bool
    vendor_name: str
    device_name: str
    class_name: str
    subsystem_name: str
    driver: Optional[str] = None

    @classmethod
    def new(
        cls,
        address: Union[str, PciAddress],
        source: Optional[AttributeSource] = None,
        db: Optional[PciDb] = None,
    ) -> "PciDevice":
        """
        Build a record from `BB:DD.F`, `DDDD:BB:DD.F` or a registry path.
        Raises InvalidAddressError or MissingAttributeError.
        """
        if source is None or db is None:
            from .api import default_db
            from .platform import default_source

            source = source if source is not None else default_source()
            db = db if db is not None else default_db()
        return init_device(address, source, db)

    @classmethod
    def try_new(
        cls,
        address: Union[str, PciAddress],
        source: Optional[AttributeSource] = None,
        db: Optional[PciDb] = None,
    ) -> Optional["PciDevice"]:
        """Like `new`, but returns None (and logs why) instead of raising."""
        try:
            return cls.new(address, source, db)
        except PciScanError as e:
            log.warning("cannot construct PCI device %s: %s", address, e)
            return None

    # Read-only conveniences

    @property
    def address(self) -> str:
        return str(self.location)

    @property
    def vendor(self) -> int:
        return int.from_bytes(self.vendor_id, "big")

    @property
    def device(self) -> int:
        return int.from_bytes(self.device_id, "big")

    @property
    def subsystem_vendor(self) -> int:
        return int.from_bytes(self.subsystem_vendor_id, "big")

    @property
    def subsystem_device(self) -> int:
        return int.from_bytes(self.subsystem_device_id, "big")

    @property
    def class_code(self) -> int:
        return int.from_bytes(self.class_id, "big")

    @property
    def base_class(self) -> int:
        return self.class_id[0]

    @property
    def device_class(self) -> Optional[DeviceClass]:
        return DeviceClass.from_code(self.base_class)

    @property
    def is_gpu(self) -> bool:
        return self.base_class == DeviceClass.DISPLAY_CONTROLLER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "path": self.path,
            "vendor_id": self.vendor_id.hex(),
            "device_id": self.device_id.hex(),
            "class_id": self.class_id.hex(),
            "revision": self.revision.hex(),
            "subsystem_vendor_id": self.subsystem_vendor_id.hex(),
            "subsystem_device_id": self.subsystem_device_id.hex(),
            "numa_node": self.numa_node,
            "enabled": self.enabled,
            "d3cold_allowed": self.d3cold_allowed,
            "vendor_name": self.vendor_name,
            "device_name": self.device_name,
            "class_name": self.class_name,
            "subsystem_name": self.subsystem_name,
            "driver": self.driver,
        }


def _require(
    raw: Mapping[str, RawValue], key: str, width: int, address: PciAddress
) -> bytes:
    value = _decode_id(raw.get(key), width)
    if value is None:
        raise MissingAttributeError(str(address), key)
    return value


def init_device(
    location: Union[str, PciAddress], source: AttributeSource, db: PciDb
) -> PciDevice:
    """Read one device from `source` and resolve its names against `db`."""
    address = location if isinstance(location, PciAddress) else parse_address(location)
    path = source.path_for(address)
    raw = source.read_attributes(path)

    vendor_id = _require(raw, "vendor", VENDOR_WIDTH, address)
    device_id = _require(raw, "device", DEVICE_WIDTH, address)
    class_id = _require(raw, "class", CLASS_WIDTH, address)
    revision = _decode_id(raw.get("revision"), REVISION_WIDTH) or b"\x00"
    subvendor = _decode_id(raw.get("subsystem_vendor"), SUBSYS_WIDTH) or NO_SUBSYSTEM
    subdevice = _decode_id(raw.get("subsystem_device"), SUBSYS_WIDTH) or NO_SUBSYSTEM

    # prog-if name first, then the subclass name
    class_name = db.lookup_class(class_id) or db.lookup_class(class_id[:2]) or ""
    vendor_name = db.lookup_vendor(vendor_id) or ""
    device_name = db.lookup_device(vendor_id, device_id) or ""

    subsystem_name = ""
    if not (_is_absent(subvendor) or _is_absent(subdevice)):
        subsystem_name = (
            db.lookup_subsystem(subvendor, subdevice, vendor_id, device_id) or ""
        )

    driver = raw.get("driver")
    if isinstance(driver, (bytes, bytearray)):
        driver = driver.decode("utf-8", errors="replace")
    elif not isinstance(driver, str):
        driver = None

    return PciDevice(
        location=address,
        path=path,
        vendor_id=vendor_id,
        device_id=device_id,
        class_id=class_id,
        revision=revision,
        subsystem_vendor_id=subvendor,
        subsystem_device_id=subdevice,
        numa_node=_decode_numa(raw.get("numa_node")),
        enabled=_decode_flag(raw.get("enable")),
        d3cold_allowed=_decode_flag(raw.get("d3cold_allowed")),
        vendor_name=vendor_name,
        device_name=device_name,
        class_name=class_name,
        subsystem_name=subsystem_name,
        driver=driver or None,
    )
