#!/usr/bin/python
#
# Python pciscan library
# pci.ids text database reader
#
# (c) 2025 Steven Noonan
# Licensed under the MIT license
#

from typing import Dict, Optional, Tuple

from ..types import IdLike

# vendors: {vendor_id: (name, {device_id: (name, {(subven, subdev): name})})}
Subsystems = Dict[Tuple[int, int], str]
Devices = Dict[int, Tuple[str, Subsystems]]
VendorDict = Dict[int, Tuple[str, Devices]]
# classes: {base: (name, {sub: (name, {prog_if: name})})}
ClassDict = Dict[int, Tuple[str, Dict[int, Tuple[str, Dict[int, str]]]]]


def _as_int(value: IdLike) -> int:
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big")
    return int(value)


def _split_id(line: str, nfields: int = 1) -> Optional[Tuple[Tuple[int, ...], str]]:
    """Split '<hex> [<hex>...]  name' into ids and name; None when the ids are bogus."""
    tok = line.strip().split(None, nfields)
    if len(tok) < nfields:
        return None
    try:
        ids = tuple(int(t, 16) for t in tok[:nfields])
    except ValueError:
        return None
    name = tok[nfields].strip() if len(tok) > nfields else ""
    return ids, name


# ---------- Parser for plaintext pci.ids ----------
def _parse_pci_ids(path: str) -> Tuple[VendorDict, ClassDict]:
    vendors: VendorDict = {}
    classes: ClassDict = {}

    in_classes = False
    cur_vendor: Optional[int] = None
    cur_device: Optional[int] = None
    cur_base: Optional[int] = None
    cur_sub: Optional[int] = None

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for raw in f:
            line = raw.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue

            if line.startswith("C "):
                in_classes = True
                parsed = _split_id(line[2:])
                cur_base = cur_sub = None
                if parsed is not None:
                    (base,), name = parsed
                    classes[base & 0xFF] = (name, {})
                    cur_base = base & 0xFF
                continue

            if not line.startswith("\t"):
                # Vendor line, or another top-level section (e.g. "X ..."
                # device-type lists) we do not read.
                in_classes = False
                cur_vendor = cur_device = None
                tok = line.split(None, 1)
                if len(tok[0]) != 4:
                    continue
                parsed = _split_id(line)
                if parsed is None:
                    continue
                (ven,), name = parsed
                vendors[ven] = (name, {})
                cur_vendor = ven
                continue

            nested = line.startswith("\t\t")

            if in_classes:
                if cur_base is None:
                    continue
                subs = classes[cur_base][1]
                if not nested:
                    parsed = _split_id(line)
                    if parsed is None:
                        cur_sub = None
                        continue
                    (sub,), name = parsed
                    subs[sub & 0xFF] = (name, {})
                    cur_sub = sub & 0xFF
                elif cur_sub is not None:
                    parsed = _split_id(line)
                    if parsed is not None:
                        (pi,), name = parsed
                        subs[cur_sub][1][pi & 0xFF] = name
                continue

            if cur_vendor is None:
                continue
            devices = vendors[cur_vendor][1]
            if not nested:
                parsed = _split_id(line)
                if parsed is None:
                    cur_device = None
                    continue
                (dev,), name = parsed
                devices[dev] = (name, {})
                cur_device = dev
            elif cur_device is not None:
                # "ssss vvvv  name"; lines with a single id are skipped
                parsed = _split_id(line, 2)
                if parsed is not None:
                    (sv, sd), name = parsed
                    devices[cur_device][1][(sv, sd)] = name

    return vendors, classes


class PciDbText:
    """Read-only name lookups over a parsed pci.ids file."""

    def __init__(self, pci_ids_path: str):
        self.path = str(pci_ids_path)
        vendors, classes = _parse_pci_ids(self.path)
        if not vendors or not classes:
            raise ValueError("Corrupt or empty text database")
        self._vendors = vendors
        self._classes = classes

        # Subsystem pairs across every device, first listing wins; used when
        # the parent device is unknown or does not list the pair itself.
        self._subsystems: Subsystems = {}
        for _, devices in vendors.values():
            for _, subs in devices.values():
                for key, name in subs.items():
                    self._subsystems.setdefault(key, name)

    # ----- public API -----
    def lookup_vendor(self, vendor_id: IdLike) -> Optional[str]:
        entry = self._vendors.get(_as_int(vendor_id) & 0xFFFF)
        return entry[0] if entry else None

    def lookup_device(self, vendor_id: IdLike, device_id: IdLike) -> Optional[str]:
        entry = self._vendors.get(_as_int(vendor_id) & 0xFFFF)
        if entry is None:
            return None
        dev = entry[1].get(_as_int(device_id) & 0xFFFF)
        return dev[0] if dev else None

    def lookup_subsystem(
        self,
        subvendor_id: IdLike,
        subdevice_id: IdLike,
        vendor_id: Optional[IdLike] = None,
        device_id: Optional[IdLike] = None,
    ) -> Optional[str]:
        key = (_as_int(subvendor_id) & 0xFFFF, _as_int(subdevice_id) & 0xFFFF)
        if vendor_id is not None and device_id is not None:
            entry = self._vendors.get(_as_int(vendor_id) & 0xFFFF)
            dev = entry[1].get(_as_int(device_id) & 0xFFFF) if entry else None
            if dev is not None and key in dev[1]:
                return dev[1][key]
        return self._subsystems.get(key)

    def lookup_class(self, class_id: bytes) -> Optional[str]:
        """
        Resolve a 1-, 2- or 3-byte class id (base, base+sub, base+sub+prog-if)
        to the name at exactly that depth.
        """
        parts = bytes(class_id)
        if not 1 <= len(parts) <= 3:
            return None
        base = self._classes.get(parts[0])
        if base is None:
            return None
        if len(parts) == 1:
            return base[0]
        sub = base[1].get(parts[1])
        if sub is None:
            return None
        if len(parts) == 2:
            return sub[0]
        return sub[1].get(parts[2])

    def close(self) -> None:
        # nothing to release
        pass
