# pciscan/report.py
from __future__ import annotations
import json
from typing import Iterable, Optional

from .device import PciDevice

REPORT_VERSION = 1


def dumps_devices(devs: Iterable[PciDevice], *, indent: Optional[int] = None) -> str:
    """Serialize an inventory pass as {"version": 1, "devices": {address: {...}}}."""
    payload = {
        "version": REPORT_VERSION,
        "devices": {d.address: d.to_dict() for d in devs},
    }
    separators = None if indent else (",", ":")
    return json.dumps(payload, indent=indent, separators=separators, sort_keys=True)
