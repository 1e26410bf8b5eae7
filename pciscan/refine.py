"""
Display-name cleanup for GPUs.

pci.ids device names usually carry the chip codename with the marketing
name in brackets ("TU117M [GeForce GTX 1650 Mobile / Max-Q]"), and vendor
names carry the legal entity ("NVIDIA Corporation"). These helpers reduce
both to what a user would call the card. Identifiers are never touched.
"""

from __future__ import annotations
import dataclasses
from typing import Dict, Optional, TYPE_CHECKING

from .types import IdLike

if TYPE_CHECKING:  # pragma: no cover
    from .device import PciDevice

VENDOR_ALIASES: Dict[str, str] = {
    "NVIDIA Corporation": "NVIDIA",
    "Advanced Micro Devices, Inc. [AMD/ATI]": "AMD",
    "Advanced Micro Devices, Inc. [AMD]": "AMD",
    "ATI Technologies Inc": "AMD",
    "Intel Corporation": "Intel",
    "Matrox Electronics Systems Ltd.": "Matrox",
    "ASPEED Technology, Inc.": "ASPEED",
    "Red Hat, Inc.": "Red Hat",
    "VMware": "VMware",
    "Microsoft Corporation": "Microsoft",
    "Qualcomm Technologies, Inc": "Qualcomm",
    "Apple Inc.": "Apple",
    "Broadcom Inc. and subsidiaries": "Broadcom",
    "Moore Threads Technology Co.,Ltd": "Moore Threads",
}

VENDOR_ID_ALIASES: Dict[int, str] = {
    0x10DE: "NVIDIA",
    0x1002: "AMD",
    0x1022: "AMD",
    0x8086: "Intel",
    0x102B: "Matrox",
    0x1A03: "ASPEED",
    0x1AF4: "Red Hat",
    0x1B36: "Red Hat",
    0x15AD: "VMware",
    0x1414: "Microsoft",
    0x5143: "Qualcomm",
    0x17CB: "Qualcomm",
    0x106B: "Apple",
    0x14E4: "Broadcom",
    0x1ED5: "Moore Threads",
}


def refine_device_name(name: str) -> str:
    start = name.find("[")
    if start < 0:
        return name
    end = name.find("]", start + 1)
    if end < 0:
        return name
    inner = name[start + 1 : end].strip()
    return inner or name


def refine_vendor_name(name: str, vendor_id: Optional[IdLike] = None) -> str:
    alias = VENDOR_ALIASES.get(name.strip())
    if alias:
        return alias
    if vendor_id is not None:
        if isinstance(vendor_id, (bytes, bytearray)):
            vendor_id = int.from_bytes(vendor_id, "big")
        alias = VENDOR_ID_ALIASES.get(vendor_id & 0xFFFF)
        if alias:
            return alias
    return name


def refine(name: str) -> str:
    """Refine a string that may be either a vendor or a device name."""
    alias = VENDOR_ALIASES.get(name.strip())
    if alias:
        return alias
    return refine_device_name(name)


def refine_device(dev: "PciDevice") -> "PciDevice":
    return dataclasses.replace(
        dev,
        vendor_name=refine_vendor_name(dev.vendor_name, dev.vendor_id),
        device_name=refine_device_name(dev.device_name),
    )
