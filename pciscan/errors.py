from __future__ import annotations
from typing import Optional


class PciScanError(Exception):
    """Base class for everything this package raises on purpose."""


class InvalidAddressError(PciScanError, ValueError):
    """The string is not a PCI address in any accepted shape."""

    def __init__(self, text: str, reason: Optional[str] = None):
        self.text = text
        msg = f"invalid PCI address: {text!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class MissingAttributeError(PciScanError):
    """A mandatory identity attribute could not be read for a device."""

    def __init__(self, address: str, attribute: str):
        self.address = address
        self.attribute = attribute
        super().__init__(f"{address}: missing or unreadable '{attribute}'")


class UnsupportedPlatformError(PciScanError, RuntimeError):
    pass
