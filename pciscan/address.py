# pciscan/address.py
from __future__ import annotations
from dataclasses import dataclass
import posixpath
import re

from .errors import InvalidAddressError

DEFAULT_DOMAIN = "0000"

_SHORT_RE = re.compile(r"^[0-9a-fA-F]{1,2}:[0-9a-fA-F]{1,2}\.[0-9a-fA-F]$")
_FULL_RE = re.compile(r"^[0-9a-fA-F]{1,4}:[0-9a-fA-F]{1,2}:[0-9a-fA-F]{1,2}\.[0-9a-fA-F]$")


@dataclass(frozen=True, slots=True, order=True)
class PciAddress:
    domain: int
    bus: int
    device: int
    function: int

    def __post_init__(self) -> None:
        if not 0 <= self.domain <= 0xFFFF:
            raise InvalidAddressError(str(self.domain), "domain out of range")
        if not 0 <= self.bus <= 0xFF:
            raise InvalidAddressError(str(self.bus), "bus out of range")
        if not 0 <= self.device <= 0x1F:
            raise InvalidAddressError(str(self.device), "device out of range")
        if not 0 <= self.function <= 0x7:
            raise InvalidAddressError(str(self.function), "function out of range")

    def __str__(self) -> str:
        return f"{self.domain:04x}:{self.bus:02x}:{self.device:02x}.{self.function}"

    @classmethod
    def parse(cls, text: str) -> "PciAddress":
        return parse_address(text)


def _trailing_segment(text: str) -> str:
    if text.startswith("/"):
        seg = posixpath.basename(text.rstrip("/"))
        if not _FULL_RE.match(seg):
            raise InvalidAddressError(text, "path does not end in DDDD:BB:DD.F")
        return seg
    return text


def normalize_address(text: str) -> str:
    """
    Expand `BB:DD.F`, `DDDD:BB:DD.F` or `/any/path/DDDD:BB:DD.F` into the
    canonical lower-case `DDDD:BB:DD.F`. Idempotent.
    """
    return str(parse_address(text))


def parse_address(text: str) -> PciAddress:
    if not isinstance(text, str):
        raise InvalidAddressError(repr(text), "not a string")
    s = _trailing_segment(text.strip())
    if _SHORT_RE.match(s):
        s = f"{DEFAULT_DOMAIN}:{s}"
    elif not _FULL_RE.match(s):
        raise InvalidAddressError(text)

    dom, bus, devfunc = s.split(":")
    dev, func = devfunc.split(".")
    try:
        return PciAddress(int(dom, 16), int(bus, 16), int(dev, 16), int(func, 16))
    except InvalidAddressError as e:
        raise InvalidAddressError(text, "component out of range") from e
