# tests/test_address.py
from __future__ import annotations
import pytest

from pciscan.address import PciAddress, normalize_address, parse_address
from pciscan.errors import InvalidAddressError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("00:02.0", "0000:00:02.0"),
        ("0000:00:02.0", "0000:00:02.0"),
        ("/sys/bus/pci/devices/0000:00:02.0", "0000:00:02.0"),
        ("/sys/bus/pci/devices/0000:00:02.0/", "0000:00:02.0"),
        ("65:00.0", "0000:65:00.0"),
        ("FFFF:FF:1F.7", "ffff:ff:1f.7"),
        ("1:2:3.4", "0001:02:03.4"),
    ],
)
def test_normalize(text, expected):
    assert normalize_address(text) == expected


@pytest.mark.parametrize("text", ["00:02.0", "ab:1f.7", "0001:65:00.3"])
def test_normalize_idempotent(text):
    once = normalize_address(text)
    assert normalize_address(once) == once


def test_three_shapes_same_location():
    a = parse_address("00:02.0")
    b = parse_address("0000:00:02.0")
    c = parse_address("/sys/bus/pci/devices/0000:00:02.0")
    assert a == b == c == PciAddress(0, 0, 2, 0)
    assert PciAddress.parse("0000:00:02.0") == a


@pytest.mark.parametrize(
    "text",
    [
        "",
        "garbage",
        "00:02",
        "00:02.8",  # function is 3 bits
        "00:20.0",  # device is 5 bits
        "00:zz.0",
        "12345:00:00.0",
        "000:00:02.0:1",
        "/sys/bus/pci/devices/00:02.0",  # path must end in the full form
        "sys/bus/pci/devices/0000:00:02.0",  # relative path
    ],
)
def test_invalid(text):
    with pytest.raises(InvalidAddressError):
        parse_address(text)


def test_invalid_is_value_error():
    with pytest.raises(ValueError):
        normalize_address("not-an-address")


def test_non_string():
    with pytest.raises(InvalidAddressError):
        parse_address(None)  # type: ignore[arg-type]


def test_address_ordering_and_str():
    addrs = [PciAddress(0, 0x65, 0, 0), PciAddress(0, 0, 2, 0), PciAddress(1, 0, 0, 0)]
    assert [str(a) for a in sorted(addrs)] == [
        "0000:00:02.0",
        "0000:65:00.0",
        "0001:00:00.0",
    ]


def test_address_range_checked():
    with pytest.raises(InvalidAddressError):
        PciAddress(0, 0x100, 0, 0)
