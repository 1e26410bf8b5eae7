# tests/conftest.py
from __future__ import annotations
from pathlib import Path
from typing import Optional
import pytest

from pciscan.backends.memory import MemorySource
from pciscan.backends.textdb import PciDbText

MINIMAL_PCI_IDS = """\
# Minimal pci.ids for tests
#
# Syntax:
# vendor  vendor_name
#\tdevice  device_name
#\t\tsubvendor subdevice  subsystem_name

8086  Intel Corporation
\t1237  440FX - 82441FX PMC
\t2448  82801 Mobile PCI Bridge
\t3e9b  CoffeeLake-H GT2 [UHD Graphics 630]
\t\t1028 0869  XPS 15 9570
beef
\tbabe  Device Without Vendor Name
1002  Advanced Micro Devices, Inc. [AMD/ATI]
\t164e  Raphael
10de  NVIDIA Corporation
\t1db6  GV100GL [Tesla V100 PCIe 32GB]
\t1f99  TU117M [GeForce GTX 1650 Mobile / Max-Q]
\t\t1028 0869  GeForce GTX 1650 Mobile (XPS 15)
\t\tbaad
15b3  Mellanox Technologies
\t1017  MT27800 Family [ConnectX-5]
\t\t15b3 0020  ConnectX-5 EN network interface card

# List of known device classes, subclasses and programming interfaces
C 02  Network controller
\t00  Ethernet controller
\t80  Network controller
C 03  Display controller
\t00  VGA compatible controller
\t\t00  VGA controller
\t\t01  8514 controller
\t02  3D controller
\t80  Display controller
C 04
\t01
C 06  Bridge
\t04  PCI bridge
C 0c  Serial bus controller
\t03  USB controller
\t\t30  XHCI
"""


@pytest.fixture
def pci_ids_text(tmp_path: Path) -> Path:
    p = tmp_path / "pci.ids"
    p.write_text(MINIMAL_PCI_IDS, encoding="utf-8")
    return p


@pytest.fixture
def db(pci_ids_text: Path):
    d = PciDbText(str(pci_ids_text))
    yield d
    d.close()


def write_hex_file(p: Path, value: int) -> None:
    p.write_text(f"0x{value:04x}\n", encoding="ascii")


def make_device_dir(
    real_root: Path,
    bdf: str,
    *,
    vendor: int,
    device: int,
    klass24: int,
    revision: int = 0x00,
    subvendor: int = 0x0000,
    subdevice: int = 0x0000,
    enable: str = "1",
    d3cold_allowed: Optional[str] = "1",
    numa_node: Optional[str] = "-1",
    driver: Optional[str] = None,
) -> Path:
    d = real_root
    # nested path fragments imitate the real sysfs hierarchy under bridges
    for frag in bdf.split("/"):
        d = d / frag
    d.mkdir(parents=True, exist_ok=True)
    write_hex_file(d / "vendor", vendor)
    write_hex_file(d / "device", device)
    # class file in sysfs is 24-bit hex; write as 0xHHHHHH
    (d / "class").write_text(f"0x{klass24:06x}\n", encoding="ascii")
    (d / "revision").write_text(f"0x{revision:02x}\n", encoding="ascii")
    write_hex_file(d / "subsystem_vendor", subvendor)
    write_hex_file(d / "subsystem_device", subdevice)
    (d / "enable").write_text(f"{enable}\n", encoding="ascii")
    if d3cold_allowed is not None:
        (d / "d3cold_allowed").write_text(f"{d3cold_allowed}\n", encoding="ascii")
    if numa_node is not None:
        (d / "numa_node").write_text(f"{numa_node}\n", encoding="ascii")
    if driver:
        drv = real_root / "drivers" / driver
        drv.mkdir(parents=True, exist_ok=True)
        (d / "driver").symlink_to(drv, target_is_directory=True)
    return d


def make_device_dir_badhex(real_root: Path, bdf: str) -> Path:
    d = real_root
    for frag in bdf.split("/"):
        d = d / frag
    d.mkdir(parents=True, exist_ok=True)
    (d / "vendor").write_text("0xbogusvendor")
    (d / "device").write_text("0xbogusdevice")
    (d / "class").write_text("0x020000")
    return d


@pytest.fixture
def fake_sysfs(tmp_path: Path) -> Path:
    """
    Build a fake /sys/bus/pci/devices tree using symlinks that resolve to
    nested real paths (imitating Linux' /sys symlink layout).
    """
    root = tmp_path / "devices_linkdir"
    real = tmp_path / "real"
    root.mkdir()
    real.mkdir()

    bridge = make_device_dir(
        real, "0000:00:01.0", vendor=0x8086, device=0x2448, klass24=0x060400
    )
    igpu = make_device_dir(
        real,
        "0000:00:02.0",
        vendor=0x8086,
        device=0x3E9B,
        klass24=0x030000,
        revision=0x02,
        subvendor=0x1028,
        subdevice=0x0869,
        numa_node="0",
        driver="i915",
    )
    dgpu = make_device_dir(
        real,
        "0000:00:01.0/0000:01:00.0",
        vendor=0x10DE,
        device=0x1F99,
        klass24=0x030200,
        revision=0xA1,
        subvendor=0x1028,
        subdevice=0x0869,
        enable="0",
        numa_node=None,
        driver="nvidia",
    )
    nic = make_device_dir(
        real,
        "0000:00:01.0/0000:02:00.0",
        vendor=0x15B3,
        device=0x1017,
        klass24=0x020000,
        subvendor=0x15B3,
        subdevice=0x0020,
        d3cold_allowed="0",
        numa_node="1",
    )
    corrupt = make_device_dir_badhex(real, "0000:00:01.0/0000:03:00.0")
    weird_vendor = make_device_dir(
        real,
        "0000:00:01.0/0000:04:00.0",
        vendor=0xBEEF,
        device=0xBABE,
        klass24=0x020000,
        d3cold_allowed=None,
    )

    # Symlinks in the "devices" directory (what SysfsSource.list_addresses() reads)
    (root / "0000:00:01.0").symlink_to(bridge, target_is_directory=True)
    (root / "0000:00:02.0").symlink_to(igpu, target_is_directory=True)
    (root / "0000:01:00.0").symlink_to(dgpu, target_is_directory=True)
    (root / "0000:02:00.0").symlink_to(nic, target_is_directory=True)
    (root / "0000:03:00.0").symlink_to(corrupt, target_is_directory=True)
    (root / "0000:04:00.0").symlink_to(weird_vendor, target_is_directory=True)

    # Dummy to exercise non-bdf check
    (root / "dummy").mkdir()

    return root


@pytest.fixture
def memory_source() -> MemorySource:
    return MemorySource(
        {
            "00:02.0": {
                "vendor": "0x8086",
                "device": "0x3e9b",
                "class": "0x030000",
                "revision": "0x02",
                "subsystem_vendor": "0x1028",
                "subsystem_device": "0x0869",
                "enable": "1",
                "d3cold_allowed": "1",
                "numa_node": "-1",
            },
            "0000:01:00.0": {
                "vendor": b"\x10\xde",
                "device": b"\x1f\x99",
                "class": b"\x03\x02\x00",
                "revision": b"\xa1",
                "subsystem_vendor": b"\xff\xff",
                "subsystem_device": b"\xff\xff",
                "enable": b"\x01",
                "d3cold_allowed": b"\x00",
            },
            "0000:05:00.0": {
                "vendor": "0x1234",
                "device": "0x5678",
                "class": "0x010802",
                "numa_node": "bogus",
            },
            "0000:06:00.0": {
                "device": "0x1017",
                "class": "0x020000",
            },
        }
    )
