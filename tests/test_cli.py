# tests/test_cli.py
from __future__ import annotations
import json

from pciscan.cli import ProgramArgs, run

expected_stdout = """\
0000:00:01.0 PCI bridge [0604]: Intel Corporation 82801 Mobile PCI Bridge [8086:2448]
0000:00:02.0 VGA controller [0300]: Intel Corporation CoffeeLake-H GT2 [UHD Graphics 630] [8086:3e9b] (rev 02)
0000:01:00.0 3D controller [0302]: NVIDIA Corporation TU117M [GeForce GTX 1650 Mobile / Max-Q] [10de:1f99] (rev a1)
0000:02:00.0 Ethernet controller [0200]: Mellanox Technologies MT27800 Family [ConnectX-5] [15b3:1017]
0000:04:00.0 Ethernet controller [0200]: Vendor beef Device Without Vendor Name [beef:babe]
"""

expected_gpus = """\
0000:00:02.0 VGA controller [0300]: Intel UHD Graphics 630 [8086:3e9b] (rev 02)
0000:01:00.0 3D controller [0302]: NVIDIA GeForce GTX 1650 Mobile / Max-Q [10de:1f99] (rev a1)
"""


def test_cli_lspci(capfd, fake_sysfs, pci_ids_text):
    args = ProgramArgs(db_path=str(pci_ids_text), sysfs_path=str(fake_sysfs))
    assert run(args) == 0
    out, err = capfd.readouterr()
    assert out == expected_stdout


def test_cli_gpus(capfd, fake_sysfs, pci_ids_text):
    args = ProgramArgs(
        db_path=str(pci_ids_text), sysfs_path=str(fake_sysfs), gpus=True
    )
    assert run(args) == 0
    out, err = capfd.readouterr()
    assert out == expected_gpus


def test_cli_class_filter(capfd, fake_sysfs, pci_ids_text):
    args = ProgramArgs(
        db_path=str(pci_ids_text),
        sysfs_path=str(fake_sysfs),
        device_class="network-controller",
    )
    assert run(args) == 0
    out, err = capfd.readouterr()
    assert [line.split()[0] for line in out.splitlines()] == [
        "0000:02:00.0",
        "0000:04:00.0",
    ]


def test_cli_unknown_class(capfd, fake_sysfs, pci_ids_text):
    args = ProgramArgs(
        db_path=str(pci_ids_text), sysfs_path=str(fake_sysfs), device_class="toaster"
    )
    assert run(args) == 2
    out, err = capfd.readouterr()
    assert out == ""


def test_cli_json(capfd, fake_sysfs, pci_ids_text):
    args = ProgramArgs(
        db_path=str(pci_ids_text), sysfs_path=str(fake_sysfs), gpus=True, json=True
    )
    assert run(args) == 0
    out, err = capfd.readouterr()
    doc = json.loads(out)
    assert doc["version"] == 1
    assert sorted(doc["devices"]) == ["0000:00:02.0", "0000:01:00.0"]
    nv = doc["devices"]["0000:01:00.0"]
    assert nv["vendor_name"] == "NVIDIA"
    assert nv["vendor_id"] == "10de"
    assert nv["class_id"] == "030200"
    assert nv["driver"] == "nvidia"
    assert nv["numa_node"] == -1
