#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import List, Optional

import pciscan
from .report import dumps_devices

log = logging.getLogger(__name__)


@dataclass
class ProgramArgs:
    db_path: Optional[str]
    sysfs_path: Optional[str]
    device_class: Optional[str] = None
    gpus: bool = False
    json: bool = False
    verbose: int = 0


def format_line(dev: pciscan.PciDevice) -> str:
    class16 = dev.class_code >> 8
    cname = dev.class_name or f"Class {class16:04x}"

    ven, did = dev.vendor, dev.device
    vname, dname = dev.vendor_name, dev.device_name

    if vname and dname:
        rdesc = f"{vname} {dname}"
    elif vname:
        rdesc = f"{vname} Device {did:04x}"
    elif dname:
        rdesc = f"Vendor {ven:04x} {dname}"
    else:
        rdesc = f"Device [{ven:04x}:{did:04x}]"

    revdesc = ""
    if dev.revision != b"\x00":
        revdesc = f" (rev {dev.revision.hex()})"

    return f"{dev.address} {cname} [{class16:04x}]: {rdesc} [{ven:04x}:{did:04x}]{revdesc}"


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(args: ProgramArgs) -> int:
    _configure_logging(args.verbose)
    db = pciscan.open_db(args.db_path)
    try:
        enum = pciscan.Enumerator(pciscan.SysfsSource(args.sysfs_path), db)
        if args.gpus:
            devices = enum.fetch_gpus()
        elif args.device_class:
            try:
                cls = pciscan.DeviceClass.from_name(args.device_class)
            except ValueError as e:
                log.error("%s", e)
                return 2
            devices = enum.fetch_by_class(cls)
        else:
            devices = enum.fetch()
    finally:
        db.close()

    if args.json:
        print(dumps_devices(devices, indent=2))
        return 0

    for dev in devices:
        print(format_line(dev))
    return 0


def main(argv: Optional[List[str]] = None) -> None:  # pragma: no cover
    ap = argparse.ArgumentParser(
        prog="pciscan", description="List PCI devices via sysfs + pci.ids"
    )
    ap.add_argument("--db", dest="db_path", default=None, help="path to pci.ids")
    ap.add_argument(
        "--sysfs",
        dest="sysfs_path",
        default=None,
        help="path to /sys/bus/pci/devices (default: $PCISCAN_SYSFS or sysfs)",
    )
    sel = ap.add_mutually_exclusive_group()
    sel.add_argument(
        "--class",
        dest="device_class",
        default=None,
        help="only list one base class, e.g. display-controller or 'Bridge'",
    )
    sel.add_argument(
        "--gpus", action="store_true", help="only display controllers, short names"
    )
    ap.add_argument("--json", action="store_true", help="emit a JSON report")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    sys.exit(run(ProgramArgs(**vars(ap.parse_args(argv)))))


if __name__ == "__main__":  # pragma: no cover
    main()
