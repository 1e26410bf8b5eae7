from __future__ import annotations
import functools
from typing import List, Optional, Union
from .backends.textdb import PciDbText
from .classes import DeviceClass
from .device import PciDevice
from .enumerator import Enumerator
from .types import PciDb


def open_db(path: Optional[str] = None) -> PciDb:
    from .backends.discovery import discover_db

    return discover_db(path)


@functools.lru_cache(maxsize=None)
def default_db() -> PciDb:
    """The process-wide identifier table, opened on first use and never modified."""
    return open_db()


def fetch() -> List[PciDevice]:
    return Enumerator().fetch()


def fetch_by_class(cls: Union[DeviceClass, int]) -> List[PciDevice]:
    return Enumerator().fetch_by_class(cls)


def fetch_gpus() -> List[PciDevice]:
    return Enumerator().fetch_gpus()


__all__ = [
    "PciDb",
    "PciDbText",
    "open_db",
    "default_db",
    "fetch",
    "fetch_by_class",
    "fetch_gpus",
]
