from __future__ import annotations
from typing import TYPE_CHECKING, List, Mapping, Optional, Protocol, Union

if TYPE_CHECKING:  # pragma: no cover
    from .address import PciAddress

# Identifiers are handed around as the fixed-width bytes stored on a record,
# but plain ints are accepted too.
IdLike = Union[bytes, int]
RawValue = Union[str, bytes, int, bool]


class PciDb(Protocol):
    def lookup_vendor(self, vendor_id: IdLike) -> Optional[str]: ...

    def lookup_device(self, vendor_id: IdLike, device_id: IdLike) -> Optional[str]: ...

    def lookup_class(self, class_id: bytes) -> Optional[str]: ...

    def lookup_subsystem(
        self,
        subvendor_id: IdLike,
        subdevice_id: IdLike,
        vendor_id: Optional[IdLike] = None,
        device_id: Optional[IdLike] = None,
    ) -> Optional[str]: ...

    def close(self) -> None: ...


class AttributeSource(Protocol):
    """
    Platform specific provider of raw per-device attributes.

    `read_attributes` returns whatever subset of these keys the platform
    could read: vendor, device, class, revision, subsystem_vendor,
    subsystem_device, enable, d3cold_allowed, numa_node, driver.
    """

    def path_for(self, address: "PciAddress") -> str: ...

    def read_attributes(self, path: str) -> Mapping[str, RawValue]: ...


class DeviceRegistry(Protocol):
    def list_addresses(self) -> List[str]: ...


class DeviceBackend(AttributeSource, DeviceRegistry, Protocol):
    """A source that can also enumerate what it knows about."""
