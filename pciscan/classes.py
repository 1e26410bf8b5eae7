from __future__ import annotations
from enum import IntEnum
from typing import Optional


class DeviceClass(IntEnum):
    # fmt: off
    UNCLASSIFIED                      = 0x00
    MASS_STORAGE_CONTROLLER           = 0x01
    NETWORK_CONTROLLER                = 0x02
    DISPLAY_CONTROLLER                = 0x03
    MULTIMEDIA_CONTROLLER             = 0x04
    MEMORY_CONTROLLER                 = 0x05
    BRIDGE                            = 0x06
    COMMUNICATION_CONTROLLER          = 0x07
    GENERIC_SYSTEM_PERIPHERAL         = 0x08
    INPUT_DEVICE_CONTROLLER           = 0x09
    DOCKING_STATION                   = 0x0A
    PROCESSOR                         = 0x0B
    SERIAL_BUS_CONTROLLER             = 0x0C
    WIRELESS_CONTROLLER               = 0x0D
    INTELLIGENT_CONTROLLER            = 0x0E
    SATELLITE_COMMUNICATIONS_CONTROLLER = 0x0F
    ENCRYPTION_CONTROLLER             = 0x10
    SIGNAL_PROCESSING_CONTROLLER      = 0x11
    PROCESSING_ACCELERATOR            = 0x12
    NON_ESSENTIAL_INSTRUMENTATION     = 0x13
    COPROCESSOR                       = 0x40
    UNASSIGNED                        = 0xFF
    # fmt: on

    @property
    def label(self) -> str:
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_code(cls, code: int) -> Optional["DeviceClass"]:
        try:
            return cls(code & 0xFF)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: str) -> "DeviceClass":
        """Accepts the enum name (any case, '-' or '_') or the display label."""
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        for member, label in _LABELS.items():
            if label.lower() == name.strip().lower():
                return member
        raise ValueError(f"unknown device class: {name!r}")


_LABELS = {
    DeviceClass.UNCLASSIFIED: "Unclassified",
    DeviceClass.MASS_STORAGE_CONTROLLER: "Mass Storage Controller",
    DeviceClass.NETWORK_CONTROLLER: "Network Controller",
    DeviceClass.DISPLAY_CONTROLLER: "Display Controller",
    DeviceClass.MULTIMEDIA_CONTROLLER: "Multimedia Controller",
    DeviceClass.MEMORY_CONTROLLER: "Memory Controller",
    DeviceClass.BRIDGE: "Bridge",
    DeviceClass.COMMUNICATION_CONTROLLER: "Communication Controller",
    DeviceClass.GENERIC_SYSTEM_PERIPHERAL: "Generic System Peripheral",
    DeviceClass.INPUT_DEVICE_CONTROLLER: "Input Device Controller",
    DeviceClass.DOCKING_STATION: "Docking Station",
    DeviceClass.PROCESSOR: "Processor",
    DeviceClass.SERIAL_BUS_CONTROLLER: "Serial Bus Controller",
    DeviceClass.WIRELESS_CONTROLLER: "Wireless Controller",
    DeviceClass.INTELLIGENT_CONTROLLER: "Intelligent Controller",
    DeviceClass.SATELLITE_COMMUNICATIONS_CONTROLLER: "Satellite Communications Controller",
    DeviceClass.ENCRYPTION_CONTROLLER: "Encryption Controller",
    DeviceClass.SIGNAL_PROCESSING_CONTROLLER: "Signal Processing Controller",
    DeviceClass.PROCESSING_ACCELERATOR: "Processing Accelerator",
    DeviceClass.NON_ESSENTIAL_INSTRUMENTATION: "Non-Essential Instrumentation",
    DeviceClass.COPROCESSOR: "Coprocessor",
    DeviceClass.UNASSIGNED: "Unassigned Class",
}
