"""
Device filter configuration.

The filter is built once when scanning starts, updated by the global
``-s``/``-i`` options, and handed read-only to whatever selects the device.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

# Environment variable supplying the default serial number filter
SERIAL_ENV_VAR = "KINDLE_SERIAL"

# Lab126 USB vendor id, always accepted by device matching
LAB126_VENDOR_ID = 0x1949

# Upper bound for a vendor id given with -i
MAX_VENDOR_ID = 0xFFFF

# Number of alternative values a requirement line can carry
MAX_REQUIREMENT_VALUES = 32


@dataclass(frozen=True)
class DeviceFilterContext:
    """
    Which attached device the transport should select.

    Attributes:
        serial: Required serial number, or None for any
        vendor_id: Additional accepted 16-bit vendor id, or None for unset
    """
    serial: Optional[str] = None
    vendor_id: Optional[int] = None

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "DeviceFilterContext":
        """Create the initial filter, taking the serial from the environment."""
        if environ is None:
            environ = os.environ
        return cls(serial=environ.get(SERIAL_ENV_VAR) or None)

    def with_serial(self, serial: str) -> "DeviceFilterContext":
        return replace(self, serial=serial)

    def with_vendor_id(self, vendor_id: int) -> "DeviceFilterContext":
        return replace(self, vendor_id=vendor_id)

    def accepts_vendor(self, vendor_id: Optional[int]) -> bool:
        """
        The Lab126 vendor id is always accepted; a custom vendor id given
        with -i is accepted in addition. A custom id of 0 counts as unset.
        """
        if vendor_id is None:
            return False
        if vendor_id == LAB126_VENDOR_ID:
            return True
        return bool(self.vendor_id) and vendor_id == self.vendor_id

    def accepts_serial(self, serial_number: Optional[str]) -> bool:
        """When a serial is set it must match exactly."""
        return self.serial is None or self.serial == (serial_number or "")

    def matches(self, vendor_id: Optional[int], serial_number: Optional[str]) -> bool:
        """Check whether a device passes the filter."""
        return self.accepts_vendor(vendor_id) and self.accepts_serial(serial_number)

    def to_dict(self) -> dict:
        return {
            "serial": self.serial,
            "vendor_id": f"0x{self.vendor_id:04X}" if self.vendor_id is not None else None,
        }
