"""
Attached device listing.

Enumerates USB devices through pyusb and reports the ones exposing a
fastboot interface that passes the device filter, in the same
"<serial>\\tfastboot" shape as ``adb devices``.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

try:
    import usb.core
    import usb.util
except ImportError:
    raise ImportError("PyUSB required: pip install pyusb")

from kindle_fastboot.core.config import DeviceFilterContext

logger = logging.getLogger(__name__)

# (class, subclass, protocol) of the fastboot bulk interface
FASTBOOT_INTERFACE: Tuple[int, int, int] = (0xFF, 0x42, 0x03)

# Shown when the device reports no serial number
UNKNOWN_SERIAL = "????????????"

# Shown instead of the serial when the device cannot be opened
NO_PERMISSIONS = "no permissions"


@dataclass(frozen=True)
class DeviceInfo:
    """One attached device that passed the filter."""
    device: str
    serial: str
    vendor_id: int
    product_id: Optional[int] = None
    writable: bool = True

    @property
    def display_serial(self) -> str:
        if not self.writable:
            return NO_PERMISSIONS
        return self.serial or UNKNOWN_SERIAL

    def to_line(self) -> str:
        return f"{self.display_serial}\tfastboot"


def is_fastboot_interface(intf) -> bool:
    """Check an interface descriptor against the fastboot class triple."""
    return (
        intf.bInterfaceClass,
        intf.bInterfaceSubClass,
        intf.bInterfaceProtocol,
    ) == FASTBOOT_INTERFACE


def has_fastboot_interface(dev) -> bool:
    """True if any interface of any configuration is a fastboot interface."""
    for cfg in dev:
        for intf in cfg:
            if is_fastboot_interface(intf):
                return True
    return False


def read_serial(dev) -> Optional[str]:
    """
    Read the serial number string descriptor.

    Returns:
        The serial ("" if the device has none), or None when the device
        cannot be opened for lack of permissions.
    """
    if not dev.iSerialNumber:
        return ""
    try:
        return usb.util.get_string(dev, dev.iSerialNumber) or ""
    except (usb.core.USBError, ValueError) as e:
        logger.debug(f"Cannot read serial of {dev.idVendor:04x}:{dev.idProduct:04x}: {e}")
        return None


def find_devices(
    context: DeviceFilterContext,
    devices: Optional[Iterable] = None,
    serial_reader: Callable[[object], Optional[str]] = read_serial,
) -> List[DeviceInfo]:
    """
    List attached fastboot devices matching the filter.

    Args:
        context: Serial/vendor filter
        devices: USB devices to check (default: usb.core.find(find_all=True))
        serial_reader: Reads a device's serial, None if not permitted

    Returns:
        Matching devices in enumeration order.
    """
    if devices is None:
        devices = usb.core.find(find_all=True)

    found = []
    for dev in devices:
        label = f"{dev.bus}:{dev.address}"
        if not context.accepts_vendor(dev.idVendor):
            continue
        if not has_fastboot_interface(dev):
            logger.debug(f"Skipping {label}: no fastboot interface")
            continue

        serial_number = serial_reader(dev)
        if not context.accepts_serial(serial_number):
            logger.debug(f"Skipping {label}: serial {serial_number!r} does not match")
            continue

        found.append(DeviceInfo(
            device=label,
            serial=serial_number or "",
            vendor_id=dev.idVendor,
            product_id=dev.idProduct,
            writable=serial_number is not None,
        ))

    logger.debug(f"Found {len(found)} matching device(s)")
    return found
