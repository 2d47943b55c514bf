"""
Kindle Fastboot - command queue front end for Lab126 bootloaders

Scans fastboot-style command lines into a validated queue of device
operations and parses board requirement files.
"""

__version__ = "0.1.0"

from kindle_fastboot.core import (
    ArgumentScanner,
    CommandQueue,
    DeviceFilterContext,
    ScanResult,
    parse_requirements,
)

__all__ = [
    "ArgumentScanner",
    "CommandQueue",
    "DeviceFilterContext",
    "ScanResult",
    "parse_requirements",
    "__version__",
]
