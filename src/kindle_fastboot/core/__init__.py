"""
Core module for Kindle Fastboot.

This module provides the single source of truth for:
- Command-line scanning and arity rules (scanner.py)
- Queued operations and the command queue (queue.py)
- Requirement line parsing (requirements.py)
- Device filter configuration (config.py)
- Error taxonomy and diagnostics (errors.py, messages.py)
- Scan results and engine handoff (results.py, actions.py)
"""

from .config import DeviceFilterContext, LAB126_VENDOR_ID, SERIAL_ENV_VAR
from .errors import (
    FastbootError,
    UsageError,
    InvalidOption,
    FileLoadError,
    MalformedRequirement,
    AllocationFailure,
)
from .messages import ErrorCode, Diagnostic
from .parsing import parse_unsigned, parse_vendor_id
from .loader import FileLoader, PathFileLoader
from .queue import (
    OperationKind,
    QueuedOperation,
    Download,
    Flash,
    Verify,
    Erase,
    Check,
    GenericCommand,
    Reboot,
    Requirement,
    CommandQueue,
)
from .requirements import parse_requirements, parse_requirement_line
from .oem import queue_oem_command
from .results import ScanResult
from .scanner import ArgumentScanner, COMMANDS
from .actions import QueueConsumer, build_queue, hand_off

__all__ = [
    # Config
    "DeviceFilterContext",
    "LAB126_VENDOR_ID",
    "SERIAL_ENV_VAR",
    # Errors
    "FastbootError",
    "UsageError",
    "InvalidOption",
    "FileLoadError",
    "MalformedRequirement",
    "AllocationFailure",
    "ErrorCode",
    "Diagnostic",
    # Parsing
    "parse_unsigned",
    "parse_vendor_id",
    "parse_requirements",
    "parse_requirement_line",
    # Loading
    "FileLoader",
    "PathFileLoader",
    # Queue
    "OperationKind",
    "QueuedOperation",
    "Download",
    "Flash",
    "Verify",
    "Erase",
    "Check",
    "GenericCommand",
    "Reboot",
    "Requirement",
    "CommandQueue",
    "queue_oem_command",
    # Scanning
    "ScanResult",
    "ArgumentScanner",
    "COMMANDS",
    # Actions
    "QueueConsumer",
    "build_queue",
    "hand_off",
]
