"""
Result of scanning a command line.

Holds everything the execution side needs: the frozen operation queue,
the device filter, and whether the invocation only asked to list devices.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .config import DeviceFilterContext
from .queue import Download, GenericCommand, QueuedOperation, Requirement


@dataclass(frozen=True)
class ScanResult:
    """
    Outcome of a fully successful scan.

    Attributes:
        operations: Queued operations in execution order
        context: Device filter established by global options
        list_devices: True when the invocation was ``devices``
    """
    operations: Tuple[QueuedOperation, ...] = ()
    context: DeviceFilterContext = field(default_factory=DeviceFilterContext)
    list_devices: bool = False

    @property
    def total_download_bytes(self) -> int:
        return sum(op.size for op in self.operations if isinstance(op, Download))

    def to_summary(self) -> str:
        """
        Generate a human-readable summary string.

        Suitable for CLI output or simple logging.
        """
        if self.list_devices:
            return "[DEVICES] list attached devices"

        lines = [f"[QUEUE] {len(self.operations)} operation(s)"]
        if self.context.serial:
            lines.append(f"  Serial: {self.context.serial}")
        if self.context.vendor_id is not None:
            lines.append(f"  Vendor: 0x{self.context.vendor_id:04X}")
        if self.total_download_bytes:
            lines.append(f"  Bytes: {self.total_download_bytes:,}")
        for index, operation in enumerate(self.operations, 1):
            lines.append(f"  {index}. {operation.kind.value}: {operation.describe()}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "list_devices": self.list_devices,
            "context": self.context.to_dict(),
            "operations": [operation_to_dict(op) for op in self.operations],
        }


def operation_to_dict(operation: QueuedOperation) -> Dict[str, Any]:
    """Describe one operation as plain data; payload bytes are omitted."""
    data: Dict[str, Any] = {"kind": operation.kind.value}
    if isinstance(operation, GenericCommand):
        data["command"] = operation.command
        data["message"] = operation.message
        if operation.argument is not None:
            data["argument"] = operation.argument
    elif isinstance(operation, Requirement):
        data["name"] = operation.name
        data["invert"] = operation.invert
        data["values"] = list(operation.values)
    elif hasattr(operation, "partition"):
        data["partition"] = operation.partition
        data["size"] = operation.size
    return data
