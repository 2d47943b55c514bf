"""
Queued device operations and the queue that collects them.

The scanner appends operations in the order they are recognized. Nothing
reads the queue for execution until it has been frozen, which only happens
after the whole command line scanned without error.

Usage:
    queue = CommandQueue()
    queue.queue_download("boot", data)
    queue.queue_flash("boot", len(data))
    operations = queue.freeze()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class OperationKind(Enum):
    """Tag identifying each queued operation variant."""
    DOWNLOAD = "download"
    FLASH = "flash"
    VERIFY = "verify"
    ERASE = "erase"
    CHECK = "check"
    COMMAND = "command"
    REBOOT = "reboot"
    REQUIREMENT = "requirement"


@dataclass(frozen=True)
class Download:
    """Send a payload to device memory for a later flash/verify/boot."""
    partition: str
    payload: bytes
    size: int

    kind = OperationKind.DOWNLOAD

    def describe(self) -> str:
        return f"sending '{self.partition}' ({self.size:,} bytes)"


@dataclass(frozen=True)
class Flash:
    """Write the downloaded payload to a partition."""
    partition: str
    size: int = 0

    kind = OperationKind.FLASH

    def describe(self) -> str:
        return f"writing '{self.partition}'"


@dataclass(frozen=True)
class Verify:
    """Verify the downloaded payload against a partition."""
    partition: str
    size: int = 0

    kind = OperationKind.VERIFY

    def describe(self) -> str:
        return f"verifying '{self.partition}'"


@dataclass(frozen=True)
class Erase:
    partition: str
    size: int = 0

    kind = OperationKind.ERASE

    def describe(self) -> str:
        return f"erasing '{self.partition}'"


@dataclass(frozen=True)
class Check:
    partition: str
    size: int = 0

    kind = OperationKind.CHECK

    def describe(self) -> str:
        return f"checking '{self.partition}'"


@dataclass(frozen=True)
class GenericCommand:
    """
    Plain bootloader command.

    Attributes:
        command: Command name sent to the bootloader
        message: Progress text shown while it runs (may be empty)
        argument: Opaque argument string, if the command takes one
    """
    command: str
    message: str = ""
    argument: Optional[str] = None

    kind = OperationKind.COMMAND

    def describe(self) -> str:
        return self.message or self.command


@dataclass(frozen=True)
class Reboot:
    kind = OperationKind.REBOOT

    def describe(self) -> str:
        return "rebooting"


@dataclass(frozen=True)
class Requirement:
    """
    Constraint on a device variable.

    Attributes:
        name: Variable to test ("board" is already renamed to "product")
        invert: True for a reject line, False for require
        values: Acceptable values, in file order, case-sensitive
    """
    name: str
    invert: bool
    values: Tuple[str, ...]

    kind = OperationKind.REQUIREMENT

    def describe(self) -> str:
        verb = "rejecting" if self.invert else "requiring"
        return f"{verb} {self.name} in {' | '.join(self.values)}"


QueuedOperation = Union[
    Download, Flash, Verify, Erase, Check, GenericCommand, Reboot, Requirement
]


class CommandQueue:
    """
    Append-only list of queued operations.

    Example:
        queue = CommandQueue()
        queue.queue_command("eraseall", "wiping the flash memory")
        operations = queue.freeze()
    """

    def __init__(self) -> None:
        self._operations: List[QueuedOperation] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator[QueuedOperation]:
        return iter(self._operations)

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def last_download_size(self) -> int:
        """Size of the most recent Download in the queue, or 0 if none."""
        for operation in reversed(self._operations):
            if isinstance(operation, Download):
                return operation.size
        return 0

    def append(self, operation: QueuedOperation) -> None:
        """
        Add an operation to the end of the queue.

        Raises:
            RuntimeError: If the queue has already been frozen
        """
        if self._frozen:
            raise RuntimeError("Cannot append to a frozen command queue")
        self._operations.append(operation)
        logger.debug(f"Queued {operation.kind.value}: {operation.describe()}")

    def queue_download(self, partition: str, payload: bytes) -> Download:
        operation = Download(partition=partition, payload=bytes(payload), size=len(payload))
        self.append(operation)
        return operation

    def queue_flash(self, partition: str, size: int) -> None:
        self.append(Flash(partition=partition, size=size))

    def queue_verify(self, partition: str, size: int) -> None:
        self.append(Verify(partition=partition, size=size))

    def queue_erase(self, partition: str) -> None:
        self.append(Erase(partition=partition))

    def queue_check(self, partition: str) -> None:
        self.append(Check(partition=partition))

    def queue_command(self, command: str, message: str = "", argument: Optional[str] = None) -> None:
        self.append(GenericCommand(command=command, message=message, argument=argument))

    def queue_reboot(self) -> None:
        self.append(Reboot())

    def queue_requirement(self, requirement: Requirement) -> None:
        self.append(requirement)

    def freeze(self) -> Tuple[QueuedOperation, ...]:
        """Close the queue for appends and return its operations in order."""
        self._frozen = True
        return tuple(self._operations)
