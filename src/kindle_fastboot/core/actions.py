"""
Core workflow actions for Kindle Fastboot.

The CLI calls into these rather than driving the scanner directly. The
execution engine is not part of this package; it plugs in through the
QueueConsumer interface and only ever sees a completely scanned queue.
"""

import logging
from typing import Mapping, Optional, Protocol, Sequence, Tuple

from .config import DeviceFilterContext
from .loader import FileLoader
from .queue import QueuedOperation
from .results import ScanResult
from .scanner import ArgumentScanner

logger = logging.getLogger(__name__)


class QueueConsumer(Protocol):
    """Executes a finished queue against the device the filter selects."""

    def consume(
        self,
        operations: Tuple[QueuedOperation, ...],
        context: DeviceFilterContext,
    ) -> None:
        ...


def build_queue(
    tokens: Sequence[str],
    loader: Optional[FileLoader] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ScanResult:
    """
    Scan a command line into a ScanResult.

    Errors propagate unchanged; there is no partial result.
    """
    result = ArgumentScanner(loader=loader, environ=environ).scan(tokens)
    if not result.list_devices:
        logger.debug(f"Built queue of {len(result.operations)} operation(s)")
    return result


def hand_off(result: ScanResult, consumer: QueueConsumer) -> None:
    """
    Pass a scanned queue to the execution engine.

    Raises:
        ValueError: If the result is a devices listing, which has no queue
    """
    if result.list_devices:
        raise ValueError("A devices listing has no queue to execute")
    logger.debug(f"Handing {len(result.operations)} operation(s) to {type(consumer).__name__}")
    consumer.consume(result.operations, result.context)
