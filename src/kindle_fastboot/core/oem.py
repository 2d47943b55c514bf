"""OEM pass-through command assembly."""

import logging
from typing import Sequence

from .queue import CommandQueue

logger = logging.getLogger(__name__)


def queue_oem_command(queue: CommandQueue, tokens: Sequence[str]) -> int:
    """
    Join every remaining token into one opaque bootloader command.

    Tokens are joined with single spaces and otherwise left untouched.
    With no tokens nothing is queued.

    Args:
        queue: Queue to append to
        tokens: Tokens that followed the ``oem`` keyword

    Returns:
        Number of tokens consumed (always all of them).
    """
    if not tokens:
        logger.debug("oem with no arguments, nothing queued")
        return 0

    queue.queue_command(" ".join(tokens), "")
    return len(tokens)
