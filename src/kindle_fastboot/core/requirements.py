"""
Requirement line parser.

A requirements buffer holds one constraint per line:

    require product=tequila|whitney
    reject version-bootloader=0.1
    board=golden

``require`` (the default) and ``reject`` set the invert flag, the name sits
before the first ``=``, and alternatives are separated by ``|``. The name
``board`` is stored as ``product``.

Parsing is fail-fast: the first malformed line aborts the whole buffer and
no records from it are returned.
"""

import logging
from typing import List, Optional, Tuple

from .config import MAX_REQUIREMENT_VALUES
from .errors import AllocationFailure, MalformedRequirement
from .queue import Requirement

logger = logging.getLogger(__name__)

REQUIRE_PREFIX = "require "
REJECT_PREFIX = "reject "

# Legacy name mismatch between board info files and bootloader variables
NAME_ALIASES = {"board": "product"}


def _split_keyword(line: str) -> Tuple[bool, str]:
    """Strip a leading require/reject keyword, returning (invert, rest)."""
    if line.startswith(REJECT_PREFIX):
        return True, line[len(REJECT_PREFIX):]
    if line.startswith(REQUIRE_PREFIX):
        return False, line[len(REQUIRE_PREFIX):]
    return False, line


def _split_values(rest: str) -> Tuple[str, ...]:
    return tuple(v.strip() for v in rest.split("|", MAX_REQUIREMENT_VALUES - 1))


def parse_requirement_line(line: str, line_number: Optional[int] = None) -> Requirement:
    """
    Parse a single non-blank requirement line.

    At most MAX_REQUIREMENT_VALUES alternatives are split out; any further
    ``|`` characters stay inside the last value.

    Raises:
        MalformedRequirement: If the line has no '=' or an empty name.
    """
    invert, body = _split_keyword(line)

    name, sep, rest = body.partition("=")
    if not sep:
        raise MalformedRequirement("missing '='", line_number, line)

    name = name.strip()
    if not name:
        raise MalformedRequirement("empty name", line_number, line)
    name = NAME_ALIASES.get(name, name)

    try:
        values = _split_values(rest)
    except MemoryError:
        raise AllocationFailure("out of memory", line_number, line)

    return Requirement(name=name, invert=invert, values=values)


def parse_requirements(data: bytes) -> List[Requirement]:
    """
    Parse a buffer of newline-terminated requirement lines.

    Blank lines are skipped. Text after the final newline is not a complete
    line and is ignored.

    Args:
        data: Raw file contents

    Returns:
        Requirements in the order their lines appear.

    Raises:
        MalformedRequirement: On the first bad line; nothing is returned.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedRequirement(f"not valid UTF-8 ({e.reason})")

    lines = text.split("\n")
    # Last element is whatever follows the final newline
    complete_lines = lines[:-1]
    if lines[-1].strip():
        logger.warning(f"Ignoring requirement line without trailing newline: {lines[-1]!r}")

    requirements = []
    for line_number, line in enumerate(complete_lines, 1):
        if not line.strip():
            continue
        requirements.append(parse_requirement_line(line, line_number))

    logger.debug(f"Parsed {len(requirements)} requirement(s)")
    return requirements
