"""
Error taxonomy for command-line scanning.

Every failure raised while turning tokens into a queue is one of these.
None of them are recovered inside the core; the CLI entry point is the
single place that turns them into a diagnostic and an exit status.
"""

from typing import Optional

from .messages import ErrorCode


class FastbootError(Exception):
    """Base exception for all scan-phase failures"""

    code = ErrorCode.E_UNKNOWN

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UsageError(FastbootError):
    """Unknown command or too few arguments for a command"""

    code = ErrorCode.E_USAGE


class InvalidOption(UsageError):
    """A global option carried a value that does not parse"""

    code = ErrorCode.E_INVALID_OPTION

    def __init__(self, option: str, value: str, reason: str):
        self.option = option
        self.value = value
        super().__init__(f"invalid value '{value}' for {option}: {reason}")


class FileLoadError(FastbootError):
    """A named file could not be read"""

    code = ErrorCode.E_FILE_LOAD

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"cannot load '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedRequirement(FastbootError):
    """
    A requirement line could not be parsed.

    Raised for the first bad line; records already parsed from the same
    buffer are discarded by the caller.

    Attributes:
        line_number: 1-based line number inside the buffer, if known
        line: Raw text of the offending line
    """

    code = ErrorCode.E_MALFORMED_REQUIREMENT

    def __init__(self, reason: str, line_number: Optional[int] = None, line: str = ""):
        self.reason = reason
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"malformed requirement on line {line_number}: {reason}"
        else:
            message = f"malformed requirement: {reason}"
        super().__init__(message)


class AllocationFailure(MalformedRequirement):
    """Resources ran out while building a requirement's value list"""

    code = ErrorCode.E_ALLOCATION
