"""
Standardized diagnostic codes for Kindle Fastboot.

Each scan-phase error carries a stable code; the CLI uses the code to
attach a remediation hint to the single diagnostic it prints.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ErrorCode(Enum):
    """Stable error codes for known failure kinds."""
    E_USAGE = "E_USAGE"
    E_INVALID_OPTION = "E_INVALID_OPTION"
    E_FILE_LOAD = "E_FILE_LOAD"
    E_MALFORMED_REQUIREMENT = "E_MALFORMED_REQUIREMENT"
    E_ALLOCATION = "E_ALLOCATION"

    # Generic
    E_UNKNOWN = "E_UNKNOWN"


# Default remediation hints for each error code
ERROR_REMEDIATIONS: Dict[ErrorCode, str] = {
    ErrorCode.E_USAGE:
        "Run with --help to see the command list and their arguments.",
    ErrorCode.E_INVALID_OPTION:
        "Vendor ids are decimal or 0x-prefixed hex and must not exceed 0xFFFF.",
    ErrorCode.E_FILE_LOAD:
        "Check that the file exists and is readable.",
    ErrorCode.E_MALFORMED_REQUIREMENT:
        "Each line must look like 'require <name>=<value>[|<value>...]'.",
    ErrorCode.E_ALLOCATION:
        "The requirements file is too large to process.",
    ErrorCode.E_UNKNOWN:
        "Run with -v for more details.",
}


@dataclass
class Diagnostic:
    """
    Single user-facing error report.

    Attributes:
        code: Stable error code for programmatic handling
        message: Short description of what went wrong
        remediation: Suggested action to resolve the issue
    """
    code: ErrorCode
    message: str
    remediation: str = ""

    def __post_init__(self):
        """Set default remediation if not provided."""
        if not self.remediation and self.code in ERROR_REMEDIATIONS:
            self.remediation = ERROR_REMEDIATIONS[self.code]

    @classmethod
    def from_error(cls, error: Exception) -> "Diagnostic":
        """Build a diagnostic from a raised scan error."""
        code = getattr(error, "code", ErrorCode.E_UNKNOWN)
        return cls(code=code, message=str(error))

    def to_cli_string(self, verbose: bool = False) -> str:
        """Format for CLI output."""
        if verbose:
            lines = [f"error: [{self.code.value}] {self.message}"]
            if self.remediation:
                lines.append(f"   → {self.remediation}")
            return "\n".join(lines)
        return f"error: {self.message}"
