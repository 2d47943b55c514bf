"""
Centralized parsing helpers for option values.

The scanner and the CLI both use these rather than re-implement them.
"""

import re
from typing import Optional

from .config import MAX_VENDOR_ID

_HEX_LITERAL = re.compile(r"0[xX](?P<digits>[0-9a-fA-F]+)")
_OCTAL_LITERAL = re.compile(r"0(?P<digits>[0-7]*)")
_DECIMAL_LITERAL = re.compile(r"(?P<digits>[1-9][0-9]*)")


def parse_unsigned(value: Optional[str]) -> int:
    """
    Parse an unsigned integer literal, C ``strtoul(..., 0)`` style.

    Accepts:
        - Decimal: "6473"
        - Hex with 0x prefix: "0x1949" or "0X1949"
        - Octal with leading 0: "014511"

    The whole string must be consumed; signs, whitespace and trailing
    characters are rejected.

    Raises:
        ValueError: If value is not an unsigned integer literal.
    """
    if not value:
        raise ValueError("empty value")

    match = _HEX_LITERAL.fullmatch(value)
    if match:
        return int(match.group("digits"), 16)
    match = _OCTAL_LITERAL.fullmatch(value)
    if match:
        return int(match.group("digits") or "0", 8)
    match = _DECIMAL_LITERAL.fullmatch(value)
    if match:
        return int(match.group("digits"), 10)

    raise ValueError(f"'{value}' is not an unsigned integer")


def parse_vendor_id(value: Optional[str]) -> int:
    """
    Parse a USB vendor id given on the command line.

    Returns:
        Vendor id in the range 0..0xFFFF.

    Raises:
        ValueError: If value does not parse or does not fit in 16 bits.
    """
    vendor_id = parse_unsigned(value)
    if vendor_id > MAX_VENDOR_ID:
        raise ValueError(f"0x{vendor_id:X} does not fit in 16 bits")
    return vendor_id
