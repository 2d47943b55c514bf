"""Tests for option value parsing."""

import pytest

from kindle_fastboot.core.parsing import parse_unsigned, parse_vendor_id


class TestParseUnsigned:
    """strtoul-style unsigned literal parsing."""

    def test_decimal(self):
        assert parse_unsigned("0") == 0
        assert parse_unsigned("6473") == 6473

    def test_hex_0x(self):
        assert parse_unsigned("0x1949") == 0x1949
        assert parse_unsigned("0X1949") == 0x1949
        assert parse_unsigned("0xffff") == 0xFFFF

    def test_octal_leading_zero(self):
        assert parse_unsigned("010") == 8
        assert parse_unsigned("00") == 0

    def test_invalid_raises(self):
        for value in ("", "0x", "12z", "0x1G", "-1", "+5", " 12", "12 ", "019", "1.0"):
            with pytest.raises(ValueError):
                parse_unsigned(value)

    def test_none_raises(self):
        with pytest.raises(ValueError):
            parse_unsigned(None)


class TestParseVendorId:
    """16-bit bound on vendor ids."""

    def test_accepts_max(self):
        assert parse_vendor_id("0xFFFF") == 0xFFFF
        assert parse_vendor_id("65535") == 65535

    def test_rejects_17_bits(self):
        with pytest.raises(ValueError) as ei:
            parse_vendor_id("0x10000")
        assert "16 bits" in str(ei.value)

    def test_rejects_large_decimal(self):
        with pytest.raises(ValueError):
            parse_vendor_id("65536")
