"""Tests for requirement line parsing."""

import logging
from unittest.mock import MagicMock

import pytest

from kindle_fastboot.core import requirements
from kindle_fastboot.core.errors import AllocationFailure, MalformedRequirement
from kindle_fastboot.core.queue import Requirement
from kindle_fastboot.core.requirements import parse_requirement_line, parse_requirements


class TestParseRequirements:
    """Buffer-level parsing."""

    def test_require_with_alternatives(self):
        """require line yields one non-inverted record."""
        records = parse_requirements(b"require product=alpha|beta\n")
        assert records == [Requirement(name="product", invert=False, values=("alpha", "beta"))]

    def test_reject_board_renamed_to_product(self):
        """board is stored as product and reject inverts."""
        records = parse_requirements(b"reject board=golden\n")
        assert records == [Requirement(name="product", invert=True, values=("golden",))]

    def test_no_keyword_defaults_to_require(self):
        records = parse_requirements(b"version-bootloader=1.2\n")
        assert records[0].invert is False
        assert records[0].name == "version-bootloader"

    def test_order_preserved(self):
        data = b"require a=1\nreject b=2\nc=3\n"
        assert [r.name for r in parse_requirements(data)] == ["a", "b", "c"]

    def test_blank_lines_skipped(self):
        data = b"\n   \nrequire a=1\n\t\n"
        records = parse_requirements(data)
        assert len(records) == 1

    def test_empty_buffer(self):
        assert parse_requirements(b"") == []

    def test_whitespace_trimmed_from_name_and_values(self):
        records = parse_requirements(b"require  product =  alpha | beta  \n")
        assert records[0].name == "product"
        assert records[0].values == ("alpha", "beta")

    def test_duplicates_and_case_preserved(self):
        records = parse_requirements(b"require product=Beta|beta|Beta\n")
        assert records[0].values == ("Beta", "beta", "Beta")

    def test_crlf_line_endings(self):
        records = parse_requirements(b"require product=alpha\r\n")
        assert records[0].values == ("alpha",)

    def test_unterminated_last_line_ignored(self):
        """Text after the final newline is not a complete line."""
        records = parse_requirements(b"require a=1\nrequire b=2")
        assert [r.name for r in records] == ["a"]

    def test_unterminated_last_line_warns(self, caplog):
        """A dropped trailing line is reported at warning level."""
        with caplog.at_level(logging.WARNING, logger="kindle_fastboot.core.requirements"):
            records = parse_requirements(b"reject board=golden")
        assert records == []
        assert any(
            rec.levelno == logging.WARNING and "reject board=golden" in rec.getMessage()
            for rec in caplog.records
        )

    def test_missing_equals_discards_whole_buffer(self):
        """A bad line aborts even when earlier lines parsed."""
        data = b"require product=alpha\nrequire nonsense\nrequire b=2\n"
        with pytest.raises(MalformedRequirement) as ei:
            parse_requirements(data)
        assert ei.value.line_number == 2
        assert "missing '='" in str(ei.value)

    def test_empty_name_is_fatal(self):
        with pytest.raises(MalformedRequirement):
            parse_requirements(b"require   =alpha\n")

    def test_invalid_utf8_is_malformed(self):
        with pytest.raises(MalformedRequirement):
            parse_requirements(b"require product=\xff\xfe\n")


class TestParseRequirementLine:
    """Single-line parsing details."""

    def test_keyword_requires_trailing_space(self):
        """'rejectx=1' is a plain name, not the reject keyword."""
        record = parse_requirement_line("rejectx=1")
        assert record.name == "rejectx"
        assert record.invert is False

    def test_keyword_only_recognized_at_line_start(self):
        record = parse_requirement_line("  reject a=1")
        assert record.name == "reject a"
        assert record.invert is False

    def test_only_first_equals_splits(self):
        record = parse_requirement_line("require a=b=c")
        assert record.name == "a"
        assert record.values == ("b=c",)

    def test_empty_value_list(self):
        record = parse_requirement_line("require a=")
        assert record.values == ("",)

    def test_value_count_capped_at_32(self):
        """Separators beyond the 32nd value stay in the last value."""
        values = [str(n) for n in range(40)]
        record = parse_requirement_line("require a=" + "|".join(values))
        assert len(record.values) == 32
        assert record.values[:31] == tuple(values[:31])
        assert record.values[31] == "|".join(values[31:])

    def test_exactly_32_values_not_merged(self):
        values = [str(n) for n in range(32)]
        record = parse_requirement_line("a=" + "|".join(values))
        assert record.values == tuple(values)

    def test_board_alias_only_exact_match(self):
        assert parse_requirement_line("boards=x").name == "boards"
        assert parse_requirement_line("require board =x").name == "product"

    def test_allocation_failure_is_malformed(self):
        assert issubclass(AllocationFailure, MalformedRequirement)

    def test_out_of_memory_while_splitting_values(self, monkeypatch):
        """MemoryError building the value list becomes AllocationFailure."""
        monkeypatch.setattr(requirements, "_split_values", MagicMock(side_effect=MemoryError))
        with pytest.raises(AllocationFailure) as ei:
            parse_requirement_line("require product=alpha|beta", 3)
        assert ei.value.line_number == 3

    def test_out_of_memory_discards_buffer(self, monkeypatch):
        monkeypatch.setattr(requirements, "_split_values", MagicMock(side_effect=MemoryError))
        with pytest.raises(MalformedRequirement):
            parse_requirements(b"require a=1\n")
