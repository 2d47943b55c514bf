"""Tests for scan result rendering and error diagnostics."""

from kindle_fastboot.core.config import DeviceFilterContext
from kindle_fastboot.core.errors import FileLoadError, MalformedRequirement, UsageError
from kindle_fastboot.core.messages import Diagnostic, ErrorCode
from kindle_fastboot.core.queue import Download, Flash, Reboot, Requirement
from kindle_fastboot.core.results import ScanResult


def test_summary_lists_operations_and_filter():
    result = ScanResult(
        operations=(Download("boot", b"abcd", 4), Flash("boot", 4), Reboot()),
        context=DeviceFilterContext(serial="B0F1", vendor_id=0x1949),
    )
    summary = result.to_summary()
    assert summary.splitlines()[0] == "[QUEUE] 3 operation(s)"
    assert "Serial: B0F1" in summary
    assert "Vendor: 0x1949" in summary
    assert "Bytes: 4" in summary
    assert "3. reboot: rebooting" in summary


def test_to_dict_requirement():
    result = ScanResult(operations=(Requirement("product", True, ("a", "b")),))
    assert result.to_dict()["operations"] == [
        {"kind": "requirement", "name": "product", "invert": True, "values": ["a", "b"]}
    ]


def test_devices_summary():
    assert ScanResult(list_devices=True).to_summary() == "[DEVICES] list attached devices"


def test_diagnostic_codes_follow_error_type():
    assert Diagnostic.from_error(UsageError("x")).code is ErrorCode.E_USAGE
    assert Diagnostic.from_error(FileLoadError("a.img")).code is ErrorCode.E_FILE_LOAD
    assert Diagnostic.from_error(MalformedRequirement("bad")).code is ErrorCode.E_MALFORMED_REQUIREMENT
    assert Diagnostic.from_error(ValueError("x")).code is ErrorCode.E_UNKNOWN


def test_diagnostic_cli_string():
    diagnostic = Diagnostic.from_error(FileLoadError("a.img", "no such file"))
    assert diagnostic.to_cli_string() == "error: cannot load 'a.img': no such file"
    verbose = diagnostic.to_cli_string(verbose=True)
    assert verbose.startswith("error: [E_FILE_LOAD] cannot load 'a.img'")
    assert "readable" in verbose
