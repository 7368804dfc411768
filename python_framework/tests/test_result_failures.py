"""Tests for ResultFailures convenience factories."""

import pytest

from railway import ErrorCode
from railway.result_failures import ResultFailures


class TestConvenienceFactories:
    def test_validation_error(self):
        result = ResultFailures.validation_error("Name is required")
        assert result.error().code == ErrorCode.VALIDATION_ERROR
        assert result.error().message == "Name is required"

    def test_not_found(self):
        result = ResultFailures.not_found("Certificate", "example.com")
        assert result.error().code == ErrorCode.NOT_FOUND
        assert "Certificate" in result.error().message
        assert "example.com" in result.error().message

    def test_technical_error_keeps_exception(self):
        ex = RuntimeError("x")
        assert ResultFailures.technical_error("boom", ex).error().exception is ex

    def test_configuration_error(self):
        assert ResultFailures.configuration_error("bad").error().code == ErrorCode.CONFIGURATION_ERROR


class TestFromException:
    @pytest.mark.parametrize(
        ("exception", "expected"),
        [
            (ValueError("v"), ErrorCode.VALIDATION_ERROR),
            (UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"), ErrorCode.VALIDATION_ERROR),
            (KeyError("k"), ErrorCode.VALIDATION_ERROR),
            (FileNotFoundError("f"), ErrorCode.NOT_FOUND),
            (IndexError("i"), ErrorCode.NOT_FOUND),
            (PermissionError("p"), ErrorCode.AUTHORIZATION_ERROR),
            (IsADirectoryError("d"), ErrorCode.TECHNICAL_ERROR),
            (RuntimeError("r"), ErrorCode.UNKNOWN_ERROR),
        ],
    )
    def test_maps_exception_type(self, exception, expected):
        result = ResultFailures.from_exception("failed", exception)
        assert result.error().code == expected
        assert result.error().exception is exception

    def test_message_includes_exception_text(self):
        result = ResultFailures.from_exception("Failed to read report", FileNotFoundError("no such file"))
        assert result.error().message == "Failed to read report: no such file"
