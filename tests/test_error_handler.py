"""Tests for error recording and structured logging."""

import json

from statement_converter.utils.error_handler import (
    ErrorCategory,
    ErrorHandler,
    handle_codec_error,
    handle_file_access_error,
    handle_file_write_error,
    handle_invalid_config,
    handle_unknown_format,
)
from statement_converter.utils.errors import (
    FieldTooLong,
    InvalidAmount,
    TruncatedInput,
    UnknownFormat,
)


class TestErrorHandler:
    """Test cases for ErrorHandler"""

    def setup_method(self):
        """Set up test fixtures"""
        self.handler = ErrorHandler(enable_console=False)

    def test_codec_error_details(self):
        """Test codec failures keep their index, field and raw value"""
        error = InvalidAmount("Amount must match [-]units.cc", 4, "amount", "abc")

        detail = handle_codec_error(self.handler, error, file_path="in.csv", format_name="csv")

        assert detail.error_code == "D003"
        assert detail.category == ErrorCategory.DATA_PARSING.value
        assert detail.record_index == 4
        assert detail.field_name == "amount"
        assert detail.raw_value == "abc"
        assert detail.context == {'format': 'csv'}
        assert detail.message.startswith("invalid_amount: ")
        assert "record 4" in detail.message
        assert self.handler.errors == [detail]

    def test_error_codes_by_kind(self):
        handle_codec_error(self.handler, TruncatedInput("short", 0, "amount"))
        handle_codec_error(self.handler, FieldTooLong("long", 1, "description"))

        codes = [error.error_code for error in self.handler.errors]
        categories = [error.category for error in self.handler.errors]

        assert codes == ["D005", "E001"]
        assert categories == ["file_format", "data_encoding"]

    def test_file_access_errors(self):
        handle_file_access_error(self.handler, "missing.csv", FileNotFoundError("missing.csv"))
        handle_file_access_error(self.handler, "locked.csv", PermissionError("locked.csv"))

        codes = [error.error_code for error in self.handler.errors]
        assert codes == ["F001", "F002"]
        assert self.handler.errors[0].stack_trace is not None

    def test_unknown_format(self):
        detail = handle_unknown_format(self.handler, UnknownFormat("xml"))

        assert detail.error_code == "C001"
        assert detail.raw_value == "xml"

    def test_file_write_error(self):
        detail = handle_file_write_error(self.handler, "out/statement.bin", IsADirectoryError("out"))

        assert detail.error_code == "F003"
        assert detail.category == ErrorCategory.FILE_ACCESS.value
        assert detail.file_path == "out/statement.bin"

    def test_invalid_config_is_a_warning(self):
        """Test an ignored configuration file is recorded as a warning"""
        detail = handle_invalid_config(self.handler, "converter_config.json", "bad log_level")

        assert detail.error_code == "C002"
        assert detail.severity == "warning"
        assert self.handler.warnings == [detail]
        assert self.handler.errors == []

    def test_json_log_files(self, tmp_path):
        """Test errors are written as JSON lines to the log directory"""
        handler = ErrorHandler(log_directory=str(tmp_path / "logs"), enable_console=False)
        handle_codec_error(handler, InvalidAmount("bad", 0, "amount"), file_path="a.csv")
        for log_handler in handler.logger.handlers:
            log_handler.flush()

        error_logs = list((tmp_path / "logs").glob("errors_*.jsonl"))
        assert len(error_logs) == 1

        entry = json.loads(error_logs[0].read_text().splitlines()[0])
        assert entry['level'] == "ERROR"
        assert entry['error_code'] == "D003"
        assert entry['file_path'] == "a.csv"
        assert list((tmp_path / "logs").glob("converter_*.jsonl"))
