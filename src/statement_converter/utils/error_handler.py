"""Error recording and structured logging for the converter CLI."""

import json
import logging
import sys
import traceback
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any

from .errors import CodecError, ErrorKind, UnknownFormat


class ErrorSeverity(Enum):
    """Error severity levels"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification"""
    FILE_ACCESS = "file_access"
    FILE_FORMAT = "file_format"
    DATA_PARSING = "data_parsing"
    DATA_ENCODING = "data_encoding"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


# Category of every codec error kind
KIND_CATEGORIES = {
    ErrorKind.MALFORMED_RECORD: ErrorCategory.FILE_FORMAT,
    ErrorKind.MISSING_HEADER: ErrorCategory.FILE_FORMAT,
    ErrorKind.TRUNCATED_INPUT: ErrorCategory.FILE_FORMAT,
    ErrorKind.INVALID_ENCODING: ErrorCategory.FILE_FORMAT,
    ErrorKind.INVALID_AMOUNT: ErrorCategory.DATA_PARSING,
    ErrorKind.INVALID_DATE: ErrorCategory.DATA_PARSING,
    ErrorKind.FIELD_TOO_LONG: ErrorCategory.DATA_ENCODING,
    ErrorKind.UNREPRESENTABLE_VALUE: ErrorCategory.DATA_ENCODING,
}


@dataclass
class ErrorDetail:
    """Detailed error information"""
    timestamp: str
    severity: str
    category: str
    error_code: str
    message: str
    file_path: Optional[str] = None
    record_index: Optional[int] = None
    field_name: Optional[str] = None
    raw_value: Optional[str] = None
    stack_trace: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class JSONFormatter(logging.Formatter):
    """One JSON object per log line"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Add extra fields if present
        for key in ('error_code', 'file_path', 'category', 'context'):
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


class ErrorHandler:
    """Records conversion failures and configures package logging.

    Console output goes to stderr so that converted data written to stdout
    is never mixed with log lines.
    """

    LOGGER_NAME = 'statement_converter'

    def __init__(self,
                 log_directory: Optional[str] = None,
                 enable_console: bool = True,
                 level: str = "INFO"):
        self.log_directory = Path(log_directory) if log_directory else None
        if self.log_directory:
            self.log_directory.mkdir(parents=True, exist_ok=True)

        self.errors: List[ErrorDetail] = []
        self.warnings: List[ErrorDetail] = []

        self._setup_logging(enable_console, level)

        # Error code mappings
        self.error_codes = {
            # File access errors
            "FILE_NOT_FOUND": "F001",
            "FILE_PERMISSION_DENIED": "F002",
            "FILE_WRITE_ERROR": "F003",

            # Decode errors
            ErrorKind.MALFORMED_RECORD.name: "D001",
            ErrorKind.MISSING_HEADER.name: "D002",
            ErrorKind.INVALID_AMOUNT.name: "D003",
            ErrorKind.INVALID_DATE.name: "D004",
            ErrorKind.TRUNCATED_INPUT.name: "D005",
            ErrorKind.INVALID_ENCODING.name: "D006",

            # Encode errors
            ErrorKind.FIELD_TOO_LONG.name: "E001",
            ErrorKind.UNREPRESENTABLE_VALUE.name: "E002",

            # Configuration errors
            "UNKNOWN_FORMAT": "C001",
            "INVALID_CONFIG_FORMAT": "C002",

            "UNEXPECTED_ERROR": "S999"
        }

    def _setup_logging(self, enable_console: bool, level: str):
        """Set up console and JSON-lines logging"""
        self.logger = logging.getLogger(self.LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(levelname)s - %(message)s'
            ))
            self.logger.addHandler(console_handler)

        if self.log_directory:
            log_file = self.log_directory / f"converter_{datetime.now().strftime('%Y%m%d')}.jsonl"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(JSONFormatter())
            self.logger.addHandler(file_handler)

            # Error file handler for errors only
            error_file = self.log_directory / f"errors_{datetime.now().strftime('%Y%m%d')}.jsonl"
            error_handler = logging.FileHandler(error_file, encoding='utf-8')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(JSONFormatter())
            self.logger.addHandler(error_handler)

    def log_error(self,
                  message: str,
                  error_type: str,
                  category: ErrorCategory = ErrorCategory.SYSTEM,
                  file_path: Optional[str] = None,
                  record_index: Optional[int] = None,
                  field_name: Optional[str] = None,
                  raw_value: Optional[Any] = None,
                  exception: Optional[BaseException] = None,
                  context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log an error with detailed information"""
        error_code = self.error_codes.get(error_type, "S999")
        stack_trace = None

        if exception is not None:
            stack_trace = ''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            ))

        error_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.ERROR.value,
            category=category.value,
            error_code=error_code,
            message=message,
            file_path=file_path,
            record_index=record_index,
            field_name=field_name,
            raw_value=None if raw_value is None else str(raw_value),
            stack_trace=stack_trace,
            context=context or {}
        )

        self.errors.append(error_detail)

        self.logger.error(
            message,
            extra={
                'error_code': error_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )

        return error_detail

    def log_warning(self,
                    message: str,
                    warning_type: str,
                    category: ErrorCategory = ErrorCategory.SYSTEM,
                    file_path: Optional[str] = None,
                    context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log a warning with detailed information"""
        warning_code = self.error_codes.get(warning_type, "W999")

        warning_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.WARNING.value,
            category=category.value,
            error_code=warning_code,
            message=message,
            file_path=file_path,
            context=context or {}
        )

        self.warnings.append(warning_detail)

        self.logger.warning(
            message,
            extra={
                'error_code': warning_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )

        return warning_detail

    def log_debug(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log debug message"""
        self.logger.debug(message, extra={'context': context or {}})


# Convenience functions for common error scenarios
def handle_codec_error(error_handler: ErrorHandler,
                       error: CodecError,
                       file_path: Optional[str] = None,
                       format_name: Optional[str] = None) -> ErrorDetail:
    """Record a decode or encode failure"""
    return error_handler.log_error(
        f"{error.kind.value}: {error}",
        error.kind.name,
        KIND_CATEGORIES.get(error.kind, ErrorCategory.SYSTEM),
        file_path=file_path,
        record_index=error.record_index,
        field_name=error.field_name,
        raw_value=error.raw_value,
        context={'format': format_name} if format_name else None
    )


def handle_file_access_error(error_handler: ErrorHandler,
                             file_path: str,
                             exception: Exception) -> ErrorDetail:
    """Handle common file access errors"""
    if isinstance(exception, FileNotFoundError):
        return error_handler.log_error(
            f"File not found: {file_path}",
            "FILE_NOT_FOUND",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )
    elif isinstance(exception, PermissionError):
        return error_handler.log_error(
            f"Permission denied accessing file: {file_path}",
            "FILE_PERMISSION_DENIED",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )
    else:
        return error_handler.log_error(
            f"File access error: {str(exception)}",
            "UNEXPECTED_ERROR",
            ErrorCategory.FILE_ACCESS,
            file_path=file_path,
            exception=exception
        )


def handle_unknown_format(error_handler: ErrorHandler, error: UnknownFormat) -> ErrorDetail:
    """Handle an unsupported format tag"""
    return error_handler.log_error(
        str(error),
        "UNKNOWN_FORMAT",
        ErrorCategory.CONFIGURATION,
        raw_value=error.format_name
    )


def handle_file_write_error(error_handler: ErrorHandler,
                            file_path: str,
                            exception: Exception) -> ErrorDetail:
    """Handle a failure to write converted output or a template"""
    return error_handler.log_error(
        f"Unable to write {file_path}: {exception}",
        "FILE_WRITE_ERROR",
        ErrorCategory.FILE_ACCESS,
        file_path=file_path,
        exception=exception
    )


def handle_invalid_config(error_handler: ErrorHandler,
                          config_path: str,
                          reason: str) -> ErrorDetail:
    """Warn about a configuration file that was ignored"""
    return error_handler.log_warning(
        f"Invalid configuration in {config_path}, using defaults: {reason}",
        "INVALID_CONFIG_FORMAT",
        ErrorCategory.CONFIGURATION,
        file_path=config_path
    )
