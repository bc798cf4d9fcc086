"""Utility functions and helpers"""

from .errors import (
    CodecError,
    ErrorKind,
    FieldTooLong,
    InvalidAmount,
    InvalidDate,
    InvalidEncoding,
    MalformedRecord,
    MissingHeader,
    TruncatedInput,
    UnknownFormat,
    UnrepresentableValue,
)
from .error_handler import (
    ErrorHandler,
    ErrorCategory,
    ErrorSeverity,
    handle_codec_error,
    handle_file_access_error,
    handle_file_write_error,
    handle_invalid_config,
)

# config_manager and codec_factory depend on the models package and are
# imported from their modules directly.

__all__ = [
    'CodecError',
    'ErrorKind',
    'FieldTooLong',
    'InvalidAmount',
    'InvalidDate',
    'InvalidEncoding',
    'MalformedRecord',
    'MissingHeader',
    'TruncatedInput',
    'UnknownFormat',
    'UnrepresentableValue',
    'ErrorHandler',
    'ErrorCategory',
    'ErrorSeverity',
    'handle_codec_error',
    'handle_file_access_error',
    'handle_file_write_error',
    'handle_invalid_config',
]
