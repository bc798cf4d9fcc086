"""Codec error taxonomy.

Every failure of a decoder or encoder is a ``CodecError`` subclass tagged
with an ``ErrorKind``. Errors are terminal for the whole file: a codec never
returns a partial record sequence or a partial byte buffer.
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(Enum):
    """Closed set of codec failure kinds"""
    MALFORMED_RECORD = "malformed_record"
    MISSING_HEADER = "missing_header"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_DATE = "invalid_date"
    FIELD_TOO_LONG = "field_too_long"
    TRUNCATED_INPUT = "truncated_input"
    INVALID_ENCODING = "invalid_encoding"
    UNREPRESENTABLE_VALUE = "unrepresentable_value"


class CodecError(Exception):
    """Base class for decode and encode failures.

    Attributes:
        kind: ErrorKind tag of the failure
        record_index: 0-based index of the offending record, None for
            file-level problems
        field_name: Canonical name of the offending field, if known
        raw_value: Offending raw value, if useful for the reader
    """

    kind: ErrorKind = ErrorKind.MALFORMED_RECORD

    def __init__(self,
                 message: str,
                 record_index: Optional[int] = None,
                 field_name: Optional[str] = None,
                 raw_value: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.record_index = record_index
        self.field_name = field_name
        self.raw_value = raw_value

    def __str__(self) -> str:
        parts = []
        if self.record_index is not None:
            parts.append(f"record {self.record_index}")
        if self.field_name:
            parts.append(f"field '{self.field_name}'")
        location = f" ({', '.join(parts)})" if parts else ""
        value = f": {self.raw_value!r}" if self.raw_value is not None else ""
        return f"{self.message}{location}{value}"


class MalformedRecord(CodecError):
    """Record structure does not match the format layout"""
    kind = ErrorKind.MALFORMED_RECORD


class MissingHeader(CodecError):
    """Expected header line is absent or wrong"""
    kind = ErrorKind.MISSING_HEADER


class InvalidAmount(CodecError):
    """Amount is not a valid fixed-point numeral"""
    kind = ErrorKind.INVALID_AMOUNT


class InvalidDate(CodecError):
    """Timestamp does not match the documented format or range"""
    kind = ErrorKind.INVALID_DATE


class FieldTooLong(CodecError):
    """Value exceeds the width the target format allots to it"""
    kind = ErrorKind.FIELD_TOO_LONG


class TruncatedInput(CodecError):
    """Fewer bytes remain than the declared counts and lengths require"""
    kind = ErrorKind.TRUNCATED_INPUT


class InvalidEncoding(CodecError):
    """Bytes are not valid UTF-8"""
    kind = ErrorKind.INVALID_ENCODING


class UnrepresentableValue(CodecError):
    """Value contains characters the target format cannot carry"""
    kind = ErrorKind.UNREPRESENTABLE_VALUE


class UnknownFormat(ValueError):
    """Format tag is not one of binary, text or csv"""

    def __init__(self, format_name: str):
        super().__init__(
            f"Unknown file format '{format_name}', "
            "available options are 'binary', 'csv' and 'text'"
        )
        self.format_name = format_name
