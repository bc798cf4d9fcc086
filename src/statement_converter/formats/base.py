"""Abstract base class for codecs and the shared field conventions."""

import re
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..models.core import (
    EPOCH,
    MAX_AMOUNT,
    MIN_AMOUNT,
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    Record,
    RecordFormat,
    timestamp_from_datetime,
)
from ..utils.errors import (
    InvalidAmount,
    InvalidDate,
    InvalidEncoding,
    MalformedRecord,
    UnrepresentableValue,
)


AMOUNT_PATTERN = re.compile(r'(-?)(0|[1-9][0-9]*)\.([0-9]{2})')
TIMESTAMP_PATTERN = re.compile(
    r'([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})Z'
)
TIMESTAMP_FORMAT = "YYYY-MM-DDTHH:MM:SSZ"
AMOUNT_FORMAT = "[-]units.cc"


class RecordCodec(ABC):
    """Abstract base class for all statement codecs"""

    format: RecordFormat

    def __init__(self):
        self.transformer = FieldTransformer()

    @abstractmethod
    def decode(self, data: bytes) -> List[Record]:
        """Decode a whole statement file into records"""
        pass

    @abstractmethod
    def encode(self, records: List[Record]) -> bytes:
        """Encode records into a whole statement file"""
        pass

    @abstractmethod
    def get_supported_extensions(self) -> List[str]:
        """Return list of file extensions conventionally used by this format"""
        pass


class FieldTransformer:
    """Converts canonical field values to their textual form and back.

    Used by the CSV and fixed-width text codecs so both agree on one amount
    format and one timestamp format.
    """

    def format_amount(self, amount: int) -> str:
        """Render minor units as a fixed-point numeral: 15000 -> '150.00'"""
        sign = "-" if amount < 0 else ""
        units, cents = divmod(abs(amount), 100)
        return f"{sign}{units}.{cents:02d}"

    def parse_amount(self, text: str,
                     record_index: Optional[int] = None,
                     field_name: str = "amount") -> int:
        """Parse a fixed-point numeral into minor units.

        Only the exact form produced by ``format_amount`` is accepted, so a
        decoded amount always re-encodes to the same text.
        """
        match = AMOUNT_PATTERN.fullmatch(text)
        if not match:
            raise InvalidAmount(
                f"Amount must match {AMOUNT_FORMAT}",
                record_index, field_name, text
            )

        sign, units, cents = match.groups()
        amount = int(units) * 100 + int(cents)
        if sign:
            if amount == 0:
                raise InvalidAmount("Negative zero amount", record_index, field_name, text)
            amount = -amount

        if not MIN_AMOUNT <= amount <= MAX_AMOUNT:
            raise InvalidAmount("Amount out of range", record_index, field_name, text)
        return amount

    def format_timestamp(self, timestamp: int) -> str:
        """Render epoch seconds as YYYY-MM-DDTHH:MM:SSZ"""
        moment = EPOCH + timedelta(seconds=timestamp)
        # strftime does not zero-pad years below 1000 on every platform
        return (
            f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
            f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}Z"
        )

    def parse_timestamp(self, text: str,
                        record_index: Optional[int] = None,
                        field_name: str = "timestamp") -> int:
        """Parse YYYY-MM-DDTHH:MM:SSZ into epoch seconds"""
        match = TIMESTAMP_PATTERN.fullmatch(text)
        if not match:
            raise InvalidDate(
                f"Date must match {TIMESTAMP_FORMAT}",
                record_index, field_name, text
            )

        try:
            moment = datetime(*(int(part) for part in match.groups()), tzinfo=timezone.utc)
        except ValueError as e:
            raise InvalidDate(f"Invalid calendar date ({e})", record_index, field_name, text) from e

        return timestamp_from_datetime(moment)

    def check_timestamp(self, timestamp: int,
                        record_index: Optional[int] = None,
                        field_name: str = "timestamp") -> int:
        """Validate an integer timestamp decoded from a binary field"""
        if not MIN_TIMESTAMP <= timestamp <= MAX_TIMESTAMP:
            raise InvalidDate("Timestamp out of supported range", record_index, field_name, timestamp)
        return timestamp

    def check_account_id(self, account_id: str,
                         record_index: Optional[int] = None,
                         field_name: str = "account_id") -> str:
        if not account_id:
            raise MalformedRecord("Account id cannot be empty", record_index, field_name)
        return account_id

    def decode_utf8(self, raw: bytes,
                    record_index: Optional[int] = None,
                    field_name: Optional[str] = None) -> str:
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidEncoding(
                f"Invalid UTF-8 at byte {e.start}", record_index, field_name
            ) from e

    def encode_utf8(self, text: str,
                    record_index: Optional[int] = None,
                    field_name: Optional[str] = None) -> bytes:
        try:
            return text.encode('utf-8')
        except UnicodeEncodeError as e:
            raise UnrepresentableValue(
                "Value cannot be encoded as UTF-8", record_index, field_name
            ) from e
