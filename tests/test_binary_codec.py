"""Tests for the binary codec."""

import struct

import pytest

from statement_converter.formats.binary_format import BinaryCodec
from statement_converter.models.core import MAX_TIMESTAMP, Record
from statement_converter.utils.errors import (
    ErrorKind,
    FieldTooLong,
    InvalidDate,
    InvalidEncoding,
    MalformedRecord,
    TruncatedInput,
)


def pack_record(account: bytes, timestamp: int, amount: int, description: bytes) -> bytes:
    """Hand-assembled record in the documented layout"""
    return (
        struct.pack('>H', len(account)) + account
        + struct.pack('>qq', timestamp, amount)
        + struct.pack('>I', len(description)) + description
    )


class TestBinaryCodec:
    """Test cases for BinaryCodec"""

    def setup_method(self):
        """Set up test fixtures"""
        self.codec = BinaryCodec()

    def test_supported_extensions(self):
        assert '.bin' in self.codec.get_supported_extensions()

    def test_exact_layout(self):
        """Test the byte layout of a single record"""
        data = self.codec.encode([Record("A1", 0, -1, "")])

        assert data == (
            b"\x00\x00\x00\x01"
            b"\x00\x02A1"
            b"\x00\x00\x00\x00\x00\x00\x00\x00"
            b"\xff\xff\xff\xff\xff\xff\xff\xff"
            b"\x00\x00\x00\x00"
        )

    def test_encode_sample(self, sample_records):
        """Test the sample statement against a hand-assembled buffer"""
        expected = (
            struct.pack('>I', 2)
            + pack_record(b"A100", 1672876800, 15000, b"Payment")
            + pack_record(b"A100", 1672963200, -2000, b"Refund")
        )

        assert self.codec.encode(sample_records) == expected
        assert self.codec.decode(expected) == sample_records

    def test_empty_statement(self):
        """Test zero records is just the count"""
        assert self.codec.encode([]) == b"\x00\x00\x00\x00"
        assert self.codec.decode(b"\x00\x00\x00\x00") == []

    def test_extreme_values(self, awkward_records):
        """Test full range timestamps, amounts and unicode text"""
        assert self.codec.decode(self.codec.encode(awkward_records)) == awkward_records

    def test_text_with_line_breaks(self):
        """Test any UTF-8 text is carried as is"""
        record = Record("A100", 0, 1, "two\nlines, \"quoted\"\r\n   ")
        assert self.codec.decode(self.codec.encode([record])) == [record]

    def test_empty_input(self):
        """Test input too short for the record count"""
        with pytest.raises(TruncatedInput) as exc_info:
            self.codec.decode(b"")

        assert exc_info.value.record_index is None
        assert exc_info.value.field_name == "record_count"

    def test_truncated_last_byte(self, sample_records):
        """Test removing the last byte of a valid file"""
        data = self.codec.encode(sample_records)

        with pytest.raises(TruncatedInput) as exc_info:
            self.codec.decode(data[:-1])

        assert exc_info.value.kind is ErrorKind.TRUNCATED_INPUT
        assert exc_info.value.record_index == 1
        assert exc_info.value.field_name == "description"

    def test_truncated_fixed_field(self):
        """Test input ending inside the amount"""
        data = struct.pack('>I', 1) + pack_record(b"A1", 0, 5, b"")

        with pytest.raises(TruncatedInput) as exc_info:
            self.codec.decode(data[:20])

        assert exc_info.value.record_index == 0
        assert exc_info.value.field_name == "amount"

    def test_count_larger_than_content(self):
        """Test a declared count with missing records"""
        data = struct.pack('>I', 3) + pack_record(b"A1", 0, 5, b"x")

        with pytest.raises(TruncatedInput) as exc_info:
            self.codec.decode(data)

        assert exc_info.value.record_index == 1
        assert exc_info.value.field_name == "account_id"

    def test_trailing_bytes(self, sample_records):
        """Test extra bytes after the declared records"""
        data = self.codec.encode(sample_records) + b"\x00"

        with pytest.raises(MalformedRecord):
            self.codec.decode(data)

    def test_invalid_utf8(self):
        data = struct.pack('>I', 1) + pack_record(b"A1", 0, 0, b"\xff")

        with pytest.raises(InvalidEncoding) as exc_info:
            self.codec.decode(data)

        assert exc_info.value.record_index == 0
        assert exc_info.value.field_name == "description"

    def test_empty_account(self):
        data = struct.pack('>I', 1) + pack_record(b"", 0, 0, b"")

        with pytest.raises(MalformedRecord) as exc_info:
            self.codec.decode(data)

        assert exc_info.value.field_name == "account_id"

    def test_timestamp_out_of_range(self):
        data = struct.pack('>I', 1) + pack_record(b"A1", MAX_TIMESTAMP + 1, 0, b"")

        with pytest.raises(InvalidDate) as exc_info:
            self.codec.decode(data)

        assert exc_info.value.record_index == 0
        assert exc_info.value.field_name == "timestamp"

    def test_account_too_long(self):
        """Test the account length must fit its u16 prefix"""
        records = [Record("A1", 0, 0), Record("A" * 65536, 0, 0)]

        with pytest.raises(FieldTooLong) as exc_info:
            self.codec.encode(records)

        assert exc_info.value.record_index == 1
        assert exc_info.value.field_name == "account_id"

    def test_longest_account(self):
        record = Record("é" * 32767 + "A", 0, 0)
        assert self.codec.decode(self.codec.encode([record])) == [record]
