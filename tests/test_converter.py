"""Tests for conversion between formats."""

import itertools

import pytest

from statement_converter import convert, decode, encode
from statement_converter.converter import convert_file, read_records
from statement_converter.models.core import Record, RecordFormat
from statement_converter.utils.codec_factory import CodecFactory, get_codec
from statement_converter.utils.errors import FieldTooLong, InvalidAmount, UnknownFormat


class TestConverter:
    """Test cases for convert, decode and encode"""

    def test_csv_to_binary_to_csv(self, sample_records, sample_csv):
        """Test the reference statement survives a trip through binary"""
        binary = convert(sample_csv, "csv", "binary")

        assert decode(binary, "binary") == sample_records
        assert convert(binary, "binary", "csv") == sample_csv

    @pytest.mark.parametrize(
        "source,target",
        list(itertools.product(RecordFormat.names(), repeat=2))
    )
    def test_cross_format(self, sample_records, source, target):
        """Test any format pair preserves the records"""
        data = encode(sample_records, source)
        assert decode(convert(data, source, target), target) == sample_records

    def test_identity_conversion_is_canonical(self, sample_csv):
        """Test converting a format to itself normalizes the bytes"""
        quoted = sample_csv.replace(b"Payment", b'"Payment"')
        assert convert(quoted, "csv", "csv") == sample_csv

    def test_long_description_text_only(self):
        """Test a 41 character description fails for text alone"""
        records = [Record("A100", 1672876800, 15000, "x" * 41)]
        csv_data = encode(records, RecordFormat.CSV)

        assert decode(convert(csv_data, "csv", "binary"), "binary") == records
        with pytest.raises(FieldTooLong):
            convert(csv_data, "csv", "text")

    def test_decode_errors_propagate(self, sample_csv):
        data = sample_csv.replace(b"150.00", b"abc")

        with pytest.raises(InvalidAmount) as exc_info:
            convert(data, "csv", "binary")

        assert exc_info.value.record_index == 0

    def test_unknown_format(self, sample_csv):
        with pytest.raises(UnknownFormat):
            convert(sample_csv, "csv", "xlsx")

    def test_convert_file(self, tmp_path, sample_records, sample_csv):
        """Test reading a statement from disk"""
        path = tmp_path / "statement.csv"
        path.write_bytes(sample_csv)

        assert read_records(path, "csv") == sample_records
        assert decode(convert_file(str(path), "csv", "text"), "text") == sample_records

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_records(tmp_path / "missing.bin", "binary")


class TestCodecFactory:
    """Test cases for CodecFactory"""

    def setup_method(self):
        """Set up test fixtures"""
        self.factory = CodecFactory()

    def test_supported_formats(self):
        assert self.factory.get_supported_formats() == ['binary', 'csv', 'text']

    def test_get_codec(self):
        for fmt in RecordFormat:
            assert self.factory.get_codec(fmt.value).format is fmt

    def test_get_codec_unknown(self):
        with pytest.raises(UnknownFormat):
            self.factory.get_codec("ofx")

    def test_detect_format(self):
        """Test format detection from file extensions"""
        assert self.factory.detect_format("statement.csv") is RecordFormat.CSV
        assert self.factory.detect_format("statement.TXT") is RecordFormat.TEXT
        assert self.factory.detect_format("out/statement.bin") is RecordFormat.BINARY
        assert self.factory.detect_format("statement.qfx") is None

    def test_shared_factory(self):
        assert get_codec("CSV").format is RecordFormat.CSV
