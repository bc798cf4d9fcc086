"""Tests for statement comparison."""

from dataclasses import replace

from statement_converter import compare, encode
from statement_converter.comparer import compare_bytes, compare_files, diff_records
from statement_converter.models.core import Record


class TestComparer:
    """Test cases for the comparer"""

    def test_identical(self, sample_records):
        report = compare(sample_records, list(sample_records))

        assert report.equal
        assert report.left_count == report.right_count == 2
        assert report.differences == []

    def test_empty_statements_are_equal(self):
        assert compare([], []).equal

    def test_field_difference(self, sample_records):
        """Test the differing fields of one record are named"""
        other = list(sample_records)
        other[1] = replace(other[1], amount=-2001, description="Refund 2")

        report = compare(sample_records, other)

        assert not report.equal
        assert report.first_difference_index == 1
        assert report.differences[0].field_names == ["amount", "description"]
        assert report.differences[0].fields[0].left == -2000
        assert report.differences[0].fields[0].right == -2001

    def test_length_mismatch(self, sample_records):
        """Test a missing record is reported at the first unmatched index"""
        report = compare(sample_records, sample_records[:1])

        assert not report.equal
        assert report.length_mismatch
        assert report.differences == []
        assert report.first_difference_index == 1

    def test_length_mismatch_with_differences(self, sample_records):
        other = [replace(sample_records[0], account_id="B200")]

        report = compare(sample_records, other)

        assert report.length_mismatch
        assert report.first_difference_index == 0

    def test_order_matters(self, sample_records):
        """Test records are matched by position"""
        report = compare(sample_records, list(reversed(sample_records)))

        assert [diff.index for diff in report.differences] == [0, 1]

    def test_stop_at_first_difference(self, sample_records):
        other = [replace(r, description="changed") for r in sample_records]

        assert len(compare(sample_records, other).differences) == 2
        assert len(compare(sample_records, other, list_all_differences=False).differences) == 1

    def test_diff_records(self):
        left = Record("A100", 0, 1, "x")
        assert diff_records(left, left) == []
        assert [d.field for d in diff_records(left, Record("A101", 1, 1, "x"))] == [
            "account_id", "timestamp"
        ]

    def test_compare_across_formats(self, sample_records, sample_csv):
        """Test a CSV and a binary file carrying the same records are equal"""
        binary = encode(sample_records, "binary")
        assert compare_bytes(sample_csv, "csv", binary, "binary").equal

    def test_compare_files(self, tmp_path, sample_records, sample_csv):
        csv_path = tmp_path / "a.csv"
        text_path = tmp_path / "b.txt"
        csv_path.write_bytes(sample_csv)
        text_path.write_bytes(encode(sample_records[:1], "text"))

        report = compare_files(csv_path, "csv", text_path, "text")

        assert not report.equal
        assert report.format_text() == "Record count differs: file 1 has 2, file 2 has 1"
