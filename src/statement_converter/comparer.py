"""Semantic comparison of two statements.

Both sides are decoded into canonical records first, so statements in
different formats compare equal when they carry the same transactions.
Records are matched by position.
"""

import logging
from pathlib import Path
from typing import List, Union

from .converter import decode, read_records
from .models.core import (
    FIELD_NAMES,
    ComparisonReport,
    FieldDifference,
    Record,
    RecordDifference,
    RecordFormat,
)


logger = logging.getLogger(__name__)


def diff_records(left: Record, right: Record) -> List[FieldDifference]:
    """List the fields whose canonical values differ"""
    differences = []
    for name in FIELD_NAMES:
        left_value = getattr(left, name)
        right_value = getattr(right, name)
        if left_value != right_value:
            differences.append(FieldDifference(name, left_value, right_value))
    return differences


def compare(left: List[Record],
            right: List[Record],
            list_all_differences: bool = True) -> ComparisonReport:
    """
    Compare two record sequences position by position

    Args:
        left: Records of the first statement
        right: Records of the second statement
        list_all_differences: Report every differing index instead of
            stopping at the first one

    Returns:
        ComparisonReport with the length check and per-index differences
        over the positions both sequences share
    """
    report = ComparisonReport(left_count=len(left), right_count=len(right))

    for index, (left_record, right_record) in enumerate(zip(left, right)):
        if left_record == right_record:
            continue
        report.differences.append(
            RecordDifference(index, diff_records(left_record, right_record))
        )
        if not list_all_differences:
            break

    logger.debug(
        f"Compared {len(left)} and {len(right)} records, "
        f"{len(report.differences)} differing positions"
    )
    return report


def compare_bytes(left_data: bytes,
                  left_format: Union[str, RecordFormat],
                  right_data: bytes,
                  right_format: Union[str, RecordFormat],
                  list_all_differences: bool = True) -> ComparisonReport:
    """Decode two in-memory statements independently and compare them"""
    return compare(
        decode(left_data, left_format),
        decode(right_data, right_format),
        list_all_differences
    )


def compare_files(left_path: Union[str, Path],
                  left_format: Union[str, RecordFormat],
                  right_path: Union[str, Path],
                  right_format: Union[str, RecordFormat],
                  list_all_differences: bool = True) -> ComparisonReport:
    """Read, decode and compare two statement files"""
    return compare(
        read_records(left_path, left_format),
        read_records(right_path, right_format),
        list_all_differences
    )
