"""Shared fixtures for the statement converter tests."""

from datetime import datetime, timezone

import pytest

from statement_converter.models.core import Record


# 2023-01-05T00:00:00Z and 2023-01-06T00:00:00Z
JAN_5_2023 = 1672876800
JAN_6_2023 = 1672963200

SAMPLE_CSV = (
    b"account_id,timestamp,amount,description\n"
    b"A100,2023-01-05T00:00:00Z,150.00,Payment\n"
    b"A100,2023-01-06T00:00:00Z,-20.00,Refund\n"
)


@pytest.fixture
def sample_records():
    """The two-line statement used throughout the tests"""
    return [
        Record("A100", JAN_5_2023, 15000, "Payment"),
        Record("A100", JAN_6_2023, -2000, "Refund"),
    ]


@pytest.fixture
def awkward_records():
    """Records exercising quoting, unicode and extreme values"""
    return [
        Record("ACC-1", 0, 0, ""),
        Record("ACC-2", JAN_5_2023, -5, 'Payment for services, invoice "#123"'),
        Record("Café", timestamp_of(1999, 12, 31, 23, 59, 59), 123456789, "Miete Müller"),
        Record("ACC-4", -62135596800, -(2 ** 63), "min"),
        Record("ACC-5", 253402300799, 2 ** 63 - 1, "max"),
    ]


def timestamp_of(*parts) -> int:
    return int(datetime(*parts, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def sample_csv():
    """CSV bytes of ``sample_records``"""
    return SAMPLE_CSV
