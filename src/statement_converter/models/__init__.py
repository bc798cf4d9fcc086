"""Data models and structures"""

from .core import (
    ComparisonReport,
    ConverterConfig,
    FieldDifference,
    FieldSpec,
    RECORD_SCHEMA,
    Record,
    RecordDifference,
    RecordFormat,
    RecordSequence,
)

__all__ = [
    'ComparisonReport',
    'ConverterConfig',
    'FieldDifference',
    'FieldSpec',
    'RECORD_SCHEMA',
    'Record',
    'RecordDifference',
    'RecordFormat',
    'RecordSequence',
]
