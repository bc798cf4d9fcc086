"""Bank statement converter: CSV, fixed-width text and binary codecs."""

__version__ = "0.1.0"

from .models.core import Record, RecordFormat, ComparisonReport
from .converter import decode, encode, convert
from .comparer import compare

__all__ = [
    '__version__',
    'Record',
    'RecordFormat',
    'ComparisonReport',
    'decode',
    'encode',
    'convert',
    'compare',
]
