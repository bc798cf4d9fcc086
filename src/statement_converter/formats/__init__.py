"""Statement codecs for the supported on-disk formats"""

from .base import RecordCodec, FieldTransformer
from .csv_format import CSVCodec
from .text_format import TextCodec
from .binary_format import BinaryCodec

__all__ = ['RecordCodec', 'FieldTransformer', 'CSVCodec', 'TextCodec', 'BinaryCodec']
