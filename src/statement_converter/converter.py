"""Conversion between statement formats.

Conversion is a straight decode with the source codec followed by an encode
with the target codec. Codec errors propagate unchanged.
"""

import logging
from pathlib import Path
from typing import List, Union

from .models.core import Record, RecordFormat
from .utils.codec_factory import get_codec


logger = logging.getLogger(__name__)


def decode(data: bytes, format_type: Union[str, RecordFormat]) -> List[Record]:
    """Decode a whole statement file held in memory"""
    return get_codec(format_type).decode(data)


def encode(records: List[Record], format_type: Union[str, RecordFormat]) -> bytes:
    """Encode records into a whole statement file"""
    return get_codec(format_type).encode(records)


def convert(data: bytes,
            source_format: Union[str, RecordFormat],
            target_format: Union[str, RecordFormat]) -> bytes:
    """Convert a statement from one format to another"""
    source = RecordFormat.parse(source_format)
    target = RecordFormat.parse(target_format)

    records = decode(data, source)
    output = encode(records, target)

    logger.debug(
        f"Converted {len(records)} records from {source.value} ({len(data)} bytes) "
        f"to {target.value} ({len(output)} bytes)"
    )
    return output


def read_records(file_path: Union[str, Path], format_type: Union[str, RecordFormat]) -> List[Record]:
    """Read and decode a statement file"""
    with open(file_path, 'rb') as f:
        data = f.read()
    return decode(data, format_type)


def convert_file(file_path: Union[str, Path],
                 source_format: Union[str, RecordFormat],
                 target_format: Union[str, RecordFormat]) -> bytes:
    """Read a statement file and return it converted to the target format"""
    with open(file_path, 'rb') as f:
        data = f.read()
    return convert(data, source_format, target_format)
