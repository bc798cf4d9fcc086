"""Compact binary codec with explicit big-endian layout."""

import logging
import struct
from typing import Any, Dict, List, Optional, Tuple

from .base import RecordCodec
from ..models.core import RECORD_SCHEMA, Record, RecordFormat
from ..utils.errors import FieldTooLong, MalformedRecord, TruncatedInput


logger = logging.getLogger(__name__)


COUNT = struct.Struct('>I')
FIELD_LAYOUTS = {spec.name: struct.Struct(spec.binary_format) for spec in RECORD_SCHEMA}


class BinaryCodec(RecordCodec):
    """Codec for the binary statement layout.

    All integers are big-endian::

        u32  record count
        per record, in RECORD_SCHEMA order:
          u16  account_id length, then that many UTF-8 bytes
          i64  timestamp, seconds since the epoch (UTC)
          i64  amount in minor units
          u32  description length, then that many UTF-8 bytes

    There is no magic number, version tag or padding. Bytes left over after
    the last declared record are rejected.
    """

    format = RecordFormat.BINARY

    def __init__(self):
        super().__init__()
        self.supported_extensions = ['.bin']

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions

    def decode(self, data: bytes) -> List[Record]:
        data = bytes(data)
        (count,), offset = self._unpack(COUNT, data, 0, None, 'record_count')

        records = []
        for index in range(count):
            record, offset = self._read_record(data, offset, index)
            records.append(record)

        if offset != len(data):
            raise MalformedRecord(
                f"{len(data) - offset} unexpected bytes after the last record"
            )

        logger.debug(f"Decoded {len(records)} records from binary")
        return records

    def _read_record(self, data: bytes, offset: int, index: int) -> Tuple[Record, int]:
        values: Dict[str, Any] = {}
        for spec in RECORD_SCHEMA:
            (value,), offset = self._unpack(FIELD_LAYOUTS[spec.name], data, offset, index, spec.name)
            if spec.kind == 'text':
                raw, offset = self._take(data, offset, value, index, spec.name)
                value = self.transformer.decode_utf8(raw, index, spec.name)
            values[spec.name] = value

        record = Record(
            account_id=self.transformer.check_account_id(values['account_id'], index),
            timestamp=self.transformer.check_timestamp(values['timestamp'], index),
            amount=values['amount'],
            description=values['description'],
        )
        return record, offset

    def _unpack(self, layout: struct.Struct, data: bytes, offset: int,
                index: Optional[int], field_name: str):
        if len(data) - offset < layout.size:
            raise TruncatedInput(
                f"Need {layout.size} bytes at offset {offset}, {len(data) - offset} left",
                index, field_name
            )
        return layout.unpack_from(data, offset), offset + layout.size

    def _take(self, data: bytes, offset: int, length: int, index: int, field_name: str):
        if len(data) - offset < length:
            raise TruncatedInput(
                f"Declared length {length} at offset {offset}, {len(data) - offset} bytes left",
                index, field_name
            )
        return data[offset:offset + length], offset + length

    def encode(self, records: List[Record]) -> bytes:
        if len(records) > self._max_value(COUNT):
            raise FieldTooLong("Too many records for a u32 count", None, 'record_count', len(records))

        chunks = [COUNT.pack(len(records))]
        for index, record in enumerate(records):
            for spec in RECORD_SCHEMA:
                layout = FIELD_LAYOUTS[spec.name]
                value = getattr(record, spec.name)
                if spec.kind != 'text':
                    chunks.append(layout.pack(value))
                    continue

                raw = self.transformer.encode_utf8(value, index, spec.name)
                if len(raw) > self._max_value(layout):
                    raise FieldTooLong(
                        f"Value is {len(raw)} bytes, at most {self._max_value(layout)} allowed",
                        index, spec.name
                    )
                chunks.append(layout.pack(len(raw)))
                chunks.append(raw)

        logger.debug(f"Encoded {len(records)} records to binary")
        return b''.join(chunks)

    @staticmethod
    def _max_value(layout: struct.Struct) -> int:
        """Largest value of an unsigned length prefix"""
        return 2 ** (8 * layout.size) - 1
