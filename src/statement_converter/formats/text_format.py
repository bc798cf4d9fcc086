"""Fixed-width, labelled text codec."""

import logging
from typing import Dict, List

from .base import RecordCodec
from ..models.core import RECORD_SCHEMA, FieldSpec, Record, RecordFormat
from ..utils.errors import FieldTooLong, MalformedRecord, UnrepresentableValue


logger = logging.getLogger(__name__)


class TextCodec(RecordCodec):
    """Codec for human-readable fixed-width statements.

    One record per line. Each field is written as ``<Label>: <value>`` with
    the value padded to the width given by ``RECORD_SCHEMA`` (text fields
    left-aligned, amount right-aligned), fields separated by one space::

        Account: A100             Date: 2023-01-05T00:00:00Z Amount:           150.00 Description: Payment ...

    Whitespace rule: padding cannot be told apart from content, so trailing
    spaces of text fields do not survive a round trip. Comment lines
    (starting with ``#``) and blank lines are ignored on decode and never
    written. A ``\\r`` before the line break is dropped.
    """

    format = RecordFormat.TEXT
    COMMENT_PREFIX = '#'
    FIELD_SEPARATOR = ' '
    LABEL_SEPARATOR = ': '
    LINE_WIDTH = (
        sum(len(spec.label) + len(': ') + spec.width for spec in RECORD_SCHEMA)
        + len(RECORD_SCHEMA) - 1
    )

    def __init__(self):
        super().__init__()
        self.supported_extensions = ['.txt']

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions

    def decode(self, data: bytes) -> List[Record]:
        text = self.transformer.decode_utf8(data)

        records = []
        for line in text.split('\n'):
            if line.endswith('\r'):
                line = line[:-1]
            if not line.strip() or line.startswith(self.COMMENT_PREFIX):
                continue
            records.append(self._parse_line(line, len(records)))

        logger.debug(f"Decoded {len(records)} records from fixed-width text")
        return records

    def _parse_line(self, line: str, index: int) -> Record:
        if len(line) != self.LINE_WIDTH:
            raise MalformedRecord(
                f"Expected a line of {self.LINE_WIDTH} characters, got {len(line)}",
                index,
                raw_value=line
            )

        values: Dict[str, str] = {}
        offset = 0
        for position, spec in enumerate(RECORD_SCHEMA):
            if position:
                if line[offset] != self.FIELD_SEPARATOR:
                    raise MalformedRecord("Missing field separator", index, spec.name, line[offset])
                offset += len(self.FIELD_SEPARATOR)

            prefix = spec.label + self.LABEL_SEPARATOR
            found = line[offset:offset + len(prefix)]
            if found != prefix:
                raise MalformedRecord(f"Expected label '{spec.label}'", index, spec.name, found)
            offset += len(prefix)

            values[spec.name] = self._unpad(line[offset:offset + spec.width], spec)
            offset += spec.width

        return Record(
            account_id=self.transformer.check_account_id(values['account_id'], index),
            timestamp=self.transformer.parse_timestamp(values['timestamp'], index),
            amount=self.transformer.parse_amount(values['amount'], index),
            description=values['description'],
        )

    def _unpad(self, cell: str, spec: FieldSpec) -> str:
        if spec.align == 'right':
            return cell.lstrip(' ')
        return cell.rstrip(' ')

    def encode(self, records: List[Record]) -> bytes:
        lines = []
        for index, record in enumerate(records):
            values = {
                'account_id': record.account_id,
                'timestamp': self.transformer.format_timestamp(record.timestamp),
                'amount': self.transformer.format_amount(record.amount),
                'description': record.description,
            }
            if not values['account_id'].strip(' '):
                raise UnrepresentableValue("Blank account id cannot be padded", index, 'account_id')

            cells = [self._pad(values[spec.name], spec, index) for spec in RECORD_SCHEMA]
            line = self.FIELD_SEPARATOR.join(cells) + '\n'
            lines.append(self.transformer.encode_utf8(line, index))

        logger.debug(f"Encoded {len(records)} records to fixed-width text")
        return b''.join(lines)

    def _pad(self, value: str, spec: FieldSpec, index: int) -> str:
        if '\n' in value or '\r' in value:
            raise UnrepresentableValue("Line breaks are not allowed in text fields", index, spec.name, value)
        if len(value) > spec.width:
            raise FieldTooLong(
                f"Value has {len(value)} characters, {spec.label} allows {spec.width}",
                index, spec.name, value
            )

        padded = value.rjust(spec.width) if spec.align == 'right' else value.ljust(spec.width)
        return f"{spec.label}{self.LABEL_SEPARATOR}{padded}"
