"""CSV codec with a fixed header and positional column mapping."""

import csv
import io
import logging
from typing import List

from .base import RecordCodec
from ..models.core import FIELD_NAMES, Record, RecordFormat
from ..utils.errors import FieldTooLong, MalformedRecord, MissingHeader


logger = logging.getLogger(__name__)


class CSVCodec(RecordCodec):
    """Codec for comma-separated statements.

    Layout: UTF-8, header ``account_id,timestamp,amount,description`` on line
    0, one record per ``\\n``-terminated line. A field is quoted only when it
    contains a comma, a double quote, ``\\r`` or ``\\n``; embedded quotes are
    doubled. Fields are never trimmed.
    """

    format = RecordFormat.CSV
    DELIMITER = ','
    QUOTE_CHAR = '"'
    LINE_TERMINATOR = '\n'
    HEADERS = list(FIELD_NAMES)
    # Largest field the csv module accepts on every platform (C long)
    FIELD_SIZE_LIMIT = 2 ** 31 - 1

    def __init__(self):
        super().__init__()
        self.supported_extensions = ['.csv']

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions

    def decode(self, data: bytes) -> List[Record]:
        text = self.transformer.decode_utf8(data)
        if csv.field_size_limit() < self.FIELD_SIZE_LIMIT:
            csv.field_size_limit(self.FIELD_SIZE_LIMIT)
        reader = csv.reader(
            io.StringIO(text, newline=''),
            delimiter=self.DELIMITER,
            quotechar=self.QUOTE_CHAR,
            strict=True
        )

        try:
            header = next(reader, None)
        except csv.Error as e:
            raise MissingHeader(f"Unreadable CSV header ({e})") from e

        if header is None:
            raise MissingHeader("CSV input is empty, header line expected")
        if header != self.HEADERS:
            raise MissingHeader(
                f"Expected header {self.DELIMITER.join(self.HEADERS)}",
                raw_value=self.DELIMITER.join(header)
            )

        records = []
        try:
            for index, row in enumerate(reader):
                records.append(self._row_to_record(row, index))
        except csv.Error as e:
            raise MalformedRecord(f"Invalid CSV syntax ({e})", len(records)) from e

        logger.debug(f"Decoded {len(records)} records from CSV")
        return records

    def _row_to_record(self, row: List[str], index: int) -> Record:
        if len(row) != len(self.HEADERS):
            raise MalformedRecord(
                f"Expected {len(self.HEADERS)} fields, got {len(row)}",
                index,
                raw_value=self.DELIMITER.join(row)
            )

        account_id, timestamp, amount, description = row
        return Record(
            account_id=self.transformer.check_account_id(account_id, index),
            timestamp=self.transformer.parse_timestamp(timestamp, index),
            amount=self.transformer.parse_amount(amount, index),
            description=description,
        )

    def encode(self, records: List[Record]) -> bytes:
        # Lines are encoded one by one so a failure names its record
        lines = [self._format_line(self.HEADERS).encode('utf-8')]
        for index, record in enumerate(records):
            fields = [
                record.account_id,
                self.transformer.format_timestamp(record.timestamp),
                self.transformer.format_amount(record.amount),
                record.description,
            ]
            self._check_sizes(fields, index)
            line = self._format_line(fields)
            lines.append(self.transformer.encode_utf8(line, index))

        logger.debug(f"Encoded {len(records)} records to CSV")
        return b''.join(lines)

    def _check_sizes(self, fields: List[str], index: int) -> None:
        for name, value in zip(self.HEADERS, fields):
            if len(value) > self.FIELD_SIZE_LIMIT:
                raise FieldTooLong(
                    f"Value has {len(value)} characters, CSV fields allow {self.FIELD_SIZE_LIMIT}",
                    index, name
                )

    def _format_line(self, fields: List[str]) -> str:
        return self.DELIMITER.join(self._quote(value) for value in fields) + self.LINE_TERMINATOR

    def _quote(self, value: str) -> str:
        if any(ch in value for ch in (self.DELIMITER, self.QUOTE_CHAR, '\r', '\n')):
            doubled = value.replace(self.QUOTE_CHAR, self.QUOTE_CHAR * 2)
            return f"{self.QUOTE_CHAR}{doubled}{self.QUOTE_CHAR}"
        return value
