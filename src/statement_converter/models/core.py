"""Core data models for the statement converter."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import List, Dict, Any, Optional

from ..utils.errors import UnknownFormat


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# 0001-01-01T00:00:00Z .. 9999-12-31T23:59:59Z
MIN_TIMESTAMP = -62135596800
MAX_TIMESTAMP = 253402300799

MIN_AMOUNT = -(2 ** 63)
MAX_AMOUNT = 2 ** 63 - 1


class RecordFormat(Enum):
    """Supported on-disk statement formats"""
    BINARY = "binary"
    TEXT = "text"
    CSV = "csv"

    @classmethod
    def parse(cls, value) -> 'RecordFormat':
        """Resolve a format tag (case-insensitive) or raise UnknownFormat"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownFormat(str(value)) from None

    @classmethod
    def names(cls) -> List[str]:
        return [fmt.value for fmt in cls]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldSpec:
    """Layout of one record field, shared by every codec.

    Attributes:
        name: Canonical field name, also the CSV header column
        label: Label written in front of the value in fixed-width text
        width: Width of the value in fixed-width text, in characters
        align: "left" for text fields, "right" for numeric fields
        kind: "text" for strings, "integer" for 64-bit signed integers
        binary_format: struct format of the binary field; for text fields
            it is the length prefix in front of the UTF-8 bytes
    """
    name: str
    label: str
    width: int
    align: str = "left"
    kind: str = "text"
    binary_format: str = ">I"


# Canonical column order. CSV header, fixed-text layout and binary field
# order are all derived from this tuple.
RECORD_SCHEMA = (
    FieldSpec("account_id", "Account", 16, "left", "text", ">H"),
    FieldSpec("timestamp", "Date", 20, "left", "integer", ">q"),
    FieldSpec("amount", "Amount", 16, "right", "integer", ">q"),
    FieldSpec("description", "Description", 40, "left", "text", ">I"),
)

FIELD_NAMES = tuple(spec.name for spec in RECORD_SCHEMA)


def _check_int(name: str, value: Any, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not low <= value <= high:
        raise ValueError(f"{name} {value} outside supported range [{low}, {high}]")


@dataclass(frozen=True)
class Record:
    """Format-independent statement line.

    Attributes:
        account_id: Account identifier, never empty
        timestamp: Seconds since 1970-01-01T00:00:00Z
        amount: Signed amount in minor units (cents)
        description: Free text, may be empty

    All amounts share one implicit currency.
    """
    account_id: str
    timestamp: int
    amount: int
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.account_id, str):
            raise TypeError("account_id must be a string")
        if not self.account_id:
            raise ValueError("account_id cannot be empty")
        _check_int("timestamp", self.timestamp, MIN_TIMESTAMP, MAX_TIMESTAMP)
        _check_int("amount", self.amount, MIN_AMOUNT, MAX_AMOUNT)
        if not isinstance(self.description, str):
            raise TypeError("description must be a string")

    @classmethod
    def from_datetime(cls, account_id: str, when, amount: int, description: str = "") -> 'Record':
        """Build a record from a date or datetime (naive values are taken as UTC)"""
        return cls(account_id, timestamp_from_datetime(when), amount, description)

    @property
    def posted_at(self) -> datetime:
        return EPOCH + timedelta(seconds=self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'account_id': self.account_id,
            'timestamp': self.timestamp,
            'amount': self.amount,
            'description': self.description,
        }


RecordSequence = List[Record]


def timestamp_from_datetime(when) -> int:
    """Convert a date/datetime to whole seconds since the epoch"""
    if isinstance(when, datetime):
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
    elif isinstance(when, date):
        when = datetime(when.year, when.month, when.day, tzinfo=timezone.utc)
    else:
        raise TypeError(f"Expected date or datetime, got {type(when).__name__}")
    return (when - EPOCH) // timedelta(seconds=1)


@dataclass(frozen=True)
class FieldDifference:
    """One field that differs between two records at the same position"""
    field: str
    left: Any
    right: Any


@dataclass(frozen=True)
class RecordDifference:
    """All differing fields of the records at one index"""
    index: int
    fields: List[FieldDifference]

    @property
    def field_names(self) -> List[str]:
        return [diff.field for diff in self.fields]


@dataclass
class ComparisonReport:
    """Result of comparing two record sequences"""
    left_count: int
    right_count: int
    differences: List[RecordDifference] = field(default_factory=list)

    @property
    def length_mismatch(self) -> bool:
        return self.left_count != self.right_count

    @property
    def equal(self) -> bool:
        return not self.length_mismatch and not self.differences

    @property
    def first_difference_index(self) -> Optional[int]:
        """Index of the first differing record, or of the first unmatched one"""
        if self.differences:
            return self.differences[0].index
        if self.length_mismatch:
            return min(self.left_count, self.right_count)
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'equal': self.equal,
            'left_count': self.left_count,
            'right_count': self.right_count,
            'length_mismatch': self.length_mismatch,
            'first_difference_index': self.first_difference_index,
            'differences': [
                {
                    'index': diff.index,
                    'fields': [
                        {'field': f.field, 'left': f.left, 'right': f.right}
                        for f in diff.fields
                    ],
                }
                for diff in self.differences
            ],
        }

    def format_text(self) -> str:
        """Human-readable report, one line per finding"""
        if self.equal:
            return f"Statements are identical ({self.left_count} records)"

        lines = []
        if self.length_mismatch:
            lines.append(
                f"Record count differs: file 1 has {self.left_count}, "
                f"file 2 has {self.right_count}"
            )
        for diff in self.differences:
            details = ", ".join(
                f"{f.field}: {f.left!r} != {f.right!r}" for f in diff.fields
            )
            lines.append(f"Record {diff.index} differs ({details})")
        return "\n".join(lines)


@dataclass
class ConverterConfig:
    """Configuration for converter and comparer behavior"""
    log_directory: Optional[str] = None
    log_level: str = "INFO"
    default_input_format: Optional[str] = None
    default_output_format: Optional[str] = None
    report_format: str = "text"
    list_all_differences: bool = True

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        # Format tags are resolved eagerly so a typo fails at load time
        if self.default_input_format is not None:
            self.default_input_format = RecordFormat.parse(self.default_input_format).value
        if self.default_output_format is not None:
            self.default_output_format = RecordFormat.parse(self.default_output_format).value
