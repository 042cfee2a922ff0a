"""
Record Parser for the career dataset (raw CSV rows -> validated Records).

Column layout (0-based, header row skipped):
    2   Age
    4   Years of Experience
    7   Job Satisfaction
    10  Salary
    14  Family Influence        (None / Low / Medium / High)
    19  Professional Networks
    22  Likelihood to Change Occupation

A row is either accepted whole or rejected whole. Rejected rows are
counted and logged, never partially kept.
"""

import csv
import itertools
import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from io import StringIO
from typing import Dict, Iterable, Iterator, List, Sequence, Union


logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORDS = 20_000
MIN_COLUMNS = 23

# Plain decimal with optional exponent, ASCII digits only
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

COLUMN_INDEX: Dict[str, int] = {
    'age': 2,
    'years_of_experience': 4,
    'job_satisfaction': 7,
    'salary': 10,
    'family_influence': 14,
    'professional_network_size': 19,
    'likelihood_to_change_occupation': 22,
}

FAMILY_INFLUENCE_CODES: Dict[str, float] = {
    'None': 0.0,
    'Low': 1.0,
    'Medium': 2.0,
    'High': 3.0,
}


class IngestionError(Exception):
    """Raised when the data source cannot be read at all."""
    pass


class ParseFailureKind(Enum):
    SHORT_RECORD = "short_record"
    INVALID_NUMBER = "invalid_number"
    INVALID_FAMILY_INFLUENCE = "invalid_family_influence"


@dataclass(frozen=True)
class Record:
    """One fully-valid individual observation."""
    id: int
    age: float
    years_of_experience: float
    job_satisfaction: float
    professional_network_size: float
    family_influence: float
    salary: float
    likelihood_to_change_occupation: float


@dataclass(frozen=True)
class ParseFailure:
    row_index: int
    kind: ParseFailureKind
    detail: str


@dataclass
class ParseResult:
    records: List[Record] = field(default_factory=list)
    failures: List[ParseFailure] = field(default_factory=list)
    rows_read: int = 0

    @property
    def failure_count(self) -> int:
        return len(self.failures)


def decode_family_influence(text: str) -> float:
    """Map None/Low/Medium/High to 0/1/2/3; anything else is a ValueError."""
    value = text.strip()
    if value not in FAMILY_INFLUENCE_CODES:
        raise ValueError(f"Invalid Family Influence value: {text!r}")
    return FAMILY_INFLUENCE_CODES[value]


def _parse_number(text: str) -> float:
    stripped = text.strip()
    if not NUMBER_PATTERN.fullmatch(stripped):
        raise ValueError(f"Not a decimal number: {text!r}")
    value = float(stripped)
    if not math.isfinite(value):
        raise ValueError(f"Non-finite value: {text!r}")
    return value


def parse_row(index: int, row: Sequence[str]) -> Union[Record, ParseFailure]:
    """Convert one tokenized row into a Record, or describe why it was rejected."""
    if len(row) < MIN_COLUMNS:
        return ParseFailure(
            index,
            ParseFailureKind.SHORT_RECORD,
            f"expected at least {MIN_COLUMNS} columns, got {len(row)}"
        )

    try:
        family_influence = decode_family_influence(row[COLUMN_INDEX['family_influence']])
    except ValueError as e:
        return ParseFailure(index, ParseFailureKind.INVALID_FAMILY_INFLUENCE, str(e))

    values = {}
    for name, column in COLUMN_INDEX.items():
        if name == 'family_influence':
            continue
        try:
            values[name] = _parse_number(row[column])
        except ValueError:
            return ParseFailure(
                index,
                ParseFailureKind.INVALID_NUMBER,
                f"column {column} ({name}): {row[column]!r}"
            )

    return Record(id=index, family_influence=family_influence, **values)


def iter_records(
    rows: Iterable[Sequence[str]],
    max_records: int = DEFAULT_MAX_RECORDS
) -> Iterator[Union[Record, ParseFailure]]:
    """Lazily parse data rows (header already removed), stopping at max_records rows."""
    # islice stops before the row past the cap is ever read
    for index, row in enumerate(itertools.islice(rows, max_records)):
        yield parse_row(index, row)


def parse_rows(
    rows: Iterable[Sequence[str]],
    max_records: int = DEFAULT_MAX_RECORDS
) -> ParseResult:
    """Materialize parsed rows into records plus the list of rejected rows"""
    result = ParseResult()

    try:
        for item in iter_records(rows, max_records):
            result.rows_read += 1
            if isinstance(item, Record):
                result.records.append(item)
                continue

            result.failures.append(item)
            if item.kind is ParseFailureKind.SHORT_RECORD:
                logger.warning("Short record at index %d: %s", item.row_index, item.detail)
            else:
                logger.warning("Could not parse data for record %d: %s", item.row_index, item.detail)
    except csv.Error as e:
        raise IngestionError(f"Malformed CSV after row {result.rows_read}: {e}") from e

    logger.info(
        "Parsed %d rows: %d records, %d parse errors",
        result.rows_read, len(result.records), result.failure_count
    )
    return result


def _data_rows(reader: Iterator[List[str]]) -> Iterator[List[str]]:
    rows = (row for row in reader if row)  # blank lines are not records
    next(rows, None)  # header
    return rows


def parse_csv_string(content: str, max_records: int = DEFAULT_MAX_RECORDS) -> ParseResult:
    """Parse CSV text with a header row"""
    return parse_rows(_data_rows(csv.reader(StringIO(content))), max_records)


def read_dataset(filepath: str, max_records: int = DEFAULT_MAX_RECORDS) -> ParseResult:
    """
    Read and parse a CSV file.

    Raises:
        IngestionError: If the file cannot be opened or read
    """
    try:
        with open(filepath, 'r', encoding='utf-8', newline='') as f:
            return parse_rows(_data_rows(csv.reader(f)), max_records)
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"Cannot read dataset {filepath}: {e}") from e


__all__ = [
    "Record",
    "ParseFailure",
    "ParseFailureKind",
    "ParseResult",
    "IngestionError",
    "COLUMN_INDEX",
    "FAMILY_INFLUENCE_CODES",
    "decode_family_influence",
    "parse_row",
    "iter_records",
    "parse_rows",
    "parse_csv_string",
    "read_dataset",
]
