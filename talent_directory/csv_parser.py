"""
CSV parsing and file reading for imports.
"""

import logging
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path

import pandas as pd
import requests

from .errors import FileError, ParseError

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"


@dataclass
class CsvRow:
    """One data row of a CSV file, keyed by header name in file order"""

    row_number: int
    values: dict[str, str] = field(default_factory=dict)

    def get(self, column: str) -> str:
        """Return the value for ``column``, or an empty string if absent"""
        return self.values.get(column, "")


@dataclass
class ParsedCsv:
    headers: list[str]
    rows: list[CsvRow]


def read_source(source: str | Path, timeout: int = 30) -> str:
    """
    Read the full text content of an import file.

    Args:
        source: Local file path or http(s) URL
        timeout: HTTP timeout in seconds

    Returns:
        File content as text

    Raises:
        FileError: If the source cannot be read
    """
    source_str = str(source)

    if source_str.startswith(("http://", "https://")):
        try:
            response = requests.get(source_str, timeout=timeout)
            response.raise_for_status()
            response.encoding = "utf-8"
            return response.text
        except requests.RequestException as e:
            raise FileError(f"Failed to read file from {source_str}: {e}") from e

    path = Path(source_str)
    if not path.exists() or not path.is_file():
        raise FileError(f"File not found: {path}")

    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Failed to read file {path}: {e}") from e


def parse_csv_text(text: str) -> ParsedCsv:
    """
    Tokenize CSV text into named rows.

    The first non-blank line is the header and fixes the number of fields
    per row. Quoted fields may contain commas, line breaks and doubled
    quotes. Rows shorter than the header are padded with empty strings and
    values past the header are dropped. Empty lines are skipped; a line of
    empty fields such as ``,,`` is a row.

    Raises:
        FileError: If the text is empty
        ParseError: If there is no header or a quoted field is never closed
    """
    if text is None or not text.strip():
        raise FileError("File is empty")

    body = text.lstrip(BYTE_ORDER_MARK).lstrip()
    read_options = dict(
        header=None,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        skip_blank_lines=True,
        engine="python",
    )

    try:
        header_count = len(pd.read_csv(StringIO(body), nrows=1, **read_options).columns)

        def truncate(fields: list[str]) -> list[str]:
            logger.warning(
                f"Ignoring {len(fields) - header_count} values past the header "
                f"in the row starting {fields[0]!r}"
            )
            return fields[:header_count]

        df = pd.read_csv(StringIO(body), on_bad_lines=truncate, **read_options)
    except pd.errors.EmptyDataError as e:
        raise ParseError("File has no header row") from e
    except pd.errors.ParserError as e:
        raise ParseError(f"Failed to parse file: {e}") from e

    table = [["" if pd.isna(value) else str(value) for value in line] for line in df.values.tolist()]
    headers = [header.strip() for header in table[0]]
    if not any(headers):
        raise ParseError("File has no header row")

    rows = [
        CsvRow(row_number=number, values=dict(zip(headers, line)))
        for number, line in enumerate(table[1:], start=1)
    ]

    logger.debug(f"Parsed {len(rows)} rows with columns {headers}")
    return ParsedCsv(headers=headers, rows=rows)


def parse_csv(text: str) -> list[CsvRow]:
    """Parse CSV text and return only the data rows"""
    return parse_csv_text(text).rows
