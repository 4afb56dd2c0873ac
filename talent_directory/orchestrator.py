"""
Import orchestration: parse a file and run its importer over every row.
"""

import logging
from pathlib import Path

from .csv_parser import CsvRow, parse_csv_text, read_source
from .database import TalentStore
from .errors import RowImportError
from .factory import ImporterFactory
from .interface import ImportSummary, RecordImporter, RowResult

logger = logging.getLogger(__name__)


def import_rows(
    importer: RecordImporter, rows: list[CsvRow], store: TalentStore
) -> ImportSummary:
    """
    Import parsed rows one at a time, in file order.

    Rows run sequentially so that exams and surveys created by earlier rows
    are visible to later ones. A row-level error is recorded and the batch
    continues; file-level and store-unavailable errors propagate.
    """
    summary = ImportSummary(import_type=importer.import_type)

    for row in rows:
        try:
            importer.import_row(row, store)
        except RowImportError as e:
            result = RowResult.failure(row.row_number, e)
            logger.warning(result.message)
        else:
            result = RowResult.success(row.row_number)
        summary.results.append(result)

    logger.info(
        f"Imported {summary.imported} {importer.import_type} rows with {summary.errors} errors"
    )
    return summary


def import_text(text: str, import_type: str, store: TalentStore) -> ImportSummary:
    """Parse CSV text and import it as ``import_type``"""
    importer = ImporterFactory.create(import_type)
    parsed = parse_csv_text(text)

    missing = importer.missing_columns(parsed.headers)
    if missing:
        logger.warning(f"Missing required columns for {import_type}: {', '.join(missing)}")

    return import_rows(importer, parsed.rows, store)


def import_file(
    source: str | Path, import_type: str, store: TalentStore, timeout: int = 30
) -> ImportSummary:
    """
    Import a CSV file or URL into the store.

    Args:
        source: Local file path or http(s) URL
        import_type: One of the registered import types
        store: Record store to write to
        timeout: HTTP timeout in seconds for URL sources

    Returns:
        ImportSummary with per-row results

    Raises:
        FileError: If the file is missing, unreadable, empty or unparseable
        ValueError: If ``import_type`` is not registered
    """
    ImporterFactory.create(import_type)
    logger.info(f"Importing {import_type} from {source}")
    text = read_source(source, timeout=timeout)
    return import_text(text, import_type, store)


def preview_file(source: str | Path, limit: int = 5, timeout: int = 30) -> list[dict[str, str]]:
    """Return the first ``limit`` rows of a file without touching the store"""
    parsed = parse_csv_text(read_source(source, timeout=timeout))
    return [dict(row.values) for row in parsed.rows[:limit]]
