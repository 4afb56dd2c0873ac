"""
Interface definitions for record importers.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field

from .csv_parser import CsvRow
from .database import TalentStore
from .errors import MissingFieldError, RowImportError, ValidationError
from .validators import (
    is_integer,
    is_valid_date,
    is_valid_email,
    matches_enum,
)

logger = logging.getLogger(__name__)


@dataclass
class RowResult:
    """
    Outcome of importing one row: ``ok`` with no error, or not ``ok`` with
    the row-level error that stopped it.
    """

    row_number: int
    ok: bool
    error: RowImportError | None = None

    @classmethod
    def success(cls, row_number: int) -> "RowResult":
        return cls(row_number=row_number, ok=True)

    @classmethod
    def failure(cls, row_number: int, error: RowImportError) -> "RowResult":
        return cls(row_number=row_number, ok=False, error=error)

    @property
    def message(self) -> str | None:
        if self.error is None:
            return None
        return f"Row {self.row_number}: {self.error.message}"


@dataclass
class ImportSummary:
    """Result of an import batch"""

    import_type: str
    results: list[RowResult] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def errors(self) -> int:
        return sum(1 for result in self.results if not result.ok)

    @property
    def error_details(self) -> list[str]:
        return [result.message for result in self.results if not result.ok]

    @property
    def total_records(self) -> int:
        return len(self.results)

    @property
    def message(self) -> str:
        return f"Successfully imported {self.imported} records. {self.errors} errors."


class RecordImporter(ABC):
    """
    Abstract base class for CSV record importers.

    Each import type (candidates, exam results, survey responses) implements
    this interface. ``import_row`` validates the whole row before touching
    the store, so an invalid row never causes a partial write.
    """

    required_columns: tuple[str, ...] = ()
    optional_columns: tuple[str, ...] = ()

    def __init__(self, import_type: str, label: str):
        self.import_type = import_type
        self.label = label

    @property
    def columns(self) -> tuple[str, ...]:
        return self.required_columns + self.optional_columns

    def missing_columns(self, headers: Iterable[str]) -> list[str]:
        """Return required columns absent from ``headers``"""
        present = set(headers)
        return [column for column in self.required_columns if column not in present]

    @abstractmethod
    def import_row(self, row: CsvRow, store: TalentStore) -> None:
        """
        Validate one row, resolve its references and write it to the store.

        Raises:
            RowImportError: If the row cannot be imported
        """

    # Validation helpers

    @staticmethod
    def require(row: CsvRow, column: str) -> str:
        """Return the trimmed value of a required column"""
        value = row.get(column).strip()
        if not value:
            raise MissingFieldError(column)
        return value

    @staticmethod
    def optional(row: CsvRow, column: str) -> str | None:
        """Return the trimmed value of an optional column, or None if blank"""
        value = row.get(column).strip()
        return value or None

    @staticmethod
    def check_email(column: str, value: str) -> str:
        if not is_valid_email(value):
            raise ValidationError(column, value, "an email address like name@example.com")
        return value.lower()

    @staticmethod
    def check_integer(column: str, value: str, minimum: int | None = None, maximum: int | None = None) -> int:
        if not is_integer(value):
            raise ValidationError(column, value, "a whole number")
        number = int(value)
        if (minimum is not None and number < minimum) or (maximum is not None and number > maximum):
            bounds = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
            raise ValidationError(column, value, f"a whole number {bounds}")
        return number

    @staticmethod
    def check_date(column: str, value: str) -> str:
        if not is_valid_date(value):
            raise ValidationError(column, value, "a date like 2025-01-15")
        return value

    @staticmethod
    def check_enum(column: str, value: str, allowed: Iterable[str]) -> str:
        options = [str(option) for option in allowed]
        if not matches_enum(value, options):
            raise ValidationError(column, value, f"one of {', '.join(options)}")
        return value.lower()
