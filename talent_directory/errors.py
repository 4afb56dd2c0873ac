"""
Exception hierarchy for the talent directory import/export system.

File-level errors abort a whole import batch. Row-level errors only affect
the row that raised them and are collected by the orchestrator.
"""


class TalentDirectoryError(Exception):
    """Base class for all talent directory errors"""


class FileError(TalentDirectoryError):
    """The import file is empty, unreadable or has no header row"""


class ParseError(FileError):
    """The CSV text cannot be tokenized"""


class StoreUnavailableError(TalentDirectoryError):
    """The record store cannot be reached; fatal to the batch"""


class RowImportError(TalentDirectoryError):
    """
    Base class for recoverable, row-level import failures.

    Attributes:
        field: Name of the offending column, if any
        value: The offending raw value, if any
    """

    def __init__(self, message: str, field: str | None = None, value: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class MissingFieldError(RowImportError):
    """A required column is blank"""

    def __init__(self, field: str):
        super().__init__(f"Missing required field '{field}'", field=field)


class ValidationError(RowImportError):
    """A present value fails its format or enum check"""

    def __init__(self, field: str, value: str, expected: str):
        super().__init__(
            f"Invalid {field} '{value}': expected {expected}", field=field, value=value
        )
        self.expected = expected


class ReferenceNotFoundError(RowImportError):
    """A referenced entity does not exist in the store"""

    def __init__(self, entity: str, key: str, field: str | None = None):
        super().__init__(f"{entity} not found: {key}", field=field, value=key)
        self.entity = entity


class DuplicateError(RowImportError):
    """A unique constraint would be violated"""


class StoreError(RowImportError):
    """The store rejected a write for this row"""
