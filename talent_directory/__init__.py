"""
Talent Directory

CSV import/export and profile transformation for a talent directory of
candidates, cohorts, exam results and survey feedback.
"""

from .database import TalentStore
from .drivers import CandidateImporter, ExamResultImporter, SurveyResponseImporter
from .errors import (
    DuplicateError,
    FileError,
    MissingFieldError,
    ParseError,
    ReferenceNotFoundError,
    RowImportError,
    StoreError,
    StoreUnavailableError,
    TalentDirectoryError,
    ValidationError,
)
from .factory import ImporterFactory
from .interface import ImportSummary, RecordImporter, RowResult

__all__ = [
    "TalentStore",
    "RecordImporter",
    "ImportSummary",
    "RowResult",
    "ImporterFactory",
    "CandidateImporter",
    "ExamResultImporter",
    "SurveyResponseImporter",
    "TalentDirectoryError",
    "FileError",
    "ParseError",
    "RowImportError",
    "MissingFieldError",
    "ValidationError",
    "ReferenceNotFoundError",
    "DuplicateError",
    "StoreError",
    "StoreUnavailableError",
]
