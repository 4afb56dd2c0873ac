"""
Drivers module for the different import types.

Each driver implements the RecordImporter interface for one CSV layout:
candidate profiles, exam results and survey responses.
"""

from .candidates import CandidateImporter
from .exam_results import ExamResultImporter
from .survey_responses import SurveyResponseImporter

__all__ = [
    "CandidateImporter",
    "ExamResultImporter",
    "SurveyResponseImporter",
]
