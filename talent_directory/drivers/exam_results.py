"""
Exam result importer implementation.
"""

import logging

from ..csv_parser import CsvRow
from ..database import TalentStore
from ..errors import ReferenceNotFoundError
from ..factory import ImporterFactory
from ..interface import RecordImporter
from ..models import ExamResultRecord, ResultStatus
from ..validators import parse_date

logger = logging.getLogger(__name__)


@ImporterFactory.register("exam_results")
class ExamResultImporter(RecordImporter):
    """
    Importer for exam result rows.

    The candidate is looked up by email. The exam is found by title or
    created on first use.
    """

    required_columns = ("candidate_email", "exam_title", "score", "result_date")
    optional_columns = ("max_score", "result_status", "feedback")

    def __init__(self):
        super().__init__("exam_results", "Exam Results")

    def import_row(self, row: CsvRow, store: TalentStore) -> None:
        email = self.check_email("candidate_email", self.require(row, "candidate_email"))
        exam_title = self.require(row, "exam_title")
        score = self.check_integer("score", self.require(row, "score"), minimum=0)
        result_date = parse_date(self.check_date("result_date", self.require(row, "result_date")))

        max_score = 100
        raw_max_score = self.optional(row, "max_score")
        if raw_max_score is not None:
            max_score = self.check_integer("max_score", raw_max_score, minimum=1)

        result_status = ResultStatus.COMPLETED.value
        raw_status = self.optional(row, "result_status")
        if raw_status is not None:
            result_status = self.check_enum(
                "result_status", raw_status, [status.value for status in ResultStatus]
            )

        candidate = store.get_candidate_by_email(email)
        if candidate is None:
            raise ReferenceNotFoundError("Candidate", email, field="candidate_email")

        exam = store.find_or_create_exam(exam_title, exam_date=result_date, max_score=max_score)

        store.add_exam_result(
            ExamResultRecord(
                candidate_id=candidate.id,
                exam_id=exam.id,
                score=score,
                max_score=max_score,
                result_status=result_status,
                result_date=result_date,
                feedback=self.optional(row, "feedback"),
            )
        )
        logger.debug(f"Row {row.row_number}: imported {exam_title} result for {email}")
