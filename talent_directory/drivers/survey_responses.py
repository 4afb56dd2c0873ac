"""
Survey response importer implementation.
"""

import logging
from datetime import timezone

from ..csv_parser import CsvRow
from ..database import TalentStore
from ..errors import ReferenceNotFoundError
from ..factory import ImporterFactory
from ..interface import RecordImporter
from ..models import SurveyResponseRecord, SurveyType, utcnow
from ..validators import parse_datetime

logger = logging.getLogger(__name__)

MAX_RATING = 5


@ImporterFactory.register("survey_responses")
class SurveyResponseImporter(RecordImporter):
    """
    Importer for survey response rows.

    Responses are attached to a survey titled ``"<survey_type> Survey"``,
    created on first use.
    """

    required_columns = ("candidate_email", "survey_type", "rating")
    optional_columns = ("feedback", "reviewer_name", "submitted_at")

    def __init__(self):
        super().__init__("survey_responses", "Survey Results")

    def import_row(self, row: CsvRow, store: TalentStore) -> None:
        email = self.check_email("candidate_email", self.require(row, "candidate_email"))
        survey_type = self.check_enum(
            "survey_type",
            self.require(row, "survey_type"),
            [survey_type.value for survey_type in SurveyType],
        )
        rating = self.check_integer(
            "rating", self.require(row, "rating"), minimum=1, maximum=MAX_RATING
        )

        submitted_at = utcnow()
        raw_submitted_at = self.optional(row, "submitted_at")
        if raw_submitted_at is not None:
            submitted_at = parse_datetime(self.check_date("submitted_at", raw_submitted_at))
            if submitted_at.tzinfo is not None:
                submitted_at = submitted_at.astimezone(timezone.utc)

        candidate = store.get_candidate_by_email(email)
        if candidate is None:
            raise ReferenceNotFoundError("Candidate", email, field="candidate_email")

        survey = store.find_or_create_survey(
            f"{survey_type} Survey", survey_type, max_rating=MAX_RATING
        )

        store.add_survey_response(
            SurveyResponseRecord(
                candidate_id=candidate.id,
                survey_id=survey.id,
                rating=rating,
                feedback=self.optional(row, "feedback"),
                reviewer_name=self.optional(row, "reviewer_name"),
                submitted_at=submitted_at,
            )
        )
        logger.debug(f"Row {row.row_number}: imported {survey_type} survey response for {email}")
