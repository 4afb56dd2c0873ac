"""
Candidate profile importer implementation.
"""

import logging

from ..csv_parser import CsvRow
from ..database import TalentStore
from ..errors import ReferenceNotFoundError
from ..factory import ImporterFactory
from ..interface import RecordImporter
from ..models import CandidateRecord, SkillLevel
from ..validators import is_truthy

logger = logging.getLogger(__name__)

URL_COLUMNS = ("linkedin_url", "github_url", "portfolio_url", "resume_url", "photo_url")


@ImporterFactory.register("candidates")
class CandidateImporter(RecordImporter):
    """
    Importer for candidate profile rows.

    Emails are lower-cased and must be unique. A ``cohort_name`` must name
    an existing cohort; the candidate is then enrolled in it.
    """

    required_columns = ("full_name", "email")
    optional_columns = (
        "phone",
        *URL_COLUMNS,
        "role",
        "skill_level",
        "is_public",
        "cohort_name",
    )

    def __init__(self):
        super().__init__("candidates", "Candidate Profiles")

    def import_row(self, row: CsvRow, store: TalentStore) -> None:
        full_name = self.require(row, "full_name")
        email = self.check_email("email", self.require(row, "email"))

        skill_level = self.optional(row, "skill_level")
        if skill_level is not None:
            skill_level = self.check_enum(
                "skill_level", skill_level, [level.value for level in SkillLevel]
            )

        cohort_id = None
        cohort_name = self.optional(row, "cohort_name")
        if cohort_name is not None:
            cohort = store.get_cohort_by_name(cohort_name)
            if cohort is None:
                raise ReferenceNotFoundError("Cohort", cohort_name, field="cohort_name")
            cohort_id = cohort.id

        candidate = CandidateRecord(
            full_name=full_name,
            email=email,
            phone=self.optional(row, "phone"),
            role=self.optional(row, "role"),
            skill_level=skill_level,
            is_public=is_truthy(row.get("is_public")),
            **{column: self.optional(row, column) for column in URL_COLUMNS},
        )

        store.create_candidate(candidate, cohort_id=cohort_id)
        logger.debug(f"Row {row.row_number}: imported candidate {email}")
