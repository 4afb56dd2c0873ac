"""
Database operations for the talent directory record store.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from .errors import DuplicateError, StoreError, StoreUnavailableError
from .models import (
    CandidateCohortLink,
    CandidateEventLink,
    CandidateRecord,
    CertificateRecord,
    ChallengeRecord,
    ChallengeResultRecord,
    CohortRecord,
    CompletionStatus,
    EventRecord,
    ExamRecord,
    ExamResultRecord,
    SurveyRecord,
    SurveyResponseRecord,
    create_database_engine,
    create_tables,
    utcnow,
)

logger = logging.getLogger(__name__)

EXPORTABLE_TABLES = ("candidates", "cohorts", "exams", "surveys", "events", "certificates")


class TalentStore:
    """
    Record store client for candidates and their related records.

    A store is constructed explicitly and handed to every importer and
    service that needs it.
    """

    def __init__(self, db_path: str = "talent.db", engine=None):
        self.db_path = db_path
        self.engine = engine if engine is not None else create_database_engine(db_path)
        with self._store_errors("create tables"):
            create_tables(self.engine)

    def database_exists(self) -> bool:
        """Check if database file exists"""
        return Path(self.db_path).exists()

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        """Translate SQLAlchemy errors raised while performing ``action``"""
        try:
            yield
        except IntegrityError as e:
            if "UNIQUE" in str(e.orig).upper():
                raise DuplicateError(f"Duplicate {action}") from e
            raise StoreError(f"Failed to {action}: {e.orig}") from e
        except OperationalError as e:
            raise StoreUnavailableError(f"Record store unavailable: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to {action}: {e}") from e

    def _insert(self, record: SQLModel, action: str) -> SQLModel:
        with self._store_errors(action):
            with self._session() as session:
                session.add(record)
                session.commit()
                session.refresh(record)
        return record

    def _first(self, statement):
        with self._store_errors("read records"):
            with self._session() as session:
                return session.exec(statement).first()

    def _all(self, statement) -> list:
        with self._store_errors("read records"):
            with self._session() as session:
                return list(session.exec(statement).all())

    # Candidates

    def get_candidate(self, candidate_id: int) -> CandidateRecord | None:
        with self._store_errors("read candidate"):
            with self._session() as session:
                return session.get(CandidateRecord, candidate_id)

    def get_candidate_by_email(self, email: str) -> CandidateRecord | None:
        logger.debug(f"Looking up candidate by email {email}")
        return self._first(
            select(CandidateRecord).where(CandidateRecord.email == email.strip().lower())
        )

    def list_candidates(self, public_only: bool = False) -> list[CandidateRecord]:
        statement = select(CandidateRecord).order_by(CandidateRecord.created_at.desc())
        if public_only:
            statement = statement.where(CandidateRecord.is_public == True)  # noqa: E712
        return self._all(statement)

    def count_candidates(self) -> int:
        return len(self._all(select(CandidateRecord.id)))

    def create_candidate(
        self,
        candidate: CandidateRecord,
        cohort_id: int | None = None,
        enrollment_date: date | None = None,
    ) -> CandidateRecord:
        """
        Create a candidate, optionally enrolling them in a cohort.

        The candidate and its cohort association are written in one
        transaction; neither is kept if either write fails.

        Raises:
            DuplicateError: If a candidate with the same email exists
        """
        candidate.email = candidate.email.strip().lower()
        if self.get_candidate_by_email(candidate.email) is not None:
            raise DuplicateError(
                f"Candidate with email {candidate.email} already exists",
                field="email",
                value=candidate.email,
            )

        try:
            with self._store_errors(f"candidate {candidate.email}"):
                with self._session() as session:
                    session.add(candidate)
                    session.flush()
                    if cohort_id is not None:
                        session.add(
                            CandidateCohortLink(
                                candidate_id=candidate.id,
                                cohort_id=cohort_id,
                                enrollment_date=enrollment_date or date.today(),
                                completion_status=CompletionStatus.ENROLLED.value,
                            )
                        )
                    session.commit()
                    session.refresh(candidate)
        except DuplicateError as e:
            raise DuplicateError(
                f"Candidate with email {candidate.email} already exists",
                field="email",
                value=candidate.email,
            ) from e

        logger.debug(f"Created candidate {candidate.id} ({candidate.email})")
        return candidate

    def update_candidate(self, candidate_id: int, **updates: Any) -> CandidateRecord | None:
        with self._store_errors(f"update candidate {candidate_id}"):
            with self._session() as session:
                candidate = session.get(CandidateRecord, candidate_id)
                if candidate is None:
                    return None
                for field_name, value in updates.items():
                    if field_name not in ("id", "created_at"):
                        setattr(candidate, field_name, value)
                candidate.updated_at = utcnow()
                session.add(candidate)
                session.commit()
                session.refresh(candidate)
                return candidate

    def save_profile_summary(self, candidate_id: int, summary: str | None) -> CandidateRecord | None:
        """Store a hand-authored profile summary"""
        return self.update_candidate(candidate_id, profile_summary=summary)

    def delete_candidate(self, candidate_id: int) -> bool:
        """Delete a candidate together with its dependent rows"""
        dependents = (
            CandidateCohortLink,
            CandidateEventLink,
            ExamResultRecord,
            SurveyResponseRecord,
            ChallengeResultRecord,
            CertificateRecord,
        )
        with self._store_errors(f"delete candidate {candidate_id}"):
            with self._session() as session:
                candidate = session.get(CandidateRecord, candidate_id)
                if candidate is None:
                    return False
                for model in dependents:
                    for row in session.exec(select(model).where(model.candidate_id == candidate_id)):
                        session.delete(row)
                session.delete(candidate)
                session.commit()
        return True

    # Cohorts

    def get_cohort_by_name(self, cohort_name: str) -> CohortRecord | None:
        return self._first(select(CohortRecord).where(CohortRecord.cohort_name == cohort_name))

    def create_cohort(self, cohort: CohortRecord) -> CohortRecord:
        return self._insert(cohort, f"cohort '{cohort.cohort_name}'")

    def list_cohorts(self) -> list[CohortRecord]:
        return self._all(select(CohortRecord).order_by(CohortRecord.start_date.desc()))

    def assign_to_cohort(
        self, candidate_id: int, cohort_id: int, enrollment_date: date | None = None
    ) -> CandidateCohortLink:
        link = CandidateCohortLink(
            candidate_id=candidate_id,
            cohort_id=cohort_id,
            enrollment_date=enrollment_date or date.today(),
        )
        return self._insert(link, f"cohort membership {candidate_id}/{cohort_id}")

    def remove_from_cohort(self, candidate_id: int, cohort_id: int) -> bool:
        with self._store_errors(f"remove cohort membership {candidate_id}/{cohort_id}"):
            with self._session() as session:
                link = session.get(CandidateCohortLink, (candidate_id, cohort_id))
                if link is None:
                    return False
                session.delete(link)
                session.commit()
        return True

    # Exams

    def get_exam_by_title(self, title: str) -> ExamRecord | None:
        return self._first(select(ExamRecord).where(ExamRecord.title == title))

    def find_or_create_exam(
        self, title: str, exam_date: date | None = None, max_score: int = 100
    ) -> ExamRecord:
        """
        Return the exam with ``title``, creating it if absent.

        ``exams.title`` is unique, so a writer that loses an insert race reads
        the winner's row instead of creating a second exam.
        """
        existing = self.get_exam_by_title(title)
        if existing is not None:
            return existing

        try:
            exam = self._insert(
                ExamRecord(title=title, exam_date=exam_date, max_score=max_score),
                f"exam '{title}'",
            )
        except DuplicateError:
            existing = self.get_exam_by_title(title)
            if existing is None:
                raise
            return existing

        logger.info(f"Created exam '{title}'")
        return exam

    def add_exam_result(self, result: ExamResultRecord) -> ExamResultRecord:
        return self._insert(result, "exam result")

    def list_exams(self) -> list[ExamRecord]:
        return self._all(select(ExamRecord).order_by(ExamRecord.exam_date.desc()))

    # Surveys

    def get_survey_by_title(self, title: str) -> SurveyRecord | None:
        return self._first(select(SurveyRecord).where(SurveyRecord.title == title))

    def find_or_create_survey(self, title: str, survey_type: str, max_rating: int = 5) -> SurveyRecord:
        """Return the survey with ``title``, creating it if absent"""
        existing = self.get_survey_by_title(title)
        if existing is not None:
            return existing

        try:
            survey = self._insert(
                SurveyRecord(title=title, survey_type=survey_type, max_rating=max_rating),
                f"survey '{title}'",
            )
        except DuplicateError:
            existing = self.get_survey_by_title(title)
            if existing is None:
                raise
            return existing

        logger.info(f"Created survey '{title}'")
        return survey

    def add_survey_response(self, response: SurveyResponseRecord) -> SurveyResponseRecord:
        return self._insert(response, "survey response")

    def list_surveys(self) -> list[SurveyRecord]:
        return self._all(select(SurveyRecord).order_by(SurveyRecord.created_at.desc()))

    # Events, certificates and challenges

    def create_event(self, event: EventRecord) -> EventRecord:
        return self._insert(event, f"event '{event.title}'")

    def assign_to_event(
        self, candidate_id: int, event_id: int, role: str = "participant"
    ) -> CandidateEventLink:
        link = CandidateEventLink(
            candidate_id=candidate_id,
            event_id=event_id,
            participation_role=role,
            attendance_status="registered",
        )
        return self._insert(link, f"event participation {candidate_id}/{event_id}")

    def list_events(self) -> list[EventRecord]:
        return self._all(select(EventRecord).order_by(EventRecord.event_date.desc()))

    def add_certificate(self, certificate: CertificateRecord) -> CertificateRecord:
        return self._insert(certificate, f"certificate '{certificate.title}'")

    def list_certificates(self) -> list[CertificateRecord]:
        return self._all(select(CertificateRecord).order_by(CertificateRecord.issue_date.desc()))

    def create_challenge(self, challenge: ChallengeRecord) -> ChallengeRecord:
        return self._insert(challenge, f"challenge '{challenge.title}'")

    def add_challenge_result(self, result: ChallengeResultRecord) -> ChallengeResultRecord:
        return self._insert(result, "challenge result")

    # Nested records

    def get_candidate_record(self, candidate_id: int) -> dict[str, Any] | None:
        """
        Fetch a candidate with all joined collections as one nested dict.

        The shape mirrors a relational query result: candidate columns plus
        ``candidate_cohorts``, ``challenge_results``, ``exam_results``,
        ``survey_responses``, ``candidate_events`` and ``certificates``, each
        embedding its parent row (``cohorts``, ``challenges``, ``exams``,
        ``surveys``, ``events_hackathons``).
        """
        with self._store_errors(f"read candidate {candidate_id}"):
            with self._session() as session:
                candidate = session.get(CandidateRecord, candidate_id)
                if candidate is None:
                    return None
                return self._nest_candidate(session, candidate)

    def list_candidate_records(self, public_only: bool = False) -> list[dict[str, Any]]:
        statement = select(CandidateRecord).order_by(CandidateRecord.created_at.desc())
        if public_only:
            statement = statement.where(CandidateRecord.is_public == True)  # noqa: E712

        with self._store_errors("read candidates"):
            with self._session() as session:
                return [self._nest_candidate(session, c) for c in session.exec(statement).all()]

    def _nest_candidate(self, session: Session, candidate: CandidateRecord) -> dict[str, Any]:
        record = candidate.model_dump()
        candidate_id = candidate.id

        record["candidate_cohorts"] = [
            {**link.model_dump(), "cohorts": cohort.model_dump()}
            for link, cohort in session.exec(
                select(CandidateCohortLink, CohortRecord)
                .where(CandidateCohortLink.candidate_id == candidate_id)
                .where(CandidateCohortLink.cohort_id == CohortRecord.id)
            ).all()
        ]
        record["challenge_results"] = [
            {**result.model_dump(), "challenges": challenge.model_dump()}
            for result, challenge in session.exec(
                select(ChallengeResultRecord, ChallengeRecord)
                .where(ChallengeResultRecord.candidate_id == candidate_id)
                .where(ChallengeResultRecord.challenge_id == ChallengeRecord.id)
                .order_by(ChallengeResultRecord.id)
            ).all()
        ]
        record["exam_results"] = [
            {**result.model_dump(), "exams": exam.model_dump()}
            for result, exam in session.exec(
                select(ExamResultRecord, ExamRecord)
                .where(ExamResultRecord.candidate_id == candidate_id)
                .where(ExamResultRecord.exam_id == ExamRecord.id)
                .order_by(ExamResultRecord.id)
            ).all()
        ]
        record["survey_responses"] = [
            {**response.model_dump(), "surveys": survey.model_dump()}
            for response, survey in session.exec(
                select(SurveyResponseRecord, SurveyRecord)
                .where(SurveyResponseRecord.candidate_id == candidate_id)
                .where(SurveyResponseRecord.survey_id == SurveyRecord.id)
                .order_by(SurveyResponseRecord.id)
            ).all()
        ]
        record["candidate_events"] = [
            {**link.model_dump(), "events_hackathons": event.model_dump()}
            for link, event in session.exec(
                select(CandidateEventLink, EventRecord)
                .where(CandidateEventLink.candidate_id == candidate_id)
                .where(CandidateEventLink.event_id == EventRecord.id)
            ).all()
        ]
        record["certificates"] = [
            certificate.model_dump()
            for certificate in session.exec(
                select(CertificateRecord)
                .where(CertificateRecord.candidate_id == candidate_id)
                .order_by(CertificateRecord.id)
            ).all()
        ]
        return record

    def list_cohort_records(self) -> list[dict[str, Any]]:
        """
        Fetch cohorts with their members embedded.

        Each cohort carries ``candidate_cohorts``, and each membership embeds
        the candidate row under ``candidates`` with its ``exam_results``.
        """
        with self._store_errors("read cohorts"):
            with self._session() as session:
                records = []
                cohorts = session.exec(
                    select(CohortRecord).order_by(CohortRecord.start_date.desc())
                ).all()
                for cohort in cohorts:
                    record = cohort.model_dump()
                    memberships = []
                    for link, candidate in session.exec(
                        select(CandidateCohortLink, CandidateRecord)
                        .where(CandidateCohortLink.cohort_id == cohort.id)
                        .where(CandidateCohortLink.candidate_id == CandidateRecord.id)
                    ).all():
                        member = candidate.model_dump()
                        member["exam_results"] = [
                            result.model_dump()
                            for result in session.exec(
                                select(ExamResultRecord).where(
                                    ExamResultRecord.candidate_id == candidate.id
                                )
                            ).all()
                        ]
                        memberships.append({**link.model_dump(), "candidates": member})
                    record["candidate_cohorts"] = memberships
                    records.append(record)
                return records

    def export_records(self, table: str) -> list[dict[str, Any]]:
        """
        Fetch rows of an exportable table as dicts.

        Candidates and cohorts include their nested memberships, which CSV
        export leaves out.

        Raises:
            ValueError: If ``table`` is not exportable
        """
        if table == "candidates":
            return self.list_candidate_records()
        if table == "cohorts":
            return self.list_cohort_records()

        listings = {
            "exams": self.list_exams,
            "surveys": self.list_surveys,
            "events": self.list_events,
            "certificates": self.list_certificates,
        }
        if table not in listings:
            available = ", ".join(EXPORTABLE_TABLES)
            raise ValueError(f"Unknown export '{table}'. Available exports: {available}")

        return [record.model_dump() for record in listings[table]()]
