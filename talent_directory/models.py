"""
Data models for the talent directory record store.
"""

from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel, create_engine


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SurveyType(str, Enum):
    LEADERSHIP = "leadership"
    COLLABORATION = "collaboration"
    TECHNICAL = "technical"
    OVERALL = "overall"
    CHALLENGE = "challenge"
    RATING = "rating"


class ResultStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"
    COMPLETED = "completed"


class CompletionStatus(str, Enum):
    ENROLLED = "enrolled"
    COMPLETED = "completed"
    WITHDRAWN = "withdrawn"


class CandidateRecord(SQLModel, table=True):
    """
    A candidate in the directory.

    Enum-like columns (skill_level) are stored as their lower-case string value.
    """

    __tablename__ = "candidates"

    id: int | None = Field(default=None, primary_key=True)

    full_name: str = Field(description="Full name of the candidate")
    email: str = Field(
        unique=True, index=True, description="Email address, lower-cased"
    )
    phone: str | None = Field(default=None, description="Phone number")

    # Profile links
    linkedin_url: str | None = Field(default=None)
    github_url: str | None = Field(default=None)
    portfolio_url: str | None = Field(default=None)
    resume_url: str | None = Field(default=None)
    photo_url: str | None = Field(default=None)

    profile_summary: str | None = Field(
        default=None, description="Hand-authored profile summary"
    )
    role: str | None = Field(default=None, description="Role label")
    skill_level: str | None = Field(
        default=None, description="beginner, intermediate or advanced"
    )
    is_public: bool = Field(default=False, description="Visible in public directory")

    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class CohortRecord(SQLModel, table=True):
    __tablename__ = "cohorts"

    id: int | None = Field(default=None, primary_key=True)
    cohort_name: str = Field(unique=True, index=True)
    program_name: str | None = Field(default=None)
    start_date: date | None = Field(default=None)
    end_date: date | None = Field(default=None)
    notes: str | None = Field(default=None)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)


class CandidateCohortLink(SQLModel, table=True):
    """Many-to-many association between candidates and cohorts"""

    __tablename__ = "candidate_cohorts"

    candidate_id: int = Field(foreign_key="candidates.id", primary_key=True)
    cohort_id: int = Field(foreign_key="cohorts.id", primary_key=True)
    enrollment_date: date | None = Field(default=None)
    completion_status: str | None = Field(default=CompletionStatus.ENROLLED.value)


class ExamRecord(SQLModel, table=True):
    __tablename__ = "exams"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(unique=True, index=True)
    description: str | None = Field(default=None)
    exam_date: date | None = Field(default=None)
    duration_minutes: int | None = Field(default=None)
    max_score: int | None = Field(default=100)
    passing_score: int | None = Field(default=None)
    created_at: datetime | None = Field(default_factory=utcnow)


class ExamResultRecord(SQLModel, table=True):
    __tablename__ = "exam_results"

    id: int | None = Field(default=None, primary_key=True)
    candidate_id: int = Field(foreign_key="candidates.id", index=True)
    exam_id: int = Field(foreign_key="exams.id", index=True)
    score: int
    max_score: int | None = Field(default=100)
    result_status: str | None = Field(default=ResultStatus.COMPLETED.value)
    result_date: date
    feedback: str | None = Field(default=None)
    created_at: datetime | None = Field(default_factory=utcnow)


class SurveyRecord(SQLModel, table=True):
    __tablename__ = "surveys"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(unique=True, index=True)
    survey_type: str
    description: str | None = Field(default=None)
    max_rating: int | None = Field(default=5)
    is_active: bool = Field(default=True)
    created_at: datetime | None = Field(default_factory=utcnow)


class SurveyResponseRecord(SQLModel, table=True):
    __tablename__ = "survey_responses"

    id: int | None = Field(default=None, primary_key=True)
    candidate_id: int = Field(foreign_key="candidates.id", index=True)
    survey_id: int = Field(foreign_key="surveys.id", index=True)
    rating: int | None = Field(default=None, description="Rating from 1 to 5")
    feedback: str | None = Field(default=None)
    reviewer_name: str | None = Field(default=None)
    submitted_at: datetime | None = Field(default_factory=utcnow)


class EventRecord(SQLModel, table=True):
    """An event or hackathon"""

    __tablename__ = "events_hackathons"

    id: int | None = Field(default=None, primary_key=True)
    title: str
    description: str | None = Field(default=None)
    event_date: date | None = Field(default=None)
    resources_url: str | None = Field(default=None)
    created_at: datetime | None = Field(default_factory=utcnow)


class CandidateEventLink(SQLModel, table=True):
    __tablename__ = "candidate_events"

    candidate_id: int = Field(foreign_key="candidates.id", primary_key=True)
    event_id: int = Field(foreign_key="events_hackathons.id", primary_key=True)
    participation_role: str | None = Field(default="participant")
    attendance_status: str | None = Field(default="registered")
    notes: str | None = Field(default=None)


class CertificateRecord(SQLModel, table=True):
    __tablename__ = "certificates"

    id: int | None = Field(default=None, primary_key=True)
    candidate_id: int = Field(foreign_key="candidates.id", index=True)
    title: str
    issuer: str
    issue_date: date
    expiration_date: date | None = Field(default=None)
    certificate_url: str | None = Field(default=None)
    verification_code: str | None = Field(default=None)
    created_at: datetime | None = Field(default_factory=utcnow)


class ChallengeRecord(SQLModel, table=True):
    __tablename__ = "challenges"
    __table_args__ = (UniqueConstraint("title", "topic"),)

    id: int | None = Field(default=None, primary_key=True)
    title: str
    topic: str | None = Field(default=None)
    max_score: int | None = Field(default=100)
    created_at: datetime | None = Field(default_factory=utcnow)


class ChallengeResultRecord(SQLModel, table=True):
    __tablename__ = "challenge_results"

    id: int | None = Field(default=None, primary_key=True)
    candidate_id: int = Field(foreign_key="candidates.id", index=True)
    challenge_id: int = Field(foreign_key="challenges.id", index=True)
    score: int
    max_score: int | None = Field(default=100)
    submitted_at: datetime | None = Field(default_factory=utcnow)


def create_database_engine(db_path: str = "talent.db"):
    """Create SQLite database engine"""
    sqlite_url = f"sqlite:///{db_path}"
    engine = create_engine(sqlite_url, echo=False)
    return engine


def create_tables(engine):
    """Create all tables in the database"""
    SQLModel.metadata.create_all(engine)
