"""
View models assembled from store records for display.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class Cohort(BaseModel):
    """A cohort with its derived aggregates"""

    id: int | None = None
    name: str
    program_name: str = "Unknown Program"
    start_date: datetime | None = None
    end_date: datetime | None = None
    candidate_count: int = 0
    avg_performance: int = 0


class Skill(BaseModel):
    """
    A skill derived from challenge results.

    ``is_default`` marks placeholder skills used when a candidate has no
    challenge results; their levels are not measured.
    """

    name: str
    level: int
    max_level: int
    is_default: bool = False


class ChallengeResult(BaseModel):
    id: int | None = None
    candidate_id: int | None = None
    challenge_title: str = "Unknown Challenge"
    date: datetime | None = None
    score: int
    topic: str = "General"
    max_score: int = 100


class ExamResult(BaseModel):
    id: int | None = None
    candidate_id: int | None = None
    exam_name: str = "Unknown Exam"
    date_taken: datetime | None = None
    score: int
    max_score: int = 100
    result: Literal["Passed", "Failed", "Pending"] = "Pending"


class Certification(BaseModel):
    id: int | None = None
    candidate_id: int | None = None
    cert_name: str
    provider: str
    issue_date: datetime | None = None
    cert_url: str | None = None
    expiration_date: datetime | None = None


class SurveyFeedback(BaseModel):
    id: int | None = None
    candidate_id: int | None = None
    survey_type: str = "overall"
    rating: int = 0
    comment: str = ""
    date: datetime | None = None
    reviewer_name: str = "Anonymous"


class EventParticipation(BaseModel):
    id: int | None = None
    candidate_id: int | None = None
    event_name: str = "Unknown Event"
    role: str = "Participant"
    date: datetime | None = None
    resources_url: str | None = None


class Candidate(BaseModel):
    id: int | None = None
    full_name: str
    email: str
    cohort_id: int | None = None
    role: str = "Not specified"
    phone: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    resume_url: str | None = None
    photo_url: str | None = None
    skill_level: str | None = None
    is_public: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CandidateProfile(Candidate):
    """
    Candidate aggregate for profile pages.

    ``profile_summary`` is the stored, hand-authored text (if any) and
    ``generated_summary`` is always the synthesized narrative.
    """

    cohort: Cohort
    skills: list[Skill] = Field(default_factory=list)
    challenge_results: list[ChallengeResult] = Field(default_factory=list)
    exams: list[ExamResult] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    surveys: list[SurveyFeedback] = Field(default_factory=list)
    events: list[EventParticipation] = Field(default_factory=list)
    profile_summary: str | None = None
    generated_summary: str = ""
    overall_rating: float = 4.5

    @property
    def summary(self) -> str:
        """The stored summary if present, otherwise the generated one"""
        return self.profile_summary or self.generated_summary

    @property
    def has_measured_skills(self) -> bool:
        return any(not skill.is_default for skill in self.skills)
