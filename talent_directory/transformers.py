"""
Transform nested store records into view models.

Input records are plain dicts shaped like a relational query result: the
candidate's own columns plus joined collections (``candidate_cohorts``,
``challenge_results``, ``exam_results``, ``survey_responses``,
``candidate_events``, ``certificates``), each embedding its parent row.
"""

import logging
import math
from datetime import date, datetime, time
from typing import Any

from .validators import parse_datetime
from .views import (
    Candidate,
    CandidateProfile,
    Certification,
    ChallengeResult,
    Cohort,
    EventParticipation,
    ExamResult,
    Skill,
    SurveyFeedback,
)

logger = logging.getLogger(__name__)

DEFAULT_OVERALL_RATING = 4.5

# Placeholder skills shown when a candidate has no challenge results
DEFAULT_SKILLS = (
    ("Problem Solving", 75),
    ("Team Collaboration", 80),
    ("Communication", 85),
)

EXAM_RESULT_LABELS = {"passed": "Passed", "failed": "Failed"}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _to_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return parse_datetime(str(value))


def _record_id(record: dict[str, Any], key: str) -> Any:
    """Return a row's primary key, stored as ``id`` or ``<entity>_id``"""
    if record.get("id") is not None:
        return record["id"]
    return record.get(key)


def transform_candidate(record: dict[str, Any]) -> Candidate:
    memberships = record.get("candidate_cohorts") or []
    return Candidate(
        id=_record_id(record, "candidate_id"),
        full_name=record["full_name"],
        email=record["email"],
        cohort_id=memberships[0].get("cohort_id") if memberships else None,
        role=record.get("role") or "Not specified",
        phone=record.get("phone"),
        linkedin_url=record.get("linkedin_url"),
        github_url=record.get("github_url"),
        portfolio_url=record.get("portfolio_url"),
        resume_url=record.get("resume_url"),
        photo_url=record.get("photo_url"),
        skill_level=record.get("skill_level"),
        is_public=bool(record.get("is_public")),
        created_at=_to_datetime(record.get("created_at")),
        updated_at=_to_datetime(record.get("updated_at")),
    )


def transform_cohort(record: dict[str, Any] | None) -> Cohort:
    """Transform a cohort row; ``None`` yields the unassigned placeholder"""
    if not record:
        return Cohort(id=None, name="No Cohort Assigned")

    return Cohort(
        id=_record_id(record, "cohort_id"),
        name=record["cohort_name"],
        program_name=record.get("program_name") or "Unknown Program",
        start_date=_to_datetime(record.get("start_date")),
        end_date=_to_datetime(record.get("end_date")),
    )


def summarize_cohort(record: dict[str, Any]) -> Cohort:
    """
    Transform a cohort row with embedded memberships, filling in aggregates.

    ``avg_performance`` is the mean exam score percentage across all
    members' exam results, or 0 when there are none.
    """
    cohort = transform_cohort(record)
    memberships = record.get("candidate_cohorts") or []

    percentages = []
    for membership in memberships:
        member = membership.get("candidates") or {}
        for result in member.get("exam_results") or []:
            max_score = result.get("max_score") or 100
            percentages.append(result["score"] / max_score * 100)

    cohort.candidate_count = len(memberships)
    if percentages:
        cohort.avg_performance = _round_half_up(sum(percentages) / len(percentages))
    return cohort


def generate_skills(challenge_results: list[dict[str, Any]]) -> list[Skill]:
    """
    Derive skills from challenge results grouped by topic.

    Per topic, ``level`` is the rounded mean score and ``max_level`` the
    largest max score. With no results, the default skill set is returned
    with ``is_default`` set.
    """
    totals: dict[str, dict[str, int]] = {}

    for result in challenge_results:
        challenge = result.get("challenges") or {}
        topic = challenge.get("topic") or "General"
        entry = totals.setdefault(topic, {"total": 0, "count": 0, "max": 0})
        entry["total"] += result["score"]
        entry["count"] += 1
        entry["max"] = max(entry["max"], result.get("max_score") or 100)

    skills = [
        Skill(
            name=topic,
            level=_round_half_up(entry["total"] / entry["count"]),
            max_level=entry["max"],
        )
        for topic, entry in totals.items()
    ]

    if not skills:
        skills = [
            Skill(name=name, level=level, max_level=100, is_default=True)
            for name, level in DEFAULT_SKILLS
        ]

    return skills


def calculate_overall_rating(
    surveys: list[SurveyFeedback], default: float = DEFAULT_OVERALL_RATING
) -> float:
    """Mean of the surveys' ratings, or ``default`` when none are rated"""
    ratings = [survey.rating for survey in surveys if survey.rating]
    if not ratings:
        return default
    return sum(ratings) / len(ratings)


def synthesize_summary(
    candidate: Candidate,
    cohort: Cohort,
    challenge_results: list[ChallengeResult],
    exams: list[ExamResult],
    surveys: list[SurveyFeedback],
    certifications: list[Certification],
) -> str:
    """Build a narrative profile summary from the candidate's records"""
    parts = [
        f"{candidate.full_name} is a {candidate.role} who completed the "
        f"{cohort.program_name} as part of {cohort.name}."
    ]

    if challenge_results:
        avg_score = _round_half_up(
            sum(result.score for result in challenge_results) / len(challenge_results)
        )
        parts.append(
            f"They demonstrated strong performance with an average challenge score of {avg_score}%."
        )

    if exams:
        passed = sum(1 for exam in exams if exam.result == "Passed")
        parts.append(f"They have passed {passed} exam{'' if passed == 1 else 's'}.")

    ratings = [survey.rating for survey in surveys if survey.rating]
    if ratings:
        avg_rating = sum(ratings) / len(ratings)
        parts.append(f"Team leaders rated their overall performance at {avg_rating:.1f}/5.0.")

    if certifications:
        count = len(certifications)
        parts.append(
            f"They hold {count} professional certification{'s' if count > 1 else ''}."
        )

    if candidate.linkedin_url:
        parts.append("Professional LinkedIn profile available.")
    if candidate.github_url:
        parts.append("Active GitHub portfolio showcasing technical projects.")
    if candidate.portfolio_url:
        parts.append("Personal portfolio website demonstrates their work and capabilities.")

    return " ".join(parts)


def transform_candidate_profile(
    record: dict[str, Any], default_rating: float = DEFAULT_OVERALL_RATING
) -> CandidateProfile:
    """
    Transform a nested candidate record into a ``CandidateProfile``.

    When a candidate belongs to several cohorts, the first membership is
    used.
    """
    candidate = transform_candidate(record)

    memberships = record.get("candidate_cohorts") or []
    if len(memberships) > 1:
        logger.debug(
            f"Candidate {candidate.id} has {len(memberships)} cohorts; using the first"
        )
    cohort = transform_cohort(memberships[0].get("cohorts") if memberships else None)

    challenge_results = []
    for result in record.get("challenge_results") or []:
        challenge = result.get("challenges") or {}
        challenge_results.append(
            ChallengeResult(
                id=_record_id(result, "result_id"),
                candidate_id=result.get("candidate_id"),
                challenge_title=challenge.get("title") or "Unknown Challenge",
                date=_to_datetime(result.get("submitted_at")),
                score=result["score"],
                topic=challenge.get("topic") or "General",
                max_score=result.get("max_score") or 100,
            )
        )

    exams = []
    for result in record.get("exam_results") or []:
        exam = result.get("exams") or {}
        exams.append(
            ExamResult(
                id=_record_id(result, "result_id"),
                candidate_id=result.get("candidate_id"),
                exam_name=exam.get("title") or "Unknown Exam",
                date_taken=_to_datetime(result.get("result_date")),
                score=result["score"],
                max_score=result.get("max_score") or 100,
                result=EXAM_RESULT_LABELS.get(result.get("result_status") or "", "Pending"),
            )
        )

    certifications = [
        Certification(
            id=_record_id(certificate, "certificate_id"),
            candidate_id=certificate.get("candidate_id"),
            cert_name=certificate["title"],
            provider=certificate["issuer"],
            issue_date=_to_datetime(certificate.get("issue_date")),
            cert_url=certificate.get("certificate_url"),
            expiration_date=_to_datetime(certificate.get("expiration_date")),
        )
        for certificate in record.get("certificates") or []
    ]

    surveys = []
    for response in record.get("survey_responses") or []:
        survey = response.get("surveys") or {}
        surveys.append(
            SurveyFeedback(
                id=_record_id(response, "response_id"),
                candidate_id=response.get("candidate_id"),
                survey_type=survey.get("survey_type") or "overall",
                rating=response.get("rating") or 0,
                comment=response.get("feedback") or "",
                date=_to_datetime(response.get("submitted_at")),
                reviewer_name=response.get("reviewer_name") or "Anonymous",
            )
        )

    events = []
    for participation in record.get("candidate_events") or []:
        event = participation.get("events_hackathons") or {}
        events.append(
            EventParticipation(
                id=participation.get("event_id"),
                candidate_id=participation.get("candidate_id"),
                event_name=event.get("title") or "Unknown Event",
                role=participation.get("participation_role") or "Participant",
                date=_to_datetime(event.get("event_date")),
                resources_url=event.get("resources_url"),
            )
        )

    return CandidateProfile(
        **candidate.model_dump(),
        cohort=cohort,
        skills=generate_skills(record.get("challenge_results") or []),
        challenge_results=challenge_results,
        exams=exams,
        certifications=certifications,
        surveys=surveys,
        events=events,
        profile_summary=record.get("profile_summary") or None,
        generated_summary=synthesize_summary(
            candidate, cohort, challenge_results, exams, surveys, certifications
        ),
        overall_rating=calculate_overall_rating(surveys, default=default_rating),
    )


def build_profile(
    store, candidate_id: int, default_rating: float = DEFAULT_OVERALL_RATING
) -> CandidateProfile | None:
    """Fetch a candidate from ``store`` and transform it into a profile"""
    record = store.get_candidate_record(candidate_id)
    if record is None:
        return None
    return transform_candidate_profile(record, default_rating=default_rating)


def list_profiles(
    store, public_only: bool = True, default_rating: float = DEFAULT_OVERALL_RATING
) -> list[CandidateProfile]:
    """Profiles for the directory; only public candidates unless ``public_only`` is False"""
    return [
        transform_candidate_profile(record, default_rating=default_rating)
        for record in store.list_candidate_records(public_only=public_only)
    ]
