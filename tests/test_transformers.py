"""Tests for record-to-view transformation."""

from datetime import date, datetime

import pytest

from talent_directory.models import (
    CandidateRecord,
    ChallengeRecord,
    ChallengeResultRecord,
    CertificateRecord,
    CohortRecord,
    ExamResultRecord,
    SurveyResponseRecord,
)
from talent_directory.transformers import (
    DEFAULT_OVERALL_RATING,
    build_profile,
    calculate_overall_rating,
    generate_skills,
    list_profiles,
    summarize_cohort,
    transform_candidate_profile,
    transform_cohort,
)
from talent_directory.views import SurveyFeedback


def candidate_record(**overrides):
    record = {
        "id": 7,
        "full_name": "Jane Smith",
        "email": "jane@example.com",
        "role": "Backend Developer",
        "is_public": True,
        "created_at": datetime(2025, 1, 1, 9, 0),
        "candidate_cohorts": [],
        "challenge_results": [],
        "exam_results": [],
        "survey_responses": [],
        "candidate_events": [],
        "certificates": [],
    }
    record.update(overrides)
    return record


def challenge_result(score, topic="Python", max_score=100):
    return {
        "id": score,
        "score": score,
        "max_score": max_score,
        "submitted_at": datetime(2025, 1, 10),
        "challenges": {"title": f"{topic} Challenge", "topic": topic},
    }


class TestGenerateSkills:
    """Test cases for generate_skills."""

    def test_groups_by_topic(self):
        skills = generate_skills(
            [challenge_result(80), challenge_result(90), challenge_result(70, topic="SQL", max_score=80)]
        )

        by_name = {skill.name: skill for skill in skills}
        assert by_name["Python"].level == 85
        assert by_name["Python"].max_level == 100
        assert by_name["SQL"].level == 70
        assert by_name["SQL"].max_level == 80
        assert not any(skill.is_default for skill in skills)

    def test_rounds_half_up(self):
        skills = generate_skills([challenge_result(80), challenge_result(81)])

        assert skills[0].level == 81

    def test_missing_topic_is_general(self):
        result = challenge_result(60)
        result["challenges"]["topic"] = None

        assert generate_skills([result])[0].name == "General"

    def test_defaults_when_no_results(self):
        skills = generate_skills([])

        assert [(s.name, s.level, s.max_level) for s in skills] == [
            ("Problem Solving", 75, 100),
            ("Team Collaboration", 80, 100),
            ("Communication", 85, 100),
        ]
        assert all(skill.is_default for skill in skills)


class TestOverallRating:
    """Test cases for calculate_overall_rating."""

    def test_default_without_surveys(self):
        assert calculate_overall_rating([]) == DEFAULT_OVERALL_RATING == 4.5

    def test_mean_of_ratings(self):
        surveys = [SurveyFeedback(rating=4), SurveyFeedback(rating=5), SurveyFeedback(rating=0)]

        assert calculate_overall_rating(surveys) == 4.5

    def test_configurable_default(self):
        assert calculate_overall_rating([], default=3.0) == 3.0


class TestTransformCandidateProfile:
    """Test cases for transform_candidate_profile."""

    def test_minimal_candidate(self):
        profile = transform_candidate_profile(candidate_record(role=None))

        assert profile.id == 7
        assert profile.role == "Not specified"
        assert profile.cohort.name == "No Cohort Assigned"
        assert profile.cohort.program_name == "Unknown Program"
        assert profile.cohort_id is None
        assert profile.overall_rating == 4.5
        assert profile.has_measured_skills is False
        assert profile.generated_summary == (
            "Jane Smith is a Not specified who completed the Unknown Program "
            "as part of No Cohort Assigned."
        )

    def test_first_cohort_wins(self):
        record = candidate_record(
            candidate_cohorts=[
                {"cohort_id": 2, "cohorts": {"id": 2, "cohort_name": "Cohort B", "program_name": "Data"}},
                {"cohort_id": 1, "cohorts": {"id": 1, "cohort_name": "Cohort A", "program_name": "Web"}},
            ]
        )

        profile = transform_candidate_profile(record)

        assert profile.cohort_id == 2
        assert profile.cohort.name == "Cohort B"

    @pytest.mark.parametrize(
        "status, label",
        [("passed", "Passed"), ("failed", "Failed"), ("completed", "Pending"), (None, "Pending")],
    )
    def test_exam_result_labels(self, status, label):
        record = candidate_record(
            exam_results=[
                {
                    "id": 1,
                    "score": 85,
                    "max_score": 100,
                    "result_status": status,
                    "result_date": date(2025, 1, 15),
                    "exams": {"title": "Final Technical Exam"},
                }
            ]
        )

        exam = transform_candidate_profile(record).exams[0]

        assert exam.result == label
        assert exam.exam_name == "Final Technical Exam"
        assert exam.date_taken == datetime(2025, 1, 15)

    def test_full_summary(self):
        record = candidate_record(
            linkedin_url="https://linkedin.com/in/jane",
            github_url="https://github.com/jane",
            candidate_cohorts=[
                {
                    "cohort_id": 1,
                    "cohorts": {"id": 1, "cohort_name": "Cohort 2025-A", "program_name": "Full-Stack Bootcamp"},
                }
            ],
            challenge_results=[challenge_result(80), challenge_result(91)],
            exam_results=[
                {"id": 1, "score": 85, "result_status": "passed", "exams": {"title": "Final"}},
                {"id": 2, "score": 40, "result_status": "failed", "exams": {"title": "Midterm"}},
            ],
            survey_responses=[
                {"id": 1, "rating": 4, "surveys": {"survey_type": "technical"}},
                {"id": 2, "rating": 5, "reviewer_name": "Sam", "surveys": {"survey_type": "leadership"}},
            ],
            certificates=[
                {"id": 1, "title": "AWS Cloud Practitioner", "issuer": "AWS", "issue_date": date(2024, 6, 1)}
            ],
        )

        profile = transform_candidate_profile(record)

        assert profile.generated_summary == (
            "Jane Smith is a Backend Developer who completed the Full-Stack Bootcamp "
            "as part of Cohort 2025-A. "
            "They demonstrated strong performance with an average challenge score of 86%. "
            "They have passed 1 exam. "
            "Team leaders rated their overall performance at 4.5/5.0. "
            "They hold 1 professional certification. "
            "Professional LinkedIn profile available. "
            "Active GitHub portfolio showcasing technical projects."
        )
        assert profile.overall_rating == 4.5
        assert profile.surveys[0].reviewer_name == "Anonymous"
        assert profile.surveys[1].reviewer_name == "Sam"
        assert profile.certifications[0].provider == "AWS"
        assert profile.has_measured_skills is True

    def test_summary_is_deterministic(self):
        record = candidate_record(challenge_results=[challenge_result(75)])

        first = transform_candidate_profile(record)
        second = transform_candidate_profile(record)

        assert first.generated_summary == second.generated_summary
        assert first.skills == second.skills

    def test_stored_summary_kept_separate(self):
        profile = transform_candidate_profile(candidate_record(profile_summary="Hand written."))

        assert profile.profile_summary == "Hand written."
        assert profile.summary == "Hand written."
        assert profile.generated_summary.startswith("Jane Smith is a Backend Developer")

    def test_generated_summary_used_without_stored_one(self):
        profile = transform_candidate_profile(candidate_record(profile_summary=""))

        assert profile.profile_summary is None
        assert profile.summary == profile.generated_summary


class TestCohorts:
    """Test cases for cohort transformation."""

    def test_transform_cohort_dates(self):
        cohort = transform_cohort(
            {"id": 3, "cohort_name": "Cohort 2025-A", "start_date": date(2025, 1, 6), "end_date": None}
        )

        assert cohort.name == "Cohort 2025-A"
        assert cohort.program_name == "Unknown Program"
        assert cohort.start_date == datetime(2025, 1, 6)
        assert cohort.end_date is None

    def test_summarize_cohort(self):
        record = {
            "id": 1,
            "cohort_name": "Cohort 2025-A",
            "program_name": "Full-Stack Bootcamp",
            "candidate_cohorts": [
                {"candidates": {"exam_results": [{"score": 85, "max_score": 100}, {"score": 40, "max_score": 50}]}},
                {"candidates": {"exam_results": []}},
            ],
        }

        cohort = summarize_cohort(record)

        assert cohort.candidate_count == 2
        assert cohort.avg_performance == 83

    def test_summarize_empty_cohort(self):
        cohort = summarize_cohort({"id": 1, "cohort_name": "Empty", "candidate_cohorts": []})

        assert cohort.candidate_count == 0
        assert cohort.avg_performance == 0


class TestStoreProfiles:
    """Test cases for building profiles from the store."""

    @pytest.fixture
    def jane(self, store, cohort):
        candidate = store.create_candidate(
            CandidateRecord(
                full_name="Jane Smith",
                email="jane@example.com",
                role="Backend Developer",
                is_public=True,
            ),
            cohort_id=cohort.id,
        )
        challenge = store.create_challenge(ChallengeRecord(title="Two Sum", topic="Algorithms"))
        store.add_challenge_result(
            ChallengeResultRecord(candidate_id=candidate.id, challenge_id=challenge.id, score=90)
        )
        exam = store.find_or_create_exam("Final Technical Exam", exam_date=date(2025, 1, 15))
        store.add_exam_result(
            ExamResultRecord(
                candidate_id=candidate.id,
                exam_id=exam.id,
                score=85,
                result_status="passed",
                result_date=date(2025, 1, 15),
            )
        )
        survey = store.find_or_create_survey("technical Survey", "technical")
        store.add_survey_response(
            SurveyResponseRecord(candidate_id=candidate.id, survey_id=survey.id, rating=4)
        )
        store.add_certificate(
            CertificateRecord(
                candidate_id=candidate.id,
                title="AWS Cloud Practitioner",
                issuer="AWS",
                issue_date=date(2024, 6, 1),
            )
        )
        return candidate

    def test_build_profile(self, store, jane):
        profile = build_profile(store, jane.id)

        assert profile.full_name == "Jane Smith"
        assert profile.cohort.name == "Cohort 2025-A"
        assert profile.cohort.program_name == "Full-Stack Bootcamp"
        assert [(s.name, s.level) for s in profile.skills] == [("Algorithms", 90)]
        assert profile.exams[0].result == "Passed"
        assert profile.surveys[0].survey_type == "technical"
        assert profile.overall_rating == 4.0
        assert "They have passed 1 exam." in profile.generated_summary

    def test_build_profile_missing_candidate(self, store):
        assert build_profile(store, 999) is None

    def test_saved_summary(self, store, jane):
        store.save_profile_summary(jane.id, "Seasoned backend engineer.")

        profile = build_profile(store, jane.id)

        assert profile.summary == "Seasoned backend engineer."
        assert profile.generated_summary.startswith("Jane Smith is a Backend Developer")

    def test_list_profiles_public_only(self, store, jane):
        store.create_candidate(CandidateRecord(full_name="John Doe", email="john@example.com"))

        public = list_profiles(store)
        everyone = list_profiles(store, public_only=False, default_rating=3.0)

        assert [p.email for p in public] == ["jane@example.com"]
        assert sorted(p.email for p in everyone) == ["jane@example.com", "john@example.com"]
        john = next(p for p in everyone if p.email == "john@example.com")
        assert john.overall_rating == 3.0
        assert john.cohort.name == "No Cohort Assigned"

    def test_summarize_cohort_from_store(self, store, jane):
        records = store.list_cohort_records()

        cohort = summarize_cohort(records[0])

        assert cohort.candidate_count == 1
        assert cohort.avg_performance == 85

    def test_second_cohort_membership(self, store, jane):
        later = store.create_cohort(CohortRecord(cohort_name="Cohort 2025-B"))
        store.assign_to_cohort(jane.id, later.id)

        profile = build_profile(store, jane.id)

        assert len(store.get_candidate_record(jane.id)["candidate_cohorts"]) == 2
        assert profile.cohort.name in {"Cohort 2025-A", "Cohort 2025-B"}
