"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from talent_directory import TalentStore
from talent_directory.models import CohortRecord


@pytest.fixture
def store(tmp_path):
    """Empty record store backed by a temporary SQLite file."""
    return TalentStore(str(tmp_path / "talent.db"))


@pytest.fixture
def cohort(store):
    """A cohort that candidate rows can reference by name."""
    return store.create_cohort(
        CohortRecord(
            cohort_name="Cohort 2025-A",
            program_name="Full-Stack Bootcamp",
            start_date=date(2025, 1, 6),
            end_date=date(2025, 4, 25),
        )
    )


@pytest.fixture
def sample_candidates_csv():
    """Sample candidates CSV data for testing."""
    return """full_name,email,phone,role,skill_level,is_public
Jane Smith,jane@example.com,+1234567890,Backend Developer,advanced,true
John Doe,JOHN@Example.com,,Frontend Developer,beginner,0
Ada Lovelace,ada@example.com,,Data Engineer,intermediate,1"""


@pytest.fixture
def sample_exam_results_csv():
    """Sample exam results CSV data for testing."""
    return """candidate_email,exam_title,score,max_score,result_status,result_date,feedback
jane@example.com,Final Technical Exam,85,100,passed,2025-01-15,Excellent performance
john@example.com,Final Technical Exam,55,100,failed,2025-01-15,"Needs work on SQL, testing"
ada@example.com,Midterm,40,50,,2025-01-02,"""


@pytest.fixture
def sample_survey_responses_csv():
    """Sample survey responses CSV data for testing."""
    return """candidate_email,survey_type,rating,feedback,reviewer_name,submitted_at
jane@example.com,technical,4,Great technical skills,Jane Smith,2025-01-15T10:00:00Z
jane@example.com,Leadership,5,Leads standups,Sam Lee,
john@example.com,technical,3,,,2025-01-16"""


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temporary file and return its path."""

    def _write(text, name="import.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mock_requests_response():
    """Mock requests response for testing."""
    import requests

    class MockResponse:
        def __init__(self, text, status_code=200):
            self.text = text
            self.status_code = status_code
            self.encoding = "utf-8"

        def raise_for_status(self):
            if self.status_code >= 400:
                raise requests.HTTPError(f"HTTP {self.status_code}")

    return MockResponse
