"""Tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from main import app
from talent_directory import TalentStore

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "talent.db")


class TestCli:
    """Test cases for the admin CLI commands."""

    def test_import_reports_summary(self, db_path, write_csv):
        path = write_csv("full_name,email\nJane,jane@example.com\n,bad@example.com")

        result = runner.invoke(app, ["import", "candidates", str(path), "--db-path", db_path])

        assert result.exit_code == 0
        assert "Successfully imported 1 records. 1 errors." in result.output
        assert "Row 2: Missing required field 'full_name'" in result.output
        assert TalentStore(db_path).count_candidates() == 1

    def test_import_unknown_type(self, db_path, write_csv):
        result = runner.invoke(
            app, ["import", "invoices", str(write_csv("a\n1")), "--db-path", db_path]
        )

        assert result.exit_code == 2
        assert not Path(db_path).exists()

    def test_import_type_is_normalized(self, db_path, write_csv):
        path = write_csv("full_name,email\nJane,jane@example.com")

        result = runner.invoke(app, ["import", "Candidates", str(path), "--db-path", db_path])

        assert result.exit_code == 0
        assert "Successfully imported 1 records. 0 errors." in result.output

    def test_types(self):
        result = runner.invoke(app, ["types"])

        assert result.exit_code == 0
        assert "candidates: Candidate Profiles" in result.output
        assert "required: candidate_email, exam_title, score, result_date" in result.output

    def test_import_missing_file(self, db_path, tmp_path):
        result = runner.invoke(
            app, ["import", "candidates", str(tmp_path / "nope.csv"), "--db-path", db_path]
        )

        assert result.exit_code == 1

    def test_add_cohort_then_import(self, db_path, write_csv):
        result = runner.invoke(
            app,
            ["add-cohort", "Cohort 2025-A", "--program", "Full-Stack Bootcamp", "--db-path", db_path],
        )
        assert result.exit_code == 0

        path = write_csv("full_name,email,cohort_name\nJane,jane@example.com,Cohort 2025-A")
        result = runner.invoke(app, ["import", "candidates", str(path), "--db-path", db_path])

        assert "Successfully imported 1 records. 0 errors." in result.output

        result = runner.invoke(app, ["profile", "1", "--db-path", db_path])

        assert result.exit_code == 0
        assert "Cohort: Cohort 2025-A (Full-Stack Bootcamp)" in result.output
        assert "Overall Rating: 4.5/5.0" in result.output
        assert "Problem Solving: 75/100 (default)" in result.output

    def test_profile_not_found(self, db_path):
        result = runner.invoke(app, ["profile", "42", "--db-path", db_path])

        assert result.exit_code == 1

    def test_template(self, tmp_path):
        result = runner.invoke(app, ["template", "exam_results", "--output-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert (tmp_path / "exam_results_template.csv").exists()

    def test_export_empty(self, db_path, tmp_path):
        result = runner.invoke(
            app, ["export", "exams", "--output-dir", str(tmp_path), "--db-path", db_path]
        )

        assert result.exit_code == 0
        assert "No exams records to export." in result.output

    def test_preview(self, write_csv):
        path = write_csv("full_name,phone\nJane,+1234567890")

        result = runner.invoke(app, ["preview", "candidates", str(path)])

        assert result.exit_code == 0
        assert "Missing required columns: email" in result.output
        assert "full_name: Jane" in result.output

    def test_directory(self, db_path, write_csv):
        path = write_csv("full_name,email,is_public\nJane,jane@example.com,true\nJohn,john@example.com,false")
        runner.invoke(app, ["import", "candidates", str(path), "--db-path", db_path])

        result = runner.invoke(app, ["directory", "--db-path", db_path])

        assert result.exit_code == 0
        assert "Jane <jane@example.com>" in result.output
        assert "john@example.com" not in result.output
