"""
CSV templates and data export.
"""

import csv
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from .database import TalentStore

logger = logging.getLogger(__name__)

TEMPLATES = {
    "candidates": (
        "full_name,email,phone,linkedin_url,github_url,portfolio_url,resume_url,"
        "photo_url,role,skill_level,is_public,cohort_name\n"
        "John Doe,john@example.com,+1234567890,https://linkedin.com/in/johndoe,"
        "https://github.com/johndoe,https://johndoe.dev,https://example.com/resume.pdf,"
        "https://example.com/photo.jpg,Full-Stack Developer,intermediate,true,Cohort 2025-A"
    ),
    "exam_results": (
        "candidate_email,exam_title,score,max_score,result_status,result_date,feedback\n"
        "john@example.com,Final Technical Exam,85,100,passed,2025-01-15,Excellent performance"
    ),
    "survey_responses": (
        "candidate_email,survey_type,rating,feedback,reviewer_name,submitted_at\n"
        "john@example.com,technical,4,Great technical skills,Jane Smith,2025-01-15T10:00:00Z"
    ),
}


@dataclass
class ExportFile:
    """Generated CSV content and its download filename"""

    csv: str
    filename: str

    def write(self, directory: str | Path = ".") -> Path:
        path = Path(directory) / self.filename
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(self.csv)
        return path


def generate_template(import_type: str) -> ExportFile:
    """
    Return the static CSV template for an import type.

    Raises:
        ValueError: If there is no template for ``import_type``
    """
    if import_type not in TEMPLATES:
        available = ", ".join(TEMPLATES.keys())
        raise ValueError(f"No template for '{import_type}'. Available types: {available}")
    return ExportFile(csv=TEMPLATES[import_type], filename=f"{import_type}_template.csv")


def _is_nested(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple, set))


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def convert_to_csv(records: list[dict[str, Any]], name: str, today: date | None = None) -> ExportFile:
    """
    Convert flat records to CSV text.

    Columns are the keys of the first record whose values are not nested
    structures; nested fields are left out. Values containing a delimiter,
    quote or line break are quoted with inner quotes doubled.
    """
    stamp = (today or date.today()).isoformat()
    filename = f"{name}_{stamp}.csv"

    if not records:
        return ExportFile(csv="", filename=filename)

    headers = [key for key, value in records[0].items() if not _is_nested(value)]
    rows = [[_format_value(record.get(header)) for header in headers] for record in records]

    df = pd.DataFrame(rows, columns=headers, dtype=str)
    content = df.to_csv(index=False, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    if content.endswith("\n"):
        content = content[:-1]

    logger.debug(f"Exported {len(records)} {name} records with columns {headers}")
    return ExportFile(csv=content, filename=filename)


def export_dataset(store: TalentStore, name: str, today: date | None = None) -> ExportFile:
    """Export one of the store's tables to CSV"""
    records = store.export_records(name)
    logger.info(f"Exporting {len(records)} {name} records")
    return convert_to_csv(records, name, today=today)
