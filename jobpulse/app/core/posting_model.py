"""
Posting domain models.

RawPosting mirrors one row of the external listings export. Posting is
the filtered, derived and classified form used for persistence and weekly
aggregation.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from jobpulse.app.core.classifier import classify


# External column name -> RawPosting field
COLUMN_MAP = {
    "location": "location",
    "jp_institution": "institution",
    "jp_title": "title",
    "jp_full_text": "full_text",
    "jp_salary_range": "salary_range",
    "jp_section": "section",
    "Application_deadline": "deadline_raw",
    "Date_Active": "active_date_raw",
    "jp_id": "job_id",
}

REQUIRED_COLUMNS = list(COLUMN_MAP)


@dataclass(frozen=True)
class RawPosting:
    """
    One job posting as it appears in the raw export.

    Text fields are normalized to stripped strings. Date fields are kept
    as-is (string, or date/datetime when the spreadsheet stores real dates).
    """

    location: str
    institution: str
    title: str
    full_text: str
    salary_range: str
    section: str
    deadline_raw: Any
    active_date_raw: Any
    job_id: Any

    @classmethod
    def from_row(cls, row: dict) -> "RawPosting":
        """
        Create RawPosting from a row keyed by external column names.

        Args:
            row: Dict with at least the columns in REQUIRED_COLUMNS

        Returns:
            RawPosting instance

        Raises:
            KeyError: If a required column is absent from the row
        """
        return cls(
            location=cls._normalize_string(row["location"]),
            institution=cls._normalize_string(row["jp_institution"]),
            title=cls._normalize_string(row["jp_title"]),
            full_text=cls._normalize_string(row["jp_full_text"]),
            salary_range=cls._normalize_string(row["jp_salary_range"]),
            section=cls._normalize_string(row["jp_section"]),
            deadline_raw=cls._normalize_date_cell(row["Application_deadline"]),
            active_date_raw=cls._normalize_date_cell(row["Date_Active"]),
            job_id=cls._normalize_job_id(row["jp_id"]),
        )

    @staticmethod
    def _normalize_string(value: Any) -> str:
        """Normalize value to stripped string."""
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _normalize_date_cell(value: Any) -> Any:
        """Keep native dates, stringify everything else, None stays None."""
        if value is None or isinstance(value, (date, datetime)):
            return value
        return str(value)

    @staticmethod
    def _normalize_job_id(value: Any) -> Any:
        """
        Normalize external identifier.

        Spreadsheets hand back numeric ids as floats (e.g. 12345.0); integral
        floats become ints. Strings are stripped, everything else passes.
        """
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            return value.strip()
        return value


@dataclass(frozen=True)
class Posting:
    """
    Filtered, derived and classified job posting.

    The raw location is replaced by city; deadline and active_date are
    None when the raw value did not parse. is_nonacademic is not stored;
    it is computed from section by the classifier on every access.
    """

    city: str
    institution: str
    title: str
    full_text: str
    salary_range: str
    section: str
    deadline: date | None
    active_date: date | None
    job_id: Any

    @property
    def is_nonacademic(self) -> bool:
        """Non-academic flag, always derived from section."""
        return classify(self.section)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict with ISO dates."""
        return {
            "city": self.city,
            "institution": self.institution,
            "title": self.title,
            "full_text": self.full_text,
            "salary_range": self.salary_range,
            "section": self.section,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "active_date": self.active_date.isoformat() if self.active_date else None,
            "job_id": self.job_id,
            "is_nonacademic": self.is_nonacademic,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Posting":
        """
        Rebuild Posting from to_dict() output.

        Raises:
            KeyError: If a field is missing
            ValueError: If a stored date is not ISO formatted
        """
        return cls(
            city=data["city"],
            institution=data["institution"],
            title=data["title"],
            full_text=data["full_text"],
            salary_range=data["salary_range"],
            section=data["section"],
            deadline=_parse_iso(data["deadline"]),
            active_date=_parse_iso(data["active_date"]),
            job_id=data["job_id"],
        )


def _parse_iso(value: str | None) -> date | None:
    if value is None:
        return None
    return date.fromisoformat(value)
