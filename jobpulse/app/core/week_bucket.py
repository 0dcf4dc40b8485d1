"""
Calendar week buckets.

Weeks start on Monday (ISO 8601). A bucket is identified by its start
date; its label is "<ISO year>w<ISO week>" with a two-digit week, e.g.
"2025w16" for the week starting 2025-04-14. The ISO year keeps labels of
weeks straddling New Year unambiguous ("2025w01" starts 2024-12-30).
"""

from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True, order=True)
class WeekBucket:
    """Monday-start calendar week, ordered by start date."""

    start: date

    def __post_init__(self):
        """Validate that start is a Monday."""
        if self.start.weekday() != 0:
            raise ValueError(
                f"WeekBucket start must be a Monday, got {self.start.isoformat()}"
            )

    @classmethod
    def from_date(cls, day: date) -> "WeekBucket":
        """Bucket containing day."""
        return cls(start=day - timedelta(days=day.weekday()))

    @property
    def end(self) -> date:
        """Last day (Sunday) of the week."""
        return self.start + timedelta(days=6)

    @property
    def label(self) -> str:
        iso_year, iso_week, _ = self.start.isocalendar()
        return f"{iso_year}w{iso_week:02d}"

    def __str__(self) -> str:
        return self.label


def week_of(day: date) -> WeekBucket:
    """Week bucket containing day. Shared by all aggregation paths."""
    return WeekBucket.from_date(day)
