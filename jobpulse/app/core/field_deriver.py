"""
Country filter and field derivation.

Turns RawPosting rows into Posting rows:
- keeps only rows whose location starts with the country marker
- replaces location with city (one-way: the raw location is not kept)
- parses deadline and active dates, with None for unparseable values

Date failures are row-scoped: the row is retained with a missing date and
an error entry is recorded. Nothing here raises for a bad date.
"""

from datetime import date, datetime
from typing import Any

from jobpulse.app.core.errors import DateParseError
from jobpulse.app.core.logger import get_logger
from jobpulse.app.core.posting_model import Posting, RawPosting

logger = get_logger(__name__)

DEFAULT_DATE_FORMAT = "%Y-%m-%d"

# Only the leading YYYY-MM-DD part of a raw date string is significant
DATE_PREFIX_LEN = 10


def filter_by_country(rows: list[RawPosting], marker: str) -> list[RawPosting]:
    """
    Keep rows whose location starts with marker.

    Exact, case-sensitive prefix match. Row order is preserved.

    Args:
        rows: Raw postings
        marker: Country marker, e.g. "UNITED STATES"

    Returns:
        Filtered list
    """
    return [row for row in rows if row.location.startswith(marker)]


def derive_city(location: str, prefix_len: int) -> str:
    """
    Strip the fixed-length country prefix from a location.

    Args:
        location: Raw location, e.g. "UNITED STATES-New York, NY"
        prefix_len: Number of leading characters to drop

    Returns:
        Trimmed remainder; "" when location is shorter than prefix_len

    Example:
        >>> derive_city("UNITED STATES-New York, NY", 14)
        'New York, NY'
    """
    return location[prefix_len:].strip()


def parse_date_strict(raw: Any, date_format: str = DEFAULT_DATE_FORMAT) -> date:
    """
    Parse a raw date value.

    date/datetime values pass through as dates. Anything else is turned
    into a string and its first 10 characters are parsed with date_format;
    the rest of the string is ignored. No whitespace is trimmed first, so
    a leading space shifts the window and the value does not parse.

    Raises:
        DateParseError: If the value is missing or does not match
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if raw is None:
        raise DateParseError(raw, date_format)

    text = str(raw)[:DATE_PREFIX_LEN]
    try:
        return datetime.strptime(text, date_format).date()
    except ValueError:
        raise DateParseError(raw, date_format)


def parse_date(raw: Any, date_format: str = DEFAULT_DATE_FORMAT) -> date | None:
    """
    Parse a raw date value, returning None instead of raising.

    Args:
        raw: Raw cell value
        date_format: strptime format for the 10-character prefix

    Returns:
        Parsed date, or None if unparseable
    """
    try:
        return parse_date_strict(raw, date_format)
    except DateParseError:
        return None


def derive_posting(
    raw: RawPosting,
    prefix_len: int,
    date_format: str = DEFAULT_DATE_FORMAT,
    index: int | None = None,
) -> tuple[Posting, list[dict]]:
    """
    Derive a Posting from a filtered RawPosting.

    Args:
        raw: Raw posting that already passed the country filter
        prefix_len: Country prefix length for derive_city
        date_format: Date format for the deadline and active date
        index: Optional row index for error context

    Returns:
        Tuple of (posting, errors) where errors holds one dict per date
        field that failed to parse:
            - index: int | None
            - job_id: external identifier
            - field: "deadline" or "active_date"
            - value: raw value as string
            - error: error message
    """
    errors = []
    dates = {}

    for field_name, value in (
        ("deadline", raw.deadline_raw),
        ("active_date", raw.active_date_raw),
    ):
        try:
            dates[field_name] = parse_date_strict(value, date_format)
        except DateParseError as e:
            dates[field_name] = None
            errors.append(
                {
                    "index": index,
                    "job_id": raw.job_id,
                    "field": field_name,
                    "value": "" if value is None else str(value),
                    "error": str(e),
                }
            )

    posting = Posting(
        city=derive_city(raw.location, prefix_len),
        institution=raw.institution,
        title=raw.title,
        full_text=raw.full_text,
        salary_range=raw.salary_range,
        section=raw.section,
        deadline=dates["deadline"],
        active_date=dates["active_date"],
        job_id=raw.job_id,
    )
    return posting, errors


def derive_postings(
    rows: list[RawPosting],
    prefix_len: int,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> tuple[list[Posting], list[dict]]:
    """
    Derive Postings for every row, collecting date errors.

    Every input row yields exactly one Posting, in input order.

    Returns:
        Tuple of (postings, errors); see derive_posting() for error entries
    """
    postings = []
    errors = []

    for idx, raw in enumerate(rows):
        posting, row_errors = derive_posting(raw, prefix_len, date_format, index=idx)
        postings.append(posting)
        for error in row_errors:
            logger.warning(
                "Row %d (job %s): %s left missing: %s",
                idx,
                error["job_id"],
                error["field"],
                error["error"],
            )
        errors.extend(row_errors)

    return postings, errors
