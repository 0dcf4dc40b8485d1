"""
Unit tests for week_bucket.py

Tests Monday-start week buckets and their labels.
"""

from datetime import date

import pytest

from jobpulse.app.core.week_bucket import WeekBucket, week_of


def test_week_of_monday_start():
    """Every day Monday..Sunday maps to the same Monday."""
    for day in range(14, 21):
        assert week_of(date(2025, 4, day)).start == date(2025, 4, 14)


def test_sunday_belongs_to_previous_monday():
    assert week_of(date(2025, 4, 13)).start == date(2025, 4, 7)


def test_label_format():
    assert week_of(date(2025, 4, 16)).label == "2025w16"
    assert week_of(date(2025, 1, 8)).label == "2025w02"
    assert str(week_of(date(2025, 4, 16))) == "2025w16"


def test_label_uses_iso_year_at_year_boundary():
    """The week starting 2024-12-30 is ISO week 1 of 2025."""
    bucket = week_of(date(2025, 1, 1))
    assert bucket.start == date(2024, 12, 30)
    assert bucket.label == "2025w01"


def test_end_is_sunday():
    assert week_of(date(2025, 4, 16)).end == date(2025, 4, 20)


def test_buckets_are_ordered_and_hashable():
    a = week_of(date(2025, 4, 1))
    b = week_of(date(2025, 4, 9))
    assert a < b
    assert sorted([b, a]) == [a, b]
    assert {a, week_of(date(2025, 4, 2))} == {a}


def test_start_must_be_monday():
    with pytest.raises(ValueError, match="Monday"):
        WeekBucket(start=date(2025, 4, 16))
