"""
Unit tests for classifier.py

Tests the academic / non-academic split and the section vocabulary.
"""

import pytest

from jobpulse.app.core.classifier import (
    BROAD_LABELS,
    BROAD_ORDER,
    RAW_SECTION_MAP,
    SECTION_ORDER,
    SectionCategory,
    classify,
)
from jobpulse.app.core.errors import ReshapeCategoryMismatchError


def test_classify_academic_section():
    """Academic sections are not non-academic."""
    assert classify("US: Full-Time Academic") is False
    assert classify("US: Other Academic (Visiting or Temporary)") is False


def test_classify_nonacademic_section():
    """Sections without "Academic" are non-academic."""
    assert classify("Full-Time Nonacademic") is True
    assert classify("Other Nonacademic") is True


def test_classify_empty_section_is_nonacademic():
    """Empty string has no "Academic" substring."""
    assert classify("") is True


def test_classify_is_case_sensitive():
    """Lowercase "academic" does not count."""
    assert classify("Full-Time academic") is True


def test_classify_substring_heuristic_known_limitation():
    """Labels embedding the word are treated as academic."""
    assert classify("Non-Academic Outreach") is False


def test_every_raw_section_agrees_with_classify():
    """Vocabulary members land on the side classify() puts them."""
    nonacademic = {
        SectionCategory.FULL_TIME_NONACADEMIC,
        SectionCategory.OTHER_NONACADEMIC,
    }
    for raw, category in RAW_SECTION_MAP.items():
        assert classify(raw) is (category in nonacademic), raw


def test_section_order_has_six_categories():
    """Display order is the declaration order."""
    assert len(SECTION_ORDER) == 6
    assert SECTION_ORDER[0] is SectionCategory.US_FULL_TIME_ACADEMIC
    assert SECTION_ORDER[-1] is SectionCategory.OTHER_NONACADEMIC
    assert [c.order for c in SECTION_ORDER] == list(range(6))


def test_from_section_full_and_short_labels():
    """Long and short full-time academic labels map to one category."""
    long_label = "US: Full-Time Academic (Permanent, Tenure Track or Tenured)"
    assert SectionCategory.from_section(long_label) is SectionCategory.US_FULL_TIME_ACADEMIC
    assert (
        SectionCategory.from_section("US: Full-Time Academic")
        is SectionCategory.US_FULL_TIME_ACADEMIC
    )


def test_from_section_strips_whitespace():
    assert (
        SectionCategory.from_section("  Other Nonacademic ")
        is SectionCategory.OTHER_NONACADEMIC
    )


def test_from_section_unknown_raises():
    """Unknown sections are reported with the offending value."""
    with pytest.raises(ReshapeCategoryMismatchError) as exc_info:
        SectionCategory.from_section("Postdoctoral Fellowship")

    assert exc_info.value.value == "Postdoctoral Fellowship"
    assert "Postdoctoral Fellowship" in str(exc_info.value)


def test_labels_are_unique():
    labels = [c.label for c in SECTION_ORDER]
    assert len(set(labels)) == len(labels)


def test_broad_order_academic_first():
    assert BROAD_ORDER == (False, True)
    assert BROAD_LABELS[False] == "Academic"
    assert BROAD_LABELS[True] == "Non-academic"
