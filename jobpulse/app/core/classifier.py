"""
Academic / non-academic classification.

classify() is the single source of truth for the broad split. It relies
on a naming convention of the export: every academic section label
contains the literal word "Academic". The section vocabulary is a closed
set fixed at design time, not user input.

A label such as "Non-Academic Outreach" would be misclassified as
academic. No such label exists in the current vocabulary.

SectionCategory is the detailed vocabulary, in display order.
"""

from enum import Enum

from jobpulse.app.core.errors import ReshapeCategoryMismatchError


ACADEMIC_MARKER = "Academic"


def classify(section: str) -> bool:
    """
    Classify a section as non-academic.

    Case-sensitive substring search, no normalization.

    Args:
        section: Raw section string

    Returns:
        True if section does NOT contain "Academic" (non-academic),
        False otherwise

    Example:
        >>> classify("US: Full-Time Academic")
        False
        >>> classify("Other Nonacademic")
        True
    """
    return ACADEMIC_MARKER not in section


class SectionCategory(str, Enum):
    """Detailed section categories, declared in display order."""

    US_FULL_TIME_ACADEMIC = "us_full_time_academic"
    US_VISITING_ACADEMIC = "us_visiting_academic"
    US_ADJUNCT_ACADEMIC = "us_adjunct_academic"
    INTERNATIONAL_ACADEMIC = "international_academic"
    FULL_TIME_NONACADEMIC = "full_time_nonacademic"
    OTHER_NONACADEMIC = "other_nonacademic"

    @property
    def label(self) -> str:
        """Display label used for table columns and chart legends."""
        return SECTION_LABELS[self]

    @property
    def order(self) -> int:
        """Zero-based display position."""
        return SECTION_ORDER.index(self)

    @classmethod
    def from_section(cls, section: str) -> "SectionCategory":
        """
        Map a raw section string to its category.

        Args:
            section: Raw section string from the export

        Returns:
            Matching SectionCategory

        Raises:
            ReshapeCategoryMismatchError: If section is not in the vocabulary
        """
        key = section.strip()
        if key not in RAW_SECTION_MAP:
            raise ReshapeCategoryMismatchError(section, expected=sorted(RAW_SECTION_MAP))
        return RAW_SECTION_MAP[key]


SECTION_ORDER = tuple(SectionCategory)

SECTION_LABELS = {
    SectionCategory.US_FULL_TIME_ACADEMIC: "US Full-Time Academic",
    SectionCategory.US_VISITING_ACADEMIC: "US Visiting/Temporary Academic",
    SectionCategory.US_ADJUNCT_ACADEMIC: "US Part-Time/Adjunct Academic",
    SectionCategory.INTERNATIONAL_ACADEMIC: "International Academic",
    SectionCategory.FULL_TIME_NONACADEMIC: "Full-Time Nonacademic",
    SectionCategory.OTHER_NONACADEMIC: "Other Nonacademic",
}

# Raw section strings as they appear in the export
RAW_SECTION_MAP = {
    "US: Full-Time Academic (Permanent, Tenure Track or Tenured)": SectionCategory.US_FULL_TIME_ACADEMIC,
    "US: Full-Time Academic": SectionCategory.US_FULL_TIME_ACADEMIC,
    "US: Other Academic (Visiting or Temporary)": SectionCategory.US_VISITING_ACADEMIC,
    "US: Other Academic (Part-time or Adjunct)": SectionCategory.US_ADJUNCT_ACADEMIC,
    "International: Full-Time Academic (Permanent, Tenure Track or Tenured)": SectionCategory.INTERNATIONAL_ACADEMIC,
    "International: Other Academic (Visiting or Temporary)": SectionCategory.INTERNATIONAL_ACADEMIC,
    "Full-Time Nonacademic": SectionCategory.FULL_TIME_NONACADEMIC,
    "Other Nonacademic": SectionCategory.OTHER_NONACADEMIC,
}

# Broad split: academic first, then non-academic
BROAD_ORDER = (False, True)

BROAD_LABELS = {
    False: "Academic",
    True: "Non-academic",
}
