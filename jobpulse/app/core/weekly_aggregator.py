"""
Weekly aggregation.

Three independent counting paths over the same read-only Posting list:
- overall: by week
- broad: by (week, is_nonacademic)
- detailed: by (week, SectionCategory)

Postings without an active date are excluded from every path; they are
neither counted nor given an "unknown" bucket. For each path the counts
sum to the number of postings with an active date.

Output rows are sorted by week, then by category display order.
"""

from dataclasses import dataclass
from typing import Any

import pandas as pd

from jobpulse.app.core.classifier import BROAD_ORDER, SECTION_ORDER, SectionCategory
from jobpulse.app.core.posting_model import Posting
from jobpulse.app.core.week_bucket import WeekBucket, week_of


@dataclass(frozen=True)
class AggregateRow:
    """
    Count of postings for one (week, category) pair.

    category is None for the overall view, a bool (is_nonacademic) for
    the broad view and a SectionCategory for the detailed view.
    """

    week: WeekBucket
    category: Any
    count: int

    def to_dict(self) -> dict:
        if isinstance(self.category, SectionCategory):
            category = self.category.value
        else:
            category = self.category
        return {
            "week": self.week.label,
            "week_start": self.week.start.isoformat(),
            "category": category,
            "count": self.count,
        }


def dated_postings(postings: list[Posting]) -> list[Posting]:
    """Postings eligible for weekly aggregation (active date present)."""
    return [p for p in postings if p.active_date is not None]


def postings_frame(postings: list[Posting]) -> pd.DataFrame:
    """
    One row per dated posting with its week start, flag and section.

    Columns: week_start, is_nonacademic, section. Postings without an
    active date are dropped here.
    """
    dated = dated_postings(postings)
    return pd.DataFrame(
        {
            "week_start": [week_of(p.active_date).start for p in dated],
            "is_nonacademic": [p.is_nonacademic for p in dated],
            "section": [p.section for p in dated],
        },
        columns=["week_start", "is_nonacademic", "section"],
    )


def _aggregate(
    frame: pd.DataFrame,
    categories: list,
    category_order: tuple,
) -> list[AggregateRow]:
    # Group on display rank so the groupby sort is week, then display order
    rank = {category: idx for idx, category in enumerate(category_order)}
    ranks = [rank[category] for category in categories]

    grouped = frame.assign(rank=ranks).groupby(["week_start", "rank"]).size()
    return [
        AggregateRow(
            week=WeekBucket(week_start),
            category=category_order[category_rank],
            count=int(count),
        )
        for (week_start, category_rank), count in grouped.items()
    ]


def aggregate_overall(postings: list[Posting]) -> list[AggregateRow]:
    """Count postings per week."""
    frame = postings_frame(postings)
    return _aggregate(frame, [None] * len(frame), (None,))


def aggregate_broad(postings: list[Posting]) -> list[AggregateRow]:
    """Count postings per week and academic flag (academic first)."""
    frame = postings_frame(postings)
    return _aggregate(frame, frame["is_nonacademic"].tolist(), BROAD_ORDER)


def aggregate_detailed(postings: list[Posting]) -> list[AggregateRow]:
    """
    Count postings per week and detailed section.

    Raises:
        ReshapeCategoryMismatchError: If a dated posting's section is
            outside the SectionCategory vocabulary
    """
    frame = postings_frame(postings)
    categories = [SectionCategory.from_section(section) for section in frame["section"]]
    return _aggregate(frame, categories, SECTION_ORDER)
