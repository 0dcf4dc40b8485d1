"""
Long-to-wide reshaping of weekly aggregates.

Columns come from a caller-supplied category order, never from the order
categories happen to appear in the data. Every (week, category) cell is
filled; absent combinations are 0.
"""

from dataclasses import dataclass
from typing import Any

import pandas as pd

from jobpulse.app.core.classifier import (
    BROAD_LABELS,
    BROAD_ORDER,
    SECTION_LABELS,
    SECTION_ORDER,
)
from jobpulse.app.core.errors import ReshapeCategoryMismatchError
from jobpulse.app.core.week_bucket import WeekBucket
from jobpulse.app.core.weekly_aggregator import AggregateRow

OVERALL_ORDER = (None,)
OVERALL_LABELS = {None: "Postings"}


@dataclass(frozen=True)
class WideTable:
    """
    One row per week (ascending), one column per category.

    Attributes:
        weeks: Week buckets, ascending
        columns: Column labels in declared category order
        counts: counts[i][j] = postings in weeks[i] for columns[j]
    """

    weeks: tuple[WeekBucket, ...]
    columns: tuple[str, ...]
    counts: tuple[tuple[int, ...], ...]

    def column(self, label: str) -> list[int]:
        """
        Counts of one column across all weeks.

        Raises:
            KeyError: If label is not a column
        """
        if label not in self.columns:
            raise KeyError(f"Unknown column: {label}")
        j = self.columns.index(label)
        return [row[j] for row in self.counts]

    def week_labels(self) -> list[str]:
        return [week.label for week in self.weeks]

    def totals(self) -> dict[str, int]:
        """Total count per column."""
        return {label: sum(self.column(label)) for label in self.columns}

    def to_records(self) -> list[dict]:
        """
        Row dicts for export.

        Returns:
            List of {"week": label, <column>: count, ...} in week order
        """
        records = []
        for week, row in zip(self.weeks, self.counts):
            record = {"week": week.label}
            for label, count in zip(self.columns, row):
                record[label] = count
            records.append(record)
        return records


def reshape_wide(
    rows: list[AggregateRow],
    category_order: tuple,
    labels: dict[Any, str] | None = None,
) -> WideTable:
    """
    Pivot aggregate rows to a wide table.

    Args:
        rows: AggregateRow list from one aggregation path
        category_order: Categories in column order
        labels: Optional category -> column label map (default: str(category))

    Returns:
        WideTable with one row per distinct week in rows and exactly
        len(category_order) columns, zero-filled. Duplicate
        (week, category) rows are summed.

    Raises:
        ReshapeCategoryMismatchError: If a row's category is not in category_order
    """
    index = {category: j for j, category in enumerate(category_order)}
    columns = tuple(
        labels[category] if labels else str(category) for category in category_order
    )

    for row in rows:
        if row.category not in index:
            raise ReshapeCategoryMismatchError(row.category, expected=category_order)

    if not rows:
        return WideTable(weeks=(), columns=columns, counts=())

    long = pd.DataFrame(
        {
            "week_start": [row.week.start for row in rows],
            "column": [index[row.category] for row in rows],
            "count": [row.count for row in rows],
        }
    )
    wide = (
        long.pivot_table(
            index="week_start",
            columns="column",
            values="count",
            aggfunc="sum",
            fill_value=0,
        )
        .reindex(columns=range(len(category_order)), fill_value=0)
        .sort_index()
    )

    return WideTable(
        weeks=tuple(WeekBucket(week_start) for week_start in wide.index),
        columns=columns,
        counts=tuple(
            tuple(int(count) for count in counts) for counts in wide.itertuples(index=False)
        ),
    )


def reshape_overall(rows: list[AggregateRow]) -> WideTable:
    return reshape_wide(rows, OVERALL_ORDER, OVERALL_LABELS)


def reshape_broad(rows: list[AggregateRow]) -> WideTable:
    return reshape_wide(rows, BROAD_ORDER, BROAD_LABELS)


def reshape_detailed(rows: list[AggregateRow]) -> WideTable:
    return reshape_wide(rows, SECTION_ORDER, SECTION_LABELS)
