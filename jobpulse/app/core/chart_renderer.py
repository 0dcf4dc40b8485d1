"""
Bar chart rendering for weekly wide tables.

Thin adapter over matplotlib (Agg backend, file output only). Figures are
rendered to memory and written atomically. All aggregation is done
upstream; each function takes a finished WideTable.
"""

import io

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from jobpulse.app.core.classifier import BROAD_LABELS, SECTION_LABELS, SECTION_ORDER  # noqa: E402
from jobpulse.app.core.posting_store import atomic_write_bytes  # noqa: E402
from jobpulse.app.core.series_reshaper import WideTable  # noqa: E402

plt.rcParams["figure.dpi"] = 120
plt.rcParams["savefig.dpi"] = 200
plt.rcParams["axes.titlesize"] = 14
plt.rcParams["axes.labelsize"] = 11

OVERALL_COLOR = "#2F5D8C"

BROAD_COLORS = {
    BROAD_LABELS[False]: "#2F5D8C",
    BROAD_LABELS[True]: "#D9822B",
}

# Fixed per-category colors in display order
SECTION_COLORS = dict(
    zip(
        [SECTION_LABELS[category] for category in SECTION_ORDER],
        ["#1B4F72", "#5DADE2", "#A9CCE3", "#7D3C98", "#D35400", "#F5B041"],
    )
)


def _prepare_axes(table: WideTable, title: str):
    fig, ax = plt.subplots(figsize=(max(6, 0.6 * len(table.weeks) + 3), 4.5))
    ax.set_title(title)
    ax.set_xlabel("Week")
    ax.set_ylabel("Postings")
    ax.grid(axis="y", alpha=0.3)
    ax.set_axisbelow(True)
    return fig, ax


def _finish(fig, ax, table: WideTable, path: str) -> None:
    positions = list(range(len(table.weeks)))
    ax.set_xticks(positions)
    ax.set_xticklabels(table.week_labels(), rotation=45, ha="right")
    fig.tight_layout()

    # Render fully in memory; only a finished PNG reaches path
    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight")
    finally:
        plt.close(fig)
    atomic_write_bytes(path, buffer.getvalue())


def render_overall_chart(table: WideTable, path: str, title: str = "Weekly postings") -> None:
    """Single-series bar chart of the overall weekly counts."""
    fig, ax = _prepare_axes(table, title)
    positions = list(range(len(table.weeks)))
    ax.bar(positions, table.column(table.columns[0]), color=OVERALL_COLOR)
    _finish(fig, ax, table, path)


def render_broad_chart(
    table: WideTable, path: str, title: str = "Weekly postings: academic vs. non-academic"
) -> None:
    """Side-by-side bars, one per broad category per week."""
    fig, ax = _prepare_axes(table, title)

    n = len(table.columns)
    width = 0.8 / n
    for j, label in enumerate(table.columns):
        offsets = [i - 0.4 + width * (j + 0.5) for i in range(len(table.weeks))]
        ax.bar(
            offsets,
            table.column(label),
            width=width,
            label=label,
            color=BROAD_COLORS.get(label),
        )

    ax.legend(frameon=False)
    _finish(fig, ax, table, path)


def render_detailed_chart(
    table: WideTable, path: str, title: str = "Weekly postings by section"
) -> None:
    """Stacked bars in section display order."""
    fig, ax = _prepare_axes(table, title)

    positions = list(range(len(table.weeks)))
    bottoms = [0] * len(table.weeks)
    for label in table.columns:
        values = table.column(label)
        ax.bar(
            positions,
            values,
            bottom=bottoms,
            label=label,
            color=SECTION_COLORS.get(label),
        )
        bottoms = [b + v for b, v in zip(bottoms, values)]

    # Legend reads top-down in stacking order
    handles, labels = ax.get_legend_handles_labels()
    ax.legend(
        handles[::-1],
        labels[::-1],
        frameon=False,
        fontsize=8,
        loc="upper left",
        bbox_to_anchor=(1.0, 1.0),
    )
    _finish(fig, ax, table, path)
