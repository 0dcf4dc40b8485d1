"""
Unit tests for weekly_trends pipeline.

Tests the executable weekly trends entry point.
"""

from datetime import date
from pathlib import Path

import pytest

from pipelines.weekly_trends import run_weekly_trends
from scripts.generate_xlsx_fixture import SAMPLE_ROWS, generate_listings_xlsx


def test_run_weekly_trends_basic(tmp_path):
    """Full run from an export file."""
    export = generate_listings_xlsx(str(tmp_path / "export.xlsx"), SAMPLE_ROWS)

    result = run_weekly_trends(
        export,
        str(tmp_path / "out"),
        run_date=date(2025, 4, 20),
        render_charts=False,
    )

    # Verify result structure
    assert result["status"] == "ok"
    assert "counts" in result
    assert "outputs" in result
    assert result["counts"]["retained"] == 4
    assert Path(result["outputs"]["checkpoint"]).name == "postings_2025-04-20.json"


def test_run_weekly_trends_from_checkpoint(tmp_path):
    """Checkpoint runs skip import and reuse the persisted table."""
    export = generate_listings_xlsx(str(tmp_path / "export.xlsx"), SAMPLE_ROWS)
    first = run_weekly_trends(
        export, str(tmp_path / "out"), run_date=date(2025, 4, 20), render_charts=False
    )

    export_file = Path(export)
    export_file.unlink()

    resumed = run_weekly_trends(
        output_dir=str(tmp_path / "resumed"),
        run_date=date(2025, 4, 21),
        checkpoint=first["outputs"]["checkpoint"],
        render_charts=False,
    )

    assert resumed["run_date"] == "2025-04-21"
    assert resumed["totals"] == first["totals"]
    assert Path(resumed["outputs"]["tables"]["detailed"]).name == "weekly_detailed_2025-04-21.csv"


def test_run_weekly_trends_requires_output_dir(tmp_path):
    with pytest.raises(ValueError, match="output_dir"):
        run_weekly_trends("export.xlsx")


def test_run_weekly_trends_requires_an_input(tmp_path):
    with pytest.raises(ValueError, match="input_path, checkpoint or source"):
        run_weekly_trends(output_dir=str(tmp_path))
