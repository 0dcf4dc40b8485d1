"""
Unit tests for config.py
"""

from datetime import date, datetime
from pathlib import Path

import pytest

from jobpulse.app.core.config import PipelineConfig
from jobpulse.app.core.field_deriver import DEFAULT_DATE_FORMAT


def test_defaults():
    config = PipelineConfig("export.xlsx", "out")

    assert config.country_marker == "UNITED STATES"
    assert config.prefix_len == len("UNITED STATES") + 1
    assert config.run_date == date.today()
    assert config.render_charts is True


def test_explicit_city_offset():
    config = PipelineConfig("export.xlsx", "out", city_offset=16)
    assert config.prefix_len == 16


def test_output_path_is_run_stamped():
    config = PipelineConfig("export.xlsx", "out", run_date=date(2025, 4, 20))
    assert config.output_path("postings", ".json") == str(Path("out") / "postings_2025-04-20.json")


def test_rejects_empty_marker():
    with pytest.raises(ValueError, match="country_marker"):
        PipelineConfig("export.xlsx", "out", country_marker="")


def test_rejects_negative_offset():
    with pytest.raises(ValueError, match="city_offset"):
        PipelineConfig("export.xlsx", "out", city_offset=-1)


def test_rejects_string_run_date():
    with pytest.raises(ValueError, match="run_date"):
        PipelineConfig("export.xlsx", "out", run_date="2025-04-20")


def test_is_frozen():
    config = PipelineConfig("export.xlsx", "out")
    with pytest.raises(Exception):
        config.output_dir = "elsewhere"


def test_datetime_run_date_is_normalized_to_date():
    config = PipelineConfig("export.xlsx", "out", run_date=datetime(2025, 4, 20, 9, 0))

    assert type(config.run_date) is date
    assert config.output_path("postings", ".json") == str(Path("out") / "postings_2025-04-20.json")


def test_default_date_format_matches_parser():
    assert PipelineConfig("export.xlsx", "out").date_format == DEFAULT_DATE_FORMAT
