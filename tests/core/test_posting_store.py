"""
Unit tests for posting_store.py

Tests checkpoint persistence and CSV exports.
"""

import csv
import json
import os
import stat
from datetime import date

import pytest

from jobpulse.app.core.posting_model import Posting
from jobpulse.app.core.posting_store import (
    NONACADEMIC_FIELDNAMES,
    atomic_write_bytes,
    load_checkpoint,
    write_checkpoint,
    write_errors_json,
    write_nonacademic_csv,
    write_wide_table_csv,
)
from jobpulse.app.core.series_reshaper import reshape_broad
from jobpulse.app.core.weekly_aggregator import aggregate_broad


def _posting(section, active, deadline=None, job_id=1, city="Boston, MA"):
    return Posting(
        city=city,
        institution="Inst é",
        title="Economist",
        full_text="Line one\nLine two, with comma",
        salary_range="$100,000",
        section=section,
        deadline=deadline,
        active_date=active,
        job_id=job_id,
    )


@pytest.fixture
def postings():
    return [
        _posting("US: Full-Time Academic", date(2025, 4, 1), date(2025, 5, 1), 1),
        _posting("Other Nonacademic", date(2025, 4, 1), None, 2),
        _posting("Full-Time Nonacademic", None, date(2025, 6, 1), 3, city="Washington, DC"),
    ]


def test_write_checkpoint_round_trip(tmp_path, postings):
    path = tmp_path / "postings.json"
    write_checkpoint(postings, str(path))

    assert load_checkpoint(str(path)) == postings


def test_write_checkpoint_is_byte_identical(tmp_path, postings):
    first = tmp_path / "a" / "postings.json"
    second = tmp_path / "b" / "postings.json"

    write_checkpoint(postings, str(first))
    write_checkpoint(list(postings), str(second))

    assert first.read_bytes() == second.read_bytes()


def test_write_checkpoint_content(tmp_path, postings):
    path = tmp_path / "postings.json"
    write_checkpoint(postings, str(path))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data) == 3
    assert data[1]["deadline"] is None
    assert data[2]["active_date"] is None
    assert data[0]["is_nonacademic"] is False
    assert list(data[0]) == sorted(data[0])


def test_write_checkpoint_leaves_no_temp_files(tmp_path, postings):
    write_checkpoint(postings, str(tmp_path / "postings.json"))

    assert [p.name for p in tmp_path.iterdir()] == ["postings.json"]


def test_load_checkpoint_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_checkpoint(str(tmp_path / "missing.json"))


def test_load_checkpoint_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")

    with pytest.raises(ValueError, match="Invalid JSON"):
        load_checkpoint(str(path))


def test_load_checkpoint_wrong_structure(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"postings": []}))

    with pytest.raises(ValueError, match="Expected checkpoint to be a list"):
        load_checkpoint(str(path))


def test_load_checkpoint_bad_entry(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"city": "x"}]))

    with pytest.raises(ValueError, match="Invalid checkpoint entry 0"):
        load_checkpoint(str(path))


def test_write_nonacademic_csv_filters_and_orders_columns(tmp_path, postings):
    path = tmp_path / "out" / "nonacademic.csv"
    written = write_nonacademic_csv(postings, str(path))

    assert written == 2

    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
        assert reader.fieldnames == NONACADEMIC_FIELDNAMES

    assert [r["job_id"] for r in rows] == ["2", "3"]
    assert rows[0]["deadline"] == ""
    assert rows[0]["active_date"] == "2025-04-01"
    assert rows[1]["active_date"] == ""
    assert rows[1]["deadline"] == "2025-06-01"
    assert rows[1]["city"] == "Washington, DC"
    assert rows[0]["full_text"] == "Line one\nLine two, with comma"


def test_nonacademic_field_order():
    assert NONACADEMIC_FIELDNAMES == [
        "deadline",
        "institution",
        "title",
        "job_id",
        "active_date",
        "salary_range",
        "full_text",
        "city",
    ]


def test_write_nonacademic_csv_headers_only_when_none(tmp_path, postings):
    path = tmp_path / "nonacademic.csv"
    assert write_nonacademic_csv(postings[:1], str(path)) == 0

    assert path.read_text(encoding="utf-8").strip() == ",".join(NONACADEMIC_FIELDNAMES)


def test_write_wide_table_csv(tmp_path, postings):
    table = reshape_broad(aggregate_broad(postings))
    path = tmp_path / "weekly_broad.csv"

    write_wide_table_csv(table, str(path))

    with open(path, "r", encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))

    assert rows == [{"week": "2025w14", "Academic": "1", "Non-academic": "1"}]


def test_write_errors_json(tmp_path):
    errors = [{"index": 0, "job_id": 5, "field": "deadline", "value": "", "error": "x"}]
    path = tmp_path / "errors.json"

    write_errors_json(errors, str(path))

    assert json.loads(path.read_text(encoding="utf-8")) == errors


@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    yield
    os.umask(previous)


@pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
def test_outputs_follow_umask(tmp_path, postings, umask_022):
    checkpoint = tmp_path / "postings.json"
    export = tmp_path / "nonacademic.csv"
    write_checkpoint(postings, str(checkpoint))
    write_nonacademic_csv(postings, str(export))

    assert stat.S_IMODE(checkpoint.stat().st_mode) == 0o644
    assert stat.S_IMODE(export.stat().st_mode) == 0o644


def test_failed_replace_keeps_previous_file(tmp_path, postings, monkeypatch):
    path = tmp_path / "postings.json"
    path.write_text("previous", encoding="utf-8")

    def failing_replace(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr(os, "replace", failing_replace)

    with pytest.raises(OSError, match="rename failed"):
        write_checkpoint(postings, str(path))

    assert path.read_text(encoding="utf-8") == "previous"
    assert [p.name for p in tmp_path.iterdir()] == ["postings.json"]


def test_atomic_write_bytes(tmp_path):
    path = tmp_path / "nested" / "chart.png"
    atomic_write_bytes(str(path), b"\x89PNG data")

    assert path.read_bytes() == b"\x89PNG data"
    assert [p.name for p in path.parent.iterdir()] == ["chart.png"]
