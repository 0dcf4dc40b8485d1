"""
Persistence for pipeline outputs.

Writes the checkpoint table, the non-academic export, wide tables and the
date error log. Each file is written to a temporary sibling and moved into
place, so a failed run never leaves a half-written file behind.
"""

import csv
import io
import json
import os
import tempfile
from pathlib import Path

from jobpulse.app.core.posting_model import Posting
from jobpulse.app.core.series_reshaper import WideTable

NONACADEMIC_FIELDNAMES = [
    "deadline",
    "institution",
    "title",
    "job_id",
    "active_date",
    "salary_range",
    "full_text",
    "city",
]


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Write bytes to path via a temp sibling and os.replace.

    The final file gets the umask-derived mode of a normally created
    file. On any failure the temp file is removed and an existing file at
    path is left untouched.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, output_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise


def _atomic_write_text(path: str, text: str) -> None:
    atomic_write_bytes(path, text.encode("utf-8"))


def write_checkpoint(postings: list[Posting], path: str) -> None:
    """
    Write the full filtered, derived and classified table as JSON.

    Args:
        postings: All retained postings (both labels)
        path: Output file path (will be created/overwritten)

    Notes:
        - Sorted keys, 2-space indent, ISO dates, null for missing dates
        - Row order is the import order
        - Identical input gives byte-identical output
    """
    data = [posting.to_dict() for posting in postings]
    text = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    _atomic_write_text(path, text)


def load_checkpoint(path: str) -> list[Posting]:
    """
    Load a checkpoint written by write_checkpoint().

    Args:
        path: Checkpoint file path

    Returns:
        List of Posting in stored order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or not a list of postings
    """
    checkpoint_path = Path(path)
    if not checkpoint_path.exists():
        raise FileNotFoundError(f"Checkpoint not found: {checkpoint_path}")

    try:
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in checkpoint {checkpoint_path}: {str(e)}")

    if not isinstance(data, list):
        raise ValueError(
            f"Expected checkpoint to be a list, got {type(data).__name__}"
        )

    postings = []
    for idx, entry in enumerate(data):
        try:
            postings.append(Posting.from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid checkpoint entry {idx}: {e}")
    return postings


def write_nonacademic_csv(postings: list[Posting], path: str) -> int:
    """
    Write non-academic postings to CSV.

    Args:
        postings: All retained postings; academic ones are skipped
        path: Output file path (will be created/overwritten)

    Returns:
        Number of rows written

    CSV Columns:
        deadline, institution, title, job_id, active_date, salary_range,
        full_text, city

    Notes:
        - Missing dates are written as empty strings
        - Rows without an active date are included
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=NONACADEMIC_FIELDNAMES)
    writer.writeheader()

    written = 0
    for posting in postings:
        if not posting.is_nonacademic:
            continue
        writer.writerow(
            {
                "deadline": posting.deadline.isoformat() if posting.deadline else "",
                "institution": posting.institution,
                "title": posting.title,
                "job_id": posting.job_id,
                "active_date": posting.active_date.isoformat() if posting.active_date else "",
                "salary_range": posting.salary_range,
                "full_text": posting.full_text,
                "city": posting.city,
            }
        )
        written += 1

    _atomic_write_text(path, buffer.getvalue())
    return written


def write_wide_table_csv(table: WideTable, path: str) -> None:
    """
    Write a wide table to CSV.

    Columns are "week" followed by the table's category columns in order.
    An empty table produces a header-only file.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=["week", *table.columns])
    writer.writeheader()
    for record in table.to_records():
        writer.writerow(record)

    _atomic_write_text(path, buffer.getvalue())


def write_errors_json(errors: list[dict], path: str) -> None:
    """Write row-scoped error entries as JSON."""
    text = json.dumps(errors, indent=2, sort_keys=True, ensure_ascii=False, default=str)
    _atomic_write_text(path, text + "\n")
