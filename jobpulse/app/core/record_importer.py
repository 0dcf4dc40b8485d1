"""
Record importer.

Validates the schema of a raw listings source and maps its rows into
RawPosting instances. The column set is an external contract controlled
by the export producer; missing or renamed columns fail loudly before
any row is read.
"""

from jobpulse.app.core.errors import RecordImportError
from jobpulse.app.core.logger import get_logger
from jobpulse.app.core.posting_model import REQUIRED_COLUMNS, RawPosting
from jobpulse.app.core.record_source import RecordSource

logger = get_logger(__name__)


def validate_schema(header: list[str], source_name: str = "") -> None:
    """
    Check that every required column is present.

    Args:
        header: Column names declared by the source
        source_name: Source identifier for error context

    Raises:
        RecordImportError: Listing every missing column, in contract order
    """
    present = set(header)
    missing = [column for column in REQUIRED_COLUMNS if column not in present]
    if missing:
        raise RecordImportError(missing, source_name=source_name)


def import_records(source: RecordSource) -> list[RawPosting]:
    """
    Import raw postings from a source.

    Args:
        source: RecordSource implementation

    Returns:
        List of RawPosting in source row order

    Raises:
        RecordImportError: If required columns are absent from the source schema
        FileNotFoundError: If the source file does not exist
        ValueError: If the source file cannot be read
    """
    header = source.fetch_header()
    validate_schema(header, source.source_name)

    rows = source.fetch_raw_rows()
    records = [RawPosting.from_row(row) for row in rows]

    logger.info(
        "Imported %d records from source '%s'", len(records), source.source_name
    )
    return records
