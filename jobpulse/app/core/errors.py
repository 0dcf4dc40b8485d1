"""
Error taxonomy for the weekly trends pipeline.

Schema and vocabulary errors are fatal and abort the run before any
output is written. Date errors are row-scoped and recovered locally.
"""


class JobPulseError(Exception):
    """Base class for all pipeline errors."""

    pass


class RecordImportError(JobPulseError):
    """
    Raised when the raw source lacks required columns.

    Attributes:
        missing_columns: External column names absent from the source
        source_name: Identifier of the source that was read
    """

    def __init__(self, missing_columns: list[str], source_name: str = ""):
        self.missing_columns = list(missing_columns)
        self.source_name = source_name
        where = f" in source '{source_name}'" if source_name else ""
        super().__init__(
            f"Missing required columns{where}: {', '.join(self.missing_columns)}"
        )


class DateParseError(JobPulseError):
    """Raised when a single row's date field does not match the expected format."""

    def __init__(self, value, date_format: str):
        self.value = value
        self.date_format = date_format
        super().__init__(f"Cannot parse date {value!r} with format {date_format!r}")


class EmptyResultError(JobPulseError):
    """
    Raised when no rows remain after country filtering.

    Usually means the export format or locale changed, not that the
    market is empty.
    """

    def __init__(self, marker: str, scanned: int):
        self.marker = marker
        self.scanned = scanned
        super().__init__(
            f"No rows with location starting with {marker!r} "
            f"(scanned {scanned} rows)"
        )


class ReshapeCategoryMismatchError(JobPulseError):
    """Raised when a category value falls outside the declared vocabulary."""

    def __init__(self, value, expected=None):
        self.value = value
        self.expected = list(expected) if expected is not None else []
        message = f"Unknown category value: {value!r}"
        if self.expected:
            message += f" (expected one of {self.expected})"
        super().__init__(message)
