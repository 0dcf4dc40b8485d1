"""
Record source interface protocol.

Defines the contract for raw listing exports. Sources return rows keyed
by the export's own column names; schema validation and mapping into
RawPosting happen in the importer.
"""

from typing import Protocol


class RecordSource(Protocol):
    """
    Protocol for raw listing sources.

    Attributes:
        source_name: Identifier for this source (e.g., "joe_export")

    Methods:
        fetch_header: Column names declared by the source
        fetch_raw_rows: All data rows as dicts keyed by column name
    """

    @property
    def source_name(self) -> str:
        """
        Identifier for this source.

        Returns:
            Source name string
        """
        ...

    def fetch_header(self) -> list[str]:
        """
        Read the source schema.

        Returns:
            List of column names in source order
        """
        ...

    def fetch_raw_rows(self) -> list[dict]:
        """
        Read all raw rows.

        Returns:
            List of dicts keyed by column name
        """
        ...
