"""
File-based record source implementations.

Adapters for the manually downloaded listings export. XlsxRecordSource
reads a spreadsheet sheet, CsvRecordSource reads a CSV dump of the same
table. Both treat the first row as the header.

Deterministic, filesystem-only, no network access.
"""

import csv
import zipfile
from pathlib import Path
from typing import Any

try:
    from openpyxl import load_workbook
    from openpyxl.utils.exceptions import InvalidFileException
except ImportError:
    raise ImportError(
        "openpyxl is required for Excel parsing. Install with: pip install openpyxl"
    )


class XlsxRecordSource:
    """
    Spreadsheet record source.

    Reads one sheet of an .xlsx export. The first row holds column names;
    each following non-blank row becomes a dict keyed by those names.
    Cell values keep the types openpyxl returns (dates stay datetimes).

    Attributes:
        source_name: Identifier for this source
        path: Path to the .xlsx file
        sheet_name: Sheet to read (None = first sheet)
    """

    def __init__(self, source_name: str, path: str, sheet_name: str | None = None):
        """
        Initialize spreadsheet record source.

        Args:
            source_name: Unique identifier for this source
            path: Path to .xlsx file
            sheet_name: Optional sheet name (default: first sheet)
        """
        self._source_name = source_name
        self._path = Path(path)
        self._sheet_name = sheet_name
        self._table: tuple[list[str], list[dict]] | None = None

    @property
    def source_name(self) -> str:
        return self._source_name

    def fetch_header(self) -> list[str]:
        header, _ = self._load()
        return header

    def fetch_raw_rows(self) -> list[dict]:
        """
        Read all data rows from the sheet.

        Returns:
            List of dicts keyed by header names

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a valid workbook or the sheet is missing
        """
        _, rows = self._load()
        return rows

    def _load(self) -> tuple[list[str], list[dict]]:
        # Header and rows come from one parse of the workbook
        if self._table is None:
            self._table = self._read_sheet()
        return self._table

    def _read_sheet(self) -> tuple[list[str], list[dict]]:
        if not self._path.exists():
            raise FileNotFoundError(f"Listings export not found: {self._path}")

        try:
            workbook = load_workbook(self._path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise ValueError(f"Invalid XLSX file {self._path}: {e}")

        try:
            if self._sheet_name is None:
                sheet = workbook.worksheets[0]
            elif self._sheet_name in workbook.sheetnames:
                sheet = workbook[self._sheet_name]
            else:
                raise ValueError(
                    f"Sheet '{self._sheet_name}' not found in {self._path}. "
                    f"Available: {', '.join(workbook.sheetnames)}"
                )

            row_iter = sheet.iter_rows(values_only=True)
            first = next(row_iter, None)
            if first is None:
                return [], []

            header = [_header_name(cell) for cell in first]

            rows = []
            for values in row_iter:
                if values is None or all(_is_blank(v) for v in values):
                    continue  # Skip blank rows
                rows.append(_zip_row(header, values))
        finally:
            workbook.close()

        return header, rows


class CsvRecordSource:
    """
    CSV record source.

    Same contract as XlsxRecordSource for exports saved as CSV. All values
    are strings.

    Attributes:
        source_name: Identifier for this source
        path: Path to the .csv file
    """

    def __init__(self, source_name: str, path: str):
        self._source_name = source_name
        self._path = Path(path)
        self._table: tuple[list[str], list[dict]] | None = None

    @property
    def source_name(self) -> str:
        return self._source_name

    def fetch_header(self) -> list[str]:
        header, _ = self._load()
        return header

    def fetch_raw_rows(self) -> list[dict]:
        """
        Read all data rows from the CSV file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        _, rows = self._load()
        return rows

    def _load(self) -> tuple[list[str], list[dict]]:
        if self._table is None:
            self._table = self._read_csv()
        return self._table

    def _read_csv(self) -> tuple[list[str], list[dict]]:
        if not self._path.exists():
            raise FileNotFoundError(f"Listings export not found: {self._path}")

        with open(self._path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            header = [name.strip() for name in (reader.fieldnames or [])]
            rows = []
            for raw in reader:
                values = list(raw.values())
                if all(_is_blank(v) for v in values):
                    continue
                rows.append({key.strip(): value for key, value in raw.items() if key})

        return header, rows


def _header_name(cell: Any) -> str:
    if cell is None:
        return ""
    return str(cell).strip()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _zip_row(header: list[str], values: tuple) -> dict:
    """Pair header names with cell values, padding short rows with None."""
    row = {}
    for idx, name in enumerate(header):
        if not name:
            continue
        row[name] = values[idx] if idx < len(values) else None
    return row
