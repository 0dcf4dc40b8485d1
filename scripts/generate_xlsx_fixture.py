"""
Generate XLSX listings exports for tests and local runs.

Creates a workbook shaped like the manual listings download: one header
row with the export's column names, one row per posting.
"""

import sys
from pathlib import Path

from openpyxl import Workbook

EXPORT_COLUMNS = [
    "jp_id",
    "jp_section",
    "jp_institution",
    "jp_title",
    "location",
    "jp_full_text",
    "jp_salary_range",
    "Application_deadline",
    "Date_Active",
]

SAMPLE_ROWS = [
    {
        "jp_id": 101,
        "jp_section": "US: Full-Time Academic (Permanent, Tenure Track or Tenured)",
        "jp_institution": "University of Michigan",
        "jp_title": "Assistant Professor of Economics",
        "location": "UNITED STATES-Ann Arbor, MI",
        "jp_full_text": "Tenure-track position in applied microeconomics.",
        "jp_salary_range": "",
        "Application_deadline": "2025-05-01 23:59:00",
        "Date_Active": "2025-04-01 08:00:00",
    },
    {
        "jp_id": 102,
        "jp_section": "Other Nonacademic",
        "jp_institution": "Federal Reserve Bank of Boston",
        "jp_title": "Research Economist",
        "location": "UNITED STATES-Boston, MA",
        "jp_full_text": "Research role in the regional studies group.",
        "jp_salary_range": "$120,000 - $150,000",
        "Application_deadline": "2025-05-15 23:59:00",
        "Date_Active": "2025-04-01 09:30:00",
    },
    {
        "jp_id": 103,
        "jp_section": "Other Nonacademic",
        "jp_institution": "Bank of Canada",
        "jp_title": "Economist",
        "location": "CANADA-Toronto",
        "jp_full_text": "Economist position.",
        "jp_salary_range": "",
        "Application_deadline": "2025-05-20 23:59:00",
        "Date_Active": "2025-04-02 10:00:00",
    },
    {
        "jp_id": 104,
        "jp_section": "Full-Time Nonacademic",
        "jp_institution": "Brattle Group",
        "jp_title": "Associate",
        "location": "UNITED STATES-Washington, DC",
        "jp_full_text": "Consulting associate.",
        "jp_salary_range": "",
        "Application_deadline": "",
        "Date_Active": "2025-04-09 12:00:00",
    },
    {
        "jp_id": 105,
        "jp_section": "US: Other Academic (Visiting or Temporary)",
        "jp_institution": "Boston University",
        "jp_title": "Visiting Lecturer",
        "location": "UNITED STATES-Boston, MA",
        "jp_full_text": "One-year visiting position.",
        "jp_salary_range": "",
        "Application_deadline": "2025-06-01",
        "Date_Active": "not a date",
    },
]


def generate_listings_xlsx(
    output_path: str,
    rows: list[dict],
    columns: list[str] | None = None,
    sheet_title: str = "Listings",
) -> str:
    """
    Generate a listings export workbook.

    Args:
        output_path: Path where XLSX should be saved
        rows: Dicts keyed by column name; missing keys become empty cells
        columns: Header row (default: EXPORT_COLUMNS)
        sheet_title: Title of the single sheet

    Returns:
        Output path as string
    """
    columns = columns or EXPORT_COLUMNS

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title

    sheet.append(columns)
    for row in rows:
        sheet.append([row.get(column) for column in columns])

    workbook.save(output_file)
    return str(output_file)


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else "sample_listings.xlsx"
    print(generate_listings_xlsx(target, SAMPLE_ROWS))
