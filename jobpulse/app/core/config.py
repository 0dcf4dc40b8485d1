"""
Run configuration.

Everything a run depends on is passed in explicitly: input file, output
folder, run date (used to disambiguate filenames) and the fixed filter
parameters. No process-wide state and no environment variables.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from jobpulse.app.core.field_deriver import DEFAULT_DATE_FORMAT

DEFAULT_COUNTRY_MARKER = "UNITED STATES"


@dataclass(frozen=True)
class PipelineConfig:
    """
    Frozen configuration for one pipeline run.

    Attributes:
        input_path: Listings export (.xlsx or .csv)
        output_dir: Folder receiving all outputs
        run_date: Date stamped into output filenames (default: today)
        country_marker: Location prefix of retained rows
        city_offset: Characters stripped from location to get the city
            (None = len(country_marker) + 1, marker plus separator)
        date_format: strptime format of the 10-character date prefix
        sheet_name: Spreadsheet sheet to read (None = first sheet)
        render_charts: Whether to render PNG charts
    """

    input_path: str
    output_dir: str
    run_date: date = field(default_factory=date.today)
    country_marker: str = DEFAULT_COUNTRY_MARKER
    city_offset: int | None = None
    date_format: str = DEFAULT_DATE_FORMAT
    sheet_name: str | None = None
    render_charts: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if not self.country_marker:
            raise ValueError("country_marker must be a non-empty string")
        if self.city_offset is not None and self.city_offset < 0:
            raise ValueError(f"city_offset must be >= 0, got {self.city_offset}")
        if not isinstance(self.run_date, date):
            raise ValueError(
                f"run_date must be a date, got {type(self.run_date).__name__}"
            )
        if isinstance(self.run_date, datetime):
            # Filenames carry the calendar day only
            object.__setattr__(self, "run_date", self.run_date.date())

    @property
    def prefix_len(self) -> int:
        """Resolved city offset."""
        if self.city_offset is None:
            return len(self.country_marker) + 1
        return self.city_offset

    @property
    def run_stamp(self) -> str:
        return self.run_date.isoformat()

    def output_path(self, stem: str, suffix: str) -> str:
        """
        Build a run-stamped output path.

        Example:
            >>> cfg = PipelineConfig("in.xlsx", "out", run_date=date(2025, 4, 20))
            >>> cfg.output_path("postings", ".json")
            'out/postings_2025-04-20.json'
        """
        return str(Path(self.output_dir) / f"{stem}_{self.run_stamp}{suffix}")
