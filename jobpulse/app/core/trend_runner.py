"""
Weekly trends runner.

Runs the pipeline for one listings export:
import -> country filter -> derive -> classify -> aggregate -> reshape,
then persists the checkpoint table, the non-academic export, the three
wide tables, the charts and the date error log.

All tables are computed before the first file is written, so fatal
errors (schema, empty filter result, unknown section) leave no outputs.
"""

from dataclasses import dataclass, field
from pathlib import Path

from jobpulse.app.core.config import PipelineConfig
from jobpulse.app.core.errors import EmptyResultError
from jobpulse.app.core.field_deriver import derive_postings, filter_by_country
from jobpulse.app.core.file_record_source import CsvRecordSource, XlsxRecordSource
from jobpulse.app.core.logger import get_logger
from jobpulse.app.core.posting_model import Posting
from jobpulse.app.core.posting_store import (
    load_checkpoint,
    write_checkpoint,
    write_errors_json,
    write_nonacademic_csv,
    write_wide_table_csv,
)
from jobpulse.app.core.record_importer import import_records
from jobpulse.app.core.record_source import RecordSource
from jobpulse.app.core.series_reshaper import (
    WideTable,
    reshape_broad,
    reshape_detailed,
    reshape_overall,
)
from jobpulse.app.core.weekly_aggregator import (
    aggregate_broad,
    aggregate_detailed,
    aggregate_overall,
    dated_postings,
)

logger = get_logger(__name__)

VIEWS = ("overall", "broad", "detailed")


@dataclass
class PreparedPostings:
    """
    Output of the import/filter/derive stage.

    Attributes:
        postings: Retained, derived postings in import order
        errors: Row-scoped date error entries
        imported: Number of rows read from the source
    """

    postings: list[Posting]
    errors: list[dict] = field(default_factory=list)
    imported: int = 0


def source_for_path(path: str, sheet_name: str | None = None) -> RecordSource:
    """
    Pick a record source by file extension.

    .csv files use CsvRecordSource; everything else is read as a workbook.
    """
    if Path(path).suffix.lower() == ".csv":
        return CsvRecordSource("listings_export", path)
    return XlsxRecordSource("listings_export", path, sheet_name=sheet_name)


def prepare_postings(
    config: PipelineConfig, source: RecordSource | None = None
) -> PreparedPostings:
    """
    Import, filter and derive postings.

    Args:
        config: Run configuration
        source: Optional source override (default: chosen from config.input_path)

    Returns:
        PreparedPostings

    Raises:
        RecordImportError: If required columns are missing
        EmptyResultError: If no row matches the country marker
    """
    if source is None:
        source = source_for_path(config.input_path, config.sheet_name)

    records = import_records(source)

    retained = filter_by_country(records, config.country_marker)
    if not retained:
        raise EmptyResultError(config.country_marker, len(records))
    logger.info(
        "Retained %d of %d records for '%s'",
        len(retained),
        len(records),
        config.country_marker,
    )

    postings, errors = derive_postings(retained, config.prefix_len, config.date_format)
    return PreparedPostings(postings=postings, errors=errors, imported=len(records))


def build_weekly_tables(postings: list[Posting]) -> dict[str, WideTable]:
    """
    Aggregate and reshape the three weekly views.

    Each view is computed independently from the same postings.

    Returns:
        Dict with keys "overall", "broad", "detailed"

    Raises:
        ReshapeCategoryMismatchError: If a dated posting has an unknown section
    """
    return {
        "overall": reshape_overall(aggregate_overall(postings)),
        "broad": reshape_broad(aggregate_broad(postings)),
        "detailed": reshape_detailed(aggregate_detailed(postings)),
    }


def _write_weekly_outputs(
    tables: dict[str, WideTable], config: PipelineConfig
) -> tuple[dict[str, str], dict[str, str]]:
    table_paths = {}
    for view in VIEWS:
        path = config.output_path(f"weekly_{view}", ".csv")
        write_wide_table_csv(tables[view], path)
        table_paths[view] = path

    chart_paths = {}
    if config.render_charts:
        from jobpulse.app.core.chart_renderer import (
            render_broad_chart,
            render_detailed_chart,
            render_overall_chart,
        )

        renderers = {
            "overall": render_overall_chart,
            "broad": render_broad_chart,
            "detailed": render_detailed_chart,
        }
        for view in VIEWS:
            path = config.output_path(f"weekly_{view}", ".png")
            renderers[view](tables[view], path)
            chart_paths[view] = path

    return table_paths, chart_paths


def _week_span(table: WideTable) -> dict:
    labels = table.week_labels()
    return {
        "count": len(labels),
        "first": labels[0] if labels else None,
        "last": labels[-1] if labels else None,
    }


def run_trends(
    config: PipelineConfig, source: RecordSource | None = None
) -> dict:
    """
    Run the full pipeline.

    Args:
        config: Run configuration
        source: Optional source override (default: chosen from config.input_path)

    Returns:
        Dict with:
        - status: "ok"
        - run_date: ISO run date
        - counts: imported, retained, nonacademic, aggregated, date_errors
        - weeks: count/first/last week labels
        - totals: per-view column totals
        - outputs: checkpoint, nonacademic, errors, tables{view}, charts{view}

    Raises:
        RecordImportError: If required columns are missing
        EmptyResultError: If no row matches the country marker
        ReshapeCategoryMismatchError: If a section is outside the vocabulary
    """
    prepared = prepare_postings(config, source)
    postings = prepared.postings

    tables = build_weekly_tables(postings)

    checkpoint_path = config.output_path("postings", ".json")
    write_checkpoint(postings, checkpoint_path)

    nonacademic_path = config.output_path("nonacademic", ".csv")
    nonacademic_count = write_nonacademic_csv(postings, nonacademic_path)

    errors_path = config.output_path("date_errors", ".json")
    write_errors_json(prepared.errors, errors_path)

    table_paths, chart_paths = _write_weekly_outputs(tables, config)

    aggregated = len(dated_postings(postings))
    logger.info(
        "Run %s complete: %d postings, %d aggregated over %d weeks",
        config.run_stamp,
        len(postings),
        aggregated,
        len(tables["overall"].weeks),
    )

    return {
        "status": "ok",
        "run_date": config.run_stamp,
        "counts": {
            "imported": prepared.imported,
            "retained": len(postings),
            "nonacademic": nonacademic_count,
            "aggregated": aggregated,
            "date_errors": len(prepared.errors),
        },
        "weeks": _week_span(tables["overall"]),
        "totals": {view: tables[view].totals() for view in VIEWS},
        "outputs": {
            "checkpoint": checkpoint_path,
            "nonacademic": nonacademic_path,
            "errors": errors_path,
            "tables": table_paths,
            "charts": chart_paths,
        },
    }


def run_from_checkpoint(checkpoint_path: str, config: PipelineConfig) -> dict:
    """
    Run only the aggregation stage from a persisted checkpoint.

    Import and filtering are not repeated; config.input_path is ignored.

    Returns:
        Dict shaped like run_trends() output, with counts limited to
        retained and aggregated, and outputs limited to tables and charts

    Raises:
        FileNotFoundError: If the checkpoint does not exist
        ValueError: If the checkpoint is malformed
        ReshapeCategoryMismatchError: If a section is outside the vocabulary
    """
    postings = load_checkpoint(checkpoint_path)
    logger.info("Loaded %d postings from %s", len(postings), checkpoint_path)

    tables = build_weekly_tables(postings)
    table_paths, chart_paths = _write_weekly_outputs(tables, config)

    return {
        "status": "ok",
        "run_date": config.run_stamp,
        "checkpoint": str(checkpoint_path),
        "counts": {
            "retained": len(postings),
            "aggregated": len(dated_postings(postings)),
        },
        "weeks": _week_span(tables["overall"]),
        "totals": {view: tables[view].totals() for view in VIEWS},
        "outputs": {
            "tables": table_paths,
            "charts": chart_paths,
        },
    }
