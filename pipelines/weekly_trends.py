"""
Weekly Trends Pipeline

High-level workflow turning a listings export into weekly counts and charts.
"""

# Pipeline: Weekly Listing Trends
# Purpose: Track weekly job-listing volume, split academic / non-academic
#
# Steps:
#   1. import_records
#      - Input: Manually downloaded listings export (.xlsx or .csv)
#      - Output: RawPosting rows
#      - Failure: Missing columns abort the run (RecordImportError)
#
#   2. filter_and_derive
#      - Input: RawPosting rows
#      - Output: Postings for the target country with city and parsed dates
#      - Failure: Unparseable dates become missing, row retained
#      - Failure: Zero rows after filtering abort the run (EmptyResultError)
#
#   3. aggregate_weekly
#      - Input: Postings with an active date
#      - Output: Overall, broad and detailed counts per Monday-start week
#      - Failure: Unknown section aborts the run (ReshapeCategoryMismatchError)
#
#   4. reshape_and_store
#      - Input: Weekly counts
#      - Output: Checkpoint JSON, non-academic CSV, wide-table CSVs, charts
#
# Dependencies:
#   - Steps 1-4 run sequentially
#   - The three views in step 3 are independent
#
# Schedule:
#   - Manual, once per downloaded export


def run_weekly_trends(
    input_path: str = None,
    output_dir: str = None,
    run_date=None,
    checkpoint: str = None,
    render_charts: bool = True,
    source=None,
) -> dict:
    """
    Execute the weekly trends pipeline.

    Args:
        input_path: Listings export path (ignored when checkpoint is given)
        output_dir: Output folder
        run_date: datetime.date used in output filenames (default: today)
        checkpoint: Optional checkpoint JSON to aggregate from instead of
            importing the export again
        render_charts: Whether to render PNG charts
        source: Optional RecordSource overriding input_path

    Returns:
        Result dict from run_trends() or run_from_checkpoint()

    Example:
        >>> result = run_weekly_trends("joe_export.xlsx", "out")
        >>> result["counts"]["retained"]
        412
    """
    from datetime import date

    from jobpulse.app.core.config import PipelineConfig
    from jobpulse.app.core.trend_runner import run_from_checkpoint, run_trends

    if output_dir is None:
        raise ValueError("output_dir is required")
    if input_path is None and checkpoint is None and source is None:
        raise ValueError("One of input_path, checkpoint or source is required")

    config = PipelineConfig(
        input_path=input_path or "",
        output_dir=output_dir,
        run_date=run_date or date.today(),
        render_charts=render_charts,
    )

    if checkpoint is not None:
        return run_from_checkpoint(checkpoint, config)
    return run_trends(config, source=source)
