"""
Weekly trends CLI.

Runs the listings pipeline for one export and prints a JSON result.
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path


def _parse_run_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid run date (expected YYYY-MM-DD): {value}")


def main(argv=None):
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (for testing)

    Returns:
        Exit code (0=success, 1=error, 2=no rows after country filter)
    """
    parser = argparse.ArgumentParser(
        description="Build weekly job-listing counts and charts from a listings export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full run on a downloaded export
  python -m jobpulse.scripts.trends_run \\
    --input ./joe_export.xlsx \\
    --out ./output

  # Re-aggregate from a previous checkpoint, no charts
  python -m jobpulse.scripts.trends_run \\
    --from-checkpoint ./output/postings_2025-04-20.json \\
    --out ./output \\
    --no-charts
""",
    )

    parser.add_argument(
        "--input",
        help="Path to the listings export (.xlsx or .csv)",
    )

    parser.add_argument(
        "--out",
        required=True,
        help="Output directory for tables, exports and charts (will create if needed)",
    )

    parser.add_argument(
        "--run-date",
        type=_parse_run_date,
        default=None,
        help="Date stamped into output filenames, YYYY-MM-DD (default: today)",
    )

    parser.add_argument(
        "--country",
        default="UNITED STATES",
        help="Location prefix of retained postings (default: UNITED STATES)",
    )

    parser.add_argument(
        "--city-offset",
        type=int,
        default=None,
        help="Characters stripped from location to get the city (default: len(country) + 1)",
    )

    parser.add_argument(
        "--sheet",
        default=None,
        help="Sheet name inside the workbook (default: first sheet)",
    )

    parser.add_argument(
        "--no-charts",
        action="store_true",
        help="Skip chart rendering (tables and exports are still written)",
    )

    parser.add_argument(
        "--from-checkpoint",
        default=None,
        help="Aggregate from a checkpoint JSON instead of importing the export",
    )

    args = parser.parse_args(argv)

    try:
        # Validate inputs
        if args.from_checkpoint is None and args.input is None:
            result = {
                "status": "error",
                "error": "One of --input or --from-checkpoint is required",
            }
            print(json.dumps(result, indent=2, sort_keys=True))
            return 1

        input_path = args.from_checkpoint or args.input
        if not Path(input_path).exists():
            result = {
                "status": "error",
                "error": f"Input file not found: {input_path}",
            }
            print(json.dumps(result, indent=2, sort_keys=True))
            return 1

        # Import after validation
        from jobpulse.app.core.config import PipelineConfig
        from jobpulse.app.core.errors import (
            EmptyResultError,
            RecordImportError,
            ReshapeCategoryMismatchError,
        )
        from jobpulse.app.core.trend_runner import run_from_checkpoint, run_trends

        config = PipelineConfig(
            input_path=args.input or "",
            output_dir=args.out,
            run_date=args.run_date or date.today(),
            country_marker=args.country,
            city_offset=args.city_offset,
            sheet_name=args.sheet,
            render_charts=not args.no_charts,
        )

        try:
            if args.from_checkpoint:
                run_result = run_from_checkpoint(args.from_checkpoint, config)
            else:
                run_result = run_trends(config)
        except EmptyResultError as e:
            result = {
                "status": "empty",
                "error": str(e),
                "country": e.marker,
                "scanned": e.scanned,
            }
            print(json.dumps(result, indent=2, sort_keys=True))
            return 2
        except RecordImportError as e:
            result = {
                "status": "error",
                "error": str(e),
                "error_type": type(e).__name__,
                "missing_columns": e.missing_columns,
            }
            print(json.dumps(result, indent=2, sort_keys=True))
            return 1
        except ReshapeCategoryMismatchError as e:
            result = {
                "status": "error",
                "error": str(e),
                "error_type": type(e).__name__,
                "value": str(e.value),
            }
            print(json.dumps(result, indent=2, sort_keys=True))
            return 1

        result = {
            **run_result,
            "status": "success",
            "output_dir": str(Path(args.out).absolute()),
        }
        print(json.dumps(result, indent=2, sort_keys=True))
        return 0

    except Exception as e:
        result = {
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }
        print(json.dumps(result, indent=2, sort_keys=True))
        return 1


if __name__ == "__main__":
    sys.exit(main())
