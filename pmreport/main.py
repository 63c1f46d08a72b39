"""
Command-line entry point for pmreport.
"""

import argparse
import sys

from .charts import plot_report
from .config import AnalysisSettings, Config
from .exceptions import PMReportError
from .logger import Logger, get_logger
from .pipeline import generate_report
from .reporter import print_report

logger = get_logger(__name__, Config.LOGS_DIR)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pmreport",
        description="Particulate matter (PM10 / PM2.5) exploratory report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pmreport data/raw                                     # Report on every CSV in data/raw
  pmreport data/raw --merged-output                     # Also save data/processed/merged_readings.csv
  pmreport data/raw --merged-output merged.parquet      # Save the merged table as Parquet
  pmreport data/raw --expected-rows-per-year 8760       # Flag years with fewer hourly samples
  pmreport data/raw --no-charts --timezone Australia/Sydney

Defaults can also be set through environment variables (or a .env file):
  PMREPORT_TIMEZONE, PMREPORT_PM10_DAILY_LIMIT, PMREPORT_PM25_DAILY_LIMIT,
  PMREPORT_PM25_YEARLY_LIMIT, PMREPORT_EXPECTED_ROWS_PER_YEAR,
  PMREPORT_NEGATIVE_READINGS, PMREPORT_LOG_DIR, PMREPORT_LOG_LEVEL
        """,
    )

    parser.add_argument(
        "input_dir",
        nargs="?",
        default=Config.DATA_RAW,
        help=f"Directory holding the monthly files (default: {Config.DATA_RAW})",
    )
    parser.add_argument(
        "--pattern", default=Config.INPUT_PATTERN, help="Glob pattern for input files (default: *.csv)"
    )
    parser.add_argument(
        "--merged-output",
        nargs="?",
        const=Config.DATA_PROCESSED / Config.MERGED_FILENAME,
        help="Save the merged table (.csv or .parquet); without a value saves to data/processed",
    )
    parser.add_argument("--figures-dir", help=f"Directory for charts (default: {Config.FIGURES_DIR})")
    parser.add_argument("--no-charts", action="store_true", help="Skip chart generation")
    parser.add_argument("--timezone", help="Time zone the timestamps are recorded in")
    parser.add_argument("--timestamp-format", help="strptime format of the timestamps")
    parser.add_argument("--pm10-daily-limit", type=float, help="PM10 daily limit in µg/m³")
    parser.add_argument("--pm25-daily-limit", type=float, help="PM2.5 daily limit in µg/m³")
    parser.add_argument("--pm25-yearly-limit", type=float, help="PM2.5 annual limit in µg/m³")
    parser.add_argument(
        "--expected-rows-per-year",
        type=int,
        help="Samples a year needs to count as complete (completeness not assessed if unset)",
    )
    parser.add_argument(
        "--negative-readings",
        choices=["exclude", "include"],
        help="Treat negative readings as faults (exclude) or keep them in means (include)",
    )
    parser.add_argument("--top-n", type=int, help="Number of most polluted days to list")
    parser.add_argument(
        "--strict-timestamps",
        action="store_true",
        help="Abort on the first unparseable timestamp instead of dropping the row",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        Logger.set_level("DEBUG")

    try:
        settings = AnalysisSettings.build(
            timezone=args.timezone,
            timestamp_format=args.timestamp_format,
            pm10_daily_limit=args.pm10_daily_limit,
            pm25_daily_limit=args.pm25_daily_limit,
            pm25_yearly_limit=args.pm25_yearly_limit,
            expected_rows_per_year=args.expected_rows_per_year,
            negative_readings=args.negative_readings,
            top_n=args.top_n,
        )
        report = generate_report(
            args.input_dir,
            settings=settings,
            pattern=args.pattern,
            merged_output=args.merged_output,
            strict=args.strict_timestamps,
        )
    except PMReportError as e:
        logger.error(f"Report failed: {e}")
        return 1

    print_report(report)

    if not args.no_charts:
        plot_report(report, args.figures_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
