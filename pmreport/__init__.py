"""
pmreport - Particulate Matter Exploratory Report

Merges monthly PM10 / PM2.5 reading files, derives calendar features and
reports grouped means and comparisons against regulatory limits.
"""

__version__ = "0.1.0"

from .analyzer import (
    ReportContext,
    breach_days,
    build_context,
    daily_means,
    get_summary,
    hourly_means,
    month_hour_means,
    monthly_means,
    season_hour_means,
    season_means,
    top_days,
    weekday_means,
    yearly_pm25,
)
from .config import AnalysisSettings, Config
from .exceptions import (
    ConfigError,
    EmptyInputError,
    FileReadError,
    PMReportError,
    TimestampParseError,
    TimeZoneError,
)
from .features import DerivedDataset, derive_features, month_to_season
from .loader import export_merged, list_input_files, load_directory, read_reading_file
from .logger import get_logger
from .pipeline import AirQualityReport, build_report, generate_report
from .reporter import print_report, render_report

# Public API
__all__ = [
    # Config
    "Config",
    "AnalysisSettings",
    # Errors
    "PMReportError",
    "ConfigError",
    "FileReadError",
    "EmptyInputError",
    "TimestampParseError",
    "TimeZoneError",
    # Loader
    "list_input_files",
    "read_reading_file",
    "load_directory",
    "export_merged",
    # Features
    "DerivedDataset",
    "derive_features",
    "month_to_season",
    # Analyzer
    "ReportContext",
    "build_context",
    "hourly_means",
    "monthly_means",
    "weekday_means",
    "month_hour_means",
    "season_hour_means",
    "season_means",
    "daily_means",
    "top_days",
    "breach_days",
    "yearly_pm25",
    "get_summary",
    # Pipeline / report
    "AirQualityReport",
    "build_report",
    "generate_report",
    "render_report",
    "print_report",
    # Utilities
    "get_logger",
]
