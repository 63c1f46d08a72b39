"""Report Pipeline for particulate readings.

Orchestrates the complete run: Load → Derive features → Aggregate.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd

from . import analyzer
from .analyzer import ReportContext
from .config import AnalysisSettings, Config
from .features import DerivedDataset, derive_features
from .loader import load_directory
from .logger import get_logger
from .utils import format_duration

logger = get_logger(__name__, Config.LOGS_DIR)


@dataclass(frozen=True, eq=False)
class AirQualityReport:
    """Every table rendered by the reporter, computed from one dataset."""

    context: ReportContext
    dataset: DerivedDataset
    summary: Dict
    hourly: pd.DataFrame
    monthly: pd.DataFrame
    weekday: pd.DataFrame
    month_hour: pd.DataFrame
    season_hour: pd.DataFrame
    seasons: pd.DataFrame
    daily: pd.DataFrame
    top_pm10_days: pd.DataFrame
    top_pm25_days: pd.DataFrame
    pm10_breach_days: pd.DataFrame
    pm25_breach_days: pd.DataFrame
    yearly: pd.DataFrame

    @property
    def settings(self) -> AnalysisSettings:
        return self.context.settings


def build_report(dataset: DerivedDataset, settings: AnalysisSettings) -> AirQualityReport:
    """
    Compute every aggregate from a derived dataset.

    Args:
        dataset: Derived readings
        settings: Settings in force for this run

    Returns:
        AirQualityReport
    """
    context = analyzer.build_context(dataset, settings)
    daily = analyzer.daily_means(dataset)

    return AirQualityReport(
        context=context,
        dataset=dataset,
        summary=analyzer.get_summary(dataset, context),
        hourly=analyzer.hourly_means(dataset),
        monthly=analyzer.monthly_means(dataset),
        weekday=analyzer.weekday_means(dataset),
        month_hour=analyzer.month_hour_means(dataset),
        season_hour=analyzer.season_hour_means(dataset),
        seasons=analyzer.season_means(dataset, context),
        daily=daily,
        top_pm10_days=analyzer.top_days(daily, "pm10", settings.top_n),
        top_pm25_days=analyzer.top_days(daily, "pm25", settings.top_n),
        pm10_breach_days=analyzer.breach_days(daily, "pm10", settings.pm10_daily_limit),
        pm25_breach_days=analyzer.breach_days(daily, "pm25", settings.pm25_daily_limit),
        yearly=analyzer.yearly_pm25(dataset, context),
    )


def generate_report(
    input_dir: Union[str, Path],
    settings: Optional[AnalysisSettings] = None,
    pattern: str = Config.INPUT_PATTERN,
    merged_output: Optional[Union[str, Path]] = None,
    strict: bool = False,
) -> AirQualityReport:
    """
    Load, derive and aggregate the readings in a directory.

    Any fatal error propagates before a report object exists, so callers never
    render a partial report.

    Args:
        input_dir: Directory holding the monthly files
        settings: Analysis settings (environment defaults if None)
        pattern: Glob pattern for input files
        merged_output: Where to persist the merged table (not written if None)
        strict: Raise on unparseable timestamps instead of dropping them

    Returns:
        AirQualityReport

    Raises:
        PMReportError: On any fatal loading, configuration or parsing error
    """
    settings = settings or AnalysisSettings.build()
    started = time.monotonic()

    logger.info(f"Generating report for {input_dir}")

    raw = load_directory(input_dir, pattern=pattern, output_path=merged_output)
    dataset = derive_features(raw, settings, strict=strict)
    report = build_report(dataset, settings)

    logger.info(f"Report ready in {format_duration(time.monotonic() - started)}")

    return report
