"""
Data Analysis Module

Grouped means, seasonal deltas and threshold comparisons over derived readings.
"""

from typing import Dict, List, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .config import AnalysisSettings, Config
from .features import DerivedDataset
from .logger import get_logger
from .utils import percent_delta

logger = get_logger(__name__, Config.LOGS_DIR)


class ReportContext(BaseModel):
    """Overall values shared by every report section."""

    model_config = ConfigDict(frozen=True)

    settings: AnalysisSettings
    overall_pm10: float
    overall_pm25: float
    total_records: int
    pm10_valid_records: int


def build_context(dataset: DerivedDataset, settings: AnalysisSettings) -> ReportContext:
    """
    Compute the overall means the delta and threshold sections compare against.

    Args:
        dataset: Derived readings
        settings: Settings in force for this run

    Returns:
        Frozen ReportContext
    """
    valid = dataset.pm10_valid

    context = ReportContext(
        settings=settings,
        overall_pm10=float(valid["pm10"].mean()),
        overall_pm25=float(dataset.readings["pm25"].mean()),
        total_records=len(dataset),
        pm10_valid_records=len(valid),
    )

    logger.info(
        f"Overall means: PM10={context.overall_pm10:.2f}, PM2.5={context.overall_pm25:.2f}"
    )

    return context


def grouped_means(dataset: DerivedDataset, keys: Union[str, List[str]]) -> pd.DataFrame:
    """
    Mean PM10 and PM2.5 per group.

    PM10 is averaged over the PM10-valid readings and PM2.5 over all readings,
    so a row with only a PM2.5 value still contributes to its group. Groups
    with no readings do not appear.

    Args:
        dataset: Derived readings
        keys: Column name(s) to group by

    Returns:
        DataFrame indexed by the key(s) with columns pm10 and pm25
    """
    pm25 = dataset.readings.groupby(keys, observed=True, sort=True)["pm25"].mean()
    pm10 = dataset.pm10_valid.groupby(keys, observed=True, sort=True)["pm10"].mean()

    result = pd.DataFrame({"pm25": pm25})
    result["pm10"] = pm10

    return result[["pm10", "pm25"]]


def hourly_means(dataset: DerivedDataset) -> pd.DataFrame:
    """Mean PM10 and PM2.5 by hour of day (0-23)."""
    return grouped_means(dataset, "hour")


def monthly_means(dataset: DerivedDataset) -> pd.DataFrame:
    """Mean PM10 and PM2.5 by month, in calendar order."""
    return grouped_means(dataset, "month")


def weekday_means(dataset: DerivedDataset) -> pd.DataFrame:
    """Mean PM10 and PM2.5 by weekday, Monday first."""
    return grouped_means(dataset, "weekday")


def month_hour_means(dataset: DerivedDataset) -> pd.DataFrame:
    """Mean PM10 and PM2.5 by (month, hour)."""
    return grouped_means(dataset, ["month", "hour"])


def season_hour_means(dataset: DerivedDataset) -> pd.DataFrame:
    """Mean PM10 and PM2.5 by (season, hour)."""
    return grouped_means(dataset, ["season", "hour"])


def _delta(series: pd.Series, overall: float) -> pd.Series:
    return series.apply(lambda value: percent_delta(value, overall))


def season_means(dataset: DerivedDataset, context: ReportContext) -> pd.DataFrame:
    """
    Mean PM10 and PM2.5 per season, with the percentage difference from the overall mean.

    Seasons are ordered Summer, Autumn, Winter, Spring. The deltas are NaN when
    the overall mean is zero or undefined.

    Args:
        dataset: Derived readings
        context: Report context holding the overall means

    Returns:
        DataFrame indexed by season with columns pm10, pm25, pm10_delta_pct, pm25_delta_pct
    """
    logger.info("Calculating seasonal means")

    result = grouped_means(dataset, "season")
    result["pm10_delta_pct"] = _delta(result["pm10"], context.overall_pm10)
    result["pm25_delta_pct"] = _delta(result["pm25"], context.overall_pm25)

    return result


def daily_means(dataset: DerivedDataset) -> pd.DataFrame:
    """Mean PM10 and PM2.5 per local calendar date, oldest first."""
    return grouped_means(dataset, "date")


def top_days(daily: pd.DataFrame, column: str, n: int = Config.TOP_N) -> pd.DataFrame:
    """
    Days with the highest mean for a pollutant.

    The sort is stable, so days with equal means keep their chronological
    order. Days without a value for the column are left out.

    Args:
        daily: Output of daily_means
        column: 'pm10' or 'pm25'
        n: Number of days to return

    Returns:
        Up to n rows of daily, highest first
    """
    if column not in daily.columns:
        raise ValueError(f"Invalid column: {column}")

    ranked = daily.dropna(subset=[column]).sort_values(column, ascending=False, kind="stable")

    return ranked.head(n)


def breach_days(daily: pd.DataFrame, column: str, limit: float) -> pd.DataFrame:
    """
    Every day whose mean for a pollutant is strictly above the limit.

    Args:
        daily: Output of daily_means
        column: 'pm10' or 'pm25'
        limit: Daily limit in µg/m³

    Returns:
        Breaching rows of daily, in chronological order
    """
    if column not in daily.columns:
        raise ValueError(f"Invalid column: {column}")

    breaches = daily[daily[column] > limit]

    logger.info(f"Found {len(breaches):,} days with {column} above {limit}")

    return breaches


def yearly_pm25(dataset: DerivedDataset, context: ReportContext) -> pd.DataFrame:
    """
    Annual PM2.5 mean compared with the annual limit.

    Completeness is advisory: a year is averaged whatever its row count and
    ``complete`` only flags whether its rows reached ``expected_rows_per_year``
    (null when that setting is unset). ``samples`` counts the PM2.5 values
    behind the mean; ``exceeds_limit`` is null for a year without any.

    Args:
        dataset: Derived readings
        context: Report context holding the settings

    Returns:
        DataFrame indexed by year with columns pm25, samples, rows, exceeds_limit, complete
    """
    settings = context.settings
    years = dataset.readings.groupby("year", sort=True)
    pm25 = years["pm25"]

    result = pd.DataFrame({"pm25": pm25.mean(), "samples": pm25.count(), "rows": years.size()})
    exceeds = (result["pm25"] > settings.pm25_yearly_limit).astype("boolean")
    result["exceeds_limit"] = exceeds.mask(result["pm25"].isna())

    expected = settings.expected_rows_per_year
    if expected is None:
        result["complete"] = pd.Series(pd.NA, index=result.index, dtype="boolean")
        logger.info("Year completeness not assessed (expected_rows_per_year unset)")
    else:
        result["complete"] = (result["rows"] >= expected).astype("boolean")
        for year, rows in result.loc[~result["complete"], "rows"].items():
            logger.warning(f"Year {year} is incomplete: {rows:,} of {expected:,} expected rows")

    return result


def get_summary(dataset: DerivedDataset, context: ReportContext) -> Dict:
    """
    Get summary statistics of the derived dataset.

    Args:
        dataset: Derived readings
        context: Report context

    Returns:
        Dictionary with summary statistics
    """
    logger.info("Generating dataset summary...")

    readings = dataset.readings

    summary = {
        "raw_records": dataset.raw_records,
        "total_records": len(readings),
        "pm10_valid_records": context.pm10_valid_records,
        "dropped_timestamps": dataset.dropped_timestamps,
        "date_range": None,
        "negative_readings": dict(dataset.negative_counts),
        "null_readings": dict(dataset.null_counts),
        "overall_means": {"pm10": context.overall_pm10, "pm25": context.overall_pm25},
    }

    if len(readings) > 0:
        start = readings["datetime"].min()
        end = readings["datetime"].max()
        summary["date_range"] = {"start": start, "end": end, "days": (end - start).days}

    logger.info(f"Summary complete: {summary['total_records']:,} records analyzed")

    return summary
