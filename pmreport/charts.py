"""
Report Charts

Saves the report's aggregate tables as PNG charts.
"""

from pathlib import Path
from typing import List, Optional, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from .config import POLLUTANT_LABELS, Config  # noqa: E402
from .logger import get_logger  # noqa: E402
from .pipeline import AirQualityReport  # noqa: E402

logger = get_logger(__name__, Config.LOGS_DIR)

DPI = 120
UNIT = "µg/m³"


def _save(fig, path: Path) -> Path:
    fig.tight_layout()
    fig.savefig(path, dpi=DPI)
    plt.close(fig)
    logger.debug(f"Saved chart: {path.name}")
    return path


def plot_means(df: pd.DataFrame, title: str, xlabel: str, path: Path) -> Path:
    """Line chart of mean PM10 and PM2.5 against a single key."""
    fig, ax = plt.subplots(figsize=(10, 4))
    for column, label in POLLUTANT_LABELS.items():
        ax.plot([str(k) for k in df.index], df[column].values, marker="o", label=label)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(UNIT)
    ax.legend()
    return _save(fig, path)


def plot_profiles(df: pd.DataFrame, column: str, title: str, path: Path) -> Path:
    """One hour-of-day line per group of a (group, hour) table."""
    wide = df[column].unstack("hour")
    fig, ax = plt.subplots(figsize=(10, 5))
    for group, row in wide.iterrows():
        ax.plot(row.index, row.values, label=str(group))
    ax.set_title(title)
    ax.set_xlabel("Hour")
    ax.set_ylabel(UNIT)
    ax.legend(ncol=2, fontsize="small")
    return _save(fig, path)


def plot_seasons(seasons: pd.DataFrame, path: Path) -> Path:
    """Grouped bar chart of seasonal means."""
    fig, ax = plt.subplots(figsize=(8, 4))
    seasons[["pm10", "pm25"]].rename(columns=POLLUTANT_LABELS).plot.bar(ax=ax, rot=0)
    ax.set_title("Mean concentration by season")
    ax.set_xlabel("Season")
    ax.set_ylabel(UNIT)
    return _save(fig, path)


def plot_daily(daily: pd.DataFrame, column: str, limit: float, path: Path) -> Path:
    """Daily means with the daily limit drawn as a horizontal line."""
    label = POLLUTANT_LABELS[column]
    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(pd.to_datetime(daily.index), daily[column].values, linewidth=0.8, label=label)
    ax.axhline(limit, color="red", linestyle="--", label=f"Daily limit ({limit:g} {UNIT})")
    ax.set_title(f"Daily mean {label}")
    ax.set_ylabel(UNIT)
    ax.legend()
    return _save(fig, path)


def plot_yearly(yearly: pd.DataFrame, limit: float, path: Path) -> Path:
    """Annual PM2.5 means against the annual limit."""
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar([str(y) for y in yearly.index], yearly["pm25"].values, label="PM2.5")
    ax.axhline(limit, color="red", linestyle="--", label=f"Annual standard ({limit:g} {UNIT})")
    ax.set_title("Annual mean PM2.5")
    ax.set_ylabel(UNIT)
    ax.legend()
    return _save(fig, path)


def plot_report(report: AirQualityReport, output_dir: Optional[Union[str, Path]] = None) -> List[Path]:
    """
    Save every report chart.

    Tables with no rows are skipped.

    Args:
        report: Computed report
        output_dir: Directory for the PNG files (Config.FIGURES_DIR if None)

    Returns:
        Paths of the saved charts
    """
    output_dir = Path(output_dir) if output_dir else Config.FIGURES_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    settings = report.settings

    saved = []

    if not report.hourly.empty:
        saved.append(plot_means(report.hourly, "Mean concentration by hour of day", "Hour",
                                output_dir / "hourly_means.png"))
    if not report.monthly.empty:
        saved.append(plot_means(report.monthly, "Mean concentration by month", "Month",
                                output_dir / "monthly_means.png"))
    if not report.month_hour.empty:
        saved.append(plot_profiles(report.month_hour, "pm10", "PM10 by hour for each month",
                                   output_dir / "month_hour_pm10.png"))
    if not report.season_hour.empty:
        saved.append(plot_profiles(report.season_hour, "pm10", "PM10 by hour for each season",
                                   output_dir / "season_hour_pm10.png"))
    if not report.seasons.empty:
        saved.append(plot_seasons(report.seasons, output_dir / "season_means.png"))
    if not report.daily.empty:
        saved.append(plot_daily(report.daily, "pm10", settings.pm10_daily_limit,
                                output_dir / "daily_pm10.png"))
        saved.append(plot_daily(report.daily, "pm25", settings.pm25_daily_limit,
                                output_dir / "daily_pm25.png"))
    if not report.yearly.empty:
        saved.append(plot_yearly(report.yearly, settings.pm25_yearly_limit,
                                 output_dir / "yearly_pm25.png"))

    logger.info(f"Saved {len(saved)} charts to {output_dir}")

    return saved
