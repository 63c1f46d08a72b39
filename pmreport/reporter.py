"""
Report Rendering

Formats the aggregate tables of an AirQualityReport as plain text.
"""

import math
from typing import Callable, Dict, List

import pandas as pd

from .config import POLLUTANT_LABELS
from .pipeline import AirQualityReport

WIDTH = 60
UNIT = "µg/m³"


def format_value(value) -> str:
    """Two-decimal rendering; missing values render as n/a."""
    if value is None or value is pd.NA or (isinstance(value, float) and math.isnan(value)):
        return "n/a"
    return f"{value:.2f}"


def format_percent(value) -> str:
    """Signed percentage with two decimals."""
    if value is None or value is pd.NA or (isinstance(value, float) and math.isnan(value)):
        return "n/a"
    return f"{value:+.2f}%"


def format_flag(value) -> str:
    """yes / no, or n/a when the comparison had no value."""
    if value is None or pd.isna(value):
        return "n/a"
    return "yes" if value else "no"


def _heading(title: str) -> List[str]:
    return ["", "=" * WIDTH, title, "=" * WIDTH]


def _table(df: pd.DataFrame, formatters: Dict[str, Callable], headers: Dict[str, str]) -> str:
    if df.empty:
        return "(no rows)"

    display = df[list(formatters)].copy()
    for column, formatter in formatters.items():
        display[column] = display[column].map(formatter)

    return display.rename(columns=headers).to_string()


def _means_table(df: pd.DataFrame) -> str:
    return _table(
        df,
        {"pm10": format_value, "pm25": format_value},
        {column: f"{label} ({UNIT})" for column, label in POLLUTANT_LABELS.items()},
    )


def render_summary(report: AirQualityReport) -> List[str]:
    summary = report.summary
    lines = _heading("DATASET SUMMARY")

    lines.append(f"Raw Records: {summary['raw_records']:,}")
    lines.append(f"Records Analyzed: {summary['total_records']:,}")
    lines.append(f"Records With Valid PM10: {summary['pm10_valid_records']:,}")
    lines.append(f"Dropped (unparseable timestamp): {summary['dropped_timestamps']:,}")

    if summary["date_range"]:
        dr = summary["date_range"]
        lines.append(f"Date Range: {dr['start']} to {dr['end']} ({dr['days']} days)")

    policy = report.settings.negative_readings
    for column, count in summary["negative_readings"].items():
        action = "excluded" if policy == "exclude" else "included"
        lines.append(f"Negative {POLLUTANT_LABELS[column]} Readings ({action}): {count:,}")

    for column, count in summary["null_readings"].items():
        lines.append(f"Missing {POLLUTANT_LABELS[column]} Readings: {count:,}")

    means = summary["overall_means"]
    lines.append(f"Overall Mean PM10: {format_value(means['pm10'])} {UNIT}")
    lines.append(f"Overall Mean PM2.5: {format_value(means['pm25'])} {UNIT}")

    return lines


def render_yearly(report: AirQualityReport) -> List[str]:
    limit = report.settings.pm25_yearly_limit
    expected = report.settings.expected_rows_per_year
    yearly = report.yearly

    lines = _heading(f"ANNUAL MEAN PM2.5 VS ANNUAL STANDARD ({format_value(limit)} {UNIT})")
    lines.append(
        _table(
            yearly,
            {
                "pm25": format_value,
                "samples": lambda v: f"{v:,}",
                "rows": lambda v: f"{v:,}",
                "exceeds_limit": format_flag,
            },
            {
                "pm25": f"PM2.5 ({UNIT})",
                "samples": "Samples",
                "rows": "Rows",
                "exceeds_limit": "Above Standard",
            },
        )
    )

    if expected is None:
        lines.append("Note: year completeness was not assessed (expected rows per year not set).")
    else:
        for year, row in yearly.iterrows():
            if not row["complete"]:
                lines.append(
                    f"Caveat: {year} is incomplete ({row['rows']:,} of {expected:,} expected rows, "
                    f"{row['samples']:,} with PM2.5); its annual mean is indicative only."
                )

    return lines


def render_report(report: AirQualityReport) -> str:
    """
    Render the full report.

    Args:
        report: Computed report

    Returns:
        Report text
    """
    settings = report.settings
    n = settings.top_n
    lines = render_summary(report)

    lines += _heading("MEAN PM10 AND PM2.5 BY HOUR OF DAY")
    lines.append(_means_table(report.hourly))

    lines += _heading("MEAN PM10 AND PM2.5 BY MONTH")
    lines.append(_means_table(report.monthly))

    lines += _heading("MEAN PM10 AND PM2.5 BY WEEKDAY")
    lines.append(_means_table(report.weekday))

    lines += _heading("MEAN PM10 AND PM2.5 BY SEASON (DIFFERENCE FROM OVERALL MEAN)")
    lines.append(
        _table(
            report.seasons,
            {
                "pm10": format_value,
                "pm10_delta_pct": format_percent,
                "pm25": format_value,
                "pm25_delta_pct": format_percent,
            },
            {
                "pm10": f"PM10 ({UNIT})",
                "pm10_delta_pct": "PM10 vs Mean",
                "pm25": f"PM2.5 ({UNIT})",
                "pm25_delta_pct": "PM2.5 vs Mean",
            },
        )
    )

    lines += _heading(f"TOP {n} DAYS BY MEAN PM10")
    lines.append(_means_table(report.top_pm10_days))

    lines += _heading(f"TOP {n} DAYS BY MEAN PM2.5")
    lines.append(_means_table(report.top_pm25_days))

    for column, breaches, limit in [
        ("pm10", report.pm10_breach_days, settings.pm10_daily_limit),
        ("pm25", report.pm25_breach_days, settings.pm25_daily_limit),
    ]:
        label = POLLUTANT_LABELS[column]
        lines += _heading(f"DAYS ABOVE THE {label} DAILY LIMIT ({format_value(limit)} {UNIT})")
        lines.append(f"Breach Days: {len(breaches):,}")
        lines.append(_means_table(breaches))

    lines += render_yearly(report)

    return "\n".join(lines) + "\n"


def print_report(report: AirQualityReport) -> None:
    """Print the rendered report to console."""
    print(render_report(report))
