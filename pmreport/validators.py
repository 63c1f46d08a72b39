"""
Data Validation Module

Schema checks and reading-quality assessment for particulate readings.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import pandas as pd

from .config import READING_COLUMNS, Config
from .logger import get_logger

logger = get_logger(__name__, Config.LOGS_DIR)


@dataclass(frozen=True)
class ReadingQuality:
    """Null and negative counts per pollutant column."""

    total_records: int
    null_counts: Dict[str, int] = field(default_factory=dict)
    negative_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def negative_total(self) -> int:
        return sum(self.negative_counts.values())

    def __str__(self) -> str:
        parts = [f"Total Records: {self.total_records:,}"]
        for column, count in self.null_counts.items():
            parts.append(f"Null {column}: {count:,}")
        for column, count in self.negative_counts.items():
            parts.append(f"Negative {column}: {count:,}")
        return "\n".join(parts)


def validate_schema(df: pd.DataFrame) -> List[str]:
    """
    Check that a raw reading table has the expected column count.

    Column names are not checked: monthly exports label their columns
    inconsistently, so columns are matched by position.

    Args:
        df: Raw DataFrame as read from one file

    Returns:
        List of schema issues (empty if valid)
    """
    issues = []

    expected = len(READING_COLUMNS)
    if len(df.columns) != expected:
        issues.append(f"Expected {expected} columns, found {len(df.columns)}")

    return issues


def assess_readings(df: pd.DataFrame, columns: Tuple[str, ...] = ("pm10", "pm25")) -> ReadingQuality:
    """
    Count null and negative readings.

    Args:
        df: DataFrame with canonical reading columns
        columns: Pollutant columns to assess

    Returns:
        ReadingQuality with per-column counts
    """
    null_counts = {}
    negative_counts = {}

    for column in columns:
        if column not in df.columns:
            continue
        null_counts[column] = int(df[column].isna().sum())
        negative_counts[column] = int((df[column] < 0).sum())

    return ReadingQuality(
        total_records=len(df),
        null_counts=null_counts,
        negative_counts=negative_counts,
    )


def mask_negative_readings(
    df: pd.DataFrame, columns: Tuple[str, ...] = ("pm10", "pm25")
) -> Tuple[pd.DataFrame, Dict[str, int]]:
    """
    Replace negative readings with nulls.

    Negative concentrations are treated as sensor faults. The rest of the
    row is kept.

    Args:
        df: DataFrame with canonical reading columns
        columns: Pollutant columns to mask

    Returns:
        Tuple of (masked copy, negative count per column)
    """
    masked = df.copy()
    counts = {}

    for column in columns:
        if column not in masked.columns:
            continue
        negative = masked[column] < 0
        counts[column] = int(negative.sum())
        if counts[column]:
            masked.loc[negative, column] = float("nan")
            logger.warning(f"Masked {counts[column]:,} negative {column} readings")

    return masked, counts
