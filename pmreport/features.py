"""
Calendar Feature Derivation

Parses reading timestamps and attaches year, month, weekday, hour, date and
season fields to every reading.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np
import pandas as pd
import pytz

from .config import (
    MONTH_LABELS,
    PM_COLUMNS,
    SEASON_BY_MONTH,
    SEASONS,
    WEEKDAY_LABELS,
    AnalysisSettings,
    Config,
)
from .exceptions import TimestampParseError, TimeZoneError
from .logger import get_logger
from .validators import assess_readings, mask_negative_readings

logger = get_logger(__name__, Config.LOGS_DIR)


@dataclass(frozen=True, eq=False)
class DerivedDataset:
    """
    Readings with calendar features.

    ``readings`` holds every row whose timestamp resolved to an instant. PM10
    analysis uses the ``pm10_valid`` subset; PM2.5 analysis uses all rows.
    """

    readings: pd.DataFrame
    raw_records: int
    dropped_timestamps: int = 0
    negative_counts: Dict[str, int] = field(default_factory=dict)
    null_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def pm10_valid(self) -> pd.DataFrame:
        return self.readings.dropna(subset=["pm10", "year"])

    def __len__(self) -> int:
        return len(self.readings)


def validate_timezone(name: str):
    """
    Resolve a named time zone.

    Raises:
        TimeZoneError: If the name is not in the tz database
    """
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise TimeZoneError(f"Unknown time zone: {name}") from e


def month_to_season(month: int) -> str:
    """Map a calendar month (1-12) to its season."""
    try:
        return SEASON_BY_MONTH[month]
    except KeyError:
        raise ValueError(f"Invalid month: {month}") from None


def parse_timestamps(values: pd.Series, timestamp_format: str, timezone) -> pd.Series:
    """
    Parse wall-clock timestamp strings into tz-aware datetimes.

    Unparseable values become NaT. Ambiguous wall times (clocks turned back)
    are read as standard time; non-existent ones (clocks turned forward) are
    shifted to the next valid instant.

    Args:
        values: Timestamp strings
        timestamp_format: strptime format of the strings
        timezone: pytz time zone the wall times are recorded in

    Returns:
        Series of tz-aware datetimes
    """
    parsed = pd.to_datetime(values, format=timestamp_format, errors="coerce")
    return parsed.dt.tz_localize(
        timezone,
        ambiguous=np.zeros(len(parsed), dtype=bool),
        nonexistent="shift_forward",
    )


def derive_features(
    raw: pd.DataFrame, settings: Optional[AnalysisSettings] = None, strict: bool = False
) -> DerivedDataset:
    """
    Derive calendar features from the merged readings.

    Args:
        raw: Merged DataFrame with canonical reading columns
        settings: Analysis settings (environment defaults if None)
        strict: Raise on the first unparseable timestamp instead of dropping it

    Returns:
        DerivedDataset with the derived readings and drop counts

    Raises:
        TimeZoneError: If the configured time zone is unknown
        TimestampParseError: In strict mode, on an unparseable timestamp
    """
    settings = settings or AnalysisSettings.build()
    timezone = validate_timezone(settings.timezone)

    logger.info(f"Deriving features for {len(raw):,} records (tz={settings.timezone})")

    frame = raw.reset_index(drop=True).copy()
    frame["datetime"] = parse_timestamps(frame["timestamp"], settings.timestamp_format, timezone)

    unparsed = frame["datetime"].isna()
    dropped = int(unparsed.sum())

    if dropped:
        if strict:
            row = int(unparsed.idxmax())
            raise TimestampParseError(frame.at[row, "timestamp"], row)
        logger.warning(f"Dropped {dropped:,} records with unparseable timestamps")
        frame = frame.loc[~unparsed].reset_index(drop=True)

    dt = frame["datetime"].dt
    months = dt.month.astype("int64")

    frame["year"] = dt.year.astype("int64")
    frame["month"] = pd.Categorical.from_codes(months - 1, categories=MONTH_LABELS, ordered=True)
    frame["weekday"] = pd.Categorical(dt.day_name(), categories=WEEKDAY_LABELS, ordered=True)
    frame["hour"] = dt.hour.astype("int64")
    frame["date"] = dt.date
    frame["season"] = pd.Categorical(
        months.map(month_to_season), categories=SEASONS, ordered=True
    )

    # null counts exclude masked negatives
    quality = assess_readings(frame, tuple(PM_COLUMNS))
    if settings.negative_readings == "exclude":
        frame, _ = mask_negative_readings(frame, tuple(PM_COLUMNS))

    dataset = DerivedDataset(
        readings=frame,
        raw_records=len(raw),
        dropped_timestamps=dropped,
        negative_counts=quality.negative_counts,
        null_counts=quality.null_counts,
    )

    logger.info(
        f"Derived {len(dataset):,} records ({len(dataset.pm10_valid):,} with a valid PM10 reading)"
    )

    return dataset
