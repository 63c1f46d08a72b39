"""
Configuration Management for pmreport

Centralized configuration for paths, regulatory thresholds and analysis settings.
"""

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

# Load environment variables
load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    DATA_RAW = DATA_DIR / "raw"
    DATA_PROCESSED = DATA_DIR / "processed"
    FIGURES_DIR = PROJECT_ROOT / "figures"

    # Logging (file output only when a directory is configured)
    LOGS_DIR = Path(os.environ["PMREPORT_LOG_DIR"]) if os.getenv("PMREPORT_LOG_DIR") else None
    LOG_LEVEL = os.getenv("PMREPORT_LOG_LEVEL", "INFO").upper()

    # Input files
    INPUT_PATTERN = os.getenv("PMREPORT_INPUT_PATTERN", "*.csv")
    MERGED_FILENAME = "merged_readings.csv"

    # Time handling
    TIMEZONE = os.getenv("PMREPORT_TIMEZONE", "Australia/Melbourne")
    TIMESTAMP_FORMAT = os.getenv("PMREPORT_TIMESTAMP_FORMAT", "%d/%m/%Y %H:%M")

    # Regulatory thresholds (µg/m³)
    PM10_DAILY_LIMIT = _env_float("PMREPORT_PM10_DAILY_LIMIT", 50.0)
    PM25_DAILY_LIMIT = _env_float("PMREPORT_PM25_DAILY_LIMIT", 50.0)
    PM25_YEARLY_LIMIT = _env_float("PMREPORT_PM25_YEARLY_LIMIT", 8.0)

    # Rows a year must hold to count as complete (unset = not assessed)
    EXPECTED_ROWS_PER_YEAR = _env_int("PMREPORT_EXPECTED_ROWS_PER_YEAR")

    NEGATIVE_READINGS = os.getenv("PMREPORT_NEGATIVE_READINGS", "exclude")
    TOP_N = 10


# Canonical column names, in file order
READING_COLUMNS = ["timestamp", "pm10", "pm25", "temperature", "pressure"]
NUMERIC_COLUMNS = READING_COLUMNS[1:]
PM_COLUMNS = ["pm10", "pm25"]

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

WEEKDAY_LABELS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Southern hemisphere seasons, in reporting order
SEASONS = ["Summer", "Autumn", "Winter", "Spring"]

SEASON_BY_MONTH = {
    12: "Summer", 1: "Summer", 2: "Summer",
    3: "Autumn", 4: "Autumn", 5: "Autumn",
    6: "Winter", 7: "Winter", 8: "Winter",
    9: "Spring", 10: "Spring", 11: "Spring",
}

POLLUTANT_LABELS = {"pm10": "PM10", "pm25": "PM2.5"}


class AnalysisSettings(BaseModel):
    """Immutable settings for one report run."""

    model_config = ConfigDict(frozen=True)

    timezone: str = Field(default_factory=lambda: Config.TIMEZONE)
    timestamp_format: str = Field(default_factory=lambda: Config.TIMESTAMP_FORMAT)
    pm10_daily_limit: float = Field(default_factory=lambda: Config.PM10_DAILY_LIMIT, gt=0)
    pm25_daily_limit: float = Field(default_factory=lambda: Config.PM25_DAILY_LIMIT, gt=0)
    pm25_yearly_limit: float = Field(default_factory=lambda: Config.PM25_YEARLY_LIMIT, gt=0)
    expected_rows_per_year: Optional[int] = Field(
        default_factory=lambda: Config.EXPECTED_ROWS_PER_YEAR, gt=0
    )
    negative_readings: Literal["exclude", "include"] = Field(
        default_factory=lambda: Config.NEGATIVE_READINGS
    )
    top_n: int = Field(default=Config.TOP_N, gt=0)

    @field_validator("timezone", "timestamp_format")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @classmethod
    def build(cls, **overrides) -> "AnalysisSettings":
        """
        Build settings from environment defaults plus explicit overrides.

        Overrides set to None are ignored, so CLI arguments can be passed through as-is.

        Raises:
            ConfigError: If any value fails validation
        """
        values = {k: v for k, v in overrides.items() if v is not None}
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid analysis settings: {e}") from e


if __name__ == "__main__":
    settings = AnalysisSettings.build()
    print("Configuration Summary")
    print("=" * 60)
    print(f"Project Root: {Config.PROJECT_ROOT}")
    print(f"Log Directory: {Config.LOGS_DIR or '(console only)'}")
    for name, value in settings.model_dump().items():
        print(f"{name}: {value}")
