"""
Pytest configuration and fixtures for pmreport tests.
"""

from pathlib import Path
from typing import List, Tuple

import pandas as pd
import pytest

from pmreport.config import NUMERIC_COLUMNS, READING_COLUMNS, AnalysisSettings
from pmreport.features import derive_features

# Header as written by the monitoring station export
FILE_HEADER = "Date Time,PM10,PM2.5,Temperature,Pressure"


def make_raw(rows: List[Tuple]) -> pd.DataFrame:
    """
    Build a raw reading table from (timestamp, pm10, pm25) tuples.

    Temperature and pressure are filled with constants.
    """
    df = pd.DataFrame(
        [(ts, pm10, pm25, 21.5, 1013.0) for ts, pm10, pm25 in rows],
        columns=READING_COLUMNS,
    )
    df[NUMERIC_COLUMNS] = df[NUMERIC_COLUMNS].astype("float64")
    return df


def write_reading_file(path: Path, rows: List[Tuple], header: str = FILE_HEADER) -> Path:
    """Write a reading file in the station export layout."""
    lines = [header]
    for ts, pm10, pm25 in rows:
        pm10 = "" if pm10 is None else pm10
        pm25 = "" if pm25 is None else pm25
        lines.append(f"{ts},{pm10},{pm25},21.5,1013.0")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def settings():
    """Explicit settings so tests do not depend on the environment."""
    return AnalysisSettings(
        timezone="Australia/Melbourne",
        timestamp_format="%d/%m/%Y %H:%M",
        pm10_daily_limit=50.0,
        pm25_daily_limit=50.0,
        pm25_yearly_limit=8.0,
        expected_rows_per_year=None,
        negative_readings="exclude",
        top_n=10,
    )


@pytest.fixture
def derive(settings):
    """Derive features from (timestamp, pm10, pm25) tuples."""

    def _derive(rows, **overrides):
        used = settings.model_copy(update=overrides) if overrides else settings
        return derive_features(make_raw(rows), used)

    return _derive


@pytest.fixture
def sample_rows():
    """A week of readings across two months, one of them without PM10."""
    return [
        ("15/01/2021 10:00", 10.0, 5.0),
        ("15/01/2021 11:00", 20.0, 6.0),
        ("16/01/2021 10:00", 30.0, 7.0),
        ("16/01/2021 11:00", None, 9.0),
        ("15/07/2021 10:00", 60.0, 12.0),
        ("15/07/2021 11:00", 80.0, 14.0),
        ("16/07/2021 10:00", 10.0, 3.0),
    ]


@pytest.fixture
def input_dir(tmp_path):
    """Two monthly files of three readings each, spanning hours 10 and 11."""
    directory = tmp_path / "raw"
    directory.mkdir()

    write_reading_file(
        directory / "readings_2021-02.csv",
        [
            ("15/02/2021 10:00", 40.0, 20.0),
            ("15/02/2021 11:00", 50.0, 25.0),
            ("15/02/2021 11:30", 60.0, 30.0),
        ],
    )
    write_reading_file(
        directory / "readings_2021-01.csv",
        [
            ("15/01/2021 10:00", 10.0, 5.0),
            ("15/01/2021 10:30", 20.0, 10.0),
            ("15/01/2021 11:00", 30.0, 15.0),
        ],
    )

    return directory


@pytest.fixture
def temp_output_dir(tmp_path):
    """Directory for exported files."""
    directory = tmp_path / "output"
    directory.mkdir()
    return directory
