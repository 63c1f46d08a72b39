"""
Reading File Loader

Reads monthly reading files from a directory and merges them into one table.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from .config import NUMERIC_COLUMNS, READING_COLUMNS, Config
from .exceptions import EmptyInputError, FileReadError
from .logger import get_logger
from .utils import format_file_size
from .validators import validate_schema

logger = get_logger(__name__, Config.LOGS_DIR)

# e.g. readings_2019-03.csv, 2019_03.csv, pm_201903.csv
DATE_TOKEN = re.compile(r"(?<!\d)((?:19|20)\d{2})[-_]?(0[1-9]|1[0-2])(?!\d)")


def _date_token(path: Path):
    match = DATE_TOKEN.search(path.stem)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def list_input_files(directory: Union[str, Path], pattern: str = Config.INPUT_PATTERN) -> List[Path]:
    """
    List input files in chronological order.

    Files are ordered by the year-month token in their names when every file
    carries one, and lexically otherwise.

    Args:
        directory: Directory holding the monthly files
        pattern: Glob pattern for input files

    Returns:
        Sorted list of file paths

    Raises:
        FileReadError: If the directory does not exist
        EmptyInputError: If no file matches the pattern
    """
    directory = Path(directory)

    if not directory.is_dir():
        raise FileReadError(directory, "input directory not found")

    files = sorted(
        p for p in directory.glob(pattern) if p.is_file() and not p.name.startswith(".")
    )

    if not files:
        raise EmptyInputError(f"No input files matching '{pattern}' in {directory}")

    tokens = [_date_token(p) for p in files]
    if all(token is not None for token in tokens):
        files = [p for _, p in sorted(zip(tokens, files), key=lambda pair: (pair[0], pair[1].name))]
    else:
        logger.debug("Not every file name carries a date token, using lexical order")

    logger.info(f"Found {len(files)} input files in {directory}")

    return files


def read_reading_file(file_path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a single reading file.

    Columns are renamed positionally to the canonical reading columns and the
    numeric columns coerced to float (unparseable cells become NaN).

    Args:
        file_path: Path to the file

    Returns:
        DataFrame with canonical columns

    Raises:
        FileReadError: If the file cannot be read or has the wrong column count
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileReadError(file_path, "file not found")

    logger.debug(f"Reading file: {file_path.name}")

    # header=None so the header line fixes the field count for every row
    try:
        df = pd.read_csv(file_path, header=None, dtype=str, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
        raise FileReadError(file_path, str(e)) from e

    issues = validate_schema(df)
    if issues:
        raise FileReadError(file_path, "; ".join(issues))

    df = df.iloc[1:].reset_index(drop=True)
    df.columns = READING_COLUMNS
    df["timestamp"] = df["timestamp"].str.strip()
    for column in NUMERIC_COLUMNS:
        df[column] = pd.to_numeric(df[column], errors="coerce").astype("float64")

    logger.debug(f"Loaded {len(df):,} records from {file_path.name}")

    return df


def load_directory(
    directory: Union[str, Path],
    pattern: str = Config.INPUT_PATTERN,
    output_path: Optional[Union[str, Path]] = None,
) -> pd.DataFrame:
    """
    Read and merge every reading file in a directory.

    Args:
        directory: Directory holding the monthly files
        pattern: Glob pattern for input files
        output_path: Where to persist the merged table (not written if None)

    Returns:
        Merged DataFrame, rows in file order then arrival order

    Raises:
        EmptyInputError: If the directory holds no input files
        FileReadError: If any file cannot be read
    """
    files = list_input_files(directory, pattern)

    logger.info(f"Reading {len(files)} files...")

    dfs = [read_reading_file(path) for path in files]
    combined = pd.concat(dfs, ignore_index=True)

    logger.info(f"Combined {len(combined):,} total records")

    if output_path is not None:
        export_merged(combined, output_path)

    return combined


def export_merged(df: pd.DataFrame, output_path: Union[str, Path]) -> Path:
    """
    Write the merged table, replacing any previous file atomically.

    The table is written to a temporary file next to the destination and then
    renamed into place. A ``.parquet`` suffix writes Parquet, anything else CSV.

    Args:
        df: Merged DataFrame
        output_path: Output file path

    Returns:
        Path to exported file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Exporting {len(df):,} records to {output_path.name}")

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.stem}.", suffix=output_path.suffix, dir=output_path.parent
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        if output_path.suffix == ".parquet":
            df.to_parquet(tmp_path, engine="pyarrow", index=False)
        else:
            df.to_csv(tmp_path, index=False)
        os.replace(tmp_path, output_path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()

    logger.info(f"Export complete: {output_path} ({format_file_size(output_path.stat().st_size)})")

    return output_path
