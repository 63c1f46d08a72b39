"""
Tests for Loader Module
"""

import pandas as pd
import pytest
from conftest import write_reading_file

from pmreport.config import READING_COLUMNS
from pmreport.exceptions import EmptyInputError, FileReadError
from pmreport.loader import export_merged, list_input_files, load_directory, read_reading_file

ROWS = [
    ("01/03/2021 00:00", 12.5, 6.1),
    ("01/03/2021 01:00", 14.0, 7.3),
    ("01/03/2021 02:00", 11.2, 5.0),
    ("01/03/2021 03:00", 9.8, 4.4),
]


class TestListInputFiles:
    """Test input file discovery and ordering."""

    def test_orders_by_date_token(self, tmp_path):
        """Test that files are ordered chronologically, not by listing order."""
        for name in ["readings_2021-02.csv", "readings_2020-12.csv", "readings_2021-01.csv"]:
            write_reading_file(tmp_path / name, ROWS)

        files = list_input_files(tmp_path)

        assert [f.name for f in files] == [
            "readings_2020-12.csv",
            "readings_2021-01.csv",
            "readings_2021-02.csv",
        ]

    def test_orders_mixed_token_styles(self, tmp_path):
        """Test that different token separators sort on the same date."""
        for name in ["pm_202102.csv", "pm_2021_01.csv", "pm_2020-11.csv"]:
            write_reading_file(tmp_path / name, ROWS)

        files = list_input_files(tmp_path)

        assert [f.name for f in files] == ["pm_2020-11.csv", "pm_2021_01.csv", "pm_202102.csv"]

    def test_lexical_order_without_tokens(self, tmp_path):
        for name in ["march.csv", "april.csv", "may.csv"]:
            write_reading_file(tmp_path / name, ROWS)

        files = list_input_files(tmp_path)

        assert [f.name for f in files] == ["april.csv", "march.csv", "may.csv"]

    def test_pattern_and_hidden_files(self, tmp_path):
        """Test that only matching, visible files are listed."""
        write_reading_file(tmp_path / "readings_2021-01.csv", ROWS)
        write_reading_file(tmp_path / ".readings_2021-02.csv", ROWS)
        (tmp_path / "notes.txt").write_text("not a reading file")

        files = list_input_files(tmp_path)

        assert [f.name for f in files] == ["readings_2021-01.csv"]

    def test_empty_directory_raises_error(self, tmp_path):
        with pytest.raises(EmptyInputError):
            list_input_files(tmp_path)

    def test_missing_directory_raises_error(self, tmp_path):
        with pytest.raises(FileReadError):
            list_input_files(tmp_path / "does-not-exist")


class TestReadReadingFile:
    """Test single-file reading."""

    def test_columns_renamed_positionally(self, tmp_path):
        path = write_reading_file(tmp_path / "readings_2021-03.csv", ROWS)

        df = read_reading_file(path)

        assert list(df.columns) == READING_COLUMNS
        assert len(df) == len(ROWS)
        assert df["pm10"].iloc[0] == 12.5
        assert df["timestamp"].iloc[0] == "01/03/2021 00:00"

    def test_wrong_column_count_names_file(self, tmp_path):
        """Test that a schema mismatch is fatal and names the file."""
        path = tmp_path / "broken_2021-03.csv"
        path.write_text("Date Time,PM10,PM2.5\n01/03/2021 00:00,12.5,6.1\n")

        with pytest.raises(FileReadError) as exc_info:
            read_reading_file(path)

        assert "broken_2021-03.csv" in str(exc_info.value)
        assert exc_info.value.path == path

    def test_extra_fields_in_row_raise_error(self, tmp_path):
        path = tmp_path / "ragged.csv"
        path.write_text(
            "Date Time,PM10,PM2.5,Temperature,Pressure\n"
            "01/03/2021 00:00,12.5,6.1,20.0,1010.0,99\n"
        )

        with pytest.raises(FileReadError):
            read_reading_file(path)

    def test_empty_file_raises_error(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")

        with pytest.raises(FileReadError):
            read_reading_file(path)

    def test_non_numeric_cells_become_null(self, tmp_path):
        path = tmp_path / "gaps.csv"
        path.write_text(
            "Date Time,PM10,PM2.5,Temperature,Pressure\n"
            "01/03/2021 00:00,---,6.1,20.0,1010.0\n"
            "01/03/2021 01:00,,6.5,20.0,1010.0\n"
        )

        df = read_reading_file(path)

        assert df["pm10"].isna().all()
        assert df["pm25"].tolist() == [6.1, 6.5]


class TestLoadDirectory:
    """Test merging of many files."""

    def test_row_count_conservation(self, tmp_path):
        """Test that N files of R rows merge to N x R rows."""
        for month in range(1, 4):
            write_reading_file(tmp_path / f"readings_2021-{month:02d}.csv", ROWS)

        combined = load_directory(tmp_path)

        assert len(combined) == 3 * len(ROWS)
        assert list(combined.columns) == READING_COLUMNS

    def test_rows_follow_file_order(self, input_dir):
        """Test that January rows come before February rows."""
        combined = load_directory(input_dir)

        assert combined["timestamp"].tolist()[:3] == [
            "15/01/2021 10:00",
            "15/01/2021 10:30",
            "15/01/2021 11:00",
        ]

    def test_bad_file_aborts_load(self, input_dir):
        (input_dir / "readings_2021-03.csv").write_text("only,three,columns\n1,2,3\n")

        with pytest.raises(FileReadError) as exc_info:
            load_directory(input_dir)

        assert "readings_2021-03.csv" in str(exc_info.value)

    def test_writes_merged_output(self, input_dir, temp_output_dir):
        output_path = temp_output_dir / "merged.csv"

        combined = load_directory(input_dir, output_path=output_path)

        assert output_path.exists()
        df_read = pd.read_csv(output_path)
        assert len(df_read) == len(combined) == 6
        assert list(df_read.columns) == READING_COLUMNS


class TestExportMerged:
    """Test merged table export."""

    def test_csv_layout(self, input_dir, temp_output_dir):
        """Test header row, comma separation and unquoted numbers."""
        combined = load_directory(input_dir)
        output_path = export_merged(combined, temp_output_dir / "merged.csv")

        lines = output_path.read_text().splitlines()

        assert lines[0] == ",".join(READING_COLUMNS)
        assert len(lines) == 7
        assert '"' not in "".join(lines)

    def test_replaces_existing_file_without_leftovers(self, input_dir, temp_output_dir):
        output_path = temp_output_dir / "merged.csv"
        output_path.write_text("stale")

        combined = load_directory(input_dir)
        export_merged(combined, output_path)

        assert pd.read_csv(output_path).shape == (6, 5)
        assert [p.name for p in temp_output_dir.iterdir()] == ["merged.csv"]

    def test_export_to_parquet(self, input_dir, temp_output_dir):
        combined = load_directory(input_dir)
        output_path = export_merged(combined, temp_output_dir / "merged.parquet")

        df_read = pd.read_parquet(output_path)
        assert len(df_read) == len(combined)
        assert list(df_read.columns) == READING_COLUMNS
