"""Tests for the ingest module."""

import polars as pl
import pytest

from period_agg.ingest.loader import load_dataset


@pytest.fixture
def sample_data():
    """Create sample test data."""
    return pl.DataFrame(
        {
            "verified_at": ["2022-06-01 08:15:00", "2022-06-02 09:00:00", None],
            "site": ["A", "B", "A"],
        }
    )


class TestLoader:
    """Tests for the loader module."""

    def test_load_parquet(self, sample_data, tmp_path):
        """Test loading an existing parquet file."""
        path = tmp_path / "sample.parquet"
        sample_data.write_parquet(path)

        lf = load_dataset(path)

        assert isinstance(lf, pl.LazyFrame)
        df = lf.collect()
        assert df.shape == (3, 2)

    def test_load_csv_keeps_string_dates(self, sample_data, tmp_path):
        """Test that CSV date columns are not parsed on load."""
        path = tmp_path / "sample.csv"
        sample_data.write_csv(path)

        df = load_dataset(str(path)).collect()

        assert df["verified_at"].dtype == pl.Utf8
        assert df["verified_at"].null_count() == 1

    def test_load_missing_file(self, tmp_path):
        """Test loading a file that doesn't exist."""
        with pytest.raises(FileNotFoundError, match="not found"):
            load_dataset(tmp_path / "missing.parquet")

    def test_load_unsupported_suffix(self, tmp_path):
        """Test loading an unsupported file type."""
        path = tmp_path / "sample.json"
        path.write_text("{}")

        with pytest.raises(ValueError, match="Unsupported file type"):
            load_dataset(path)
