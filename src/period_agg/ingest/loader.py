"""Open local tabular files as lazy frames."""

from __future__ import annotations

from pathlib import Path

import polars as pl

SUPPORTED_SUFFIXES = (".parquet", ".csv")


def load_dataset(path: str | Path) -> pl.LazyFrame:
    """Return a Polars LazyFrame for the file at ``path``. Does not collect.

    CSV columns are read as-is, so date columns stay strings unless the caller
    asks otherwise.

    Args:
        path: Path to a .parquet or .csv file

    Returns:
        LazyFrame scanning the file

    Raises:
        FileNotFoundError: If the path doesn't exist.
        ValueError: If the file type is not supported.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"{p} not found")

    suffix = p.suffix.lower()
    if suffix == ".parquet":
        return pl.scan_parquet(str(p))
    if suffix == ".csv":
        return pl.scan_csv(str(p))
    raise ValueError(f"Unsupported file type {suffix!r}; expected one of {SUPPORTED_SUFFIXES}")
