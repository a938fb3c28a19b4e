from __future__ import annotations

from pathlib import Path

import pandas as pd


def load_table(path: Path, index_col: str | None = None) -> pd.DataFrame:
    """Read a CSV or parquet table, optionally indexing it by ``index_col``."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input dataset not found: {path}")
    if path.suffix == ".parquet":
        df = pd.read_parquet(path)
    elif path.suffix == ".csv":
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported table format '{path.suffix}' (expected .csv or .parquet)")

    if index_col is not None:
        if index_col not in df:
            raise KeyError(f"Index column '{index_col}' missing from {path}")
        df = df.set_index(index_col)
    return df
