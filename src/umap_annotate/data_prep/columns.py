from __future__ import annotations

from dataclasses import dataclass
from typing import List

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype
from rich.console import Console

console = Console()


@dataclass
class ColumnPartition:
    """Numeric / non-numeric split of a table's columns, in table order."""

    numeric: List[str]
    non_numeric: List[str]


def _ensure_dataframe(dataset: object) -> pd.DataFrame:
    if not isinstance(dataset, pd.DataFrame):
        raise TypeError(f"Expected a pandas DataFrame, got {type(dataset).__name__}")
    return dataset


def _is_numeric(series: pd.Series) -> bool:
    # bool columns are flags, treat them as categorical
    return is_numeric_dtype(series) and not is_bool_dtype(series)


def classify_columns(dataset: pd.DataFrame) -> ColumnPartition:
    df = _ensure_dataframe(dataset)
    numeric: List[str] = []
    non_numeric: List[str] = []
    for col in df.columns:
        (numeric if _is_numeric(df[col]) else non_numeric).append(col)
    return ColumnPartition(numeric=numeric, non_numeric=non_numeric)


def identify_numeric_columns(dataset: pd.DataFrame) -> List[str]:
    return classify_columns(dataset).numeric


def identify_non_numeric_columns(dataset: pd.DataFrame) -> List[str]:
    return classify_columns(dataset).non_numeric


def select_numeric_columns(dataset: pd.DataFrame, verbose: bool = False) -> pd.DataFrame:
    """Return only the numeric columns of ``dataset``."""

    parts = classify_columns(dataset)
    if verbose:
        console.print(
            f"[cyan]Dropping {len(parts.non_numeric)} categorical columns:[/cyan] {parts.non_numeric}"
        )
    return dataset[parts.numeric]


def select_non_numeric_columns(dataset: pd.DataFrame, verbose: bool = False) -> pd.DataFrame:
    """Return only the non-numeric columns of ``dataset``."""

    parts = classify_columns(dataset)
    if verbose:
        console.print(f"[cyan]Dropping {len(parts.numeric)} numeric columns:[/cyan] {parts.numeric}")
    return dataset[parts.non_numeric]
