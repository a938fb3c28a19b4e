"""Column selection and dataset loading utilities."""

from .columns import (  # noqa: F401
    ColumnPartition,
    classify_columns,
    identify_non_numeric_columns,
    identify_numeric_columns,
    select_non_numeric_columns,
    select_numeric_columns,
)
from .io import load_table  # noqa: F401

__all__ = [
    "ColumnPartition",
    "classify_columns",
    "identify_numeric_columns",
    "identify_non_numeric_columns",
    "select_numeric_columns",
    "select_non_numeric_columns",
    "load_table",
]
