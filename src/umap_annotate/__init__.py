"""Annotated UMAP embeddings and interactive scatter plots for tabular data."""

from __future__ import annotations

from importlib import metadata


def _get_version() -> str:
    try:
        return metadata.version("umap-annotate")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .data_prep import classify_columns, identify_non_numeric_columns, identify_numeric_columns  # noqa: E402
from .embedding import UmapConfig, run_umap, run_umap_pipeline  # noqa: E402
from .visualization import (  # noqa: E402
    InteractivePlot,
    example_umap,
    example_umap_metadata,
    umap_make_interactive,
    umap_plot,
)

__all__ = [
    "__version__",
    "classify_columns",
    "identify_numeric_columns",
    "identify_non_numeric_columns",
    "UmapConfig",
    "run_umap",
    "run_umap_pipeline",
    "InteractivePlot",
    "umap_plot",
    "umap_make_interactive",
    "example_umap",
    "example_umap_metadata",
]
