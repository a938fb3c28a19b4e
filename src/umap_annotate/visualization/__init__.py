"""Visualization utilities (scatter plots, interactive rendering, examples)."""

from .examples import example_umap, example_umap_metadata  # noqa: F401
from .interactive import InteractivePlot, umap_make_interactive  # noqa: F401
from .scatter import join_metadata, umap_plot  # noqa: F401
from .static import save_static_plot  # noqa: F401

__all__ = [
    "example_umap",
    "example_umap_metadata",
    "InteractivePlot",
    "umap_make_interactive",
    "join_metadata",
    "umap_plot",
    "save_static_plot",
]
