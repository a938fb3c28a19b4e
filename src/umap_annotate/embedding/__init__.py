"""UMAP embedding of tabular data with column re-annotation."""

from .runner import UmapConfig, run_umap, run_umap_pipeline  # noqa: F401

__all__ = ["UmapConfig", "run_umap", "run_umap_pipeline"]
