from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .embedding.runner import UmapConfig


class InputConfig(BaseModel):
    """Where the dataset (and optional metadata) live."""

    path: Path
    sample_col: Optional[str] = None
    metadata: Optional[Path] = None

    @field_validator("path", "metadata", mode="before")
    @classmethod
    def _expand_path(cls, value: str | Path | None) -> Path | None:
        return None if value is None else Path(value).expanduser()


class EmbeddingConfig(BaseModel):
    """Parameters forwarded to the UMAP run."""

    normalise: bool = True
    n_neighbors: int = Field(default=15, ge=2)
    n_components: int = Field(default=2, ge=2)
    min_dist: float = Field(default=0.1, ge=0.0)
    metric: str = "euclidean"
    random_state: Optional[int] = 13
    annotate_with: Literal["all", "categorical", "numeric", "none"] = "all"


class PlotConfig(BaseModel):
    """Aesthetic mappings for the scatter plot."""

    colour: Optional[str] = None
    fill: Optional[str] = None
    shape: Optional[str] = None
    title: str = "Dimensionality Reduction"


class OutputConfig(BaseModel):
    """Directories for embedding tables and figures."""

    output_dir: Path = Path("reports/umap")
    figure_dir: Path = Path("reports/figures")

    @field_validator("output_dir", "figure_dir", mode="before")
    @classmethod
    def _expand_output_path(cls, value: str | Path) -> Path:
        return Path(value).expanduser()


class PipelineConfig(BaseModel):
    """Top-level configuration for an annotated UMAP run."""

    input: InputConfig
    embedding: EmbeddingConfig = EmbeddingConfig()
    plot: PlotConfig = PlotConfig()
    output: OutputConfig = OutputConfig()
    verbose: bool = True

    def to_umap_config(self) -> UmapConfig:
        return UmapConfig(
            input_path=self.input.path,
            sample_col=self.input.sample_col,
            metadata_path=self.input.metadata,
            normalise=self.embedding.normalise,
            n_neighbors=self.embedding.n_neighbors,
            n_components=self.embedding.n_components,
            min_dist=self.embedding.min_dist,
            metric=self.embedding.metric,
            random_state=self.embedding.random_state,
            annotate_with=self.embedding.annotate_with,
            colour_col=self.plot.colour,
            fill_col=self.plot.fill,
            shape_col=self.plot.shape,
            title=self.plot.title,
            output_dir=self.output.output_dir,
            figure_dir=self.output.figure_dir,
            verbose=self.verbose,
        )


def load_config(path: Path) -> PipelineConfig:
    """Load and validate a pipeline configuration from YAML."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file '{path}' not found. Create it or point --config elsewhere."
        )
    with path.open("r", encoding="utf-8") as fp:
        raw = yaml.safe_load(fp) or {}
    return PipelineConfig(**raw)
