from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Literal

import numpy as np
import pandas as pd
from rich.console import Console

from ..data_prep.columns import classify_columns
from ..data_prep.io import load_table
from ..visualization.interactive import umap_make_interactive
from ..visualization.scatter import join_metadata, umap_plot
from ..visualization.static import save_static_plot

console = Console()

AnnotateWith = Literal["all", "categorical", "numeric", "none"]
ANNOTATE_CHOICES = ("all", "categorical", "numeric", "none")

MIN_ROWS = 4
SMALL_DATASET_ROWS = 15
DEFAULT_N_NEIGHBORS = 15
MIN_N_NEIGHBORS = 3
NEIGHBORS_DOCS_URL = "https://umap-learn.readthedocs.io/en/latest/parameters.html#n-neighbors"


def _embed_umap(X: np.ndarray, n_neighbors: int, **umap_kwargs: Any) -> np.ndarray:
    try:
        import umap
    except ImportError as exc:  # pragma: no cover - dependency missing
        raise ImportError(
            "UMAP requires the dependency 'umap-learn'. Install via 'pip install umap-learn'."
        ) from exc

    reducer = umap.UMAP(n_neighbors=n_neighbors, **umap_kwargs)
    return reducer.fit_transform(X)


def _small_dataset_neighbors(n_rows: int, n_neighbors: int) -> int:
    if n_rows <= SMALL_DATASET_ROWS and n_neighbors >= DEFAULT_N_NEIGHBORS:
        return max(MIN_N_NEIGHBORS, round(n_rows / 5))
    return n_neighbors


def _normalise(numeric: pd.DataFrame) -> pd.DataFrame:
    std = numeric.std(ddof=1).replace(0, np.nan)
    scaled = (numeric - numeric.mean()) / std
    # zero-variance columns come out all-NaN
    return scaled.dropna(axis=1, how="all")


def run_umap(
    dataset: pd.DataFrame,
    verbose: bool = True,
    normalise: bool = True,
    n_neighbors: int = DEFAULT_N_NEIGHBORS,
    annotate_with: AnnotateWith = "all",
    **umap_kwargs: Any,
) -> pd.DataFrame:
    """Run UMAP on the numeric columns of ``dataset`` and annotate the result.

    Non-numeric columns are removed before the embedding is computed and can be
    added back afterwards, together with the original numeric columns, depending
    on ``annotate_with``:

    - ``"all"``: non-numeric then numeric columns
    - ``"categorical"``: non-numeric columns only
    - ``"numeric"``: original (un-normalised) numeric columns only
    - ``"none"``: embedding coordinates only

    Extra keyword arguments are forwarded to :class:`umap.UMAP`.

    Returns a dataframe indexed like ``dataset`` with columns ``UMAP_1 .. UMAP_k``
    followed by the reattached columns.
    """

    if not isinstance(dataset, pd.DataFrame):
        raise TypeError(f"Expected a pandas DataFrame, got {type(dataset).__name__}")
    if not isinstance(verbose, bool):
        raise TypeError("'verbose' must be a single boolean flag")
    if not isinstance(normalise, bool):
        raise TypeError("'normalise' must be a single boolean flag")
    n_rows = len(dataset)
    if n_rows < MIN_ROWS:
        raise ValueError(
            f"Dataset has too few observations for UMAP creation "
            f"(dataset should have >3 rows, not [{n_rows}])"
        )
    if annotate_with not in ANNOTATE_CHOICES:
        raise ValueError(f"'annotate_with' must be one of {ANNOTATE_CHOICES}, not {annotate_with!r}")

    chosen_neighbors = _small_dataset_neighbors(n_rows, n_neighbors)
    if chosen_neighbors != n_neighbors:
        console.print(
            f"[yellow]Setting n_neighbors to {chosen_neighbors} instead of {n_neighbors} because of how "
            f"small the dataset is.[/yellow] We highly recommend manually choosing a value that is both "
            f"< {n_rows} and whose value reflects how global / local you want your clustering to be. "
            f"See {NEIGHBORS_DOCS_URL} for some helpful info."
        )
        umap_kwargs.setdefault("init", "random")
    n_neighbors = chosen_neighbors

    parts = classify_columns(dataset)
    if verbose:
        console.print(
            f"[cyan]Dropping {len(parts.non_numeric)} categorical columns:[/cyan] {parts.non_numeric}"
        )
    if not parts.numeric:
        raise ValueError("Dataset has no numeric columns to run UMAP on")
    numeric = dataset[parts.numeric]

    if normalise:
        features = _normalise(numeric)
        dropped = [c for c in numeric.columns if c not in features.columns]
        if dropped and verbose:
            console.print(f"[yellow]Dropping {len(dropped)} zero-variance columns:[/yellow] {dropped}")
        if features.shape[1] == 0:
            raise ValueError("No numeric columns with non-zero variance left after normalisation")
    else:
        features = numeric

    if verbose:
        console.print(f"[cyan]Running UMAP[/cyan] from [{features.shape[1]}] numeric columns")

    embedding = _embed_umap(features.to_numpy(dtype=float), n_neighbors=n_neighbors, **umap_kwargs)
    embedding = np.asarray(embedding)
    coord_cols = [f"UMAP_{i}" for i in range(1, embedding.shape[1] + 1)]
    result = pd.DataFrame(embedding, columns=coord_cols, index=dataset.index)

    annotations: List[pd.DataFrame] = []
    if annotate_with in ("all", "categorical"):
        annotations.append(dataset[parts.non_numeric])
    if annotate_with in ("all", "numeric"):
        annotations.append(numeric)

    for frame in annotations:
        clashes = [c for c in frame.columns if c in coord_cols]
        if clashes:
            raise ValueError(f"Annotation columns clash with embedding columns: {clashes}")

    return pd.concat([result, *annotations], axis=1)


@dataclass
class UmapConfig:
    input_path: Path = Path("data/processed/dataset.csv")
    sample_col: str | None = None
    metadata_path: Path | None = None
    normalise: bool = True
    n_neighbors: int = DEFAULT_N_NEIGHBORS
    n_components: int = 2
    min_dist: float = 0.1
    metric: str = "euclidean"
    random_state: int | None = 13
    annotate_with: AnnotateWith = "all"
    colour_col: str | None = None
    fill_col: str | None = None
    shape_col: str | None = None
    title: str = "Dimensionality Reduction"
    output_dir: Path = Path("reports/umap")
    figure_dir: Path = Path("reports/figures")
    verbose: bool = True


def run_umap_pipeline(cfg: UmapConfig) -> dict[str, Path]:
    """Embed a table from disk and write the embedding CSV plus HTML/PNG plots."""

    df = load_table(cfg.input_path, index_col=cfg.sample_col)
    console.print(f"[cyan]Running UMAP[/cyan] on {len(df):,} samples with {df.shape[1]} columns")

    umap_kwargs: dict[str, Any] = {
        "n_components": cfg.n_components,
        "min_dist": cfg.min_dist,
        "metric": cfg.metric,
    }
    if cfg.random_state is not None:
        umap_kwargs["random_state"] = cfg.random_state

    embed_df = run_umap(
        df,
        verbose=cfg.verbose,
        normalise=cfg.normalise,
        n_neighbors=cfg.n_neighbors,
        annotate_with=cfg.annotate_with,
        **umap_kwargs,
    )
    if cfg.sample_col is not None:
        embed_df = embed_df.reset_index()

    metadata = None
    if cfg.metadata_path is not None:
        metadata = load_table(cfg.metadata_path)

    cfg.output_dir.mkdir(parents=True, exist_ok=True)
    cfg.figure_dir.mkdir(parents=True, exist_ok=True)

    csv_path = cfg.output_dir / "umap_embedding.csv"
    embed_df.to_csv(csv_path, index=False)

    fig = umap_plot(
        embed_df,
        col_sample=cfg.sample_col,
        metadata=metadata,
        col_colour=cfg.colour_col,
        col_fill=cfg.fill_col,
        col_shape=cfg.shape_col,
        title=cfg.title,
    )
    html_path = cfg.figure_dir / "umap_embedding.html"
    umap_make_interactive(fig, rescale=True).write_html(html_path)

    plot_df = embed_df
    if metadata is not None:
        plot_df = join_metadata(embed_df, metadata, cfg.sample_col)
    png_path = cfg.figure_dir / "umap_embedding.png"
    save_static_plot(
        plot_df,
        png_path,
        hue=cfg.colour_col or cfg.fill_col,
        style=cfg.shape_col,
        title=cfg.title,
    )

    console.print(f"[green]Saved embedding CSV:[/] {csv_path}")
    console.print(f"[green]Saved interactive figure:[/] {html_path}")
    console.print(f"[green]Saved static figure:[/] {png_path}")

    return {"csv": csv_path, "html": html_path, "figure": png_path}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an annotated UMAP embedding and scatter plots for a table.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--input", type=Path, default=UmapConfig.input_path)
    parser.add_argument("--sample-col", type=str, default=None, help="Column holding sample identifiers.")
    parser.add_argument("--metadata", type=Path, default=None, help="Optional table of per-sample metadata.")
    parser.add_argument("--no-normalise", action="store_true", help="Skip centring/scaling numeric columns.")
    parser.add_argument("--n-neighbors", type=int, default=UmapConfig.n_neighbors)
    parser.add_argument("--n-components", type=int, default=UmapConfig.n_components)
    parser.add_argument("--min-dist", type=float, default=UmapConfig.min_dist)
    parser.add_argument("--metric", type=str, default=UmapConfig.metric)
    parser.add_argument("--random-state", type=int, default=UmapConfig.random_state)
    parser.add_argument("--annotate-with", choices=ANNOTATE_CHOICES, default=UmapConfig.annotate_with)
    parser.add_argument("--colour-col", type=str, default=None)
    parser.add_argument("--fill-col", type=str, default=None)
    parser.add_argument("--shape-col", type=str, default=None)
    parser.add_argument("--title", type=str, default=UmapConfig.title)
    parser.add_argument("--output-dir", type=Path, default=UmapConfig.output_dir)
    parser.add_argument("--figure-dir", type=Path, default=UmapConfig.figure_dir)
    parser.add_argument("--quiet", action="store_true", help="Suppress per-column progress messages.")
    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = UmapConfig(
        input_path=args.input,
        sample_col=args.sample_col,
        metadata_path=args.metadata,
        normalise=not args.no_normalise,
        n_neighbors=args.n_neighbors,
        n_components=args.n_components,
        min_dist=args.min_dist,
        metric=args.metric,
        random_state=args.random_state,
        annotate_with=args.annotate_with,
        colour_col=args.colour_col,
        fill_col=args.fill_col,
        shape_col=args.shape_col,
        title=args.title,
        output_dir=args.output_dir,
        figure_dir=args.figure_dir,
        verbose=not args.quiet,
    )

    run_umap_pipeline(cfg)


if __name__ == "__main__":  # pragma: no cover
    main()
