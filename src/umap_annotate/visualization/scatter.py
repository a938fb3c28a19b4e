from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from pandas.api.types import is_numeric_dtype
from plotly.colors import qualitative, sample_colorscale

DEFAULT_TITLE = "Dimensionality Reduction"
OUTLINE_PALETTE = qualitative.Dark24
OUTLINE_COLORSCALE = "Viridis"
MISSING_COLOUR = "lightgrey"
MISSING_LEVEL = "NA"
SYMBOL_SEQUENCE = [
    "circle", "diamond", "square", "x", "cross",
    "triangle-up", "triangle-down", "star", "hexagon", "pentagon",
]


def _require_columns(df: pd.DataFrame, columns: List[Optional[str]], table: str) -> None:
    missing = [c for c in columns if c is not None and c not in df]
    if missing:
        raise KeyError(f"Columns missing from {table}: {missing}")


def join_metadata(dimred: pd.DataFrame, metadata: pd.DataFrame, col_sample: Optional[str]) -> pd.DataFrame:
    """Left-join per-sample ``metadata`` onto ``dimred``, keeping every ``dimred`` row.

    Metadata columns whose names are already taken get a ``_metadata`` suffix.
    """

    if not isinstance(metadata, pd.DataFrame):
        raise TypeError(f"'metadata' must be a pandas DataFrame, got {type(metadata).__name__}")
    if col_sample is None:
        raise ValueError("'col_sample' is required when a metadata dataframe is supplied")
    _require_columns(metadata, [col_sample], "metadata")

    duplicated = metadata[col_sample][metadata[col_sample].duplicated()].unique().tolist()
    if duplicated:
        raise ValueError(f"Sample ids must be unique in metadata; duplicated: {duplicated}")

    return dimred.merge(metadata, on=col_sample, how="left", suffixes=("", "_metadata"))


def _discrete_levels(values: pd.Series) -> pd.Series:
    values = values.astype(object)
    return values.where(values.notna(), MISSING_LEVEL)


def _outline_colours(values: pd.Series) -> Dict[object, str] | np.ndarray:
    if is_numeric_dtype(values):
        lo, hi = values.min(), values.max()
        span = (hi - lo) or 1.0
        colours = np.asarray(
            sample_colorscale(OUTLINE_COLORSCALE, ((values - lo) / span).fillna(0).tolist()), dtype=object
        )
        colours[values.isna().to_numpy()] = MISSING_COLOUR
        return colours
    levels = [v for v in values.astype(object).dropna().unique() if v != MISSING_LEVEL]
    return {level: OUTLINE_PALETTE[i % len(OUTLINE_PALETTE)] for i, level in enumerate(levels)}


def _apply_outline(fig: go.Figure, data: pd.DataFrame, col_colour: str) -> None:
    """Colour marker outlines by ``col_colour`` when the fill is mapped elsewhere."""

    colours = _outline_colours(data[col_colour])
    for trace in fig.data:
        # the last custom_data slot carries the positional row number
        rows = np.asarray(trace.customdata)[:, -1].astype(int)
        if isinstance(colours, dict):
            line = data[col_colour].iloc[rows].astype(object).map(colours).fillna(MISSING_COLOUR).tolist()
        else:
            line = colours[rows].tolist()
        trace.marker.line = dict(color=line, width=2)


def umap_plot(
    dimred: pd.DataFrame,
    col_sample: Optional[str] = None,
    col_tooltip: Optional[str] = None,
    col_dim1: str = "UMAP_1",
    col_dim2: str = "UMAP_2",
    metadata: Optional[pd.DataFrame] = None,
    col_fill: Optional[str] = None,
    col_colour: Optional[str] = None,
    col_shape: Optional[str] = None,
    title: str = DEFAULT_TITLE,
    xlab: Optional[str] = None,
    ylab: Optional[str] = None,
) -> go.Figure:
    """Scatter plot of a dimensionality reduction (UMAP, PCA, ...) result.

    ``dimred`` holds at least the two dimension columns and, optionally, a
    sample identifier column. When ``metadata`` is supplied it is left-joined
    onto ``dimred`` by ``col_sample`` (which must then be given and be unique in
    ``metadata``), so its columns can drive the fill, colour and shape
    aesthetics.

    ``col_tooltip`` falls back to ``col_sample``. Every point carries its
    ``col_sample`` value as custom data, which :func:`umap_make_interactive`
    uses to copy identifiers on click.

    Returns a plotly figure.
    """

    if not isinstance(dimred, pd.DataFrame):
        raise TypeError(f"'dimred' must be a pandas DataFrame, got {type(dimred).__name__}")
    col_tooltip = col_tooltip or col_sample
    _require_columns(dimred, [col_dim1, col_dim2, col_sample], "dimred")

    data = dimred
    if metadata is not None:
        data = join_metadata(dimred, metadata, col_sample)
    _require_columns(data, [col_fill, col_colour, col_shape, col_tooltip], "plot data")
    data = data.reset_index(drop=True)

    outline = col_fill is not None and col_colour is not None
    custom_data: List[str] = []
    if col_sample is not None:
        custom_data.append(col_sample)
    if outline:
        data = data.assign(_row=np.arange(len(data)))
        custom_data.append("_row")

    # rows without a value (e.g. unmatched in metadata) stay visible as an explicit grey level
    colour_by = col_fill if col_fill is not None else col_colour
    continuous = colour_by is not None and is_numeric_dtype(data[colour_by])
    if colour_by is not None and not continuous:
        data = data.assign(**{colour_by: _discrete_levels(data[colour_by])})
    symbol_map = None
    if col_shape is not None:
        data = data.assign(**{col_shape: _discrete_levels(data[col_shape])})
        symbol_map = {
            level: SYMBOL_SEQUENCE[i % len(SYMBOL_SEQUENCE)] for i, level in enumerate(data[col_shape].unique())
        }

    scatter_kwargs = dict(
        x=col_dim1,
        y=col_dim2,
        symbol=col_shape,
        symbol_map=symbol_map,
        hover_name=col_tooltip,
        custom_data=custom_data or None,
    )
    if continuous and data[colour_by].isna().any():
        missing = data[colour_by].isna()
        fig = px.scatter(data[~missing], color=colour_by, **scatter_kwargs) if (~missing).any() else go.Figure()
        unmapped = px.scatter(data[missing], color_discrete_sequence=[MISSING_COLOUR], **scatter_kwargs)
        for trace in unmapped.data:
            trace.name = f"{MISSING_LEVEL}, {trace.name}" if trace.name else MISSING_LEVEL
            trace.showlegend = True
            fig.add_trace(trace)
    else:
        fig = px.scatter(
            data,
            color=colour_by,
            color_discrete_map={MISSING_LEVEL: MISSING_COLOUR},
            **scatter_kwargs,
        )
    if outline:
        _apply_outline(fig, data, col_colour)

    legend_title = " / ".join(c for c in (col_fill, col_colour, col_shape) if c is not None)
    fig.update_layout(
        template="simple_white",
        title=dict(text=f"<b>{title}</b>", x=0.5, xanchor="center"),
        legend_title_text=legend_title or None,
        xaxis_title=xlab if xlab is not None else col_dim1,
        yaxis_title=ylab if ylab is not None else col_dim2,
        meta={"col_sample": col_sample, "col_tooltip": col_tooltip},
    )
    fig.update_xaxes(showgrid=False, showticklabels=False, ticks="", mirror=True)
    fig.update_yaxes(showgrid=False, showticklabels=False, ticks="", mirror=True)
    return fig
