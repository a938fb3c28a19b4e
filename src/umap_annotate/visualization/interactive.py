from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import plotly.graph_objects as go

PX_PER_INCH = 96
HOVER_DISTANCE = 50
UNSELECTED_OPACITY = 0.5

COPY_SAMPLE_ON_CLICK = """
var plot = document.getElementById('{plot_id}');
plot.on('plotly_click', function(data) {
  var point = data.points[0];
  if (point && point.customdata && navigator.clipboard) {
    navigator.clipboard.writeText(String(point.customdata[0]));
  }
});
"""


@dataclass
class InteractivePlot:
    """A styled plotly figure plus the settings needed to render it as HTML."""

    figure: go.Figure
    config: Dict[str, Any] = field(default_factory=dict)
    default_width: str = "100%"
    default_height: str = "100%"
    copy_on_click: bool = False

    def to_html(self, full_html: bool = True, include_plotlyjs: bool | str = "cdn") -> str:
        return self.figure.to_html(
            full_html=full_html,
            include_plotlyjs=include_plotlyjs,
            config=self.config,
            default_width=self.default_width,
            default_height=self.default_height,
            post_script=COPY_SAMPLE_ON_CLICK if self.copy_on_click else None,
        )

    def write_html(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_html(), encoding="utf-8")
        return path


def _has_interactive_data(fig: go.Figure) -> bool:
    meta = fig.layout.meta
    if isinstance(meta, dict) and ("col_sample" in meta or "col_tooltip" in meta):
        # customdata may only hold internal row numbers, trust the recorded mappings
        return meta.get("col_sample") is not None or meta.get("col_tooltip") is not None
    return any(
        getattr(trace, "customdata", None) is not None or getattr(trace, "hovertext", None) is not None
        for trace in fig.data
    )


def _sample_column(fig: go.Figure) -> Optional[str]:
    meta = fig.layout.meta
    if isinstance(meta, dict):
        return meta.get("col_sample")
    return None


def umap_make_interactive(
    fig: go.Figure,
    width_svg: Optional[float] = None,
    height_svg: Optional[float] = None,
    rescale: bool = False,
    width: float = 1.0,
) -> InteractivePlot:
    """Style a scatter figure for interactive exploration.

    ``width_svg``/``height_svg`` fix the figure size in inches. With
    ``rescale`` the figure instead follows its container, ``width`` being the
    fraction of the container width it occupies.
    """

    if not isinstance(fig, go.Figure):
        raise TypeError(f"Expected a plotly Figure, got {type(fig).__name__}")
    if not 0 < width <= 1:
        raise ValueError(f"'width' must be a fraction in (0, 1], got {width}")

    if not _has_interactive_data(fig):
        warnings.warn(
            "umap_make_interactive: making a plot interactive without sample ids or tooltips is useless. "
            "If the plot was generated using umap_plot() please specify the col_sample argument.",
            UserWarning,
            stacklevel=2,
        )

    styled = go.Figure(fig)
    styled.update_layout(
        hovermode="closest",
        hoverdistance=HOVER_DISTANCE,
        clickmode="event+select",
        hoverlabel=dict(bgcolor="white", bordercolor="black", font=dict(color="black")),
    )
    styled.update_traces(unselected=dict(marker=dict(opacity=UNSELECTED_OPACITY)))

    if rescale:
        styled.update_layout(autosize=True, width=None, height=None)
        config = {"responsive": True}
        default_width = f"{width * 100:g}%"
    else:
        if width_svg is not None:
            styled.update_layout(width=int(width_svg * PX_PER_INCH))
        if height_svg is not None:
            styled.update_layout(height=int(height_svg * PX_PER_INCH))
        config = {"responsive": False}
        default_width = "100%"

    return InteractivePlot(
        figure=styled,
        config=config,
        default_width=default_width,
        copy_on_click=_sample_column(fig) is not None,
    )
