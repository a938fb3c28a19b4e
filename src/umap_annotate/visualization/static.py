from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns


def save_static_plot(
    dimred: pd.DataFrame,
    path: Path,
    col_dim1: str = "UMAP_1",
    col_dim2: str = "UMAP_2",
    hue: Optional[str] = None,
    style: Optional[str] = None,
    title: str = "Dimensionality Reduction",
) -> Path:
    """Render ``dimred`` as a PNG scatter plot for reports."""

    missing = [c for c in (col_dim1, col_dim2, hue, style) if c is not None and c not in dimred]
    if missing:
        raise KeyError(f"Columns missing from plot data: {missing}")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    plt.figure(figsize=(8, 6))
    sns.scatterplot(
        data=dimred,
        x=col_dim1,
        y=col_dim2,
        hue=hue,
        style=style,
        palette="tab10" if hue is not None else None,
        s=25,
        alpha=0.8,
    )
    plt.title(title, fontweight="bold")
    plt.xticks([])
    plt.yticks([])
    plt.tight_layout()
    plt.savefig(path, dpi=200)
    plt.close()
    return path
