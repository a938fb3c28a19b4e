"""Small example datasets for trying out the plotting helpers."""

from __future__ import annotations

import pandas as pd

_SAMPLES = ["COLO829v003T", "DO1000", "DO1001", "DO1002", "DO1003", "DO1004"]


def example_umap() -> pd.DataFrame:
    """Six samples projected to two dimensions (columns ``dim1``, ``dim2``, ``sample``)."""

    return pd.DataFrame(
        {
            "dim1": [
                -1.15777099132538, -0.606620407104492, 0.766777420043946,
                -0.147877311706543, 0.31230583190918, -0.32458553314209,
            ],
            "dim2": [
                1.04326260089874, 0.689059448242187, -0.428349304199219,
                -0.563606071472169, -0.062956619262696, 0.365852546691894,
            ],
            "sample": _SAMPLES,
        }
    )


def example_umap_metadata() -> pd.DataFrame:
    """Metadata for :func:`example_umap` (columns ``sample``, ``dataset``)."""

    return pd.DataFrame(
        {
            "sample": _SAMPLES,
            "dataset": ["Cell line", "PCAWG", "PCAWG", "PCAWG", "PCAWG", "PCAWG"],
        }
    )
