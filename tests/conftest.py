from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from umap_annotate.embedding import runner  # noqa: E402


@pytest.fixture
def iris_subset() -> pd.DataFrame:
    # first six rows of iris
    return pd.DataFrame(
        {
            "Sepal.Length": [5.1, 4.9, 4.7, 4.6, 5.0, 5.4],
            "Sepal.Width": [3.5, 3.0, 3.2, 3.1, 3.6, 3.9],
            "Petal.Length": [1.4, 1.4, 1.3, 1.5, 1.4, 1.7],
            "Petal.Width": [0.2, 0.2, 0.2, 0.2, 0.2, 0.4],
            "Species": pd.Categorical(["setosa"] * 6, categories=["setosa", "versicolor", "virginica"]),
        }
    )


@pytest.fixture
def blobs() -> pd.DataFrame:
    rng = np.random.default_rng(13)
    centers = np.array([[0.0, 0.0, 0.0], [6.0, 6.0, 6.0]])
    values = np.vstack([rng.normal(c, 0.5, size=(20, 3)) for c in centers])
    df = pd.DataFrame(values, columns=["f1", "f2", "f3"])
    df["group"] = ["a"] * 20 + ["b"] * 20
    df["sample"] = [f"S{i:02d}" for i in range(40)]
    return df


@pytest.fixture
def fake_umap(monkeypatch):
    """Replace the UMAP backend with a deterministic stand-in and record its calls."""

    calls = []

    def _fake(X, n_neighbors, **kwargs):
        calls.append({"X": X, "n_neighbors": n_neighbors, **kwargs})
        k = kwargs.get("n_components", 2)
        return np.arange(X.shape[0] * k, dtype=float).reshape(X.shape[0], k)

    monkeypatch.setattr(runner, "_embed_umap", _fake)
    return calls
