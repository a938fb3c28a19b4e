from __future__ import annotations

import pandas as pd
import pytest
import yaml
from pydantic import ValidationError

from umap_annotate import cli
from umap_annotate.config import PipelineConfig, load_config
from umap_annotate.embedding import UmapConfig, run_umap_pipeline
from umap_annotate.embedding import runner


@pytest.fixture
def dataset_csv(tmp_path, blobs):
    path = tmp_path / "dataset.csv"
    blobs.to_csv(path, index=False)
    return path


@pytest.fixture
def metadata_csv(tmp_path, blobs):
    path = tmp_path / "metadata.csv"
    pd.DataFrame(
        {"sample": blobs["sample"], "batch": ["b1", "b2"] * (len(blobs) // 2)}
    ).to_csv(path, index=False)
    return path


def test_pipeline_writes_artifacts(tmp_path, dataset_csv, metadata_csv, fake_umap):
    cfg = UmapConfig(
        input_path=dataset_csv,
        sample_col="sample",
        metadata_path=metadata_csv,
        colour_col="batch",
        shape_col="group",
        output_dir=tmp_path / "out",
        figure_dir=tmp_path / "figs",
        verbose=False,
    )

    paths = run_umap_pipeline(cfg)

    assert set(paths) == {"csv", "html", "figure"}
    assert all(p.exists() for p in paths.values())
    embedding = pd.read_csv(paths["csv"])
    assert list(embedding.columns[:3]) == ["sample", "UMAP_1", "UMAP_2"]
    assert len(embedding) == 40
    assert "plotly_click" in paths["html"].read_text(encoding="utf-8")

    call = fake_umap[0]
    assert call["random_state"] == 13
    assert call["min_dist"] == 0.1
    # sample ids are the index, not a feature
    assert call["X"].shape == (40, 3)


def test_embed_cli(tmp_path, dataset_csv, fake_umap):
    runner.main(
        [
            "--input",
            str(dataset_csv),
            "--sample-col",
            "sample",
            "--annotate-with",
            "none",
            "--n-neighbors",
            "10",
            "--output-dir",
            str(tmp_path / "out"),
            "--figure-dir",
            str(tmp_path / "figs"),
            "--quiet",
        ]
    )

    embedding = pd.read_csv(tmp_path / "out" / "umap_embedding.csv")
    assert list(embedding.columns) == ["sample", "UMAP_1", "UMAP_2"]
    assert fake_umap[0]["n_neighbors"] == 10


def _write_config(tmp_path, data):
    path = tmp_path / "umap.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_load_config_defaults(tmp_path, dataset_csv):
    path = _write_config(tmp_path, {"input": {"path": str(dataset_csv)}})

    config = load_config(path)

    assert isinstance(config, PipelineConfig)
    assert config.embedding.n_neighbors == 15
    assert config.embedding.annotate_with == "all"
    umap_cfg = config.to_umap_config()
    assert umap_cfg.input_path == dataset_csv
    assert umap_cfg.normalise is True


def test_load_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_rejects_unknown_annotation(tmp_path, dataset_csv):
    path = _write_config(
        tmp_path, {"input": {"path": str(dataset_csv)}, "embedding": {"annotate_with": "some"}}
    )
    with pytest.raises(ValidationError):
        load_config(path)


def test_cli_dry_run(tmp_path, dataset_csv, fake_umap, capsys):
    out_dir = tmp_path / "out"
    path = _write_config(
        tmp_path,
        {"input": {"path": str(dataset_csv)}, "output": {"output_dir": str(out_dir)}},
    )

    cli.main(["--config", str(path), "--dry-run"])

    assert "UMAP Run Summary" in capsys.readouterr().out
    assert not out_dir.exists()
    assert fake_umap == []


def test_cli_runs_pipeline(tmp_path, dataset_csv, fake_umap):
    path = _write_config(
        tmp_path,
        {
            "input": {"path": str(dataset_csv), "sample_col": "sample"},
            "embedding": {"annotate_with": "categorical", "n_components": 3},
            "plot": {"colour": "group"},
            "output": {"output_dir": str(tmp_path / "out"), "figure_dir": str(tmp_path / "figs")},
            "verbose": False,
        },
    )

    cli.main(["--config", str(path)])

    embedding = pd.read_csv(tmp_path / "out" / "umap_embedding.csv")
    assert list(embedding.columns) == ["sample", "UMAP_1", "UMAP_2", "UMAP_3", "group"]
    assert (tmp_path / "figs" / "umap_embedding.html").exists()
    assert (tmp_path / "figs" / "umap_embedding.png").exists()


def test_pipeline_with_metadata_column_sharing_a_dataset_name(tmp_path, dataset_csv, blobs, fake_umap):
    metadata_path = tmp_path / "metadata_overlap.csv"
    pd.DataFrame({"sample": blobs["sample"], "group": ["x", "y"] * (len(blobs) // 2)}).to_csv(
        metadata_path, index=False
    )
    cfg = UmapConfig(
        input_path=dataset_csv,
        sample_col="sample",
        metadata_path=metadata_path,
        colour_col="group",
        output_dir=tmp_path / "out",
        figure_dir=tmp_path / "figs",
        verbose=False,
    )

    paths = run_umap_pipeline(cfg)

    assert paths["figure"].exists()
    assert paths["html"].exists()
