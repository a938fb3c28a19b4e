from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import PipelineConfig, load_config
from .embedding.runner import run_umap_pipeline

console = Console()
DEFAULT_CONFIG_PATH = Path("configs/umap.yaml")


def summarize_config(config: PipelineConfig) -> None:
    table = Table(title="UMAP Run Summary", show_header=True, header_style="bold cyan")
    table.add_column("Section", style="bold")
    table.add_column("Key", justify="right")
    table.add_column("Value", overflow="fold")

    table.add_row("Input", "path", str(config.input.path))
    table.add_row("Input", "sample_col", config.input.sample_col or "n/a")
    table.add_row("Input", "metadata", str(config.input.metadata or "n/a"))
    emb = config.embedding
    table.add_row("Embedding", "normalise", str(emb.normalise))
    table.add_row("Embedding", "n_neighbors", str(emb.n_neighbors))
    table.add_row("Embedding", "n_components", str(emb.n_components))
    table.add_row("Embedding", "annotate_with", emb.annotate_with)
    plot = config.plot
    table.add_row(
        "Plot",
        "colour/fill/shape",
        "/".join(v or "-" for v in (plot.colour, plot.fill, plot.shape)),
    )
    table.add_row("Output", "output_dir", str(config.output.output_dir))
    table.add_row("Output", "figure_dir", str(config.output.figure_dir))

    console.print(table)


def run_pipeline(config: PipelineConfig, dry_run: bool) -> dict[str, Path]:
    if dry_run:
        console.print("[yellow]Dry-run mode: configuration validated, no embedding computed.[/yellow]")
        return {}
    return run_umap_pipeline(config.to_umap_config())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run an annotated UMAP embedding from a YAML configuration.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to a YAML configuration file.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and summarize the config without running UMAP.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    summarize_config(config)
    run_pipeline(config, dry_run=args.dry_run)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
