"""rasterops CLI: Typer-based entry point.

Commands
--------
demo        Run every transform on the built-in 4x4 test image.
apply       Load a P3 file, run a chain of transforms, save the result.
show        Print the samples of a P3 file.
compare     Report the differences between two P3 files.
ops         List the registered transforms.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from rasterops.errors import RasterError

app = typer.Typer(
    name="rasterops",
    help="rasterops: raster transforms over plain-text PPM images",
    add_completion=False,
)


def _setup_logging(verbose: bool = False) -> None:
    from rasterops.config.settings import get_settings

    level = logging.DEBUG if verbose else getattr(logging, get_settings().log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(name)-28s  %(levelname)-7s  %(message)s",
    )


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def demo(
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Where to write the PPM files (default from settings)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Run every transform on the built-in test image and save the results."""
    _setup_logging(verbose)
    from rasterops.config.settings import get_settings
    from rasterops.demo import run_demo
    from rasterops.ops.inspection import render_grid

    demo_settings = get_settings().demo
    target = output_dir if output_dir is not None else demo_settings.output_dir
    try:
        steps = run_demo(
            target,
            brightness_delta=demo_settings.brightness_delta,
            contrast_factor=demo_settings.contrast_factor,
        )
    except (RasterError, OSError) as exc:
        _fail(exc)

    for step in steps:
        typer.echo(f"- {step.label} -> {step.path}")
        typer.echo(render_grid(step.grid))
        typer.echo("")
    typer.echo(f"All operations completed. {len(steps)} files written to {target}.")


@app.command()
def apply(
    input_path: Path = typer.Argument(..., help="Source P3 file."),
    output_path: Path = typer.Argument(..., help="Destination P3 file."),
    op: list[str] = typer.Option(
        ..., "--op", help="Transform step, e.g. grayscale or brightness:40. Repeatable."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Apply a chain of transforms to a P3 file."""
    _setup_logging(verbose)
    from rasterops.io.ppm import load_ppm, save_ppm
    from rasterops.ops.pipeline import apply_program, parse_step

    try:
        program = [parse_step(step) for step in op]
        result = apply_program(program, load_ppm(input_path))
        save_ppm(result, output_path)
    except (RasterError, ValueError, OSError) as exc:
        _fail(exc)

    chain = " -> ".join(step["op"] for step in program)
    typer.echo(f"{input_path} [{chain}] -> {output_path} ({result.width}x{result.height})")


@app.command()
def show(
    input_path: Path = typer.Argument(..., help="P3 file to print."),
) -> None:
    """Print the samples of a P3 file."""
    _setup_logging()
    from rasterops.io.ppm import load_ppm
    from rasterops.ops.inspection import render_grid

    try:
        grid = load_ppm(input_path)
    except (RasterError, OSError) as exc:
        _fail(exc)
    typer.echo(render_grid(grid))


@app.command()
def compare(
    first: Path = typer.Argument(..., help="First P3 file."),
    second: Path = typer.Argument(..., help="Second P3 file."),
    show_changes: int = typer.Option(10, "--limit", "-n", help="List at most N changed samples."),
) -> None:
    """Compare two P3 files; exits with status 1 when they differ."""
    _setup_logging()
    from rasterops.io.ppm import load_ppm
    from rasterops.ops.inspection import grid_diff

    try:
        diff = grid_diff(load_ppm(first), load_ppm(second))
    except (RasterError, OSError) as exc:
        _fail(exc)

    if diff["identical"]:
        typer.echo("Identical.")
        return
    if diff["shape_changed"]:
        typer.echo(f"Shape differs: {diff['before']['shape']} vs {diff['after']['shape']}")
    elif diff["n_changed_samples"] == 0:
        typer.echo(f"max_value differs: {diff['before']['max_value']} vs {diff['after']['max_value']}")
    else:
        typer.echo(f"{diff['n_changed_samples']} samples differ.")
        for change in diff["changed_samples"][:show_changes]:
            typer.echo(
                f"  ({change['row']},{change['col']},{change['channel']}) "
                f"{change['from']} -> {change['to']}"
            )
    raise typer.Exit(1)


@app.command()
def ops() -> None:
    """List all registered transforms."""
    from rasterops.ops.pipeline import describe_transforms

    for row in describe_transforms():
        param = f"[{row['parameter']}]" if row["parameter"] else ""
        typer.echo(f"  {row['name']:16s} {param:18s} {row['summary']}")


def main() -> int:
    """Entry point for the ``rasterops`` console script."""
    app()
    return 0
