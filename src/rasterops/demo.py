"""Demonstration run over a built-in 4x4 test image.

Writes the test image as ``test_image.ppm``, reads it back, applies every
transform and saves each result next to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rasterops.core.grid import PixelGrid
from rasterops.io.ppm import load_ppm, save_ppm
from rasterops.ops.transforms import (
    adjust_brightness,
    adjust_contrast,
    blur,
    flip_horizontal,
    flip_vertical,
    grayscale,
    rotate_90,
)

logger = logging.getLogger(__name__)

TEST_IMAGE_NAME = "test_image.ppm"

TEST_PATTERN: list[list[tuple[int, int, int]]] = [
    [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255)],        # red, green, blue, white
    [(255, 255, 0), (255, 0, 255), (0, 255, 255), (128, 128, 128)],  # yellow, magenta, cyan, gray
    [(255, 128, 0), (128, 255, 0), (128, 0, 255), (255, 128, 128)],  # orange, light green, purple, pink
    [(128, 255, 128), (128, 128, 255), (255, 255, 128), (0, 0, 0)],  # light green, light blue, light yellow, black
]


@dataclass
class DemoStep:
    """One transform applied during the demo and where its result went."""

    label: str
    path: Path
    grid: PixelGrid


def build_test_image() -> PixelGrid:
    """The fixed 4x4 RGB test pattern."""
    grid = PixelGrid(4, 4)
    for row, pixels in enumerate(TEST_PATTERN):
        for col, rgb in enumerate(pixels):
            for channel, value in enumerate(rgb):
                grid.set(row, col, channel, value)
    return grid


def run_demo(
    output_dir: Path,
    brightness_delta: int = 50,
    contrast_factor: float = 1.5,
) -> list[DemoStep]:
    """Run every transform on the test image and save the results.

    The first returned step is the reloaded source image itself.
    """
    output_dir = Path(output_dir)
    source_path = save_ppm(build_test_image(), output_dir / TEST_IMAGE_NAME)
    source = load_ppm(source_path)

    plan = [
        ("Grayscale conversion", "gray_image.ppm", grayscale, {}),
        ("Horizontal flip", "flipped_horizontal.ppm", flip_horizontal, {}),
        ("Vertical flip", "flipped_vertical.ppm", flip_vertical, {}),
        ("Brightness adjustment", "bright_image.ppm", adjust_brightness,
         {"delta": brightness_delta}),
        ("Contrast adjustment", "contrast_image.ppm", adjust_contrast,
         {"factor": contrast_factor}),
        ("Blur filter", "blurred_image.ppm", blur, {}),
        ("90-degree rotation", "rotated90_image.ppm", rotate_90, {}),
    ]

    steps = [DemoStep(label="Original image", path=source_path, grid=source)]
    for label, filename, fn, kwargs in plan:
        result = fn(source, **kwargs)
        path = save_ppm(result, output_dir / filename)
        logger.info("%s completed -> %s", label, path.name)
        steps.append(DemoStep(label=label, path=path, grid=result))
    return steps
