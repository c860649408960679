"""Pixel transforms over :class:`~rasterops.core.grid.PixelGrid`.

Every transform is a pure function: it reads its input through a read-only
view and returns a freshly allocated grid.  Results are clamped to the 8-bit
range ``[0, 255]`` regardless of the grid's ``max_value``.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from rasterops.core.grid import SAMPLE_DTYPE, PixelGrid
from rasterops.errors import InvalidDimensionsError

logger = logging.getLogger(__name__)

SAMPLE_MIN = 0
SAMPLE_MAX = 255

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

CONTRAST_PIVOT = 128.0

# Brightness deltas saturate here so clip bounds and sums stay inside int64.
DELTA_LIMIT = 2 ** 62


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def clamp(values: np.ndarray) -> np.ndarray:
    """Clamp samples into ``[0, 255]``."""
    return np.clip(values, SAMPLE_MIN, SAMPLE_MAX)


def _new_grid(source: PixelGrid, samples: np.ndarray) -> PixelGrid:
    """Wrap *samples* in a new grid that inherits ``max_value`` from *source*."""
    return PixelGrid.from_array(samples, max_value=source.max_value)


# ---------------------------------------------------------------------------
# Colour
# ---------------------------------------------------------------------------


def grayscale(grid: PixelGrid) -> PixelGrid:
    """Convert to a single-channel luma image.

    ``gray = 0.299 * R + 0.587 * G + 0.114 * B`` is evaluated in double
    precision and truncated toward zero, not rounded.  A grid that already has
    one channel is returned as a copy.
    """
    if grid.channels == 1:
        return grid.copy()
    if grid.channels < 3:
        raise InvalidDimensionsError(
            f"grayscale needs 1 or at least 3 channels, got {grid.channels}"
        )
    arr = grid.as_array()
    r, g, b = LUMA_WEIGHTS
    luma = r * arr[:, :, 0] + g * arr[:, :, 1] + b * arr[:, :, 2]
    return _new_grid(grid, np.trunc(luma).astype(SAMPLE_DTYPE))


def adjust_brightness(grid: PixelGrid, delta: int) -> PixelGrid:
    """Add *delta* to every sample, clamped to ``[0, 255]``.

    Any integer delta is accepted; beyond +/-2**62 it saturates.
    """
    d = max(-DELTA_LIMIT, min(DELTA_LIMIT, int(delta)))
    # Samples outside [-d, 255 - d] land on the same clamped value.
    shifted = np.clip(grid.as_array(), SAMPLE_MIN - d, SAMPLE_MAX - d) + d
    return _new_grid(grid, clamp(shifted))


def adjust_contrast(grid: PixelGrid, factor: float) -> PixelGrid:
    """Scale every sample's distance from 128 by *factor*.

    Computed in floating point, clamped to ``[0, 255]`` and then truncated.
    Raises ``ValueError`` for a NaN or infinite *factor*.
    """
    if not math.isfinite(factor):
        raise ValueError(f"contrast factor must be finite, got {factor!r}")
    arr = grid.as_array().astype(np.float64)
    adjusted = float(factor) * (arr - CONTRAST_PIVOT) + CONTRAST_PIVOT
    return _new_grid(grid, np.trunc(clamp(adjusted)).astype(SAMPLE_DTYPE))


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def flip_horizontal(grid: PixelGrid) -> PixelGrid:
    """Mirror left-right: ``out[r][w-1-c] = in[r][c]``."""
    return _new_grid(grid, np.flip(grid.as_array(), axis=1))


def flip_vertical(grid: PixelGrid) -> PixelGrid:
    """Mirror top-bottom: ``out[h-1-r][c] = in[r][c]``."""
    return _new_grid(grid, np.flip(grid.as_array(), axis=0))


def rotate_90(grid: PixelGrid) -> PixelGrid:
    """Rotate 90° clockwise; width and height swap.

    ``out[c][h-1-r] = in[r][c]`` for every channel.
    """
    return _new_grid(grid, np.rot90(grid.as_array(), k=-1, axes=(0, 1)))


# ---------------------------------------------------------------------------
# Neighbourhood
# ---------------------------------------------------------------------------


def blur(grid: PixelGrid) -> PixelGrid:
    """3x3 box blur of interior pixels.

    Each pixel with a full 3x3 neighbourhood becomes ``floor(sum / 9)`` per
    channel.  Border rows and columns are left at 0, with no padding or edge
    replication, so grids narrower or shorter than 3 come back all zero.
    """
    arr = grid.as_array()
    h, w, _ = arr.shape
    out = np.zeros_like(arr, dtype=SAMPLE_DTYPE)
    if h < 3 or w < 3:
        logger.debug("blur: %dx%d grid has no interior pixels", w, h)
        return _new_grid(grid, out)

    # Sum the nine shifted interior windows.
    total = np.zeros((h - 2, w - 2, arr.shape[2]), dtype=SAMPLE_DTYPE)
    for dr in range(3):
        for dc in range(3):
            total += arr[dr: dr + h - 2, dc: dc + w - 2, :]
    out[1:-1, 1:-1, :] = total // 9
    return _new_grid(grid, out)
