"""Plain-text PPM (``P3``) codec.

Layout::

    P3
    <width> <height>
    <max_value>
    r g b r g b ...      # one line per image row

Every token is whitespace separated and ``#`` starts a comment that runs to
the end of the line.  Samples are interleaved R, G, B in row-major order.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from rasterops.core.grid import SAMPLE_DTYPE, PixelGrid
from rasterops.errors import FormatError

logger = logging.getLogger(__name__)

MAGIC = "P3"
PPM_CHANNELS = 3
HEADER_FIELDS = ("width", "height", "max_value")


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        tokens.extend(line.split())
    return tokens


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise FormatError(f"{what} is not an integer: {token!r}") from None


def decode(text: str) -> PixelGrid:
    """Parse P3 text into a 3-channel :class:`PixelGrid`.

    Raises
    ------
    FormatError
        If the tag is not ``P3``, a header field is missing or not a positive
        integer, or fewer than ``width * height * 3`` samples follow.
    """
    tokens = _tokenize(text)
    if not tokens or tokens[0] != MAGIC:
        found = tokens[0] if tokens else "<empty>"
        raise FormatError(f"expected {MAGIC} tag, found {found!r}")

    if len(tokens) < 1 + len(HEADER_FIELDS):
        raise FormatError("truncated header: need width, height and max value")
    width, height, max_value = (
        _to_int(tok, field) for tok, field in zip(tokens[1:4], HEADER_FIELDS)
    )
    if max_value <= 0:
        raise FormatError(f"max_value must be positive, got {max_value}")

    if width <= 0 or height <= 0:
        raise FormatError(f"bad image dimensions: {width}x{height}")

    # Token count is checked before any buffer is allocated.
    expected = width * height * PPM_CHANNELS
    if len(tokens) - 4 < expected:
        raise FormatError(
            f"expected {expected} samples for {width}x{height}, found {len(tokens) - 4}"
        )
    body = tokens[4: 4 + expected]
    if len(tokens) > 4 + expected:
        logger.debug("Ignoring %d trailing tokens", len(tokens) - 4 - expected)

    try:
        samples = np.array([int(tok) for tok in body], dtype=SAMPLE_DTYPE)
    except (ValueError, OverflowError) as exc:
        raise FormatError(f"bad sample: {exc}") from None

    return PixelGrid.from_array(samples.reshape(height, width, PPM_CHANNELS), max_value=max_value)


def encode(grid: PixelGrid) -> str:
    """Serialise *grid* as P3 text.

    Single-channel grids are written as gray RGB (the sample repeated three
    times); grids with more than three channels write their first three.
    """
    if grid.channels == 1:
        rgb = np.repeat(grid.as_array(), PPM_CHANNELS, axis=2)
    elif grid.channels >= PPM_CHANNELS:
        rgb = grid.as_array()[:, :, :PPM_CHANNELS]
    else:
        raise FormatError(f"cannot encode a {grid.channels}-channel grid as {MAGIC}")

    lines = [MAGIC, f"{grid.width} {grid.height}", str(grid.max_value)]
    for row in rgb:
        lines.append(" ".join(str(int(v)) for v in row.reshape(-1)))
    return "\n".join(lines) + "\n"


def load_ppm(path: str | Path) -> PixelGrid:
    """Read and decode a P3 file."""
    path = Path(path)
    grid = decode(path.read_text(encoding="utf-8"))
    logger.info("Loaded %s (%dx%d, max %d)", path, grid.width, grid.height, grid.max_value)
    return grid


def save_ppm(grid: PixelGrid, path: str | Path) -> Path:
    """Encode *grid* and write it to *path*, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode(grid), encoding="ascii")
    logger.info("Saved %s (%dx%d, %d channels)", path, grid.width, grid.height, grid.channels)
    return path
