"""rasterops: small raster image transforms over an explicit pixel grid.

Images live in a :class:`~rasterops.core.grid.PixelGrid` (row, column,
channel) and flow through pure transforms that always return a new grid.
Plain-text PPM (P3) files are read and written by :mod:`rasterops.io.ppm`.
"""

from __future__ import annotations

from rasterops.core.grid import PixelGrid
from rasterops.errors import (
    BoundsError,
    FormatError,
    InvalidDimensionsError,
    RasterError,
    UnknownTransformError,
)

__version__ = "0.1.0"

__all__ = [
    "BoundsError",
    "FormatError",
    "InvalidDimensionsError",
    "PixelGrid",
    "RasterError",
    "UnknownTransformError",
    "__version__",
]
