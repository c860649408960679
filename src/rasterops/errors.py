"""Error taxonomy shared by the grid, the transforms and the PPM codec.

Each error also derives from the closest builtin so callers that only know
about ``IndexError``/``ValueError``/``KeyError`` keep working.
"""

from __future__ import annotations


class RasterError(Exception):
    """Base class for every error raised by rasterops."""


class BoundsError(RasterError, IndexError):
    """A (row, col, channel) index fell outside the grid dimensions."""


class InvalidDimensionsError(RasterError, ValueError):
    """Width, height or channel count is not a positive integer."""


class FormatError(RasterError, ValueError):
    """Malformed pixel-map text during decode, or an unencodable grid."""


class UnknownTransformError(RasterError, KeyError):
    """A program step named a transform that is not registered."""

    def __str__(self) -> str:
        # KeyError would repr() the message.
        return str(self.args[0]) if self.args else ""
