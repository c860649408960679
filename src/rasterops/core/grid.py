"""Pixel grid: the in-memory image representation.

Samples live in one flat, contiguous numpy buffer laid out row-major with
interleaved channels, so sample ``(row, col, channel)`` sits at
``(row * width + col) * channels + channel``.  Every accessor checks its
indices against the grid dimensions; nothing wraps or grows implicitly.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from rasterops.errors import BoundsError, InvalidDimensionsError

logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = 3
DEFAULT_MAX_VALUE = 255

SAMPLE_DTYPE = np.int64


def _require_positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionsError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidDimensionsError(f"{name} must be positive, got {value}")
    return int(value)


class PixelGrid:
    """An exclusively-owned ``height x width x channels`` grid of integer samples.

    Parameters
    ----------
    width, height:
        Image dimensions in pixels.  Must be positive.
    channels:
        Samples per pixel, 1 for grayscale and 3 for RGB.
    max_value:
        Largest representable sample, carried through to the PPM header.

    ``set`` stores raw values; keeping samples inside ``[0, 255]`` is the job
    of the transforms, not the grid.
    """

    __slots__ = ("_width", "_height", "_channels", "max_value", "_data")

    def __init__(
        self,
        width: int,
        height: int,
        channels: int = DEFAULT_CHANNELS,
        max_value: int = DEFAULT_MAX_VALUE,
    ) -> None:
        self._width = _require_positive("width", width)
        self._height = _require_positive("height", height)
        self._channels = _require_positive("channels", channels)
        self.max_value = _require_positive("max_value", max_value)
        self._data = np.zeros(self._height * self._width * self._channels, dtype=SAMPLE_DTYPE)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_array(cls, array: Any, max_value: int = DEFAULT_MAX_VALUE) -> PixelGrid:
        """Build a grid from a ``(h, w)`` or ``(h, w, c)`` array-like.

        The data is copied, so later changes to *array* never leak into the grid.
        A 2D array is read as a single-channel image.
        """
        arr = np.asarray(array)
        if arr.ndim == 2:
            arr = arr[:, :, np.newaxis]
        if arr.ndim != 3:
            raise InvalidDimensionsError(
                f"expected a 2D or 3D array, got {arr.ndim} dimensions"
            )
        height, width, channels = arr.shape
        grid = cls(width, height, channels, max_value=max_value)
        grid._data[:] = arr.astype(SAMPLE_DTYPE, copy=False).reshape(-1)
        return grid

    def copy(self) -> PixelGrid:
        """Return an independent grid with the same dimensions and samples."""
        clone = PixelGrid(self._width, self._height, self._channels, max_value=self.max_value)
        clone._data[:] = self._data
        return clone

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def shape(self) -> tuple[int, int, int]:
        """``(height, width, channels)``, the numpy axis order."""
        return (self._height, self._width, self._channels)

    @property
    def size(self) -> int:
        """Total number of samples in the buffer."""
        return int(self._data.size)

    # ------------------------------------------------------------------
    # Sample access
    # ------------------------------------------------------------------

    def index_of(self, row: int, col: int, channel: int) -> int:
        """Flat buffer offset of ``(row, col, channel)``.

        Raises :class:`BoundsError` when any index is outside the grid.
        """
        if not 0 <= row < self._height:
            raise BoundsError(f"row {row} out of range [0, {self._height})")
        if not 0 <= col < self._width:
            raise BoundsError(f"col {col} out of range [0, {self._width})")
        if not 0 <= channel < self._channels:
            raise BoundsError(f"channel {channel} out of range [0, {self._channels})")
        return (row * self._width + col) * self._channels + channel

    def get(self, row: int, col: int, channel: int) -> int:
        """Return the sample at ``(row, col, channel)``."""
        return int(self._data[self.index_of(row, col, channel)])

    def set(self, row: int, col: int, channel: int, value: int) -> None:
        """Store *value* at ``(row, col, channel)`` without clamping."""
        self._data[self.index_of(row, col, channel)] = int(value)

    def pixel(self, row: int, col: int) -> tuple[int, ...]:
        """All channel samples of one pixel."""
        start = self.index_of(row, col, 0)
        return tuple(int(v) for v in self._data[start: start + self._channels])

    def as_array(self) -> np.ndarray:
        """Read-only ``(height, width, channels)`` view of the buffer."""
        view = self._data.view().reshape(self.shape)
        view.flags.writeable = False
        return view

    # ------------------------------------------------------------------
    # Channel depth
    # ------------------------------------------------------------------

    def resize_channels(self, channels: int) -> None:
        """Change the channel count in place.

        Samples in channels that exist before and after are preserved; new
        channel slots are zero-filled and dropped channels are discarded.
        """
        new_channels = _require_positive("channels", channels)
        if new_channels == self._channels:
            return
        old = self._data.reshape(self.shape)
        data = np.zeros((self._height, self._width, new_channels), dtype=SAMPLE_DTYPE)
        keep = min(self._channels, new_channels)
        data[:, :, :keep] = old[:, :, :keep]
        logger.debug("Resized channels %d -> %d in place", self._channels, new_channels)
        self._channels = new_channels
        self._data = data.reshape(-1)

    def with_channels(self, channels: int) -> PixelGrid:
        """Return a new grid with *channels* channels; this grid is untouched."""
        clone = self.copy()
        clone.resize_channels(channels)
        return clone

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (
            self.shape == other.shape
            and self.max_value == other.max_value
            and bool(np.array_equal(self._data, other._data))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"PixelGrid(width={self._width}, height={self._height}, "
            f"channels={self._channels}, max_value={self.max_value})"
        )
