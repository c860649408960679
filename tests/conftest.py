"""Shared test fixtures for rasterops.

Provides small, deterministic grids so individual test modules stay
focused on the behaviour they check.
"""

from __future__ import annotations

import numpy as np
import pytest

from rasterops.core.grid import PixelGrid
from rasterops.demo import build_test_image


@pytest.fixture()
def test_image() -> PixelGrid:
    """The 4x4 RGB pattern used by the demo."""
    return build_test_image()


@pytest.fixture()
def ramp_grid() -> PixelGrid:
    """A non-square 3-row x 5-column RGB grid with distinct samples 0..44."""
    return PixelGrid.from_array(np.arange(3 * 5 * 3).reshape(3, 5, 3))


@pytest.fixture()
def gray_grid() -> PixelGrid:
    """A 2x3 single-channel grid."""
    return PixelGrid.from_array(np.array([[10, 20, 30], [40, 50, 60]]))


@pytest.fixture()
def uniform_grid() -> PixelGrid:
    """A 5x5 RGB grid where every sample is 90."""
    return PixelGrid.from_array(np.full((5, 5, 3), 90))
