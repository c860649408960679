"""Tests for the pixel transforms."""

from __future__ import annotations

import numpy as np
import pytest

from rasterops.core.grid import PixelGrid
from rasterops.errors import InvalidDimensionsError
from rasterops.ops.transforms import (
    adjust_brightness,
    adjust_contrast,
    blur,
    clamp,
    flip_horizontal,
    flip_vertical,
    grayscale,
    rotate_90,
)


def _row(grid: PixelGrid, row: int) -> list[int]:
    return [grid.get(row, c, 0) for c in range(grid.width)]


class TestClamp:
    def test_bounds(self) -> None:
        out = clamp(np.array([-20, 0, 128, 255, 300]))
        assert out.tolist() == [0, 0, 128, 255, 255]


class TestGrayscale:
    def test_single_channel_output(self, test_image: PixelGrid) -> None:
        gray = grayscale(test_image)
        assert gray.channels == 1
        assert (gray.width, gray.height) == (4, 4)

    def test_truncates_luma(self, test_image: PixelGrid) -> None:
        gray = grayscale(test_image)
        # 0.587 * 255 = 149.685 truncates to 149
        assert _row(gray, 0) == [76, 149, 29, 255]
        assert _row(gray, 1) == [225, 105, 178, 127]
        assert _row(gray, 2) == [151, 187, 67, 165]
        assert _row(gray, 3) == [202, 142, 240, 0]

    def test_output_range(self, ramp_grid: PixelGrid) -> None:
        arr = grayscale(ramp_grid).as_array()
        assert arr.min() >= 0
        assert arr.max() <= 255

    def test_single_channel_input_is_copied(self, gray_grid: PixelGrid) -> None:
        out = grayscale(gray_grid)
        assert out == gray_grid
        assert out is not gray_grid

    def test_two_channel_input_rejected(self) -> None:
        with pytest.raises(InvalidDimensionsError):
            grayscale(PixelGrid(2, 2, channels=2))

    def test_input_untouched(self, test_image: PixelGrid) -> None:
        before = test_image.copy()
        grayscale(test_image)
        assert test_image == before


class TestFlips:
    def test_flip_horizontal_mapping(self, ramp_grid: PixelGrid) -> None:
        out = flip_horizontal(ramp_grid)
        w = ramp_grid.width
        for r in range(ramp_grid.height):
            for c in range(w):
                assert out.pixel(r, w - 1 - c) == ramp_grid.pixel(r, c)

    def test_flip_vertical_mapping(self, ramp_grid: PixelGrid) -> None:
        out = flip_vertical(ramp_grid)
        h = ramp_grid.height
        for r in range(h):
            for c in range(ramp_grid.width):
                assert out.pixel(h - 1 - r, c) == ramp_grid.pixel(r, c)

    def test_flip_horizontal_test_image(self, test_image: PixelGrid) -> None:
        out = flip_horizontal(test_image)
        assert out.pixel(0, 0) == (255, 255, 255)
        assert out.pixel(0, 3) == (255, 0, 0)

    def test_double_flip_is_identity(self, ramp_grid: PixelGrid) -> None:
        assert flip_horizontal(flip_horizontal(ramp_grid)) == ramp_grid
        assert flip_vertical(flip_vertical(ramp_grid)) == ramp_grid

    def test_single_pixel(self) -> None:
        grid = PixelGrid.from_array([[[1, 2, 3]]])
        assert flip_horizontal(grid) == grid
        assert flip_vertical(grid) == grid


class TestRotate:
    def test_swaps_dimensions(self, ramp_grid: PixelGrid) -> None:
        out = rotate_90(ramp_grid)
        assert (out.width, out.height) == (ramp_grid.height, ramp_grid.width)
        assert out.channels == ramp_grid.channels

    def test_clockwise_mapping(self, ramp_grid: PixelGrid) -> None:
        out = rotate_90(ramp_grid)
        h = ramp_grid.height
        for r in range(h):
            for c in range(ramp_grid.width):
                assert out.pixel(c, h - 1 - r) == ramp_grid.pixel(r, c)

    def test_small_example(self) -> None:
        grid = PixelGrid.from_array([[1, 2], [3, 4]])
        assert rotate_90(grid).as_array()[:, :, 0].tolist() == [[3, 1], [4, 2]]

    def test_four_rotations_is_identity(self, ramp_grid: PixelGrid) -> None:
        out = ramp_grid
        for _ in range(4):
            out = rotate_90(out)
        assert out == ramp_grid


class TestBrightness:
    def test_zero_delta_is_identity(self, test_image: PixelGrid) -> None:
        assert adjust_brightness(test_image, 0) == test_image

    def test_clamps_high(self, test_image: PixelGrid) -> None:
        out = adjust_brightness(test_image, 50)
        assert out.pixel(0, 0) == (255, 50, 50)
        assert out.pixel(1, 3) == (178, 178, 178)

    def test_clamps_low(self, test_image: PixelGrid) -> None:
        out = adjust_brightness(test_image, -200)
        assert out.pixel(0, 3) == (55, 55, 55)
        assert out.pixel(1, 3) == (0, 0, 0)

    @pytest.mark.parametrize("delta", [-1000, -128, -1, 1, 127, 1000])
    def test_output_range(self, ramp_grid: PixelGrid, delta: int) -> None:
        arr = adjust_brightness(ramp_grid, delta).as_array()
        assert arr.min() >= 0
        assert arr.max() <= 255

    @pytest.mark.parametrize(("delta", "expected"), [(10**20, 255), (-(10**20), 0)])
    def test_huge_delta_saturates(self, ramp_grid: PixelGrid, delta: int, expected: int) -> None:
        arr = adjust_brightness(ramp_grid, delta).as_array()
        assert (arr == expected).all()

    def test_clamps_raw_out_of_range_input(self) -> None:
        grid = PixelGrid(1, 1)
        grid.set(0, 0, 0, 400)
        grid.set(0, 0, 1, -400)
        out = adjust_brightness(grid, 0)
        assert out.get(0, 0, 0) == 255
        assert out.get(0, 0, 1) == 0

    def test_input_untouched(self, test_image: PixelGrid) -> None:
        before = test_image.copy()
        adjust_brightness(test_image, 80)
        assert test_image == before


class TestContrast:
    def test_unit_factor_is_identity(self, test_image: PixelGrid) -> None:
        assert adjust_contrast(test_image, 1.0) == test_image

    def test_stretch(self) -> None:
        grid = PixelGrid.from_array([[0, 128, 255, 50, 200, 10]])
        out = adjust_contrast(grid, 1.5)
        assert _row(out, 0) == [0, 128, 255, 11, 236, 0]

    def test_reduce_truncates(self) -> None:
        grid = PixelGrid.from_array([[0, 255]])
        assert _row(adjust_contrast(grid, 0.5), 0) == [64, 191]

    def test_zero_factor_flattens(self, test_image: PixelGrid) -> None:
        arr = adjust_contrast(test_image, 0.0).as_array()
        assert (arr == 128).all()

    def test_keeps_dimensions(self, ramp_grid: PixelGrid) -> None:
        assert adjust_contrast(ramp_grid, 2.0).shape == ramp_grid.shape

    @pytest.mark.parametrize("factor", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_factor_rejected(self, test_image: PixelGrid, factor: float) -> None:
        with pytest.raises(ValueError, match="finite"):
            adjust_contrast(test_image, factor)


class TestBlur:
    def test_interior_average(self, test_image: PixelGrid) -> None:
        out = blur(test_image)
        assert out.pixel(1, 1) == (141, 127, 113)
        assert out.pixel(1, 2) == (127, 141, 170)
        assert out.pixel(2, 1) == (170, 170, 141)
        assert out.pixel(2, 2) == (141, 127, 156)

    def test_border_is_zero(self, test_image: PixelGrid) -> None:
        out = blur(test_image)
        for i in range(4):
            for r, c in [(0, i), (3, i), (i, 0), (i, 3)]:
                assert out.pixel(r, c) == (0, 0, 0)

    def test_uniform_interior_preserved(self, uniform_grid: PixelGrid) -> None:
        arr = blur(uniform_grid).as_array()
        assert (arr[1:-1, 1:-1] == 90).all()
        assert (arr[0] == 0).all()
        assert (arr[:, -1] == 0).all()

    @pytest.mark.parametrize(("width", "height"), [(1, 1), (2, 5), (5, 2), (2, 2)])
    def test_no_interior_is_all_zero(self, width: int, height: int) -> None:
        grid = PixelGrid.from_array(np.full((height, width, 3), 200))
        out = blur(grid)
        assert out.shape == grid.shape
        assert not out.as_array().any()

    def test_floor_division(self) -> None:
        arr = np.zeros((3, 3, 1), dtype=int)
        arr[1, 1, 0] = 17
        out = blur(PixelGrid.from_array(arr))
        assert out.get(1, 1, 0) == 1

    def test_single_channel(self, gray_grid: PixelGrid) -> None:
        assert blur(gray_grid).channels == 1


class TestPurity:
    @pytest.mark.parametrize(
        "fn",
        [grayscale, flip_horizontal, flip_vertical, blur, rotate_90],
    )
    def test_returns_new_grid(self, test_image: PixelGrid, fn) -> None:
        before = test_image.copy()
        out = fn(test_image)
        assert out is not test_image
        assert test_image == before

    def test_max_value_inherited(self) -> None:
        grid = PixelGrid(3, 3, max_value=100)
        assert rotate_90(grid).max_value == 100
        assert grayscale(grid).max_value == 100
