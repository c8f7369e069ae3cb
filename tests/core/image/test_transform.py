"""
Tests for core.image.transform module.

Tests the generic per-element transforms over one to four images.
"""

import numpy as np
import pytest

from common.base import ROI
from core.exceptions import SizeMismatchException
from core.image import Bgr, Byte, Gray, Image, Single
from core.image.transform import (
    action,
    combine2,
    combine3,
    combine4,
    convert_pixels,
    convert_pixels_indexed,
)


def _gray(width, height, value):
    return Image(Gray, Byte, width, height, Gray(value))


class TestConvertPixels:
    """Tests for unary convert"""

    def test_saturates_into_byte(self, gray_image):
        """Test 10 * 30 = 300 saturates to 255"""
        result = convert_pixels(gray_image, lambda v: v * 30)

        assert result.depth is Byte
        assert np.all(result.pixels == 255)

    def test_rounds_into_byte(self, gray_image):
        result = convert_pixels(gray_image, lambda v: v / 4)  # 2.5 -> 2
        assert np.all(result.pixels == 2)

    def test_result_depth(self, gray_image):
        result = convert_pixels(gray_image, lambda v: v / 4, depth=Single)

        assert result.depth is Single
        assert result.color is Gray
        assert np.all(result.pixels == 2.5)

    def test_roi_sized_result(self, bgr_image):
        """Test only the ROI is transformed and the result has no ROI"""
        bgr_image.roi = ROI(x=1, y=1, width=3, height=2)

        result = convert_pixels(bgr_image, lambda v: v)

        assert result.roi is None
        assert (result.width, result.height) == (3, 2)
        assert np.array_equal(result.pixels, bgr_image.pixels)

    def test_padded_rows(self):
        """Test row padding is neither read nor written"""
        image = Image.from_array(np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint8), Gray)
        assert image.buffer.stride == 4

        result = convert_pixels(image, lambda v: v + 1)

        assert result.pixels.tolist() == [[2, 3, 4], [5, 6, 7]]
        assert result.binary[3] == 0
        assert result.binary[7] == 0

    def test_vectorized(self, gradient_image):
        """Test vectorized functions receive whole rows"""
        rows = []

        def square(row):
            rows.append(row.shape)
            return row * row

        result = convert_pixels(gradient_image, square, vectorized=True)

        assert rows == [(3,), (3,)]
        assert result.pixels.tolist() == [[0.0, 1.0, 4.0], [9.0, 16.0, 25.0]]


class TestConvertPixelsIndexed:
    """Tests for unary convert with coordinates"""

    def test_row_and_column(self):
        image = _gray(3, 2, 0)

        result = convert_pixels_indexed(image, lambda v, row, col: row * 10 + col)

        assert result.pixels.tolist() == [[0, 1, 2], [10, 11, 12]]

    def test_channels_share_column(self):
        """Test every channel of a pixel sees the same column"""
        image = Image(Bgr, Byte, 2, 1)

        result = convert_pixels_indexed(image, lambda v, row, col: col)

        assert result.pixels.tolist() == [[[0, 0, 0], [1, 1, 1]]]


class TestCombine:
    """Tests for binary, ternary and quaternary convert"""

    def test_combine2(self):
        a = _gray(2, 2, 100)
        b = _gray(2, 2, 30)

        assert np.all(combine2(a, b, lambda x, y: x - y).pixels == 70)
        # Negative results saturate at zero
        assert np.all(combine2(b, a, lambda x, y: x - y).pixels == 0)

    def test_combine2_mixed_depths(self, gradient_image):
        """Test operands of different depths are each decoded in their own type"""
        weights = Image(Gray, Byte, 3, 2, Gray(2))

        result = combine2(gradient_image, weights, lambda x, w: x * w)

        assert result.depth is Single
        assert result.pixels.tolist() == [[0.0, 2.0, 4.0], [6.0, 8.0, 10.0]]

    def test_combine2_vectorized(self):
        a = _gray(2, 2, 100)
        b = _gray(2, 2, 30)

        result = combine2(a, b, np.add, vectorized=True)

        assert np.all(result.pixels == 130)

    def test_combine2_roi(self):
        """Test co-operands are aligned by their own ROIs"""
        a = _gray(4, 4, 1)
        b = _gray(2, 2, 5)
        a.roi = ROI(x=2, y=2, width=2, height=2)

        result = combine2(a, b, lambda x, y: x + y)

        assert (result.width, result.height) == (2, 2)
        assert np.all(result.pixels == 6)

    def test_combine3(self):
        a, b, c = _gray(2, 1, 1), _gray(2, 1, 2), _gray(2, 1, 3)
        assert np.all(combine3(a, b, c, lambda x, y, z: x + y * z).pixels == 7)

    def test_combine4(self):
        images = [_gray(1, 2, v) for v in (1, 2, 3, 4)]
        result = combine4(*images, lambda a, b, c, d: a + b + c + d)
        assert np.all(result.pixels == 10)

    def test_size_mismatch(self):
        """Test co-operands must have the same ROI size"""
        with pytest.raises(SizeMismatchException) as exc_info:
            combine2(_gray(2, 2, 0), _gray(3, 3, 0), lambda x, y: x)

        assert "Image size do not match" in str(exc_info.value)

    def test_channel_mismatch_is_size_mismatch(self):
        """Test differing channel counts change the elements per row"""
        with pytest.raises(SizeMismatchException):
            combine2(_gray(2, 1, 0), Image(Bgr, Byte, 1, 1), lambda x, y: x)


class TestAction:
    """Tests for side-effecting scans"""

    def test_visits_row_major(self):
        image = Image.from_array(np.array([[1, 2], [3, 4]], dtype=np.uint8), Gray)
        seen = []

        action(image, seen.append)

        assert seen == [1, 2, 3, 4]

    def test_with_second_image(self, gray_image):
        other = _gray(4, 4, 3)
        products = []

        action(gray_image, lambda a, b: products.append(a * b), other)

        assert products == [30] * 16

    def test_does_not_modify(self, gray_image):
        action(gray_image, lambda v: v * 2)
        assert np.all(gray_image.pixels == 10)
