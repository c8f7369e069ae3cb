"""
Tests for core.image.conversion module.

Tests color model conversion (direct and through the intermediate model),
depth conversion with float-to-byte auto scaling, and convert_scale.
"""

import cv2
import numpy as np
import pytest

from config import reload_settings
from core.exceptions import ColorConversionException
from core.image import Bgr, Byte, Gray, Hsv, Image, Rgb, Single
from core.image.conversion import auto_scale_parameters, convert, convert_scale


class TestSameColor:
    """Tests for conversions that keep the color model"""

    def test_same_color_and_depth_is_copy(self, bgr_image):
        result = convert(bgr_image, Bgr, Byte)

        assert result is not bgr_image
        assert not np.shares_memory(result.pixels, bgr_image.pixels)
        assert result.equals(bgr_image)

    def test_byte_to_single_keeps_values(self, gray_image):
        result = gray_image.convert(Gray, Single)

        assert result.depth is Single
        assert np.all(result.pixels == 10.0)

    def test_single_to_byte_auto_scales(self):
        """Test float values are stretched onto 0-255"""
        image = Image.from_array(np.array([[0.0, 1.0, 2.0, 3.0]], dtype=np.float32), Gray)

        result = image.convert(Gray, Byte)

        # scale = 256 / 3, 3.0 * scale = 256 saturates to 255
        assert result.pixels.tolist() == [[0, 85, 171, 255]]

    def test_single_to_byte_negative_range(self):
        image = Image.from_array(np.array([[-1.0, 0.0]], dtype=np.float32), Gray)

        result = image.convert(Gray, Byte)

        assert result.pixels.tolist() == [[0, 255]]

    def test_single_to_byte_flat_image(self):
        """Test a flat float image keeps its value"""
        image = Image(Gray, Single, 3, 3, Gray(7.0))

        result = image.convert(Gray, Byte)

        assert np.all(result.pixels == 7)

    def test_auto_scale_parameters(self):
        assert auto_scale_parameters(0.0, 255.0) == (256.0 / 255.0, 0.0)
        assert auto_scale_parameters(4.0, 4.0) == (0.0, 4.0)
        scale, shift = auto_scale_parameters(10.0, 20.0)
        assert scale == pytest.approx(25.6)
        assert shift == pytest.approx(-256.0)


class TestColorConversion:
    """Tests for color model changes"""

    def test_direct_code(self, test_image):
        image = Image.from_array(test_image, Bgr)

        result = image.convert(Gray)

        assert result.color is Gray
        assert np.array_equal(result.pixels, cv2.cvtColor(test_image, cv2.COLOR_BGR2GRAY))

    def test_bgr_to_rgb(self, bgr_image):
        result = bgr_image.convert(Rgb)
        assert np.array_equal(result.pixels, bgr_image.pixels[..., ::-1])

    def test_two_hop_equals_explicit_steps(self, test_image):
        """Test Gray -> Hsv goes through Bgr"""
        gray = Image.from_array(cv2.cvtColor(test_image, cv2.COLOR_BGR2GRAY), Gray)

        direct = gray.convert(Hsv)
        explicit = gray.convert(Bgr).convert(Hsv)

        assert direct.color is Hsv
        assert direct.equals(explicit)

    def test_color_and_depth(self, test_image):
        """Test depth is converted before color"""
        image = Image.from_array(test_image, Bgr)

        result = image.convert(Gray, Single)
        expected = image.convert(Bgr, Single).convert(Gray)

        assert result.color is Gray
        assert result.depth is Single
        assert result.equals(expected)

    def test_roi_only(self, bgr_image):
        bgr_image.roi = {"x": 1, "y": 0, "width": 2, "height": 2}

        result = bgr_image.convert(Gray)

        assert (result.width, result.height) == (2, 2)
        assert result.roi is None

    def test_no_conversion_path(self, monkeypatch, gray_image):
        """Test a missing hop raises instead of guessing"""
        monkeypatch.setenv("IMGCORE_IMAGE_INTERMEDIATE_COLOR", "Xyz")
        reload_settings()

        with pytest.raises(ColorConversionException) as exc_info:
            gray_image.convert(Hsv)

        assert exc_info.value.details == {"source": "Gray", "target": "Hsv"}


class TestConvertScale:
    """Tests for linear convert_scale"""

    def test_to_single(self, gray_image):
        result = convert_scale(gray_image, Single, 2.0, 1.0)

        assert result.depth is Single
        assert np.all(result.pixels == 21.0)

    def test_to_byte_saturates(self, gray_image):
        result = convert_scale(gray_image, Byte, 30.0)
        assert np.all(result.pixels == 255)

    def test_to_byte_takes_absolute_value(self):
        image = Image(Gray, Single, 2, 2, Gray(-3.0))

        result = image.convert_scale(Byte, 2.0)

        assert np.all(result.pixels == 6)
