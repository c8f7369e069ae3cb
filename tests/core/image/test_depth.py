"""
Tests for core.image.depth module
"""

import numpy as np
import pytest

from core.exceptions import UnsupportedDepthException
from core.image.depth import Byte, Single, resolve_depth


class TestResolveDepth:
    """Tests for resolve_depth"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Byte, Byte),
            (Single, Single),
            ("Byte", Byte),
            ("Single", Single),
            (np.uint8, Byte),
            (np.float32, Single),
            (np.dtype("float32"), Single),
            ("uint8", Byte),
        ],
    )
    def test_supported(self, value, expected):
        assert resolve_depth(value) is expected

    @pytest.mark.parametrize("value", [np.int16, np.float64, "Double", 42])
    def test_unsupported(self, value):
        """Test unsupported depths are fatal"""
        with pytest.raises(UnsupportedDepthException) as exc_info:
            resolve_depth(value)

        assert "Unsupported image depth" in str(exc_info.value)


class TestDepthTraits:
    """Tests for depth class attributes and saturation"""

    def test_traits(self):
        assert Byte.ELEMENT_SIZE == 1
        assert Single.ELEMENT_SIZE == 4
        assert Byte.is_integer()
        assert not Single.is_integer()

    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            Byte()

    def test_byte_saturate_clips_and_rounds(self):
        """Test rounding half to even and clipping into 0-255"""
        values = Byte.saturate(np.array([-4.0, 2.5, 3.5, 254.6, 300.0]))

        assert values.dtype == np.uint8
        assert values.tolist() == [0, 2, 4, 255, 255]

    def test_single_saturate_casts(self):
        values = Single.saturate(np.array([-1.25, 3.5]))

        assert values.dtype == np.float32
        assert values.tolist() == [-1.25, 3.5]
