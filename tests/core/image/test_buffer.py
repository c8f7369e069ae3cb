"""
Tests for core.image.buffer module
"""

import numpy as np
import pytest

from common.base import ROI
from core.exceptions import ImageReleasedException
from core.image.buffer import PixelBuffer
from core.image.depth import Byte, Single


class TestPixelBufferAllocation:
    """Tests for buffer geometry"""

    def test_default_alignment_pads_rows(self):
        """Test rows are padded to the default 4 byte alignment"""
        buffer = PixelBuffer(5, 3, 1, Byte)

        assert buffer.stride == 8
        assert buffer.image_size == 24
        assert buffer.data.dtype == np.uint8
        assert not buffer.data.any()

    def test_explicit_alignment(self):
        """Test row_alignment=1 packs rows"""
        buffer = PixelBuffer(5, 3, 1, Byte, row_alignment=1)
        assert buffer.stride == 5

    def test_float_rows_already_aligned(self):
        """Test 3 float channels need no padding"""
        buffer = PixelBuffer(5, 2, 3, Single)
        assert buffer.stride == 60

    def test_invalid_dimensions(self):
        """Test zero size is rejected"""
        with pytest.raises(ValueError):
            PixelBuffer(0, 3, 1, Byte)

    def test_invalid_channel_count(self):
        """Test more than four channels is rejected"""
        with pytest.raises(ValueError):
            PixelBuffer(2, 2, 5, Byte)


class TestPixelBufferViews:
    """Tests for typed zero-copy views"""

    def test_gray_view_is_2d(self):
        buffer = PixelBuffer(5, 3, 1, Byte)
        assert buffer.view().shape == (3, 5)

    def test_color_view_is_3d(self):
        buffer = PixelBuffer(5, 3, 3, Byte)
        assert buffer.view().shape == (3, 5, 3)

    def test_view_shares_memory(self):
        """Test writes through the view land in the raw bytes"""
        buffer = PixelBuffer(5, 3, 1, Byte)
        buffer.view()[1, 2] = 7

        assert buffer.data[1 * 8 + 2] == 7

    def test_roi_view(self):
        """Test the view is restricted to the ROI"""
        buffer = PixelBuffer(5, 3, 1, Byte)
        buffer.roi = ROI(x=1, y=1, width=2, height=2)

        view = buffer.view()
        view[0, 0] = 9

        assert view.shape == (2, 2)
        assert buffer.data[8 + 1] == 9
        assert buffer.full_view().shape == (3, 5)

    def test_float_view(self):
        """Test Single views decode float32 values"""
        buffer = PixelBuffer(2, 2, 1, Single)
        buffer.view()[...] = 1.5

        assert buffer.view().dtype == np.float32
        assert np.all(buffer.view() == 1.5)


class TestChannelOfInterest:
    """Tests for channel marker and channel copies"""

    def test_read_channel(self):
        """Test only the selected channel is copied out"""
        buffer = PixelBuffer(5, 3, 3, Byte)
        buffer.full_view()[..., 1] = 5
        scratch = np.zeros((3, 5), dtype=np.uint8)

        buffer.select_channel(2)
        buffer.read_channel(scratch)

        assert buffer.channel_of_interest == 2
        assert np.all(scratch == 5)

    def test_write_channel(self):
        """Test only the selected channel is written"""
        buffer = PixelBuffer(5, 3, 3, Byte)

        buffer.select_channel(3)
        buffer.write_channel(np.full((3, 5), 7, dtype=np.uint8))
        buffer.reset_channel()

        view = buffer.view()
        assert np.all(view[..., 2] == 7)
        assert not view[..., :2].any()
        assert buffer.channel_of_interest == 0

    def test_select_channel_out_of_range(self):
        buffer = PixelBuffer(2, 2, 3, Byte)
        with pytest.raises(ValueError):
            buffer.select_channel(4)


class TestRelease:
    """Tests for buffer release"""

    def test_access_after_release(self):
        """Test pixel access after release raises"""
        buffer = PixelBuffer(2, 2, 1, Byte)
        buffer.release()

        assert buffer.released
        with pytest.raises(ImageReleasedException):
            _ = buffer.data

    def test_release_twice(self):
        """Test releasing twice is a no-op"""
        buffer = PixelBuffer(2, 2, 1, Byte)
        buffer.release()
        buffer.release()

        assert buffer.released
