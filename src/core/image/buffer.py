"""
Pixel buffer - exclusively owned raw pixel storage.

The buffer is a flat uint8 NumPy array of `height * stride` bytes. Rows may
be padded so that every row starts on the configured alignment. Typed
views are built over the raw bytes with numpy.ndarray(buffer=...), so
views share memory with the buffer and never copy.

The buffer also carries the channel-of-interest marker (0 = whole image,
1..n = a single channel) that channel dispatch sets for the duration of
one call.
"""

import logging
from typing import Optional, Tuple, Type

import numpy as np

from common.base import ROI
from common.constants import ImageConstants
from config import get_settings
from core.exceptions import ImageReleasedException
from core.image.depth import DepthType
from core.image.layout import RoiLayout, resolve_layout

logger = logging.getLogger(__name__)


def aligned_stride(row_bytes: int, alignment: int) -> int:
    """Round `row_bytes` up to a multiple of `alignment`."""
    return ((row_bytes + alignment - 1) // alignment) * alignment


class PixelBuffer:
    """
    Raw, row-major pixel storage for one image.

    Attributes:
        width: Full raster width in pixels
        height: Full raster height in pixels
        channels: Channels per pixel (1-4)
        depth: Depth class of every element
        stride: Bytes between the starts of two consecutive rows
        roi: Optional region of interest (validated by the owner)
    """

    def __init__(
        self,
        width: int,
        height: int,
        channels: int,
        depth: Type[DepthType],
        row_alignment: Optional[int] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if not 1 <= channels <= ImageConstants.MAX_CHANNELS:
            raise ValueError(
                f"Channel count must be 1-{ImageConstants.MAX_CHANNELS}, got {channels}"
            )

        alignment = row_alignment or get_settings().image.row_alignment

        self.width = width
        self.height = height
        self.channels = channels
        self.depth = depth
        self.stride = aligned_stride(width * channels * depth.ELEMENT_SIZE, alignment)
        self.roi: Optional[ROI] = None
        self._coi = 0

        self._data: Optional[np.ndarray] = np.zeros(self.stride * height, dtype=np.uint8)

        logger.debug(
            f"Allocated {width}x{height}x{channels} {depth.NAME} buffer, "
            f"stride={self.stride}, {self.image_size} bytes"
        )

    @property
    def data(self) -> np.ndarray:
        """The raw bytes of the whole raster, padding included."""
        if self._data is None:
            raise ImageReleasedException()
        return self._data

    @property
    def released(self) -> bool:
        return self._data is None

    @property
    def image_size(self) -> int:
        """Total number of bytes in the buffer."""
        return self.stride * self.height

    @property
    def channel_of_interest(self) -> int:
        """Currently selected channel (1-based), 0 when the whole image is visible."""
        return self._coi

    def select_channel(self, channel: int) -> None:
        """Mark `channel` (1-based) as the channel of interest; 0 resets."""
        if not 0 <= channel <= self.channels:
            raise ValueError(f"Channel {channel} out of range for {self.channels} channel(s)")
        self._coi = channel

    def reset_channel(self) -> None:
        self._coi = 0

    def layout(self, roi: Optional[ROI] = None) -> RoiLayout:
        """Resolve the byte layout of the ROI (or of `roi` when given)."""
        return resolve_layout(
            self.width,
            self.height,
            self.channels,
            self.depth.ELEMENT_SIZE,
            self.stride,
            roi if roi is not None else self.roi,
        )

    def _typed_view(self, layout: RoiLayout) -> np.ndarray:
        element_size = self.depth.ELEMENT_SIZE
        pixels_per_row = layout.elements_per_row // self.channels

        if self.channels == 1:
            shape: Tuple[int, ...] = (layout.row_count, pixels_per_row)
            strides: Tuple[int, ...] = (layout.row_stride, element_size)
        else:
            shape = (layout.row_count, pixels_per_row, self.channels)
            strides = (layout.row_stride, element_size * self.channels, element_size)

        return np.ndarray(
            shape,
            dtype=self.depth.DTYPE,
            buffer=self.data,
            offset=layout.byte_offset,
            strides=strides,
        )

    def view(self) -> np.ndarray:
        """Zero-copy typed view of the ROI (whole raster when no ROI is set)."""
        return self._typed_view(self.layout())

    def full_view(self) -> np.ndarray:
        """Zero-copy typed view of the whole raster, ignoring the ROI."""
        return self._typed_view(
            resolve_layout(
                self.width, self.height, self.channels, self.depth.ELEMENT_SIZE, self.stride
            )
        )

    def _channel_view(self) -> np.ndarray:
        view = self.view()
        if self._coi == 0 or self.channels == 1:
            return view
        return view[..., self._coi - 1]

    def read_channel(self, scratch: np.ndarray) -> None:
        """Copy the visible region (only the channel of interest, if set) into `scratch`."""
        np.copyto(scratch, self._channel_view(), casting="unsafe")

    def write_channel(self, scratch: np.ndarray) -> None:
        """Copy `scratch` into the visible region (only the channel of interest, if set)."""
        np.copyto(self._channel_view(), scratch, casting="unsafe")

    def release(self) -> None:
        """Drop the pixel storage. Releasing twice is a no-op."""
        if self._data is not None:
            logger.debug(f"Released {self.width}x{self.height} {self.depth.NAME} buffer")
        self._data = None
        self.roi = None
        self._coi = 0

    def __repr__(self) -> str:
        state = "released" if self.released else f"{self.image_size} bytes"
        return (
            f"PixelBuffer({self.width}x{self.height}x{self.channels} {self.depth.NAME}, "
            f"stride={self.stride}, {state})"
        )
