"""
Region of Interest memory layout.

Translates a buffer's geometry and an optional ROI into the byte-level
addressing used by every row traversal: where the first visible byte
is, how far apart rows are, how many bytes of each row are visible and
how many rows there are.
"""

from dataclasses import dataclass
from typing import Optional

from common.base import ROI


@dataclass(frozen=True)
class RoiLayout:
    """Byte addressing of the visible region of a pixel buffer."""

    byte_offset: int
    row_stride: int
    row_byte_width: int
    row_count: int
    elements_per_row: int

    def row_start(self, row: int) -> int:
        """Byte index of the first visible element of `row`."""
        return self.byte_offset + row * self.row_stride

    @property
    def shape(self) -> tuple:
        """(row_count, elements_per_row), the shape co-operands must agree on."""
        return (self.row_count, self.elements_per_row)


def resolve_layout(
    width: int,
    height: int,
    channels: int,
    element_size: int,
    stride: int,
    roi: Optional[ROI] = None,
) -> RoiLayout:
    """
    Compute the byte layout of a buffer, optionally restricted to an ROI.

    The ROI must already be known to lie inside the raster; this function
    does not validate it.

    Args:
        width: Full raster width in pixels
        height: Full raster height in pixels
        channels: Channels per pixel
        element_size: Bytes per channel element
        stride: Bytes between the starts of two consecutive rows
        roi: Optional region of interest

    Returns:
        RoiLayout describing the visible region
    """
    pixel_size = element_size * channels

    if roi is None:
        return RoiLayout(
            byte_offset=0,
            row_stride=stride,
            row_byte_width=width * pixel_size,
            row_count=height,
            elements_per_row=width * channels,
        )

    return RoiLayout(
        byte_offset=roi.y * stride + roi.x * pixel_size,
        row_stride=stride,
        row_byte_width=roi.width * pixel_size,
        row_count=roi.height,
        elements_per_row=roi.width * channels,
    )
