"""
Persisted image models.

This module contains the serialized form of an image:
- RoiBounds: ROI stored as edge coordinates
- ImageRecord: raster size, optional ROI and compressed raw buffer
"""

from typing import Optional

from pydantic import BaseModel, Field

from common.base import ROI, Size


class RoiBounds(BaseModel):
    """ROI stored as left/right/top/bottom edges."""

    left: float = Field(..., ge=0, description="Left edge (inclusive)")
    right: float = Field(..., ge=0, description="Right edge (exclusive)")
    top: float = Field(..., ge=0, description="Top edge (inclusive)")
    bottom: float = Field(..., ge=0, description="Bottom edge (exclusive)")

    @classmethod
    def from_roi(cls, roi: ROI) -> "RoiBounds":
        return cls(left=roi.x, right=roi.x2, top=roi.y, bottom=roi.y2)

    def to_roi(self) -> ROI:
        return ROI.from_bounds(self.left, self.right, self.top, self.bottom)


class ImageRecord(BaseModel):
    """
    Compressed persisted image.

    The color model and depth are not stored; the reader supplies them.
    Restoring allocates `size`, loads the decompressed buffer (row padding
    included) and then applies `roi`.
    """

    size: Size = Field(..., description="Full raster size")
    roi: Optional[RoiBounds] = Field(None, description="Region of interest, if any")
    compressed_binary: str = Field(..., description="Base64 of the zlib compressed raw buffer")
