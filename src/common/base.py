"""
Base data models - fundamental types without dependencies.

This module contains basic Pydantic models used throughout the image core:
- Point: 2D point with x, y coordinates
- Size: raster dimensions
- ROI: Region of Interest with geometric operations

IMPORTANT: This module must NOT import from schemas or core
to avoid circular dependencies.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field


class Point(BaseModel):
    """2D Point"""

    x: float
    y: float


class Size(BaseModel):
    """Image size"""

    width: int = Field(..., gt=0, description="Width in pixels")
    height: int = Field(..., gt=0, description="Height in pixels")

    def as_tuple(self) -> Tuple[int, int]:
        """Return (width, height), the order OpenCV expects for dsize."""
        return (self.width, self.height)


class ROI(BaseModel):
    """
    Region of Interest in pixel coordinates.

    Represents a rectangular region of an image raster with utility methods
    for geometric operations, validation and conversions.
    """

    x: int = Field(..., ge=0, description="X coordinate (left)")
    y: int = Field(..., ge=0, description="Y coordinate (top)")
    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ROI":
        """Create ROI from dictionary."""
        return cls(
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
        )

    @classmethod
    def from_points(cls, x1: int, y1: int, x2: int, y2: int) -> "ROI":
        """Create ROI from two corner points."""
        return cls(x=min(x1, x2), y=min(y1, y2), width=abs(x2 - x1), height=abs(y2 - y1))

    @classmethod
    def from_bounds(cls, left: float, right: float, top: float, bottom: float) -> "ROI":
        """Create ROI from edge coordinates (as stored in persisted records)."""
        return cls.from_points(int(left), int(top), int(right), int(bottom))

    @property
    def x2(self) -> int:
        """Get right edge coordinate."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate."""
        return self.y + self.height

    def rescale(self, scale_x: float, scale_y: float) -> "ROI":
        """
        Scale every edge of the ROI independently along each axis.

        Edges are floored after scaling; a degenerate result keeps at
        least one pixel in each direction.

        Args:
            scale_x: Horizontal scale factor
            scale_y: Vertical scale factor

        Returns:
            New scaled ROI
        """
        left = int(self.x * scale_x)
        top = int(self.y * scale_y)
        right = max(int(self.x2 * scale_x), left + 1)
        bottom = max(int(self.y2 * scale_y), top + 1)

        return ROI.from_points(left, top, right, bottom)

    def clip(self, image_width: int, image_height: int) -> Optional["ROI"]:
        """
        Clip ROI to image bounds.

        Args:
            image_width: Maximum width (image width)
            image_height: Maximum height (image height)

        Returns:
            Clipped ROI that fits within image bounds, or None when nothing is left
        """
        x = max(0, min(self.x, image_width))
        y = max(0, min(self.y, image_height))
        x2 = max(0, min(self.x2, image_width))
        y2 = max(0, min(self.y2, image_height))

        if x2 <= x or y2 <= y:
            return None

        return ROI.from_points(x, y, x2, y2)

    def is_valid(
        self, image_width: Optional[int] = None, image_height: Optional[int] = None
    ) -> bool:
        """
        Check if ROI is valid.

        Args:
            image_width: Optional image width for bounds checking
            image_height: Optional image height for bounds checking

        Returns:
            True if ROI is valid
        """
        if self.width <= 0 or self.height <= 0:
            return False

        if self.x < 0 or self.y < 0:
            return False

        if image_width is not None and self.x2 > image_width:
            return False

        if image_height is not None and self.y2 > image_height:
            return False

        return True
