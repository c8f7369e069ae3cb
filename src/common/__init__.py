"""
Types package - fundamental types without project dependencies.

This package contains basic types that are used throughout the system:
- Enums (CmpType, ThresholdType, etc.)
- Constants (ImageConstants, ConversionConstants, etc.)
- Base models (Point, Size, ROI)

IMPORTANT: This package must NOT import from any other project packages
(schemas, core) to avoid circular dependencies.
"""

# Export base models
from common.base import ROI, Point, Size

# Export all constants
from common.constants import (
    CodecConstants,
    CompressionConstants,
    ConversionConstants,
    ImageConstants,
    SystemConstants,
)

# Export all enums
from common.enums import CmpType, FlipType, Interpolation, LoadMode, ThresholdType

__all__ = [
    # Enums
    "CmpType",
    "FlipType",
    "Interpolation",
    "LoadMode",
    "ThresholdType",
    # Constants
    "CodecConstants",
    "CompressionConstants",
    "ConversionConstants",
    "ImageConstants",
    "SystemConstants",
    # Base models
    "Point",
    "ROI",
    "Size",
]
