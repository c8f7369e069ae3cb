"""
Centralized enums for the image core.

This module contains all enumeration types used throughout the system,
providing a single source of truth for enum definitions. Mapping to the
native OpenCV flags lives next to the code that calls OpenCV.
"""

from enum import Enum


# Comparison enums
class CmpType(str, Enum):
    """Element-wise comparison types."""

    EQ = "eq"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"
    NE = "ne"


# Threshold enums
class ThresholdType(str, Enum):
    """Threshold variants."""

    BINARY = "binary"
    BINARY_INV = "binary_inv"
    TRUNC = "trunc"
    TO_ZERO = "to_zero"
    TO_ZERO_INV = "to_zero_inv"
    OTSU = "otsu"


# Geometric enums
class FlipType(str, Enum):
    """Flip directions."""

    HORIZONTAL = "horizontal"  # around the vertical axis
    VERTICAL = "vertical"  # around the horizontal axis
    BOTH = "both"


class Interpolation(str, Enum):
    """Resampling methods used when resizing."""

    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    AREA = "area"
    LANCZOS = "lanczos"


# Codec enums
class LoadMode(str, Enum):
    """How an encoded image is decoded before color conversion."""

    GRAYSCALE = "grayscale"
    COLOR = "color"
    UNCHANGED = "unchanged"
