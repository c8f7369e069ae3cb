"""
Core modules for the typed image container
"""

from .exceptions import (
    ChannelCountMismatchException,
    CodecException,
    ColorConversionException,
    ImageCoreException,
    ImageReleasedException,
    InvalidROIException,
    SizeMismatchException,
    UnsupportedDepthException,
)

__all__ = [
    "ImageCoreException",
    "SizeMismatchException",
    "ChannelCountMismatchException",
    "UnsupportedDepthException",
    "ColorConversionException",
    "InvalidROIException",
    "ImageReleasedException",
    "CodecException",
]
