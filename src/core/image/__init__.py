"""
Typed image container - package layout.

- colors: Color models (Gray, Bgr, Hsv, ...) and color values
- depth: Element storage types (Byte, Single)
- layout: ROI byte layout resolution
- buffer: Owned raw pixel storage with channel-of-interest marker
- dispatch: Per-channel dispatch of single channel primitives
- transform: Generic per-element transforms over 1-4 images
- conversion: Color model and depth conversion
- arithmetic, threshold, filters: OpenCV backed operations
- codec: Encoded image files, zlib and base64 helpers
- image: The Image class tying everything together

The main types are re-exported from this module for convenient access.
"""

from core.image.colors import (
    COLOR_MODELS,
    Bgr,
    Bgra,
    ColorType,
    Gray,
    Hls,
    Hsv,
    Lab,
    Luv,
    Rgb,
    Rgba,
    Xyz,
    Ycc,
    get_color_model,
)
from core.image.depth import Byte, DepthType, Single, resolve_depth
from core.image.image import Image
from core.image.transform import (
    action,
    combine2,
    combine3,
    combine4,
    convert_pixels,
    convert_pixels_indexed,
)

__all__ = [
    "Image",
    # Color models
    "ColorType",
    "COLOR_MODELS",
    "get_color_model",
    "Gray",
    "Bgr",
    "Bgra",
    "Rgb",
    "Rgba",
    "Hsv",
    "Hls",
    "Lab",
    "Luv",
    "Xyz",
    "Ycc",
    # Depths
    "DepthType",
    "Byte",
    "Single",
    "resolve_depth",
    # Pixel transforms
    "action",
    "convert_pixels",
    "convert_pixels_indexed",
    "combine2",
    "combine3",
    "combine4",
]
