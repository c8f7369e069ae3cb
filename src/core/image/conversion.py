"""
Color model and depth conversion.

Color conversion uses the direct OpenCV code when one exists and otherwise
goes through the configured intermediate model (Bgr) in two steps. Depth
conversion from float to Byte stretches the value range of the image onto
0-255; every other depth change is a plain saturating cast.
"""

import logging
from typing import TYPE_CHECKING, Optional, Type, Union

import cv2
import numpy as np

from common.constants import ConversionConstants
from config import get_settings
from core.exceptions import ColorConversionException
from core.image.colors import ColorType, get_color_model, get_conversion_code
from core.image.depth import Byte, DepthType, resolve_depth

if TYPE_CHECKING:
    from core.image.image import Image

logger = logging.getLogger(__name__)


def auto_scale_parameters(min_value: float, max_value: float) -> tuple:
    """
    Scale and shift that map [min_value, max_value] onto the Byte range.

    A flat image (max == min) keeps its value: scale 0, shift min.
    """
    if max_value == min_value:
        return 0.0, min_value
    scale = ConversionConstants.AUTO_SCALE_RANGE / (max_value - min_value)
    return scale, -min_value * scale


def _convert_depth(image: "Image", depth: Type[DepthType]) -> "Image":
    pixels = image.pixels

    if not image.depth.is_integer() and depth.is_integer():
        scale, shift = auto_scale_parameters(float(pixels.min()), float(pixels.max()))
        logger.debug(f"Narrowing {image.depth.NAME} to {depth.NAME}: scale={scale}, shift={shift}")
        values = pixels.astype(np.float64) * scale + shift
    else:
        values = pixels

    return type(image).from_array(depth.saturate(values), image.color)


def _cvt(image: "Image", code: int, color: Type[ColorType]) -> "Image":
    return type(image).from_array(cv2.cvtColor(image.pixels, code), color)


def _convert_color(image: "Image", color: Type[ColorType]) -> "Image":
    code = get_conversion_code(image.color, color)
    if code is not None:
        return _cvt(image, code, color)

    intermediate = get_color_model(get_settings().image.intermediate_color)
    to_intermediate = get_conversion_code(image.color, intermediate)
    from_intermediate = get_conversion_code(intermediate, color)
    if to_intermediate is None or from_intermediate is None:
        raise ColorConversionException(image.color.__name__, color.__name__)

    logger.debug(
        f"No direct conversion {image.color.__name__} -> {color.__name__}, "
        f"converting through {intermediate.__name__}"
    )
    step = _cvt(image, to_intermediate, intermediate)
    try:
        return _cvt(step, from_intermediate, color)
    finally:
        step.release()


def convert(
    image: "Image",
    color: Type[ColorType],
    depth: Optional[Union[Type[DepthType], str]] = None,
) -> "Image":
    """
    Convert the ROI of an image to another color model and/or depth.

    Args:
        image: Source image
        color: Target color model
        depth: Target depth (defaults to the source depth)

    Returns:
        New image of the ROI size

    Raises:
        ColorConversionException: If no direct or two-step conversion exists
    """
    depth = resolve_depth(depth) if depth is not None else image.depth

    if color is image.color and depth is image.depth:
        return image.clone()
    if color is image.color:
        return _convert_depth(image, depth)
    if depth is image.depth:
        return _convert_color(image, color)

    # Depth first, then color
    step = _convert_depth(image, depth)
    try:
        return _convert_color(step, color)
    finally:
        step.release()


def convert_scale(
    image: "Image",
    depth: Union[Type[DepthType], str],
    scale: float = 1.0,
    shift: float = 0.0,
) -> "Image":
    """
    Linear transform p * scale + shift into a new image of `depth`.

    Byte targets go through cv2.convertScaleAbs, so they receive the
    absolute value of the transformed element.
    """
    depth = resolve_depth(depth)
    if depth is Byte:
        values = cv2.convertScaleAbs(image.pixels, alpha=scale, beta=shift)
    else:
        values = depth.saturate(image.pixels.astype(np.float64) * scale + shift)
    return type(image).from_array(values, image.color)
