"""
Filters, morphology and feature detection.

Thin dispatches to OpenCV primitives. Primitives that accept multi-channel
input get the ROI view directly; single channel only primitives (Canny,
filter2D into a float result, corner and line detection) run through
channel dispatch.
"""

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

import cv2
import numpy as np

from common.base import Point
from common.constants import ImageConstants
from common.enums import FlipType
from core.exceptions import (
    ChannelCountMismatchException,
    ErrorMessages,
    SizeMismatchException,
    UnsupportedDepthException,
)
from core.image.colors import Gray
from core.image.depth import Byte, Single
from core.image.dispatch import check_co_operand, for_each_channel, for_each_channel_into

if TYPE_CHECKING:
    from core.image.image import Image

logger = logging.getLogger(__name__)

FLIP_CODES = {
    FlipType.HORIZONTAL: 1,
    FlipType.VERTICAL: 0,
    FlipType.BOTH: -1,
}


def _store(image: "Image", values: np.ndarray) -> "Image":
    return type(image).from_array(values, image.color)


def _require_float(image: "Image") -> None:
    if image.depth.is_integer():
        raise UnsupportedDepthException(image.depth.NAME, ErrorMessages.FLOAT_ONLY)


def _require_byte(image: "Image") -> None:
    if image.depth is not Byte:
        raise UnsupportedDepthException(image.depth.NAME, ErrorMessages.BYTE_ONLY)


def _morph_kernel() -> np.ndarray:
    size = ImageConstants.MORPH_KERNEL_SIZE
    return np.ones((size, size), dtype=np.uint8)


# ==================== Morphology and smoothing ====================


def erode(image: "Image", iterations: int = 1) -> "Image":
    """Erode with a 3x3 rectangular structuring element."""
    return _store(image, cv2.erode(image.pixels, _morph_kernel(), iterations=iterations))


def dilate(image: "Image", iterations: int = 1) -> "Image":
    """Dilate with a 3x3 rectangular structuring element."""
    return _store(image, cv2.dilate(image.pixels, _morph_kernel(), iterations=iterations))


def gaussian_smooth(image: "Image", kernel_size: int = 3, sigma: float = 0.0) -> "Image":
    """
    Gaussian blur.

    Args:
        image: Source image
        kernel_size: Odd kernel width and height
        sigma: Standard deviation; 0 derives it from the kernel size
    """
    return _store(image, cv2.GaussianBlur(image.pixels, (kernel_size, kernel_size), sigma))


def gaussian_smooth_inplace(image: "Image", kernel_size: int = 3, sigma: float = 0.0) -> None:
    view = image.pixels
    view[...] = cv2.GaussianBlur(view, (kernel_size, kernel_size), sigma)


# ==================== Derivatives and edges ====================


def sobel(image: "Image", x_order: int, y_order: int, aperture_size: int = 3) -> "Image":
    """Sobel derivative; the result is Single to keep negative gradients."""
    result = cv2.Sobel(image.pixels, cv2.CV_32F, x_order, y_order, ksize=aperture_size)
    return _store(image, result)


def laplace(image: "Image", aperture_size: int = 3) -> "Image":
    """Laplacian; the result is Single."""
    return _store(image, cv2.Laplacian(image.pixels, cv2.CV_32F, ksize=aperture_size))


def canny(image: "Image", threshold_value: float, threshold_linking: float) -> "Image":
    """
    Canny edges of every channel.

    Args:
        image: Byte source image
        threshold_value: Upper hysteresis threshold
        threshold_linking: Lower threshold used for edge linking

    Returns:
        Byte image of the source color model, 255 on edges
    """
    _require_byte(image)
    dest = type(image)(image.color, Byte, image.width, image.height)

    def edges(src: np.ndarray, dst: np.ndarray, index: int) -> None:
        dst[...] = cv2.Canny(np.ascontiguousarray(src), threshold_linking, threshold_value)

    for_each_channel_into(image, edges, dest)
    return dest


# ==================== Pyramids and geometry ====================


def pyr_down(image: "Image") -> "Image":
    """Gaussian blur and downsample to half the size."""
    return _store(image, cv2.pyrDown(image.pixels))


def pyr_up(image: "Image") -> "Image":
    """Upsample to twice the size and blur."""
    return _store(image, cv2.pyrUp(image.pixels))


def flip(image: "Image", flip_type: FlipType) -> "Image":
    return _store(image, cv2.flip(image.pixels, FLIP_CODES[FlipType(flip_type)]))


# ==================== Convolution and matching ====================


def convolution(image: "Image", kernel: np.ndarray) -> "Image":
    """
    Correlate every channel with `kernel`.

    Returns:
        Single image of the source color model
    """
    kernel = np.asarray(kernel, dtype=np.float32)
    dest = type(image)(image.color, Single, image.width, image.height)

    def correlate(src: np.ndarray, dst: np.ndarray, index: int) -> None:
        dst[...] = cv2.filter2D(src, cv2.CV_32F, kernel)

    for_each_channel_into(image, correlate, dest)
    return dest


def match_template(
    image: "Image", template: "Image", method: int = cv2.TM_CCOEFF_NORMED
) -> "Image":
    """
    Slide `template` over the image and score every position.

    Returns:
        Gray/Single image of size (W - w + 1) x (H - h + 1)
    """
    if template.channel_count != image.channel_count:
        raise ChannelCountMismatchException(image.channel_count, template.channel_count)
    if template.depth is not image.depth:
        raise UnsupportedDepthException(template.depth.NAME, ErrorMessages.DEPTH_MISMATCH)
    if template.width > image.width or template.height > image.height:
        raise SizeMismatchException(
            (image.width, image.height), (template.width, template.height), "match_template"
        )

    scores = cv2.matchTemplate(image.pixels, template.pixels, method)
    return type(image).from_array(scores, Gray)


def good_features_to_track(
    image: "Image",
    max_corners: int,
    quality_level: float,
    min_distance: float,
    block_size: int = 3,
) -> List[List[Point]]:
    """
    Strong corners of every channel.

    Returns:
        One list of corner points per channel, in channel order
    """

    def corners(channel: np.ndarray, index: int) -> List[Point]:
        found = cv2.goodFeaturesToTrack(
            np.ascontiguousarray(channel),
            max_corners,
            quality_level,
            min_distance,
            blockSize=block_size,
        )
        if found is None:
            return []
        return [Point(x=float(x), y=float(y)) for x, y in found.reshape(-1, 2)]

    return for_each_channel(image, corners)


def hough_lines_binary(
    image: "Image",
    rho: float,
    theta: float,
    threshold_value: int,
    min_line_length: float = 0.0,
    max_line_gap: float = 0.0,
) -> List[List[Tuple[Point, Point]]]:
    """
    Probabilistic Hough transform of every channel of a binary Byte image.

    Returns:
        One list of (start, end) segments per channel
    """
    _require_byte(image)

    def lines(channel: np.ndarray, index: int) -> List[Tuple[Point, Point]]:
        found = cv2.HoughLinesP(
            np.ascontiguousarray(channel),
            rho,
            theta,
            threshold_value,
            minLineLength=min_line_length,
            maxLineGap=max_line_gap,
        )
        if found is None:
            return []
        return [
            (Point(x=float(x1), y=float(y1)), Point(x=float(x2), y=float(y2)))
            for x1, y1, x2, y2 in found.reshape(-1, 4)
        ]

    return for_each_channel(image, lines)


# ==================== Math ====================


def pow(image: "Image", power: float) -> "Image":
    return _store(image, cv2.pow(image.pixels, power))


def exp(image: "Image") -> "Image":
    _require_float(image)
    return _store(image, cv2.exp(image.pixels))


def log(image: "Image") -> "Image":
    """Natural logarithm of every element (float images only)."""
    _require_float(image)
    return _store(image, cv2.log(image.pixels))


# ==================== Accumulation and repair ====================


def running_avg(
    accumulator: "Image", image: "Image", alpha: float, mask: Optional["Image"] = None
) -> None:
    """
    Update `accumulator` in place: acc = (1 - alpha) * acc + alpha * image.

    The accumulator must be a float image with the channel count and ROI
    size of `image`.
    """
    _require_float(accumulator)
    check_co_operand(accumulator, image, "running_avg")
    mask_pixels = accumulator.check_mask(mask)

    view = accumulator.pixels
    acc = np.ascontiguousarray(view)
    if mask_pixels is None:
        cv2.accumulateWeighted(image.pixels, acc, alpha)
    else:
        cv2.accumulateWeighted(image.pixels, acc, alpha, mask=np.ascontiguousarray(mask_pixels))
    view[...] = acc


def in_paint(image: "Image", mask: "Image", radius: float) -> "Image":
    """
    Restore the pixels selected by `mask` from their surroundings (Telea).

    Byte images with one or three channels only.
    """
    _require_byte(image)
    mask_pixels = image.check_mask(mask)
    result = cv2.inpaint(
        np.ascontiguousarray(image.pixels),
        np.ascontiguousarray(mask_pixels),
        radius,
        cv2.INPAINT_TELEA,
    )
    return _store(image, result)
