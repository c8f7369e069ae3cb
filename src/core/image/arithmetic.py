"""
Element-wise arithmetic, logic and comparison.

Every operation allocates a result with the geometry of the source ROI and
delegates the computation to one OpenCV primitive. Operands are either
images of the same channel count, ROI size and depth, or color values
that are broadcast over the ROI. Comparison only exists for single
channel input in OpenCV and therefore runs through channel dispatch.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional, Union

import cv2
import numpy as np

from common.enums import CmpType
from core.exceptions import ErrorMessages, UnsupportedDepthException
from core.image.colors import ColorType, Gray
from core.image.depth import Byte
from core.image.dispatch import (
    check_co_operand,
    for_each_channel,
    for_each_channel_into,
    for_each_channel_pair,
)

if TYPE_CHECKING:
    from core.image.image import Image

logger = logging.getLogger(__name__)

CMP_FLAGS = {
    CmpType.EQ: cv2.CMP_EQ,
    CmpType.GT: cv2.CMP_GT,
    CmpType.GE: cv2.CMP_GE,
    CmpType.LT: cv2.CMP_LT,
    CmpType.LE: cv2.CMP_LE,
    CmpType.NE: cv2.CMP_NE,
}


def check_operand(image: "Image", other: "Image", operation: str) -> None:
    """Raise unless `other` matches `image` in channel count, ROI size and depth."""
    check_co_operand(image, other, operation)
    if other.depth is not image.depth:
        raise UnsupportedDepthException(other.depth.NAME, ErrorMessages.DEPTH_MISMATCH)


def filled(image: "Image", color: Union[ColorType, float]) -> np.ndarray:
    """Contiguous array of the ROI shape with every pixel set to `color`."""
    values = image.channel_values(color)
    array = np.empty(image.pixels.shape, dtype=image.depth.DTYPE)
    array[...] = values[0] if image.channel_count == 1 else values
    return array


def _operand(image: "Image", other: Union["Image", ColorType, float], operation: str):
    if isinstance(other, ColorType) or np.isscalar(other):
        return filled(image, other)
    check_operand(image, other, operation)
    return other.pixels


def _store(image: "Image", values: np.ndarray) -> "Image":
    return type(image).from_array(values, image.color)


def _masked(
    image: "Image",
    primitive: Callable[..., np.ndarray],
    mask: Optional["Image"],
    *operands: np.ndarray,
) -> "Image":
    """Run primitive(src, *operands, dst=..., mask=...); masked-out pixels stay zero."""
    mask_pixels = image.check_mask(mask)
    dst = np.zeros(image.pixels.shape, dtype=image.depth.DTYPE)
    if mask_pixels is None:
        values = primitive(image.pixels, *operands, dst=dst)
    else:
        mask_pixels = np.ascontiguousarray(mask_pixels)
        values = primitive(image.pixels, *operands, dst=dst, mask=mask_pixels)
    return _store(image, values)


# ==================== Logic ====================


def bitwise_and(image: "Image", other, mask: Optional["Image"] = None) -> "Image":
    return _masked(image, cv2.bitwise_and, mask, _operand(image, other, "and"))


def bitwise_or(image: "Image", other, mask: Optional["Image"] = None) -> "Image":
    return _masked(image, cv2.bitwise_or, mask, _operand(image, other, "or"))


def bitwise_xor(image: "Image", other, mask: Optional["Image"] = None) -> "Image":
    return _masked(image, cv2.bitwise_xor, mask, _operand(image, other, "xor"))


def bitwise_not(image: "Image", mask: Optional["Image"] = None) -> "Image":
    return _masked(image, cv2.bitwise_not, mask)


# ==================== Arithmetic ====================


def add(image: "Image", other, mask: Optional["Image"] = None) -> "Image":
    """Saturating image + other."""
    return _masked(image, cv2.add, mask, _operand(image, other, "add"))


def sub(image: "Image", other, mask: Optional["Image"] = None) -> "Image":
    """Saturating image - other; Byte results never wrap below zero."""
    return _masked(image, cv2.subtract, mask, _operand(image, other, "sub"))


def sub_reverse(image: "Image", value, mask: Optional["Image"] = None) -> "Image":
    """Saturating value - image."""
    mask_pixels = image.check_mask(mask)
    minuend = _operand(image, value, "sub_reverse")
    dst = np.zeros(image.pixels.shape, dtype=image.depth.DTYPE)
    if mask_pixels is None:
        values = cv2.subtract(minuend, image.pixels, dst=dst)
    else:
        values = cv2.subtract(
            minuend, image.pixels, dst=dst, mask=np.ascontiguousarray(mask_pixels)
        )
    return _store(image, values)


def mul(image: "Image", other: Union["Image", float], scale: float = 1.0) -> "Image":
    """
    Element-wise product.

    With an image operand the product is multiplied by `scale`; a number
    multiplies every channel.
    """
    if np.isscalar(other):
        return _store(image, cv2.multiply(image.pixels, filled(image, 1.0), scale=float(other)))
    check_operand(image, other, "mul")
    return _store(image, cv2.multiply(image.pixels, other.pixels, scale=scale))


def div(image: "Image", other: Union["Image", float], scale: float = 1.0) -> "Image":
    """
    Element-wise quotient.

    With an image operand the result is scale * image / other (0 where the
    divisor is 0); a number divides every channel. Dividing by the number 0
    multiplies by inf, giving inf (or nan for 0) in float images.
    """
    if np.isscalar(other):
        with np.errstate(divide="ignore"):
            reciprocal = np.float64(1.0) / np.float64(other)
        return mul(image, float(reciprocal))
    check_operand(image, other, "div")
    return _store(image, cv2.divide(image.pixels, other.pixels, scale=scale))


def add_weighted(
    image: "Image", other: "Image", alpha: float, beta: float, gamma: float = 0.0
) -> "Image":
    """image * alpha + other * beta + gamma."""
    check_operand(image, other, "add_weighted")
    return _store(image, cv2.addWeighted(image.pixels, alpha, other.pixels, beta, gamma))


def maximum(image: "Image", other) -> "Image":
    return _store(image, cv2.max(image.pixels, _operand(image, other, "max")))


def minimum(image: "Image", other) -> "Image":
    return _store(image, cv2.min(image.pixels, _operand(image, other, "min")))


def abs_diff(image: "Image", other) -> "Image":
    return _store(image, cv2.absdiff(image.pixels, _operand(image, other, "abs_diff")))


def in_range(image: "Image", lower: ColorType, upper: ColorType) -> "Image":
    """Gray/Byte mask, 255 where every channel lies within [lower, upper]."""
    mask = cv2.inRange(image.pixels, filled(image, lower), filled(image, upper))
    return type(image).from_array(mask, Gray)


# ==================== Comparison ====================


def cmp(image: "Image", other: Union["Image", ColorType, float], cmp_type: CmpType) -> "Image":
    """
    Per-channel comparison.

    Returns:
        Byte image of the source color model, 255 where the comparison holds
        and 0 elsewhere
    """
    flag = CMP_FLAGS[CmpType(cmp_type)]
    dest = type(image)(image.color, Byte, image.width, image.height)

    if isinstance(other, ColorType) or np.isscalar(other):
        values = image.channel_values(other)

        def compare_value(src: np.ndarray, dst: np.ndarray, index: int) -> None:
            dst[...] = cv2.compare(src, np.full(src.shape, values[index], src.dtype), flag)

        for_each_channel_into(image, compare_value, dest)
    else:
        check_operand(image, other, "cmp")

        def compare_image(
            src: np.ndarray, other_src: np.ndarray, dst: np.ndarray, index: int
        ) -> None:
            dst[...] = cv2.compare(src, other_src, flag)

        for_each_channel_pair(image, other, compare_image, dest)

    return dest


def equals(image: "Image", other: Optional["Image"]) -> bool:
    """
    True when both images have the same color model, depth and ROI size and
    every element of the two ROIs is equal.
    """
    if other is None:
        return False
    if other is image:
        return True
    if other.color is not image.color or other.depth is not image.depth:
        return False
    if (other.width, other.height) != (image.width, image.height):
        return False

    with cmp(image, other, CmpType.NE) as not_equal:
        counts = for_each_channel(not_equal, lambda channel, index: cv2.countNonZero(channel))
    return sum(counts) == 0
