"""
Threshold family.

cv2.threshold takes one threshold and one maximum value, so thresholds are
applied channel by channel through channel dispatch, each channel with its
own entry of the threshold and maximum color values.
"""

import logging
from typing import TYPE_CHECKING, Optional

import cv2
import numpy as np

from common.enums import ThresholdType
from core.exceptions import ErrorMessages, UnsupportedDepthException
from core.image.colors import ColorType
from core.image.depth import Byte
from core.image.dispatch import for_each_channel_into

if TYPE_CHECKING:
    from core.image.image import Image

logger = logging.getLogger(__name__)

THRESHOLD_FLAGS = {
    ThresholdType.BINARY: cv2.THRESH_BINARY,
    ThresholdType.BINARY_INV: cv2.THRESH_BINARY_INV,
    ThresholdType.TRUNC: cv2.THRESH_TRUNC,
    ThresholdType.TO_ZERO: cv2.THRESH_TOZERO,
    ThresholdType.TO_ZERO_INV: cv2.THRESH_TOZERO_INV,
    ThresholdType.OTSU: cv2.THRESH_BINARY | cv2.THRESH_OTSU,
}


def apply_threshold(
    image: "Image",
    dest: "Image",
    threshold_value: ColorType,
    max_value: Optional[ColorType],
    threshold_type: ThresholdType,
) -> None:
    """
    Threshold every channel of `image` into `dest` (which may be `image`).

    Args:
        image: Source image
        dest: Destination of the same geometry
        threshold_value: Per-channel thresholds
        max_value: Per-channel values for elements passing the threshold
        threshold_type: Threshold variant

    Raises:
        UnsupportedDepthException: For Otsu on a non Byte image
    """
    threshold_type = ThresholdType(threshold_type)
    if threshold_type == ThresholdType.OTSU and image.depth is not Byte:
        raise UnsupportedDepthException(image.depth.NAME, ErrorMessages.BYTE_ONLY)

    channels = image.channel_count
    thresholds = threshold_value.resize(channels)
    maxima = max_value.resize(channels) if max_value is not None else (0.0,) * channels
    flag = THRESHOLD_FLAGS[threshold_type]

    def threshold_channel(src: np.ndarray, dst: np.ndarray, index: int) -> None:
        _, result = cv2.threshold(src, thresholds[index], maxima[index], flag)
        dst[...] = result

    for_each_channel_into(image, threshold_channel, dest)


def _new(image, threshold_value, max_value, threshold_type) -> "Image":
    dest = type(image)(image.color, image.depth, image.width, image.height)
    apply_threshold(image, dest, threshold_value, max_value, threshold_type)
    return dest


def threshold_binary(image: "Image", threshold_value: ColorType, max_value: ColorType) -> "Image":
    """max_value where element > threshold, 0 otherwise."""
    return _new(image, threshold_value, max_value, ThresholdType.BINARY)


def threshold_binary_inplace(
    image: "Image", threshold_value: ColorType, max_value: ColorType
) -> None:
    apply_threshold(image, image, threshold_value, max_value, ThresholdType.BINARY)


def threshold_binary_inv(
    image: "Image", threshold_value: ColorType, max_value: ColorType
) -> "Image":
    """0 where element > threshold, max_value otherwise."""
    return _new(image, threshold_value, max_value, ThresholdType.BINARY_INV)


def threshold_binary_inv_inplace(
    image: "Image", threshold_value: ColorType, max_value: ColorType
) -> None:
    apply_threshold(image, image, threshold_value, max_value, ThresholdType.BINARY_INV)


def threshold_trunc(image: "Image", threshold_value: ColorType) -> "Image":
    """threshold where element > threshold, element otherwise."""
    return _new(image, threshold_value, None, ThresholdType.TRUNC)


def threshold_trunc_inplace(image: "Image", threshold_value: ColorType) -> None:
    apply_threshold(image, image, threshold_value, None, ThresholdType.TRUNC)


def threshold_to_zero(image: "Image", threshold_value: ColorType) -> "Image":
    """element where element > threshold, 0 otherwise."""
    return _new(image, threshold_value, None, ThresholdType.TO_ZERO)


def threshold_to_zero_inplace(image: "Image", threshold_value: ColorType) -> None:
    apply_threshold(image, image, threshold_value, None, ThresholdType.TO_ZERO)


def threshold_to_zero_inv(image: "Image", threshold_value: ColorType) -> "Image":
    """0 where element > threshold, element otherwise."""
    return _new(image, threshold_value, None, ThresholdType.TO_ZERO_INV)


def threshold_to_zero_inv_inplace(image: "Image", threshold_value: ColorType) -> None:
    apply_threshold(image, image, threshold_value, None, ThresholdType.TO_ZERO_INV)


def threshold_otsu(image: "Image", threshold_value: ColorType, max_value: ColorType) -> "Image":
    """
    Binary threshold with the per-channel threshold chosen by Otsu's method.

    `threshold_value` is ignored by OpenCV but kept for a uniform signature.
    Byte images only.
    """
    return _new(image, threshold_value, max_value, ThresholdType.OTSU)


def threshold_otsu_inplace(
    image: "Image", threshold_value: ColorType, max_value: ColorType
) -> None:
    apply_threshold(image, image, threshold_value, max_value, ThresholdType.OTSU)
