"""
Channel dispatch for single-channel native primitives.

Most OpenCV primitives used here (threshold, compare, Canny, minMaxLoc,
corner detection, ...) only understand single-channel input. The helpers
in this module run such a primitive on every channel of an image:

- single-channel images: the primitive gets the image's own (ROI) view,
  no extra allocation
- multi-channel images: each channel is selected as channel of interest,
  copied into a pre-allocated single-channel scratch array, processed,
  and (for the write path) copied back into the destination channel

The channel-of-interest marker is always cleared again, also when the
primitive raises.
"""

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Callable, Generator, List

import numpy as np

from core.exceptions import ChannelCountMismatchException, SizeMismatchException
from core.image.buffer import PixelBuffer

if TYPE_CHECKING:
    from core.image.image import Image

logger = logging.getLogger(__name__)


@contextmanager
def channel_of_interest(index: int, *buffers: PixelBuffer) -> Generator[None, None, None]:
    """
    Select channel `index` (0-based) on every buffer for the duration of the block.

    Usage:
        with channel_of_interest(1, src.buffer, dst.buffer):
            src.buffer.read_channel(scratch)
            ...

    The marker is reset on all buffers on exit, whether or not the block raised.
    """
    try:
        for buffer in buffers:
            buffer.select_channel(index + 1)
        yield
    finally:
        for buffer in buffers:
            buffer.reset_channel()


def _scratch(image: "Image") -> np.ndarray:
    return np.zeros((image.height, image.width), dtype=image.depth.DTYPE)


def check_co_operand(image: "Image", other: "Image", operation: str) -> None:
    """Raise unless `other` has the channel count and ROI size of `image`."""
    if other.channel_count != image.channel_count:
        raise ChannelCountMismatchException(image.channel_count, other.channel_count)
    if (other.width, other.height) != (image.width, image.height):
        raise SizeMismatchException(
            (image.width, image.height), (other.width, other.height), operation
        )


def for_each_channel(image: "Image", operation: Callable[[np.ndarray, int], Any]) -> List[Any]:
    """
    Apply a read-only operation to every channel and collect the results.

    Args:
        image: Source image
        operation: Callable receiving a single-channel array and the channel index

    Returns:
        One result per channel, in channel order
    """
    buffer = image.buffer
    if image.channel_count == 1:
        return [operation(buffer.view(), 0)]

    scratch = _scratch(image)
    results = []
    for index in range(image.channel_count):
        with channel_of_interest(index, buffer):
            buffer.read_channel(scratch)
            results.append(operation(scratch, index))
    return results


def for_each_channel_into(
    image: "Image",
    operation: Callable[..., None],
    dest: "Image",
    *others: "Image",
) -> None:
    """
    Apply a channel operation whose result is written into `dest`.

    The operation is called as operation(src, *other_srcs, dst, index) and
    must fill `dst` in place (dst[...] = ...). Source and destination may
    have different depths; all images must have the same channel count and
    ROI size.

    Args:
        image: Source image
        operation: Callable filling the destination channel
        dest: Destination image
        *others: Additional source images, channel-aligned with `image`
    """
    for other in (dest,) + others:
        check_co_operand(image, other, getattr(operation, "__name__", "channel operation"))

    if image.channel_count == 1:
        sources = [image.buffer.view()] + [other.buffer.view() for other in others]
        operation(*sources, dest.buffer.view(), 0)
        return

    source_scratch = [_scratch(image)] + [_scratch(other) for other in others]
    dest_scratch = _scratch(dest)
    source_buffers = [image.buffer] + [other.buffer for other in others]

    for index in range(image.channel_count):
        with channel_of_interest(index, dest.buffer, *source_buffers):
            for buffer, scratch in zip(source_buffers, source_scratch):
                buffer.read_channel(scratch)
            operation(*source_scratch, dest_scratch, index)
            dest.buffer.write_channel(dest_scratch)

    logger.debug(
        f"Dispatched {getattr(operation, '__name__', 'operation')} "
        f"over {image.channel_count} channels"
    )


def for_each_channel_pair(
    image: "Image",
    other: "Image",
    operation: Callable[[np.ndarray, np.ndarray, np.ndarray, int], None],
    dest: "Image",
) -> None:
    """Two-source write path: operation(src, other_src, dst, index)."""
    for_each_channel_into(image, operation, dest, other)
