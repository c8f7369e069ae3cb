"""
Generic per-element pixel transforms.

Row-buffer traversal over one to four images: for each visible row the raw
bytes of every participating image are copied into a typed scratch row,
a user function is applied element by element across the aligned rows,
and the output row is copied back into the raw bytes of the result image.
ROI and row stride of every image are honored independently.

Functions are called with plain Python numbers. With vectorized=True the
function is instead called once per row with the typed scratch arrays,
which is how NumPy ufuncs are best used here.
"""

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Type

import numpy as np

from core.exceptions import SizeMismatchException
from core.image.depth import DepthType
from core.image.layout import RoiLayout

if TYPE_CHECKING:
    from core.image.image import Image

logger = logging.getLogger(__name__)


def _check_layouts(layouts: Sequence[RoiLayout], operation: str) -> None:
    expected = layouts[0].shape
    for layout in layouts[1:]:
        if layout.shape != expected:
            raise SizeMismatchException(expected, layout.shape, operation)


def _marshal_in(image: "Image", layout: RoiLayout, row: int, scratch: np.ndarray) -> None:
    start = layout.row_start(row)
    raw = image.buffer.data[start : start + layout.row_byte_width]
    scratch[:] = raw.view(image.depth.DTYPE)


def _marshal_out(image: "Image", layout: RoiLayout, row: int, scratch: np.ndarray) -> None:
    start = layout.row_start(row)
    image.buffer.data[start : start + layout.row_byte_width] = scratch.view(np.uint8)


def _scan(
    images: Sequence["Image"],
    row_func: Callable[[int, List[np.ndarray]], Optional[np.ndarray]],
    operation: str,
    result: Optional["Image"] = None,
) -> None:
    """Drive the row loop shared by every arity."""
    layouts = [image.buffer.layout() for image in images]
    out_layout = result.buffer.layout() if result is not None else None
    _check_layouts(layouts + ([out_layout] if out_layout is not None else []), operation)

    first = layouts[0]
    rows = [np.empty(first.elements_per_row, dtype=image.depth.DTYPE) for image in images]
    out_row = (
        np.empty(first.elements_per_row, dtype=result.depth.DTYPE) if result is not None else None
    )

    for row in range(first.row_count):
        for image, layout, scratch in zip(images, layouts, rows):
            _marshal_in(image, layout, row, scratch)

        values = row_func(row, rows)

        if result is not None:
            out_row[:] = result.depth.saturate(np.asarray(values, dtype=np.float64))
            _marshal_out(result, out_layout, row, out_row)


def _elementwise(func: Callable, vectorized: bool) -> Callable[[int, List[np.ndarray]], object]:
    if vectorized:
        return lambda row, rows: func(*rows)
    return lambda row, rows: [func(*elements) for elements in zip(*(r.tolist() for r in rows))]


def _new_result(image: "Image", depth: Optional[Type[DepthType]]) -> "Image":
    return type(image)(image.color, depth or image.depth, image.width, image.height)


def action(image: "Image", func: Callable, *others: "Image", vectorized: bool = False) -> None:
    """
    Call `func` for every element of the image (and of `others`, aligned).

    Args:
        image: Image to scan
        func: Called with one element per image; the return value is ignored
        *others: Optional further images of the same ROI size
        vectorized: Call `func` once per row with the scratch arrays instead
    """
    _scan([image, *others], _elementwise(func, vectorized), "action")


def convert_pixels(
    image: "Image",
    func: Callable,
    depth: Optional[Type[DepthType]] = None,
    vectorized: bool = False,
) -> "Image":
    """
    Compute a new image whose elements are func(element).

    Args:
        image: Source image
        func: Element converter
        depth: Depth of the result (defaults to the source depth)
        vectorized: Call `func` once per row with the scratch array instead

    Returns:
        New image of the ROI size with the same color model
    """
    result = _new_result(image, depth)
    _scan([image], _elementwise(func, vectorized), "convert", result)
    return result


def convert_pixels_indexed(
    image: "Image",
    func: Callable[[float, int, int], float],
    depth: Optional[Type[DepthType]] = None,
) -> "Image":
    """
    Compute a new image whose elements are func(element, row, column).

    Row and column are pixel coordinates relative to the ROI; every channel
    of a pixel sees the same column.
    """
    result = _new_result(image, depth)
    channels = image.channel_count

    def row_func(row: int, rows: List[np.ndarray]) -> list:
        return [func(value, row, col // channels) for col, value in enumerate(rows[0].tolist())]

    _scan([image], row_func, "convert", result)
    return result


def combine2(
    image: "Image",
    image2: "Image",
    func: Callable,
    depth: Optional[Type[DepthType]] = None,
    vectorized: bool = False,
) -> "Image":
    """Compute a new image whose elements are func(a, b)."""
    result = _new_result(image, depth)
    _scan([image, image2], _elementwise(func, vectorized), "combine2", result)
    return result


def combine3(
    image: "Image",
    image2: "Image",
    image3: "Image",
    func: Callable,
    depth: Optional[Type[DepthType]] = None,
    vectorized: bool = False,
) -> "Image":
    """Compute a new image whose elements are func(a, b, c)."""
    result = _new_result(image, depth)
    _scan([image, image2, image3], _elementwise(func, vectorized), "combine3", result)
    return result


def combine4(
    image: "Image",
    image2: "Image",
    image3: "Image",
    image4: "Image",
    func: Callable,
    depth: Optional[Type[DepthType]] = None,
    vectorized: bool = False,
) -> "Image":
    """Compute a new image whose elements are func(a, b, c, d)."""
    result = _new_result(image, depth)
    _scan(
        [image, image2, image3, image4], _elementwise(func, vectorized), "combine4", result
    )
    return result
