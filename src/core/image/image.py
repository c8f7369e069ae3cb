"""
Image core - a typed, channel- and ROI-aware image container.

An Image couples a color model (ColorType subclass), a depth (DepthType
subclass) and one exclusively owned PixelBuffer. Width, height, size and
every operation act on the region of interest when one is set;
`raster_size`, `binary` and pixel indexing always address the full raster.

Transforms return new images; methods ending in `_inplace` modify the
image itself.
"""

import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple, Type, Union

import cv2
import numpy as np

from common.base import ROI, Point, Size
from common.constants import ImageConstants
from common.enums import CmpType, FlipType, Interpolation, LoadMode
from config import get_settings
from core.exceptions import (
    ChannelCountMismatchException,
    ErrorMessages,
    ImageCoreException,
    InvalidROIException,
    SizeMismatchException,
    UnsupportedDepthException,
)
from core.image import arithmetic, codec, conversion, filters, threshold
from core.image.buffer import PixelBuffer
from core.image.colors import Bgr, Bgra, ColorType, Gray
from core.image.depth import Byte, DepthType, resolve_depth
from core.image.dispatch import for_each_channel
from schemas.image import ImageRecord, RoiBounds

logger = logging.getLogger(__name__)

INTERPOLATION_FLAGS = {
    Interpolation.NEAREST: cv2.INTER_NEAREST,
    Interpolation.LINEAR: cv2.INTER_LINEAR,
    Interpolation.CUBIC: cv2.INTER_CUBIC,
    Interpolation.AREA: cv2.INTER_AREA,
    Interpolation.LANCZOS: cv2.INTER_LANCZOS4,
}

# Color model assumed for arrays that arrive without one
DEFAULT_COLORS = {1: Gray, 3: Bgr, 4: Bgra}

# (color, depth) pairs whose memory is directly usable as an OpenCV bitmap
BITMAP_FORMATS = {(Gray, Byte), (Bgr, Byte)}

Operand = Union["Image", ColorType]


class Image:
    """
    Multi-channel image of a fixed color model and depth.

    Args:
        color: Color model class (Gray, Bgr, ...)
        depth: Depth class, dtype or depth name (Byte, np.float32, "Single")
        width: Raster width in pixels
        height: Raster height in pixels
        value: Optional fill color; the buffer is zeroed otherwise

    Usage:
        with Image(Bgr, Byte, 640, 480, Bgr(255, 0, 0)) as image:
            image.roi = ROI(x=10, y=10, width=100, height=100)
            gray = image.convert(Gray)
    """

    def __init__(
        self,
        color: Type[ColorType],
        depth: Union[Type[DepthType], str, np.dtype, type],
        width: int = ImageConstants.DEFAULT_WIDTH,
        height: int = ImageConstants.DEFAULT_HEIGHT,
        value: Optional[ColorType] = None,
    ):
        if not (isinstance(color, type) and issubclass(color, ColorType) and color.CHANNEL_COUNT):
            raise TypeError(f"color must be a ColorType subclass, got {color!r}")

        self.color = color
        self.depth = resolve_depth(depth)
        self.buffer = PixelBuffer(width, height, color.CHANNEL_COUNT, self.depth)

        if value is not None:
            self.set_value(value)

    # ==================== Construction ====================

    @classmethod
    def from_array(cls, array: np.ndarray, color: Optional[Type[ColorType]] = None) -> "Image":
        """
        Create an image holding a copy of a NumPy array.

        Args:
            array: (H, W) or (H, W, C) array of a supported dtype
            color: Color model; inferred from the channel count when omitted

        Raises:
            ChannelCountMismatchException: If the array does not fit the color model
            UnsupportedDepthException: If the dtype is not a supported depth
        """
        array = np.asarray(array)
        if array.ndim == 2:
            channels = 1
        elif array.ndim == 3:
            channels = array.shape[2]
        else:
            raise ValueError(f"Expected a 2-D or 3-D array, got shape {array.shape}")

        if color is None:
            if channels not in DEFAULT_COLORS:
                raise ValueError(f"No default color model for {channels} channel(s)")
            color = DEFAULT_COLORS[channels]
        if color.CHANNEL_COUNT != channels:
            raise ChannelCountMismatchException(color.CHANNEL_COUNT, channels)

        image = cls(color, array.dtype, array.shape[1], array.shape[0])
        target = image.buffer.full_view()
        target[...] = array.reshape(target.shape)
        return image

    @classmethod
    def _from_decoded(
        cls, array: np.ndarray, color: Type[ColorType], depth: Union[Type[DepthType], str]
    ) -> "Image":
        loaded = cls.from_array(array)
        if loaded.color is color and loaded.depth is resolve_depth(depth):
            return loaded
        try:
            return loaded.convert(color, depth)
        finally:
            loaded.release()

    @staticmethod
    def _load_mode(color: Type[ColorType]) -> LoadMode:
        return LoadMode.GRAYSCALE if color.CHANNEL_COUNT == 1 else LoadMode.COLOR

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        color: Type[ColorType] = Bgr,
        depth: Union[Type[DepthType], str] = Byte,
    ) -> "Image":
        """
        Load an image file and convert it to the requested color model and depth.

        Single channel models decode the file as grayscale, every other model
        decodes it as BGR first.
        """
        return cls._from_decoded(codec.read_file(path, cls._load_mode(color)), color, depth)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        color: Type[ColorType] = Bgr,
        depth: Union[Type[DepthType], str] = Byte,
    ) -> "Image":
        """Decode an encoded image (PNG, JPEG, ...) held in memory."""
        return cls._from_decoded(codec.decode_bytes(data, cls._load_mode(color)), color, depth)

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        color: Type[ColorType] = Bgr,
        depth: Union[Type[DepthType], str] = Byte,
    ) -> "Image":
        """Decode an encoded image from a binary file-like object."""
        return cls._from_decoded(codec.decode_stream(stream, cls._load_mode(color)), color, depth)

    @classmethod
    def from_channels(cls, color: Type[ColorType], channels: Sequence["Image"]) -> "Image":
        """
        Merge single channel images into one image, keeping their order.

        Raises:
            ChannelCountMismatchException: If the number of channels does not
                match the color model, or a channel is not single channel
            SizeMismatchException: If the channels differ in size
            UnsupportedDepthException: If the channels differ in depth
        """
        if len(channels) != color.CHANNEL_COUNT:
            raise ChannelCountMismatchException(color.CHANNEL_COUNT, len(channels))

        first = channels[0]
        for channel in channels:
            if channel.channel_count != 1:
                raise ChannelCountMismatchException(1, channel.channel_count)
            if channel.depth is not first.depth:
                raise UnsupportedDepthException(channel.depth.NAME, ErrorMessages.DEPTH_MISMATCH)
            if (channel.width, channel.height) != (first.width, first.height):
                raise SizeMismatchException(
                    (first.width, first.height), (channel.width, channel.height), "merge"
                )

        if len(channels) == 1:
            return cls.from_array(first.pixels, color)
        return cls.from_array(cv2.merge([channel.pixels for channel in channels]), color)

    @classmethod
    def from_record(
        cls,
        record: ImageRecord,
        color: Type[ColorType],
        depth: Union[Type[DepthType], str],
    ) -> "Image":
        """
        Restore an image from its persisted record.

        The raster is allocated at the stored size, the compressed buffer is
        loaded and the stored ROI is applied last.

        Raises:
            SizeMismatchException: If the stored buffer length does not match
                the allocated raster (different color, depth or row alignment)
        """
        image = cls(color, depth, record.size.width, record.size.height)
        data = codec.decompress(codec.from_base64(record.compressed_binary))
        expected = image.buffer.image_size
        if len(data) != expected:
            image.release()
            raise SizeMismatchException((expected,), (len(data),), "from_record")
        image.binary = data
        if record.roi is not None:
            image.roi = record.roi.to_roi()
        return image

    # ==================== Geometry ====================

    @property
    def channel_count(self) -> int:
        return self.color.CHANNEL_COUNT

    @property
    def width(self) -> int:
        """Width of the ROI, or of the raster when no ROI is set."""
        roi = self.buffer.roi
        return roi.width if roi is not None else self.buffer.width

    @property
    def height(self) -> int:
        """Height of the ROI, or of the raster when no ROI is set."""
        roi = self.buffer.roi
        return roi.height if roi is not None else self.buffer.height

    @property
    def roi(self) -> Optional[ROI]:
        return self.buffer.roi

    @roi.setter
    def roi(self, value: Optional[Union[ROI, dict]]) -> None:
        if value is None:
            self.buffer.roi = None
            return

        roi = ROI.from_dict(value) if isinstance(value, dict) else value
        if not roi.is_valid(self.buffer.width, self.buffer.height):
            raise InvalidROIException(
                roi.to_dict(),
                ErrorMessages.ROI_OUT_OF_BOUNDS.format(
                    roi=roi.to_dict(), bounds=(self.buffer.width, self.buffer.height)
                ),
            )
        self.buffer.roi = roi

    @property
    def is_roi_set(self) -> bool:
        return self.buffer.roi is not None

    @property
    def raster_size(self) -> Size:
        """Size of the full raster, regardless of the ROI."""
        return Size(width=self.buffer.width, height=self.buffer.height)

    @property
    def size(self) -> Size:
        """Size of the ROI, or of the raster when no ROI is set."""
        return Size(width=self.width, height=self.height)

    @size.setter
    def size(self, value: Union[Size, Tuple[int, int]]) -> None:
        """
        Resample the whole raster to a new size.

        The new size applies to the full raster even while an ROI is set;
        the ROI is rescaled with the raster and clipped to it.
        """
        width, height = value.as_tuple() if isinstance(value, Size) else value
        old = self.buffer
        if (width, height) == (old.width, old.height):
            return

        interpolation = INTERPOLATION_FLAGS[get_settings().image.interpolation]
        resized = cv2.resize(old.full_view(), (width, height), interpolation=interpolation)

        buffer = PixelBuffer(width, height, self.channel_count, self.depth)
        target = buffer.full_view()
        target[...] = resized.reshape(target.shape)

        if old.roi is not None:
            buffer.roi = old.roi.rescale(width / old.width, height / old.height).clip(width, height)

        logger.debug(f"Resized raster {old.width}x{old.height} -> {width}x{height}")
        self.buffer = buffer
        old.release()

    # ==================== Raw access ====================

    @property
    def binary(self) -> bytes:
        """Raw bytes of the whole raster, row padding included, ignoring the ROI."""
        return self.buffer.data.tobytes()

    @binary.setter
    def binary(self, value: bytes) -> None:
        data = self.buffer.data
        count = min(len(value), self.buffer.image_size)
        if len(value) != self.buffer.image_size:
            logger.warning(
                f"Binary of {len(value)} bytes does not match buffer of "
                f"{self.buffer.image_size} bytes, copying {count}"
            )
        data[:count] = np.frombuffer(value, dtype=np.uint8, count=count)

    @property
    def compressed_binary(self) -> bytes:
        """zlib compressed `binary`."""
        return codec.compress(self.binary, get_settings().image.compression_level)

    @compressed_binary.setter
    def compressed_binary(self, value: bytes) -> None:
        self.binary = codec.decompress(value)

    @property
    def pixels(self) -> np.ndarray:
        """Zero-copy typed view of the ROI: (H, W) for one channel, (H, W, C) otherwise."""
        return self.buffer.view()

    def to_array(self) -> np.ndarray:
        """Independent, contiguous copy of the ROI pixels."""
        return np.array(self.pixels)

    def channel_values(self, color: Union[ColorType, float, Sequence[float]]) -> np.ndarray:
        """
        Per-channel values of `color`, saturated into this image's depth.

        A color value is padded or truncated to the channel count; a plain
        number applies to every channel.
        """
        if isinstance(color, ColorType):
            values = np.asarray(color.resize(self.channel_count), dtype=np.float64)
        else:
            values = np.broadcast_to(np.asarray(color, dtype=np.float64), (self.channel_count,))
        return self.depth.saturate(values)

    def _check_coordinates(self, row: int, col: int) -> None:
        if not (0 <= row < self.buffer.height and 0 <= col < self.buffer.width):
            raise IndexError(
                f"Pixel ({row}, {col}) outside {self.buffer.width}x{self.buffer.height} raster"
            )

    def get_pixel(self, row: int, col: int) -> ColorType:
        """
        Color at full-raster coordinates (the ROI is ignored).

        Raises:
            IndexError: If (row, col) lies outside the raster
        """
        self._check_coordinates(row, col)
        values = np.atleast_1d(self.buffer.full_view()[row, col])
        return self.color(*values.tolist())

    def set_pixel(self, row: int, col: int, color: ColorType) -> None:
        """Set the color at full-raster coordinates (the ROI is ignored)."""
        self._check_coordinates(row, col)
        values = self.channel_values(color)
        self.buffer.full_view()[row, col] = values[0] if self.channel_count == 1 else values

    def __getitem__(self, index: Tuple[int, int]) -> ColorType:
        row, col = index
        return self.get_pixel(row, col)

    def __setitem__(self, index: Tuple[int, int], color: ColorType) -> None:
        row, col = index
        self.set_pixel(row, col, color)

    def check_mask(self, mask: Optional["Image"]) -> Optional[np.ndarray]:
        """
        Validate a mask against this image and return its pixel view.

        Raises:
            ChannelCountMismatchException: If the mask has more than one channel
            UnsupportedDepthException: If the mask is not Byte
            SizeMismatchException: If the mask ROI size differs
        """
        if mask is None:
            return None
        if mask.channel_count != 1:
            raise ChannelCountMismatchException(1, mask.channel_count)
        if mask.depth is not Byte:
            raise UnsupportedDepthException(mask.depth.NAME, ErrorMessages.MASK_NOT_SINGLE_CHANNEL)
        if (mask.width, mask.height) != (self.width, self.height):
            raise SizeMismatchException(
                (self.width, self.height), (mask.width, mask.height), "mask"
            )
        return mask.pixels

    # ==================== Copies and fills ====================

    def set_value(self, color: ColorType, mask: Optional["Image"] = None) -> None:
        """Fill the ROI (only where `mask` is non-zero, if given) with `color`."""
        mask_pixels = self.check_mask(mask)
        values = self.channel_values(color)
        view = self.pixels
        if self.channel_count == 1:
            values = values[0]

        if mask_pixels is None:
            view[...] = values
        else:
            view[mask_pixels != 0] = values

    def clone(self, mask: Optional["Image"] = None) -> "Image":
        """
        Copy of the ROI as a new image without ROI.

        With a mask, pixels where the mask is zero are left zero.
        """
        result = type(self)(self.color, self.depth, self.width, self.height)
        self.copy_to(result, mask)
        return result

    def blank_clone(self, color: Optional[ColorType] = None) -> "Image":
        """New image of the ROI size, zeroed or filled with `color`."""
        return type(self)(self.color, self.depth, self.width, self.height, color)

    def copy_to(self, dest: "Image", mask: Optional["Image"] = None) -> None:
        """
        Copy the ROI into the ROI of `dest`.

        Raises:
            ChannelCountMismatchException / SizeMismatchException: On geometry mismatch
            UnsupportedDepthException: If the depths differ
        """
        arithmetic.check_operand(self, dest, "copy")
        mask_pixels = self.check_mask(mask)
        target = dest.pixels

        if mask_pixels is None:
            target[...] = self.pixels
            return

        where = mask_pixels != 0
        if self.channel_count > 1:
            where = where[..., np.newaxis]
        np.copyto(target, self.pixels, where=where)

    def split(self) -> List["Image"]:
        """One Gray image per channel, in channel order."""
        return for_each_channel(self, lambda channel, index: type(self).from_array(channel, Gray))

    # ==================== Resampling ====================

    def resize(
        self,
        width: int,
        height: int,
        interpolation: Optional[Interpolation] = None,
    ) -> "Image":
        """Resampled copy of the ROI."""
        interpolation = interpolation or get_settings().image.interpolation
        resized = cv2.resize(
            self.pixels, (width, height), interpolation=INTERPOLATION_FLAGS[interpolation]
        )
        return type(self).from_array(resized, self.color)

    def resize_scale(self, scale: float, interpolation: Optional[Interpolation] = None) -> "Image":
        """Resampled copy of the ROI scaled by `scale` in both directions."""
        width = max(1, int(self.width * scale))
        height = max(1, int(self.height * scale))
        return self.resize(width, height, interpolation)

    def resize_preserve(
        self, width: int, height: int, interpolation: Optional[Interpolation] = None
    ) -> "Image":
        """Largest copy that fits into width x height without changing the aspect ratio."""
        scale = min(width / self.width, height / self.height)
        return self.resize_scale(scale, interpolation)

    # ==================== Statistics ====================

    @property
    def average(self) -> ColorType:
        """Per-channel mean of the ROI."""
        return self.color.from_scalar(cv2.mean(self.pixels))

    @property
    def sum(self) -> ColorType:
        """Per-channel sum of the ROI."""
        return self.color.from_scalar(cv2.sumElems(self.pixels))

    def min_max(self) -> Tuple[List[float], List[float], List[Point], List[Point]]:
        """
        Per-channel extrema of the ROI.

        Returns:
            (min_values, max_values, min_locations, max_locations), one entry
            per channel; locations are (x, y) relative to the ROI
        """
        results = for_each_channel(self, lambda channel, index: cv2.minMaxLoc(channel))
        return (
            [float(r[0]) for r in results],
            [float(r[1]) for r in results],
            [Point(x=r[2][0], y=r[2][1]) for r in results],
            [Point(x=r[3][0], y=r[3][1]) for r in results],
        )

    def equals(self, other: Optional["Image"]) -> bool:
        return arithmetic.equals(self, other)

    # ==================== Conversion ====================

    def convert(
        self,
        color: Type[ColorType],
        depth: Optional[Union[Type[DepthType], str]] = None,
    ) -> "Image":
        return conversion.convert(self, color, depth)

    def convert_scale(
        self, depth: Union[Type[DepthType], str], scale: float = 1.0, shift: float = 0.0
    ) -> "Image":
        return conversion.convert_scale(self, depth, scale, shift)

    # ==================== Bitmap interop ====================

    def as_bitmap(self) -> np.ndarray:
        """
        Zero-copy view usable wherever an 8-bit OpenCV bitmap is expected.

        Only Gray/Byte and Bgr/Byte images qualify; the view is valid while
        the image is alive.
        """
        if (self.color, self.depth) not in BITMAP_FORMATS:
            raise ImageCoreException(
                ErrorMessages.NO_BITMAP_VIEW.format(
                    color=self.color.__name__, depth=self.depth.NAME
                ),
                details={"color": self.color.__name__, "depth": self.depth.NAME},
            )
        return self.pixels

    def to_bitmap(self, width: Optional[int] = None, height: Optional[int] = None) -> np.ndarray:
        """
        Independent Gray/Byte (single channel) or Bgr/Byte copy of the ROI.

        Args:
            width: Optional output width
            height: Optional output height
        """
        target = Gray if self.channel_count == 1 else Bgr
        converted = self.convert(target, Byte)
        try:
            if width is not None or height is not None:
                resized = converted.resize(width or converted.width, height or converted.height)
                converted.release()
                converted = resized
            return converted.to_array()
        finally:
            converted.release()

    def save(self, path: Union[str, Path]) -> None:
        """Encode the ROI to a file; the format follows the file extension."""
        if (self.color, self.depth) in BITMAP_FORMATS:
            codec.write_file(path, self.pixels)
        else:
            codec.write_file(path, self.to_bitmap())

    def to_record(self) -> ImageRecord:
        """Persisted form: raster size, ROI and base64 of the compressed buffer."""
        return ImageRecord(
            size=self.raster_size,
            roi=RoiBounds.from_roi(self.roi) if self.roi is not None else None,
            compressed_binary=codec.to_base64(self.compressed_binary),
        )

    # ==================== Arithmetic / logic ====================

    def bitwise_and(self, other: Operand, mask: Optional["Image"] = None) -> "Image":
        return arithmetic.bitwise_and(self, other, mask)

    def bitwise_or(self, other: Operand, mask: Optional["Image"] = None) -> "Image":
        return arithmetic.bitwise_or(self, other, mask)

    def bitwise_xor(self, other: Operand, mask: Optional["Image"] = None) -> "Image":
        return arithmetic.bitwise_xor(self, other, mask)

    def bitwise_not(self, mask: Optional["Image"] = None) -> "Image":
        return arithmetic.bitwise_not(self, mask)

    def add(self, other: Operand, mask: Optional["Image"] = None) -> "Image":
        return arithmetic.add(self, other, mask)

    def sub(self, other: Operand, mask: Optional["Image"] = None) -> "Image":
        return arithmetic.sub(self, other, mask)

    def sub_reverse(self, value: Operand, mask: Optional["Image"] = None) -> "Image":
        return arithmetic.sub_reverse(self, value, mask)

    def mul(self, other: Union["Image", float], scale: float = 1.0) -> "Image":
        return arithmetic.mul(self, other, scale)

    def div(self, other: Union["Image", float], scale: float = 1.0) -> "Image":
        return arithmetic.div(self, other, scale)

    def add_weighted(
        self, other: "Image", alpha: float, beta: float, gamma: float = 0.0
    ) -> "Image":
        return arithmetic.add_weighted(self, other, alpha, beta, gamma)

    def max(self, other: Operand) -> "Image":
        return arithmetic.maximum(self, other)

    def min(self, other: Operand) -> "Image":
        return arithmetic.minimum(self, other)

    def abs_diff(self, other: Operand) -> "Image":
        return arithmetic.abs_diff(self, other)

    def in_range(self, lower: ColorType, upper: ColorType) -> "Image":
        return arithmetic.in_range(self, lower, upper)

    def cmp(self, other: Union["Image", ColorType, float], cmp_type: CmpType) -> "Image":
        return arithmetic.cmp(self, other, cmp_type)

    # ==================== Thresholds ====================

    def threshold_binary(self, threshold_value: ColorType, max_value: ColorType) -> "Image":
        return threshold.threshold_binary(self, threshold_value, max_value)

    def threshold_binary_inplace(self, threshold_value: ColorType, max_value: ColorType) -> None:
        threshold.threshold_binary_inplace(self, threshold_value, max_value)

    def threshold_binary_inv(self, threshold_value: ColorType, max_value: ColorType) -> "Image":
        return threshold.threshold_binary_inv(self, threshold_value, max_value)

    def threshold_binary_inv_inplace(
        self, threshold_value: ColorType, max_value: ColorType
    ) -> None:
        threshold.threshold_binary_inv_inplace(self, threshold_value, max_value)

    def threshold_trunc(self, threshold_value: ColorType) -> "Image":
        return threshold.threshold_trunc(self, threshold_value)

    def threshold_trunc_inplace(self, threshold_value: ColorType) -> None:
        threshold.threshold_trunc_inplace(self, threshold_value)

    def threshold_to_zero(self, threshold_value: ColorType) -> "Image":
        return threshold.threshold_to_zero(self, threshold_value)

    def threshold_to_zero_inplace(self, threshold_value: ColorType) -> None:
        threshold.threshold_to_zero_inplace(self, threshold_value)

    def threshold_to_zero_inv(self, threshold_value: ColorType) -> "Image":
        return threshold.threshold_to_zero_inv(self, threshold_value)

    def threshold_to_zero_inv_inplace(self, threshold_value: ColorType) -> None:
        threshold.threshold_to_zero_inv_inplace(self, threshold_value)

    def threshold_otsu(self, threshold_value: ColorType, max_value: ColorType) -> "Image":
        return threshold.threshold_otsu(self, threshold_value, max_value)

    def threshold_otsu_inplace(self, threshold_value: ColorType, max_value: ColorType) -> None:
        threshold.threshold_otsu_inplace(self, threshold_value, max_value)

    # ==================== Filters ====================

    def erode(self, iterations: int = 1) -> "Image":
        return filters.erode(self, iterations)

    def dilate(self, iterations: int = 1) -> "Image":
        return filters.dilate(self, iterations)

    def gaussian_smooth(self, kernel_size: int = 3, sigma: float = 0.0) -> "Image":
        return filters.gaussian_smooth(self, kernel_size, sigma)

    def gaussian_smooth_inplace(self, kernel_size: int = 3, sigma: float = 0.0) -> None:
        filters.gaussian_smooth_inplace(self, kernel_size, sigma)

    def sobel(self, x_order: int, y_order: int, aperture_size: int = 3) -> "Image":
        return filters.sobel(self, x_order, y_order, aperture_size)

    def laplace(self, aperture_size: int = 3) -> "Image":
        return filters.laplace(self, aperture_size)

    def canny(self, threshold_value: float, threshold_linking: float) -> "Image":
        return filters.canny(self, threshold_value, threshold_linking)

    def pyr_down(self) -> "Image":
        return filters.pyr_down(self)

    def pyr_up(self) -> "Image":
        return filters.pyr_up(self)

    def flip(self, flip_type: FlipType) -> "Image":
        return filters.flip(self, flip_type)

    def convolution(self, kernel: np.ndarray) -> "Image":
        return filters.convolution(self, kernel)

    def match_template(self, template: "Image", method: int = cv2.TM_CCOEFF_NORMED) -> "Image":
        return filters.match_template(self, template, method)

    def good_features_to_track(
        self, max_corners: int, quality_level: float, min_distance: float, block_size: int = 3
    ) -> List[List[Point]]:
        return filters.good_features_to_track(
            self, max_corners, quality_level, min_distance, block_size
        )

    def hough_lines_binary(
        self,
        rho: float,
        theta: float,
        threshold_value: int,
        min_line_length: float = 0.0,
        max_line_gap: float = 0.0,
    ) -> List[List[Tuple[Point, Point]]]:
        return filters.hough_lines_binary(
            self, rho, theta, threshold_value, min_line_length, max_line_gap
        )

    def pow(self, power: float) -> "Image":
        return filters.pow(self, power)

    def exp(self) -> "Image":
        return filters.exp(self)

    def log(self) -> "Image":
        return filters.log(self)

    def running_avg(self, image: "Image", alpha: float, mask: Optional["Image"] = None) -> None:
        filters.running_avg(self, image, alpha, mask)

    def in_paint(self, mask: "Image", radius: float) -> "Image":
        return filters.in_paint(self, mask, radius)

    # ==================== Lifecycle ====================

    @property
    def released(self) -> bool:
        return self.buffer.released

    def release(self) -> None:
        """Free the pixel buffer; any later pixel access raises ImageReleasedException."""
        self.buffer.release()

    def __enter__(self) -> "Image":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def __repr__(self) -> str:
        roi = f", roi={self.roi.to_dict()}" if self.roi is not None else ""
        state = ", released" if self.released else ""
        return (
            f"Image<{self.color.__name__}, {self.depth.NAME}>"
            f"({self.buffer.width}x{self.buffer.height}{roi}{state})"
        )
