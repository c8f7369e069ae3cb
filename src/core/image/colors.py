"""
Color model definitions.

Each color model is a ColorType subclass whose class attributes describe
the model (channel count, OpenCV conversion code token, channel names).
Instances of those classes are color values, e.g. Bgr(255, 0, 0), used as
fill colors, scalar operands, per-channel thresholds and pixel reads.
"""

from typing import Dict, Iterator, Optional, Sequence, Tuple, Type

import cv2

from common.constants import ImageConstants


class ColorType:
    """
    Base class of all color models.

    Subclasses define:
        CHANNEL_COUNT: Number of channels (1-4)
        CONVERSION_CODE_NAME: Token used in cv2.COLOR_<SRC>2<DST> constants
        CHANNEL_NAMES: Attribute names of the channels, in storage order
    """

    CHANNEL_COUNT: int = 0
    CONVERSION_CODE_NAME: str = ""
    CHANNEL_NAMES: Tuple[str, ...] = ()

    def __init__(self, *values: float):
        count = type(self).CHANNEL_COUNT
        if len(values) > count:
            raise ValueError(
                f"{type(self).__name__} has {count} channel(s), got {len(values)} values"
            )
        padded = list(values) + [0.0] * (count - len(values))
        self._values = tuple(float(v) for v in padded)

    @classmethod
    def from_scalar(cls, scalar: Sequence[float]) -> "ColorType":
        """Create a color value from an OpenCV scalar (extra entries are dropped)."""
        return cls(*list(scalar)[: cls.CHANNEL_COUNT])

    @property
    def values(self) -> Tuple[float, ...]:
        """Channel values in storage order."""
        return self._values

    @property
    def scalar(self) -> Tuple[float, float, float, float]:
        """The value as the 4-element scalar OpenCV expects."""
        return self.resize(ImageConstants.MAX_CHANNELS)

    def resize(self, length: int) -> Tuple[float, ...]:
        """Return the channel values padded with zeros (or truncated) to `length`."""
        values = list(self._values[:length])
        return tuple(values + [0.0] * (length - len(values)))

    def __getattr__(self, name: str) -> float:
        names = type(self).CHANNEL_NAMES
        if name in names:
            return self._values[names.index(name)]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __getitem__(self, index: int) -> float:
        return self._values[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._values))

    def __repr__(self) -> str:
        body = ", ".join(
            f"{name}={value:g}" for name, value in zip(type(self).CHANNEL_NAMES, self._values)
        )
        return f"{type(self).__name__}({body})"


class Gray(ColorType):
    """Single channel intensity."""

    CHANNEL_COUNT = 1
    CONVERSION_CODE_NAME = "GRAY"
    CHANNEL_NAMES = ("intensity",)


class Bgr(ColorType):
    """Blue, green, red (OpenCV native channel order)."""

    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "BGR"
    CHANNEL_NAMES = ("blue", "green", "red")


class Bgra(ColorType):
    """Blue, green, red, alpha."""

    CHANNEL_COUNT = 4
    CONVERSION_CODE_NAME = "BGRA"
    CHANNEL_NAMES = ("blue", "green", "red", "alpha")


class Rgb(ColorType):
    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "RGB"
    CHANNEL_NAMES = ("red", "green", "blue")


class Rgba(ColorType):
    CHANNEL_COUNT = 4
    CONVERSION_CODE_NAME = "RGBA"
    CHANNEL_NAMES = ("red", "green", "blue", "alpha")


class Hsv(ColorType):
    """Hue, saturation, value (hue is 0-180 for Byte depth)."""

    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "HSV"
    CHANNEL_NAMES = ("hue", "saturation", "value")


class Hls(ColorType):
    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "HLS"
    CHANNEL_NAMES = ("hue", "lightness", "saturation")


class Lab(ColorType):
    """CIE L*a*b*."""

    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "Lab"
    CHANNEL_NAMES = ("lightness", "a", "b")


class Luv(ColorType):
    """CIE L*u*v*."""

    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "Luv"
    CHANNEL_NAMES = ("lightness", "u", "v")


class Xyz(ColorType):
    """CIE XYZ."""

    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "XYZ"
    CHANNEL_NAMES = ("x", "y", "z")


class Ycc(ColorType):
    """YCrCb (luma, red difference, blue difference)."""

    CHANNEL_COUNT = 3
    CONVERSION_CODE_NAME = "YCrCb"
    CHANNEL_NAMES = ("y", "cr", "cb")


COLOR_MODELS: Dict[str, Type[ColorType]] = {
    model.__name__: model for model in (Gray, Bgr, Bgra, Rgb, Rgba, Hsv, Hls, Lab, Luv, Xyz, Ycc)
}


def get_color_model(name: str) -> Type[ColorType]:
    """
    Look up a color model class by name.

    Args:
        name: Class name of the model ("Bgr", "Gray", ...)

    Returns:
        Color model class

    Raises:
        ValueError: If name is not in COLOR_MODELS
    """
    if name not in COLOR_MODELS:
        raise ValueError(f"Unknown color model: {name}. Available: {list(COLOR_MODELS.keys())}")
    return COLOR_MODELS[name]


def get_conversion_code(
    source: Type[ColorType], target: Type[ColorType]
) -> Optional[int]:
    """
    Look up the direct OpenCV conversion code between two color models.

    Args:
        source: Color model to convert from
        target: Color model to convert to

    Returns:
        The cv2.COLOR_* code, or None when OpenCV has no direct conversion
    """
    key = f"COLOR_{source.CONVERSION_CODE_NAME}2{target.CONVERSION_CODE_NAME}"
    return getattr(cv2, key, None)
