"""
Pixel depth descriptors.

A depth is the storage type of one channel element. Each supported depth
is a class carrying its traits as class attributes; depth classes are
never instantiated.
"""

from typing import Any, Dict, Type

import numpy as np

from core.exceptions import UnsupportedDepthException


class DepthType:
    """Base class of all depth descriptors."""

    NAME: str = ""
    DTYPE: np.dtype = None
    ELEMENT_SIZE: int = 0
    KIND: str = ""  # "unsigned" or "float"
    MIN_VALUE: float = 0.0
    MAX_VALUE: float = 0.0

    def __init__(self):
        raise TypeError(f"{type(self).__name__} is a depth descriptor and cannot be instantiated")

    @classmethod
    def is_integer(cls) -> bool:
        return cls.KIND == "unsigned"

    @classmethod
    def saturate(cls, values: np.ndarray) -> np.ndarray:
        """
        Cast values into this depth the way OpenCV's saturate_cast does.

        Integer depths round half to even and clip to the representable
        range; float depths are a plain cast.
        """
        values = np.asarray(values)
        if cls.is_integer():
            return np.clip(np.rint(values), cls.MIN_VALUE, cls.MAX_VALUE).astype(cls.DTYPE)
        return values.astype(cls.DTYPE)


class Byte(DepthType):
    """Unsigned 8-bit integer elements (0-255)."""

    NAME = "Byte"
    DTYPE = np.dtype(np.uint8)
    ELEMENT_SIZE = 1
    KIND = "unsigned"
    MIN_VALUE = 0.0
    MAX_VALUE = 255.0


class Single(DepthType):
    """IEEE single precision float elements."""

    NAME = "Single"
    DTYPE = np.dtype(np.float32)
    ELEMENT_SIZE = 4
    KIND = "float"
    MIN_VALUE = float(np.finfo(np.float32).min)
    MAX_VALUE = float(np.finfo(np.float32).max)


SUPPORTED_DEPTHS: Dict[str, Type[DepthType]] = {
    Byte.NAME: Byte,
    Single.NAME: Single,
}

_DEPTHS_BY_DTYPE: Dict[np.dtype, Type[DepthType]] = {
    Byte.DTYPE: Byte,
    Single.DTYPE: Single,
}


def resolve_depth(value: Any) -> Type[DepthType]:
    """
    Resolve a depth class from a depth class, NumPy dtype or depth name.

    Args:
        value: Depth class, dtype (np.uint8, "float32", ...) or name ("Byte")

    Returns:
        Depth class

    Raises:
        UnsupportedDepthException: If the value does not name a supported depth
    """
    if (
        isinstance(value, type)
        and issubclass(value, DepthType)
        and value in SUPPORTED_DEPTHS.values()
    ):
        return value

    if isinstance(value, str) and value in SUPPORTED_DEPTHS:
        return SUPPORTED_DEPTHS[value]

    try:
        dtype = np.dtype(value)
    except (TypeError, ValueError):
        raise UnsupportedDepthException(value) from None

    depth = _DEPTHS_BY_DTYPE.get(dtype)
    if depth is None:
        raise UnsupportedDepthException(value)
    return depth
