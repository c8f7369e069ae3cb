"""
Encoded image and binary payload conversion utilities.

Handles conversions between pixel arrays and external representations using OpenCV:
- Encoded image files and byte strings (PNG, JPEG, ...)
- Base64 encoded strings
- zlib compressed raw buffers
"""

import base64
import logging
import zlib
from pathlib import Path
from typing import BinaryIO, Union

import cv2
import numpy as np

from common.constants import CodecConstants, CompressionConstants
from common.enums import LoadMode
from core.exceptions import CodecException

logger = logging.getLogger(__name__)

LOAD_FLAGS = {
    LoadMode.GRAYSCALE: cv2.IMREAD_GRAYSCALE,
    LoadMode.COLOR: cv2.IMREAD_COLOR,
    LoadMode.UNCHANGED: cv2.IMREAD_UNCHANGED,
}


def decode_bytes(data: bytes, mode: LoadMode = LoadMode.COLOR) -> np.ndarray:
    """
    Decode an encoded image (PNG, JPEG, ...) held in memory.

    Args:
        data: Encoded image bytes
        mode: Whether to load grayscale, BGR color or unchanged

    Returns:
        NumPy array (2-D for grayscale, BGR otherwise)

    Raises:
        CodecException: If the bytes are not a decodable image
    """
    try:
        nparr = np.frombuffer(data, np.uint8)
        image = cv2.imdecode(nparr, LOAD_FLAGS[mode])
    except cv2.error as e:
        logger.error(f"Failed to decode image bytes: {e}")
        raise CodecException("decode", str(e)) from e

    if image is None:
        logger.error(f"Failed to decode image bytes ({len(data)} bytes)")
        raise CodecException("decode", "data is not a supported image format")

    return image


def decode_stream(stream: BinaryIO, mode: LoadMode = LoadMode.COLOR) -> np.ndarray:
    """Decode an encoded image from a binary file-like object."""
    return decode_bytes(stream.read(), mode)


def read_file(path: Union[str, Path], mode: LoadMode = LoadMode.COLOR) -> np.ndarray:
    """
    Read and decode an image file.

    Raises:
        FileNotFoundError: If the file does not exist
        CodecException: If the file cannot be decoded
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    # imdecode instead of imread so non-ASCII paths work on every platform
    return decode_bytes(path.read_bytes(), mode)


def encode_bytes(image: np.ndarray, format: str = CodecConstants.DEFAULT_FORMAT) -> bytes:
    """
    Encode an image array to bytes.

    Args:
        image: Image array (grayscale, BGR or BGRA)
        format: File extension selecting the codec (".png", "jpg", ...)

    Returns:
        Encoded bytes
    """
    ext = f".{format.lower()}" if not format.startswith(".") else format.lower()

    if ext in [".jpg", ".jpeg"]:
        params = [cv2.IMWRITE_JPEG_QUALITY, CodecConstants.JPEG_QUALITY]
    elif ext == ".png":
        params = [cv2.IMWRITE_PNG_COMPRESSION, CompressionConstants.BEST_COMPRESSION]
    else:
        params = []

    try:
        success, buffer = cv2.imencode(ext, image, params)
    except cv2.error as e:
        logger.error(f"Failed to encode image to {ext}: {e}")
        raise CodecException("encode", str(e)) from e

    if not success:
        raise CodecException("encode", f"failed to encode image to {ext}")

    return buffer.tobytes()


def write_file(path: Union[str, Path], image: np.ndarray) -> None:
    """Encode an image with the codec chosen by the file extension and write it."""
    path = Path(path)
    data = encode_bytes(image, path.suffix or CodecConstants.DEFAULT_FORMAT)
    path.write_bytes(data)
    logger.debug(f"Wrote {len(data)} bytes to {path}")


def compress(data: bytes, level: int = CompressionConstants.BEST_COMPRESSION) -> bytes:
    """Compress raw buffer bytes with zlib."""
    return zlib.compress(data, level)


def decompress(data: bytes) -> bytes:
    """
    Decompress a zlib stream produced by compress().

    Raises:
        CodecException: If the data is not a valid zlib stream
    """
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        logger.error(f"Failed to decompress binary: {e}")
        raise CodecException("decompress", str(e)) from e


def to_base64(data: bytes) -> str:
    """Encode bytes as a base64 string."""
    return base64.b64encode(data).decode("utf-8")


def from_base64(base64_string: str) -> bytes:
    """
    Decode a base64 string.

    Raises:
        CodecException: If the string is not valid base64
    """
    try:
        return base64.b64decode(base64_string, validate=True)
    except ValueError as e:
        logger.error(f"Failed to decode base64 payload: {e}")
        raise CodecException("base64", str(e)) from e
