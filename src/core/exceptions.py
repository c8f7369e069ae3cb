"""
Custom exceptions for the image core.
Provides a consistent error taxonomy across all image operations.
"""

from typing import Any, Dict, Optional, Sequence


class ImageCoreException(Exception):
    """Base exception for the image core."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SizeMismatchException(ImageCoreException):
    """Exception raised when co-operand images do not have the same size."""

    def __init__(self, expected: Sequence[int], actual: Sequence[int], operation: str = ""):
        super().__init__(
            message=ErrorMessages.SIZE_MISMATCH.format(
                operation=operation or "operation", expected=tuple(expected), actual=tuple(actual)
            ),
            details={"expected": tuple(expected), "actual": tuple(actual), "operation": operation},
        )


class ChannelCountMismatchException(ImageCoreException):
    """Exception raised when the number of channels does not fit the color model."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            message=ErrorMessages.CHANNEL_COUNT_MISMATCH.format(expected=expected, actual=actual),
            details={"expected": expected, "actual": actual},
        )


class UnsupportedDepthException(ImageCoreException):
    """Exception raised when an image depth is not supported."""

    def __init__(self, depth: Any, reason: str = ""):
        super().__init__(
            message=ErrorMessages.UNSUPPORTED_DEPTH.format(depth=depth)
            + (f": {reason}" if reason else ""),
            details={"depth": str(depth), "reason": reason},
        )


class ColorConversionException(ImageCoreException):
    """Exception raised when no conversion path exists between two color models."""

    def __init__(self, source: str, target: str):
        super().__init__(
            message=ErrorMessages.NO_CONVERSION_PATH.format(source=source, target=target),
            details={"source": source, "target": target},
        )


class InvalidROIException(ImageCoreException):
    """Exception raised when ROI is invalid."""

    def __init__(self, roi: Dict, reason: str):
        super().__init__(
            message=f"Invalid ROI: {reason}",
            details={"roi": roi, "reason": reason},
        )


class ImageReleasedException(ImageCoreException):
    """Exception raised when a released image buffer is accessed."""

    def __init__(self):
        super().__init__(message=ErrorMessages.IMAGE_RELEASED)


class CodecException(ImageCoreException):
    """Exception raised when encoding or decoding an image fails."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Codec operation failed: {operation} - {reason}",
            details={"operation": operation, "reason": reason},
        )


# Standard Messages
class ErrorMessages:
    """Standard error messages."""

    # Precondition violations
    SIZE_MISMATCH = "Image size do not match for {operation}: expected {expected}, got {actual}"
    CHANNEL_COUNT_MISMATCH = "Channel count mismatch: color model needs {expected}, got {actual}"
    MASK_NOT_SINGLE_CHANNEL = "mask must be a single channel Byte image"
    DEPTH_MISMATCH = "operands must share one depth"

    # Unsupported configuration
    UNSUPPORTED_DEPTH = "Unsupported image depth {depth}"
    FLOAT_ONLY = "operation requires a floating point depth"
    BYTE_ONLY = "operation requires Byte depth"
    NO_CONVERSION_PATH = "No color conversion path from {source} to {target}"
    NO_BITMAP_VIEW = "No zero-copy bitmap view for {color}/{depth}, use to_bitmap()"

    # Lifecycle
    IMAGE_RELEASED = "Image buffer has already been released"

    # ROI errors
    ROI_OUT_OF_BOUNDS = "ROI {roi} is out of image bounds {bounds}"
