"""
Constants and configuration values for the image core.
Centralizes all magic numbers and configuration defaults.
"""


# Image Buffer Constants
class ImageConstants:
    """Constants related to pixel buffers and image lifecycle."""

    # Buffer layout
    DEFAULT_ROW_ALIGNMENT = 4  # bytes, same as IplImage widthStep alignment
    MIN_ROW_ALIGNMENT = 1
    MAX_ROW_ALIGNMENT = 64
    MAX_CHANNELS = 4

    # Default construction size
    DEFAULT_WIDTH = 1
    DEFAULT_HEIGHT = 1

    # Resampling
    DEFAULT_INTERPOLATION = "linear"

    # Morphology (erode / dilate) structuring element
    MORPH_KERNEL_SIZE = 3


# Compression Constants
class CompressionConstants:
    """Constants for the compressed binary representation."""

    BEST_COMPRESSION = 9  # zlib.Z_BEST_COMPRESSION, used when encoding
    MIN_LEVEL = -1
    MAX_LEVEL = 9


# Conversion Constants
class ConversionConstants:
    """Constants for color and depth conversion."""

    # Color model used for two-step color conversion
    INTERMEDIATE_COLOR = "Bgr"

    # Float -> Byte auto-contrast stretch spans this many output levels
    AUTO_SCALE_RANGE = 256.0


# Codec Constants
class CodecConstants:
    """Constants for encoded image files."""

    DEFAULT_FORMAT = ".png"
    JPEG_QUALITY = 95


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
