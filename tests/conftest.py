"""
Pytest configuration and fixtures for image core tests
"""

import cv2
import numpy as np
import pytest

from config import get_settings
from core.image import Bgr, Byte, Gray, Image, Single


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment changes in a test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_image():
    """Create a test BGR array for testing"""
    image = np.zeros((48, 64, 3), dtype=np.uint8)
    # Add some content
    cv2.rectangle(image, (10, 10), (30, 30), (255, 255, 255), -1)
    cv2.circle(image, (45, 35), 8, (128, 128, 128), -1)
    return image


@pytest.fixture
def gray_image():
    """4x4 Gray/Byte image filled with 10"""
    image = Image(Gray, Byte, 4, 4, Gray(10))
    yield image
    image.release()


@pytest.fixture
def bgr_image():
    """5x3 Bgr/Byte image whose pixels are all different"""
    values = np.arange(5 * 3 * 3, dtype=np.uint8).reshape(3, 5, 3)
    image = Image.from_array(values, Bgr)
    yield image
    image.release()


@pytest.fixture
def gradient_image():
    """3x2 Gray/Single image holding 0.0 .. 5.0"""
    values = np.arange(6, dtype=np.float32).reshape(2, 3)
    image = Image.from_array(values, Gray)
    assert image.depth is Single
    yield image
    image.release()
