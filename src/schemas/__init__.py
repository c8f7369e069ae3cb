"""
Schemas Package

Pydantic models for the serialized forms of images.
"""

from .image import ImageRecord, RoiBounds

__all__ = ["ImageRecord", "RoiBounds"]
