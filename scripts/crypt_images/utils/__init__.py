"""
Utility modules for image encoding and decoding.
"""

from .image import ImageUtils

__all__ = [
    "ImageUtils",
]
