"""
Image processing utilities for the frame pipeline.
"""

from pathlib import Path
from typing import Union
from PIL import Image
import io

# Formats Pillow cannot write with an alpha channel
_NO_ALPHA_FORMATS = {'JPEG', 'JPG'}


class ImageUtils:
    """Utility class for common image processing operations."""

    @staticmethod
    def load_image(data: Union[bytes, str, Path, Image.Image]) -> Image.Image:
        """
        Load and fully decode an image from various sources.

        Args:
            data: Image data as bytes, file path, or PIL Image

        Returns:
            PIL Image object with pixel data loaded

        Raises:
            ValueError: If data cannot be loaded as image
        """
        if isinstance(data, Image.Image):
            return data
        elif isinstance(data, bytes):
            try:
                image = Image.open(io.BytesIO(data))
                image.load()
                return image
            except Exception as e:
                raise ValueError(f"Cannot load image from bytes: {e}")
        elif isinstance(data, (str, Path)):
            try:
                image = Image.open(data)
                image.load()
                return image
            except Exception as e:
                raise ValueError(f"Cannot load image from path '{data}': {e}")
        else:
            raise ValueError(f"Unsupported image data type: {type(data)}")

    @staticmethod
    def encode_image(image: Image.Image, format: str = 'PNG', **kwargs) -> bytes:
        """
        Serialize image to bytes in the given format.

        Args:
            image: Image to encode
            format: Pillow format name (PNG, GIF, etc.)
            **kwargs: Additional save parameters

        Returns:
            Encoded image bytes

        Raises:
            ValueError: If the image cannot be written in this format
        """
        save_kwargs = {}

        if format.upper() == 'PNG':
            save_kwargs['compress_level'] = kwargs.pop('compress_level', 6)
        else:
            kwargs.pop('compress_level', None)

        if format.upper() in _NO_ALPHA_FORMATS and image.mode != 'RGB':
            image = image.convert('RGB')

        save_kwargs.update(kwargs)

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=format, **save_kwargs)
        except Exception as e:
            raise ValueError(f"Cannot encode image as {format}: {e}")
        return buffer.getvalue()

    @staticmethod
    def ensure_rgba(image: Image.Image) -> Image.Image:
        """Convert image to RGBA mode if not already."""
        if image.mode != 'RGBA':
            return image.convert('RGBA')
        return image

    @staticmethod
    def mime_type(format: str, default: str = 'image/png') -> str:
        """Get the MIME type Pillow registers for a format."""
        Image.init()
        return Image.MIME.get(format.upper(), default)
