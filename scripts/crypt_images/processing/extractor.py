"""
Frame extraction from decoded sprite sheets.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union
from PIL import Image

from ..utils.image import ImageUtils
from .errors import SourceUnreadableError, OutOfBoundsError, EncodeError, InvalidInputError
from .geometry import FrameRect

logger = logging.getLogger(__name__)


@dataclass
class SpriteSheet:
    """A decoded sprite sheet and the encoding it was stored in."""
    image: Image.Image
    format: str
    path: Path

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def extension(self) -> str:
        """File extension of the source, including the leading dot."""
        return self.path.suffix


class FrameExtractor:
    """Crops single frames out of a sprite sheet."""

    def __init__(self, compression_level: int = 6):
        self.compression_level = compression_level

    def load_sheet(self, path: Union[str, Path]) -> SpriteSheet:
        """
        Decode a sprite sheet from disk.

        Args:
            path: Resolved path of the sheet file

        Returns:
            SpriteSheet with pixel data loaded

        Raises:
            InvalidInputError: If no path is given
            SourceUnreadableError: If the file is missing or not an image
        """
        if path is None:
            raise InvalidInputError("sheet path is required")

        path = Path(path)
        try:
            image = ImageUtils.load_image(path)
        except ValueError as e:
            raise SourceUnreadableError(str(e), source=str(path)) from e

        logger.debug(f"Loaded sheet {path} ({image.width}x{image.height}, {image.format})")
        return SpriteSheet(image=image, format=image.format or 'PNG', path=path)

    def extract(self, sheet: SpriteSheet, rect: FrameRect) -> Image.Image:
        """
        Copy the pixels under ``rect`` into a new RGBA image.

        Raises:
            OutOfBoundsError: If the rectangle exceeds the sheet
        """
        if (rect.x < 0 or rect.y < 0
                or rect.x + rect.width > sheet.width
                or rect.y + rect.height > sheet.height):
            raise OutOfBoundsError(
                f"Frame {rect} exceeds sheet bounds {sheet.width}x{sheet.height}",
                source=str(sheet.path),
            )

        frame = sheet.image.crop(rect.box)
        return ImageUtils.ensure_rgba(frame)

    def extract_bytes(self, sheet: SpriteSheet, rect: FrameRect) -> bytes:
        """
        Crop a frame and encode it in the sheet's own format.

        Raises:
            OutOfBoundsError: If the rectangle exceeds the sheet
            EncodeError: If the frame cannot be serialized
        """
        frame = self.extract(sheet, rect)
        try:
            return ImageUtils.encode_image(
                frame, sheet.format, compress_level=self.compression_level
            )
        except ValueError as e:
            raise EncodeError(str(e), source=str(sheet.path)) from e
