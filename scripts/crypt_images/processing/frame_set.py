"""
Frame set building: slices one entity's sheet into named image variants.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..catalog.base import EntityDescriptor
from ..utils.image import ImageUtils
from .errors import InvalidInputError
from .extractor import FrameExtractor, SpriteSheet
from .geometry import calculate_frame_geometry
from .resizer import MultiScaleResizer, SIZE_CLASSES

logger = logging.getLogger(__name__)

DEFAULT_TAG = "d"


@dataclass(frozen=True)
class ImageVariant:
    """One encoded size class of one frame."""
    base_name: str
    frame_index: int
    size_tag: str
    extension: str
    format: str
    data: bytes

    @property
    def name(self) -> str:
        """Published name, e.g. ``enemies/bat13m.png``."""
        return f"{self.base_name}{self.frame_index}{self.size_tag}{self.extension}"

    @property
    def content_type(self) -> str:
        return ImageUtils.mime_type(self.format)


class FrameSetBuilder:
    """Turns an entity's sprite sheet into its default, small, medium and large frames."""

    def __init__(self, extractor: Optional[FrameExtractor] = None,
                 resizer: Optional[MultiScaleResizer] = None):
        self.extractor = extractor or FrameExtractor()
        self.resizer = resizer or MultiScaleResizer()

    def build(self, entity: EntityDescriptor) -> List[ImageVariant]:
        """
        Build every variant for an entity.

        Args:
            entity: Entity whose sheet is sliced

        Returns:
            Variants in row-major frame order, d/s/m/l within each frame

        Raises:
            ProcessingError: On the first frame that cannot be produced
        """
        if entity.frame_count is None or entity.frame_count < 1:
            raise InvalidInputError(
                f"frame_count must be at least 1, got {entity.frame_count}",
                source=entity.base_name,
            )

        sheet = self.extractor.load_sheet(entity.sheet_path)
        variants = self.build_sheet(entity.base_name, entity.frame_count, sheet)

        logger.info(f"Built {len(variants)} variants for {entity.base_name}")
        return variants

    def build_sheet(self, base_name: str, frame_count: int,
                    sheet: SpriteSheet) -> List[ImageVariant]:
        """Build variants from an already decoded sheet."""
        geometry = calculate_frame_geometry(sheet.width, sheet.height, frame_count)
        variants = []

        for index, rect in geometry.rects():
            data = self.extractor.extract_bytes(sheet, rect)
            default = ImageVariant(
                base_name=base_name,
                frame_index=index.linear,
                size_tag=DEFAULT_TAG,
                extension=sheet.extension,
                format=sheet.format,
                data=data,
            )
            variants.append(default)

            for size_class in SIZE_CLASSES:
                variants.append(ImageVariant(
                    base_name=base_name,
                    frame_index=index.linear,
                    size_tag=size_class.tag,
                    extension=sheet.extension,
                    format=sheet.format,
                    data=self.resizer.resize(default.data, size_class),
                ))

        return variants
