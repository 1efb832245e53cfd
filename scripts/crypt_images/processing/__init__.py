"""
Sprite sheet processing: frame geometry, extraction, resizing and frame sets.
"""

from .errors import (
    ProcessingError,
    InvalidInputError,
    SourceUnreadableError,
    DecodeError,
    OutOfBoundsError,
    EncodeError
)
from .geometry import FrameRect, FrameIndex, FrameGeometry, calculate_frame_geometry
from .extractor import FrameExtractor, SpriteSheet
from .resizer import (
    MultiScaleResizer,
    SizeClass,
    Placement,
    compute_placement,
    SIZE_CLASSES,
    SMALL,
    MEDIUM,
    LARGE
)
from .frame_set import FrameSetBuilder, ImageVariant

__all__ = [
    "ProcessingError",
    "InvalidInputError",
    "SourceUnreadableError",
    "DecodeError",
    "OutOfBoundsError",
    "EncodeError",
    "FrameRect",
    "FrameIndex",
    "FrameGeometry",
    "calculate_frame_geometry",
    "FrameExtractor",
    "SpriteSheet",
    "MultiScaleResizer",
    "SizeClass",
    "Placement",
    "compute_placement",
    "SIZE_CLASSES",
    "SMALL",
    "MEDIUM",
    "LARGE",
    "FrameSetBuilder",
    "ImageVariant",
]
