"""
Multi-scale resizing of extracted frames.

Frames are scaled to fit a square canvas while keeping their aspect ratio and
centered, leaving the uncovered border transparent. Small and medium variants
never enlarge a frame so pixel art stays crisp; the large variant scales small
sprites up to a consistent tile size.
"""

import sys
from dataclasses import dataclass
from typing import Tuple, Union
from PIL import Image, ImageOps

from ..utils.image import ImageUtils
from .errors import DecodeError, EncodeError, InvalidInputError


UNBOUNDED_SCALE = sys.float_info.max
MIN_SCALE = sys.float_info.min

# Transparent pixels added around a frame before sampling
EDGE_PADDING = 1


@dataclass(frozen=True)
class SizeClass:
    """Target canvas and scale cap for one variant size."""
    tag: str
    size: Tuple[int, int]
    max_scale: float = 1.0


SMALL = SizeClass("s", (24, 24), 1.0)
MEDIUM = SizeClass("m", (36, 36), 1.0)
LARGE = SizeClass("l", (56, 56), UNBOUNDED_SCALE)

SIZE_CLASSES = (SMALL, MEDIUM, LARGE)


@dataclass(frozen=True)
class Placement:
    """Where a scaled frame lands on its canvas. Offsets may be fractional."""
    scale: float
    dest_width: float
    dest_height: float
    offset_x: float
    offset_y: float


def compute_placement(source_size: Tuple[int, int], target_size: Tuple[int, int],
                      max_scale: float = 1.0) -> Placement:
    """
    Compute the aspect-preserving, centered placement of a frame.

    Args:
        source_size: Frame (width, height)
        target_size: Canvas (width, height)
        max_scale: Upper bound on the scale factor; 1.0 forbids upscaling

    Returns:
        Placement of the scaled frame on the canvas

    Raises:
        InvalidInputError: If the frame has no area
    """
    width, height = source_size
    target_width, target_height = target_size

    if width < 1 or height < 1:
        raise InvalidInputError(f"Cannot place a {width}x{height} frame")

    scale_x = target_width / width
    scale_y = target_height / height
    scale = min(scale_x, scale_y, max_scale)
    scale = max(scale, MIN_SCALE)

    dest_width = width * scale
    dest_height = height * scale

    return Placement(
        scale=scale,
        dest_width=dest_width,
        dest_height=dest_height,
        offset_x=(target_width - dest_width) / 2,
        offset_y=(target_height - dest_height) / 2,
    )


class MultiScaleResizer:
    """Produces the small, medium and large variants of a frame."""

    def __init__(self, compression_level: int = 6):
        self.compression_level = compression_level

    def resize_image(self, image: Image.Image, target_size: Tuple[int, int],
                     max_scale: float = 1.0) -> Image.Image:
        """
        Render ``image`` onto a transparent canvas of ``target_size``.

        Sampling is bilinear on premultiplied alpha so transparent pixels do
        not bleed their color into the sprite's edges. The source gets a
        transparent border, so a frame placed at a fractional offset blends
        its outermost pixels with transparency on every side.
        """
        placement = compute_placement(image.size, target_size, max_scale)

        inverse = 1.0 / placement.scale
        # Affine data maps canvas coordinates back into the padded frame
        data = (
            inverse, 0.0, EDGE_PADDING - placement.offset_x * inverse,
            0.0, inverse, EDGE_PADDING - placement.offset_y * inverse,
        )

        source = ImageUtils.ensure_rgba(image).convert('RGBa')
        source = ImageOps.expand(source, border=EDGE_PADDING, fill=(0, 0, 0, 0))
        canvas = source.transform(
            target_size,
            Image.Transform.AFFINE,
            data,
            resample=Image.Resampling.BILINEAR,
            fillcolor=(0, 0, 0, 0),
        )
        return canvas.convert('RGBA')

    def resize(self, data: Union[bytes, Image.Image], size_class: SizeClass) -> bytes:
        """
        Decode a frame buffer, resize it and re-encode it in its own format.

        Args:
            data: Encoded frame bytes
            size_class: Target canvas and scale cap

        Returns:
            Encoded variant bytes

        Raises:
            DecodeError: If the buffer is not an image
            EncodeError: If the canvas cannot be serialized
        """
        try:
            image = ImageUtils.load_image(data)
        except ValueError as e:
            raise DecodeError(str(e)) from e

        format = image.format or 'PNG'
        canvas = self.resize_image(image, size_class.size, size_class.max_scale)

        try:
            return ImageUtils.encode_image(
                canvas, format, compress_level=self.compression_level
            )
        except ValueError as e:
            raise EncodeError(str(e)) from e
