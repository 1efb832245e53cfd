"""
Tests for frame set building and variant naming.
"""

import io
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch
from PIL import Image

from ..catalog.base import ItemEntity, EnemyEntity
from ..processing.frame_set import FrameSetBuilder, ImageVariant
from ..processing.errors import InvalidInputError, SourceUnreadableError


class TestImageVariant(unittest.TestCase):
    """Test cases for ImageVariant naming."""

    def test_enemy_variant_name(self):
        entity = EnemyEntity("Bat", Path("entities/bat.png"), 4, "A")
        variant = ImageVariant(entity.base_name, 3, "m", ".png", "PNG", b"")

        self.assertEqual(variant.name, "enemies/BatA3m.png")

    def test_item_variant_name(self):
        entity = ItemEntity("food_1", Path("items/food_1.png"))
        variant = ImageVariant(entity.base_name, 0, "d", ".png", "PNG", b"")

        self.assertEqual(variant.name, "items/food_10d.png")

    def test_content_type(self):
        self.assertEqual(ImageVariant("items/a", 0, "d", ".png", "PNG", b"").content_type, "image/png")
        self.assertEqual(ImageVariant("items/a", 0, "d", ".jpg", "JPEG", b"").content_type, "image/jpeg")

    def test_variant_is_immutable(self):
        variant = ImageVariant("items/a", 0, "d", ".png", "PNG", b"")
        with self.assertRaises(AttributeError):
            variant.size_tag = "s"


class TestFrameSetBuilder(unittest.TestCase):
    """Test cases for FrameSetBuilder."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.builder = FrameSetBuilder()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def create_test_sheet(self, size: tuple[int, int] = (128, 64), frame_count: int = 4,
                          name: str = "bat.png") -> Path:
        """Create a sheet with one opaque color per frame; the shadow row is gray."""
        width, height = size
        frame_width = width // frame_count
        frame_height = height // 2
        image = Image.new('RGBA', size, (0, 0, 0, 0))
        for column in range(frame_count):
            shade = 40 * (column + 1)
            image.paste((shade, 0, 255 - shade, 255),
                        (column * frame_width, 0, (column + 1) * frame_width, frame_height))
            image.paste((0, 0, 0, 96),
                        (column * frame_width, frame_height, (column + 1) * frame_width, height))

        path = self.temp_dir / name
        image.save(path)
        return path

    def test_four_frame_sheet(self):
        """Test a 128x64 sheet with four frames yields 32 variants."""
        entity = EnemyEntity("bat", self.create_test_sheet(), 4, "1")

        variants = self.builder.build(entity)

        self.assertEqual(len(variants), 32)
        self.assertEqual(len({variant.name for variant in variants}), 32)
        self.assertEqual(
            [variant.name for variant in variants[:8]],
            [
                "enemies/bat10d.png", "enemies/bat10s.png", "enemies/bat10m.png", "enemies/bat10l.png",
                "enemies/bat11d.png", "enemies/bat11s.png", "enemies/bat11m.png", "enemies/bat11l.png",
            ]
        )
        self.assertEqual(variants[-1].name, "enemies/bat17l.png")

    def test_variant_order(self):
        """Test frames run row-major with d/s/m/l inside each frame."""
        entity = ItemEntity("torch", self.create_test_sheet((48, 32), 3, "torch.png"), 3)

        variants = self.builder.build(entity)

        self.assertEqual([variant.frame_index for variant in variants[::4]], [0, 1, 2, 3, 4, 5])
        self.assertEqual([variant.size_tag for variant in variants[:4]], ["d", "s", "m", "l"])

    def test_variant_sizes(self):
        entity = ItemEntity("bat", self.create_test_sheet(), 4)

        variants = self.builder.build(entity)
        sizes = {
            variant.size_tag: Image.open(io.BytesIO(variant.data)).size
            for variant in variants[:4]
        }

        self.assertEqual(sizes, {"d": (32, 32), "s": (24, 24), "m": (36, 36), "l": (56, 56)})

    def test_default_variant_is_crop(self):
        """Test the default variant holds the frame's own pixels."""
        entity = ItemEntity("bat", self.create_test_sheet(), 4)

        variants = self.builder.build(entity)
        default_2 = Image.open(io.BytesIO(variants[2 * 4].data)).convert('RGBA')
        shadow_5 = Image.open(io.BytesIO(variants[5 * 4].data)).convert('RGBA')

        self.assertEqual(default_2.getpixel((10, 10)), (120, 0, 135, 255))
        self.assertEqual(shadow_5.getpixel((10, 10)), (0, 0, 0, 96))

    def test_format_and_extension(self):
        entity = ItemEntity("bat", self.create_test_sheet(), 4)

        for variant in self.builder.build(entity):
            self.assertEqual(variant.extension, ".png")
            self.assertEqual(variant.format, "PNG")
            self.assertEqual(Image.open(io.BytesIO(variant.data)).format, "PNG")

    def test_build_is_deterministic(self):
        entity = EnemyEntity("bat", self.create_test_sheet(), 4, "2")

        first = self.builder.build(entity)
        second = self.builder.build(entity)

        self.assertEqual(first, second)

    def test_jpeg_sheet_keeps_encoding(self):
        path = self.temp_dir / "chest.jpg"
        Image.new('RGB', (20, 20), (200, 150, 0)).save(path)
        entity = ItemEntity("chest", path, 1)

        variants = self.builder.build(entity)

        self.assertEqual(variants[0].name, "items/chest0d.jpg")
        self.assertEqual(len(variants), 8)
        for variant in variants:
            self.assertEqual(Image.open(io.BytesIO(variant.data)).format, "JPEG")

    def test_zero_frame_count(self):
        """Test an invalid frame count fails before the sheet is read."""
        entity = ItemEntity("bat", self.create_test_sheet(), 0)

        with patch.object(self.builder.extractor, 'load_sheet') as load_sheet:
            with self.assertRaises(InvalidInputError):
                self.builder.build(entity)

        load_sheet.assert_not_called()

    def test_missing_sheet(self):
        entity = ItemEntity("ghost", self.temp_dir / "ghost.png", 2)

        with self.assertRaises(SourceUnreadableError):
            self.builder.build(entity)

    def test_sheet_too_narrow(self):
        entity = ItemEntity("sliver", self.create_test_sheet((4, 8), 1, "sliver.png"), 8)

        with self.assertRaises(InvalidInputError):
            self.builder.build(entity)


if __name__ == '__main__':
    unittest.main()
