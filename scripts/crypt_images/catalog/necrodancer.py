"""
Catalog adapter for the game's ``necrodancer.xml`` data file.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from .base import CatalogAdapter, CatalogError, DataPaths, ItemEntity, EnemyEntity

logger = logging.getLogger(__name__)


class NecroDancerCatalog(CatalogAdapter):
    """
    Reads items and enemies from ``necrodancer.xml``.

    Each child of ``<items>`` is one item, named by its tag, with its image in
    the ``imageFile`` attribute. Each child of ``<enemies>`` is one enemy whose
    ``<spritesheet>`` element holds the sheet path as text.
    """

    def __init__(self, paths: DataPaths):
        super().__init__(paths)
        self._root: Optional[ET.Element] = None

    def _load(self) -> ET.Element:
        if self._root is None:
            path = self.paths.catalog_path
            if not path.exists():
                raise CatalogError(f"Catalog file not found: {path}", path)
            try:
                self._root = ET.parse(path).getroot()
            except ET.ParseError as e:
                raise CatalogError(f"Cannot parse catalog {path}: {e}", path) from e
            logger.info(f"Loaded catalog {path}")
        return self._root

    def get_items(self) -> List[ItemEntity]:
        items = []
        section = self._load().find("items")
        if section is None:
            return items

        for element in section:
            image_file = element.get("imageFile")
            if not image_file:
                logger.debug(f"Item {element.tag} has no image, skipping")
                continue
            items.append(ItemEntity(
                name=element.tag,
                sheet_path=self.paths.item_sheet(image_file),
                frame_count=self._frame_count(element, element.tag),
            ))

        return items

    def get_enemies(self) -> List[EnemyEntity]:
        enemies = []
        section = self._load().find("enemies")
        if section is None:
            return enemies

        for element in section:
            sheet = element.find("spritesheet")
            if sheet is None or not (sheet.text or "").strip():
                logger.debug(f"Enemy {element.tag} has no sprite sheet, skipping")
                continue
            enemies.append(EnemyEntity(
                name=element.tag,
                sheet_path=self.paths.enemy_sheet(sheet.text.strip()),
                frame_count=self._frame_count(sheet, element.tag),
                type=element.get("type", ""),
            ))

        return enemies

    def _frame_count(self, element: ET.Element, name: str) -> int:
        value = element.get("numFrames", "1")
        try:
            return int(value)
        except ValueError as e:
            raise CatalogError(
                f"Invalid numFrames '{value}' for {name}", self.paths.catalog_path
            ) from e
