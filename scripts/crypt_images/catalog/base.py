"""
Entity descriptors and the catalog adapter interface.
Defines what the frame pipeline needs to know about each sprite sheet.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Dict, List, Any, Union


@dataclass(frozen=True)
class DataPaths:
    """Resolves catalog-relative paths against the game's data directory."""
    data_dir: Path
    catalog_file: str = "necrodancer.xml"

    def __post_init__(self):
        object.__setattr__(self, "data_dir", Path(self.data_dir))

    @property
    def catalog_path(self) -> Path:
        return self.data_dir / self.catalog_file

    def item_sheet(self, image_path: str) -> Path:
        """Item images live under the ``items`` directory."""
        return self.data_dir / "items" / image_path

    def enemy_sheet(self, sheet_path: str) -> Path:
        """Enemy sprite sheet paths are relative to the data directory."""
        return self.data_dir / sheet_path


class EntityDescriptor(ABC):
    """Anything the frame set builder can slice: a named two-row sprite sheet."""

    category: ClassVar[str]

    name: str
    sheet_path: Path
    frame_count: int

    @property
    @abstractmethod
    def base_name(self) -> str:
        """Published name prefix, e.g. ``items/food_1``."""
        pass


@dataclass(frozen=True)
class ItemEntity(EntityDescriptor):
    """An item and its image."""
    category: ClassVar[str] = "items"

    name: str
    sheet_path: Path
    frame_count: int = 1

    @property
    def base_name(self) -> str:
        return f"{self.category}/{self.name}"


@dataclass(frozen=True)
class EnemyEntity(EntityDescriptor):
    """An enemy; enemies sharing a name are told apart by their type."""
    category: ClassVar[str] = "enemies"

    name: str
    sheet_path: Path
    frame_count: int = 1
    type: str = ""

    @property
    def base_name(self) -> str:
        return f"{self.category}/{self.name}{self.type}"


class CatalogAdapter(ABC):
    """Abstract source of the entities to process."""

    def __init__(self, paths: DataPaths):
        """Initialize adapter with the data directory context."""
        self.paths = paths

    @abstractmethod
    def get_items(self) -> List[ItemEntity]:
        """Return items in catalog order."""
        pass

    @abstractmethod
    def get_enemies(self) -> List[EnemyEntity]:
        """Return enemies in catalog order."""
        pass

    def get_entities(self) -> List[EntityDescriptor]:
        """Return items followed by enemies."""
        return [*self.get_items(), *self.get_enemies()]

    def get_catalog_info(self) -> Dict[str, Any]:
        """
        Get information about this catalog.

        Returns:
            Dictionary with catalog metadata
        """
        return {
            "name": self.__class__.__name__,
            "data_dir": str(self.paths.data_dir),
            "catalog": str(self.paths.catalog_path),
        }


class CatalogError(Exception):
    """Exception raised when the catalog cannot be read."""

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        super().__init__(message)
        self.message = message
        self.path = path
