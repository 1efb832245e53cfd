"""
Catalog adapters supplying the sprite sheets to process.
"""

from .base import (
    CatalogAdapter, CatalogError, DataPaths,
    EntityDescriptor, ItemEntity, EnemyEntity
)
from .necrodancer import NecroDancerCatalog

__all__ = [
    "CatalogAdapter",
    "CatalogError",
    "DataPaths",
    "EntityDescriptor",
    "ItemEntity",
    "EnemyEntity",
    "NecroDancerCatalog",
]
