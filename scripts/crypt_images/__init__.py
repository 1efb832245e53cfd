"""
Sprite frame pipeline for Crypt of the NecroDancer assets.

Slices two-row sprite sheets into per-frame images, produces small, medium
and large variants of every frame, and publishes them to a blob container
under deterministic names.
"""

__version__ = "0.1.0"
__author__ = "toofz"

from .config import PipelineConfig
from .catalog import CatalogAdapter, DataPaths, NecroDancerCatalog, ItemEntity, EnemyEntity
from .processing import FrameSetBuilder, ImageVariant, ProcessingError
from .publishing import Publisher, create_publisher
from .pipeline import ImagePipeline, PipelineError, RunSummary

__all__ = [
    "PipelineConfig",
    "CatalogAdapter",
    "DataPaths",
    "NecroDancerCatalog",
    "ItemEntity",
    "EnemyEntity",
    "FrameSetBuilder",
    "ImageVariant",
    "ProcessingError",
    "Publisher",
    "create_publisher",
    "ImagePipeline",
    "PipelineError",
    "RunSummary",
]
