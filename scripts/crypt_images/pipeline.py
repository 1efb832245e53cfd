"""
Frame pipeline coordinator.
Reads the catalog, builds every entity's frame set and publishes the variants.
"""

import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple

from .config import PipelineConfig
from .catalog.base import CatalogAdapter, EntityDescriptor
from .processing.extractor import FrameExtractor
from .processing.resizer import MultiScaleResizer
from .processing.frame_set import FrameSetBuilder, ImageVariant
from .publishing.base import Publisher


@dataclass
class RunSummary:
    """Outcome of a pipeline run."""
    entities_total: int = 0
    entities_built: int = 0
    variants_published: int = 0
    published_names: List[str] = field(default_factory=list)
    failed_entities: Dict[str, str] = field(default_factory=dict)
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    @property
    def duration(self) -> float:
        if self.start_time is None:
            return 0.0
        return (self.end_time or time.time()) - self.start_time


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    def __init__(self, message: str, summary: Optional[RunSummary] = None):
        super().__init__(message)
        self.summary = summary


class EntityProcessingError(PipelineError):
    """An entity's frame set could not be built."""

    def __init__(self, entity: EntityDescriptor, error: Exception,
                 summary: Optional[RunSummary] = None):
        super().__init__(f"Failed to build frames for {entity.base_name}: {error}", summary)
        self.entity = entity
        self.error = error


class ImagePipeline:
    """
    Coordinates catalog reading, frame set building and publishing.

    Frame sets are built on a worker pool, one task per entity. Every variant
    is then published as its own task on a second, bounded pool. The run waits
    for all publishes and fails with the first error encountered.
    """

    def __init__(self, config: PipelineConfig, catalog: CatalogAdapter, publisher: Publisher,
                 builder: Optional[FrameSetBuilder] = None):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration
            catalog: Source of entities
            publisher: Destination for variants
            builder: Frame set builder; one is created from config if omitted
        """
        self.config = config
        self.catalog = catalog
        self.publisher = publisher
        self.builder = builder or FrameSetBuilder(
            FrameExtractor(config.compression_level),
            MultiScaleResizer(config.compression_level),
        )
        self.logger = self._setup_logging()

    def _setup_logging(self) -> logging.Logger:
        """Set up logging for the pipeline."""
        logger = logging.getLogger("crypt_images")
        logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def run(self) -> RunSummary:
        """
        Run the pipeline over the whole catalog.

        Returns:
            Summary of the run

        Raises:
            EntityProcessingError: If an entity's frames could not be built
            PipelineError: If any variant could not be published
        """
        summary = RunSummary(start_time=time.time())
        self.logger.info("Starting frame pipeline")

        entities = self.catalog.get_entities()
        summary.entities_total = len(entities)
        self.logger.info(f"Catalog lists {len(entities)} entities")

        variants, failures = self.build_frame_sets(entities)
        summary.entities_built = len(entities) - len(failures)
        summary.failed_entities = {
            entity.base_name: str(error) for entity, error in failures
        }

        if failures and self.config.fail_fast:
            entity, error = failures[0]
            summary.end_time = time.time()
            self.logger.error(f"Aborting before publishing: {entity.base_name} failed: {error}")
            raise EntityProcessingError(entity, error, summary) from error

        if self.config.create_container:
            self.publisher.ensure_container()

        self.publish_all(variants, summary)

        summary.end_time = time.time()

        if failures:
            entity, error = failures[0]
            self.logger.error(f"{len(failures)} entities failed, first: {entity.base_name}")
            raise EntityProcessingError(entity, error, summary) from error

        self.logger.info(
            f"Published {summary.variants_published} variants for "
            f"{summary.entities_built} entities in {summary.duration:.2f}s"
        )
        return summary

    def build_frame_sets(self, entities: List[EntityDescriptor]
                         ) -> Tuple[List[ImageVariant], List[Tuple[EntityDescriptor, Exception]]]:
        """
        Build frame sets for all entities concurrently.

        Returns:
            Variants of the entities that succeeded, in catalog order, and the
            failed entities with their errors, also in catalog order
        """
        results: List[Optional[List[ImageVariant]]] = [None] * len(entities)
        errors: List[Optional[Exception]] = [None] * len(entities)

        with ThreadPoolExecutor(max_workers=self.config.max_build_workers) as executor:
            futures = {
                executor.submit(self.builder.build, entity): position
                for position, entity in enumerate(entities)
            }
            for future in as_completed(futures):
                position = futures[future]
                try:
                    results[position] = future.result()
                except Exception as e:
                    self.logger.error(f"Failed to build {entities[position].base_name}: {e}")
                    errors[position] = e

        variants = [variant for result in results if result for variant in result]
        failures = [
            (entity, error) for entity, error in zip(entities, errors) if error is not None
        ]
        return variants, failures

    def publish_all(self, variants: List[ImageVariant], summary: RunSummary) -> None:
        """
        Publish every variant concurrently and wait for all of them.

        Raises:
            PipelineError: Chained to the first publish failure
        """
        first_error: Optional[Exception] = None
        failed = 0

        with ThreadPoolExecutor(max_workers=self.config.max_publish_workers) as executor:
            futures = {
                executor.submit(self._publish, variant): variant for variant in variants
            }
            for future in as_completed(futures):
                variant = futures[future]
                try:
                    future.result()
                except Exception as e:
                    failed += 1
                    self.logger.error(f"Failed to upload {variant.name}: {e}")
                    if first_error is None:
                        first_error = e
                    continue
                summary.variants_published += 1
                summary.published_names.append(variant.name)

        if first_error is not None:
            summary.end_time = time.time()
            raise PipelineError(
                f"{failed} of {len(variants)} uploads failed: {first_error}", summary
            ) from first_error

    def _publish(self, variant: ImageVariant) -> None:
        self.publisher.put(
            variant.name,
            variant.data,
            content_type=self._content_type(variant),
            cache_control=self.config.cache_control,
        )
        self.logger.info(f"Uploaded {variant.name}.")

    def _content_type(self, variant: ImageVariant) -> str:
        # PNG sheets keep the configured type; other encodings get their own
        if variant.format.upper() == 'PNG':
            return self.config.content_type
        return variant.content_type

    def get_pipeline_info(self) -> Dict[str, Any]:
        return {
            "catalog": self.catalog.get_catalog_info(),
            "publisher": self.publisher.get_publisher_info(),
            "build_workers": self.config.max_build_workers,
            "publish_workers": self.config.max_publish_workers,
            "fail_fast": self.config.fail_fast,
        }
