"""
Abstract base class for publishers.
Defines the interface the pipeline uses to store finished image variants.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any

DEFAULT_CONTENT_TYPE = "image/png"
DEFAULT_CACHE_CONTROL = "max-age=604800"


class Publisher(ABC):
    """Abstract base class for content stores that accept named blobs."""

    @abstractmethod
    def put(self, name: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE,
            cache_control: str = DEFAULT_CACHE_CONTROL) -> None:
        """
        Store ``data`` under ``name``, overwriting any existing blob.

        Args:
            name: Blob name, e.g. ``items/food_10d.png``
            data: Blob contents
            content_type: Content type to serve the blob with
            cache_control: Cache-Control value to serve the blob with

        Raises:
            PublishError: If the blob cannot be stored
        """
        pass

    def ensure_container(self) -> None:
        """Create the destination if the store needs it. No-op by default."""

    def close(self) -> None:
        """Release any held connections."""

    def get_publisher_info(self) -> Dict[str, Any]:
        return {"name": self.__class__.__name__}


class PublishError(Exception):
    """Base exception for publish errors."""

    def __init__(self, message: str, name: str = "", recoverable: bool = False):
        super().__init__(message)
        self.name = name
        self.recoverable = recoverable


class NetworkError(PublishError):
    """Exception raised for network-related errors."""

    def __init__(self, message: str, name: str = ""):
        super().__init__(f"Network error: {message}", name, recoverable=True)
