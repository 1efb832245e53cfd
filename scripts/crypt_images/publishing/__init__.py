"""
Publishers that store finished image variants.
"""

from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from .base import (
    Publisher, PublishError, NetworkError,
    DEFAULT_CONTENT_TYPE, DEFAULT_CACHE_CONTROL
)
from .blob import BlobStorePublisher
from .local import LocalDirectoryPublisher


def create_publisher(store_url: str, timeout: float = 30.0, pool_size: int = 16,
                     public_access: Optional[str] = "blob") -> Publisher:
    """
    Create a publisher for a store location.

    ``http(s)://`` URLs name a blob container; ``file://`` URLs and plain
    paths name a local output directory.
    """
    if not store_url:
        raise ValueError("A store URL is required")

    scheme = urlsplit(store_url).scheme
    if scheme in ("http", "https"):
        return BlobStorePublisher(
            store_url, timeout=timeout, pool_size=pool_size, public_access=public_access
        )
    if scheme == "file":
        return LocalDirectoryPublisher(Path(urlsplit(store_url).path))
    return LocalDirectoryPublisher(Path(store_url))


__all__ = [
    "Publisher",
    "PublishError",
    "NetworkError",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_CACHE_CONTROL",
    "BlobStorePublisher",
    "LocalDirectoryPublisher",
    "create_publisher",
]
