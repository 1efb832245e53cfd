"""
Publisher for HTTP blob containers addressed by a container URL.

The URL may carry a shared access signature as its query string, e.g.
``https://account.blob.core.windows.net/crypt?sv=...&sig=...``.
"""

import logging
from typing import Dict, Any, Optional
from urllib.parse import urlsplit, urlunsplit, parse_qsl, quote
import requests
from requests.adapters import HTTPAdapter

from .base import (
    Publisher, PublishError, NetworkError,
    DEFAULT_CONTENT_TYPE, DEFAULT_CACHE_CONTROL
)

logger = logging.getLogger(__name__)

API_VERSION = "2020-10-02"


class BlobStorePublisher(Publisher):
    """Uploads variants as block blobs into a single container."""

    def __init__(self, container_url: str, timeout: float = 30.0, pool_size: int = 16,
                 public_access: Optional[str] = "blob",
                 session: Optional[requests.Session] = None):
        """
        Initialize the publisher.

        Args:
            container_url: Container URL, optionally with a SAS query string
            timeout: Per-request timeout in seconds
            pool_size: Connections kept open for concurrent uploads
            public_access: Public access level set when creating the container
            session: Session to use instead of a new one
        """
        parts = urlsplit(container_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Invalid container URL: {container_url}")

        self.container_url = urlunsplit((parts.scheme, parts.netloc, parts.path.rstrip("/"), "", ""))
        self.sas_params: Dict[str, str] = dict(parse_qsl(parts.query))
        self.timeout = timeout
        self.public_access = public_access

        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'CryptImages/1.0',
            'x-ms-version': API_VERSION,
        })
        adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def blob_url(self, name: str) -> str:
        return f"{self.container_url}/{quote(name)}"

    def ensure_container(self) -> None:
        """
        Create the container, treating "already exists" as success.

        Raises:
            PublishError: If the container cannot be created
        """
        params = {**self.sas_params, "restype": "container"}
        headers = {}
        if self.public_access:
            headers["x-ms-blob-public-access"] = self.public_access

        try:
            response = self.session.put(
                self.container_url, params=params, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(f"Cannot create container: {e}") from e

        if response.status_code == 409:
            logger.debug(f"Container {self.container_url} already exists")
            return

        try:
            response.raise_for_status()
        except requests.RequestException as e:
            raise PublishError(f"Cannot create container: {e}") from e

        logger.info(f"Created container {self.container_url}")

    def put(self, name: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE,
            cache_control: str = DEFAULT_CACHE_CONTROL) -> None:
        headers = {
            "x-ms-blob-type": "BlockBlob",
            "Content-Type": content_type,
            "x-ms-blob-content-type": content_type,
            "x-ms-blob-cache-control": cache_control,
        }

        try:
            response = self.session.put(
                self.blob_url(name),
                params=self.sas_params,
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            raise PublishError(f"Upload of {name} failed: {e}", name) from e
        except requests.RequestException as e:
            raise NetworkError(f"Upload of {name} failed: {e}", name) from e

    def close(self) -> None:
        self.session.close()

    def get_publisher_info(self) -> Dict[str, Any]:
        return {
            "name": self.__class__.__name__,
            "container": self.container_url,
            "signed": bool(self.sas_params),
        }
