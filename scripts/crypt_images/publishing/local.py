"""
Publisher that writes variants into a local directory tree.
"""


from pathlib import Path
from typing import Dict, Any, Union


from .base import Publisher, PublishError, DEFAULT_CONTENT_TYPE, DEFAULT_CACHE_CONTROL


class LocalDirectoryPublisher(Publisher):
    """Stores each blob as ``<root>/<name>``; content type and caching are ignored."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def ensure_container(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def put(self, name: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE,
            cache_control: str = DEFAULT_CACHE_CONTROL) -> None:
        path = (self.root / name).resolve()
        if self.root.resolve() not in path.parents:
            raise PublishError(f"Blob name escapes output directory: {name}", name)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise PublishError(f"Cannot write {path}: {e}", name) from e

    def get_publisher_info(self) -> Dict[str, Any]:
        return {"name": self.__class__.__name__, "root": str(self.root)}
