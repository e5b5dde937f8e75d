"""
Local file store for uploaded recipe images.
Files are written to a single directory and served read-only under /uploads.
"""

import logging
import time
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Union

from recipe_catalog.errors import StorageError
from recipe_catalog.services.metrics import timed_upload
from recipe_catalog.services.prometheus_metrics import record_upload_bytes

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


def _basename(filename: str) -> str:
    """Strip any directory parts a client put in the filename."""
    name = PureWindowsPath(PurePosixPath(filename).name).name
    return name or "upload"


def stored_filename(original: str, now_ms: int | None = None) -> str:
    """Name for a stored upload: <epoch-ms>-<original basename>."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{_basename(original)}"


class ImageStore:
    """Writes uploaded images into ``directory``; creates it if missing."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, stored_name: str) -> Path:
        return self.directory / stored_name

    def url_for(self, stored_name: str) -> str:
        return f"{UPLOADS_URL_PREFIX}/{stored_name}"

    def save(self, data: bytes, filename: str) -> str:
        """Write ``data`` and return the stored filename."""
        name = stored_filename(filename)
        try:
            with timed_upload():
                self.path_for(name).write_bytes(data)
        except OSError as e:
            logger.error("Failed to write upload %s: %s", name, e)
            raise StorageError(f"Could not store image: {e.strerror or e}") from e
        record_upload_bytes(len(data))
        logger.info("Stored upload %s (%d bytes)", name, len(data))
        return name
