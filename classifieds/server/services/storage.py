"""
Listing image storage.

Images are written under ``<storage root>/<user_id>/<epoch_ms>-<random>.<ext>``
and served by the static mount at ``media_url``. Deleting a listing removes
its files; a failed removal is logged and never aborts the delete.
"""

from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from classifieds.core.errors import ValidationFailedError
from classifieds.core.logging_config import get_logger
from classifieds.server.core.config import settings

logger = get_logger(__name__)

# stored extension per accepted content type; the client filename is ignored
_EXTENSIONS = {"image/jpeg": "jpg", "image/jpg": "jpg", "image/png": "png", "image/webp": "webp"}
ALLOWED_CONTENT_TYPES = set(_EXTENSIONS)

_ALPHABET = string.ascii_lowercase + string.digits


class StorageError(Exception):
    """Raised when the storage backend cannot complete an operation."""


@dataclass(slots=True)
class StoredImage:
    """Location of a stored image."""

    path: str
    url: str


class ImageStorage:
    """Local filesystem storage for listing images."""

    def __init__(self, root: str | Path, media_url: str, max_bytes: int) -> None:
        self.root = Path(root).resolve()
        self.media_url = media_url.rstrip("/")
        self.max_bytes = max_bytes

    def public_url(self, path: str) -> str:
        return f"{self.media_url}/{path}"

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root not in target.parents:
            raise StorageError(f"Path escapes storage root: {path}")
        return target

    async def save_listing_image(self, user_id: str, upload: UploadFile) -> StoredImage:
        """Validate and store an uploaded listing image.

        Args:
            user_id: Owner of the image, used as the directory name
            upload: Uploaded file

        Returns:
            Storage path and public URL of the image

        Raises:
            ValidationFailedError: The file is missing, too large or not an image
        """
        if upload is None or not upload.filename:
            raise ValidationFailedError("Aucun fichier fourni")

        data = await upload.read()
        if len(data) > self.max_bytes:
            raise ValidationFailedError("Le fichier doit faire moins de 5MB")
        if upload.content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationFailedError("Format de fichier non supporté (JPG, PNG, WEBP uniquement)")

        extension = _EXTENSIONS[upload.content_type]
        random_part = "".join(secrets.choice(_ALPHABET) for _ in range(6))
        path = f"{user_id}/{int(time.time() * 1000)}-{random_part}.{extension}"

        await run_in_threadpool(self._write, path, data)
        logger.info(f"Stored listing image {path} ({len(data)} bytes)")
        return StoredImage(path=path, url=self.public_url(path))

    def _write(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def remove_listing_images(self, owner_id: str, urls: Iterable[str]) -> List[str]:
        """Delete the files behind a listing's image URLs.

        Returns:
            Storage paths that were removed
        """
        removed: List[str] = []
        for url in urls or []:
            name = url.rstrip("/").rsplit("/", 1)[-1]
            if not name:
                continue
            path = f"{owner_id}/{name}"
            try:
                if await run_in_threadpool(self._unlink, path):
                    removed.append(path)
            except (OSError, StorageError) as exc:
                logger.error(f"Error deleting image {path}: {exc}")
        return removed

    def _unlink(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.exists():
            return False
        target.unlink()
        return True


_storage: ImageStorage | None = None


def get_storage() -> ImageStorage:
    """Dependency returning the process-wide image storage."""
    global _storage
    if _storage is None:
        config = settings.storage
        _storage = ImageStorage(config.root, config.media_url, config.max_upload_bytes)
    return _storage
