"""File store for respondent uploads (photo/video blocks) and tenant logos.

The returned reference is an opaque string stored as the block's answer or
as the form's ``logo_reference``; the local store returns the file path.
"""

import logging
import os
import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from leadcatch.core.config import settings

logger = logging.getLogger(__name__)

# Accepted MIME prefixes per upload category
ACCEPTED_TYPES: dict[str, tuple[str, ...]] = {
    "photo": ("image/",),
    "video": ("video/",),
    "logo": ("image/",),
}

_DEFAULT_EXTENSIONS = {
    "image/": ".jpg",
    "video/": ".mp4",
}


class FileValidationError(Exception):
    """Raised when an uploaded file is rejected."""


class BaseFileStore(ABC):
    @abstractmethod
    def store(self, filename: str | None, content: bytes, content_type: str | None, folder: str) -> str:
        """Persist the file and return its reference."""


def validate_upload(category: str, content: bytes, content_type: str | None, max_size_mb: int) -> None:
    if category not in ACCEPTED_TYPES:
        raise FileValidationError(f"Unknown upload category: {category}")
    if not content:
        raise FileValidationError(f"{category}: Uploaded file is empty")
    max_bytes = max_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise FileValidationError(
            f"{category}: File too large ({len(content)} bytes). Maximum: {max_size_mb} MB"
        )
    if not content_type or not content_type.startswith(ACCEPTED_TYPES[category]):
        raise FileValidationError(f"{category}: Unsupported content type {content_type!r}")


class LocalFileStore(BaseFileStore):
    """Writes files under ``upload_dir/<folder>/``."""

    def __init__(self, upload_dir: str | None = None) -> None:
        self._root = Path(upload_dir or settings.UPLOAD_DIR)

    def store(self, filename: str | None, content: bytes, content_type: str | None, folder: str) -> str:
        target_dir = self._root / folder
        target_dir.mkdir(parents=True, exist_ok=True)

        ext = os.path.splitext(filename)[1].lower() if filename else ""
        if not ext:
            prefix = next((p for p in _DEFAULT_EXTENSIONS if (content_type or "").startswith(p)), None)
            ext = _DEFAULT_EXTENSIONS.get(prefix, ".bin")

        path = target_dir / f"{uuid.uuid4().hex}{ext}"
        path.write_bytes(content)
        logger.info("Stored upload %s (%d bytes)", path, len(content))
        return str(path)


def save_upload(
    file_store: BaseFileStore,
    tenant_id: uuid.UUID,
    category: str,
    filename: str | None,
    content: bytes,
    content_type: str | None,
) -> str:
    """Validate an upload for ``category`` and store it in the tenant's folder."""
    validate_upload(category, content, content_type, settings.UPLOAD_MAX_FILE_SIZE_MB)
    return file_store.store(filename, content, content_type, f"{tenant_id}/{category}")
