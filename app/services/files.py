"""Image storage on the local filesystem under STATIC_DIR."""

import logging
import uuid
from pathlib import Path

from app.core.errors import FileStorageError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
DEFAULT_IMAGE_EXTENSION = ".jpg"


def image_extension(filename: str | None) -> str:
    """Lower-cased extension of an uploaded file name, or the default when it has none."""
    suffix = Path(filename or "").suffix.lower()
    return suffix or DEFAULT_IMAGE_EXTENSION


def save_image(data: bytes, filename: str | None, directory: str | Path) -> str:
    """
    Write image bytes to <directory>/<uuid4><ext> and return the stored file name.

    Raises FileStorageError if the directory or file cannot be written.
    """
    stored_name = f"{uuid.uuid4()}{image_extension(filename)}"
    target_dir = Path(directory)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / stored_name).write_bytes(data)
    except OSError as e:
        logger.error("Image write failed", extra={"directory": str(target_dir), "reason": str(e)})
        raise FileStorageError("Error while writing file.") from e
    logger.info("Image stored", extra={"stored_name": stored_name, "size_bytes": len(data)})
    return stored_name


def delete_image(stored_name: str, directory: str | Path) -> None:
    """Remove a stored image. A missing file is not an error; other I/O failures are logged."""
    try:
        (Path(directory) / stored_name).unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Image delete failed", extra={"stored_name": stored_name, "reason": str(e)})
