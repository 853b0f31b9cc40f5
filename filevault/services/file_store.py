"""File store: validated writes into per-user directories on local disk."""

import logging
import os
import time
import uuid
from dataclasses import dataclass
from pathlib import Path

from werkzeug.utils import secure_filename

from filevault.errors import ServiceError, validation_error

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5 MiB

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "image/png",
        "image/jpeg",
        "image/jpg",
    }
)

FALLBACK_STEM = "file"

# secure_filename output is ASCII, so these character limits are also byte limits.
# Stem + "_" + 10-digit timestamp + "_" + 8 hex + extension stays under 255.
MAX_STEM_LENGTH = 200
MAX_EXTENSION_LENGTH = 16
# Matches the width of the original_name column
MAX_ORIGINAL_NAME_LENGTH = 255


@dataclass(frozen=True)
class StoredObject:
    """Where an uploaded file's bytes were written."""

    storage_name: str
    location: str


def is_valid_type(content_type: str | None) -> bool:
    """Check a declared content type against the allow-list (case-insensitive)."""
    if content_type is None or not content_type.strip():
        return False
    return content_type.strip().lower() in ALLOWED_CONTENT_TYPES


def generate_storage_name(original_name: str | None) -> str:
    """Build a collision-resistant name: ``{stem}_{unix_seconds}_{hex8}{ext}``.

    The timestamp only orders names; uniqueness within a second comes from the
    random suffix.
    """
    safe_name = secure_filename(original_name or "")
    stem, extension = os.path.splitext(safe_name)
    stem = stem[:MAX_STEM_LENGTH] or FALLBACK_STEM
    extension = extension[:MAX_EXTENSION_LENGTH]
    timestamp = int(time.time())
    suffix = uuid.uuid4().hex[:8]
    return f"{stem}_{timestamp}_{suffix}{extension}"


class FileStore:
    """Service for storing uploaded bytes under ``root/<owner_id>/``."""

    def __init__(self, root: str | Path, max_size: int = MAX_FILE_SIZE):
        self.root = Path(root).resolve()
        self.max_size = max_size

    def owner_directory(self, owner_id: int) -> Path:
        """Storage namespace for a single user."""
        return self.root / str(owner_id)

    def validate(self, content_type: str | None, size: int) -> ServiceError | None:
        """Check upload preconditions without touching the disk."""
        if not is_valid_type(content_type):
            return validation_error("Invalid file type. Only PDF, PNG and JPG files are accepted.")
        if size <= 0:
            return validation_error("No file was selected.")
        if size > self.max_size:
            return validation_error(
                f"File size cannot exceed {self.max_size // (1024 * 1024)}MB."
            )
        return None

    def save(
        self,
        data: bytes,
        content_type: str | None,
        original_name: str | None,
        size: int,
        owner_id: int,
    ) -> StoredObject | ServiceError:
        """Write an upload into the owner's directory.

        Nothing is written when validation fails. The owner's directory is
        created on first use.
        """
        error = self.validate(content_type, size)
        if error is not None:
            return error
        if len(data) != size:
            return validation_error("Declared size does not match the uploaded content.")

        directory = self.owner_directory(owner_id)
        directory.mkdir(parents=True, exist_ok=True)

        storage_name = generate_storage_name(original_name)
        path = directory / storage_name
        # "x" refuses to overwrite if a name ever repeats
        with open(path, "xb") as fh:
            fh.write(data)

        logger.info(f"Stored {size} bytes for user {owner_id} at {path}")
        return StoredObject(storage_name=storage_name, location=str(path))

    def delete(self, location: str) -> bool:
        """Remove a stored file. Returns False if there was nothing to remove."""
        path = Path(location).resolve()
        if not path.is_relative_to(self.root):
            logger.warning(f"Refusing to delete path outside storage root: {location}")
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True
