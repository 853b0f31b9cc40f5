"""SQLAlchemy models."""

from filevault.models.stored_file import StoredFile
from filevault.models.user import User

__all__ = [
    "User",
    "StoredFile",
]
