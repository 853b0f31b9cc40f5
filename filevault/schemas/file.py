"""Stored file schemas."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator


class StoredFileResponse(BaseModel):
    """File metadata returned by upload and listing."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    storage_name: str
    original_name: str
    content_type: str
    size: int
    uploaded_at: datetime

    @field_validator("uploaded_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite drops the offset; stored values are always UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
