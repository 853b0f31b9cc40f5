"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response wrapper: ``{success, message, data?}``."""

    success: bool
    message: str
    data: T | None = None
