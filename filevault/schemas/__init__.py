"""Pydantic schemas for API requests and responses."""

from filevault.schemas.auth import LoginResponse, UserLogin, UserRegister
from filevault.schemas.common import ApiResponse
from filevault.schemas.file import StoredFileResponse

__all__ = [
    "ApiResponse",
    "UserRegister",
    "UserLogin",
    "LoginResponse",
    "StoredFileResponse",
]
