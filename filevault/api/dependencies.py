"""FastAPI dependencies for authentication, database and storage services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from filevault.config import Settings, get_settings
from filevault.database import get_db
from filevault.errors import ApiError, auth_failure
from filevault.services.credentials import CredentialStore
from filevault.services.file_catalog import FileCatalog
from filevault.services.file_store import FileStore
from filevault.services.tokens import TokenService

# Missing headers are reported as 401 by get_current_user_id instead of HTTPBearer's default
security = HTTPBearer(auto_error=False)


def get_token_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenService:
    """Get token service configured from settings."""
    return TokenService.from_settings(settings)


def get_file_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> FileStore:
    """Get file store rooted at the configured upload directory."""
    return FileStore(settings.upload_dir)


def get_credential_store(
    db: Annotated[Session, Depends(get_db)],
) -> CredentialStore:
    """Get credential store with dependencies."""
    return CredentialStore(db)


def get_file_catalog(
    db: Annotated[Session, Depends(get_db)],
) -> FileCatalog:
    """Get file catalog with dependencies."""
    return FileCatalog(db)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> int:
    """Get the authenticated user's id from the bearer token."""
    if credentials is None:
        raise ApiError(auth_failure())

    user_id = tokens.validate(credentials.credentials)
    if user_id is None:
        raise ApiError(auth_failure())

    return user_id
