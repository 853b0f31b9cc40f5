"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from filevault.api.dependencies import get_credential_store, get_token_service
from filevault.api.responses import api_response, error_response
from filevault.errors import ServiceError, auth_failure, validation_error
from filevault.schemas.auth import LoginResponse, UserLogin, UserRegister
from filevault.services.credentials import CredentialStore
from filevault.services.tokens import TokenService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
):
    """Register a new user."""
    result = credentials.register(user_data.username, user_data.email, user_data.password)
    if isinstance(result, ServiceError):
        return error_response(result)

    return api_response("User registered successfully.", status_code=status.HTTP_201_CREATED)


@router.post("/login")
def login(
    login_data: UserLogin,
    credentials: Annotated[CredentialStore, Depends(get_credential_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with username and password."""
    if not login_data.username.strip() or not login_data.password.strip():
        return error_response(validation_error("Username and password are required."))

    user = credentials.verify_credentials(login_data.username, login_data.password)
    if user is None:
        return error_response(auth_failure("Invalid username or password."))

    payload = LoginResponse(token=tokens.issue(user), username=user.username, email=user.email)
    return api_response("Login successful.", payload)
