"""Authentication schemas."""

from pydantic import BaseModel, Field


class UserRegister(BaseModel):
    """User registration request."""

    username: str = Field(..., max_length=50)
    email: str = Field(..., max_length=100)
    password: str = Field(..., max_length=128)


class UserLogin(BaseModel):
    """User login request."""

    username: str = Field(..., max_length=50)
    password: str = Field(..., max_length=128)


class LoginResponse(BaseModel):
    """Token and identity returned after a successful login."""

    token: str
    username: str
    email: str
