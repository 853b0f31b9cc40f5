"""Error kinds returned by services and rendered by the API layer.

Services report expected failures by returning a ``ServiceError`` instead of
raising. Routers inspect the result and turn it into an envelope response.
``ApiError`` is the raisable form, used only by FastAPI dependencies that have
no way to return a response.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    """Failure categories exposed to API clients."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTH_FAILURE = "auth_failure"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH_FAILURE: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class ServiceError:
    """An expected failure with a client-facing message."""

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class ApiError(Exception):
    """Raised from dependencies to short-circuit a request with a ServiceError."""

    def __init__(self, error: ServiceError):
        super().__init__(error.message)
        self.error = error


def validation_error(message: str) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message)


def conflict_error(message: str) -> ServiceError:
    return ServiceError(ErrorKind.CONFLICT, message)


def auth_failure(message: str = "Invalid authentication credentials") -> ServiceError:
    return ServiceError(ErrorKind.AUTH_FAILURE, message)


def not_found(message: str) -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, message)
