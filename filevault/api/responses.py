"""Helpers for building envelope responses."""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from filevault.errors import ErrorKind, ServiceError
from filevault.schemas.common import ApiResponse


def api_response(
    message: str,
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Wrap a result in the ``{success, message, data?}`` envelope."""
    envelope = ApiResponse[Any](
        success=200 <= status_code < 300,
        message=message,
        data=data,
    )
    content = envelope.model_dump(mode="json")
    if content["data"] is None:
        del content["data"]
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def error_response(error: ServiceError) -> JSONResponse:
    """Render a service error with its mapped status code."""
    headers = None
    if error.kind == ErrorKind.AUTH_FAILURE:
        headers = {"WWW-Authenticate": "Bearer"}
    return api_response(error.message, status_code=error.status_code, headers=headers)
