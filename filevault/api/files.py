"""File API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from filevault.api.dependencies import get_current_user_id, get_file_catalog, get_file_store
from filevault.api.responses import api_response, error_response
from filevault.errors import ServiceError, not_found, validation_error
from filevault.schemas.file import StoredFileResponse
from filevault.services.file_catalog import FileCatalog
from filevault.services.file_store import MAX_ORIGINAL_NAME_LENGTH, FileStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["files"])


@router.post("/upload")
def upload_file(
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    store: Annotated[FileStore, Depends(get_file_store)],
    catalog: Annotated[FileCatalog, Depends(get_file_catalog)],
    file: Annotated[UploadFile | None, File()] = None,
):
    """Upload a single file for the current user."""
    if file is None:
        return error_response(validation_error("No file was selected."))

    # Starlette has already spooled the body; the cap bounds what is read into memory here
    data = file.file.read(store.max_size + 1)
    size = len(data)

    error = store.validate(file.content_type, size)
    if error is not None:
        return error_response(error)

    stored = store.save(data, file.content_type, file.filename, size, current_user_id)
    if isinstance(stored, ServiceError):
        return error_response(stored)

    try:
        entry = catalog.record(
            owner_id=current_user_id,
            storage_name=stored.storage_name,
            original_name=(file.filename or stored.storage_name)[:MAX_ORIGINAL_NAME_LENGTH],
            content_type=file.content_type,
            size=size,
            location=stored.location,
        )
    except Exception:
        logger.exception(f"Catalog insert failed, removing stored bytes at {stored.location}")
        store.delete(stored.location)
        raise

    return api_response("File uploaded successfully.", StoredFileResponse.model_validate(entry))


@router.get("")
def list_files(
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    catalog: Annotated[FileCatalog, Depends(get_file_catalog)],
):
    """List the current user's files, newest first."""
    entries = catalog.list_for_owner(current_user_id)
    return api_response(
        "Files listed successfully.",
        [StoredFileResponse.model_validate(entry) for entry in entries],
    )


@router.delete("/{file_id:int}")
def delete_file(
    file_id: int,
    current_user_id: Annotated[int, Depends(get_current_user_id)],
    store: Annotated[FileStore, Depends(get_file_store)],
    catalog: Annotated[FileCatalog, Depends(get_file_catalog)],
):
    """Delete one of the current user's files.

    The bytes are removed before the row. Missing bytes are not an error: the
    row is still removed. If removing the row fails afterwards there is no
    rollback of the physical delete.
    """
    entry = catalog.find_for_owner(current_user_id, file_id)
    if entry is None:
        return error_response(not_found("File not found."))

    location = entry.location
    if not store.delete(location):
        logger.warning(f"File {file_id} had no bytes at {location}; removing catalog row anyway")

    if not catalog.remove(entry):
        return error_response(not_found("File not found."))

    return api_response("File deleted successfully.")
