"""
Smiley HTML views.

Server-rendered pages for listing, uploading and deleting smilies. Storage
failures are logged with details and shown to the user as a generic error.
"""
from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import RedirectResponse

from smilies.config import settings
from smilies.dependencies.storage import get_storage
from smilies.logging_config import setup_logging
from smilies.services.smilies import (
    UploadRequest,
    get_container,
    list_smilies,
    purge_smilies,
    upload_smiley,
)
from smilies.storage.base import StorageBackend
from smilies.storage.exceptions import StorageError
from smilies.templating import templates
from smilies.utils.validators import UploadValidationError, validate_upload

router = APIRouter(prefix="/smiley", tags=["smiley"])

logger = setup_logging()

STORAGE_ERROR_MESSAGE = "The file storage is currently unavailable. Please try again later."


def _error_page(request: Request):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"message": STORAGE_ERROR_MESSAGE},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )


async def read_upload(file: UploadFile | None) -> UploadRequest:
    """
    Read an uploaded file into memory.

    Reads at most one byte past the size limit, which is enough for
    validation to reject oversized files without buffering all of them.
    """
    if file is None:
        return UploadRequest(filename=None, data=b"")

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    data = await file.read(max_bytes + 1)
    return UploadRequest(filename=file.filename, data=data)


@router.get("", name="smiley_index")
async def index(request: Request, storage: StorageBackend = Depends(get_storage)):
    """Render every smiley in the container."""
    try:
        handle = await get_container(storage)
        smilies = await list_smilies(storage, handle)
    except StorageError as e:
        logger.error(f"Failed to list smilies: {str(e)}", exc_info=True)
        return _error_page(request)

    return templates.TemplateResponse(request, "smiley/index.html", {"smilies": smilies})


@router.get("/create", name="smiley_create_form")
async def create_form(request: Request):
    """Render the upload form."""
    return templates.TemplateResponse(request, "smiley/create.html", {"errors": []})


@router.post("/create", name="smiley_create")
async def create(
    request: Request,
    file: UploadFile | None = File(None),
    storage: StorageBackend = Depends(get_storage),
):
    """
    Upload a file and redirect to the list.

    Validation failures re-render the form with one message per failed rule;
    storage failures re-render it with a generic message.
    """
    upload = await read_upload(file)

    try:
        # Reject bad files before the container is touched
        validate_upload(upload.filename, upload.size)
        handle = await get_container(storage)
        await upload_smiley(storage, handle, upload)
    except UploadValidationError as e:
        logger.warning(f"Rejected upload {upload.filename!r}: {str(e)}")
        return templates.TemplateResponse(
            request,
            "smiley/create.html",
            {"errors": e.errors},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except StorageError as e:
        logger.error(f"Failed to upload smiley: {str(e)}", exc_info=True)
        return templates.TemplateResponse(
            request,
            "smiley/create.html",
            {"errors": [STORAGE_ERROR_MESSAGE]},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return RedirectResponse(
        url=request.url_for("smiley_index"), status_code=status.HTTP_303_SEE_OTHER
    )


@router.get("/delete", name="smiley_delete_form")
async def delete_form(request: Request):
    """Render the delete-all confirmation prompt."""
    return templates.TemplateResponse(request, "smiley/delete.html", {})


@router.post("/delete", name="smiley_delete")
async def delete_confirmed(request: Request, storage: StorageBackend = Depends(get_storage)):
    """Delete every smiley and redirect to the list."""
    try:
        handle = await get_container(storage)
        await purge_smilies(storage, handle)
    except StorageError as e:
        # Some blobs may already be gone; purging again finishes the job
        logger.error(f"Failed to purge smilies: {str(e)}", exc_info=True)
        return _error_page(request)

    return RedirectResponse(
        url=request.url_for("smiley_index"), status_code=status.HTTP_303_SEE_OTHER
    )
