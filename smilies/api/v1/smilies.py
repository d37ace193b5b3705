"""
Smilies JSON API endpoints.

The same list / upload / purge operations as the HTML views, returned in the
APIResponse envelope.
"""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from smilies.api.smiley import read_upload
from smilies.dependencies.storage import get_storage
from smilies.logging_config import setup_logging
from smilies.schemas.common import APIResponse
from smilies.schemas.smiley import PurgeResult, Smiley
from smilies.services.smilies import (
    get_container,
    list_smilies,
    purge_smilies,
    upload_smiley,
)
from smilies.storage.base import StorageBackend
from smilies.storage.exceptions import StorageError
from smilies.utils.validators import UploadValidationError, validate_upload

router = APIRouter(prefix="/smilies", tags=["smilies"])

logger = setup_logging()


def _storage_unavailable() -> HTTPException:
    # Safe, static message; provider details only go to the log
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={
            "success": False,
            "error": "Service Unavailable",
            "message": "File storage is unavailable",
        },
    )


@router.get(
    "",
    response_model=APIResponse[list[Smiley]],
    status_code=status.HTTP_200_OK,
)
async def list_smilies_endpoint(storage: StorageBackend = Depends(get_storage)):
    """
    List all smilies.

    Returns:
        APIResponse with a list of {file_name, url} pairs. An empty
        container returns an empty list.

    Raises:
        HTTPException 503: If the storage container is unavailable.
    """
    try:
        handle = await get_container(storage)
        smilies = await list_smilies(storage, handle)
    except StorageError as e:
        logger.error(f"Failed to list smilies: {str(e)}", exc_info=True)
        raise _storage_unavailable()

    return APIResponse(success=True, data=smilies)


@router.post(
    "",
    response_model=APIResponse[Smiley],
    status_code=status.HTTP_201_CREATED,
)
async def upload_smiley_endpoint(
    file: UploadFile | None = File(None),
    storage: StorageBackend = Depends(get_storage),
):
    """
    Upload a smiley.

    Accepts non-empty .txt, .jpg or .png files up to 10 MB. The stored blob
    gets a random name; the original filename is not kept.

    **Example:**
    ```
    curl -X POST http://localhost:8000/api/v1/smilies \\
      -F "file=@smile.png"
    ```

    Raises:
        HTTPException 400: If the file fails validation.
        HTTPException 503: If the storage container is unavailable.
    """
    upload = await read_upload(file)

    try:
        # Reject bad files before the container is touched
        validate_upload(upload.filename, upload.size)
        handle = await get_container(storage)
        smiley = await upload_smiley(storage, handle, upload)
    except UploadValidationError as e:
        logger.warning(f"Rejected upload {upload.filename!r}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "success": False,
                "error": "Bad Request",
                "message": "Invalid upload",
                "errors": e.errors,
            },
        )
    except StorageError as e:
        logger.error(f"Failed to upload smiley: {str(e)}", exc_info=True)
        raise _storage_unavailable()

    return APIResponse(success=True, data=smiley)


@router.delete(
    "",
    response_model=APIResponse[PurgeResult],
    status_code=status.HTTP_200_OK,
)
async def purge_smilies_endpoint(storage: StorageBackend = Depends(get_storage)):
    """
    Delete all smilies.

    Safe to repeat: a second call with no uploads in between deletes nothing.

    Raises:
        HTTPException 503: If storage fails. Some smilies may already be
            deleted; calling again finishes the purge.
    """
    try:
        handle = await get_container(storage)
        deleted = await purge_smilies(storage, handle)
    except StorageError as e:
        logger.error(f"Failed to purge smilies: {str(e)}", exc_info=True)
        raise _storage_unavailable()

    return APIResponse(success=True, data=PurgeResult(deleted=deleted))
