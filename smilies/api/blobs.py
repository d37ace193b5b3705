"""
Public blob download route.

Serves blobs for backends whose URLs point back at this application (local
filesystem and in-memory). No authentication: the container is public-read.
Azure blob URLs point at Azure itself, so this route answers 404 there.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status

from smilies.dependencies.storage import get_storage
from smilies.logging_config import setup_logging
from smilies.services.smilies import get_container
from smilies.storage.base import StorageBackend
from smilies.storage.exceptions import BlobNotFoundError, StorageError

router = APIRouter(prefix="/blobs", tags=["blobs"])

logger = setup_logging()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "success": False,
            "error": "Not Found",
            "message": "Blob not found",
        },
    )


@router.get("/{container_name}/{blob_name}", name="blob_download")
async def download_blob(
    container_name: str,
    blob_name: str,
    storage: StorageBackend = Depends(get_storage),
):
    """
    Return a blob's bytes with the content type stored at upload time.

    Raises:
        HTTPException 404: If the container or blob doesn't exist, or the
            backend does not serve its own blobs.
        HTTPException 503: If storage fails.
    """
    if container_name != storage.container_name:
        raise _not_found()

    try:
        handle = await get_container(storage)
        data, content_type = await storage.read_blob(handle, blob_name)
    except NotImplementedError:
        raise _not_found()
    except BlobNotFoundError:
        raise _not_found()
    except StorageError as e:
        logger.error(f"Failed to read blob {blob_name!r}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "success": False,
                "error": "Service Unavailable",
                "message": "File storage is unavailable",
            },
        )

    return Response(content=data, media_type=content_type)
