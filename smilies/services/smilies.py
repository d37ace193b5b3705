"""
Smiley service functions.

Listing, uploading and purging the blobs of the smilies container. Each
function takes the storage backend and the resolved container handle, so the
same logic runs against Azure, the local filesystem, or memory.
"""
from dataclasses import dataclass

from smilies.logging_config import setup_logging
from smilies.schemas.smiley import Smiley
from smilies.storage.base import ContainerHandle, StorageBackend
from smilies.storage.exceptions import BlobNotFoundError
from smilies.utils.ids import generate_blob_name
from smilies.utils.validators import get_file_extension, validate_upload

logger = setup_logging()

CONTENT_TYPES = {
    ".txt": "text/plain",
    ".jpg": "image/jpeg",
    ".png": "image/png",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class UploadRequest:
    """A file received from a client, not yet validated."""

    filename: str | None
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


async def get_container(storage: StorageBackend) -> ContainerHandle:
    """
    Resolve the smilies container, creating it on first use.

    Raises:
        StorageUnavailableError: If the container cannot be resolved
    """
    return await storage.resolve_or_create_container()


async def list_smilies(storage: StorageBackend, handle: ContainerHandle) -> list[Smiley]:
    """
    List every smiley in the container.

    Order follows the storage provider's enumeration and is only meant for
    display. An empty container gives an empty list.
    """
    return [
        Smiley(file_name=name, url=handle.blob_url(name))
        async for name in storage.list_blob_names(handle)
    ]


async def upload_smiley(
    storage: StorageBackend,
    handle: ContainerHandle,
    upload: UploadRequest,
) -> Smiley:
    """
    Validate and store an uploaded file under a random blob name.

    The client's filename is only used for validation and content type; the
    blob key is generated. If a blob already exists under that key it is
    deleted first, so the upload replaces it.

    Args:
        storage: Storage backend
        handle: Resolved smilies container
        upload: File received from the client

    Returns:
        The stored smiley

    Raises:
        UploadValidationError: If the file is empty, too large, or has a
            disallowed extension. Nothing is written in that case.
        StorageError: If a storage call fails
    """
    # 1. Validate before touching storage
    validate_upload(upload.filename, upload.size)

    # 2. Pick the key
    blob_name = generate_blob_name()
    content_type = CONTENT_TYPES.get(
        get_file_extension(upload.filename), DEFAULT_CONTENT_TYPE
    )

    # 3. Replace any existing blob under that key
    if await storage.blob_exists(handle, blob_name):
        logger.warning(f"Blob name collision on {blob_name}, replacing existing blob")
        try:
            await storage.delete_blob(handle, blob_name)
        except BlobNotFoundError:
            pass

    # 4. Write
    await storage.upload_blob(handle, blob_name, upload.data, content_type)
    logger.info(f"Uploaded smiley {blob_name} ({upload.size} bytes, {content_type})")

    return Smiley(file_name=blob_name, url=handle.blob_url(blob_name))


async def purge_smilies(storage: StorageBackend, handle: ContainerHandle) -> int:
    """
    Delete every smiley in the container.

    Blobs removed concurrently by someone else are skipped, so calling this
    again after a partial failure finishes the job. Not transactional: the
    first storage failure propagates and earlier deletions stay done.

    Returns:
        Number of blobs deleted by this call

    Raises:
        StorageError: If listing or a delete fails
    """
    deleted = 0

    async for blob_name in storage.list_blob_names(handle):
        if not await storage.blob_exists(handle, blob_name):
            continue
        try:
            await storage.delete_blob(handle, blob_name)
        except BlobNotFoundError:
            # Deleted by another request after the existence check
            continue
        deleted += 1

    logger.info(f"Purged {deleted} smilies from container '{handle.name}'")
    return deleted
