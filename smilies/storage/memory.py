"""
In-memory storage implementation.

Keeps blobs in a dict keyed by name. Used by the test suite and for running
the application without any external storage.
"""
from typing import AsyncIterator

from smilies.storage.base import ContainerHandle, StorageBackend
from smilies.storage.exceptions import BlobNotFoundError, StorageError


class InMemoryStorageBackend(StorageBackend):
    """
    Dict-backed blob store bound to one container.

    Blob URLs are <base_url>/<container>/<name>. They are only fetchable when
    base_url points at the application's /blobs route, which is how
    create_storage() builds it for STORAGE_BACKEND=memory. The default
    'memory://' base is for unit tests that never fetch the URLs. Contents
    are lost when the process exits.
    """

    def __init__(self, container_name: str, base_url: str = "memory://"):
        super().__init__(container_name)
        self.base_url = base_url
        self.container_created = False
        self.blobs: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}

    async def _resolve_or_create(self) -> ContainerHandle:
        self.container_created = True
        return ContainerHandle(
            name=self.container_name,
            base_url=f"{self.base_url.rstrip('/')}/{self.container_name}",
        )

    async def list_blob_names(self, handle: ContainerHandle) -> AsyncIterator[str]:
        # Snapshot so callers may delete while iterating
        for blob_name in sorted(self.blobs):
            yield blob_name

    async def blob_exists(self, handle: ContainerHandle, blob_name: str) -> bool:
        return blob_name in self.blobs

    async def upload_blob(
        self,
        handle: ContainerHandle,
        blob_name: str,
        data: bytes,
        content_type: str,
    ) -> None:
        if blob_name in self.blobs:
            raise StorageError(f"Blob already exists: {blob_name}")
        self.blobs[blob_name] = bytes(data)
        self.content_types[blob_name] = content_type

    async def delete_blob(self, handle: ContainerHandle, blob_name: str) -> None:
        if blob_name not in self.blobs:
            raise BlobNotFoundError(blob_name)
        del self.blobs[blob_name]
        self.content_types.pop(blob_name, None)

    async def read_blob(self, handle: ContainerHandle, blob_name: str) -> tuple[bytes, str]:
        if blob_name not in self.blobs:
            raise BlobNotFoundError(blob_name)
        return self.blobs[blob_name], self.content_types[blob_name]
