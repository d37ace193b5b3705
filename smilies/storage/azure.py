"""
Azure Blob Storage implementation.

Uses the async client from azure-storage-blob. One BlobServiceClient is
created at startup and shared by all requests; it is only read after
construction, so concurrent use needs no locking.
"""
from typing import AsyncIterator

from azure.core.exceptions import (
    AzureError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from azure.storage.blob import ContentSettings, PublicAccess
from azure.storage.blob.aio import BlobServiceClient

from smilies.logging_config import setup_logging
from smilies.storage.base import ContainerHandle, StorageBackend
from smilies.storage.exceptions import (
    BlobNotFoundError,
    StorageError,
    StorageUnavailableError,
)

logger = setup_logging()


class AzureBlobStorageBackend(StorageBackend):
    """
    Azure Blob Storage backend bound to one container.

    The container is created with container-level public read access so blob
    URLs can be fetched without authentication.
    """

    def __init__(self, service_client: BlobServiceClient, container_name: str):
        super().__init__(container_name)
        self.service_client = service_client
        self.container_client = service_client.get_container_client(container_name)

    @classmethod
    def from_connection_string(
        cls, connection_string: str, container_name: str
    ) -> "AzureBlobStorageBackend":
        """
        Build a backend from an Azure storage connection string.

        Raises:
            ValueError: If the connection string is empty or malformed
        """
        if not connection_string:
            raise ValueError("AZURE_STORAGE_CONNECTION_STRING is required for the azure backend")
        return cls(BlobServiceClient.from_connection_string(connection_string), container_name)

    async def _resolve_or_create(self) -> ContainerHandle:
        try:
            if not await self.container_client.exists():
                try:
                    await self.container_client.create_container(
                        public_access=PublicAccess.CONTAINER
                    )
                    logger.info(f"Created blob container '{self.container_name}'")
                except ResourceExistsError:
                    # Another request created it between exists() and create
                    logger.info(f"Blob container '{self.container_name}' already exists")
        except AzureError as e:
            raise StorageUnavailableError(self.container_name, str(e)) from e

        return ContainerHandle(name=self.container_name, base_url=self.container_client.url)

    async def list_blob_names(self, handle: ContainerHandle) -> AsyncIterator[str]:
        try:
            async for blob in self.container_client.list_blobs():
                yield blob.name
        except AzureError as e:
            raise StorageError(f"Failed to list blobs: {str(e)}") from e

    async def blob_exists(self, handle: ContainerHandle, blob_name: str) -> bool:
        try:
            return await self.container_client.get_blob_client(blob_name).exists()
        except AzureError as e:
            raise StorageError(f"Failed to check blob {blob_name}: {str(e)}") from e

    async def upload_blob(
        self,
        handle: ContainerHandle,
        blob_name: str,
        data: bytes,
        content_type: str,
    ) -> None:
        blob_client = self.container_client.get_blob_client(blob_name)
        try:
            await blob_client.upload_blob(
                data,
                overwrite=False,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            raise StorageError(f"Failed to upload blob {blob_name}: {str(e)}") from e

    async def delete_blob(self, handle: ContainerHandle, blob_name: str) -> None:
        blob_client = self.container_client.get_blob_client(blob_name)
        try:
            await blob_client.delete_blob()
        except ResourceNotFoundError as e:
            raise BlobNotFoundError(blob_name) from e
        except AzureError as e:
            raise StorageError(f"Failed to delete blob {blob_name}: {str(e)}") from e

    async def close(self) -> None:
        await self.service_client.close()
