"""
Abstract base class for storage backends.

This module defines the container-level interface that every blob store
must implement, so the smilies services can run unchanged against Azure
Blob Storage, the local filesystem, or an in-memory store.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator
from urllib.parse import quote


@dataclass(frozen=True)
class ContainerHandle:
    """Resolved container: its name and the public URL blobs live under."""

    name: str
    base_url: str

    def blob_url(self, blob_name: str) -> str:
        """Public URL of a blob in this container."""
        return f"{self.base_url.rstrip('/')}/{quote(blob_name)}"


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    A backend is bound to a single container. The handle returned by
    resolve_or_create_container() is passed back into every blob operation.
    """

    def __init__(self, container_name: str):
        self.container_name = container_name
        self._handle: ContainerHandle | None = None

    async def resolve_or_create_container(self) -> ContainerHandle:
        """
        Return the container handle, creating the container if absent.

        The handle is cached after the first successful call.

        Returns:
            ContainerHandle for the configured container

        Raises:
            StorageUnavailableError: If the container cannot be resolved
        """
        if self._handle is None:
            self._handle = await self._resolve_or_create()
        return self._handle

    @abstractmethod
    async def _resolve_or_create(self) -> ContainerHandle:
        """
        Check the container exists and create it with public-read access if not.

        A concurrent creator winning the race must count as success.

        Raises:
            StorageUnavailableError: If the provider call fails
        """
        pass

    @abstractmethod
    def list_blob_names(self, handle: ContainerHandle) -> AsyncIterator[str]:
        """
        Iterate over blob names in provider enumeration order.

        Args:
            handle: Resolved container

        Raises:
            StorageError: If listing fails
        """
        pass

    @abstractmethod
    async def blob_exists(self, handle: ContainerHandle, blob_name: str) -> bool:
        """
        Check if a blob exists in the container.

        Raises:
            StorageError: If the provider call fails
        """
        pass

    @abstractmethod
    async def upload_blob(
        self,
        handle: ContainerHandle,
        blob_name: str,
        data: bytes,
        content_type: str,
    ) -> None:
        """
        Write a new blob.

        Args:
            handle: Resolved container
            blob_name: Key of the blob
            data: Blob content
            content_type: MIME type stored with the blob

        Raises:
            StorageError: If the blob already exists or the write fails
        """
        pass

    @abstractmethod
    async def delete_blob(self, handle: ContainerHandle, blob_name: str) -> None:
        """
        Delete a blob.

        Raises:
            BlobNotFoundError: If the blob doesn't exist
            StorageError: If delete operation fails
        """
        pass

    async def read_blob(self, handle: ContainerHandle, blob_name: str) -> tuple[bytes, str]:
        """
        Read a blob and its content type.

        Only backends whose blob URLs point back at this application (the
        /blobs route) implement this; provider-hosted blobs are fetched from
        the provider directly.

        Raises:
            NotImplementedError: If the backend does not serve its own blobs
            BlobNotFoundError: If the blob doesn't exist
        """
        raise NotImplementedError(f"{type(self).__name__} does not serve blobs")

    async def close(self) -> None:
        """Release any network resources held by the backend."""
        pass
