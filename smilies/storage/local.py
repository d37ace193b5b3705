"""
Local filesystem storage implementation.

Each container is a directory under the configured base path and each blob
is a file named after its key. The content type of every blob is kept in a
sidecar file under <base_path>/.content-types/<container>/. The /blobs route
serves blobs back through read_blob(), so a blob is publicly readable at
<public_base_url>/blobs/<container>/<name> with its stored content type.
"""
import os
from pathlib import Path
from typing import AsyncIterator

import aiofiles

from smilies.logging_config import setup_logging
from smilies.storage.base import ContainerHandle, StorageBackend
from smilies.storage.exceptions import (
    BlobNotFoundError,
    StorageError,
    StorageUnavailableError,
)

logger = setup_logging()

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class LocalStorageBackend(StorageBackend):
    """
    Local filesystem storage with async writes.

    Structure:
    - <base_path>/<container_name>/<blob_name>
    - <base_path>/.content-types/<container_name>/<blob_name>
    """

    def __init__(self, container_name: str, base_path: str, public_base_url: str):
        """
        Initialize local storage backend.

        Args:
            container_name: Directory name used as the container
            base_path: Root directory holding all containers
            public_base_url: Externally visible URL of the application
        """
        super().__init__(container_name)
        self.base_path = Path(base_path)
        self.public_base_url = public_base_url

    @property
    def container_path(self) -> Path:
        return self.base_path / self.container_name

    @property
    def content_types_path(self) -> Path:
        return self.base_path / ".content-types" / self.container_name

    async def _resolve_or_create(self) -> ContainerHandle:
        if not self.container_path.is_dir():
            logger.info(f"Creating local container at {self.container_path}")
        try:
            # exist_ok: another worker may have created it meanwhile
            self.container_path.mkdir(parents=True, exist_ok=True)
            self.content_types_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(self.container_name, str(e)) from e

        return ContainerHandle(
            name=self.container_name,
            base_url=f"{self.public_base_url.rstrip('/')}/blobs/{self.container_name}",
        )

    async def list_blob_names(self, handle: ContainerHandle) -> AsyncIterator[str]:
        try:
            names = sorted(
                entry.name for entry in self.container_path.iterdir() if entry.is_file()
            )
        except OSError as e:
            raise StorageError(f"Failed to list blobs: {str(e)}") from e

        for name in names:
            yield name

    async def blob_exists(self, handle: ContainerHandle, blob_name: str) -> bool:
        return self._get_blob_path(blob_name).is_file()

    async def upload_blob(
        self,
        handle: ContainerHandle,
        blob_name: str,
        data: bytes,
        content_type: str,
    ) -> None:
        blob_path = self._get_blob_path(blob_name)
        content_type_path = self.content_types_path / blob_name

        try:
            # 'xb' refuses to overwrite an existing blob
            async with aiofiles.open(blob_path, "xb") as f:
                await f.write(data)
            async with aiofiles.open(content_type_path, "w") as f:
                await f.write(content_type)
        except FileExistsError as e:
            raise StorageError(f"Blob already exists: {blob_name}") from e
        except OSError as e:
            # Clean up partial files on error
            for path in (blob_path, content_type_path):
                if path.exists():
                    try:
                        os.remove(path)
                    except OSError:
                        logger.warning(f"Could not remove partial file {path}")
            raise StorageError(f"Failed to save blob: {str(e)}") from e

    async def delete_blob(self, handle: ContainerHandle, blob_name: str) -> None:
        blob_path = self._get_blob_path(blob_name)

        try:
            os.remove(blob_path)
        except FileNotFoundError as e:
            raise BlobNotFoundError(blob_name) from e
        except OSError as e:
            raise StorageError(f"Failed to delete blob: {str(e)}") from e

        try:
            os.remove(self.content_types_path / blob_name)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning(f"Could not remove content type of blob {blob_name}")

    async def read_blob(self, handle: ContainerHandle, blob_name: str) -> tuple[bytes, str]:
        try:
            blob_path = self._get_blob_path(blob_name)
        except StorageError as e:
            # No blob can exist under a name outside the container
            raise BlobNotFoundError(blob_name) from e

        try:
            async with aiofiles.open(blob_path, "rb") as f:
                data = await f.read()
        except FileNotFoundError as e:
            raise BlobNotFoundError(blob_name) from e
        except OSError as e:
            raise StorageError(f"Failed to read blob: {str(e)}") from e

        try:
            async with aiofiles.open(self.content_types_path / blob_name, "r") as f:
                content_type = (await f.read()).strip()
        except FileNotFoundError:
            content_type = ""

        return data, content_type or DEFAULT_CONTENT_TYPE

    def _get_blob_path(self, blob_name: str) -> Path:
        """
        Resolve a blob key to its file path.

        Raises:
            StorageError: If the key would escape the container directory
        """
        if not blob_name or "/" in blob_name or "\\" in blob_name or blob_name in (".", ".."):
            raise StorageError(f"Invalid blob name: {blob_name!r}")
        return self.container_path / blob_name
