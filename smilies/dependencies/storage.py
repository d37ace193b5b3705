"""
Storage dependency injection for FastAPI.

The storage backend is built once at startup (see smilies.main lifespan) and
handed to endpoints through get_storage(), so tests can swap it out with
app.dependency_overrides.
"""
from fastapi import Request

from smilies.config import Settings, settings
from smilies.storage.base import StorageBackend
from smilies.storage.local import LocalStorageBackend
from smilies.storage.memory import InMemoryStorageBackend


def create_storage(config: Settings = settings) -> StorageBackend:
    """
    Build the storage backend selected by configuration.

    This allows switching between Azure, local and in-memory storage
    by changing the STORAGE_BACKEND environment variable.

    Returns:
        StorageBackend instance

    Raises:
        ValueError: If STORAGE_BACKEND is not supported, or the azure backend
            is selected without a connection string
    """
    if config.STORAGE_BACKEND == "azure":
        from smilies.storage.azure import AzureBlobStorageBackend

        return AzureBlobStorageBackend.from_connection_string(
            config.AZURE_STORAGE_CONNECTION_STRING,
            config.STORAGE_CONTAINER_NAME,
        )

    if config.STORAGE_BACKEND == "local":
        return LocalStorageBackend(
            container_name=config.STORAGE_CONTAINER_NAME,
            base_path=config.LOCAL_STORAGE_PATH,
            public_base_url=config.PUBLIC_BASE_URL,
        )

    if config.STORAGE_BACKEND == "memory":
        return InMemoryStorageBackend(
            container_name=config.STORAGE_CONTAINER_NAME,
            base_url=f"{config.PUBLIC_BASE_URL.rstrip('/')}/blobs",
        )

    raise ValueError(f"Unknown storage backend: {config.STORAGE_BACKEND}")


def get_storage(request: Request) -> StorageBackend:
    """Return the storage backend created at application startup."""
    return request.app.state.storage
