"""
Storage-specific exceptions.

Provider errors (Azure SDK, filesystem) are translated into these so that
services and routes never depend on a particular backend's error types.
"""


class StorageError(Exception):
    """Base exception for storage operations."""

    pass


class StorageUnavailableError(StorageError):
    """Raised when the container cannot be resolved or created."""

    def __init__(self, container_name: str, reason: str = ""):
        self.container_name = container_name
        message = f"Storage container unavailable: {container_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class BlobNotFoundError(StorageError):
    """Raised when a blob is not present in the container."""

    def __init__(self, blob_name: str):
        self.blob_name = blob_name
        super().__init__(f"Blob not found: {blob_name}")
