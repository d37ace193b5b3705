"""
Storage abstraction layer for the smilies container.

This package provides a container-level blob interface with Azure, local
filesystem and in-memory implementations.
"""

from smilies.storage.base import ContainerHandle, StorageBackend
from smilies.storage.local import LocalStorageBackend
from smilies.storage.memory import InMemoryStorageBackend
from smilies.storage.exceptions import (
    BlobNotFoundError,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    "ContainerHandle",
    "StorageBackend",
    "LocalStorageBackend",
    "InMemoryStorageBackend",
    "StorageError",
    "StorageUnavailableError",
    "BlobNotFoundError",
]
