import pytest
from fastapi.testclient import TestClient

from smilies.dependencies.storage import get_storage
from smilies.main import app
from smilies.storage.memory import InMemoryStorageBackend


@pytest.fixture
def storage():
    """Fresh in-memory smilies container for each test."""
    return InMemoryStorageBackend(container_name="smilies", base_url="https://blobs.example.com")


@pytest.fixture
def client(storage):
    """Test client with the storage dependency overridden."""
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
