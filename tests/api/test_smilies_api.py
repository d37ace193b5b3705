"""
Tests for the smilies JSON API.
"""
from smilies.dependencies.storage import get_storage
from smilies.main import app
from smilies.storage.exceptions import StorageUnavailableError
from smilies.storage.memory import InMemoryStorageBackend
from tests.constants import PNG_BYTES, URLs


def _upload(client, filename="smile.png", content=PNG_BYTES, content_type="image/png"):
    return client.post(URLs.API_SMILIES, files={"file": (filename, content, content_type)})


def test_health(client):
    response = client.get(URLs.HEALTH)

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_empty(client):
    response = client.get(URLs.API_SMILIES)

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": []}


def test_upload_then_list_round_trip(client):
    response = _upload(client)

    assert response.status_code == 201
    smiley = response.json()["data"]
    assert smiley["file_name"] != "smile.png"
    assert smiley["url"] == f"https://blobs.example.com/smilies/{smiley['file_name']}"

    listed = client.get(URLs.API_SMILIES).json()["data"]
    assert listed == [smiley]


def test_upload_rejected_lists_errors(client, storage):
    response = _upload(client, filename="virus.exe", content=b"x" * 1024)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"] == ["Only .txt, .jpg, and .png files are allowed."]
    assert storage.blobs == {}


def test_upload_without_file(client, storage):
    response = client.post(URLs.API_SMILIES)

    assert response.status_code == 400
    assert "Please select a file to upload." in response.json()["errors"]
    assert storage.blobs == {}


def test_purge_reports_deleted_count(client):
    _upload(client)
    _upload(client, filename="notes.txt", content=b"hello", content_type="text/plain")

    first = client.delete(URLs.API_SMILIES)
    second = client.delete(URLs.API_SMILIES)

    assert first.json() == {"success": True, "data": {"deleted": 2}}
    assert second.json() == {"success": True, "data": {"deleted": 0}}
    assert client.get(URLs.API_SMILIES).json()["data"] == []


def test_storage_unavailable_returns_503(client):
    class UnavailableStorage(InMemoryStorageBackend):
        async def _resolve_or_create(self):
            raise StorageUnavailableError(self.container_name, "secret-host refused")

    app.dependency_overrides[get_storage] = lambda: UnavailableStorage("smilies")

    response = client.get(URLs.API_SMILIES)

    assert response.status_code == 503
    assert response.json() == {
        "success": False,
        "error": "Service Unavailable",
        "message": "File storage is unavailable",
    }


def test_invalid_upload_reported_even_when_storage_unavailable(client):
    class UnavailableStorage(InMemoryStorageBackend):
        async def _resolve_or_create(self):
            raise StorageUnavailableError(self.container_name, "connection refused")

    app.dependency_overrides[get_storage] = lambda: UnavailableStorage("smilies")

    response = _upload(client, filename="virus.exe", content=b"x" * 1024)

    assert response.status_code == 400
    assert response.json()["errors"] == ["Only .txt, .jpg, and .png files are allowed."]


def test_rejected_upload_does_not_create_container(client, storage):
    response = _upload(client, filename="empty.txt", content=b"", content_type="text/plain")

    assert response.status_code == 400
    assert storage.container_created is False
