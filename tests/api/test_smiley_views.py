"""
Tests for the smiley HTML views.

Covers the list page, the upload form (success, validation errors, storage
errors) and the delete-all confirmation flow.
"""
import pytest

from smilies.dependencies.storage import get_storage
from smilies.main import app
from smilies.storage.exceptions import StorageUnavailableError
from smilies.storage.memory import InMemoryStorageBackend
from tests.constants import PNG_BYTES, URLs


class UnavailableStorage(InMemoryStorageBackend):
    """Backend whose container can never be resolved."""

    async def _resolve_or_create(self):
        raise StorageUnavailableError(self.container_name, "connection refused")


@pytest.fixture
def unavailable_client(client):
    app.dependency_overrides[get_storage] = lambda: UnavailableStorage("smilies")
    return client


def test_root_redirects_to_list(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == URLs.SMILEY_INDEX


def test_index_empty(client, storage):
    response = client.get(URLs.SMILEY_INDEX)

    assert response.status_code == 200
    assert "No smilies uploaded yet." in response.text
    assert storage.container_created is True


def test_create_form(client):
    response = client.get(URLs.SMILEY_CREATE)

    assert response.status_code == 200
    assert 'enctype="multipart/form-data"' in response.text


def test_upload_redirects_and_lists_renamed_file(client, storage):
    response = client.post(
        URLs.SMILEY_CREATE,
        files={"file": ("smile.png", PNG_BYTES, "image/png")},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"].endswith(URLs.SMILEY_INDEX)

    assert len(storage.blobs) == 1
    (blob_name,) = storage.blobs
    assert blob_name != "smile.png"
    assert storage.blobs[blob_name] == PNG_BYTES

    page = client.get(URLs.SMILEY_INDEX)
    assert f"https://blobs.example.com/smilies/{blob_name}" in page.text
    assert "smile.png" not in page.text


def test_upload_disallowed_extension_rerenders_form(client, storage):
    response = client.post(
        URLs.SMILEY_CREATE,
        files={"file": ("virus.exe", b"x" * 1024, "application/octet-stream")},
    )

    assert response.status_code == 400
    assert "Only .txt, .jpg, and .png files are allowed." in response.text
    assert storage.blobs == {}


def test_upload_empty_file_rerenders_form(client, storage):
    response = client.post(
        URLs.SMILEY_CREATE,
        files={"file": ("empty.txt", b"", "text/plain")},
    )

    assert response.status_code == 400
    assert "Please select a file to upload." in response.text
    assert storage.blobs == {}


def test_upload_oversized_file_rerenders_form(client, storage):
    response = client.post(
        URLs.SMILEY_CREATE,
        files={"file": ("huge.png", b"x" * (10 * 1024 * 1024 + 1), "image/png")},
    )

    assert response.status_code == 400
    assert "File size must not exceed 10 MB." in response.text
    assert storage.blobs == {}


def test_upload_storage_unavailable_rerenders_form(unavailable_client):
    response = unavailable_client.post(
        URLs.SMILEY_CREATE,
        files={"file": ("smile.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 503
    assert "currently unavailable" in response.text
    assert 'enctype="multipart/form-data"' in response.text


def test_index_storage_unavailable_shows_error_page(unavailable_client):
    response = unavailable_client.get(URLs.SMILEY_INDEX)

    assert response.status_code == 503
    assert "currently unavailable" in response.text
    assert "connection refused" not in response.text


def test_delete_confirmation_page(client):
    response = client.get(URLs.SMILEY_DELETE)

    assert response.status_code == 200
    assert "Are you sure" in response.text


def test_delete_purges_and_redirects(client, storage):
    for _ in range(2):
        client.post(URLs.SMILEY_CREATE, files={"file": ("smile.png", PNG_BYTES, "image/png")})
    assert len(storage.blobs) == 2

    response = client.post(URLs.SMILEY_DELETE, follow_redirects=False)

    assert response.status_code == 303
    assert storage.blobs == {}
    assert "No smilies uploaded yet." in client.get(URLs.SMILEY_INDEX).text


def test_delete_storage_unavailable_shows_error_page(unavailable_client):
    response = unavailable_client.post(URLs.SMILEY_DELETE)

    assert response.status_code == 503
    assert "currently unavailable" in response.text


def test_invalid_upload_reported_even_when_storage_unavailable(unavailable_client):
    response = unavailable_client.post(
        URLs.SMILEY_CREATE,
        files={"file": ("virus.exe", b"x" * 1024, "application/octet-stream")},
    )

    assert response.status_code == 400
    assert "Only .txt, .jpg, and .png files are allowed." in response.text
    assert "currently unavailable" not in response.text


def test_rejected_upload_does_not_create_container(client, storage):
    response = client.post(
        URLs.SMILEY_CREATE,
        files={"file": ("empty.txt", b"", "text/plain")},
    )

    assert response.status_code == 400
    assert storage.container_created is False
