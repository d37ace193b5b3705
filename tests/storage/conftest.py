"""
Shared helpers for storage backend tests.
"""
import pytest


@pytest.fixture
def blob_data():
    """A small blob payload."""
    return b"hello smilies"
