"""
Smiley API schemas.

A smiley is a stored blob seen from the outside: its key and the public URL
it can be fetched from.
"""
from pydantic import BaseModel


class Smiley(BaseModel):
    """A file stored in the smilies container."""

    file_name: str
    """Blob key (randomly generated at upload time)."""

    url: str
    """Public URL of the blob."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "file_name": "k3f9x0qa.7bz",
                    "url": "https://account.blob.core.windows.net/smilies/k3f9x0qa.7bz",
                }
            ]
        }
    }


class PurgeResult(BaseModel):
    """Result of deleting every smiley."""

    deleted: int
    """Number of blobs deleted by this call."""
