"""
Blob API schemas.

This module defines Pydantic schemas for blob-related API responses.
Blob metadata itself is returned as the storage layer's BlobMetadata.
"""
from typing import List

from pydantic import BaseModel

from blobvault.storage.models import BlobMetadata


class BlobListResponseData(BaseModel):
    """Blob listing response data."""

    container: str
    """Container that was listed."""

    count: int
    """Number of blobs in the container."""

    blobs: List[BlobMetadata]
    """Blob metadata ordered by name."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "container": "docs",
                    "count": 1,
                    "blobs": [
                        {
                            "name": "1.txt",
                            "container": "docs",
                            "length": 5,
                            "content_type": "text/plain",
                            "last_modified": "2026-01-01T00:00:00Z",
                            "url": "/api/v1/blobs/docs/1.txt",
                        }
                    ],
                }
            ]
        }
    }


class BlobUrlResponseData(BaseModel):
    """Blob URL response data."""

    url: str
    """URL the blob can be fetched from."""
