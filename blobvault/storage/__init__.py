"""
Storage abstraction layer for blob operations.

This package provides one provider contract for saving, reading, listing
and deleting blobs grouped into containers, with a local filesystem
implementation. Other backends implement the same StorageProvider base.
"""

from blobvault.storage.base import StorageProvider
from blobvault.storage.content_types import DEFAULT_CONTENT_TYPE, infer_content_type
from blobvault.storage.exceptions import StorageErrorKind, StorageException
from blobvault.storage.local import LocalStorageProvider
from blobvault.storage.models import BlobMetadata
from blobvault.storage.paths import (
    ContainerPathResolver,
    validate_blob_name,
    validate_container_name,
)
from blobvault.storage.streams import BlobStream

__all__ = [
    "StorageProvider",
    "LocalStorageProvider",
    "BlobMetadata",
    "BlobStream",
    "ContainerPathResolver",
    "StorageErrorKind",
    "StorageException",
    "DEFAULT_CONTENT_TYPE",
    "infer_content_type",
    "validate_blob_name",
    "validate_container_name",
]
