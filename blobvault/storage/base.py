"""
Abstract base class for storage providers.

This module defines the contract every backend implements: local
filesystem here, object-storage services elsewhere. Callers written
against StorageProvider can switch backends without code changes.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from blobvault.storage.models import BlobMetadata
from blobvault.storage.streams import BlobSource, BlobStream


class StorageProvider(ABC):
    """
    Abstract base class for blob storage providers.

    Blobs are named binary objects grouped into named containers. All
    operations are coroutines and validate names before touching storage;
    every failure is raised as a StorageException whose kind is identical
    across backends.
    """

    provider_name: str = "Abstract"

    @abstractmethod
    async def save_blob_stream(
        self,
        container: str,
        blob_name: str,
        source: BlobSource,
    ) -> None:
        """
        Persist a blob, creating the container if needed.

        An existing blob with the same name is overwritten.

        Args:
            container: Container name
            blob_name: Blob name
            source: bytes, a binary file object (sync or async) or an
                async iterable of byte chunks

        Raises:
            StorageException: INVALID_NAME for malformed names,
                WRITE_FAILED if the content cannot be persisted
        """
        pass

    @abstractmethod
    async def get_blob_stream(self, container: str, blob_name: str) -> BlobStream:
        """
        Open a blob for reading.

        The returned stream must be closed by the caller.

        Args:
            container: Container name
            blob_name: Blob name

        Returns:
            BlobStream with ``length`` set to the blob size

        Raises:
            StorageException: NOT_FOUND if the blob doesn't exist
        """
        pass

    @abstractmethod
    async def get_blob_file_info(self, container: str, blob_name: str) -> BlobMetadata:
        """
        Get metadata for a blob without reading its content.

        Raises:
            StorageException: NOT_FOUND if the blob doesn't exist
        """
        pass

    @abstractmethod
    async def delete_blob(self, container: str, blob_name: str) -> None:
        """
        Delete a single blob. Sibling blobs are left untouched.

        Raises:
            StorageException: NOT_FOUND if the blob doesn't exist
        """
        pass

    @abstractmethod
    async def delete_container(self, container: str) -> None:
        """
        Delete a container and every blob in it.

        Raises:
            StorageException: NOT_FOUND if the container doesn't exist
        """
        pass

    @abstractmethod
    async def list_blobs(self, container: str) -> list[BlobMetadata]:
        """
        List the blobs in a container, ordered by name.

        Returns:
            List of metadata, empty when the container holds no blobs

        Raises:
            StorageException: NOT_FOUND if the container doesn't exist
        """
        pass

    @abstractmethod
    async def get_blob_url(
        self,
        container: str,
        blob_name: str,
        expiry: datetime | timedelta | None = None,
    ) -> str:
        """
        Get a URL for a blob, optionally signed to expire.

        Args:
            container: Container name
            blob_name: Blob name
            expiry: Expiry time or lifetime of a signed URL; None for a plain URL

        Returns:
            URL string

        Raises:
            StorageException: NOT_FOUND if the blob doesn't exist,
                NOT_SUPPORTED if the backend cannot sign URLs
        """
        pass

    @abstractmethod
    async def create_container(self, container: str) -> None:
        """
        Create a container. Creating an existing container is a no-op.

        Raises:
            StorageException: INVALID_NAME for a malformed name
        """
        pass

    @abstractmethod
    async def blob_exists(self, container: str, blob_name: str) -> bool:
        """Check if a blob exists."""
        pass

    @abstractmethod
    async def container_exists(self, container: str) -> bool:
        """Check if a container exists."""
        pass
