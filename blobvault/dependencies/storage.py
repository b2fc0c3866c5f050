"""
Storage dependency injection for FastAPI.

This module provides the FastAPI dependency that builds the configured
storage provider for endpoints.
"""
from blobvault.config import settings
from blobvault.storage.base import StorageProvider
from blobvault.storage.local import LocalStorageProvider


def get_storage() -> StorageProvider:
    """
    Return storage provider based on configuration.

    This allows switching between local and remote storage
    by changing the STORAGE_PROVIDER environment variable.

    Returns:
        StorageProvider instance

    Raises:
        ValueError: If STORAGE_PROVIDER is not supported
    """
    if settings.STORAGE_PROVIDER == "local":
        return LocalStorageProvider(
            root_path=settings.STORAGE_ROOT_PATH,
            root_url=settings.STORAGE_ROOT_URL,
            chunk_size=settings.STORAGE_CHUNK_SIZE_KB * 1024,
        )

    raise ValueError(f"Unknown storage provider: {settings.STORAGE_PROVIDER}")
