"""
Local filesystem storage implementation.

This module provides the filesystem-backed storage provider with async
file operations. Containers are directories and blobs are plain files:

    <root_path>/<container>/<blob_name>

No sidecar metadata is written; content type and timestamps are derived
from the blob name and the file itself on every query.
"""
import asyncio
import os
import shutil
from datetime import datetime, timedelta, timezone
from urllib.parse import quote

import aiofiles
import aiofiles.os

from blobvault.logging_config import setup_logging
from blobvault.storage.base import StorageProvider
from blobvault.storage.content_types import infer_content_type
from blobvault.storage.exceptions import StorageException
from blobvault.storage.models import BlobMetadata
from blobvault.storage.paths import ContainerPathResolver
from blobvault.storage.streams import (
    DEFAULT_CHUNK_SIZE,
    BlobSource,
    BlobStream,
    ensure_supported_source,
    iter_source,
)

logger = setup_logging()


class LocalStorageProvider(StorageProvider):
    """
    Filesystem storage provider with async operations.

    Containers are created implicitly by the first save into them, while
    deleting a container or blob requires it to exist.
    """

    provider_name = "Local"

    def __init__(self, root_path: str | os.PathLike, root_url: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize local storage provider.

        Args:
            root_path: Base directory holding one sub-directory per container
            root_url: Base URL blobs are served from
            chunk_size: Read/write chunk size in bytes
        """
        self._resolver = ContainerPathResolver(root_path)
        self._root_url = root_url
        self._chunk_size = chunk_size

        os.makedirs(self._resolver.root_path, exist_ok=True)

    @property
    def root_path(self) -> str:
        return self._resolver.root_path

    @property
    def root_url(self) -> str:
        return self._root_url

    async def save_blob_stream(
        self,
        container: str,
        blob_name: str,
        source: BlobSource,
    ) -> None:
        """
        Stream a blob to disk in chunks (async).

        Partially written files are left in place when the write fails
        part way through.

        Raises:
            StorageException: INVALID_NAME for malformed names,
                WRITE_FAILED if the write fails
        """
        blob_path = self._resolver.resolve(container, blob_name)
        container_path = os.path.dirname(blob_path)

        # Reject bad sources before "wb" truncates an existing blob
        try:
            ensure_supported_source(source)
        except TypeError as e:
            raise StorageException.unknown("save", e, container, blob_name) from e

        total_size = 0
        try:
            await aiofiles.os.makedirs(container_path, exist_ok=True)

            async with aiofiles.open(blob_path, "wb") as f:
                async for chunk in iter_source(source, self._chunk_size):
                    await f.write(chunk)
                    total_size += len(chunk)

        except StorageException:
            raise
        except OSError as e:
            logger.error(f"Failed to save blob {container}/{blob_name}: {e}")
            raise StorageException.write_failed(container, blob_name, e) from e
        except Exception as e:
            logger.error(f"Failed to save blob {container}/{blob_name}: {e}", exc_info=True)
            raise StorageException.unknown("save", e, container, blob_name) from e

        logger.info(f"Saved blob {container}/{blob_name} ({total_size} bytes)")

    async def get_blob_stream(self, container: str, blob_name: str) -> BlobStream:
        """
        Open a blob for async reading.

        Raises:
            StorageException: NOT_FOUND if the blob doesn't exist
        """
        blob_path = await self._existing_blob_path(container, blob_name)

        try:
            length = (await aiofiles.os.stat(blob_path)).st_size
            handle = await aiofiles.open(blob_path, "rb")
        except FileNotFoundError as e:
            raise StorageException.not_found(container, blob_name) from e
        except OSError as e:
            logger.error(f"Failed to open blob {container}/{blob_name}: {e}")
            raise StorageException.unknown("open", e, container, blob_name) from e

        return BlobStream(
            handle,
            length=length,
            container=container,
            blob_name=blob_name,
            content_type=infer_content_type(blob_name),
            chunk_size=self._chunk_size,
        )

    async def get_blob_file_info(self, container: str, blob_name: str) -> BlobMetadata:
        """
        Build metadata from the blob file's stat data.

        Raises:
            StorageException: NOT_FOUND if the blob doesn't exist
        """
        blob_path = await self._existing_blob_path(container, blob_name)

        try:
            stat = await aiofiles.os.stat(blob_path)
        except FileNotFoundError as e:
            raise StorageException.not_found(container, blob_name) from e
        except OSError as e:
            logger.error(f"Failed to stat blob {container}/{blob_name}: {e}")
            raise StorageException.unknown("stat", e, container, blob_name) from e

        return self._build_metadata(container, blob_name, stat)

    async def delete_blob(self, container: str, blob_name: str) -> None:
        """
        Delete a blob file.

        Raises:
            StorageException: NOT_FOUND if the blob doesn't exist
        """
        blob_path = await self._existing_blob_path(container, blob_name)

        try:
            await aiofiles.os.remove(blob_path)
        except FileNotFoundError as e:
            raise StorageException.not_found(container, blob_name) from e
        except OSError as e:
            logger.error(f"Failed to delete blob {container}/{blob_name}: {e}")
            raise StorageException.unknown("delete", e, container, blob_name) from e

        logger.info(f"Deleted blob {container}/{blob_name}")

    async def delete_container(self, container: str) -> None:
        """
        Delete a container directory and everything in it.

        Raises:
            StorageException: NOT_FOUND if the container doesn't exist
        """
        container_path = await self._existing_container_path(container)

        try:
            await asyncio.to_thread(shutil.rmtree, container_path)
        except FileNotFoundError as e:
            raise StorageException.not_found(container) from e
        except OSError as e:
            logger.error(f"Failed to delete container {container}: {e}")
            raise StorageException.unknown("delete", e, container) from e

        logger.info(f"Deleted container {container}")

    async def list_blobs(self, container: str) -> list[BlobMetadata]:
        """
        List the files directly inside a container, sorted by name.

        Sub-directories are not descended into.

        Raises:
            StorageException: NOT_FOUND if the container doesn't exist
        """
        container_path = await self._existing_container_path(container)

        try:
            entries = await asyncio.to_thread(self._scan_container, container_path)
        except FileNotFoundError as e:
            raise StorageException.not_found(container) from e
        except OSError as e:
            logger.error(f"Failed to list container {container}: {e}")
            raise StorageException.unknown("list", e, container) from e

        return [self._build_metadata(container, name, stat) for name, stat in entries]

    async def get_blob_url(
        self,
        container: str,
        blob_name: str,
        expiry: datetime | timedelta | None = None,
    ) -> str:
        """
        Build the public URL of a blob.

        The local provider has no signing mechanism, so requesting an
        expiring URL always fails, whether or not the blob exists.

        Raises:
            StorageException: NOT_SUPPORTED if expiry is given,
                NOT_FOUND if the blob doesn't exist
        """
        self._resolver.resolve(container, blob_name)
        if expiry is not None:
            raise StorageException.not_supported(
                "Signed URL generation", self.provider_name, container, blob_name
            )

        await self._existing_blob_path(container, blob_name)
        return self._build_url(container, blob_name)

    async def create_container(self, container: str) -> None:
        container_path = self._resolver.resolve(container)

        try:
            await aiofiles.os.makedirs(container_path, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create container {container}: {e}")
            raise StorageException.unknown("create", e, container) from e

    async def blob_exists(self, container: str, blob_name: str) -> bool:
        return await aiofiles.os.path.isfile(self._resolver.resolve(container, blob_name))

    async def container_exists(self, container: str) -> bool:
        return await aiofiles.os.path.isdir(self._resolver.resolve(container))

    async def _existing_blob_path(self, container: str, blob_name: str) -> str:
        """Resolve a blob path, failing with NOT_FOUND unless it is a regular file."""
        blob_path = self._resolver.resolve(container, blob_name)
        if not await aiofiles.os.path.isfile(blob_path):
            raise StorageException.not_found(container, blob_name)
        return blob_path

    async def _existing_container_path(self, container: str) -> str:
        """Resolve a container path, failing with NOT_FOUND unless it is a directory."""
        container_path = self._resolver.resolve(container)
        if not await aiofiles.os.path.isdir(container_path):
            raise StorageException.not_found(container)
        return container_path

    @staticmethod
    def _scan_container(container_path: str) -> list[tuple[str, os.stat_result]]:
        entries = []
        with os.scandir(container_path) as it:
            for entry in it:
                try:
                    if entry.is_file():
                        entries.append((entry.name, entry.stat()))
                except FileNotFoundError:
                    # Deleted between scandir and stat
                    continue
        return sorted(entries, key=lambda item: item[0])

    def _build_url(self, container: str, blob_name: str) -> str:
        """Join root_url, container and blob name with single slashes."""
        return "/".join([
            self._root_url.rstrip("/"),
            quote(container, safe=""),
            quote(blob_name, safe=""),
        ])

    def _build_metadata(self, container: str, blob_name: str, stat: os.stat_result) -> BlobMetadata:
        return BlobMetadata(
            name=blob_name,
            container=container,
            length=stat.st_size,
            content_type=infer_content_type(blob_name),
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            url=self._build_url(container, blob_name),
        )
