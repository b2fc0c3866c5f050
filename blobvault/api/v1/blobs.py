"""
Blob API endpoints.

This module exposes the storage provider over HTTP: container listing,
creation and deletion, blob upload, streamed download, metadata and URL
lookup. The download route is the one local blob URLs point at.

StorageException is translated to an HTTP error by the handler in
blobvault.main, so endpoints let it propagate.
"""
from datetime import timedelta
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from blobvault.dependencies.storage import get_storage
from blobvault.logging_config import setup_logging
from blobvault.schemas.blobs import BlobListResponseData, BlobUrlResponseData
from blobvault.schemas.common import APIResponse, ErrorResponse
from blobvault.storage.base import StorageProvider
from blobvault.storage.models import BlobMetadata
from blobvault.storage.streams import BlobStream

# Storage error bodies, documented for every route
ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid container or blob name"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Container or blob not found"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Unexpected storage failure"},
    status.HTTP_501_NOT_IMPLEMENTED: {"model": ErrorResponse, "description": "Not supported by this provider"},
    status.HTTP_507_INSUFFICIENT_STORAGE: {"model": ErrorResponse, "description": "Blob could not be written"},
}

router = APIRouter(prefix="/blobs", tags=["blobs"], responses=ERROR_RESPONSES)

logger = setup_logging()


@router.get(
    "/{container}",
    response_model=APIResponse[BlobListResponseData],
    status_code=status.HTTP_200_OK,
)
async def list_blobs(
    container: str,
    storage: StorageProvider = Depends(get_storage),
):
    """
    List the blobs in a container, ordered by name.

    Raises:
        StorageException NOT_FOUND (404): Container doesn't exist
    """
    blobs = await storage.list_blobs(container)
    return APIResponse(
        success=True,
        data=BlobListResponseData(container=container, count=len(blobs), blobs=blobs),
    )


@router.put(
    "/{container}",
    status_code=status.HTTP_201_CREATED,
)
async def create_container(
    container: str,
    storage: StorageProvider = Depends(get_storage),
):
    """Create a container. Existing containers are left as they are."""
    await storage.create_container(container)
    return APIResponse(success=True, data={"container": container})


@router.delete(
    "/{container}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_container(
    container: str,
    storage: StorageProvider = Depends(get_storage),
):
    """
    Delete a container and all of its blobs.

    Raises:
        StorageException NOT_FOUND (404): Container doesn't exist
    """
    await storage.delete_container(container)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{container}/{blob_name}",
    response_model=APIResponse[BlobMetadata],
    status_code=status.HTTP_201_CREATED,
)
async def upload_blob(
    container: str,
    blob_name: str,
    request: Request,
    storage: StorageProvider = Depends(get_storage),
):
    """
    Save the raw request body as a blob.

    The body is streamed to storage without buffering it in memory. The
    container is created if it doesn't exist yet; an existing blob is
    overwritten.

    Raises:
        StorageException INVALID_NAME (400): Malformed container or blob name
        StorageException WRITE_FAILED (507): Content could not be persisted
    """
    await storage.save_blob_stream(container, blob_name, request.stream())
    info = await storage.get_blob_file_info(container, blob_name)
    logger.info(f"Blob uploaded: {container}/{blob_name} ({info.length} bytes)")
    return APIResponse(success=True, data=info)


@router.get(
    "/{container}/{blob_name}",
    status_code=status.HTTP_200_OK,
)
async def download_blob(
    container: str,
    blob_name: str,
    storage: StorageProvider = Depends(get_storage),
):
    """
    Stream a blob's content.

    The response media type is inferred from the blob name.

    Raises:
        StorageException NOT_FOUND (404): Blob doesn't exist
    """
    stream = await storage.get_blob_stream(container, blob_name)

    return StreamingResponse(
        _stream_and_close(stream),
        media_type=stream.content_type,
        headers={"Content-Length": str(stream.length)},
        background=BackgroundTask(stream.close),
    )


@router.get(
    "/{container}/{blob_name}/info",
    response_model=APIResponse[BlobMetadata],
    status_code=status.HTTP_200_OK,
)
async def get_blob_info(
    container: str,
    blob_name: str,
    storage: StorageProvider = Depends(get_storage),
):
    """
    Get blob metadata without downloading the content.

    Raises:
        StorageException NOT_FOUND (404): Blob doesn't exist
    """
    info = await storage.get_blob_file_info(container, blob_name)
    return APIResponse(success=True, data=info)


@router.get(
    "/{container}/{blob_name}/url",
    response_model=APIResponse[BlobUrlResponseData],
    status_code=status.HTTP_200_OK,
)
async def get_blob_url(
    container: str,
    blob_name: str,
    expires_in: int | None = Query(None, gt=0, description="Lifetime of a signed URL in seconds"),
    storage: StorageProvider = Depends(get_storage),
):
    """
    Get the URL of a blob.

    Raises:
        StorageException NOT_FOUND (404): Blob doesn't exist
        StorageException NOT_SUPPORTED (501): expires_in given for a
            provider that cannot sign URLs
    """
    expiry = timedelta(seconds=expires_in) if expires_in is not None else None
    url = await storage.get_blob_url(container, blob_name, expiry)
    return APIResponse(success=True, data=BlobUrlResponseData(url=url))


@router.delete(
    "/{container}/{blob_name}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_blob(
    container: str,
    blob_name: str,
    storage: StorageProvider = Depends(get_storage),
):
    """
    Delete a blob.

    Raises:
        StorageException NOT_FOUND (404): Blob doesn't exist
    """
    await storage.delete_blob(container, blob_name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _stream_and_close(stream: BlobStream) -> AsyncIterator[bytes]:
    # Closes the file even when the client disconnects mid-download
    async with stream:
        async for chunk in stream:
            yield chunk
