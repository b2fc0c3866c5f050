"""
Readable blob streams and upload source adapters.

BlobStream is what get_blob_stream() hands back: an async, scoped resource
with a known length that the caller must close. iter_source() turns the
different kinds of upload source into one async chunk iterator.
"""
import asyncio
import inspect
from typing import Any, AsyncIterable, AsyncIterator, BinaryIO, Union

from blobvault.storage.exceptions import StorageException

DEFAULT_CHUNK_SIZE = 64 * 1024  # 64KB

BlobSource = Union[bytes, bytearray, memoryview, BinaryIO, AsyncIterable[bytes], Any]


class BlobStream:
    """
    Async readable stream over a blob's content.

    Usage:
        async with await provider.get_blob_stream("docs", "1.txt") as stream:
            data = await stream.read()

    Iterating with ``async for`` yields chunks of ``chunk_size`` bytes.
    """

    def __init__(
        self,
        handle: Any,
        length: int,
        container: str,
        blob_name: str,
        content_type: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._handle = handle
        self.length = length
        self.container = container
        self.blob_name = blob_name
        self.content_type = content_type
        self.chunk_size = chunk_size
        self.closed = False

    async def read(self, size: int = -1) -> bytes:
        """
        Read up to ``size`` bytes, or everything that is left when negative.

        Raises:
            StorageException: UNKNOWN if the stream is closed or the read fails
        """
        if self.closed:
            raise StorageException.unknown(
                "read", ValueError("stream is closed"), self.container, self.blob_name
            )
        try:
            return await self._handle.read(size)
        except OSError as e:
            raise StorageException.unknown("read", e, self.container, self.blob_name) from e

    async def close(self) -> None:
        """
        Release the underlying file handle. Closing twice is a no-op.

        Raises:
            StorageException: UNKNOWN if the handle fails to close
        """
        if self.closed:
            return
        self.closed = True
        try:
            await self._handle.close()
        except OSError as e:
            raise StorageException.unknown("close", e, self.container, self.blob_name) from e

    async def __aenter__(self) -> "BlobStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._iter_chunks()

    async def _iter_chunks(self) -> AsyncIterator[bytes]:
        while chunk := await self.read(self.chunk_size):
            yield chunk


async def iter_source(source: BlobSource, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """
    Normalize an upload source into an async iterator of byte chunks.

    Accepted sources:
    - bytes-like objects
    - async iterables of bytes (generators, BlobStream, request bodies)
    - file objects whose read() is a coroutine (aiofiles handles)
    - synchronous binary file objects, read off the event loop

    Raises:
        TypeError: If the source is none of the above
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        yield bytes(source)
        return

    read = getattr(source, "read", None)
    if read is not None and inspect.iscoroutinefunction(read):
        while chunk := await read(chunk_size):
            yield bytes(chunk)
        return

    if hasattr(source, "__aiter__"):
        async for chunk in source:
            yield bytes(chunk)
        return

    if read is None:
        raise TypeError(f"Unsupported blob source type: {type(source).__name__}")

    while chunk := await asyncio.to_thread(read, chunk_size):
        yield bytes(chunk)


def ensure_supported_source(source: BlobSource) -> None:
    """
    Check that iter_source() can read from ``source`` without consuming it.

    Raises:
        TypeError: If the source is not a supported kind
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return
    if hasattr(source, "__aiter__") or callable(getattr(source, "read", None)):
        return
    raise TypeError(f"Unsupported blob source type: {type(source).__name__}")
