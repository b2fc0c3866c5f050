"""
Tests for BlobStream and upload source checks.
"""
import io

import pytest

from blobvault.storage.exceptions import StorageErrorKind, StorageException
from blobvault.storage.streams import BlobStream, ensure_supported_source


class FailingCloseHandle:
    """Async file handle whose close() fails like a flush to a full disk."""

    def __init__(self):
        self.close_calls = 0

    async def read(self, size=-1):
        return b""

    async def close(self):
        self.close_calls += 1
        raise OSError(28, "No space left on device")


def _stream(handle):
    return BlobStream(handle, length=0, container="docs", blob_name="1.txt", content_type="text/plain")


@pytest.mark.asyncio
async def test_close_wraps_os_error():
    stream = _stream(FailingCloseHandle())

    with pytest.raises(StorageException) as exc_info:
        await stream.close()

    assert exc_info.value.kind == StorageErrorKind.UNKNOWN
    assert exc_info.value.blob_name == "1.txt"
    assert isinstance(exc_info.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_close_is_idempotent_after_failure():
    handle = FailingCloseHandle()
    stream = _stream(handle)

    with pytest.raises(StorageException):
        await stream.close()
    await stream.close()

    assert stream.closed
    assert handle.close_calls == 1


@pytest.mark.parametrize("source", [b"bytes", bytearray(b"x"), memoryview(b"x"), io.BytesIO(b"x")])
def test_supported_sources(source):
    ensure_supported_source(source)


def test_async_iterable_is_supported():
    async def chunks():
        yield b"x"

    gen = chunks()
    ensure_supported_source(gen)


@pytest.mark.parametrize("source", [12345, None, "text is not bytes", object()])
def test_unsupported_sources(source):
    with pytest.raises(TypeError):
        ensure_supported_source(source)
