"""
Tests for the StorageException taxonomy.
"""
from blobvault.storage.exceptions import StorageErrorKind, StorageException


def test_not_found_message_names_blob_and_container():
    exc = StorageException.not_found("docs", "1.txt")

    assert exc.kind == StorageErrorKind.NOT_FOUND
    assert exc.container == "docs"
    assert exc.blob_name == "1.txt"
    assert "1.txt" in str(exc) and "docs" in str(exc)


def test_not_found_for_container():
    exc = StorageException.not_found("docs")

    assert exc.blob_name is None
    assert "container 'docs'" in exc.message


def test_write_failed_includes_cause():
    exc = StorageException.write_failed("docs", "1.txt", OSError(28, "No space left on device"))

    assert exc.kind == StorageErrorKind.WRITE_FAILED
    assert "No space left on device" in exc.message


def test_not_supported_names_provider():
    exc = StorageException.not_supported("Signed URL generation", "Local")

    assert exc.kind == StorageErrorKind.NOT_SUPPORTED
    assert "Local" in exc.message


def test_kind_values_are_stable():
    assert {kind.value for kind in StorageErrorKind} == {
        "not_found",
        "invalid_name",
        "write_failed",
        "not_supported",
        "unknown",
    }
