"""
Storage-specific exceptions.

Every provider reports failures through a single StorageException whose
``kind`` tells the caller what went wrong. Backend errors (OSError, SDK
errors) are wrapped into it at the provider boundary.
"""
from enum import Enum


class StorageErrorKind(str, Enum):
    """Categories of storage failure callers can branch on."""

    NOT_FOUND = "not_found"
    INVALID_NAME = "invalid_name"
    WRITE_FAILED = "write_failed"
    NOT_SUPPORTED = "not_supported"
    UNKNOWN = "unknown"


def _describe(container: str | None, blob_name: str | None) -> str:
    if container is not None and blob_name is not None:
        return f"blob '{blob_name}' in container '{container}'"
    if container is not None:
        return f"container '{container}'"
    if blob_name is not None:
        return f"blob '{blob_name}'"
    return "storage target"


class StorageException(Exception):
    """Raised by every storage provider operation that fails."""

    def __init__(
        self,
        kind: StorageErrorKind,
        message: str,
        container: str | None = None,
        blob_name: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.container = container
        self.blob_name = blob_name
        super().__init__(message)

    def __repr__(self) -> str:
        return f"StorageException(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def not_found(cls, container: str, blob_name: str | None = None) -> "StorageException":
        return cls(
            StorageErrorKind.NOT_FOUND,
            f"Not found: {_describe(container, blob_name)}",
            container=container,
            blob_name=blob_name,
        )

    @classmethod
    def invalid_name(
        cls,
        reason: str,
        container: str | None = None,
        blob_name: str | None = None,
    ) -> "StorageException":
        return cls(
            StorageErrorKind.INVALID_NAME,
            f"Invalid name for {_describe(container, blob_name)}: {reason}",
            container=container,
            blob_name=blob_name,
        )

    @classmethod
    def write_failed(
        cls, container: str, blob_name: str, error: Exception
    ) -> "StorageException":
        return cls(
            StorageErrorKind.WRITE_FAILED,
            f"Failed to write {_describe(container, blob_name)}: {error}",
            container=container,
            blob_name=blob_name,
        )

    @classmethod
    def not_supported(
        cls,
        operation: str,
        provider_name: str,
        container: str | None = None,
        blob_name: str | None = None,
    ) -> "StorageException":
        return cls(
            StorageErrorKind.NOT_SUPPORTED,
            f"{operation} is not supported by the {provider_name} provider",
            container=container,
            blob_name=blob_name,
        )

    @classmethod
    def unknown(
        cls,
        operation: str,
        error: Exception,
        container: str | None = None,
        blob_name: str | None = None,
    ) -> "StorageException":
        return cls(
            StorageErrorKind.UNKNOWN,
            f"Failed to {operation} {_describe(container, blob_name)}: {error}",
            container=container,
            blob_name=blob_name,
        )
