"""
Mapping between container/blob names and filesystem paths.

Resolution is purely lexical: nothing here touches the disk, so the same
name validation can be shared by backends that have no filesystem at all.
"""
import os
import re

from blobvault.storage.exceptions import StorageException

# Characters Windows refuses in file names, rejected on every platform
RESERVED_CHARACTERS = frozenset('<>:"|?*')
_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")
_SEPARATORS = frozenset("/\\")

MAX_NAME_LENGTH = 255


def _check_name(name: str, container: str | None, blob_name: str | None) -> None:
    if not isinstance(name, str) or not name:
        raise StorageException.invalid_name("name must be a non-empty string", container, blob_name)
    if name in (".", ".."):
        raise StorageException.invalid_name("relative path segments are not allowed", container, blob_name)
    if len(name) > MAX_NAME_LENGTH:
        raise StorageException.invalid_name(
            f"name exceeds {MAX_NAME_LENGTH} characters", container, blob_name
        )
    if any(ch in _SEPARATORS for ch in name):
        raise StorageException.invalid_name("path separators are not allowed", container, blob_name)
    if any(ch in RESERVED_CHARACTERS for ch in name):
        raise StorageException.invalid_name("reserved characters are not allowed", container, blob_name)
    if _CONTROL_CHARACTERS.search(name):
        raise StorageException.invalid_name("control characters are not allowed", container, blob_name)
    if name[-1] in (" ", "."):
        raise StorageException.invalid_name("name must not end with a space or dot", container, blob_name)


def validate_container_name(container: str) -> None:
    """
    Check that a container name is safe to use as a directory and URL segment.

    Raises:
        StorageException: INVALID_NAME if the name is malformed
    """
    _check_name(container, container, None)


def validate_blob_name(container: str, blob_name: str) -> None:
    """
    Check that both the container and blob names are well formed.

    Raises:
        StorageException: INVALID_NAME if either name is malformed
    """
    validate_container_name(container)
    _check_name(blob_name, container, blob_name)


class ContainerPathResolver:
    """
    Resolve container and blob names below a fixed root directory.

    Layout: <root_path>/<container>/<blob_name>
    """

    def __init__(self, root_path: str | os.PathLike):
        self.root_path = os.path.normpath(os.path.abspath(os.fspath(root_path)))

    def resolve(self, container: str, blob_name: str | None = None) -> str:
        """
        Get the absolute path of a container, or of a blob inside it.

        Args:
            container: Container name
            blob_name: Optional blob name

        Returns:
            Absolute filesystem path

        Raises:
            StorageException: INVALID_NAME if a name is malformed or the
                resulting path would leave the root
        """
        if blob_name is None:
            validate_container_name(container)
            path = os.path.join(self.root_path, container)
        else:
            validate_blob_name(container, blob_name)
            path = os.path.join(self.root_path, container, blob_name)

        path = os.path.normpath(path)
        if os.path.commonpath([self.root_path, path]) != self.root_path or path == self.root_path:
            raise StorageException.invalid_name("path escapes the storage root", container, blob_name)
        return path

    def split(self, path: str | os.PathLike) -> tuple[str, str | None]:
        """
        Reverse of resolve(): recover (container, blob_name) from a path.

        Args:
            path: Filesystem path below the root

        Returns:
            Tuple of container name and blob name (None for a container path)

        Raises:
            StorageException: INVALID_NAME if the path is not a container or
                blob location under the root
        """
        path = os.path.normpath(os.path.abspath(os.fspath(path)))
        try:
            relative = os.path.relpath(path, self.root_path)
        except ValueError as e:
            # Different drive on Windows
            raise StorageException.invalid_name(f"path '{path}' is outside the storage root") from e

        parts = relative.split(os.sep)
        if relative == os.curdir or parts[0] == os.pardir or len(parts) > 2:
            raise StorageException.invalid_name(
                f"path '{path}' is not a container or blob location"
            )

        if len(parts) == 1:
            validate_container_name(parts[0])
            return parts[0], None

        validate_blob_name(parts[0], parts[1])
        return parts[0], parts[1]
