"""
Tests for ContainerPathResolver and name validation.
"""
import os

import pytest

from blobvault.storage.exceptions import StorageErrorKind, StorageException
from blobvault.storage.paths import (
    ContainerPathResolver,
    validate_blob_name,
    validate_container_name,
)


@pytest.fixture
def resolver(tmp_path):
    return ContainerPathResolver(tmp_path)


class TestResolve:
    """Name to path mapping"""

    def test_container_path(self, resolver, tmp_path):
        assert resolver.resolve("docs") == os.path.join(str(tmp_path), "docs")

    def test_blob_path(self, resolver, tmp_path):
        assert resolver.resolve("docs", "1.txt") == os.path.join(str(tmp_path), "docs", "1.txt")

    def test_relative_root_is_made_absolute(self):
        resolver = ContainerPathResolver("relative/root")
        assert os.path.isabs(resolver.root_path)

    def test_root_is_normalized(self, tmp_path):
        resolver = ContainerPathResolver(str(tmp_path) + os.sep + "a" + os.sep + ".." + os.sep)
        assert resolver.root_path == str(tmp_path)

    def test_resolve_does_not_touch_disk(self, tmp_path):
        resolver = ContainerPathResolver(tmp_path / "does-not-exist")
        resolver.resolve("docs", "1.txt")
        assert not (tmp_path / "does-not-exist").exists()

    @pytest.mark.parametrize("name", ["..", ".", "../etc", "a/b", "a\\b", ""])
    def test_rejects_traversal_in_container(self, resolver, name):
        with pytest.raises(StorageException) as exc_info:
            resolver.resolve(name)
        assert exc_info.value.kind == StorageErrorKind.INVALID_NAME

    @pytest.mark.parametrize("name", ["..", "../../passwd", "sub/file.txt", "..\\win.ini"])
    def test_rejects_traversal_in_blob(self, resolver, name):
        with pytest.raises(StorageException) as exc_info:
            resolver.resolve("docs", name)
        assert exc_info.value.kind == StorageErrorKind.INVALID_NAME


class TestSplit:
    """Path to name mapping"""

    def test_split_blob_path(self, resolver):
        path = resolver.resolve("docs", "1.txt")
        assert resolver.split(path) == ("docs", "1.txt")

    def test_split_container_path(self, resolver):
        path = resolver.resolve("docs")
        assert resolver.split(path) == ("docs", None)

    def test_split_outside_root(self, resolver, tmp_path):
        with pytest.raises(StorageException) as exc_info:
            resolver.split(tmp_path.parent / "elsewhere")
        assert exc_info.value.kind == StorageErrorKind.INVALID_NAME

    def test_split_root_itself(self, resolver, tmp_path):
        with pytest.raises(StorageException):
            resolver.split(tmp_path)

    def test_split_too_deep(self, resolver, tmp_path):
        with pytest.raises(StorageException):
            resolver.split(tmp_path / "docs" / "sub" / "1.txt")


class TestNameValidation:
    """Container and blob name rules"""

    @pytest.mark.parametrize("name", ["docs", "my-container", "2024_reports", "UPPER", "名前"])
    def test_valid_container_names(self, name):
        validate_container_name(name)

    @pytest.mark.parametrize("name", ["1.txt", "archive.tar.gz", ".hidden", "with space.txt"])
    def test_valid_blob_names(self, name):
        validate_blob_name("docs", name)

    @pytest.mark.parametrize(
        "name,reason",
        [
            ("a<b", "reserved"),
            ("a>b", "reserved"),
            ("a:b", "reserved"),
            ('a"b', "reserved"),
            ("a|b", "reserved"),
            ("a?b", "reserved"),
            ("a*b", "reserved"),
            ("a\x00b", "control"),
            ("tab\tname", "control"),
            ("trailing.", "end with"),
            ("trailing ", "end with"),
            ("x" * 256, "exceeds"),
        ],
    )
    def test_invalid_names(self, name, reason):
        with pytest.raises(StorageException) as exc_info:
            validate_blob_name("docs", name)
        assert exc_info.value.kind == StorageErrorKind.INVALID_NAME
        assert reason in exc_info.value.message

    def test_non_string_name(self):
        with pytest.raises(StorageException) as exc_info:
            validate_container_name(None)
        assert exc_info.value.kind == StorageErrorKind.INVALID_NAME

    def test_invalid_container_reported_for_blob_validation(self):
        with pytest.raises(StorageException) as exc_info:
            validate_blob_name("../docs", "1.txt")
        assert exc_info.value.container == "../docs"
