"""
Tests for content type inference.
"""
import pytest

from blobvault.storage.content_types import CONTENT_TYPES, DEFAULT_CONTENT_TYPE, infer_content_type


@pytest.mark.parametrize(
    "blob_name,expected",
    [
        ("1.txt", "text/plain"),
        ("photo.JPG", "image/jpeg"),
        ("page.html", "text/html"),
        ("data.json", "application/json"),
        ("report.pdf", "application/pdf"),
        ("archive.tar.gz", "application/gzip"),
        ("clip.mp4", "video/mp4"),
    ],
)
def test_known_extensions(blob_name, expected):
    assert infer_content_type(blob_name) == expected


@pytest.mark.parametrize("blob_name", ["README", "file.unknownext", ".gitignore", "trailing.", ""])
def test_falls_back_to_octet_stream(blob_name):
    assert infer_content_type(blob_name) == DEFAULT_CONTENT_TYPE


def test_table_is_read_only():
    with pytest.raises(TypeError):
        CONTENT_TYPES[".new"] = "application/x-new"
