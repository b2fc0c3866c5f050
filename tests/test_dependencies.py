"""
Tests for configuration-driven provider selection.
"""
import pytest

from blobvault.config import settings
from blobvault.dependencies.storage import get_storage
from blobvault.storage.local import LocalStorageProvider


def test_get_storage_builds_local_provider(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "STORAGE_PROVIDER", "local")
    monkeypatch.setattr(settings, "STORAGE_ROOT_PATH", str(tmp_path / "blobs"))
    monkeypatch.setattr(settings, "STORAGE_ROOT_URL", "https://files.example.com")

    storage = get_storage()

    assert isinstance(storage, LocalStorageProvider)
    assert storage.root_path == str(tmp_path / "blobs")
    assert storage.root_url == "https://files.example.com"


def test_get_storage_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "STORAGE_PROVIDER", "carrier-pigeon")

    with pytest.raises(ValueError) as exc_info:
        get_storage()

    assert "carrier-pigeon" in str(exc_info.value)
