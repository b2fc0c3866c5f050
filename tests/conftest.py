import pytest
from fastapi.testclient import TestClient

from blobvault.dependencies.storage import get_storage
from blobvault.main import app
from blobvault.storage.local import LocalStorageProvider

ROOT_URL = "/api/v1/blobs"


@pytest.fixture
def storage(tmp_path):
    """Local provider rooted in a per-test temporary directory."""
    return LocalStorageProvider(root_path=tmp_path / "store", root_url=ROOT_URL)


@pytest.fixture
def client(storage):
    """Test client with the storage dependency pointed at the test provider."""

    def override_get_storage():
        return storage

    app.dependency_overrides[get_storage] = override_get_storage
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
