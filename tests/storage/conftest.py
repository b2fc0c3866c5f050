"""
Conftest for storage tests - helpers for seeding a store on disk.
"""
from pathlib import Path

import pytest


@pytest.fixture
def container_path(storage) -> Path:
    """Create the "docs" container directly on disk and return its path."""
    path = Path(storage.root_path) / "docs"
    path.mkdir(parents=True, exist_ok=True)
    return path
