"""Shared pytest fixtures for storage-facing tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from mercury_storage.config.config import StorageConfig
from mercury_storage.features.path import AbsolutePath


@pytest.fixture
def storage_root(tmp_path: Path) -> AbsolutePath:
    """Provide a temporary storage root as an ``AbsolutePath``."""

    return AbsolutePath.create(str(tmp_path))


@pytest.fixture
def storage_config(storage_root: AbsolutePath) -> StorageConfig:
    """Provide a configuration rooted in a temporary directory."""

    return StorageConfig(root_directory=storage_root.join("Mercury"))
