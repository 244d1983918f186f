"""Cross-platform absolute paths and storage-directory resolution."""

from mercury_storage.features.path import (
    AbsolutePath,
    EmptySuffixError,
    NotRootedError,
    PathError,
    SeparatorMismatchError,
    SuffixRootedError,
    TraversalAboveRootError,
)
from mercury_storage.config.config import StorageConfig, StorageConfigError

__version__ = "0.1.0"

__all__ = [
    "AbsolutePath",
    "PathError",
    "NotRootedError",
    "TraversalAboveRootError",
    "SuffixRootedError",
    "EmptySuffixError",
    "SeparatorMismatchError",
    "StorageConfig",
    "StorageConfigError",
]
