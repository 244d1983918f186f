# Path: `src/mercury_storage/features/path/__init__.py`
# Summary: Export the absolute path value, normalizer helpers, and errors.
# Why: Provide a stable import surface for storage adapters and tests.

from .domain.absolute_path import AbsolutePath
from .domain.errors import (
    EmptySuffixError,
    NotRootedError,
    PathError,
    SeparatorMismatchError,
    SuffixRootedError,
    TraversalAboveRootError,
)
from .domain.normalizer import (
    combine,
    get_path_root,
    has_path_root,
    normalize_base,
    normalize_path,
)

__all__ = [
    "AbsolutePath",
    "PathError",
    "NotRootedError",
    "TraversalAboveRootError",
    "SuffixRootedError",
    "EmptySuffixError",
    "SeparatorMismatchError",
    "combine",
    "get_path_root",
    "has_path_root",
    "normalize_base",
    "normalize_path",
]
