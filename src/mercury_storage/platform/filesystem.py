"""
Summary: Thin filesystem helpers over ``AbsolutePath``; deletes of missing targets are no-ops.
Why: Storage code touches the disk only through rooted paths, logging each side effect.
"""

from __future__ import annotations

import fnmatch
import os
import shutil
import stat
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path

from mercury_storage.features.path import AbsolutePath
from mercury_storage.platform.logging import logger


def to_path(path: AbsolutePath) -> Path:
    """Return a ``pathlib.Path`` view of ``path``."""

    return Path(os.fspath(path))


# Existence -------------------------------------------------------------------


def file_exists(path: AbsolutePath | None) -> bool:
    """Return True when ``path`` is an existing regular file."""

    return path is not None and os.path.isfile(path)


def directory_exists(path: AbsolutePath | None) -> bool:
    """Return True when ``path`` is an existing directory."""

    return path is not None and os.path.isdir(path)


def existing_file(path: AbsolutePath | None) -> AbsolutePath | None:
    """Return ``path`` if the file exists, otherwise None."""

    return path if file_exists(path) else None


def existing_directory(path: AbsolutePath | None) -> AbsolutePath | None:
    """Return ``path`` if the directory exists, otherwise None."""

    return path if directory_exists(path) else None


def where_file_exists(paths: Iterable[AbsolutePath]) -> list[AbsolutePath]:
    return [path for path in paths if file_exists(path)]


def where_directory_exists(paths: Iterable[AbsolutePath]) -> list[AbsolutePath]:
    return [path for path in paths if directory_exists(path)]


def _iter_matching(
    directory: AbsolutePath, pattern: str, recursive: bool, *, want_files: bool
) -> Iterator[str]:
    for root, dirs, files in os.walk(directory):
        names = files if want_files else dirs
        for name in names:
            if fnmatch.fnmatch(name, pattern):
                yield os.path.join(root, name)
        if not recursive:
            break


def contains_file(path: AbsolutePath, pattern: str, recursive: bool = False) -> bool:
    """Return True when ``path`` holds a file matching ``pattern``.

    Args:
        path: Directory to inspect.
        pattern: ``fnmatch`` pattern, ``*`` as wildcard.
        recursive: Whether to search below the top directory.
    """
    if not directory_exists(path):
        return False
    return next(_iter_matching(path, pattern, recursive, want_files=True), None) is not None


def contains_directory(path: AbsolutePath, pattern: str, recursive: bool = False) -> bool:
    """Return True when ``path`` holds a directory matching ``pattern``."""

    if not directory_exists(path):
        return False
    return next(_iter_matching(path, pattern, recursive, want_files=False), None) is not None


# Creation ----------------------------------------------------------------------


def create_directory(path: AbsolutePath) -> AbsolutePath:
    """Create ``path`` and any missing parents, returning it.

    Raises:
        NotADirectoryError: ``path`` exists but is not a directory.
    """
    if os.path.exists(path):
        if not os.path.isdir(path):
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    os.makedirs(path, exist_ok=True)
    logger.debug(
        "Created directory %s",
        path,
        extra={"storage_event": "storage.directory.create", "path": str(path)},
    )
    return path


def create_or_clean_directory(path: AbsolutePath) -> AbsolutePath:
    """Delete ``path`` if present and recreate it empty."""

    delete_directory(path)
    return create_directory(path)


def touch_file(
    path: AbsolutePath,
    time: datetime | None = None,
    create_directories: bool = True,
) -> AbsolutePath:
    """Create ``path`` if missing and set its modification time.

    Args:
        path: File to touch.
        time: Timestamp to apply. Defaults to now.
        create_directories: Whether to create the parent directory first.

    Returns:
        AbsolutePath: ``path``.
    """
    parent = path.parent
    if create_directories and parent is not None:
        _ = create_directory(parent)

    if not os.path.exists(path):
        with open(path, "wb"):
            pass

    timestamp = (time or datetime.now()).timestamp()
    os.utime(path, (timestamp, timestamp))
    logger.debug(
        "Touched file %s",
        path,
        extra={"storage_event": "storage.file.touch", "path": str(path)},
    )
    return path


# Deletion ----------------------------------------------------------------------


def _make_writable(path: str) -> None:
    mode = os.stat(path).st_mode
    os.chmod(path, mode | stat.S_IWRITE)


def delete_file(path: AbsolutePath) -> None:
    """Delete the file at ``path`` when it exists, clearing read-only bits."""

    if not file_exists(path):
        return

    _make_writable(os.fspath(path))
    os.remove(path)
    logger.debug(
        "Deleted file %s",
        path,
        extra={"storage_event": "storage.file.delete", "path": str(path)},
    )


def delete_directory(path: AbsolutePath) -> None:
    """Delete the directory at ``path`` recursively when it exists."""

    if not directory_exists(path):
        return

    for root, _, files in os.walk(path):
        for name in files:
            _make_writable(os.path.join(root, name))

    shutil.rmtree(path)
    logger.debug(
        "Deleted directory %s",
        path,
        extra={"storage_event": "storage.directory.delete", "path": str(path)},
    )


def delete_files(paths: Iterable[AbsolutePath]) -> None:
    for path in paths:
        delete_file(path)


def delete_directories(paths: Iterable[AbsolutePath]) -> None:
    for path in paths:
        delete_directory(path)


# Enumeration -------------------------------------------------------------------


def _list_entries(directory: str, *, want_files: bool) -> list[str]:
    with os.scandir(directory) as entries:
        if want_files:
            names = [entry.path for entry in entries if entry.is_file()]
        else:
            names = [entry.path for entry in entries if entry.is_dir()]
    return sorted(names)


def get_directories(
    path: AbsolutePath, pattern: str = "*", depth: int = 1
) -> Iterator[AbsolutePath]:
    """Yield directories below ``path`` breadth first, sorted per level.

    Args:
        path: Directory to enumerate.
        pattern: ``fnmatch`` pattern applied to directory names.
        depth: Number of levels to descend; 0 yields nothing.

    Raises:
        ValueError: ``depth`` is negative.
    """
    if depth < 0:
        raise ValueError("The depth must be greater than or equal to zero.")
    return _walk_directories(path, pattern, depth)


def _walk_directories(path: AbsolutePath, pattern: str, depth: int) -> Iterator[AbsolutePath]:
    level = [os.fspath(path)]
    while level and depth > 0:
        children = [child for parent in level for child in _list_entries(parent, want_files=False)]
        for child in sorted(children):
            if fnmatch.fnmatch(os.path.basename(child), pattern):
                yield AbsolutePath.create(child)
        depth -= 1
        level = children


def get_files(path: AbsolutePath, pattern: str = "*", depth: int = 1) -> list[AbsolutePath]:
    """Return files below ``path`` up to ``depth`` levels, top level first.

    Raises:
        ValueError: ``depth`` is negative.
    """
    if depth < 0:
        raise ValueError("The depth must be greater than or equal to zero.")
    if depth == 0:
        return []

    files = [
        AbsolutePath.create(entry)
        for entry in _list_entries(os.fspath(path), want_files=True)
        if fnmatch.fnmatch(os.path.basename(entry), pattern)
    ]
    for directory in get_directories(path, depth=depth - 1):
        files.extend(get_files(directory, pattern))
    return files


__all__ = [
    "to_path",
    "file_exists",
    "directory_exists",
    "existing_file",
    "existing_directory",
    "where_file_exists",
    "where_directory_exists",
    "contains_file",
    "contains_directory",
    "create_directory",
    "create_or_clean_directory",
    "touch_file",
    "delete_file",
    "delete_directory",
    "delete_files",
    "delete_directories",
    "get_directories",
    "get_files",
]
