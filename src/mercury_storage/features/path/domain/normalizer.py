"""
Summary: Pure root detection, segment collapsing, and path combination helpers.
Why: Keep the canonical-form rules in one place, free of filesystem access.
"""

from __future__ import annotations

import os
import re
import string
from typing import Final

from .errors import (
    EmptySuffixError,
    NotRootedError,
    SeparatorMismatchError,
    SuffixRootedError,
    TraversalAboveRootError,
)

WINDOWS_SEPARATOR: Final[str] = "\\"
UNIX_SEPARATOR: Final[str] = "/"
SEPARATORS: Final[str] = WINDOWS_SEPARATOR + UNIX_SEPARATOR

_SAME_DIRECTORY: Final[str] = "."
_UPWARDS_DIRECTORY: Final[str] = ".."
_SEGMENT_SPLIT: Final[re.Pattern[str]] = re.compile(r"[\\/]")


def is_windows_root(root: str | None) -> bool:
    """Return whether ``root`` is exactly a drive root such as ``C:``."""

    return (
        root is not None
        and len(root) == 2
        and root[0] in string.ascii_letters
        and root[1] == ":"
    )


def is_unix_root(root: str | None) -> bool:
    """Return whether ``root`` is exactly the single ``/`` root."""

    return root == UNIX_SEPARATOR


def has_windows_root(path: str | None) -> bool:
    """Return whether ``path`` starts with a drive root."""

    return is_windows_root((path or "")[:2])


def has_unix_root(path: str | None) -> bool:
    """Return whether ``path`` starts with the Unix root."""

    return is_unix_root((path or "")[:1])


def get_path_root(path: str | None) -> str | None:
    """Return the root prefix of ``path`` (``C:`` or ``/``), or None.

    Args:
        path: Raw path string.

    Returns:
        str | None: The root prefix, or None for rootless and empty input.
    """
    if not path:
        return None
    if has_unix_root(path):
        return path[:1]
    if has_windows_root(path):
        return path[:2]
    return None


def has_path_root(path: str | None) -> bool:
    """Return whether ``path`` carries a recognized root."""

    return get_path_root(path) is not None


def separator_for(path: str | None) -> str:
    """Return the canonical separator for the root family of ``path``.

    Rootless paths use the host separator.
    """
    root = get_path_root(path)
    if is_windows_root(root):
        return WINDOWS_SEPARATOR
    if is_unix_root(root):
        return UNIX_SEPARATOR
    return os.sep


def _assert_separator_choice(path: str | None, separator: str | None) -> None:
    if separator is None:
        return

    root = get_path_root(path)
    if not root:
        return

    if is_windows_root(root) and separator != WINDOWS_SEPARATOR:
        raise SeparatorMismatchError(path or "", WINDOWS_SEPARATOR)
    if is_unix_root(root) and separator != UNIX_SEPARATOR:
        raise SeparatorMismatchError(path or "", UNIX_SEPARATOR)


def _trim_base(path: str | None) -> str:
    # The bare Unix root is the only base that keeps its trailing separator.
    if not path:
        return ""
    trimmed = path.rstrip(SEPARATORS)
    if not trimmed and has_unix_root(path):
        return UNIX_SEPARATOR
    return trimmed


def normalize_base(path: str) -> str:
    """Return ``path`` with trailing separators trimmed, terminating drive roots.

    This is the explicit form of "join with nothing": ``C:`` and ``C:\\\\``
    become ``C:\\``, ``/a/`` becomes ``/a`` and ``/`` stays ``/``.

    Args:
        path: Base path string.

    Returns:
        str: Trimmed base path.
    """
    trimmed = _trim_base(path)
    if is_windows_root(trimmed):
        return trimmed + WINDOWS_SEPARATOR
    return trimmed


def combine(left: str | None, right: str, separator: str | None = None) -> str:
    """Join a relative ``right`` suffix onto ``left`` with one separator.

    The result is not normalized; ``..`` and ``.`` segments survive until the
    caller runs :func:`normalize_path`.

    Args:
        left: Base path. Empty bases yield the trimmed suffix unchanged.
        right: Relative suffix.
        separator: Explicit separator; must match the root family of ``left``.

    Returns:
        str: Combined path string.

    Raises:
        EmptySuffixError: ``right`` is empty or consists only of separators.
        SuffixRootedError: ``right`` carries a root.
        SeparatorMismatchError: ``separator`` contradicts the root of ``left``.
    """
    if not right:
        raise EmptySuffixError(right)
    if has_path_root(right):
        raise SuffixRootedError(right)

    suffix = right.strip(SEPARATORS)
    if not suffix.strip():
        raise EmptySuffixError(right)

    base = _trim_base(left)
    if not base.strip():
        return suffix

    _assert_separator_choice(base, separator)
    separator = separator or separator_for(base)

    if is_windows_root(base):
        return f"{base}{WINDOWS_SEPARATOR}{suffix}"
    if is_unix_root(base):
        return f"{base}{suffix}"
    return f"{base}{separator}{suffix}"


def normalize_path(path: str | None, separator: str | None = None) -> str:
    """Collapse duplicate separators and resolve ``.`` and ``..`` segments.

    Rooted input always yields a rooted result. Rootless input is accepted
    and keeps any leading ``..`` run, since there is nothing to resolve them
    against; a rootless path that collapses completely yields ``.``.

    Args:
        path: Raw path string.
        separator: Explicit separator; defaults to the root family's own.

    Returns:
        str: Canonical path string.

    Raises:
        NotRootedError: ``path`` is empty or None.
        TraversalAboveRootError: ``..`` would climb past the root.
        SeparatorMismatchError: ``separator`` contradicts the root of ``path``.
    """
    if not path:
        raise NotRootedError(path)

    _assert_separator_choice(path, separator)
    separator = separator or separator_for(path)
    root = get_path_root(path)
    tail = path[len(root):] if root else path

    segments: list[str] = []
    for segment in _SEGMENT_SPLIT.split(tail):
        if not segment or segment == _SAME_DIRECTORY:
            continue
        if segment == _UPWARDS_DIRECTORY:
            if segments and segments[-1] != _UPWARDS_DIRECTORY:
                _ = segments.pop()
                continue
            if root is not None:
                raise TraversalAboveRootError(path)
        segments.append(segment)

    if root is None:
        return separator.join(segments) or _SAME_DIRECTORY
    if not segments:
        return normalize_base(root)
    # Segments are already split and resolved; only the root needs its separator.
    joined = separator.join(segments)
    if is_windows_root(root):
        return f"{root}{WINDOWS_SEPARATOR}{joined}"
    return f"{UNIX_SEPARATOR}{joined}"


def split_segments(path: str) -> list[str]:
    """Return the non-empty segments after the root of ``path``."""

    root = get_path_root(path)
    tail = path[len(root):] if root else path
    return [segment for segment in _SEGMENT_SPLIT.split(tail) if segment]


__all__ = [
    "WINDOWS_SEPARATOR",
    "UNIX_SEPARATOR",
    "SEPARATORS",
    "is_windows_root",
    "is_unix_root",
    "has_windows_root",
    "has_unix_root",
    "get_path_root",
    "has_path_root",
    "separator_for",
    "normalize_base",
    "combine",
    "normalize_path",
    "split_segments",
]
