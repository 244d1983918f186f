"""
Summary: Exceptions raised while validating, normalizing, and joining paths.
Why: Give callers one catchable base while keeping each failure distinguishable.
"""

from __future__ import annotations


class PathError(ValueError):
    """Base class for path validation failures."""

    path: str | None

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotRootedError(PathError):
    """Raised when a string lacks a drive root or a Unix root."""

    def __init__(self, path: str | None) -> None:
        super().__init__(f"Path '{path or ''}' must be rooted", path)


class TraversalAboveRootError(PathError):
    """Raised when ``..`` would climb past the root of a path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot normalize '{path}' beyond path root", path)


class SuffixRootedError(PathError):
    """Raised when an absolute suffix is joined onto a base path."""

    def __init__(self, suffix: str) -> None:
        super().__init__(f"Suffix '{suffix}' must not be rooted", suffix)


class EmptySuffixError(PathError):
    """Raised when a join is given nothing to append."""

    def __init__(self, suffix: str | None = None) -> None:
        super().__init__("Suffix must not be empty", suffix)


class SeparatorMismatchError(PathError):
    """Raised when an explicit separator contradicts the root family."""

    def __init__(self, path: str, required: str) -> None:
        family = "Windows" if required == "\\" else "Unix"
        super().__init__(
            f"For {family}-rooted paths the separator must be '{required}'", path
        )


__all__ = [
    "PathError",
    "NotRootedError",
    "TraversalAboveRootError",
    "SuffixRootedError",
    "EmptySuffixError",
    "SeparatorMismatchError",
]
