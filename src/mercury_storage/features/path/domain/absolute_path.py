"""
Summary: Immutable, always-normalized absolute path value with derived accessors.
Why: Give storage code a path type whose root, separator, and equality rules never drift.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import final

from .errors import NotRootedError
from .normalizer import (
    combine,
    get_path_root,
    has_path_root,
    has_windows_root,
    is_unix_root,
    is_windows_root,
    normalize_base,
    normalize_path,
    separator_for,
    split_segments,
)


@final
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class AbsolutePath:
    """Absolute path without distinction between files and directories.

    The stored string is rooted (``C:`` drive or ``/``), uses the separator of
    its root family, and carries no ``.``/``..`` or duplicate separators.
    Drive-rooted values compare case-insensitively; Unix-rooted values
    compare case-sensitively.

    Examples:
        >>> AbsolutePath.create("C:/Users/./me") / "Documents"
        AbsolutePath('C:\\\\Users\\\\me\\\\Documents')
    """

    value: str

    def __post_init__(self) -> None:
        raw = self.value
        if not isinstance(raw, str):
            raise TypeError(f"AbsolutePath expects a string, got {type(raw).__name__}")
        if not has_path_root(raw):
            raise NotRootedError(raw)
        object.__setattr__(self, "value", normalize_path(raw))

    @classmethod
    def create(cls, path: str) -> AbsolutePath:
        """Validate and normalize a rooted string.

        Raises:
            NotRootedError: ``path`` has no drive or Unix root.
            TraversalAboveRootError: ``path`` climbs above its root.
        """
        return cls(path)

    @classmethod
    def resolve(cls, path: str, base: AbsolutePath | None = None) -> AbsolutePath:
        """Create a path from ``path``, joining rootless input onto ``base``.

        Args:
            path: Rooted or relative path string.
            base: Base for relative input; defaults to the working directory.

        Returns:
            AbsolutePath: Normalized absolute value.
        """
        if has_path_root(path):
            return cls(path)
        anchor = base if base is not None else cls(os.getcwd())
        return anchor.join(path)

    # Accessors ---------------------------------------------------------------

    @property
    def separator(self) -> str:
        """Canonical separator for this path's root family."""
        return separator_for(self.value)

    @property
    def is_windows_rooted(self) -> bool:
        return has_windows_root(self.value)

    @property
    def root(self) -> AbsolutePath:
        """The root of this path (``C:\\`` or ``/``)."""
        root = get_path_root(self.value)
        assert root is not None
        return AbsolutePath(normalize_base(root))

    @property
    def is_root(self) -> bool:
        return is_windows_root(self.value.rstrip("\\")) or is_unix_root(self.value)

    @property
    def parts(self) -> tuple[str, ...]:
        """Segments after the root, outermost first."""
        return tuple(split_segments(self.value))

    @property
    def name(self) -> str:
        """Last segment; empty at a root."""
        if self.is_root:
            return ""
        return self.value.rsplit(self.separator, 1)[-1]

    @property
    def stem(self) -> str:
        """Name without its extension."""
        name = self.name
        index = name.rfind(".")
        return name[:index] if index > 0 else name

    @property
    def extension(self) -> str:
        """Extension including the leading dot, or an empty string."""
        name = self.name
        index = name.rfind(".")
        if index <= 0 or index == len(name) - 1:
            return ""
        return name[index:]

    @property
    def parent(self) -> AbsolutePath | None:
        """The directory one level up, or None at a root."""
        if self.is_root:
            return None
        return self.join("..")

    # Derivation --------------------------------------------------------------

    def join(self, suffix: str) -> AbsolutePath:
        """Return the child path reached by appending a relative ``suffix``.

        Raises:
            EmptySuffixError: ``suffix`` is empty.
            SuffixRootedError: ``suffix`` is absolute.
            TraversalAboveRootError: ``suffix`` climbs above the root.
        """
        return AbsolutePath(combine(self.value, suffix))

    def __truediv__(self, suffix: str) -> AbsolutePath:
        if not isinstance(suffix, str):
            return NotImplemented
        return self.join(suffix)

    def concat(self, text: str) -> AbsolutePath:
        """Append raw ``text`` to the string form, e.g. ``.bak``, and re-normalize."""
        return AbsolutePath(self.value + text)

    def is_relative_to(self, other: AbsolutePath) -> bool:
        """Return whether ``other`` is this path or one of its ancestors."""
        depth = len(self.parts) - len(other.parts)
        if depth < 0:
            return False
        ancestor: AbsolutePath | None = self
        for _ in range(depth):
            assert ancestor is not None
            ancestor = ancestor.parent
        return ancestor == other

    # Value semantics ---------------------------------------------------------

    def _comparison_key(self) -> str:
        return self.value.lower() if self.is_windows_rooted else self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbsolutePath):
            return NotImplemented
        if self.is_windows_rooted != other.is_windows_rooted:
            return False
        return self._comparison_key() == other._comparison_key()

    def __hash__(self) -> int:
        return hash(self._comparison_key())

    def __str__(self) -> str:
        return self.value

    def __fspath__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"AbsolutePath({self.value!r})"


__all__ = ["AbsolutePath"]
