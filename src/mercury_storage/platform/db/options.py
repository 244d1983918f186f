"""
Summary: Validated options naming the storage database file and how it is opened.
Why: Every validation failure is reported at once before any file is created.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Final

from mercury_storage.features.path import AbsolutePath
from mercury_storage.features.path.domain.normalizer import split_segments

MEMORY_DATABASE: Final[str] = ":memory:"
DATABASE_EXTENSION: Final[str] = ".db3"
MAX_FILE_NAME_LENGTH: Final[int] = 255


class StorageOptionsError(ValueError):
    """Raised when database options fail validation.

    All failing rules are reported at once through ``messages``.
    """

    messages: tuple[str, ...]

    def __init__(self, messages: list[str]) -> None:
        super().__init__("; ".join(messages))
        self.messages = tuple(messages)


class OpenMode(str, Enum):
    """SQLite URI ``mode`` used when opening the database file."""

    READ_ONLY = "ro"
    READ_WRITE = "rw"
    READ_WRITE_CREATE = "rwc"


def entry_point_name() -> str | None:
    """Return the running program's name, used when no file name is given."""

    if not sys.argv or not sys.argv[0]:
        return None
    stem = Path(sys.argv[0]).stem
    return stem or None


@dataclass(slots=True, frozen=True)
class StorageDatabaseOptions:
    """Options for the storage database.

    Only the last segment of ``file_name`` is used; the ``.db3`` extension is
    appended when resolving the database file.
    """

    file_name: str
    open_mode: OpenMode = OpenMode.READ_WRITE_CREATE
    shared_cache: bool = True

    @property
    def is_memory(self) -> bool:
        return self.file_name == MEMORY_DATABASE

    def validate(self) -> None:
        """Check every rule and raise once with all failures.

        Raises:
            StorageOptionsError: One or more rules failed.
        """
        messages: list[str] = []
        if self.file_name is None:  # pyright: ignore[reportUnnecessaryComparison]
            messages.append("The file name is required.")
        elif not self.file_name:
            messages.append("The file name cannot be null or empty.")
        elif len(self.file_name) > MAX_FILE_NAME_LENGTH:
            messages.append(
                f"The file name must have at most {MAX_FILE_NAME_LENGTH} characters."
            )
        elif not self.is_memory and not split_segments(self.file_name):
            messages.append("The file name must contain a name segment.")

        if not isinstance(self.open_mode, OpenMode):
            messages.append("The open mode is invalid.")

        if messages:
            raise StorageOptionsError(messages)

    def with_default_file_name(self, fallback: str | None = None) -> StorageDatabaseOptions:
        """Fill an empty file name from ``fallback`` or the entry-point name."""

        if self.file_name:
            return self
        name = fallback if fallback is not None else entry_point_name()
        if not name:
            return self
        return replace(self, file_name=name)

    def database_file_name(self) -> str:
        """Return ``<name>.db3`` built from the last segment of ``file_name``."""

        segments = split_segments(self.file_name)
        return f"{segments[-1]}{DATABASE_EXTENSION}"

    def resolve_path(self, database_directory: AbsolutePath) -> AbsolutePath:
        """Return the database file location inside ``database_directory``."""

        return database_directory.join(self.database_file_name())

    def connection_uri(self, database_path: AbsolutePath) -> str:
        """Return the SQLite URI for ``database_path`` honoring mode and cache."""

        query = f"mode={self.open_mode.value}"
        if self.shared_cache:
            query += "&cache=shared"
        return f"{Path(database_path).as_uri()}?{query}"


__all__ = [
    "MEMORY_DATABASE",
    "DATABASE_EXTENSION",
    "MAX_FILE_NAME_LENGTH",
    "OpenMode",
    "StorageDatabaseOptions",
    "StorageOptionsError",
    "entry_point_name",
]
