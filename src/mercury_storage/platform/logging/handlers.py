"""Rich console handler that renders storage events with compact paths.

Where: platform/logging/handlers.py
What: ``RichHandler`` subclass styling ``storage_event`` records.
Why: Keep filesystem side effects readable without long absolute paths.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, ClassVar

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

from mercury_storage.features.path import AbsolutePath, PathError


class StoragePathRichHandler(RichHandler):
    """Custom Rich handler that displays storage paths in white."""

    _STORAGE_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "storage.directory.create": ("📁", "cyan"),
        "storage.directory.delete": ("🗑️", "red"),
        "storage.file.touch": ("✏️", "blue"),
        "storage.file.delete": ("🗑️", "red"),
        "storage.database.open": ("🗄️", "green"),
        "storage.database.close": ("🔒", "green"),
        "storage.database.error": ("⛔", "red"),
    }
    _STORAGE_LABELS: ClassVar[dict[str, str]] = {
        "storage.directory.create": "Created directory ",
        "storage.directory.delete": "Deleted directory ",
        "storage.file.touch": "Touched ",
        "storage.file.delete": "Deleted ",
        "storage.database.open": "Opened database ",
        "storage.database.close": "Closed database ",
        "storage.database.error": "Database failure ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path with colored separators and compact rendering.

        Args:
            path: Absolute path string to format.
            base: Optional base path used to relativize ``path`` when possible.

        Returns:
            Text: Formatted path with colored separators and ellipsis truncation.
        """
        try:
            value = AbsolutePath.create(path)
        except PathError:
            return self._style_path_string(path, "/")

        separator = value.separator
        body_parts = list(value.parts)
        anchor = str(value.root)

        base_value = self._parse_base(base)
        if base_value is not None and value != base_value and value.is_relative_to(base_value):
            body_parts = body_parts[len(base_value.parts):]
            anchor = ""

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = anchor
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)
        return self._style_path_string(display_string or ".", separator)

    @staticmethod
    def _parse_base(base: str | None) -> AbsolutePath | None:
        if not base:
            return None
        try:
            return AbsolutePath.create(base)
        except PathError:
            return None

    @staticmethod
    def _style_path_string(path_string: str, separator: str) -> Text:
        """Apply Rich styling to the rendered path string."""

        text = Text()
        for char in path_string:
            if char == separator or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_storage_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured storage events with dedicated styling."""

        event = getattr(record, "storage_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._STORAGE_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        label = self._STORAGE_LABELS.get(event)
        if label:
            _ = body.append(label)

        path = getattr(record, "path", None)
        if path:
            _ = body.append_text(
                self._format_path(str(path), base=getattr(record, "base_path", None))
            )

        error_message = getattr(record, "error_message", None)
        if error_message:
            _ = body.append(f" ({error_message})")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for storage events."""

        storage_text = self._render_storage_message(record)
        if storage_text is not None:
            return storage_text

        return super().render_message(record, message)


__all__ = ["StoragePathRichHandler"]
