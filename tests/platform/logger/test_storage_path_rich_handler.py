"""Tests for the ``StoragePathRichHandler`` path formatting utilities."""

from __future__ import annotations

import logging
from io import StringIO
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.text import Text

from mercury_storage.platform.logging import StoragePathRichHandler, setup_logger
from mercury_storage.platform.logging.config import LOG_FILE_BACKUPS, LOG_FILE_MAX_BYTES


def _make_handler() -> StoragePathRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return StoragePathRichHandler(console=console)


def _build_record(**extras: Any) -> logging.LogRecord:
    """Create a ``LogRecord`` populated with storage extras for testing."""

    record = logging.LogRecord(
        name="mercury_storage",
        level=logging.DEBUG,
        pathname="test",
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_render_message_truncates_long_absolute_paths() -> None:
    """Long paths should keep only the trailing segments behind an ellipsis."""

    handler = _make_handler()
    record = _build_record(
        storage_event="storage.directory.create",
        path="/home/user/.local/share/Mercury/Databases/archive/2024",
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert plain.startswith("📁 Created directory ")
    assert "…/Mercury/Databases/archive/2024" in plain
    assert "/home/user" not in plain


def test_render_message_relativizes_paths_to_base_directory() -> None:
    """Paths beneath the base directory should render as relative segments."""

    handler = _make_handler()
    base = "/srv/mercury"
    record = _build_record(
        storage_event="storage.file.touch",
        path=f"{base}/Databases/store.db3",
        base_path=base,
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "Databases/store.db3" in plain
    assert "/srv/mercury" not in plain


def test_render_message_handles_windows_paths() -> None:
    """Windows paths keep backslashes and relativize case-insensitively."""

    handler = _make_handler()
    record = _build_record(
        storage_event="storage.database.open",
        path="C:\\Users\\Me\\AppData\\Local\\Mercury\\Databases\\store.db3",
        base_path="c:\\users\\me\\appdata\\local",
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "Mercury\\Databases\\store.db3" in plain
    assert "C:\\Users" not in plain


def test_render_message_appends_error_details() -> None:
    handler = _make_handler()
    record = _build_record(
        storage_event="storage.database.error",
        path="/data/store.db3",
        error_message="unable to open database file",
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)
    assert rendered.plain.endswith("(unable to open database file)")


def test_plain_records_fall_back_to_rich_rendering() -> None:
    handler = _make_handler()
    record = _build_record()

    rendered = handler.render_message(record, "hello")

    assert isinstance(rendered, Text)
    assert rendered.plain == "hello"


def test_setup_logger_adds_rotating_file_handler(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "mercury.log"

    logger = setup_logger(log_file=log_file)
    try:
        logger.info("written to disk")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "written to disk" in log_file.read_text(encoding="utf-8")
        assert any(isinstance(h, StoragePathRichHandler) for h in logger.handlers)
    finally:
        _ = setup_logger()


def test_setup_logger_replaces_handlers_and_rotates(tmp_path: Path) -> None:
    log_file = tmp_path / "mercury.log"

    _ = setup_logger(log_file=log_file)
    logger = setup_logger(log_file=log_file)
    try:
        file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(logger.handlers) == 2
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == LOG_FILE_MAX_BYTES
        assert file_handlers[0].backupCount == LOG_FILE_BACKUPS
    finally:
        _ = setup_logger()
