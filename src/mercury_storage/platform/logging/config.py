"""
Summary: Build the ``mercury_storage`` logger from a Rich console handler and an optional rotating file.
Why: Storage helpers log through one named logger that callers can reconfigure at any time.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console

from .handlers import StoragePathRichHandler


LOGGER_NAME: Final[str] = "mercury_storage"
LOG_FILE_MAX_BYTES: Final[int] = 10 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 5
_FILE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _rotating_file_handler(log_file: Path, level: int) -> logging.Handler:
    target = log_file.expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Replace the handlers of the ``mercury_storage`` logger.

    Storage events go to stderr through ``StoragePathRichHandler``; when
    ``log_file`` is given they are also written to a rotating file.

    Returns:
        logging.Logger: The reconfigured library logger.
    """
    storage_logger = logging.getLogger(LOGGER_NAME)
    storage_logger.setLevel(logging.DEBUG)
    for handler in list(storage_logger.handlers):
        storage_logger.removeHandler(handler)
        handler.close()

    console_handler = StoragePathRichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    storage_logger.addHandler(console_handler)

    if log_file is not None:
        storage_logger.addHandler(_rotating_file_handler(Path(log_file), file_level))

    return storage_logger


# Console only; file output is opt-in through setup_logger or StorageConfig.
logger: Final[logging.Logger] = setup_logger()


__all__ = ["LOGGER_NAME", "LOG_FILE_MAX_BYTES", "LOG_FILE_BACKUPS", "setup_logger", "logger"]
