"""Configuration management for mercury-storage.

The resolved storage locations travel as a ``StorageConfig`` value passed to
whatever needs them; there is no process-wide instance.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mercury_storage.config.file_ops import write_text_file
from mercury_storage.config.paths import (
    APP_DIR_NAME,
    ROOT_DIR_ENV_VAR,
    default_config_path,
    local_application_data,
    resolve_overridable_path,
)
from mercury_storage.features.path import AbsolutePath, PathError, has_path_root
from mercury_storage.features.path.domain.normalizer import split_segments
from mercury_storage.platform.logging import logger, setup_logger

DATABASE_DIRECTORY_NAME_DEFAULT = "Databases"


class StorageConfigError(ValueError):
    """Raised when the configuration file cannot be parsed or validated."""


@dataclass(slots=True, frozen=True)
class StorageConfig:
    """Resolved storage locations."""

    # Root of everything the library writes
    root_directory: AbsolutePath

    # Directory under the root holding the .db3 files
    database_directory_name: str = DATABASE_DIRECTORY_NAME_DEFAULT

    # Optional log file
    log_file: AbsolutePath | None = None

    def __post_init__(self) -> None:
        # The database directory must stay directly under the root.
        name = self.database_directory_name
        segments = split_segments(name)
        if (
            has_path_root(name)
            or len(segments) != 1
            or segments[0] in (".", "..")
            or not segments[0].strip()
        ):
            raise StorageConfigError(
                f"database_directory_name must be a single directory name, got '{name}'"
            )

    @property
    def database_directory(self) -> AbsolutePath:
        """Location where all ``.db3`` files are stored."""
        return self.root_directory.join(self.database_directory_name)

    def setup_logging(self, console_level: int = logging.INFO) -> logging.Logger:
        """Reconfigure the library logger, adding the configured log file."""
        log_file = Path(self.log_file) if self.log_file is not None else None
        return setup_logger(log_file=log_file, console_level=console_level)

    def save(self, target: Path | None = None) -> Path:
        """Save configuration as commented TOML.

        Args:
            target: Destination file. Defaults to ``default_config_path()``.

        Returns:
            Path: The written file.
        """
        destination = target if target is not None else default_config_path()
        try:
            write_text_file(destination, self._render_toml())
            logger.info("Configuration saved to %s", destination)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        return destination

    def _render_toml(self) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []
        lines.append("# mercury-storage configuration file")
        lines.append("")

        lines.append("# Root directory for all storage files")
        lines.append(f"# Overridden by the {ROOT_DIR_ENV_VAR} environment variable")
        lines.append(f"root_directory = {self._format_toml_value(str(self.root_directory))}")
        lines.append("")

        lines.append("# Directory name, under the root, holding the database files")
        lines.append(
            f"database_directory_name = {self._format_toml_value(self.database_directory_name)}"
        )
        lines.append("")

        lines.append("# Log file path (optional)")
        if self.log_file is not None:
            lines.append(f"log_file = {self._format_toml_value(str(self.log_file))}")
        lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _format_toml_value(value: str) -> str:
        # Literal strings keep Windows backslashes intact.
        if "'" not in value:
            return f"'{value}'"
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    @classmethod
    def load(
        cls,
        config_file: Path | None = None,
        *,
        root_directory: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        create_if_missing: bool = False,
    ) -> StorageConfig:
        """Load configuration from file, environment, and explicit overrides.

        The root directory resolves from, in order: ``root_directory``, the
        ``MERCURY_ROOT_DIR`` environment variable, the file's
        ``root_directory`` key, then ``<local application data>/Mercury``.

        Args:
            config_file: TOML file to read. Defaults to ``default_config_path()``.
            root_directory: Explicit root override.
            env: Environment mapping. Defaults to ``os.environ``.
            create_if_missing: Write the resolved defaults when the file is absent.

        Returns:
            StorageConfig: Loaded configuration.

        Raises:
            StorageConfigError: The file is malformed or holds invalid values.
        """
        config_path = config_file if config_file is not None else default_config_path(env)
        config_dict = cls._read_file(config_path)

        file_root = cls._optional_str(config_dict, "root_directory")
        resolved_root = resolve_overridable_path(
            explicit_path=root_directory,
            env=env,
            env_var=ROOT_DIR_ENV_VAR,
            default_factory=lambda: Path(file_root)
            if file_root
            else local_application_data(env) / APP_DIR_NAME,
        )

        database_directory_name = (
            cls._optional_str(config_dict, "database_directory_name")
            or DATABASE_DIRECTORY_NAME_DEFAULT
        )
        log_file = cls._optional_str(config_dict, "log_file")

        try:
            config = cls(
                root_directory=AbsolutePath.create(str(resolved_root)),
                database_directory_name=database_directory_name,
                log_file=AbsolutePath.resolve(log_file) if log_file else None,
            )
            _ = config.database_directory
        except PathError as e:
            logger.error("Invalid storage configuration: %s", e)
            raise StorageConfigError(f"Invalid storage configuration: {e}") from e

        if not config_dict and create_if_missing and not config_path.exists():
            _ = config.save(config_path)
            logger.info("Created default configuration at %s", config_path)

        return config

    @staticmethod
    def _read_file(config_path: Path) -> dict[str, Any]:
        if not config_path.exists():
            return {}
        try:
            with open(config_path, "rb") as f:
                config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error("Failed to load configuration: %s", e)
            raise StorageConfigError(f"Malformed configuration file {config_path}: {e}") from e

        logger.info("Configuration loaded from %s", config_path)
        return config_dict

    @staticmethod
    def _optional_str(config_dict: Mapping[str, Any], key: str) -> str | None:
        value = config_dict.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageConfigError(f"Configuration key '{key}' must be a string")
        value = value.strip()
        return value or None


__all__ = [
    "DATABASE_DIRECTORY_NAME_DEFAULT",
    "StorageConfig",
    "StorageConfigError",
]
