"""Shared path utilities for configuration and data locations.

This module centralizes how the library discovers its storage root.

Policy:
- Root: ``<local application data>/Mercury`` unless overridden by
  ``MERCURY_ROOT_DIR``. Local application data is ``%LOCALAPPDATA%`` on
  Windows and ``$XDG_DATA_HOME`` (falling back to ``~/.local/share``)
  elsewhere.
- Config: ``<root>/config.toml``
- Logs: ``<root>/logs/mercury.log``
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from collections.abc import Mapping
from typing import Callable, Final


ROOT_DIR_ENV_VAR: Final[str] = "MERCURY_ROOT_DIR"
APP_DIR_NAME: Final[str] = "Mercury"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def local_application_data(env: Mapping[str, str] | None = None) -> Path:
    """Return the per-user local application data directory.

    Args:
        env: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Path: ``%LOCALAPPDATA%`` on Windows, ``$XDG_DATA_HOME`` or
        ``~/.local/share`` elsewhere.
    """
    mapping = env if env is not None else os.environ
    if sys.platform == "win32":
        local = (mapping.get("LOCALAPPDATA") or "").strip()
        if local:
            return Path(local)
        return Path.home() / "AppData" / "Local"

    xdg = (mapping.get("XDG_DATA_HOME") or "").strip()
    if xdg:
        return Path(xdg)
    return Path.home() / ".local" / "share"


def default_root_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the default storage root directory."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=ROOT_DIR_ENV_VAR,
        default_factory=lambda: local_application_data(env) / APP_DIR_NAME,
    )


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the default path to the TOML config file."""

    return (default_root_dir(env) / "config.toml").resolve()


def default_log_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the default directory for log files."""

    return (default_root_dir(env) / "logs").resolve()


def default_log_file(env: Mapping[str, str] | None = None) -> Path:
    """Get the default log file path."""

    return (default_log_dir(env) / "mercury.log").resolve()


__all__ = [
    "APP_DIR_NAME",
    "ROOT_DIR_ENV_VAR",
    "local_application_data",
    "default_root_dir",
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "resolve_overridable_path",
]
