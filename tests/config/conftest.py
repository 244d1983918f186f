"""Shared pytest fixtures for configuration-focused tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Provide an environment mapping whose data home lives under ``tmp_path``."""

    monkeypatch.delenv("MERCURY_ROOT_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return {
        "XDG_DATA_HOME": str(tmp_path / "xdg"),
        "LOCALAPPDATA": str(tmp_path / "xdg"),
    }
