"""Tests for loading and saving StorageConfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from mercury_storage.config.config import StorageConfig, StorageConfigError
from mercury_storage.features.path import AbsolutePath


def _root(path: Path) -> AbsolutePath:
    return AbsolutePath.create(str(path.resolve()))


def test_load_without_file_uses_defaults(isolated_env: dict[str, str], tmp_path: Path) -> None:
    config = StorageConfig.load(tmp_path / "missing.toml", env=isolated_env)

    assert config.root_directory == _root(tmp_path / "xdg" / "Mercury")
    assert config.database_directory == config.root_directory / "Databases"
    assert config.log_file is None
    assert not (tmp_path / "missing.toml").exists()


def test_load_reads_file_values(isolated_env: dict[str, str], tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    _ = config_file.write_text(
        "\n".join(
            [
                f"root_directory = '{tmp_path / 'store'}'",
                "database_directory_name = 'db'",
                f"log_file = '{tmp_path / 'app.log'}'",
            ]
        ),
        encoding="utf-8",
    )

    config = StorageConfig.load(config_file, env=isolated_env)

    assert config.root_directory == _root(tmp_path / "store")
    assert config.database_directory == _root(tmp_path / "store" / "db")
    assert config.log_file == _root(tmp_path / "app.log")


def test_precedence_explicit_then_env_then_file(
    isolated_env: dict[str, str], tmp_path: Path
) -> None:
    config_file = tmp_path / "config.toml"
    _ = config_file.write_text(f"root_directory = '{tmp_path / 'file'}'\n", encoding="utf-8")
    env = {**isolated_env, "MERCURY_ROOT_DIR": str(tmp_path / "env")}

    from_file = StorageConfig.load(config_file, env=isolated_env)
    from_env = StorageConfig.load(config_file, env=env)
    explicit = StorageConfig.load(config_file, root_directory=tmp_path / "explicit", env=env)

    assert from_file.root_directory == _root(tmp_path / "file")
    assert from_env.root_directory == _root(tmp_path / "env")
    assert explicit.root_directory == _root(tmp_path / "explicit")


def test_malformed_file_raises(isolated_env: dict[str, str], tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    _ = config_file.write_text("root_directory = [unclosed", encoding="utf-8")

    with pytest.raises(StorageConfigError):
        _ = StorageConfig.load(config_file, env=isolated_env)


def test_non_string_value_raises(isolated_env: dict[str, str], tmp_path: Path) -> None:
    config_file = tmp_path / "config.toml"
    _ = config_file.write_text("database_directory_name = 7\n", encoding="utf-8")

    with pytest.raises(StorageConfigError):
        _ = StorageConfig.load(config_file, env=isolated_env)


def test_save_round_trips(isolated_env: dict[str, str], tmp_path: Path) -> None:
    original = StorageConfig(
        root_directory=_root(tmp_path / "root"),
        database_directory_name="Stores",
        log_file=_root(tmp_path / "logs" / "mercury.log"),
    )
    target = tmp_path / "out" / "config.toml"

    assert original.save(target) == target
    content = target.read_text(encoding="utf-8")
    assert content.startswith("# mercury-storage configuration file")

    assert StorageConfig.load(target, env=isolated_env) == original


def test_create_if_missing_writes_defaults(isolated_env: dict[str, str], tmp_path: Path) -> None:
    target = tmp_path / "fresh" / "config.toml"

    config = StorageConfig.load(target, env=isolated_env, create_if_missing=True)

    assert target.exists()
    assert StorageConfig.load(target, env=isolated_env) == config


@pytest.mark.parametrize(
    "name", ["../elsewhere", "..", ".", "nested/dir", "/absolute", "C:\\db"]
)
def test_database_directory_must_be_a_single_name(tmp_path: Path, name: str) -> None:
    config_file = tmp_path / "config.toml"
    _ = config_file.write_text(
        f"root_directory = '{tmp_path / 'root'}'\ndatabase_directory_name = '{name}'\n",
        encoding="utf-8",
    )

    with pytest.raises(StorageConfigError):
        _ = StorageConfig.load(config_file, env={})


def test_database_directory_stays_under_root(tmp_path: Path) -> None:
    root = _root(tmp_path / "root")

    with pytest.raises(StorageConfigError):
        _ = StorageConfig(root_directory=root, database_directory_name="../elsewhere")
    with pytest.raises(StorageConfigError):
        _ = StorageConfig(root_directory=root, database_directory_name="  ")

    config = StorageConfig(root_directory=root, database_directory_name="Stores/")
    assert config.database_directory == root / "Stores"
    assert config.database_directory.is_relative_to(root)


def test_setup_logging_attaches_configured_file(tmp_path: Path) -> None:
    config = StorageConfig(
        root_directory=_root(tmp_path),
        log_file=_root(tmp_path / "logs" / "mercury.log"),
    )

    logger = config.setup_logging()
    try:
        logger.warning("configured")
        for handler in logger.handlers:
            handler.flush()
        assert (tmp_path / "logs" / "mercury.log").exists()
    finally:
        config_without_file = StorageConfig(root_directory=_root(tmp_path))
        _ = config_without_file.setup_logging()
