"""
Summary: Locate the storage database under the configured root and open it with sqlite3.
Why: Connections share one set of PRAGMAs and one error-to-exception mapping.
"""

import sqlite3
from typing import Any, final

from mercury_storage.config.config import StorageConfig
from mercury_storage.features.path import AbsolutePath
from mercury_storage.platform.filesystem import create_directory
from mercury_storage.platform.logging import logger

from .options import StorageDatabaseOptions


@final
class DatabaseManager:
    """Resolve the database file under the configured storage root and connect."""

    options: StorageDatabaseOptions
    db_path: AbsolutePath | None
    conn: sqlite3.Connection | None

    def __init__(
        self,
        options: StorageDatabaseOptions,
        config: StorageConfig | None = None,
    ) -> None:
        """Initialize database manager.

        Args:
            options: Database options. An empty file name falls back to the
                entry-point name; ``:memory:`` opens an in-memory database.
            config: Storage configuration. If None, it is loaded from the
                default config file and environment.

        Raises:
            StorageOptionsError: The options fail validation.
        """
        options = options.with_default_file_name()
        options.validate()
        self.options = options

        if options.is_memory:
            self.db_path = None
        else:
            storage_config = config if config is not None else StorageConfig.load()
            self.db_path = options.resolve_path(storage_config.database_directory)
        self.conn = None

    def connect(self) -> sqlite3.Connection:
        """Connect to the database, creating its directory first.

        Returns:
            sqlite3.Connection: The open connection.

        Raises:
            PermissionError: The database file cannot be opened.
        """
        if self.conn is not None:
            return self.conn

        connection: sqlite3.Connection | None = None
        try:
            if self.db_path is None:
                connection = sqlite3.connect(":memory:", check_same_thread=False)
            else:
                parent = self.db_path.parent
                if parent is not None:
                    _ = create_directory(parent)
                try:
                    connection = sqlite3.connect(
                        self.options.connection_uri(self.db_path),
                        uri=True,
                        timeout=30.0,
                        check_same_thread=False,
                    )
                except sqlite3.OperationalError as e:
                    if "unable to open database file" in str(e):
                        raise PermissionError(f"Unable to open database at {self.db_path}") from e
                    raise

            _ = connection.execute("PRAGMA foreign_keys = ON")
            _ = connection.execute("PRAGMA busy_timeout = 30000")
        except (sqlite3.Error, PermissionError) as e:
            if connection is not None:
                connection.close()
            logger.error(
                "Failed to connect to database: %s",
                e,
                extra={
                    "storage_event": "storage.database.error",
                    "path": str(self.db_path) if self.db_path else None,
                    "error_message": str(e),
                },
            )
            raise

        self.conn = connection
        logger.debug(
            "Opened database %s",
            self.db_path or ":memory:",
            extra={
                "storage_event": "storage.database.open",
                "path": str(self.db_path) if self.db_path else None,
            },
        )
        return connection

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            try:
                self.conn.close()
                self.conn = None
                logger.debug(
                    "Closed database %s",
                    self.db_path or ":memory:",
                    extra={
                        "storage_event": "storage.database.close",
                        "path": str(self.db_path) if self.db_path else None,
                    },
                )
            except sqlite3.Error as e:
                logger.error("Failed to close database connection: %s", e)

    def __enter__(self) -> "DatabaseManager":
        """Enter context manager."""
        _ = self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        """Exit context manager."""
        self.close()
