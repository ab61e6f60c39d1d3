#!/usr/bin/env python3
"""
SQLite connection for the file-backed (or in-memory) last-analysis store.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Dict, Any

from core.env_loader import PROJECT_ROOT
from core.exceptions import StorageConnectionError
from .connection import BaseConnectionManager

logger = logging.getLogger(__name__)

MEMORY_PATH = ':memory:'


def resolve_sqlite_path(path: str) -> str:
    """Resolve a relative database path against the project root and create its directory."""
    if path == MEMORY_PATH:
        return path
    resolved = Path(path)
    if not resolved.is_absolute():
        resolved = PROJECT_ROOT / resolved
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return str(resolved)


class SQLiteConnectionManager(BaseConnectionManager):
    """One SQLite connection shared by all request threads."""

    dialect = 'sqlite'
    placeholder = '?'
    driver_error = sqlite3.Error

    def __init__(self, config):
        self.path = resolve_sqlite_path(config.sqlite_path)
        super().__init__(config)

    def _connect(self) -> None:
        try:
            # isolation_level=None: autocommit, transactions are opened explicitly
            self.connection = sqlite3.connect(
                self.path,
                timeout=self.config.connection_timeout,
                isolation_level=None,
                check_same_thread=False
            )
        except sqlite3.Error as e:
            raise StorageConnectionError(self.dialect, e)

        self.connection.row_factory = sqlite3.Row
        logger.debug(f"SQLite connection established at {self.path}")

    def _is_open(self) -> bool:
        return self.connection is not None

    def _begin(self, cursor) -> None:
        # Take the write lock up front so other processes on the same file wait
        cursor.execute("BEGIN IMMEDIATE")

    def _commit(self, cursor) -> None:
        cursor.execute("COMMIT")

    def _rollback(self, cursor) -> None:
        cursor.execute("ROLLBACK")

    def _describe(self, cursor) -> Dict[str, Any]:
        return {'version': sqlite3.sqlite_version, 'path': self.path}
