#!/usr/bin/env python3
"""
Shared connection handling for the SQL-backed stores.

Each backend keeps one connection behind a reentrant lock. Subclasses say
how to open it and how to begin, commit and roll back a write transaction;
cursor scoping, reconnects and health reporting live here.
"""

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Any

from core.exceptions import StorageConnectionError

logger = logging.getLogger(__name__)


class BaseConnectionManager(ABC):
    """Single shared connection with cursor and transaction context managers."""

    dialect = 'abstract'
    placeholder = '?'
    driver_error = Exception

    def __init__(self, config):
        """
        Open the connection.

        Args:
            config: DatabaseConfig instance

        Raises:
            StorageConnectionError: If the backend cannot be reached
        """
        self.config = config
        self.connection = None
        # Cursors and transactions on the shared connection must not interleave
        self._lock = threading.RLock()
        self._connect()

    @abstractmethod
    def _connect(self) -> None:
        """Open self.connection, raising StorageConnectionError on failure."""

    @abstractmethod
    def _is_open(self) -> bool:
        pass

    @abstractmethod
    def _begin(self, cursor) -> None:
        pass

    @abstractmethod
    def _commit(self, cursor) -> None:
        pass

    @abstractmethod
    def _rollback(self, cursor) -> None:
        pass

    def _describe(self, cursor) -> Dict[str, Any]:
        """Backend details added to the health report."""
        return {}

    def ensure_connection(self) -> None:
        if not self._is_open():
            logger.info(f"Reopening {self.dialect} connection")
            self._connect()

    @contextmanager
    def get_cursor(self):
        """
        Get database cursor as context manager.

        Statements run in autocommit mode unless inside transaction().

        Yields:
            Database cursor
        """
        with self._lock:
            self.ensure_connection()
            cursor = self.connection.cursor()
            try:
                yield cursor
            finally:
                cursor.close()

    @contextmanager
    def transaction(self):
        """
        Execute operations in a single write transaction.

        Commits when the block exits normally, rolls back and re-raises
        otherwise.

        Yields:
            Database cursor within transaction
        """
        with self.get_cursor() as cursor:
            self._begin(cursor)
            try:
                yield cursor
                self._commit(cursor)
            except Exception:
                self._rollback(cursor)
                raise

    def close(self) -> None:
        with self._lock:
            if self._is_open():
                self.connection.close()
                logger.debug(f"{self.dialect} connection closed")
            self.connection = None

    def health_check(self) -> Dict[str, Any]:
        """Run a trivial query and report connectivity."""
        try:
            with self.get_cursor() as cursor:
                cursor.execute("SELECT 1 AS test")
                row = cursor.fetchone()
                status = {
                    'connected': True,
                    'backend': self.dialect,
                    'test_query': row['test'] == 1
                }
                status.update(self._describe(cursor))
                return status
        except (self.driver_error, StorageConnectionError) as e:
            logger.error(f"Store health check failed: {e}")
            return {
                'connected': False,
                'backend': self.dialect,
                'error': str(e)
            }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
