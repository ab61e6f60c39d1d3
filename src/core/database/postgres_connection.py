#!/usr/bin/env python3
"""
PostgreSQL connection for the shared last-analysis store.

Used when several API processes must see the same last analysis.
"""

import logging
from typing import Dict, Any

import psycopg
from psycopg.rows import dict_row

from core.exceptions import StorageConnectionError
from .connection import BaseConnectionManager

logger = logging.getLogger(__name__)


class PostgresConnectionManager(BaseConnectionManager):
    """psycopg connection in autocommit mode, switched off per transaction."""

    dialect = 'postgres'
    placeholder = '%s'
    driver_error = psycopg.Error

    def _connect(self) -> None:
        if not self.config.database_url:
            raise StorageConnectionError(self.dialect, ValueError("DATABASE_URL is not set"))

        try:
            self.connection = psycopg.connect(
                self.config.database_url,
                row_factory=dict_row,
                autocommit=True,
                connect_timeout=self.config.connection_timeout
            )
        except psycopg.Error as e:
            raise StorageConnectionError(self.dialect, e)

        logger.debug("PostgreSQL connection established")

    def _is_open(self) -> bool:
        return self.connection is not None and not self.connection.closed

    def _begin(self, cursor) -> None:
        self.connection.autocommit = False

    def _commit(self, cursor) -> None:
        # On failure transaction() rolls back, which also restores autocommit
        self.connection.commit()
        self.connection.autocommit = True

    def _rollback(self, cursor) -> None:
        try:
            self.connection.rollback()
        finally:
            self.connection.autocommit = True

    def _describe(self, cursor) -> Dict[str, Any]:
        cursor.execute("SELECT version() AS version")
        return {'version': cursor.fetchone()['version']}
