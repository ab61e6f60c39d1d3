#!/usr/bin/env python3
"""
Last Analysis Database Service

Handles all database operations for the single-row last_analysis table,
on either SQLite or PostgreSQL.
"""

import logging
from typing import Optional

from .base import LastAnalysisStore, TABLE_NAME
from ..exceptions import StorageOperationError
from ..models.last_analysis import LastAnalysis

logger = logging.getLogger(__name__)

SCHEMA_SQL = {
    'sqlite': f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            text TEXT NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    """,
    'postgres': f"""
        CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
            id BIGSERIAL PRIMARY KEY,
            text TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """,
}

# Blocks concurrent writers while still allowing plain SELECTs
WRITE_LOCK_SQL = {
    'postgres': f"LOCK TABLE {TABLE_NAME} IN EXCLUSIVE MODE",
}


class LastAnalysisService(LastAnalysisStore):
    """SQL-backed last-analysis store."""

    def __init__(self, connection_manager):
        """
        Initialize last analysis service.

        Args:
            connection_manager: Database connection manager instance
        """
        self.connection_manager = connection_manager
        self.backend = connection_manager.dialect
        self._ph = connection_manager.placeholder
        self.ensure_schema()

    def ensure_schema(self) -> None:
        """Create the last_analysis table if it does not exist."""
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(SCHEMA_SQL[self.backend])
        except self.connection_manager.driver_error as e:
            raise StorageOperationError('create', TABLE_NAME, e)

    def save(self, text: str) -> LastAnalysis:
        try:
            with self.connection_manager.transaction() as cursor:
                lock_sql = WRITE_LOCK_SQL.get(self.backend)
                if lock_sql:
                    cursor.execute(lock_sql)

                cursor.execute(f"DELETE FROM {TABLE_NAME}")
                cursor.execute(f"INSERT INTO {TABLE_NAME} (text) VALUES ({self._ph})", (text,))
                cursor.execute(f"""
                    SELECT id, text, created_at FROM {TABLE_NAME}
                    ORDER BY id DESC LIMIT 1
                """)
                row = cursor.fetchone()

        except self.connection_manager.driver_error as e:
            logger.error(f"Failed to save last analysis: {e}")
            raise StorageOperationError('save', TABLE_NAME, e)

        record = LastAnalysis.from_row(dict(row))
        logger.info(f"Stored last analysis {record.id} ({len(text)} chars)")
        return record

    def get_latest(self) -> Optional[LastAnalysis]:
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"""
                    SELECT id, text, created_at FROM {TABLE_NAME}
                    ORDER BY id DESC LIMIT 1
                """)
                row = cursor.fetchone()

        except self.connection_manager.driver_error as e:
            logger.error(f"Failed to read last analysis: {e}")
            raise StorageOperationError('select', TABLE_NAME, e)

        return LastAnalysis.from_row(dict(row)) if row else None

    def reset(self) -> int:
        try:
            with self.connection_manager.transaction() as cursor:
                cursor.execute(f"DELETE FROM {TABLE_NAME}")
                removed = cursor.rowcount

        except self.connection_manager.driver_error as e:
            raise StorageOperationError('delete', TABLE_NAME, e)

        logger.info(f"Cleared {removed} last analysis record(s)")
        return removed

    def count(self) -> int:
        try:
            with self.connection_manager.get_cursor() as cursor:
                cursor.execute(f"SELECT COUNT(*) AS total FROM {TABLE_NAME}")
                row = cursor.fetchone()

        except self.connection_manager.driver_error as e:
            raise StorageOperationError('count', TABLE_NAME, e)

        return row['total']

    def health_check(self):
        return self.connection_manager.health_check()

    def close(self) -> None:
        self.connection_manager.close()
