#!/usr/bin/env python3
"""
Database package for the text analysis service.

Provides the last-analysis store interface and its backends.
"""

import logging

from .base import LastAnalysisStore, TABLE_NAME
from .memory_store import InMemoryLastAnalysisStore
from .last_analysis_service import LastAnalysisService
from .sqlite_connection import SQLiteConnectionManager

logger = logging.getLogger(__name__)


def create_store(db_config) -> LastAnalysisStore:
    """
    Build the last-analysis store selected by configuration.

    Args:
        db_config: DatabaseConfig instance

    Returns:
        Ready-to-use store with its schema in place
    """
    backend = db_config.backend

    if backend == 'memory':
        logger.info("Using in-memory last analysis store")
        return InMemoryLastAnalysisStore()

    if backend == 'postgres':
        # psycopg is only needed for this backend
        from .postgres_connection import PostgresConnectionManager
        logger.info("Using PostgreSQL last analysis store")
        return LastAnalysisService(PostgresConnectionManager(db_config))

    logger.info(f"Using SQLite last analysis store at {db_config.sqlite_path}")
    return LastAnalysisService(SQLiteConnectionManager(db_config))


__all__ = [
    'LastAnalysisStore',
    'TABLE_NAME',
    'InMemoryLastAnalysisStore',
    'LastAnalysisService',
    'SQLiteConnectionManager',
    'create_store'
]
