#!/usr/bin/env python3
"""
In-memory last-analysis store.

Process-local and lost on restart; used for tests and ephemeral deployments.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from .base import LastAnalysisStore
from ..models.last_analysis import LastAnalysis

logger = logging.getLogger(__name__)


class InMemoryLastAnalysisStore(LastAnalysisStore):
    """Single-record store guarded by a lock."""

    backend = 'memory'

    def __init__(self):
        self._record: Optional[LastAnalysis] = None
        self._next_id = 1
        self._lock = threading.Lock()

    def save(self, text: str) -> LastAnalysis:
        with self._lock:
            record = LastAnalysis(
                text=text,
                created_at=datetime.now(timezone.utc),
                id=self._next_id
            )
            self._next_id += 1
            self._record = record
        logger.debug(f"Stored last analysis {record.id} ({len(text)} chars)")
        return record

    def get_latest(self) -> Optional[LastAnalysis]:
        with self._lock:
            return self._record

    def reset(self) -> int:
        with self._lock:
            removed = 1 if self._record is not None else 0
            self._record = None
        return removed

    def count(self) -> int:
        with self._lock:
            return 1 if self._record is not None else 0
