#!/usr/bin/env python3
"""
Last-analysis store interface.

The store holds at most one live record: the text of the most recent
analysis. Every save replaces the previous record wholesale.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from ..models.last_analysis import LastAnalysis

TABLE_NAME = 'last_analysis'


class LastAnalysisStore(ABC):
    """Abstract single-row store for the most recently analyzed text."""

    backend = 'abstract'

    @abstractmethod
    def save(self, text: str) -> LastAnalysis:
        """
        Replace the stored record with a new one.

        Deletes every existing row and inserts the new text as one atomic
        operation. Readers see either the old record or the new one.

        Args:
            text: The analyzed text to persist

        Returns:
            The newly stored record

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def get_latest(self) -> Optional[LastAnalysis]:
        """
        Get the current record.

        Returns:
            The most recently written record, or None if the store is empty

        Raises:
            StorageError: If the read fails
        """

    @abstractmethod
    def reset(self) -> int:
        """Delete all records. Returns the number of rows removed."""

    @abstractmethod
    def count(self) -> int:
        """Number of live records."""

    def health_check(self) -> Dict[str, Any]:
        return {'connected': True, 'backend': self.backend}

    def close(self) -> None:
        pass
