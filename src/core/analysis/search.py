#!/usr/bin/env python3
"""
Term search against the last analyzed text.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..database.base import LastAnalysisStore
from ..exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    NO_DATA = "no_data"
    STORAGE_ERROR = "storage_error"


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a term search, richer than the boolean the API exposes."""
    term: str
    status: SearchStatus

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    def to_dict(self) -> Dict[str, Any]:
        return {'term': self.term, 'found': self.found}


def validate_term(term: Optional[str]) -> str:
    """Reject a missing or empty search term."""
    if not term:
        raise ValidationError('term', 'term is required', client_message='Term is required')
    return term


def search_term(store: LastAnalysisStore, term: str) -> SearchResult:
    """
    Check whether a term occurs in the most recently analyzed text.

    Matching is case-sensitive substring containment with no normalization.
    An empty store and a failed read both report the term as not found;
    the status tells them apart.

    Args:
        store: Last-analysis store to read from
        term: Non-empty search term

    Returns:
        SearchResult with the match status

    Raises:
        ValidationError: If term is empty
    """
    term = validate_term(term)

    try:
        record = store.get_latest()
    except StorageError as e:
        logger.error(f"Error searching term: {e.message} ({e.context.get('original_error', 'unknown')})")
        return SearchResult(term=term, status=SearchStatus.STORAGE_ERROR)

    if record is None:
        logger.debug("Term search against empty store")
        return SearchResult(term=term, status=SearchStatus.NO_DATA)

    status = SearchStatus.FOUND if term in record.text else SearchStatus.NOT_FOUND
    return SearchResult(term=term, status=status)
