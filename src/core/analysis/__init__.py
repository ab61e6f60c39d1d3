#!/usr/bin/env python3
"""
Text analysis: word ranking, term search and orchestration.
"""

from .ranking import rank_words, sort_words, collation_key, DEFAULT_TOP_N
from .search import search_term, SearchResult, SearchStatus
from .service import TextAnalysisService

__all__ = [
    'rank_words', 'sort_words', 'collation_key', 'DEFAULT_TOP_N',
    'search_term', 'SearchResult', 'SearchStatus',
    'TextAnalysisService'
]
