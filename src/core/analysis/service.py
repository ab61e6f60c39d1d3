#!/usr/bin/env python3
"""
Text analysis orchestration.

Validates input, asks the language model for word statistics, ranks them
and remembers the analyzed text for later term searches.
"""

import logging
from typing import Callable, Optional

from .ranking import rank_words, DEFAULT_TOP_N
from .search import search_term, validate_term, SearchResult, SearchStatus
from ..database.base import LastAnalysisStore
from ..exceptions import ValidationError, StorageError
from ..models.analysis import AnalysisSummary
from ..models.last_analysis import LastAnalysis

logger = logging.getLogger(__name__)


class TextAnalysisService:
    """Coordinates the model client, word ranking and last-analysis store."""

    def __init__(self,
                 llm_client=None,
                 store: Optional[LastAnalysisStore] = None,
                 top_n: int = DEFAULT_TOP_N,
                 max_text_length: Optional[int] = None,
                 llm_client_provider: Optional[Callable[[], object]] = None,
                 store_provider: Optional[Callable[[], LastAnalysisStore]] = None):
        """
        Initialize text analysis service.

        Collaborators are given either directly or as providers called on
        each use, so a store that cannot be opened only fails the step that
        needs it.

        Args:
            llm_client: Object with analyze_text(text) -> ModelAnalysis
            store: Last-analysis store
            top_n: Size of the top content-word list
            max_text_length: Reject texts longer than this many characters
            llm_client_provider: Returns the model client (may raise ConfigurationError)
            store_provider: Returns the store (may raise StorageError)
        """
        self._llm_client_provider = llm_client_provider or (lambda: llm_client)
        self._store_provider = store_provider or (lambda: store)
        self.top_n = top_n
        self.max_text_length = max_text_length

    @property
    def llm_client(self):
        return self._llm_client_provider()

    @property
    def store(self) -> LastAnalysisStore:
        return self._store_provider()

    def validate_text(self, text: Optional[str]) -> str:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError('text', 'text is empty', client_message='Text is required.')

        if self.max_text_length and len(text) > self.max_text_length:
            raise ValidationError(
                'text',
                f'text exceeds {self.max_text_length} characters',
                client_message=f'Text must be at most {self.max_text_length} characters.'
            )
        return text

    def analyze(self, text: Optional[str]) -> AnalysisSummary:
        """
        Analyze a text and persist it as the last analysis.

        The text is sent to the model untrimmed. A failed save, including a
        store that cannot be opened, is logged and does not affect the
        returned summary.

        Raises:
            ValidationError: If text is missing or blank
            AnalysisError: If the model call fails or returns invalid output
            ConfigurationError: If no model client is configured
        """
        text = self.validate_text(text)

        model_analysis = self.llm_client.analyze_text(text)
        ranked = rank_words(model_analysis.words, top_n=self.top_n)
        summary = AnalysisSummary(
            idiom=model_analysis.idiom,
            sentiment=model_analysis.sentiment,
            ranked=ranked
        )

        self.save_last_analysis(text)
        return summary

    def save_last_analysis(self, text: str) -> Optional[LastAnalysis]:
        """Persist text as the last analysis; returns None if the store failed."""
        try:
            return self.store.save(text)
        except StorageError as e:
            logger.error(f"Error saving last analysis: {e.message} ({e.context.get('original_error', 'unknown')})")
            return None

    def search(self, term: Optional[str]) -> SearchResult:
        """
        Search the last analyzed text for a term (case-sensitive).

        A store that cannot be opened reports STORAGE_ERROR, like a failed read.

        Raises:
            ValidationError: If term is empty
        """
        term = validate_term(term)
        try:
            store = self.store
        except StorageError as e:
            logger.error(f"Store unavailable for term search: {e.message} ({e.context.get('original_error', 'unknown')})")
            return SearchResult(term=term, status=SearchStatus.STORAGE_ERROR)

        result = search_term(store, term)
        logger.info(f"Search for {term!r}: {result.status.value}")
        return result
