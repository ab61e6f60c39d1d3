#!/usr/bin/env python3
"""
API routes for text analysis and term search.

POST /api/analyze-text   analyze a text and remember it
GET  /api/search-term    look for a term in the last analyzed text
GET  /api/health         store and integration status
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query, Request

from core.exceptions import StorageError
from .schemas import (
    AnalyzeTextRequest,
    AnalysisResponse,
    SearchTermResponse,
    ErrorResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _container(request: Request):
    return request.app.state.container


@router.post(
    "/analyze-text",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze_text(request: Request, payload: Optional[AnalyzeTextRequest] = None):
    """
    Analyze the given text with the language model.

    Detects language (idiom) and sentiment, classifies stopwords, counts
    words and returns the top content words. The text is stored for
    later term searches.
    """
    service = _container(request).get('text_analysis_service')
    summary = service.analyze(payload.text if payload else None)
    return summary.to_dict()


@router.get(
    "/search-term",
    response_model=SearchTermResponse,
    responses={400: {"model": ErrorResponse}},
)
def search_term_route(request: Request, term: Optional[str] = Query(None, description="Term to look for")):
    """Case-sensitive search for a term in the last analyzed text."""
    result = _container(request).get('text_analysis_service').search(term)
    return result.to_dict()


@router.get("/health", response_model=HealthResponse)
def health(request: Request):
    container = _container(request)
    config = container.get('config')

    try:
        store = container.get('store')
        store_status = store.health_check()
        if store_status.get('connected'):
            store_status['records'] = store.count()
    except StorageError as e:
        logger.error(f"Store health check failed: {e.message}")
        store_status = {'connected': False, 'error': e.message}

    healthy = bool(store_status.get('connected'))
    return {
        'status': 'ok' if healthy else 'degraded',
        'store': store_status,
        'llm_configured': config.has_openai()
    }
