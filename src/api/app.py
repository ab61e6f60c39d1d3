#!/usr/bin/env python3
"""
FastAPI application factory for the Text Analysis API.

Mounts the API routes under /api, enables CORS and maps service
exceptions to JSON error bodies without leaking internal details.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.container import Container, get_container
from core.exceptions import TextAnalysisError, ValidationError, AnalysisError, ConfigurationError
from .routes import router

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_MESSAGE = "Error analyzing text."


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info(f"Rejected request to {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={'error': exc.client_message})


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={'error': 'Invalid request.'})


async def _service_error_handler(request: Request, exc: TextAnalysisError) -> JSONResponse:
    logger.error(f"Request to {request.url.path} failed: {exc.to_dict()}")
    if isinstance(exc, (AnalysisError, ConfigurationError)):
        message = ANALYSIS_ERROR_MESSAGE
    else:
        message = 'Internal server error.'
    return JSONResponse(status_code=500, content={'error': message})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={'error': 'Internal server error.'})


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        container: Service container; the global one is used when None

    Returns:
        Configured FastAPI app
    """
    container = container or get_container()
    config = container.get('config')

    app = FastAPI(
        title="Text Analysis API",
        description="Language, sentiment and word-frequency analysis backed by an LLM",
        version="1.0.0",
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(TextAnalysisError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(router, prefix="/api")

    logger.info(f"Text Analysis API ready ({config.environment}, store backend: {config.database.backend})")
    return app
