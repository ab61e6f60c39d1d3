#!/usr/bin/env python3
"""
Standardized exception hierarchy for the text analysis service.

Provides specific exception types for client input problems, model
collaborator failures and storage failures, each carrying error context.
"""

from typing import Optional, Dict, Any


class TextAnalysisError(Exception):
    """Base exception for all text analysis service errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Client input exceptions
class ValidationError(TextAnalysisError):
    """Request input failed validation."""

    def __init__(self, field: str, issue: str, client_message: Optional[str] = None):
        message = f"Validation failed for {field}: {issue}"
        context = {
            'field': field,
            'issue': issue
        }
        super().__init__(message, context=context)
        self.field = field
        self.client_message = client_message or message


# Storage-related exceptions
class StorageError(TextAnalysisError):
    """Base exception for last-analysis store errors."""
    pass


class StorageConnectionError(StorageError):
    """Failed to connect to the backing store."""

    def __init__(self, backend: str, original_error: Exception):
        message = f"Failed to connect to {backend} store"
        context = {
            'backend': backend,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class StorageOperationError(StorageError):
    """Store read or write failed."""

    def __init__(self, operation: str, table: str, original_error: Exception):
        message = f"Store {operation} failed on table {table}"
        context = {
            'operation': operation,
            'table': table,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Analysis-related exceptions
class AnalysisError(TextAnalysisError):
    """Base exception for analysis errors."""
    pass


class LLMError(AnalysisError):
    """LLM provider call failed."""

    def __init__(self, provider: str, model: str, original_error: Exception):
        message = f"LLM error from {provider} ({model})"
        context = {
            'provider': provider,
            'model': model,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class LLMResponseError(AnalysisError):
    """LLM returned output that could not be parsed or validated."""

    def __init__(self, reason: str, raw_preview: str = ""):
        message = f"Invalid LLM response: {reason}"
        context = {
            'reason': reason,
            'raw_preview': raw_preview[:300]
        }
        super().__init__(message, context=context)


# Configuration-related exceptions
class ConfigurationError(TextAnalysisError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


# Recovery utilities
class ErrorRecovery:
    """Utilities for error recovery and retry logic."""

    @staticmethod
    def is_retryable_error(error: Exception) -> bool:
        """Check if an error is potentially retryable."""
        retryable_types = [
            LLMError,
            StorageConnectionError,
        ]
        return any(isinstance(error, error_type) for error_type in retryable_types)

    @staticmethod
    def get_retry_delay(attempt: int, base_delay: float = 1.0, max_delay: float = 30.0) -> float:
        """Get recommended retry delay in seconds (exponential backoff)."""
        return min(base_delay * (2 ** attempt), max_delay)
