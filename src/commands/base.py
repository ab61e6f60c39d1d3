#!/usr/bin/env python3
"""
Base command class for the modular command architecture.

Provides common functionality and interface that all commands inherit.
Uses dependency injection for better testability and maintainability.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional
from argparse import Namespace

from core.container import get_container
from core.exceptions import TextAnalysisError, ValidationError

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for all CLI command endpoints.

    Resolves services from the dependency injection container and
    provides shared error handling.
    """

    def __init__(self, container=None):
        """
        Initialize base command with dependency injection container.

        Args:
            container: Optional container instance. If None, uses global container.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container or get_container()

    @property
    def config(self):
        """Get configuration from container."""
        return self._container.get('config')

    @property
    def store(self):
        """Get last-analysis store from container."""
        return self._container.get('store')

    @property
    def analysis_service(self):
        """Get text analysis service from container."""
        return self._container.get('text_analysis_service')

    def create_openai_client(self):
        """Get OpenAI client from container."""
        return self._container.get('openai_client')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Execute the command with given subcommand and arguments.

        Args:
            subcommand: The specific action to perform
            args: Parsed command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """

    def get_available_subcommands(self) -> List[str]:
        """
        Get list of available subcommands for this command.

        Returns:
            List of subcommand names
        """
        skip = {'execute', 'get_available_subcommands', 'handle_error', 'create_openai_client', 'unknown_subcommand'}
        return [
            name for name in dir(self)
            if not name.startswith('_') and name not in skip
            and not isinstance(getattr(type(self), name, None), property)
            and callable(getattr(self, name))
        ]

    def unknown_subcommand(self, subcommand: Optional[str]) -> int:
        available = ", ".join(self.get_available_subcommands())
        self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
        return 1

    def handle_error(self, error: Exception, context: str = "") -> int:
        """
        Standard error handling for commands.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            Appropriate exit code
        """
        error_msg = f"{context}: {error}" if context else str(error)

        # Map common exceptions to exit codes
        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Command interrupted by user")
            return 130
        if isinstance(error, ValidationError):
            self.logger.error(error_msg)
            return 2
        if isinstance(error, TextAnalysisError):
            self.logger.error(f"{error_msg} {error.context}")
            return 1

        self.logger.error(error_msg, exc_info=True)
        return 1
