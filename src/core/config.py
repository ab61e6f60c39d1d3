#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for all application configuration,
including environment variables, defaults, and validation.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, List

from core.env_loader import load_env_file
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

STORE_BACKENDS = ('sqlite', 'postgres', 'memory')
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class DatabaseConfig:
    """Last-analysis store configuration."""
    backend: str = 'sqlite'
    sqlite_path: str = 'database/database.sqlite'
    database_url: Optional[str] = None
    connection_timeout: int = 30


@dataclass
class IntegrationConfig:
    """External integration configuration."""
    openai_api_key: Optional[str] = None
    openai_model: str = 'gpt-3.5-turbo'
    openai_temperature: float = 0.0
    openai_max_tokens: int = 2500
    openai_timeout: float = 60.0
    openai_max_retries: int = 2
    # json_schema response format; requires a model that supports it (gpt-4o family)
    openai_structured_output: bool = False


@dataclass
class ApplicationConfig:
    """Core application configuration."""
    # HTTP server
    host: str = '0.0.0.0'
    port: int = 5000
    cors_origins: List[str] = field(default_factory=lambda: ['*'])

    # Analysis settings
    top_words_limit: int = 5
    max_text_length: int = 20000

    # Logging
    log_level: str = 'INFO'
    verbose_logging: bool = False
    llm_debug_log: Optional[str] = None


@dataclass
class Config:
    """Master configuration container."""
    database: DatabaseConfig
    integrations: IntegrationConfig
    app: ApplicationConfig

    # Environment info
    environment: str = field(default_factory=lambda: os.getenv('ENVIRONMENT', 'development'))

    def has_openai(self) -> bool:
        """Check if OpenAI integration is available."""
        return bool(self.integrations.openai_api_key)


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env", load_env: bool = True):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
            load_env: Whether to read the .env file at all
        """
        self._config: Optional[Config] = None
        if load_env:
            load_env_file(env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        # Unparseable numbers are collected here and reported with the other validation errors
        errors: List[str] = []

        database_config = DatabaseConfig(
            backend=os.getenv('STORE_BACKEND', 'sqlite').lower(),
            sqlite_path=os.getenv('SQLITE_PATH', 'database/database.sqlite'),
            database_url=os.getenv('DATABASE_URL'),
            connection_timeout=self._get_int('DB_CONNECTION_TIMEOUT', 30, errors)
        )

        # PUBLIC_API_KEY is the variable name older deployments used
        integration_config = IntegrationConfig(
            openai_api_key=os.getenv('OPENAI_API_KEY') or os.getenv('PUBLIC_API_KEY'),
            openai_model=os.getenv('OPENAI_MODEL', 'gpt-3.5-turbo'),
            openai_temperature=self._get_float('OPENAI_TEMPERATURE', 0.0, errors),
            openai_max_tokens=self._get_int('OPENAI_MAX_TOKENS', 2500, errors),
            openai_timeout=self._get_float('OPENAI_TIMEOUT', 60.0, errors),
            openai_max_retries=self._get_int('OPENAI_MAX_RETRIES', 2, errors),
            openai_structured_output=os.getenv('OPENAI_STRUCTURED_OUTPUT', 'false').lower() == 'true'
        )

        cors = os.getenv('CORS_ORIGINS', '*')
        app_config = ApplicationConfig(
            host=os.getenv('HOST', '0.0.0.0'),
            port=self._get_int('PORT', 5000, errors),
            cors_origins=[origin.strip() for origin in cors.split(',') if origin.strip()],
            top_words_limit=self._get_int('TOP_WORDS_LIMIT', 5, errors),
            max_text_length=self._get_int('MAX_TEXT_LENGTH', 20000, errors),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=os.getenv('VERBOSE_LOGGING', 'false').lower() == 'true',
            llm_debug_log=os.getenv('LLM_DEBUG_LOG') or None
        )

        config = Config(
            database=database_config,
            integrations=integration_config,
            app=app_config
        )

        self._validate_config(config, errors)
        return config

    @staticmethod
    def _get_int(key: str, default: int, errors: List[str]) -> int:
        raw = os.getenv(key)
        if raw is None or raw == '':
            return default
        try:
            return int(raw)
        except ValueError:
            errors.append(f"{key} must be an integer, got {raw!r}")
            return default

    @staticmethod
    def _get_float(key: str, default: float, errors: List[str]) -> float:
        raw = os.getenv(key)
        if raw is None or raw == '':
            return default
        try:
            return float(raw)
        except ValueError:
            errors.append(f"{key} must be a number, got {raw!r}")
            return default

    def _validate_config(self, config: Config, errors: Optional[List[str]] = None) -> None:
        """
        Validate configuration values.

        Args:
            config: Configuration to check
            errors: Problems already found while reading the environment

        Raises:
            ConfigurationError: Listing every problem found
        """
        errors = list(errors or [])

        if config.database.backend not in STORE_BACKENDS:
            errors.append(f"STORE_BACKEND must be one of: {', '.join(STORE_BACKENDS)}")

        if config.database.backend == 'postgres' and not config.database.database_url:
            errors.append("DATABASE_URL is required when STORE_BACKEND=postgres")

        if config.database.connection_timeout < 1:
            errors.append("DB_CONNECTION_TIMEOUT must be at least 1 second")

        if not 1 <= config.app.port <= 65535:
            errors.append("PORT must be between 1 and 65535")

        if config.app.top_words_limit < 1:
            errors.append("TOP_WORDS_LIMIT must be at least 1")

        if config.app.max_text_length < 1:
            errors.append("MAX_TEXT_LENGTH must be at least 1")

        if config.integrations.openai_max_retries < 0:
            errors.append("OPENAI_MAX_RETRIES must not be negative")

        if not 0.0 <= config.integrations.openai_temperature <= 2.0:
            errors.append("OPENAI_TEMPERATURE must be between 0 and 2")

        if config.app.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")

        if errors:
            raise ConfigurationError('config', '; '.join(errors))

        logger.debug("Configuration validation passed")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.app.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.app.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S'))


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
