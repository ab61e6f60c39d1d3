#!/usr/bin/env python3
"""
Dependency Injection Container

Keeps the service graph (config, store, model client, analysis service) in
one place so the HTTP app, the CLI and the tests resolve the same objects
and can swap any of them for a test double.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Container:
    """Named services built lazily from factories, shared or per call."""

    def __init__(self):
        # name -> (factory, shared)
        self._registrations: Dict[str, Tuple[Callable[[], Any], bool]] = {}
        self._instances: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Callable[[], Any]) -> None:
        """Build the service once, on first get(), and share it."""
        with self._lock:
            self._registrations[service_name] = (factory, True)
            self._instances.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Callable[[], Any]) -> None:
        """Build a new instance on every get()."""
        with self._lock:
            self._registrations[service_name] = (factory, False)

    def register_instance(self, service_name: str, instance: Any) -> None:
        """Use an already built object; tests inject fakes this way."""
        with self._lock:
            self._instances[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        if service_name in self._instances:
            return self._instances[service_name]

        # Reentrant: factories resolve their own dependencies through get()
        with self._lock:
            if service_name in self._instances:
                return self._instances[service_name]
            if service_name not in self._registrations:
                raise KeyError(f"Service '{service_name}' not registered")

            factory, shared = self._registrations[service_name]
            instance = factory()
            if shared:
                self._instances[service_name] = instance
                logger.debug(f"Created shared instance for '{service_name}'")
            return instance

    def has(self, service_name: str) -> bool:
        return service_name in self._registrations or service_name in self._instances

    def clear(self) -> None:
        """Close shared instances that support it and drop all registrations."""
        with self._lock:
            for instance in self._instances.values():
                close = getattr(instance, 'close', None)
                if callable(close):
                    close()
            self._registrations.clear()
            self._instances.clear()


def build_container(config=None) -> Container:
    """
    Create a container with the default service registrations.

    Args:
        config: Config instance; loaded from the environment when None

    Returns:
        Container with config, store, llm_logger, openai_client and text_analysis_service
    """
    container = Container()

    if config is not None:
        container.register_instance('config', config)
    else:
        def create_config():
            from core.config import get_config_manager
            return get_config_manager().get_config()

        container.register_singleton('config', create_config)

    def create_store():
        from core.database import create_store as create_configured_store
        return create_configured_store(container.get('config').database)

    def create_llm_logger():
        from core.llm_logger import get_llm_logger
        cfg = container.get('config')
        return get_llm_logger(cfg.app.llm_debug_log) if cfg.app.llm_debug_log else None

    def create_openai_client():
        from integrations.openai_client import OpenAIClient
        cfg = container.get('config')
        if not cfg.has_openai():
            raise ConfigurationError('OPENAI_API_KEY', 'OpenAI API key not configured')
        return OpenAIClient.from_config(cfg.integrations, llm_logger=container.get('llm_logger'))

    def create_text_analysis_service():
        from core.analysis.service import TextAnalysisService
        cfg = container.get('config')
        # Resolved on use: a missing key or an unopenable store fails only the step that needs it
        return TextAnalysisService(
            llm_client_provider=lambda: container.get('openai_client'),
            store_provider=lambda: container.get('store'),
            top_n=cfg.app.top_words_limit,
            max_text_length=cfg.app.max_text_length
        )

    container.register_singleton('store', create_store)
    container.register_singleton('llm_logger', create_llm_logger)
    container.register_singleton('openai_client', create_openai_client)
    container.register_singleton('text_analysis_service', create_text_analysis_service)

    logger.debug("Default services registered in container")
    return container


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = build_container()
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None
