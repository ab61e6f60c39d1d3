import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from core.config import Config, DatabaseConfig, IntegrationConfig, ApplicationConfig  # noqa: E402
from core.container import build_container  # noqa: E402
from core.database.base import LastAnalysisStore  # noqa: E402
from core.database.memory_store import InMemoryLastAnalysisStore  # noqa: E402
from core.exceptions import StorageOperationError  # noqa: E402
from core.models.analysis import WordStat, ModelAnalysis  # noqa: E402


def ws(word: str, count: int, is_stop_word: bool = False) -> WordStat:
    return WordStat(word=word, count=count, is_stop_word=is_stop_word)


class FakeOpenAIClient:
    """Stands in for OpenAIClient.analyze_text; never touches the network."""

    def __init__(self, analysis: Optional[ModelAnalysis] = None, error: Optional[Exception] = None) -> None:
        self.analysis = analysis or ModelAnalysis(
            idiom="English",
            sentiment="Neutral",
            words=[ws("the", 5, True), ws("cat", 3), ws("dog", 3)],
        )
        self.error = error
        self.calls: List[str] = []

    def analyze_text(self, text: str) -> ModelAnalysis:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.analysis

    def test_connection(self) -> bool:
        return self.error is None


class FailingStore(LastAnalysisStore):
    """Store whose every operation fails like a broken database."""

    backend = 'failing'

    def __init__(self) -> None:
        self.save_attempts: List[str] = []

    def save(self, text: str):
        self.save_attempts.append(text)
        raise StorageOperationError('save', 'last_analysis', RuntimeError("disk I/O error"))

    def get_latest(self):
        raise StorageOperationError('select', 'last_analysis', RuntimeError("disk I/O error"))

    def reset(self) -> int:
        raise StorageOperationError('delete', 'last_analysis', RuntimeError("disk I/O error"))

    def count(self) -> int:
        raise StorageOperationError('count', 'last_analysis', RuntimeError("disk I/O error"))

    def health_check(self):
        return {'connected': False, 'backend': self.backend, 'error': 'disk I/O error'}


@pytest.fixture
def test_config() -> Config:
    return Config(
        database=DatabaseConfig(backend='memory'),
        integrations=IntegrationConfig(openai_api_key='test-key'),
        app=ApplicationConfig(),
        environment='test',
    )


@pytest.fixture
def memory_store() -> InMemoryLastAnalysisStore:
    return InMemoryLastAnalysisStore()


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def fake_openai_client() -> FakeOpenAIClient:
    return FakeOpenAIClient()


@pytest.fixture
def fake_openai_client_factory():
    def _factory(analysis: Optional[ModelAnalysis] = None, error: Optional[Exception] = None) -> FakeOpenAIClient:
        return FakeOpenAIClient(analysis, error)

    return _factory


@pytest.fixture
def container_factory(test_config, memory_store, fake_openai_client):
    """Container with config, store and model client swapped for test doubles."""
    def _factory(store: Optional[LastAnalysisStore] = None, llm_client=None, config: Optional[Config] = None):
        container = build_container(config or test_config)
        container.register_instance('store', store or memory_store)
        container.register_instance('openai_client', llm_client or fake_openai_client)
        return container

    return _factory
