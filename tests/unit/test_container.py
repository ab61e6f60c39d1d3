from datetime import datetime, timezone

import pytest

from core.container import Container, build_container
from core.database.memory_store import InMemoryLastAnalysisStore
from core.exceptions import ConfigurationError
from core.models.last_analysis import LastAnalysis


def test_default_wiring(test_config):
    container = build_container(test_config)

    assert container.get('config') is test_config
    store = container.get('store')
    assert isinstance(store, InMemoryLastAnalysisStore)
    assert container.get('store') is store
    assert container.get('llm_logger') is None


def test_service_uses_injected_fakes(container_factory, fake_openai_client, memory_store):
    service = container_factory().get('text_analysis_service')

    assert service.llm_client is fake_openai_client
    assert service.store is memory_store
    assert service.top_n == 5


def test_openai_client_requires_key(test_config):
    test_config.integrations.openai_api_key = None
    container = build_container(test_config)

    with pytest.raises(ConfigurationError):
        container.get('openai_client')


def test_factory_and_clear():
    container = Container()
    closed = []

    class Closable:
        def close(self):
            closed.append(self)

    container.register_factory('fresh', Closable)
    container.register_instance('shared', Closable())

    assert container.get('fresh') is not container.get('fresh')
    assert container.has('shared')

    container.clear()
    assert len(closed) == 1
    assert not container.has('shared')
    with pytest.raises(KeyError):
        container.get('fresh')


def test_last_analysis_from_sqlite_row():
    record = LastAnalysis.from_row({'id': 3, 'text': 'Hello', 'created_at': '2024-05-01 12:30:00'})

    assert record.created_at == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert record.to_dict() == {'id': 3, 'text': 'Hello', 'created_at': '2024-05-01T12:30:00+00:00'}


def test_last_analysis_keeps_aware_datetimes():
    created = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert LastAnalysis.from_row({'text': 'x', 'created_at': created}).created_at is created
