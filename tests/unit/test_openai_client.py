import json
import logging
from types import SimpleNamespace
from typing import Any, Dict, List

import httpx
import openai
import pytest

from core.exceptions import LLMError, LLMResponseError
from core.prompts import TextAnalysisPrompts
from integrations.openai_client import OpenAIClient

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")

VALID_CONTENT = json.dumps({
    "idiom": "English",
    "sentiment": "positive",
    "words": [
        {"word": "Hello", "count": 1, "isStopWord": False},
        {"word": "World", "count": 1, "isStopWord": False},
    ],
})


def make_response(content: str = VALID_CONTENT, finish_reason: str = "stop", choices: bool = True):
    choice = SimpleNamespace(message=SimpleNamespace(content=content), finish_reason=finish_reason)
    usage = SimpleNamespace(prompt_tokens=120, completion_tokens=40, total_tokens=160)
    return SimpleNamespace(choices=[choice] if choices else [], usage=usage)


class FakeCompletions:
    def __init__(self, outcomes: List[Any]) -> None:
        self.outcomes = list(outcomes)
        self.requests: List[Dict[str, Any]] = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_client(outcomes: List[Any], **kwargs):
    completions = FakeCompletions(outcomes)
    sdk = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    sleeps: List[float] = []
    client = OpenAIClient(client=sdk, sleep=sleeps.append, **kwargs)
    return client, completions, sleeps


def test_analyze_text_returns_model_analysis():
    client, completions, _ = make_client([make_response()])

    analysis = client.analyze_text("Hello World")

    assert analysis.idiom == "English"
    assert [w.word for w in analysis.words] == ["Hello", "World"]

    request = completions.requests[0]
    assert request["model"] == "gpt-3.5-turbo"
    assert request["response_format"] == {"type": "json_object"}
    assert request["messages"] == TextAnalysisPrompts.build_messages("Hello World")
    assert request["messages"][-1]["content"] == "Hello World"


def test_structured_output_uses_json_schema():
    client, completions, _ = make_client([make_response()], structured_output=True, model="gpt-4o-mini")

    client.analyze_text("Hello World")

    response_format = completions.requests[0]["response_format"]
    assert response_format["type"] == "json_schema"
    assert response_format["json_schema"]["schema"]["required"] == ["idiom", "sentiment", "words"]


def test_transient_errors_retried_with_backoff(caplog):
    caplog.set_level(logging.WARNING, logger="integrations.openai_client")
    client, completions, sleeps = make_client([
        openai.APIConnectionError(request=REQUEST),
        openai.APITimeoutError(request=REQUEST),
        make_response(),
    ])

    analysis = client.analyze_text("Hello World")

    assert analysis.sentiment == "positive"
    assert len(completions.requests) == 3
    assert sleeps == [1.0, 2.0]
    assert "retrying" in caplog.text


def test_retries_exhausted_raises_llm_error():
    client, completions, sleeps = make_client(
        [openai.APIConnectionError(request=REQUEST) for _ in range(3)],
        max_retries=2,
    )

    with pytest.raises(LLMError) as exc_info:
        client.analyze_text("Hello World")

    assert len(completions.requests) == 3
    assert len(sleeps) == 2
    assert exc_info.value.context['provider'] == 'openai'


def test_client_errors_not_retried():
    error = openai.BadRequestError(
        "invalid request",
        response=httpx.Response(400, request=REQUEST),
        body=None,
    )
    client, completions, sleeps = make_client([error, make_response()])

    with pytest.raises(LLMError):
        client.analyze_text("Hello World")

    assert len(completions.requests) == 1
    assert sleeps == []


def test_truncated_response_rejected():
    client, _, _ = make_client([make_response(finish_reason="length")])

    with pytest.raises(LLMResponseError, match="truncated"):
        client.analyze_text("Hello World")


def test_empty_choices_rejected():
    client, _, _ = make_client([make_response(choices=False)])

    with pytest.raises(LLMResponseError):
        client.analyze_text("Hello World")


def test_invalid_json_rejected():
    client, _, _ = make_client([make_response(content="I cannot help with that.")])

    with pytest.raises(LLMResponseError):
        client.analyze_text("Hello World")


def test_llm_logger_receives_interaction(tmp_path):
    from core.llm_logger import LLMLogger

    log_path = tmp_path / "llm_debug.log"
    client, _, _ = make_client([make_response()], llm_logger=LLMLogger(str(log_path)))

    client.analyze_text("Hello World")

    contents = log_path.read_text(encoding="utf-8")
    assert "Hello World" in contents
    assert '"idiom": "English"' in contents


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError):
        OpenAIClient(api_key=None)


def test_connection_check():
    ok_client, _, _ = make_client([make_response()])
    failing_client, _, _ = make_client([openai.APIConnectionError(request=REQUEST)])

    assert ok_client.test_connection() is True
    assert failing_client.test_connection() is False
