#!/usr/bin/env python3
"""
OpenAI integration for text analysis.

Sends a text to the chat completions API and turns the reply into
language, sentiment and per-word statistics. Transient API failures are
retried with exponential backoff; everything else surfaces as LLMError or
LLMResponseError.
"""

import os
import time
import logging
from typing import List, Dict, Optional, Any, Callable, Tuple

import openai
from openai import OpenAI

from core.exceptions import LLMError, LLMResponseError, ErrorRecovery
from core.json_validator import validate_text_analysis
from core.models.analysis import ModelAnalysis
from core.prompts import TextAnalysisPrompts
from core.schemas import get_schema_by_type

logger = logging.getLogger(__name__)

PROVIDER = "openai"

RETRYABLE_API_ERRORS = (
    openai.APIConnectionError,
    openai.APITimeoutError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class OpenAIClient:
    """Client for OpenAI API text analysis."""

    def __init__(self,
                 api_key: Optional[str] = None,
                 model: str = "gpt-3.5-turbo",
                 temperature: float = 0.0,
                 max_tokens: int = 2500,
                 timeout: float = 60.0,
                 max_retries: int = 2,
                 structured_output: bool = False,
                 llm_logger=None,
                 client: Optional[OpenAI] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key. If None, tries to get from environment.
            model: Chat model name
            temperature: Sampling temperature
            max_tokens: Completion token limit
            timeout: Per-request timeout in seconds
            max_retries: Extra attempts after a transient failure
            structured_output: Use json_schema response format instead of json_object
            llm_logger: Optional LLMLogger for full prompt/response dumps
            client: Pre-built OpenAI SDK client (tests)
            sleep: Backoff sleep function (tests)
        """
        if client is None:
            api_key = api_key or os.getenv('OPENAI_API_KEY')
            if not api_key:
                raise ValueError("OpenAI API key not provided and not found in OPENAI_API_KEY environment variable")
            # Retries are handled here, not by the SDK
            client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.structured_output = structured_output
        self.llm_logger = llm_logger
        self._sleep = sleep

    @classmethod
    def from_config(cls, integrations, llm_logger=None) -> 'OpenAIClient':
        """Build a client from an IntegrationConfig."""
        return cls(
            api_key=integrations.openai_api_key,
            model=integrations.openai_model,
            temperature=integrations.openai_temperature,
            max_tokens=integrations.openai_max_tokens,
            timeout=integrations.openai_timeout,
            max_retries=integrations.openai_max_retries,
            structured_output=integrations.openai_structured_output,
            llm_logger=llm_logger
        )

    def _response_format(self, analysis_type: str) -> Dict[str, Any]:
        if self.structured_output:
            return {
                "type": "json_schema",
                "json_schema": {
                    "name": f"{analysis_type}_response",
                    "schema": get_schema_by_type(analysis_type),
                    "strict": True
                }
            }
        return {"type": "json_object"}

    def _make_request(self, messages: List[Dict[str, str]], analysis_type: str) -> Tuple[str, Dict[str, Any]]:
        """Make a chat completion request, retrying transient failures."""
        logger.info(f"Making OpenAI API call for {analysis_type} (model={self.model})")
        for i, msg in enumerate(messages):
            content = msg.get('content', '')
            # Truncate very long content for readability
            preview = content if len(content) <= 1000 else content[:500] + "\n...\n" + content[-500:]
            logger.debug(f"Message {i+1} [{msg.get('role', 'unknown').upper()}]:\n{preview}")

        attempt = 0
        while True:
            try:
                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                    response_format=self._response_format(analysis_type)
                )
                break
            except RETRYABLE_API_ERRORS as e:
                error = LLMError(PROVIDER, self.model, e)
                if attempt >= self.max_retries or not ErrorRecovery.is_retryable_error(error):
                    logger.error(f"OpenAI API request failed after {attempt + 1} attempt(s): {e}")
                    raise error
                delay = ErrorRecovery.get_retry_delay(attempt)
                logger.warning(f"OpenAI API request failed ({e}), retrying in {delay:.1f}s")
                self._sleep(delay)
                attempt += 1
            except openai.OpenAIError as e:
                logger.error(f"OpenAI API request failed: {e}")
                raise LLMError(PROVIDER, self.model, e)

        if not response.choices:
            raise LLMResponseError("no choices in response")

        choice = response.choices[0]
        # Detect truncated responses early
        if getattr(choice, "finish_reason", None) == "length":
            logger.error(
                "OpenAI response for %s was truncated due to max_tokens=%s. Consider increasing the limit.",
                analysis_type,
                self.max_tokens,
            )
            raise LLMResponseError("response truncated (finish_reason=length)")

        content = choice.message.content or ""
        usage = {}
        if getattr(response, "usage", None) is not None:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens
            }
            logger.info(
                f"OpenAI API call successful - tokens: {usage['prompt_tokens']} prompt + "
                f"{usage['completion_tokens']} completion = {usage['total_tokens']} total"
            )
        logger.debug(f"LLM output:\n{content}")

        if self.llm_logger is not None:
            self.llm_logger.log_llm_interaction(
                system_prompt=messages[0].get('content', ''),
                user_prompt=messages[-1].get('content', ''),
                response=content,
                token_usage=usage,
                analysis_type=analysis_type
            )

        return content, usage

    def analyze_text(self, text: str) -> ModelAnalysis:
        """
        Detect language and sentiment of a text and count its words.

        Args:
            text: Text to analyze, sent verbatim

        Returns:
            ModelAnalysis with unranked word statistics

        Raises:
            LLMError: If the API call fails
            LLMResponseError: If the reply cannot be parsed
        """
        messages = TextAnalysisPrompts.build_messages(text)
        content, _ = self._make_request(messages, "text_analysis")

        analysis = validate_text_analysis(content)

        if self.llm_logger is not None:
            self.llm_logger.log_parsed_analysis({
                "idiom": analysis.idiom,
                "sentiment": analysis.sentiment,
                "words": [w.to_dict() for w in analysis.words]
            }, "text_analysis")

        logger.info(f"Model returned {len(analysis.words)} distinct words ({analysis.idiom}, {analysis.sentiment})")
        return analysis

    def test_connection(self) -> bool:
        """Test OpenAI API connection."""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": "Hello"}],
                max_tokens=5
            )

            if response and response.choices:
                logger.info("OpenAI API connection test successful")
                return True

            logger.error("OpenAI API connection test failed: no response")
            return False

        except openai.OpenAIError as e:
            logger.error(f"OpenAI API connection test failed: {e}")
            return False
