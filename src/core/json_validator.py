#!/usr/bin/env python3
"""
JSON validation for text analysis LLM output.

Extracts the JSON object from the raw model reply and checks it against the
expected shape before it is turned into word statistics.
"""

import json
import logging
from typing import Dict, Any, List

from .exceptions import LLMResponseError
from .models.analysis import WordStat, ModelAnalysis

logger = logging.getLogger(__name__)


class TextAnalysisValidator:
    """Validates text analysis JSON output from the language model."""

    @staticmethod
    def validate_and_parse(raw_output: str) -> ModelAnalysis:
        """
        Validate and parse LLM JSON output.

        Args:
            raw_output: Raw string output from LLM

        Returns:
            ModelAnalysis with idiom, sentiment and word statistics

        Raises:
            LLMResponseError: If the output is not valid analysis JSON
        """
        if not raw_output or not raw_output.strip():
            raise LLMResponseError("empty output")

        # LLM usually returns pure JSON, try that first
        try:
            data = json.loads(raw_output.strip())
        except json.JSONDecodeError:
            json_str = TextAnalysisValidator._extract_json(raw_output)
            try:
                data = json.loads(json_str)
                logger.info("Parsed JSON extracted from mixed LLM output")
            except json.JSONDecodeError as e:
                logger.error(f"JSON parsing failed: {e}")
                logger.error(f"First 300 chars: {repr(json_str[:300])}")
                raise LLMResponseError(f"not valid JSON ({e.msg})", raw_output)

        return TextAnalysisValidator._validate_schema(data, raw_output)

    @staticmethod
    def _extract_json(raw_output: str) -> str:
        """Extract the outermost JSON object from mixed text output."""
        cleaned = raw_output.replace('```json', '').replace('```', '')

        start_idx = cleaned.find('{')
        end_idx = cleaned.rfind('}')
        if start_idx == -1 or end_idx <= start_idx:
            return cleaned.strip()

        return cleaned[start_idx:end_idx + 1]

    @staticmethod
    def _validate_schema(data: Any, raw_output: str) -> ModelAnalysis:
        if not isinstance(data, dict):
            raise LLMResponseError("top-level value is not an object", raw_output)

        for field in ("idiom", "sentiment", "words"):
            if field not in data:
                raise LLMResponseError(f"missing field '{field}'", raw_output)

        if not isinstance(data["idiom"], str) or not isinstance(data["sentiment"], str):
            raise LLMResponseError("idiom and sentiment must be strings", raw_output)

        if not isinstance(data["words"], list):
            raise LLMResponseError("words is not a list", raw_output)

        words = TextAnalysisValidator._validate_words(data["words"], raw_output)
        return ModelAnalysis(idiom=data["idiom"], sentiment=data["sentiment"], words=words)

    @staticmethod
    def _validate_words(items: List[Any], raw_output: str) -> List[WordStat]:
        words = []
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                raise LLMResponseError(f"words[{i}] is not an object", raw_output)

            word = item.get("word")
            count = item.get("count")
            is_stop_word = item.get("isStopWord")

            if not isinstance(word, str) or not word:
                raise LLMResponseError(f"words[{i}].word must be a non-empty string", raw_output)
            # bool is a subclass of int
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                raise LLMResponseError(f"words[{i}].count must be a positive integer", raw_output)
            if not isinstance(is_stop_word, bool):
                raise LLMResponseError(f"words[{i}].isStopWord must be a boolean", raw_output)

            words.append(WordStat(word=word, count=count, is_stop_word=is_stop_word))

        return words


def validate_text_analysis(raw_output: str) -> ModelAnalysis:
    """
    Convenience function for validating text analysis output.

    Args:
        raw_output: Raw LLM output string

    Returns:
        Validated ModelAnalysis
    """
    return TextAnalysisValidator.validate_and_parse(raw_output)
