#!/usr/bin/env python3
"""
Centralized JSON schemas for OpenAI structured outputs.

Contains the JSON schemas used for LLM responses to ensure consistency
and enable structured output validation.
"""

from typing import Dict, Any

WORD_STAT_SCHEMA = {
    "type": "object",
    "properties": {
        "word": {
            "type": "string",
            "description": "Word exactly as it appears in the text"
        },
        "count": {
            "type": "integer",
            "description": "Occurrences of this exact word"
        },
        "isStopWord": {
            "type": "boolean",
            "description": "True if the word is a stopword in its original spelling"
        }
    },
    "required": ["word", "count", "isStopWord"],
    "additionalProperties": False
}

TEXT_ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "idiom": {
            "type": "string",
            "description": "Detected language of the text"
        },
        "sentiment": {
            "type": "string",
            "enum": ["positive", "negative", "neutral"],
            "description": "Overall sentiment"
        },
        "words": {
            "type": "array",
            "items": WORD_STAT_SCHEMA,
            "description": "Every distinct word with its count and stopword flag"
        }
    },
    "required": ["idiom", "sentiment", "words"],
    "additionalProperties": False
}


def get_schema_by_type(analysis_type: str) -> Dict[str, Any]:
    """
    Get JSON schema by analysis type.

    Args:
        analysis_type: Type of analysis ("text_analysis")

    Returns:
        JSON schema dictionary

    Raises:
        ValueError: If analysis_type is not recognized
    """
    schemas = {
        "text_analysis": TEXT_ANALYSIS_SCHEMA,
    }

    if analysis_type not in schemas:
        raise ValueError(f"Unknown analysis type: {analysis_type}")

    return schemas[analysis_type]
