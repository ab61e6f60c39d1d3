#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LLM Interaction Logger

Writes LLM prompts, raw responses and parsed results to a plain debug file.
Enabled by setting LLM_DEBUG_LOG to a file path.
"""

import json
import logging
import threading
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from core.env_loader import PROJECT_ROOT

logger = logging.getLogger(__name__)


class LLMLogger:
    """Logs LLM interactions to a debug file."""

    def __init__(self, log_file_path: str = "llm_debug.log"):
        """Initialize the LLM logger.

        Args:
            log_file_path: Path to the debug log file (relative to project root)
        """
        path = Path(log_file_path)
        self.log_file_path = path if path.is_absolute() else PROJECT_ROOT / path
        self._lock = threading.Lock()
        self._clear_log()

    def _clear_log(self):
        """Clear the log file for a fresh start."""
        try:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file_path, 'w', encoding='utf-8') as f:
                f.write(f"=== LLM DEBUG LOG - {datetime.now().isoformat()} ===\n\n")
        except OSError as e:
            logger.error(f"Failed to clear LLM log file: {e}")

    def _write_section(self, title: str, content: str):
        """Write a section to the log file."""
        try:
            with self._lock, open(self.log_file_path, 'a', encoding='utf-8') as f:
                f.write(f"\n{'=' * 80}\n")
                f.write(f"{title}\n")
                f.write(f"{'=' * 80}\n")
                f.write(f"{content}\n")
        except OSError as e:
            logger.error(f"Failed to write to LLM log file: {e}")

    def log_llm_interaction(self,
                            system_prompt: str,
                            user_prompt: str,
                            response: str,
                            token_usage: Dict[str, Any],
                            analysis_type: str = "Unknown"):
        """Log complete LLM interaction."""
        content = f"Timestamp: {datetime.now().isoformat()}\n"
        content += f"Analysis Type: {analysis_type}\n"
        content += (
            f"Token Usage: {token_usage.get('prompt_tokens', 0)} prompt + "
            f"{token_usage.get('completion_tokens', 0)} completion = "
            f"{token_usage.get('total_tokens', 0)} total\n\n"
        )

        content += "SYSTEM PROMPT:\n"
        content += f"{system_prompt}\n\n"

        content += "USER PROMPT:\n"
        content += f"{user_prompt}\n\n"

        content += "LLM RESPONSE:\n"
        content += f"{response}\n"

        self._write_section(f"LLM INTERACTION ({analysis_type})", content)

    def log_parsed_analysis(self, parsed_data: Dict[str, Any], analysis_type: str = "Unknown"):
        """Log the parsed analysis results after JSON validation."""
        content = f"Timestamp: {datetime.now().isoformat()}\n"
        content += f"Analysis Type: {analysis_type}\n\n"
        content += "PARSED ANALYSIS DATA:\n"
        content += json.dumps(parsed_data, indent=2, ensure_ascii=False)

        self._write_section(f"PARSED ANALYSIS ({analysis_type})", content)


_llm_logger: Optional[LLMLogger] = None
_llm_logger_lock = threading.Lock()


def get_llm_logger(log_file_path: str = "llm_debug.log") -> LLMLogger:
    """Get global LLM logger instance, created on first use."""
    global _llm_logger
    with _llm_logger_lock:
        if _llm_logger is None:
            _llm_logger = LLMLogger(log_file_path)
        return _llm_logger
