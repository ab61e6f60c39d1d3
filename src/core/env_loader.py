#!/usr/bin/env python3
"""
Environment variable loader with .env file support.

Variables already present in the process environment always win over the file.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    """Parse one `[export ]KEY=VALUE` line; None for blanks and comments."""
    line = line.strip()
    if not line or line.startswith('#'):
        return None

    if line.startswith('export '):
        line = line[len('export '):].lstrip()

    if '=' not in line:
        raise ValueError(line)

    key, value = (part.strip() for part in line.split('=', 1))
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        value = value[1:-1]
    return key, value


def load_env_file(env_file_path: str = ".env", base_dir: Optional[Path] = None) -> int:
    """
    Load environment variables from .env file if it exists.

    Args:
        env_file_path: Path to .env file (default: ".env" in project root)
        base_dir: Directory the path is relative to (default: project root)

    Returns:
        Number of variables loaded
    """
    env_path = (base_dir or PROJECT_ROOT) / env_file_path

    if not env_path.exists():
        logger.debug(f"No .env file found at {env_path}")
        return 0

    try:
        lines = env_path.read_text(encoding='utf-8').splitlines()
    except OSError as e:
        logger.error(f"Error loading .env file {env_path}: {e}")
        return 0

    loaded_count = 0
    for line_num, line in enumerate(lines, 1):
        try:
            parsed = _parse_line(line)
        except ValueError:
            logger.warning(f"Invalid .env format at line {line_num}: {line.strip()}")
            continue
        if parsed is None:
            continue

        key, value = parsed
        if key in os.environ:
            logger.debug(f"Skipped {key} (already in environment)")
            continue

        os.environ[key] = value
        loaded_count += 1

    logger.info(f"Loaded {loaded_count} variables from {env_path}")
    return loaded_count
