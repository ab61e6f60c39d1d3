#!/usr/bin/env python3
"""
Analyze command endpoints: run a text analysis or a term search from the CLI.
"""

import json
import logging
import sys
from argparse import Namespace

from .base import BaseCommand

logger = logging.getLogger(__name__)


class AnalyzeCommand(BaseCommand):
    """Analyze text and search the last analysis."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute analyze subcommand."""
        try:
            if subcommand == "text":
                return self.text(args)
            elif subcommand == "search":
                return self.search(args)
            return self.unknown_subcommand(subcommand)

        except Exception as e:
            return self.handle_error(e, f"analyze {subcommand}")

    def text(self, args: Namespace) -> int:
        """Analyze text given with --text, or read from stdin."""
        text = getattr(args, 'text', None)
        if text is None:
            text = sys.stdin.read()

        summary = self.analysis_service.analyze(text)
        print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
        return 0

    def search(self, args: Namespace) -> int:
        """Search the last analyzed text for --term."""
        result = self.analysis_service.search(getattr(args, 'term', None))
        print(json.dumps(result.to_dict(), ensure_ascii=False))

        if getattr(args, 'verbose', False):
            print(f"status: {result.status.value}", file=sys.stderr)
        return 0
