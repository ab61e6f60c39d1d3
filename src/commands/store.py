#!/usr/bin/env python3
"""
Store command endpoints for inspecting and resetting the last analysis.
"""

import logging
from argparse import Namespace

from .base import BaseCommand

logger = logging.getLogger(__name__)


class StoreCommand(BaseCommand):
    """Handle last-analysis store operations."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute store subcommand."""
        try:
            if subcommand == "show":
                return self.show(args)
            elif subcommand == "reset":
                return self.reset(args)
            return self.unknown_subcommand(subcommand)

        except Exception as e:
            return self.handle_error(e, f"store {subcommand}")

    def show(self, args: Namespace) -> int:
        """Show the current last-analysis record."""
        record = self.store.get_latest()

        print(f"\n=== Last Analysis ({self.store.backend}) ===")
        if record is None:
            print("📭 No analysis stored yet")
            return 0

        created = record.created_at.strftime('%Y-%m-%d %H:%M:%S') if record.created_at else 'unknown'
        preview = record.text if len(record.text) <= 200 else record.text[:197] + "..."
        print(f"🆔 Record: {record.id}")
        print(f"🕐 Created: {created}")
        print(f"📏 Length: {len(record.text)} characters")
        print(f"📝 Text: {preview}")
        return 0

    def reset(self, args: Namespace) -> int:
        """Delete the stored last analysis."""
        if not getattr(args, 'force', False):
            answer = input("⚠️  This will delete the stored last analysis. Continue? [y/N] ")
            if answer.strip().lower() not in ('y', 'yes'):
                print("Cancelled")
                return 1

        removed = self.store.reset()
        print(f"🧹 Removed {removed} record(s)")
        return 0
