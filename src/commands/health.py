#!/usr/bin/env python3
"""
Health check command for monitoring system status.

Checks the last-analysis store and the OpenAI integration.
"""

import logging
from argparse import Namespace

from .base import BaseCommand
from core.exceptions import StorageError

logger = logging.getLogger(__name__)


class HealthCommand(BaseCommand):
    """Handle system health monitoring and diagnostics."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute health subcommand."""
        try:
            if subcommand == "check":
                return self.check(args)
            return self.unknown_subcommand(subcommand)

        except Exception as e:
            return self.handle_error(e, f"health {subcommand}")

    def check(self, args: Namespace) -> int:
        """Run comprehensive health check."""
        print("🏥 System Health Check")
        print("=" * 50)

        overall_healthy = True

        print("\n📊 Store Status:")
        try:
            health = self.store.health_check()
            if health.get('connected'):
                print(f"  ✅ {health.get('backend', 'store')} connection: OK")
                print(f"  📋 last_analysis: {self.store.count()} records")
            else:
                print(f"  ❌ {health.get('backend', 'store')} connection: FAILED")
                print(f"     Error: {health.get('error', 'Unknown error')}")
                overall_healthy = False
        except StorageError as e:
            print(f"  ❌ Store check failed: {e.message}")
            overall_healthy = False

        print("\n🔌 Integration Status:")
        if not self.config.has_openai():
            print("  ❌ OpenAI configuration: OPENAI_API_KEY not set")
            overall_healthy = False
        else:
            print("  ✅ OpenAI configuration: OK")
            if getattr(args, 'test', False):
                client = self.create_openai_client()
                if client.test_connection():
                    print("  ✅ OpenAI connection: OK")
                else:
                    print("  ❌ OpenAI connection: FAILED")
                    overall_healthy = False

        print("\n" + "=" * 50)
        print("✅ System healthy" if overall_healthy else "⚠️  System has issues")
        return 0 if overall_healthy else 1
