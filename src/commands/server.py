#!/usr/bin/env python3
"""
Server command for running the HTTP API.
"""

import logging
from argparse import Namespace

import uvicorn

from .base import BaseCommand

logger = logging.getLogger(__name__)


class ServerCommand(BaseCommand):
    """Run the Text Analysis HTTP API."""

    def execute(self, subcommand: str, args: Namespace) -> int:
        """Execute server subcommand."""
        try:
            if subcommand == "start":
                return self.start(args)
            return self.unknown_subcommand(subcommand)

        except Exception as e:
            return self.handle_error(e, f"server {subcommand}")

    def start(self, args: Namespace) -> int:
        """Start uvicorn serving the FastAPI app."""
        from api.app import create_app

        host = getattr(args, 'host', None) or self.config.app.host
        port = getattr(args, 'port', None) or self.config.app.port

        log_level = self.config.app.log_level.lower()
        print(f"🚀 Server is running on http://{host}:{port}")

        if getattr(args, 'reload', False):
            # The reloader re-imports the app in a subprocess, so it needs an import string
            uvicorn.run("api.app:create_app", factory=True, reload=True,
                        host=host, port=port, log_level=log_level)
        else:
            uvicorn.run(create_app(self._container), host=host, port=port, log_level=log_level)
        return 0
