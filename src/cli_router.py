#!/usr/bin/env python3
"""
CLI Router for the Text Analysis API.

Routes `python run.py <command> <subcommand> [options]` to the command
classes registered in commands.COMMANDS.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional, Tuple

from commands import get_command, COMMANDS

logger = logging.getLogger(__name__)

# command -> (help, {subcommand: (help, [(flags, argparse kwargs), ...])})
CommandSpec = Tuple[str, Dict[str, Tuple[str, List[Tuple[Tuple[str, ...], dict]]]]]

COMMAND_SPECS: Dict[str, CommandSpec] = {
    'server': ("Run the HTTP API", {
        'start': ("Start the HTTP server", [
            (('--host',), {'default': None, 'help': 'Bind address (default: HOST or 0.0.0.0)'}),
            (('--port',), {'type': int, 'default': None, 'help': 'Port (default: PORT or 5000)'}),
            (('--reload',), {'action': 'store_true', 'help': 'Reload on code changes (development)'}),
        ]),
    }),
    'analyze': ("Analyze text and search the last analysis", {
        'text': ("Analyze a text with the language model", [
            (('--text',), {'default': None, 'help': 'Text to analyze (default: read stdin)'}),
        ]),
        'search': ("Search a term in the last analyzed text", [
            (('--term',), {'required': True, 'help': 'Term to search (case-sensitive)'}),
            (('--verbose',), {'action': 'store_true', 'help': 'Print the detailed search status to stderr'}),
        ]),
    }),
    'store': ("Inspect or clear the last analysis store", {
        'show': ("Show the stored last analysis", []),
        'reset': ("Delete the stored last analysis", [
            (('--force',), {'action': 'store_true', 'help': 'Skip confirmation prompt'}),
        ]),
    }),
    'health': ("Store and integration diagnostics", {
        'check': ("Check store connectivity and OpenAI configuration", [
            (('--test',), {'action': 'store_true', 'help': 'Also send a test request to OpenAI'}),
        ]),
    }),
}

EXAMPLES = """
Examples:
  python run.py server start --port 5000
  python run.py analyze text --text "The cat and the dog"
  echo "Hello World" | python run.py analyze text
  python run.py analyze search --term World
  python run.py store show
  python run.py store reset --force
  python run.py health check --test
"""


class CLIRouter:
    """Parses arguments and dispatches to command classes."""

    def __init__(self, container=None):
        """
        Args:
            container: Service container handed to every command (global one when None)
        """
        self.container = container
        self._command_parsers: Dict[str, argparse.ArgumentParser] = {}
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Text Analysis API: language, sentiment and word frequency via LLM",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=EXAMPLES
        )
        subparsers = parser.add_subparsers(dest='command', help='Available commands', metavar='{command}')

        for name, (command_help, subcommands) in COMMAND_SPECS.items():
            command_parser = subparsers.add_parser(name, help=command_help)
            command_subparsers = command_parser.add_subparsers(
                dest='subcommand',
                metavar='{' + ','.join(subcommands) + '}'
            )
            for sub_name, (sub_help, arguments) in subcommands.items():
                sub_parser = command_subparsers.add_parser(sub_name, help=sub_help)
                for flags, options in arguments:
                    sub_parser.add_argument(*flags, **options)
            self._command_parsers[name] = command_parser

        return parser

    def route_command(self, args: Optional[List[str]] = None) -> int:
        """
        Route command to appropriate handler.

        Args:
            args: Command line arguments (uses sys.argv if None)

        Returns:
            Exit code
        """
        try:
            parsed_args = self.parser.parse_args(sys.argv[1:] if args is None else args)
        except SystemExit as e:
            # argparse exits on --help and on usage errors
            return e.code if e.code is not None else 0

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        return self._dispatch(parsed_args)

    def _dispatch(self, args: argparse.Namespace) -> int:
        if args.command not in COMMANDS:
            logger.error(f"Unknown command '{args.command}'. Available: {', '.join(COMMANDS)}")
            return 1

        subcommand = getattr(args, 'subcommand', None)
        if not subcommand:
            logger.error(f"No subcommand specified for '{args.command}'")
            self._command_parsers[args.command].print_help()
            return 1

        logger.debug(f"Dispatching {args.command} {subcommand}")
        try:
            command = get_command(args.command, self.container)
        except Exception as e:
            # Building the global container reads configuration
            logger.error(f"Could not start '{args.command}': {e}", exc_info=True)
            return 1
        return command.execute(subcommand, args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    from core.config import get_config_manager
    from core.exceptions import ConfigurationError

    try:
        get_config_manager().update_logging()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.message}")
        return 1

    return CLIRouter().route_command(args)


if __name__ == '__main__':
    sys.exit(main())
