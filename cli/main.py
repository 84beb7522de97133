#!/usr/bin/env python
"""
L0 Orchestrator - command line interface

Usage:
    python -m cli.main                          # interactive REPL
    python -m cli.main ask "debug the login flow"
    python -m cli.main ask --format json "find code for floating card"
    python -m cli.main plugins
"""

import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

# Load environment variables FIRST (before importing project modules)
load_dotenv('.env')

from api.constants import ENABLE_MEMORY_PLUGIN, LOG_DIR, PLUGIN_PATHS
from api.models.requests import OutputFormat
from api.plugins.manager import create_plugin_registry
from api.services.orchestrator import L0Orchestrator
from cli.renderer import ResponseRenderer
from cli.repl import REPLRunner
from cli.state import REPLState

logger = logging.getLogger(__name__)


def setup_logging():
    """INFO and above go to log/cli.log, only WARNING and above to the console."""
    LOG_DIR.mkdir(exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    file_handler = logging.FileHandler(LOG_DIR / "cli.log", encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='l0',
        description='L0 Orchestrator - route requests to built-in intents and plugins',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--memory',
        action='store_true',
        default=ENABLE_MEMORY_PLUGIN,
        help='Load the memory-services plugin (default: L0_ENABLE_MEMORY)'
    )
    subparsers = parser.add_subparsers(dest='command')

    ask = subparsers.add_parser('ask', help='Run a single query')
    ask.add_argument('query', nargs='+', help='Query text')
    ask.add_argument(
        '-f', '--format',
        choices=[OutputFormat.TEXT.value, OutputFormat.JSON.value],
        default=OutputFormat.TEXT.value,
        help='Output format (default: text)'
    )
    ask.add_argument('-p', '--project', help='Project the query relates to')

    subparsers.add_parser('plugins', help='List registered plugins')
    return parser


def build_orchestrator(include_memory: bool) -> L0Orchestrator:
    registry = create_plugin_registry(
        include_builtins=True,
        include_memory_services=include_memory,
        extra_paths=PLUGIN_PATHS or None,
    )
    return L0Orchestrator(registry)


async def run_ask(orchestrator: L0Orchestrator, renderer: ResponseRenderer, args) -> int:
    state = REPLState(project=args.project, output_format=OutputFormat(args.format))
    request = state.build_request(" ".join(args.query))
    response = await orchestrator.query(request.query, request.plugin_options())
    renderer.render(response, as_json=state.json_output)
    return 0


def main(argv=None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)
    orchestrator = build_orchestrator(args.memory)
    renderer = ResponseRenderer()

    try:
        if args.command == 'ask':
            return asyncio.run(run_ask(orchestrator, renderer, args))
        if args.command == 'plugins':
            renderer.render_plugins(orchestrator.registry)
            return 0

        repl = REPLRunner(orchestrator, REPLState(), renderer)
        asyncio.run(repl.run())
        return 0
    except KeyboardInterrupt:
        print("\n\033[33minterrupted\033[0m")
        return 0


if __name__ == "__main__":
    sys.exit(main())
