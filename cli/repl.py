"""REPL core loop."""

import asyncio
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory
from rich.panel import Panel

from api.constants import LOG_DIR
from api.services.orchestrator import L0Orchestrator
from cli.command_handler import CommandHandler
from cli.renderer import ResponseRenderer
from cli.state import REPLState

logger = logging.getLogger(__name__)


class REPLRunner:
    """Interactive loop around an orchestrator."""

    def __init__(self, orchestrator: L0Orchestrator, state: REPLState, renderer: ResponseRenderer):
        self.orchestrator = orchestrator
        self.state = state
        self.renderer = renderer
        self.command_handler = CommandHandler(state, orchestrator.registry, renderer)

    def _show_welcome(self):
        registry = self.orchestrator.registry
        self.renderer.console.print(Panel.fit(
            "[bold cyan]L0 Orchestrator[/bold cyan]\n"
            f"[green]Plugins:[/green] {registry.enabled_count}/{registry.count} enabled\n"
            "Type /help for help, /plugins to list plugins, /q to quit",
            border_style="blue"
        ))
        self.renderer.console.print()

    def _build_prompt(self) -> HTML:
        if self.state.project:
            return HTML(f'<ansicyan>[{self.state.project}]</ansicyan> <b>L0></b> ')
        return HTML('<b>L0></b> ')

    async def _process_query(self, user_input: str):
        request = self.state.build_request(user_input)
        try:
            response = await self.orchestrator.query(request.query, request.plugin_options())
        except Exception as e:
            logger.exception("Query failed")
            self.renderer.show_error(str(e))
            return
        self.renderer.render(response, as_json=self.state.json_output)

    async def run(self):
        """Main loop."""
        LOG_DIR.mkdir(exist_ok=True)
        session = PromptSession(history=FileHistory(str(LOG_DIR / ".cli_history")))

        self._show_welcome()

        while True:
            try:
                user_input = await session.prompt_async(self._build_prompt())

                if not user_input.strip():
                    continue

                if user_input.startswith("/"):
                    should_continue = await self.command_handler.handle(user_input.strip())
                    if not should_continue:
                        break
                    continue

                await self._process_query(user_input.strip())

            except asyncio.CancelledError:
                print()
                continue

            except KeyboardInterrupt:
                print("\n\033[33m(use /q to quit)\033[0m\n")
                continue

            except EOFError:
                print("\n\033[33mbye bye!\033[0m")
                break
