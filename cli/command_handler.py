"""Command handler with command pattern."""

from typing import Dict

from rich.panel import Panel

from api.plugins.registry import PluginRegistry
from cli.renderer import ResponseRenderer
from cli.state import REPLState


class CommandHandler:
    """Slash-command dispatcher for the REPL.

    Commands are looked up by prefix in a table instead of an if/elif chain.
    """

    def __init__(self, state: REPLState, registry: PluginRegistry, renderer: ResponseRenderer):
        self.state = state
        self.registry = registry
        self.renderer = renderer
        self.console = renderer.console
        self.commands = self._register_commands()

    def _register_commands(self) -> Dict[str, callable]:
        return {
            "/q": self._cmd_quit,
            "/quit": self._cmd_quit,
            "/exit": self._cmd_quit,
            "/plugins": self._cmd_list_plugins,
            "/enable": self._cmd_enable,
            "/disable": self._cmd_disable,
            "/json": self._cmd_toggle_json,
            "/project": self._cmd_set_project,
            "/help": self._cmd_help,
        }

    async def handle(self, cmd: str) -> bool:
        """Run a slash command.

        Args:
            cmd: Raw user input starting with "/"

        Returns:
            Whether the REPL loop should continue
        """
        name = cmd.split(maxsplit=1)[0]
        handler = self.commands.get(name)
        if handler is None:
            self.console.print(f"[red]Unknown command: {cmd}[/red]")
            self.console.print("[dim]Type /help for help[/dim]\n")
            return True
        return await handler(cmd)

    async def _cmd_quit(self, cmd: str) -> bool:
        self.console.print("[yellow]bye bye![/yellow]")
        return False

    async def _cmd_list_plugins(self, cmd: str) -> bool:
        self.renderer.render_plugins(self.registry)
        return True

    async def _cmd_enable(self, cmd: str) -> bool:
        return self._set_enabled(cmd, True)

    async def _cmd_disable(self, cmd: str) -> bool:
        return self._set_enabled(cmd, False)

    def _set_enabled(self, cmd: str, enabled: bool) -> bool:
        parts = cmd.split(maxsplit=1)
        action = "enable" if enabled else "disable"
        if len(parts) < 2:
            self.console.print(f"[red]Usage: /{action} <plugin name>[/red]\n")
            return True

        name = parts[1].strip()
        if self.registry.set_enabled(name, enabled):
            self.console.print(f"[green]✓ Plugin '{name}' {action}d[/green]\n")
        else:
            self.renderer.show_error(f"Plugin '{name}' not found")
        return True

    async def _cmd_toggle_json(self, cmd: str) -> bool:
        on = self.state.toggle_json()
        self.console.print(f"[green]✓ JSON output {'on' if on else 'off'}[/green]\n")
        return True

    async def _cmd_set_project(self, cmd: str) -> bool:
        parts = cmd.split(maxsplit=1)
        self.state.project = parts[1].strip() if len(parts) > 1 else None
        self.console.print(f"[green]✓ Project: {self.state.project or '(none)'}[/green]\n")
        return True

    async def _cmd_help(self, cmd: str) -> bool:
        help_text = """[bold]Commands:[/bold]
  /q, /quit, /exit    Quit
  /plugins            List registered plugins
  /enable <name>      Enable a plugin
  /disable <name>     Disable a plugin
  /json               Toggle JSON output
  /project [name]     Set or clear the current project
  /help               Show this help

[bold]Try:[/bold]
  create a viral campaign for our eco launch
  find code for floating card
  debug the login flow
  remember that the deploy key rotates monthly"""
        self.console.print(Panel(help_text, title="Help", border_style="blue"))
        self.console.print()
        return True
